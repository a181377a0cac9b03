"""Tests for the solicitation detector and the contact sanitizer."""
from __future__ import annotations

import pytest

from gigtriage.config import ContactPolicy
from gigtriage.guardrails import REDACTION_MARKER, detect_solicitation, sanitize_contacts
from gigtriage.models import ContactType, SolicitationResult


def _types(result) -> set[str]:
    return {c.type.value for c in result.found_contacts}


# ── detect_solicitation ──────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("text", "tag"),
    [
        ("Please share your email address with me", "email"),
        ("Send me your phone number", "phone"),
        ("Contact me via WhatsApp", "messaging app"),
        ("Reach out on Telegram", "messaging app"),
        ("Please send me your website URL", "website"),
        ("Share your LinkedIn profile", "social media"),
        ("Let's move communication off Upwork", "direct contact"),
        ("Please share your contact details", "contact details"),
        ("What is your address?", "location/address"),
    ],
)
def test_detects_category(text: str, tag: str) -> None:
    result = detect_solicitation(text)
    assert result.requested is True
    assert tag in result.matched_phrases


def test_detects_multiple_categories_once_each() -> None:
    result = detect_solicitation("Share your email and phone number. Email me, then email again.")
    assert result.matched_phrases == ("email", "phone")


def test_no_false_positive_on_experience_phrasing() -> None:
    assert detect_solicitation("I need a developer with 5 years of experience") == SolicitationResult(
        requested=False, matched_phrases=()
    )


@pytest.mark.parametrize("text", ["", None, "   "])
def test_detect_empty_input(text) -> None:
    assert detect_solicitation(text) == SolicitationResult()


@pytest.mark.parametrize("text", ["EMAIL ME", "email me", "Email Me"])
def test_detect_is_case_insensitive(text: str) -> None:
    assert detect_solicitation(text).requested is True


def test_detect_does_not_change_text() -> None:
    text = "Email me at a@b.com"
    detect_solicitation(text)
    assert text == "Email me at a@b.com"


# ── sanitize_contacts ────────────────────────────────────────────────────


def test_removes_email() -> None:
    result = sanitize_contacts("Contact me at john.doe@example.com for more info")
    assert result.sanitized_text == f"Contact me at {REDACTION_MARKER} for more info"
    assert [(c.type, c.raw_value) for c in result.found_contacts] == [
        (ContactType.EMAIL, "john.doe@example.com"),
    ]


@pytest.mark.parametrize(
    "email", ["test@example.com", "user.name+tag@example.co.uk", "user_name@example-domain.com"]
)
def test_complex_email_formats(email: str) -> None:
    result = sanitize_contacts(f"Contact me at {email}")
    assert email not in result.sanitized_text
    assert any(c.type is ContactType.EMAIL and c.raw_value == email for c in result.found_contacts)


@pytest.mark.parametrize("phone", ["+1-234-567-8900", "(123) 456-7890", "123-456-7890", "+1234567890"])
def test_removes_phone_numbers(phone: str) -> None:
    result = sanitize_contacts(f"Call me at {phone}")
    assert phone not in result.sanitized_text
    assert _types(result) == {"phone"}


def test_years_and_short_ids_are_not_phones() -> None:
    text = "I have been working since 2020 on ticket 48213 during 2019-2023"
    result = sanitize_contacts(text)
    assert result.sanitized_text == text
    assert result.found_contacts == ()


def test_removes_urls_with_and_without_scheme() -> None:
    result = sanitize_contacts("Visit https://myagency.com, www.example.com or example.io.")
    assert result.sanitized_text == f"Visit {REDACTION_MARKER}, {REDACTION_MARKER} or {REDACTION_MARKER}."
    assert [c.raw_value for c in result.found_contacts] == [
        "https://myagency.com", "www.example.com", "example.io",
    ]


def test_uppercase_bare_domains_are_removed() -> None:
    result = sanitize_contacts("Portfolio: MyAgency.COM and Acme.IO")
    assert result.sanitized_text == f"Portfolio: {REDACTION_MARKER} and {REDACTION_MARKER}"
    assert [c.raw_value for c in result.found_contacts] == ["MyAgency.COM", "Acme.IO"]


def test_tech_terms_are_not_websites() -> None:
    text = "Built with ASP.NET Core, VB.NET and Socket.IO."
    result = sanitize_contacts(text)
    assert result.sanitized_text == text
    assert result.found_contacts == ()


def test_tech_terms_come_from_policy() -> None:
    policy = ContactPolicy(tech_terms=())
    result = sanitize_contacts("Built with ASP.NET Core", policy=policy)
    assert result.sanitized_text == f"Built with {REDACTION_MARKER} Core"


def test_github_kept_when_allowed() -> None:
    text = "See github.com/acme for my work"
    result = sanitize_contacts(text, allow_github=True)
    assert result.sanitized_text == text
    assert result.found_contacts == ()


def test_github_redacted_when_not_allowed() -> None:
    result = sanitize_contacts("See github.com/acme for my work", allow_github=False)
    assert result.sanitized_text == f"See {REDACTION_MARKER} for my work"
    assert _types(result) == {"website"}


def test_github_allowed_by_default_in_mixed_content() -> None:
    result = sanitize_contacts("Visit https://mywebsite.com and https://github.com/username for my work")
    assert "https://github.com/username" in result.sanitized_text
    assert "https://mywebsite.com" not in result.sanitized_text


def test_social_handle_needs_platform_keyword() -> None:
    result = sanitize_contacts("Message me on Telegram: @myusername or WhatsApp @dev_joe")
    assert "@myusername" not in result.sanitized_text
    assert "@dev_joe" not in result.sanitized_text
    assert _types(result) == {"social"}


def test_bare_handle_is_not_flagged() -> None:
    text = "Thanks to @myusername for the review"
    assert sanitize_contacts(text).sanitized_text == text


def test_address_after_location_cue() -> None:
    result = sanitize_contacts("I am based in Austin, Texas and available now.")
    assert result.sanitized_text == f"I am {REDACTION_MARKER} and available now."
    assert result.found_contacts[0].type is ContactType.ADDRESS
    assert result.found_contacts[0].raw_value == "based in Austin, Texas"


def test_address_needs_capitalized_place() -> None:
    text = "I have been working from home since the start."
    assert sanitize_contacts(text).sanitized_text == text


def test_address_span_bounds_are_policy() -> None:
    text = "I am from Oslo today."
    assert sanitize_contacts(text).sanitized_text == text
    loose = ContactPolicy(address_min_length=5)
    assert sanitize_contacts(text, policy=loose).sanitized_text == f"I am {REDACTION_MARKER} today."


def test_adjacent_markers_collapse() -> None:
    result = sanitize_contacts("Reach me: a@b.com +1-234-567-8900 www.me.dev")
    assert result.sanitized_text == f"Reach me: {REDACTION_MARKER}"
    assert _types(result) == {"email", "phone", "website"}


def test_preserves_prose() -> None:
    text = "I am a developer. Contact me at test@example.com for more details. I have 5 years of experience."
    result = sanitize_contacts(text)
    assert result.sanitized_text == (
        f"I am a developer. Contact me at {REDACTION_MARKER} for more details. "
        "I have 5 years of experience."
    )


@pytest.mark.parametrize(
    "text",
    [
        "Email me at test@example.com or call +1-234-567-8900. Visit https://mywebsite.com",
        "I'm in Berlin, Germany. Skype: dev.joe, see www.site.io/path?x=1 and github.com/me",
        "Ping 555 123 4567 or 555-987-6543 from Toronto, Canada",
        REDACTION_MARKER + " " + REDACTION_MARKER,
        "Nothing to remove here.",
    ],
)
@pytest.mark.parametrize("allow_github", [True, False])
def test_sanitize_is_idempotent(text: str, allow_github: bool) -> None:
    once = sanitize_contacts(text, allow_github=allow_github).sanitized_text
    twice = sanitize_contacts(once, allow_github=allow_github)
    assert twice.sanitized_text == once
    assert twice.found_contacts == ()


@pytest.mark.parametrize("text", ["", None])
def test_sanitize_empty_input(text) -> None:
    result = sanitize_contacts(text)
    assert result.sanitized_text == ""
    assert result.found_contacts == ()
