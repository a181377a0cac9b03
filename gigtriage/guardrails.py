"""Off-platform contact guardrails.

``detect_solicitation`` flags postings that ask for contact outside the
platform; it only reports category tags and never edits text.
``sanitize_contacts`` strips contact details from generated proposals,
applying email → phone → website → social → address in that order.
"""
from __future__ import annotations

import functools
import re

from gigtriage.config import ContactPolicy, load_policy
from gigtriage.models import ContactMatch, ContactType, SanitizationResult, SolicitationResult

REDACTION_MARKER = "[Contact information removed per Upwork policy]"

# ── Solicitation ─────────────────────────────────────────────────────────

_SOLICITATION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (tag, re.compile(pattern, re.IGNORECASE))
    for tag, pattern in (
        ("email", r"\b(?:email|e-mail|mail me|send your email|your email|email address|email id)\b"),
        ("contact", r"\b(?:contact me|contact you|reach out|reach me|get in touch)\b"),
        ("phone", r"\b(?:phone|phone number|mobile|mobile number|cell|cell phone|telephone"
                  r"|call me|call you|contact number)\b"),
        ("messaging app", r"\b(?:whatsapp|whats app|telegram|skype|zoom|wechat|viber|signal)\b"),
        ("website", r"\b(?:website|portfolio|portfolio website|company website|your website"
                    r"|send me your website|share your website)\b"),
        ("social media", r"\b(?:linkedin|linked in|social media|social profile)\b"),
        ("direct contact", r"\b(?:direct contact|off platform|off-platform|outside upwork"
                           r"|off-upwork|off upwork|move communication|communicate outside)\b"),
        ("contact details", r"\b(?:share your contact|contact details|contact info"
                            r"|contact information)\b"),
        ("location/address", r"\b(?:your address|physical address|location|where are you"
                             r"|based in|located in)\b"),
        ("location for contact", r"\b(?:city|country|timezone|time zone)\s+"
                                 r"(?:for|to|where|contact|reach)\b"),
    )
)


def detect_solicitation(job_text: str) -> SolicitationResult:
    """Category tags of every contact request found in *job_text*."""
    if not isinstance(job_text, str) or not job_text.strip():
        return SolicitationResult()

    normalized = " ".join(job_text.split())
    matched = [tag for tag, pattern in _SOLICITATION_PATTERNS if pattern.search(normalized)]
    matched = list(dict.fromkeys(matched))
    return SolicitationResult(requested=bool(matched), matched_phrases=tuple(matched))


# ── Sanitization ─────────────────────────────────────────────────────────

_EMAIL_RE = re.compile(r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b", re.IGNORECASE)

_PHONE_RE = re.compile(
    r"(?<!\w)(?:\+?\d{1,4}[ \t-]?)?\(?\d{1,4}\)?[ \t-]?\d{1,4}[ \t-]?\d{1,9}(?!\w)"
)
_YEAR_RE = re.compile(r"^(?:19|20)\d{2}$")
_SHORT_NUMBER_RE = re.compile(r"^\d{4,6}$")
_YEAR_RANGE_RE = re.compile(r"^(?:19|20)\d{2}[ \t]*-[ \t]*(?:19|20)\d{2}$")

_TLDS = (
    "com|io|net|org|co|dev|app|ai|me|info|biz|us|uk|ca|au|de|fr|es|it|nl|se|no|dk|fi"
    "|pl|cz|at|ch|be|ie|pt|gr|ru|jp|cn|in|br|mx|ar|za|ae|sa|tr|kr|tw|hk|sg|my|th|id"
    "|ph|vn|nz"
)
_URL_CHAR = r"[^\s\[\]<>()\"']"
_WEBSITE_RE = re.compile(
    rf"(?i:https?://){_URL_CHAR}+"
    rf"|(?i:www\.){_URL_CHAR}+"
    rf"|\b[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.(?i:{_TLDS})\b{_URL_CHAR}*"
)
_TRAILING_PUNCT = ".,;:!?"

_PLACE = r"[A-Z][A-Za-z'-]*[A-Za-z]"
_PLACE_PHRASE = rf"{_PLACE}(?:[ \t]+{_PLACE})*"

_COLLAPSE_RE = re.compile(rf"{re.escape(REDACTION_MARKER)}(?:\s*{re.escape(REDACTION_MARKER)})+")


def _alternation(words: tuple[str, ...]) -> str:
    return "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))


@functools.lru_cache(maxsize=16)
def _social_re(platforms: tuple[str, ...]) -> re.Pattern[str] | None:
    if not platforms:
        return None
    return re.compile(
        rf"\b(?:{_alternation(platforms)})\b[ \t]*(?::[ \t]*@?|@)[ \t]*"
        r"[A-Za-z0-9_.+-]*[A-Za-z0-9_]",
        re.IGNORECASE,
    )


@functools.lru_cache(maxsize=16)
def _address_re(cues: tuple[str, ...]) -> re.Pattern[str] | None:
    if not cues:
        return None
    # Only the cue is case-insensitive; place names must be capitalized.
    return re.compile(
        rf"(?i:\b(?:{_alternation(cues)})\b)[ \t]*:?[ \t]+"
        rf"{_PLACE_PHRASE}(?:,[ \t]*{_PLACE_PHRASE})*"
    )


def _is_phone(candidate: str) -> bool:
    digits = re.sub(r"\D", "", candidate)
    if not 7 <= len(digits) <= 15:
        return False
    if _YEAR_RE.match(digits) or _SHORT_NUMBER_RE.match(digits):
        return False
    return not _YEAR_RANGE_RE.match(candidate.strip())


def _sanitize_once(
    text: str, allow_github: bool, policy: ContactPolicy, found: list[ContactMatch]
) -> str:
    def redact(kind: ContactType, value: str) -> str:
        found.append(ContactMatch(kind, value))
        return REDACTION_MARKER

    def phone(m: re.Match[str]) -> str:
        value = m.group(0)
        return redact(ContactType.PHONE, value) if _is_phone(value) else value

    def website(m: re.Match[str]) -> str:
        value = m.group(0)
        url = value.rstrip(_TRAILING_PUNCT)
        lowered = url.lower()
        if not url or lowered in policy.tech_terms or (allow_github and "github.com" in lowered):
            return value
        return redact(ContactType.WEBSITE, url) + value[len(url):]

    def address(m: re.Match[str]) -> str:
        value = m.group(0)
        if policy.address_min_length < len(value) < policy.address_max_length:
            return redact(ContactType.ADDRESS, value)
        return value

    text = _EMAIL_RE.sub(lambda m: redact(ContactType.EMAIL, m.group(0)), text)
    text = _PHONE_RE.sub(phone, text)
    text = _WEBSITE_RE.sub(website, text)

    social_re = _social_re(policy.social_platforms)
    if social_re is not None:
        text = social_re.sub(lambda m: redact(ContactType.SOCIAL, m.group(0)), text)

    address_re = _address_re(policy.address_cues)
    if address_re is not None:
        text = address_re.sub(address, text)

    return _COLLAPSE_RE.sub(REDACTION_MARKER, text)


def sanitize_contacts(
    text: str,
    allow_github: bool | None = None,
    policy: ContactPolicy | None = None,
) -> SanitizationResult:
    """Replace contact details in *text* with :data:`REDACTION_MARKER`.

    GitHub links survive when *allow_github* is true (the policy default).
    Passes repeat until the text stops changing, so sanitizing an already
    sanitized text is a no-op. Prose outside the matches is kept verbatim.
    Without *policy* the cached policy is used (see :func:`evaluate_fit`).
    """
    if not isinstance(text, str) or not text:
        return SanitizationResult()

    policy = policy or load_policy().contact
    if allow_github is None:
        allow_github = policy.allow_github

    found: list[ContactMatch] = []
    current = text
    while True:
        cleaned = _sanitize_once(current, allow_github, policy, found)
        if cleaned == current:
            break
        current = cleaned
    return SanitizationResult(sanitized_text=current, found_contacts=tuple(found))
