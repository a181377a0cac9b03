"""Single-purpose field rules for pasted job postings.

Each rule is a pure ``str -> value | None`` function. ``None`` means the
field could not be found; the orchestrator substitutes the field default.
Client-quality rules expect the "About the client" block as input.
"""
from __future__ import annotations

import re

from gigtriage.countries import find_country
from gigtriage.extract import sections
from gigtriage.models import PricingType
from gigtriage.normalize import to_int, to_number, to_percent

# ── Job body ─────────────────────────────────────────────────────────────

_TITLE_MARKER_RE = re.compile(r"\b(?:Posted|Summary)\b")
_POSTED_RE = re.compile(
    r"\bPosted[ \t]+(?:on[ \t]+)?(?P<when>(?:\d+|an?|one)[ \t]+\w+[ \t]+ago|yesterday|today"
    r"|just now|last week|[A-Z][a-z]{2,8}[ \t]+\d{1,2},?[ \t]+\d{4})",
    re.IGNORECASE,
)
_PRICING_RE = re.compile(r"\b(?P<hourly>Hourly)\b|\b(?P<fixed>[Ff]ixed[- ][Pp]rice)\b")
_AMOUNT = r"\d[\d,]*(?:\.\d+)?[kK]?"
_BUDGET_RANGE_RE = re.compile(
    rf"\$[ \t]*(?P<low>{_AMOUNT})[ \t]*(?:-|–|to)[ \t]*\$[ \t]*(?P<high>{_AMOUNT})"
)
_BUDGET_SINGLE_RE = re.compile(rf"\$[ \t]*(?P<amount>{_AMOUNT})")
_LEVEL_LINE_RE = re.compile(
    r"^[ \t]*(?P<level>Entry[ -]level|Intermediate|Expert)[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)
_LEVEL_LABEL_RE = re.compile(
    r"Experience level[ \t]*:?[ \t]*(?P<level>Entry[ -]level|Intermediate|Expert)\b",
    re.IGNORECASE,
)
_LEVELS = {"entry level": "Entry level", "entry-level": "Entry level",
           "intermediate": "Intermediate", "expert": "Expert"}
_DURATION_RE = re.compile(
    r"\b(?:Less than (?:1|a|one) month|More than \d+ months"
    r"|\d+[ \t]*(?:-|to)[ \t]*\d+[ \t]*months?)\b",
    re.IGNORECASE,
)


def title(text: str) -> str | None:
    m = _TITLE_MARKER_RE.search(text)
    if m:
        before = " ".join(text[:m.start()].split())
        if before:
            return before
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return None


def posted_time(text: str) -> str | None:
    m = _POSTED_RE.search(text)
    return m.group("when") if m else None


def pricing_type(body: str) -> PricingType | None:
    m = _PRICING_RE.search(body)
    if not m:
        return None
    return PricingType.HOURLY if m.group("hourly") else PricingType.FIXED


def budget_range(body: str) -> str | None:
    m = _BUDGET_RANGE_RE.search(body)
    if m:
        return f"${m.group('low')} - ${m.group('high')}"
    m = _BUDGET_SINGLE_RE.search(body)
    return f"${m.group('amount')}" if m else None


def level(body: str) -> str | None:
    m = _LEVEL_LINE_RE.search(body) or _LEVEL_LABEL_RE.search(body)
    return _LEVELS[m.group("level").lower()] if m else None


def duration(body: str) -> str | None:
    m = _DURATION_RE.search(body)
    return m.group(0) if m else None


def description(body: str) -> str | None:
    summary = sections.section(body, "Summary")
    if summary is not None:
        return summary or None

    # No summary header: skip the title and "Posted ..." lines.
    lines = body.splitlines()
    start = 1
    for i, line in enumerate(lines[:5]):
        if _POSTED_RE.search(line):
            start = i + 1
            break
    return sections.until_stop_line("\n".join(lines[start:])) or None


def skills(text: str) -> list[str] | None:
    """Mandatory + nice-to-have skills, else the Tools section."""
    found = sections.list_items(sections.section(text, "Mandatory skills"), split_commas=True)
    found += sections.list_items(sections.section(text, "Nice-to-have skills"), split_commas=True)
    if not found:
        found = sections.list_items(sections.section(text, "Tools"), split_commas=True)
    found = [s for s in found if len(s) <= 60]
    return list(dict.fromkeys(found)) or None


def deliverables(text: str) -> list[str] | None:
    return sections.list_items(sections.section(text, "Deliverables")) or None


def screening_questions(text: str) -> list[str] | None:
    block = sections.section(
        text,
        "Screening questions",
        "You will be asked to answer the following questions when submitting a proposal",
    )
    return sections.list_items(block) or None


# ── Client country ───────────────────────────────────────────────────────

_TIME_OF_DAY_RE = re.compile(r"\b\d{1,2}:\d{2}[ \t]*(?:AM|PM)\b", re.IGNORECASE)
_WORLDWIDE_RE = re.compile(r"\bWorldwide\b", re.IGNORECASE)
_TIME_WINDOW = 100


def _time_anchor_window(scope: str) -> str:
    """The ~100 characters before the last time of day ("New York 6:00 AM")."""
    last = None
    for last in _TIME_OF_DAY_RE.finditer(scope):
        pass
    if last is None:
        return ""
    return scope[max(0, last.start() - _TIME_WINDOW):last.start()]


def _header_lines(client: str) -> str:
    """Digit-free lines of the client block: the ones that name a place, not a stat."""
    return "\n".join(line for line in client.splitlines() if not re.search(r"\d", line))


def client_country(text: str) -> str | None:
    """Resolve the client's country, falling back on weaker evidence in order.

    1. preferred country names, longest first, then abbreviations (USA, UK,
       UAE) on the client block's header lines; without a client block,
       anywhere in the posting
    2. the text just before the client's local time ("Berlin, Germany
       3:15 PM"); best effort, can misfire on unusually formatted postings
    3. "Worldwide" resolves to no country rather than a guess
    """
    client = sections.client_section(text)
    country = find_country(_header_lines(client) if client else text)
    if country:
        return country

    country = find_country(_time_anchor_window(client or text))
    if country:
        return country

    if _WORLDWIDE_RE.search(client or text):
        return ""
    return None


# ── Client quality (scoped to the client block) ─────────────────────────

_PAYMENT_RE = re.compile(
    r"Payment (?:method )?(?P<state>not verified|unverified|verified)", re.IGNORECASE
)
_RATING_RE = re.compile(
    r"(?:Rating is[ \t]*)?\b(?P<rating>[0-5](?:\.\d{1,2})?)[ \t]*(?:of|out of)[ \t]*"
    r"(?:5\b|\d+[ \t]+reviews?)",
    re.IGNORECASE,
)
_HIRE_RATE_RE = re.compile(r"(?P<pct>\d{1,3})[ \t]*%[ \t]*hire rate", re.IGNORECASE)
_JOBS_POSTED_RE = re.compile(r"(?P<count>\d[\d,]*)[ \t]+jobs?[ \t]+posted", re.IGNORECASE)
_TOTAL_SPENT_RE = re.compile(
    r"\$[ \t]*(?P<amount>\d[\d,]*(?:\.\d+)?[KkMm]?)\+?[ \t]*(?:total[ \t]+)?spent",
    re.IGNORECASE,
)
_HIRES_RE = re.compile(r"(?P<count>\d[\d,]*)[ \t]+hires?\b(?![ \t]*rate)", re.IGNORECASE)
_AVG_RATE_RE = re.compile(
    r"\$[ \t]*(?P<amount>\d[\d,]*(?:\.\d+)?)[ \t]*/[ \t]*hr[ \t]+avg", re.IGNORECASE
)


def payment_verified(client: str) -> bool | None:
    m = _PAYMENT_RE.search(client)
    return m.group("state").lower() == "verified" if m else None


def client_rating(client: str) -> float | None:
    m = _RATING_RE.search(client)
    return to_number(m.group("rating")) if m else None


def hire_rate(client: str) -> float | None:
    m = _HIRE_RATE_RE.search(client)
    return to_percent(f"{m.group('pct')}%") if m else None


def jobs_posted(client: str) -> int | None:
    m = _JOBS_POSTED_RE.search(client)
    return to_int(m.group("count")) if m else None


def total_spent(client: str) -> float | None:
    m = _TOTAL_SPENT_RE.search(client)
    return to_number(m.group("amount")) if m else None


def total_hires(client: str) -> int | None:
    m = _HIRES_RE.search(client)
    return to_int(m.group("count")) if m else None


def avg_hourly_rate(client: str) -> float | None:
    m = _AVG_RATE_RE.search(client)
    return to_number(m.group("amount")) if m else None
