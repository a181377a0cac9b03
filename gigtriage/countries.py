"""Preferred client countries, shared by the extractor and the classifier."""
from __future__ import annotations

import re
from types import MappingProxyType

PREFERRED_COUNTRIES: frozenset[str] = frozenset({
    "Austria", "Belgium", "Croatia", "Cyprus", "Czech Republic", "Denmark",
    "Estonia", "Finland", "France", "Germany", "Greece", "Hungary", "Ireland",
    "Italy", "Luxembourg", "Malta", "Netherlands", "Poland", "Portugal",
    "Romania", "Slovakia", "Slovenia", "Spain", "Sweden", "United Kingdom",
    "United Arab Emirates", "Switzerland", "Norway", "Singapore",
    "New Zealand", "Australia", "Canada", "United States",
})

COUNTRY_ABBREVIATIONS = MappingProxyType({
    "USA": "United States",
    "UK": "United Kingdom",
    "UAE": "United Arab Emirates",
})

# Longest first so "United Arab Emirates" / "United States" win over any shorter overlap.
COUNTRIES_LONGEST_FIRST: tuple[str, ...] = tuple(
    sorted(PREFERRED_COUNTRIES, key=lambda c: (-len(c), c))
)

_NAME_PATTERNS = tuple(
    (name, re.compile(rf"\b{re.escape(name)}\b")) for name in COUNTRIES_LONGEST_FIRST
)
_ABBREVIATION_PATTERNS = tuple(
    (abbr, re.compile(rf"\b{abbr}\b")) for abbr in COUNTRY_ABBREVIATIONS
)

_CANONICAL = {c.lower(): c for c in PREFERRED_COUNTRIES}
_CANONICAL.update({a.lower(): full for a, full in COUNTRY_ABBREVIATIONS.items()})


def canonical_country(name: str | None) -> str:
    """Map ``"usa"`` / ``"Germany "`` to the canonical preferred name, else the stripped input."""
    s = (name or "").strip()
    return _CANONICAL.get(s.lower(), s)


def is_preferred(name: str | None) -> bool:
    return canonical_country(name) in PREFERRED_COUNTRIES


def find_country(text: str) -> str:
    """First preferred country named in *text*: full names longest first, then abbreviations."""
    if not text:
        return ""
    for name, pattern in _NAME_PATTERNS:
        if pattern.search(text):
            return name
    for abbr, pattern in _ABBREVIATION_PATTERNS:
        if pattern.search(text):
            return COUNTRY_ABBREVIATIONS[abbr]
    return ""
