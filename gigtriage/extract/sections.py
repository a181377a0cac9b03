"""Locate the named sections of a pasted job posting.

A header counts only when it sits on its own line, optionally followed by a
colon and inline content ("Tools: Figma, Notion").
"""
from __future__ import annotations

import re

CLIENT_HEADER = "About the client"

LIST_HEADERS: tuple[str, ...] = (
    "Summary",
    "Deliverables",
    "Screening questions",
    "You will be asked to answer the following questions when submitting a proposal",
    "Skills and Expertise",
    "Mandatory skills",
    "Nice-to-have skills",
    "Tools",
    "Activity on this job",
    CLIENT_HEADER,
    "Client's recent history",
    "Other open jobs by this client",
    "Similar jobs on Upwork",
    "Explore similar jobs",
)

_CLIENT_END_HEADERS = frozenset(
    h.lower() for h in LIST_HEADERS[LIST_HEADERS.index(CLIENT_HEADER) + 1:]
)

_HEADER_RE = re.compile(
    r"^[ \t]*(?P<name>"
    + "|".join(re.escape(h) for h in sorted(LIST_HEADERS, key=len, reverse=True))
    + r")[ \t]*(?::[ \t]*(?P<rest>.*?))?[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)

# Job-detail lines that follow the summary on job boards.
_METADATA_LINE_RE = re.compile(
    r"^[ \t]*(?:Hourly|Fixed[- ]price|(?:Less|More) than 30 hrs/week|Hours to be determined"
    r"|Remote Job|Ongoing project|One-time project|Complex project|Project Type"
    r"|Entry[ -]level|Intermediate|Expert|Experience Level|Duration"
    r"|\$[ \t]*\d[\d,.]*[kK]?(?:[ \t]*-[ \t]*\$[ \t]*\d[\d,.]*[kK]?)?)[ \t]*(?::.*)?$",
    re.IGNORECASE | re.MULTILINE,
)

_BULLET_RE = re.compile(r"^[ \t]*(?:[-*•·▪►]+|\d{1,2}[.)](?=\s))[ \t]*")


def clean(text: str) -> str:
    """Unify line endings and non-breaking spaces."""
    return text.replace("\r\n", "\n").replace("\r", "\n").replace("\u00a0", " ")


def _headers(text: str) -> list[re.Match[str]]:
    return list(_HEADER_RE.finditer(text))


def section(text: str, *names: str) -> str | None:
    """Content under the first header among *names*, up to the next header or job-detail line."""
    wanted = {n.lower() for n in names}
    headers = _headers(text)
    for i, m in enumerate(headers):
        if m.group("name").lower() not in wanted:
            continue
        end = headers[i + 1].start() if i + 1 < len(headers) else len(text)
        body = text[m.end():end]
        rest = m.group("rest") or ""
        return until_stop_line(rest + "\n" + body if rest else body)
    return None


def client_section(text: str) -> str:
    """The "About the client" block, or "" when the posting has none."""
    start = re.search(
        rf"^[ \t]*{re.escape(CLIENT_HEADER)}\b", text, re.IGNORECASE | re.MULTILINE
    )
    if not start:
        return ""
    rest = text[start.end():]
    for m in _HEADER_RE.finditer(rest):
        if m.group("name").lower() in _CLIENT_END_HEADERS:
            return rest[:m.start()].strip()
    return rest.strip()


def job_body(text: str) -> str:
    """Everything above the client block."""
    start = re.search(
        rf"^[ \t]*{re.escape(CLIENT_HEADER)}\b", text, re.IGNORECASE | re.MULTILINE
    )
    return text[:start.start()] if start else text


def until_stop_line(text: str) -> str:
    """Cut *text* at the first known header or job-detail line."""
    cut = len(text)
    for pattern in (_HEADER_RE, _METADATA_LINE_RE):
        m = pattern.search(text)
        if m and m.start() < cut:
            cut = m.start()
    return text[:cut].strip()


def list_items(block: str | None, *, split_commas: bool = False) -> list[str]:
    """Lines of a section with bullets/numbering removed; optionally comma-split."""
    if not block:
        return []
    items: list[str] = []
    for line in block.splitlines():
        line = _BULLET_RE.sub("", line).strip()
        if not line:
            continue
        parts = re.split(r"[,;|•]", line) if split_commas else [line]
        items.extend(p.strip() for p in parts if p.strip())
    return items
