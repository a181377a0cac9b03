"""Turn a pasted job posting into a :class:`JobPosting`.

Field rules live in :mod:`gigtriage.extract.fields`; each reads one scope of
the posting (the whole text, the job body above the client block, or the
client block) and none depends on another's result.
"""
from __future__ import annotations

from typing import Any, Callable

from gigtriage.extract import fields, sections
from gigtriage.log import get_logger
from gigtriage.models import JobPosting

log = get_logger(__name__)

__all__ = ["extract_posting", "RULES"]

# (field, rule, scope) in application order.
RULES: tuple[tuple[str, Callable[[str], Any], str], ...] = (
    ("title", fields.title, "text"),
    ("posted_time", fields.posted_time, "text"),
    ("pricing_type", fields.pricing_type, "body"),
    ("budget_range", fields.budget_range, "body"),
    ("level", fields.level, "body"),
    ("duration_text", fields.duration, "body"),
    ("description", fields.description, "body"),
    ("skills", fields.skills, "text"),
    ("deliverables", fields.deliverables, "text"),
    ("screening_questions", fields.screening_questions, "text"),
    ("client_country", fields.client_country, "text"),
    ("payment_verified", fields.payment_verified, "client"),
    ("client_rating", fields.client_rating, "client"),
    ("hire_rate", fields.hire_rate, "client"),
    ("jobs_posted", fields.jobs_posted, "client"),
    ("total_spent", fields.total_spent, "client"),
    ("total_hires", fields.total_hires, "client"),
    ("avg_hourly_rate", fields.avg_hourly_rate, "client"),
)


def _apply(name: str, rule: Callable[[str], Any], scope: str) -> Any:
    try:
        return rule(scope)
    except Exception as exc:
        log.warning("Extraction rule for %s failed (%s), using default", name, exc)
        return None


def extract_posting(raw_text: str) -> JobPosting:
    """Extract every field it can; missing fields keep their empty defaults."""
    text = sections.clean(raw_text) if isinstance(raw_text, str) else ""
    scopes = {
        "text": text,
        "body": sections.job_body(text),
        "client": sections.client_section(text),
    }

    values: dict[str, Any] = {}
    for name, rule, scope in RULES:
        value = _apply(name, rule, scopes[scope])
        if value is None:
            continue
        values[name] = tuple(value) if isinstance(value, list) else value

    posting = JobPosting(**values)
    log.info(
        "Posting extraction complete — title=%r, country=%s, skills=%d",
        posting.title[:60], posting.client_country or "-", len(posting.skills),
    )
    return posting
