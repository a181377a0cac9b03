"""
Posting triage.

Runs: extract fields → flag contact solicitation (log only) → fit bucket.
Also cleans generated proposals before they reach the user.
"""
from __future__ import annotations

from typing import Any

from gigtriage.extract import extract_posting
from gigtriage.fit import evaluate_fit
from gigtriage.guardrails import detect_solicitation, sanitize_contacts
from gigtriage.log import get_logger
from gigtriage.models import SanitizationResult, TriageResult

log = get_logger(__name__)


def triage_posting(raw_text: str, ai_match: Any = None) -> TriageResult:
    posting = extract_posting(raw_text)
    solicitation = detect_solicitation(raw_text)
    if solicitation.requested:
        log.warning(
            "Posting %r asks for off-platform contact: %s",
            posting.title[:60], ", ".join(solicitation.matched_phrases),
        )

    fit = evaluate_fit(posting.to_fit_input(ai_match))
    log.info("Triaged %r → %s (%d)", posting.title[:60], fit.bucket.value, fit.fit_score)
    return TriageResult(posting=posting, fit=fit, solicitation=solicitation)


def clean_proposal(
    proposal: str, job_text: str = "", allow_github: bool | None = None
) -> SanitizationResult:
    """Sanitize LLM proposal text; log what was removed and whether the job asked for it."""
    if job_text:
        solicitation = detect_solicitation(job_text)
        if solicitation.requested:
            log.info("Job requests contact (%s) — proposal will still be sanitized",
                     ", ".join(solicitation.matched_phrases))

    result = sanitize_contacts(proposal, allow_github=allow_github)
    if result.found_contacts:
        kinds = sorted({c.type.value for c in result.found_contacts})
        log.warning("Removed %d contact item(s) from proposal: %s",
                    len(result.found_contacts), ", ".join(kinds))
    return result
