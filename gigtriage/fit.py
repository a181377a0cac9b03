"""Two-stage client-quality gate: hard reject, then best-fit, else medium.

Stage 1 rejects on any disqualifying signal and lists all of them.
Stage 2 requires every excellence signal for BEST_FIT; a hire rate or AI
match that was never provided does not block it, only an out-of-range
value does.
"""
from __future__ import annotations

from typing import Any

from gigtriage.config import FitPolicy, load_policy
from gigtriage.countries import is_preferred
from gigtriage.models import Bucket, CheckStatus, FitCheck, FitInput, FitResult


def _money(amount: float) -> str:
    if amount >= 1000 and amount % 1000 == 0:
        return f"${amount / 1000:.0f}k"
    return f"${amount:,.0f}"


def _hard_reject_reasons(job: FitInput, policy: FitPolicy) -> list[str]:
    reasons: list[str] = []
    if not job.payment_verified:
        reasons.append("Payment not verified")
    if not is_preferred(job.client_country):
        reasons.append("Country not preferred")
    if job.client_rating < policy.min_rating:
        reasons.append(f"Rating < {policy.min_rating:.1f}")
    return reasons


def evaluate_fit(record: Any, policy: FitPolicy | None = None) -> FitResult:
    """Bucket a posting's client signals into NOT_FIT, MEDIUM_FIT or BEST_FIT.

    *record* may be a :class:`FitInput` or any mapping/object carrying the
    same field names in mixed representations; it is normalized once here.
    Without *policy* the cached :func:`load_policy` result is used; its first
    call reads the policy file and raises ``ValueError`` if that file is
    malformed, so entry points load it once at startup.
    """
    policy = policy or load_policy().fit
    job = FitInput.coerce(record)

    rejected = _hard_reject_reasons(job, policy)
    if rejected:
        return FitResult(Bucket.NOT_FIT, tuple(rejected))

    rating_ok = job.client_rating >= policy.best_rating
    hire_ok = job.hire_rate is None or job.hire_rate >= policy.best_hire_rate
    spend_ok = job.total_spent >= policy.best_total_spent
    history_ok = spend_ok or job.jobs_posted >= policy.best_jobs_posted
    ai_ok = job.ai_match is None or job.ai_match >= policy.best_ai_match

    if rating_ok and hire_ok and history_ok and ai_ok:
        return FitResult(Bucket.BEST_FIT, (
            "Verified",
            "Preferred country",
            f"Rating ≥ {policy.best_rating:.1f}",
            "Hire rate not provided (allowed)" if job.hire_rate is None
            else f"Hire rate ≥ {policy.best_hire_rate:.0%}",
            f"Spend ≥ {_money(policy.best_total_spent)}" if spend_ok
            else f"Jobs posted ≥ {policy.best_jobs_posted}",
            "AI match not provided (allowed)" if job.ai_match is None
            else f"AI match ≥ {policy.best_ai_match:.2f}",
        ))

    reasons: list[str] = []
    if not rating_ok:
        reasons.append(f"Rating < {policy.best_rating:.1f} for Best Fit")
    if not hire_ok:
        reasons.append(f"Hire rate < {policy.best_hire_rate:.0%}")
    if not history_ok:
        reasons.append(
            f"Spend < {_money(policy.best_total_spent)} AND Jobs < {policy.best_jobs_posted}"
        )
    if not ai_ok:
        reasons.append(f"AI match < {policy.best_ai_match:.2f}")
    return FitResult(Bucket.MEDIUM_FIT, tuple(reasons))


# Below the best-fit threshold but at least this close only warns.
_AI_MATCH_WARNING = 0.5


def fit_breakdown(record: Any, policy: FitPolicy | None = None) -> tuple[FitCheck, ...]:
    """Per-condition view of the gate for display: each signal as pass, warning, fail or neutral.

    Absent hire rate and AI match are neutral, matching how the gate treats them.
    """
    policy = policy or load_policy().fit
    job = FitInput.coerce(record)

    preferred = is_preferred(job.client_country)
    if job.client_rating >= policy.best_rating:
        rating_status = CheckStatus.PASS
    elif job.client_rating >= policy.min_rating:
        rating_status = CheckStatus.WARNING
    else:
        rating_status = CheckStatus.FAIL

    if job.hire_rate is None:
        hire_status = CheckStatus.NEUTRAL
    else:
        hire_status = CheckStatus.PASS if job.hire_rate >= policy.best_hire_rate else CheckStatus.WARNING

    spend_ok = job.total_spent >= policy.best_total_spent
    jobs_ok = job.jobs_posted >= policy.best_jobs_posted
    if spend_ok:
        history = f"{_money(job.total_spent)} spent"
    elif jobs_ok:
        history = f"{job.jobs_posted} jobs posted"
    else:
        history = f"{_money(job.total_spent)} / {job.jobs_posted} jobs"

    if job.ai_match is None:
        ai_status = CheckStatus.NEUTRAL
    elif job.ai_match >= policy.best_ai_match:
        ai_status = CheckStatus.PASS
    elif job.ai_match >= _AI_MATCH_WARNING:
        ai_status = CheckStatus.WARNING
    else:
        ai_status = CheckStatus.FAIL

    return (
        FitCheck("Country", CheckStatus.PASS if preferred else CheckStatus.FAIL,
                 job.client_country or "Not specified", "Preferred country"),
        FitCheck("Payment verified", CheckStatus.PASS if job.payment_verified else CheckStatus.FAIL,
                 "Yes" if job.payment_verified else "No", "Payment verified"),
        FitCheck("Client rating", rating_status, f"{job.client_rating:.1f}",
                 f"≥ {policy.best_rating:.1f} (Best Fit), ≥ {policy.min_rating:.1f} (Minimum)"),
        FitCheck("Hire rate", hire_status,
                 "Not provided" if job.hire_rate is None else f"{job.hire_rate:.0%}",
                 f"≥ {policy.best_hire_rate:.0%} (Best Fit)"),
        FitCheck("Spend / history", CheckStatus.PASS if spend_ok or jobs_ok else CheckStatus.WARNING,
                 history, f"≥ {_money(policy.best_total_spent)} OR ≥ {policy.best_jobs_posted} jobs"),
        FitCheck("AI match", ai_status,
                 "Not calculated" if job.ai_match is None else f"{job.ai_match:.0%}",
                 f"≥ {policy.best_ai_match:.0%} (Best Fit)"),
    )
