"""Tests for the two-stage fit gate."""
from __future__ import annotations

import itertools

import pytest

from gigtriage.config import FitPolicy
from gigtriage.fit import evaluate_fit, fit_breakdown
from gigtriage.models import Bucket, CheckStatus, FitInput


def _best(**overrides) -> FitInput:
    base = dict(
        client_country="Germany",
        payment_verified=True,
        client_rating=4.7,
        hire_rate=None,
        total_spent=15000,
        jobs_posted=0,
        ai_match=None,
    )
    base.update(overrides)
    return FitInput(**base)


def test_absent_optionals_do_not_block_best_fit() -> None:
    result = evaluate_fit(_best())
    assert result.bucket is Bucket.BEST_FIT
    assert result.fit_score == 100
    assert "Hire rate not provided (allowed)" in result.reasons
    assert "AI match not provided (allowed)" in result.reasons
    assert "Spend ≥ $10k" in result.reasons


def test_rating_below_best_threshold_is_medium() -> None:
    result = evaluate_fit(_best(client_rating=4.5))
    assert result.bucket is Bucket.MEDIUM_FIT
    assert result.fit_score == 70
    assert result.reasons == ("Rating < 4.7 for Best Fit",)


@pytest.mark.parametrize("country", ["Germany", "India", ""])
@pytest.mark.parametrize("rating", [0, 3.9, 4.9])
def test_unverified_payment_is_always_not_fit(country, rating) -> None:
    result = evaluate_fit(_best(payment_verified=False, client_country=country, client_rating=rating))
    assert result.bucket is Bucket.NOT_FIT
    assert result.fit_score == 0
    assert "Payment not verified" in result.reasons


def test_hard_reject_lists_every_failing_condition() -> None:
    result = evaluate_fit(_best(payment_verified=False, client_country="India", client_rating=3.2))
    assert result.reasons == ("Payment not verified", "Country not preferred", "Rating < 4.0")


def test_hard_reject_is_not_lenient_about_missing_rating() -> None:
    result = evaluate_fit({"client_country": "Canada", "payment_verified": "Yes"})
    assert result.bucket is Bucket.NOT_FIT
    assert result.reasons == ("Rating < 4.0",)


def test_medium_lists_only_failed_present_conditions() -> None:
    result = evaluate_fit(_best(client_rating=4.8, hire_rate=0.4, total_spent=500,
                                jobs_posted=10, ai_match=0.5))
    assert result.bucket is Bucket.MEDIUM_FIT
    assert result.reasons == (
        "Hire rate < 60%",
        "Spend < $10k AND Jobs < 50",
        "AI match < 0.75",
    )


def test_jobs_posted_can_stand_in_for_spend() -> None:
    result = evaluate_fit(_best(total_spent=0, jobs_posted=50))
    assert result.bucket is Bucket.BEST_FIT
    assert "Jobs posted ≥ 50" in result.reasons


def test_mixed_representations_are_normalized_once() -> None:
    raw = {
        "client_country": " usa ",
        "payment_verified": "YES",
        "client_rating": "4.9",
        "jobs_posted": "12",
        "hire_rate": "65%",
        "total_spent": "$12K",
        "ai_match": 80,
    }
    result = evaluate_fit(raw)
    assert result.bucket is Bucket.BEST_FIT
    assert "Hire rate ≥ 60%" in result.reasons
    assert "AI match ≥ 0.75" in result.reasons


def test_blank_percentages_are_not_provided_rather_than_zero() -> None:
    result = evaluate_fit(_best(hire_rate="", ai_match="  "))
    assert result.bucket is Bucket.BEST_FIT


def test_zero_hire_rate_is_a_present_failure() -> None:
    result = evaluate_fit(_best(hire_rate="0%"))
    assert result.bucket is Bucket.MEDIUM_FIT
    assert result.reasons == ("Hire rate < 60%",)


def test_policy_thresholds_are_configurable() -> None:
    lenient = FitPolicy(best_rating=4.5)
    assert evaluate_fit(_best(client_rating=4.5), policy=lenient).bucket is Bucket.BEST_FIT


def test_evaluate_fit_is_idempotent() -> None:
    job = _best(client_rating=4.2, hire_rate=0.3)
    assert evaluate_fit(job) == evaluate_fit(job)


def test_bucket_and_score_are_always_paired() -> None:
    allowed = {(Bucket.NOT_FIT, 0), (Bucket.MEDIUM_FIT, 70), (Bucket.BEST_FIT, 100)}
    grid = itertools.product(
        [True, False],
        ["Germany", "Brazil"],
        [3.5, 4.0, 4.6, 4.7, 5.0],
        [None, 0.2, 0.6],
        [0, 10000],
        [0, 50],
        [None, 0.5, 0.75],
    )
    for verified, country, rating, hire, spent, jobs, ai in grid:
        result = evaluate_fit(FitInput(country, verified, rating, jobs, hire, spent, ai))
        assert (result.bucket, result.fit_score) in allowed
        assert result.reasons


def test_breakdown_mirrors_best_fit_gate() -> None:
    checks = {c.label: c for c in fit_breakdown(_best(total_spent=48000, hire_rate="75%"))}
    assert [c.status for c in checks.values()] == [
        CheckStatus.PASS, CheckStatus.PASS, CheckStatus.PASS,
        CheckStatus.PASS, CheckStatus.PASS, CheckStatus.NEUTRAL,
    ]
    assert checks["Hire rate"].value == "75%"
    assert checks["Spend / history"].value == "$48k spent"
    assert checks["AI match"].value == "Not calculated"


def test_breakdown_warnings_and_failures() -> None:
    record = {
        "client_country": "", "payment_verified": "No", "client_rating": "4.2",
        "hire_rate": 0.3, "total_spent": "$2K", "jobs_posted": 4, "ai_match": "40%",
    }
    checks = {c.label: c for c in fit_breakdown(record)}
    assert checks["Country"].status is CheckStatus.FAIL
    assert checks["Country"].value == "Not specified"
    assert checks["Payment verified"].status is CheckStatus.FAIL
    assert checks["Client rating"].status is CheckStatus.WARNING
    assert checks["Hire rate"].status is CheckStatus.WARNING
    assert checks["Spend / history"].status is CheckStatus.WARNING
    assert checks["Spend / history"].value == "$2k / 4 jobs"
    assert checks["AI match"].status is CheckStatus.FAIL


def test_breakdown_history_by_jobs_posted() -> None:
    checks = {c.label: c for c in fit_breakdown(_best(total_spent=0, jobs_posted=80, ai_match=0.6))}
    assert checks["Spend / history"].value == "80 jobs posted"
    assert checks["AI match"].status is CheckStatus.WARNING
    assert checks["Client rating"].requirement == "≥ 4.7 (Best Fit), ≥ 4.0 (Minimum)"
