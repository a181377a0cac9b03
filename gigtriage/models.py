"""Data models for postings, fit results and contact sanitization."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from gigtriage.countries import canonical_country
from gigtriage.normalize import to_bool, to_int, to_number, to_percent


class PricingType(str, Enum):
    FIXED = "Fixed"
    HOURLY = "Hourly"


class Bucket(str, Enum):
    NOT_FIT = "NOT_FIT"
    MEDIUM_FIT = "MEDIUM_FIT"
    BEST_FIT = "BEST_FIT"

    @property
    def fit_score(self) -> int:
        return _FIT_SCORES[self]


_FIT_SCORES: dict[Bucket, int] = {
    Bucket.NOT_FIT: 0,
    Bucket.MEDIUM_FIT: 70,
    Bucket.BEST_FIT: 100,
}


class CheckStatus(str, Enum):
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"
    NEUTRAL = "neutral"


class ContactType(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    WEBSITE = "website"
    SOCIAL = "social"
    ADDRESS = "address"


@dataclass(frozen=True)
class FitInput:
    """Client-quality signals the classifier reads; percentages are fractions."""

    client_country: str = ""
    payment_verified: bool = False
    client_rating: float = 0.0
    jobs_posted: int = 0
    hire_rate: float | None = None
    total_spent: float = 0.0
    ai_match: float | None = None

    @classmethod
    def coerce(cls, record: Any) -> FitInput:
        """Normalize a FitInput, mapping or attribute object with mixed representations.

        Accepts ``"Yes"``/``True``, ``"$15,000"``/``"15K"``, ``"55%"``/``0.55``/``55``.
        Blank rating, jobs and spend count as 0; blank hire rate and AI match
        stay ``None``.
        """
        if isinstance(record, Mapping):
            get = record.get
        else:
            def get(key: str, default: Any = None) -> Any:
                return getattr(record, key, default)

        return cls(
            client_country=canonical_country(str(get("client_country") or "")),
            payment_verified=to_bool(get("payment_verified")),
            client_rating=to_number(get("client_rating")) or 0.0,
            jobs_posted=to_int(get("jobs_posted")) or 0,
            hire_rate=to_percent(get("hire_rate")),
            total_spent=to_number(get("total_spent")) or 0.0,
            ai_match=to_percent(get("ai_match")),
        )


@dataclass(frozen=True)
class FitResult:
    bucket: Bucket
    reasons: tuple[str, ...] = ()

    @property
    def fit_score(self) -> int:
        return self.bucket.fit_score

    def as_dict(self) -> dict[str, Any]:
        return {
            "bucket": self.bucket.value,
            "fit_score": self.fit_score,
            "reasons": list(self.reasons),
        }


@dataclass(frozen=True)
class FitCheck:
    """One row of the fit breakdown: observed value against its requirement."""

    label: str
    status: CheckStatus
    value: str
    requirement: str


@dataclass(frozen=True)
class JobPosting:
    title: str = ""
    posted_time: str = ""
    pricing_type: PricingType | None = None
    budget_range: str = ""
    level: str = ""
    description: str = ""
    skills: tuple[str, ...] = ()
    deliverables: tuple[str, ...] = ()
    screening_questions: tuple[str, ...] = ()
    client_country: str = ""
    payment_verified: bool = False
    client_rating: float = 0.0
    hire_rate: float | None = None
    jobs_posted: int = 0
    total_spent: float = 0.0
    total_hires: int = 0
    avg_hourly_rate: float = 0.0
    duration_text: str = ""

    def to_fit_input(self, ai_match: Any = None) -> FitInput:
        return FitInput(
            client_country=self.client_country,
            payment_verified=self.payment_verified,
            client_rating=self.client_rating,
            jobs_posted=self.jobs_posted,
            hire_rate=self.hire_rate,
            total_spent=self.total_spent,
            ai_match=to_percent(ai_match),
        )


@dataclass(frozen=True)
class SolicitationResult:
    requested: bool = False
    matched_phrases: tuple[str, ...] = ()


@dataclass(frozen=True)
class ContactMatch:
    type: ContactType
    raw_value: str


@dataclass(frozen=True)
class SanitizationResult:
    sanitized_text: str = ""
    found_contacts: tuple[ContactMatch, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TriageResult:
    posting: JobPosting
    fit: FitResult
    solicitation: SolicitationResult
