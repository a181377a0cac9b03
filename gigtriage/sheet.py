"""Classify an exported job sheet (CSV) and write the fit columns back."""
from __future__ import annotations

import csv
from collections import Counter
from collections.abc import Iterable
from pathlib import Path

from gigtriage.config import DATA_DIR
from gigtriage.fit import evaluate_fit
from gigtriage.log import get_logger

log = get_logger(__name__)

# Sheet header → FitInput field
SHEET_COLUMNS: dict[str, str] = {
    "Client Country": "client_country",
    "Payment Verified": "payment_verified",
    "Client Rating": "client_rating",
    "Jobs Posted": "jobs_posted",
    "Hire Rate (%)": "hire_rate",
    "Total Spent ($)": "total_spent",
    "AI Match %": "ai_match",
}
BUCKET_COLUMN = "Bucket (Fit Result)"
SCORE_COLUMN = "Fit Score"
REASONS_COLUMN = "Reasons / Notes"
RESULT_COLUMNS: list[str] = [BUCKET_COLUMN, SCORE_COLUMN, REASONS_COLUMN]


def _fit_record(row: dict[str, str]) -> dict[str, str]:
    by_header = {(k or "").strip().lower(): v for k, v in row.items()}
    return {
        field: by_header.get(header.lower(), "") or ""
        for header, field in SHEET_COLUMNS.items()
    }


def classify_rows(rows: Iterable[dict[str, str]]) -> list[dict[str, str]]:
    """Copy each row with bucket, fit score and reasons columns filled in."""
    out: list[dict[str, str]] = []
    counts: Counter[str] = Counter()
    for row in rows:
        result = evaluate_fit(_fit_record(row))
        counts[result.bucket.value] += 1
        out.append({
            **row,
            BUCKET_COLUMN: result.bucket.value,
            SCORE_COLUMN: str(result.fit_score),
            REASONS_COLUMN: "; ".join(result.reasons),
        })
    log.info(
        "Classified %d rows → %s",
        len(out), ", ".join(f"{k}={v}" for k, v in sorted(counts.items())) or "nothing",
    )
    return out


def read_sheet(path: Path) -> tuple[list[str], list[dict[str, str]]]:
    with open(path, "r", newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        rows = list(reader)
        return list(reader.fieldnames or []), rows


def write_sheet(path: Path, fieldnames: list[str], rows: list[dict[str, str]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)


def classify_sheet(
    in_path: Path, out_path: Path | None = None
) -> tuple[Path, list[dict[str, str]]]:
    """Read *in_path*, classify every row, write ``<stem>_classified.csv``."""
    fieldnames, rows = read_sheet(in_path)
    classified = classify_rows(rows)

    out_path = out_path or DATA_DIR / f"{in_path.stem}_classified.csv"
    columns = [c for c in fieldnames if c not in RESULT_COLUMNS] + RESULT_COLUMNS
    write_sheet(out_path, columns, classified)
    log.info("Classified sheet written → %s", out_path)
    return out_path, classified
