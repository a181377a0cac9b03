"""Markdown summary of a classified job sheet."""
from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

from gigtriage.config import REPORTS_DIR
from gigtriage.log import get_logger
from gigtriage.models import Bucket
from gigtriage.sheet import BUCKET_COLUMN, REASONS_COLUMN, SCORE_COLUMN

log = get_logger(__name__)

_BADGES: dict[str, str] = {
    Bucket.BEST_FIT.value: "✅",
    Bucket.MEDIUM_FIT.value: "\U0001f7e1",
    Bucket.NOT_FIT.value: "⛔",
}
_BUCKET_ORDER = [Bucket.BEST_FIT.value, Bucket.MEDIUM_FIT.value, Bucket.NOT_FIT.value]


def _clip(text: str, width: int) -> str:
    text = (text or "").replace("|", "/").strip()
    return text[:width] + ("…" if len(text) > width else "")


def build_triage_report(rows: list[dict[str, str]], *, top: int = 15) -> str:
    """Bucket counts, the best postings first, and a quick reference table."""
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    counts = Counter(r.get(BUCKET_COLUMN, "") for r in rows)
    lines: list[str] = [f"# Job Triage Report — {date}", ""]
    lines.append(
        f"**{len(rows)}** jobs | "
        + " | ".join(f"**{counts.get(b, 0)}** {b}" for b in _BUCKET_ORDER)
    )
    lines.append("")

    ranked = sorted(
        rows,
        key=lambda r: (_BUCKET_ORDER.index(r[BUCKET_COLUMN])
                       if r.get(BUCKET_COLUMN) in _BUCKET_ORDER else len(_BUCKET_ORDER)),
    )[:top]

    if ranked:
        lines.append("## Quick Reference")
        lines.append("")
        lines.append("| # | Job | Country | Bucket | Score | Why |")
        lines.append("|--:|-----|---------|--------|------:|-----|")
        for i, r in enumerate(ranked, 1):
            bucket = r.get(BUCKET_COLUMN, "")
            badge = _BADGES.get(bucket, "")
            lines.append(
                f"| {i} | {_clip(r.get('Job Title', ''), 40)} | {_clip(r.get('Client Country', ''), 18)} "
                f"| {badge} {bucket} | {r.get(SCORE_COLUMN, '')} | {_clip(r.get(REASONS_COLUMN, ''), 60)} |"
            )
        lines.append("")

    log.info("Built triage report: %d jobs, %d best fit", len(rows), counts.get(Bucket.BEST_FIT.value, 0))
    return "\n".join(lines)


def write_triage_report(content: str) -> Path:
    REPORTS_DIR.mkdir(parents=True, exist_ok=True)
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    path = REPORTS_DIR / f"triage_{date}.md"
    path.write_text(content, encoding="utf-8")
    log.info("Report written → %s", path)
    return path
