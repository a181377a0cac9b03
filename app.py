"""Streamlit UI for posting triage and proposal cleaning."""
from __future__ import annotations

import csv
import io
import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from gigtriage.config import load_policy
from gigtriage.fit import fit_breakdown
from gigtriage.guardrails import REDACTION_MARKER
from gigtriage.log import get_logger
from gigtriage.models import Bucket, CheckStatus
from gigtriage.report import build_triage_report
from gigtriage.sheet import RESULT_COLUMNS, classify_rows
from gigtriage.triage import clean_proposal, triage_posting

log = get_logger(__name__)

# ── Constants ────────────────────────────────────────────────────────────

_BUCKET_LABELS: dict[Bucket, str] = {
    Bucket.BEST_FIT: "✅ Best fit",
    Bucket.MEDIUM_FIT: "\U0001f7e1 Medium fit",
    Bucket.NOT_FIT: "⛔ Not a fit",
}

_STATUS_ICONS: dict[CheckStatus, str] = {
    CheckStatus.PASS: "✅",
    CheckStatus.WARNING: "⚠️",
    CheckStatus.FAIL: "❌",
    CheckStatus.NEUTRAL: "➖",
}

_GLASS_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: linear-gradient(135deg, #e8eaf6 0%, #f3e5f5 40%, #e0f2f1 100%);
}
[data-testid="stMetric"] {
    background: rgba(255,255,255,0.6);
    padding: 0.75rem 1rem;
    border-radius: 12px;
    border: 1px solid rgba(255,255,255,0.4);
    box-shadow: 0 4px 16px rgba(0,0,0,0.06);
}
h1, h2, h3 {
    color: #1a1a2e;
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _money(value: float) -> str:
    return f"${value:,.0f}" if value else "—"


def _percent(value: float | None) -> str:
    return "not provided" if value is None else f"{value:.0%}"


# ── Page: Triage ─────────────────────────────────────────────────────────


def page_triage() -> None:
    st.header("Triage a Posting")
    raw = st.text_area("Paste the full job posting", height=300)
    ai_match = st.text_input("AI match (optional)", placeholder="e.g. 80% or 0.8")

    if not st.button("Triage", type="primary", use_container_width=True):
        return
    if not raw.strip():
        st.warning("Paste a posting first.")
        return

    result = triage_posting(raw, ai_match=ai_match or None)
    posting, fit = result.posting, result.fit

    c1, c2, c3 = st.columns(3)
    c1.metric("Bucket", _BUCKET_LABELS[fit.bucket])
    c2.metric("Fit score", fit.fit_score)
    c3.metric("Client country", posting.client_country or "—")
    for reason in fit.reasons:
        st.markdown(f"- {reason}")

    with st.expander("Score breakdown"):
        st.table([
            {"": _STATUS_ICONS[c.status], "Condition": c.label, "Value": c.value,
             "Requirement": c.requirement}
            for c in fit_breakdown(posting.to_fit_input(ai_match or None))
        ])

    if result.solicitation.requested:
        st.warning(
            "This posting asks for contact outside the platform: "
            + ", ".join(result.solicitation.matched_phrases)
        )

    st.subheader(posting.title or "Untitled posting")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Rating", f"{posting.client_rating:.2f}")
    c2.metric("Hire rate", _percent(posting.hire_rate))
    c3.metric("Total spent", _money(posting.total_spent))
    c4.metric("Jobs posted", posting.jobs_posted)

    st.markdown(
        f"**Pricing:** {posting.pricing_type.value if posting.pricing_type else '—'} "
        f"| **Budget:** {posting.budget_range or '—'} | **Level:** {posting.level or '—'} "
        f"| **Duration:** {posting.duration_text or '—'}"
    )
    if posting.skills:
        st.markdown("**Skills:** " + ", ".join(posting.skills))
    if posting.deliverables:
        with st.expander("Deliverables"):
            for item in posting.deliverables:
                st.markdown(f"- {item}")
    if posting.screening_questions:
        with st.expander("Screening questions"):
            for q in posting.screening_questions:
                st.markdown(f"- {q}")
    if posting.description:
        with st.expander("Description", expanded=True):
            st.write(posting.description)


# ── Page: Proposal ───────────────────────────────────────────────────────


def page_proposal() -> None:
    st.header("Clean a Proposal")
    proposal = st.text_area("Generated proposal", height=260)
    job_text = st.text_area("Job posting (optional)", height=120)
    allow_github = st.checkbox("Keep GitHub links", value=True)

    if not st.button("Clean", type="primary", use_container_width=True):
        return

    result = clean_proposal(proposal, job_text, allow_github=allow_github)
    if result.found_contacts:
        st.warning(f"Removed {len(result.found_contacts)} contact item(s).")
        for c in result.found_contacts:
            st.markdown(f"- **{c.type.value}:** `{c.raw_value}`")
    else:
        st.success("No contact information found.")
    st.text_area(f"Cleaned text (removed items read “{REDACTION_MARKER}”)",
                 result.sanitized_text, height=260)


# ── Page: Sheet ──────────────────────────────────────────────────────────


def page_sheet() -> None:
    st.header("Classify a Job Sheet")
    uploaded = st.file_uploader("Job sheet (CSV)", type=["csv"])
    if uploaded is None:
        st.info("Upload a CSV export with columns like *Client Country*, "
                "*Payment Verified*, *Client Rating*, *Hire Rate (%)*.")
        return

    reader = csv.DictReader(io.StringIO(uploaded.getvalue().decode("utf-8-sig")))
    rows = classify_rows(list(reader))
    log.info("Classified uploaded sheet %s (%d rows)", uploaded.name, len(rows))
    fieldnames = [c for c in (reader.fieldnames or []) if c not in RESULT_COLUMNS] + RESULT_COLUMNS

    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=fieldnames, extrasaction="ignore")
    writer.writeheader()
    writer.writerows(rows)

    st.dataframe(rows, use_container_width=True)
    st.download_button("Download classified CSV", buf.getvalue(),
                       file_name=f"{Path(uploaded.name).stem}_classified.csv", mime="text/csv")
    with st.expander("Report", expanded=True):
        st.markdown(build_triage_report(rows))


# ── Main ─────────────────────────────────────────────────────────────────


def _inject_css() -> None:
    st.markdown(_GLASS_CSS, unsafe_allow_html=True)


def _wrap_triage():
    _inject_css()
    page_triage()


def _wrap_proposal():
    _inject_css()
    page_proposal()


def _wrap_sheet():
    _inject_css()
    page_sheet()


try:
    load_policy()
except ValueError as exc:
    st.error(f"Invalid triage policy: {exc}")
    st.stop()

pages = [
    st.Page(_wrap_triage, title="Triage", icon="🔎", url_path="triage", default=True),
    st.Page(_wrap_proposal, title="Proposal", icon="✉️", url_path="proposal"),
    st.Page(_wrap_sheet, title="Sheet", icon="📊", url_path="sheet"),
]

nav = st.navigation(pages)
nav.run()
