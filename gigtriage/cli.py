"""Command-line triage: a pasted posting, a generated proposal, or a job sheet."""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any

from gigtriage.config import ensure_dirs, load_policy
from gigtriage.log import get_logger
from gigtriage.report import build_triage_report, write_triage_report
from gigtriage.sheet import classify_sheet
from gigtriage.triage import clean_proposal, triage_posting

log = get_logger(__name__)


def _plain(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {k: _plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_plain(v) for v in obj]
    return obj


def _read(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gigtriage", description=__doc__)
    parser.add_argument("posting", nargs="?", help="posting text file ('-' for stdin)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--proposal", metavar="FILE", help="sanitize a generated proposal")
    mode.add_argument("--sheet", metavar="CSV", help="classify every row of a job sheet")
    parser.add_argument("--job", metavar="FILE", help="job text the proposal answers")
    parser.add_argument("--ai-match", help="AI match for the posting, e.g. 80%% or 0.8")
    parser.add_argument("--no-github", action="store_true", help="redact GitHub links too")
    parser.add_argument("--out", metavar="CSV", help="where to write the classified sheet")
    parser.add_argument("--report", action="store_true", help="also write a markdown report")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if bool(args.posting) + bool(args.proposal) + bool(args.sheet) != 1:
        parser.error("give exactly one of: a posting file, --proposal or --sheet")

    try:
        load_policy()
    except ValueError as exc:
        log.error("Invalid triage policy: %s", exc)
        return 2

    try:
        if args.sheet:
            ensure_dirs()
            out, rows = classify_sheet(Path(args.sheet), Path(args.out) if args.out else None)
            print(f"Classified {len(rows)} rows → {out}")
            if args.report:
                print(f"Report → {write_triage_report(build_triage_report(rows))}")
            return 0

        if args.proposal:
            job_text = _read(args.job) if args.job else ""
            result = clean_proposal(
                _read(args.proposal), job_text, allow_github=False if args.no_github else None
            )
            print(result.sanitized_text)
            return 0

        result = triage_posting(_read(args.posting), ai_match=args.ai_match)
        payload = {
            "posting": asdict(result.posting),
            "fit": result.fit.as_dict(),
            "solicitation": asdict(result.solicitation),
        }
        print(json.dumps(_plain(payload), indent=2, ensure_ascii=False))
        return 0
    except OSError as exc:
        log.error("Cannot read input: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
