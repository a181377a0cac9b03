#!/usr/bin/env python3
"""Entry point to triage a posting, clean a proposal, or classify a job sheet."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from gigtriage.cli import main

if __name__ == "__main__":
    sys.exit(main())
