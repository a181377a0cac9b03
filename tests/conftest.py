from __future__ import annotations

import pytest

from gigtriage.config import load_policy

UPWORK_POSTING = """Senior Django Developer for SaaS Dashboard
Posted 2 hours ago

Summary
We are building a SaaS analytics dashboard and need an experienced Django developer.
You will own the backend API and work with our React team.

Deliverables
- REST API for reporting
- Deployment scripts

Less than 30 hrs/week
Hourly
1 to 3 months
Duration
Expert
Experience Level
$30.00 - $60.00
Hourly

You will be asked to answer the following questions when submitting a proposal:
1. Describe your recent experience with similar projects
2. Include a link to your GitHub profile and/or website

Skills and Expertise
Mandatory skills
Django
Python
PostgreSQL
Nice-to-have skills
React, Docker

Activity on this job
Proposals: 20 to 50

About the client
Payment method verified
Rating is 4.9 out of 5.
4.92 of 27 reviews
United States
Austin 6:00 AM
36 jobs posted
75% hire rate, 2 open jobs
$48K total spent
27 hires, 3 active
$42.50 /hr avg hourly rate paid
1,024 hours
Member since Mar 3, 2019
"""


@pytest.fixture(autouse=True)
def _default_policy(monkeypatch: pytest.MonkeyPatch):
    """Every test starts from the built-in policy, not a local override."""
    monkeypatch.delenv("GIGTRIAGE_POLICY", raising=False)
    load_policy.cache_clear()
    yield
    load_policy.cache_clear()


@pytest.fixture
def upwork_posting() -> str:
    return UPWORK_POSTING
