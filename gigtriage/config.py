"""Load env settings and the triage policy (thresholds and keyword lists)."""
from __future__ import annotations

import functools
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from gigtriage.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
POLICY_PATH: Path = CONFIG_DIR / "policy.yaml"
REPORTS_DIR: Path = ROOT_DIR / "reports"
DATA_DIR: Path = ROOT_DIR / "data"


@dataclass(frozen=True)
class FitPolicy:
    """Thresholds of the two-stage fit gate."""

    min_rating: float = 4.0
    best_rating: float = 4.7
    best_hire_rate: float = 0.60
    best_total_spent: float = 10_000.0
    best_jobs_posted: int = 50
    best_ai_match: float = 0.75


@dataclass(frozen=True)
class ContactPolicy:
    """Context windows of the social and address detectors; dotted tech terms kept as-is."""

    allow_github: bool = True
    social_platforms: tuple[str, ...] = (
        "telegram", "whatsapp", "skype", "wechat", "viber",
        "signal", "discord", "slack",
    )
    address_cues: tuple[str, ...] = (
        "based in", "located in", "address", "physical location",
        "my location", "i am in", "i'm in", "from",
    )
    address_min_length: int = 10
    address_max_length: int = 100
    tech_terms: tuple[str, ...] = (
        "asp.net", "vb.net", "ado.net", "ml.net", "socket.io",
    )


@dataclass(frozen=True)
class Policy:
    fit: FitPolicy = field(default_factory=FitPolicy)
    contact: ContactPolicy = field(default_factory=ContactPolicy)


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def ensure_dirs() -> None:
    for d in (REPORTS_DIR, DATA_DIR):
        d.mkdir(parents=True, exist_ok=True)


def _build(cls: type, section: Any, name: str) -> Any:
    """Instantiate a policy dataclass from one YAML section, ignoring unknown keys."""
    if section is None:
        return cls()
    if not isinstance(section, dict):
        raise ValueError(f"Policy section '{name}' must be a mapping")

    known = {f.name: f for f in fields(cls)}
    values: dict[str, Any] = {}
    for key, raw in section.items():
        if key not in known:
            log.warning("Ignoring unknown policy key %s.%s", name, key)
            continue
        default = getattr(cls(), key)
        if isinstance(default, tuple):
            if not isinstance(raw, (list, tuple)):
                raise ValueError(f"Policy key {name}.{key} must be a list")
            values[key] = tuple(str(v).strip().lower() for v in raw if str(v).strip())
        elif isinstance(default, bool):
            if not isinstance(raw, bool):
                raise ValueError(f"Policy key {name}.{key} must be true or false")
            values[key] = raw
        else:
            try:
                values[key] = type(default)(raw)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Policy key {name}.{key} is not a number: {raw!r}") from exc
    return replace(cls(), **values)


def parse_policy(data: Any) -> Policy:
    if data is None:
        return Policy()
    if not isinstance(data, dict):
        raise ValueError("Policy file must contain a mapping at the top level")

    contact = _build(ContactPolicy, data.get("contact"), "contact")
    if not 0 <= contact.address_min_length < contact.address_max_length:
        raise ValueError("contact.address_min_length must be below address_max_length")
    return Policy(fit=_build(FitPolicy, data.get("fit"), "fit"), contact=contact)


@functools.lru_cache(maxsize=None)
def load_policy(path: str | None = None) -> Policy:
    """Read the policy YAML once; a missing file yields the built-in defaults.

    The path defaults to ``$GIGTRIAGE_POLICY`` or ``config/policy.yaml``.
    """
    policy_path = Path(path or get_env("GIGTRIAGE_POLICY") or POLICY_PATH)
    if not policy_path.exists():
        log.debug("No policy file at %s — using defaults", policy_path)
        return Policy()

    try:
        with open(policy_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ValueError(f"Malformed policy file {policy_path}: {exc}") from exc

    policy = parse_policy(data)
    log.info("Loaded triage policy from %s", policy_path.name)
    return policy
