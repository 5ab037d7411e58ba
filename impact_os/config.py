"""
impact_os.config — YAML Configuration Loader
=============================================

Reads ``config.yaml`` for program identity and ledger tuning (daily decay
rate, history page size).  Secrets (``DATABASE_URL``, ``JWT_SECRET``) stay in
``.env`` and are never read from here.

Usage::

    from impact_os.config import load_config

    cfg = load_config()            # reads ./config.yaml by default
    print(cfg.program_name)        # "Impact OS Lagos"
    print(cfg.daily_decay_rate)    # 0.05
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ImpactConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    # Identity
    program_name: str

    # Ledger tuning
    daily_decay_rate: float = 0.05     # Scheduled decay job and POST /currency/decay
    history_limit: int = 50            # Default page size for /currency/{user_id}/history


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path = "config.yaml") -> ImpactConfig:
    """Read *path* and return an :class:`ImpactConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.
        Defaults to ``config.yaml`` in the current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    KeyError
        If a required key is missing from the YAML file.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    return ImpactConfig(
        program_name=raw["program_name"],
        daily_decay_rate=float(raw.get("daily_decay_rate", 0.05)),
        history_limit=int(raw.get("history_limit", 50)),
    )
