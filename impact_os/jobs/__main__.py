"""
impact_os.jobs.__main__ — Entry point for ``python -m impact_os.jobs``
======================================================================

One-shot maintenance jobs, meant to be invoked by cron (or any external
scheduler) once per period.  Nothing here loops: a second invocation in the
same period runs the job again, so schedule each job exactly once.

Wiring:
1. Load .env (secrets).
2. Load config.yaml (decay rate).
3. Create the SQLAlchemy engine and ensure tables exist.
4. Run the requested job and exit non-zero on failure.

Run with::

    python -m impact_os.jobs decay              # uses daily_decay_rate
    python -m impact_os.jobs decay --rate 0.1
"""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from impact_os.config import load_config
from impact_os.database.engine import create_db_engine, init_db
from impact_os.services.currency_service import apply_daily_decay

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("impact_os")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m impact_os.jobs")
    parser.add_argument(
        "--config", default="config.yaml", help="Path to config.yaml",
    )
    sub = parser.add_subparsers(dest="job", required=True)

    decay = sub.add_parser("decay", help="Apply daily momentum decay to active users")
    decay.add_argument(
        "--rate", type=float, default=None,
        help="Decay rate in (0, 1]; defaults to daily_decay_rate from config",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse *argv*, run one job, and return a process exit code."""
    args = _build_parser().parse_args(argv)

    # 1. Environment variables (secrets).
    load_dotenv()

    # 2. Soft configuration.
    cfg = load_config(args.config)
    logger.info("Config loaded — Program: %s", cfg.program_name)

    # 3. Database.
    engine = create_db_engine()
    init_db(engine)

    # 4. Job.
    if args.job == "decay":
        rate = args.rate if args.rate is not None else cfg.daily_decay_rate
        if not 0 < rate <= 1:
            logger.critical("Decay rate must be in (0, 1], got %s", rate)
            return 2
        try:
            processed = apply_daily_decay(engine, rate)
        except Exception:
            logger.exception("Momentum decay failed", extra={"task": "decay"})
            return 1
        logger.info("Momentum decay complete: %d users processed at rate %.2f", processed, rate)
    return 0


if __name__ == "__main__":
    sys.exit(main())
