"""
Impact OS — Assessment & Currency Rules Engine
===============================================
Scores applicants into a skill triad, decides their program offer, stipend
eligibility and KPI targets, and runs the participant currency ledger
(Momentum, Skill XP, Arena Points, Income Proof).

Package layout::

    impact_os/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # KPI targets, stipend statuses, thresholds
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + session helper
    │   └── models.py      # ORM models (users, applicants, currency_ledger)
    ├── engine/
    │   ├── triad.py       # Skill triad scorer + primary focus selector
    │   ├── offer.py       # Offer classifier, stipend rule, KPI resolver
    │   └── currency.py    # Decay / rounding / display-triad helpers
    ├── services/
    │   ├── assessment_service.py  # Repository + assessment orchestrator
    │   └── currency_service.py    # Append-only ledger operations
    ├── jobs/
    │   └── __main__.py    # ``python -m impact_os.jobs decay``
    └── api/
        ├── main.py        # FastAPI app
        ├── deps.py        # Engine / config / staff JWT dependencies
        └── routes/        # Assessment + currency endpoints
"""

__version__ = "0.1.0"
