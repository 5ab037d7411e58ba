"""
impact_os.api.routes.currency — Balances, history and staff adjustments
========================================================================

Unsuccessful ledger operations are returned with HTTP 200 and
``"success": false``; the caller must inspect the flag.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from impact_os.api.deps import get_config, get_current_staff, get_engine
from impact_os.config import ImpactConfig
from impact_os.database.models import CurrencyType
from impact_os.services import currency_service

router = APIRouter(prefix="/currency", tags=["currency"])


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class LedgerAdjustment(BaseModel):
    currency_type: CurrencyType
    amount: int
    reason: str = ""
    mission_id: str | None = None


class DecayRun(BaseModel):
    rate: float | None = Field(default=None, gt=0, le=1)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
@router.get("/{user_id}/balance")
def get_balance(user_id: str, engine=Depends(get_engine)):
    return currency_service.get_balance(engine, user_id).to_dict()


@router.get("/{user_id}/history")
def get_transaction_history(
    user_id: str,
    currency_type: CurrencyType | None = Query(None, alias="type"),
    limit: int | None = Query(None, ge=1, le=500),
    engine=Depends(get_engine),
    cfg: ImpactConfig = Depends(get_config),
):
    """Newest-first ledger entries, optionally filtered by ``?type=``.

    Without ``?limit=`` the page size is ``history_limit`` from config.
    """
    page_size = limit if limit is not None else cfg.history_limit
    return {
        "transactions": currency_service.get_transaction_history(
            engine, user_id, currency_type, page_size
        ),
    }


@router.get("/{user_id}/triad")
def get_skill_triad(user_id: str, engine=Depends(get_engine)):
    return currency_service.get_skill_triad(engine, user_id)


# ---------------------------------------------------------------------------
# Staff adjustments
# ---------------------------------------------------------------------------
@router.post("/{user_id}/credit")
def credit(
    user_id: str,
    body: LedgerAdjustment,
    staff: dict = Depends(get_current_staff),
    engine=Depends(get_engine),
):
    result = currency_service.credit(
        engine,
        user_id,
        body.currency_type,
        body.amount,
        body.reason or f"Staff credit by {staff.get('sub')}",
        body.mission_id,
    )
    return result.to_dict()


@router.post("/{user_id}/debit")
def debit(
    user_id: str,
    body: LedgerAdjustment,
    staff: dict = Depends(get_current_staff),
    engine=Depends(get_engine),
):
    result = currency_service.debit(
        engine,
        user_id,
        body.currency_type,
        body.amount,
        body.reason or f"Staff debit by {staff.get('sub')}",
    )
    return result.to_dict()


@router.post("/decay")
def run_daily_decay(
    body: DecayRun,
    staff: dict = Depends(get_current_staff),
    engine=Depends(get_engine),
    cfg: ImpactConfig = Depends(get_config),
):
    """Manually trigger the daily decay (normally run by ``impact_os.jobs``)."""
    rate = body.rate if body.rate is not None else cfg.daily_decay_rate
    processed = currency_service.apply_daily_decay(engine, rate)
    return {"users_processed": processed, "rate": rate}
