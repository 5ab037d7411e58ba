"""
impact_os.services.currency_service — Append-only Currency Ledger
==================================================================

Currencies:
- MOMENTUM      — daily action reward, decays with inactivity
- SKILL_XP      — permanent skill progression
- ARENA_POINTS  — commercial exposure and rejection handling
- INCOME_PROOF  — verified external income

Every movement is a new ``currency_ledger`` row; a balance is always
``SUM(amount)`` over the user's rows of that kind and is never cached.

Failed operations (non-positive amount, insufficient balance) come back as
``TransactionResult(success=False, ...)``.  They are never raised, so callers
must check ``success``.

Debits lock the owning ``users`` row (``SELECT … FOR UPDATE``) before
aggregating, which serialises concurrent debits for one user and closes the
read-then-insert overdraft race.  Credits take no lock.

Ledger writes carry no idempotency key: crediting the same mission twice
pays twice.  De-duplication is the caller's job.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from impact_os.constants import DECAY_REASON, DEFAULT_DECAY_RATE, DEFAULT_HISTORY_LIMIT
from impact_os.database.engine import get_session
from impact_os.database.models import CurrencyLedger, CurrencyType, User
from impact_os.engine.currency import decay_amount, display_triad

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)

_BALANCE_FIELDS: dict[CurrencyType, str] = {
    CurrencyType.MOMENTUM: "momentum",
    CurrencyType.SKILL_XP: "skill_xp",
    CurrencyType.ARENA_POINTS: "arena_points",
    CurrencyType.INCOME_PROOF: "income_proof",
}


@dataclass(slots=True)
class TransactionResult:
    """Outcome of one credit or debit."""

    success: bool
    new_balance: int
    transaction_id: int | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class CurrencyBalance:
    momentum: int = 0
    skill_xp: int = 0
    arena_points: int = 0
    income_proof: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Session-level helpers
# ---------------------------------------------------------------------------
def get_or_create_user(session: Session, user_id: str) -> User:
    """Fetch or insert the User row that owns ledger entries.

    Two first writes for the same new id can both miss the row; the loser's
    insert hits the primary key inside a SAVEPOINT and re-reads the winner's
    row instead of failing the outer transaction.
    """
    user = session.get(User, user_id)
    if user is not None:
        return user

    try:
        with session.begin_nested():   # SAVEPOINT
            user = User(id=user_id)
            session.add(user)
            session.flush()
    except IntegrityError:
        # Inserted concurrently; the SAVEPOINT was rolled back.
        user = session.get(User, user_id)
    return user


def _lock_user(session: Session, user_id: str) -> User | None:
    """Row-lock the user for the rest of the transaction (no-op on SQLite).

    Returns None for unknown users; with no ledger rows their balance is 0
    and every debit fails.
    """
    return session.scalar(
        select(User).where(User.id == user_id).with_for_update()
    )


def _balance_for_type(session: Session, user_id: str, kind: CurrencyType) -> int:
    total = session.scalar(
        select(func.coalesce(func.sum(CurrencyLedger.amount), 0)).where(
            CurrencyLedger.user_id == user_id,
            CurrencyLedger.currency_type == kind.value,
        )
    )
    return int(total or 0)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def get_balance(engine: Engine, user_id: str) -> CurrencyBalance:
    """All four balances for *user_id*; kinds with no entries read as 0."""
    with Session(engine) as session:
        rows = session.execute(
            select(
                CurrencyLedger.currency_type,
                func.sum(CurrencyLedger.amount).label("total"),
            )
            .where(CurrencyLedger.user_id == user_id)
            .group_by(CurrencyLedger.currency_type)
        ).all()

    balance = CurrencyBalance()
    for row in rows:
        field_name = _BALANCE_FIELDS.get(CurrencyType(row.currency_type))
        if field_name:
            setattr(balance, field_name, int(row.total or 0))
    return balance


def get_balance_for_type(engine: Engine, user_id: str, kind: CurrencyType) -> int:
    with Session(engine) as session:
        return _balance_for_type(session, user_id, CurrencyType(kind))


def can_afford(engine: Engine, user_id: str, kind: CurrencyType, cost: int) -> bool:
    """Whether the current *kind* balance covers *cost*."""
    return get_balance_for_type(engine, user_id, kind) >= cost


def get_transaction_history(
    engine: Engine,
    user_id: str,
    kind: CurrencyType | None = None,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> list[dict]:
    """Most recent ledger entries first, optionally filtered by *kind*."""
    query = select(CurrencyLedger).where(CurrencyLedger.user_id == user_id)
    if kind is not None:
        query = query.where(CurrencyLedger.currency_type == CurrencyType(kind).value)
    query = query.order_by(
        CurrencyLedger.created_at.desc(), CurrencyLedger.id.desc()
    ).limit(limit)

    with Session(engine) as session:
        entries = session.scalars(query).all()
        return [
            {
                "id": e.id,
                "currency_type": e.currency_type,
                "amount": e.amount,
                "reason": e.reason,
                "mission_id": e.mission_id,
                "created_at": e.created_at.isoformat() if e.created_at else None,
            }
            for e in entries
        ]


def get_skill_triad(engine: Engine, user_id: str) -> dict:
    """Currency-page triad, derived from Skill XP and Arena Points balances.

    This is a display approximation, separate from the intake scorer.
    """
    balance = get_balance(engine, user_id)
    return display_triad(balance.skill_xp, balance.arena_points)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------
def credit(
    engine: Engine,
    user_id: str,
    kind: CurrencyType,
    amount: int,
    reason: str,
    mission_id: str | None = None,
) -> TransactionResult:
    """Append a positive entry.

    A non-positive *amount* writes nothing and returns ``success=False``
    with the unchanged balance.
    """
    kind = CurrencyType(kind)
    with get_session(engine) as session:
        if amount <= 0:
            return TransactionResult(
                success=False,
                new_balance=_balance_for_type(session, user_id, kind),
            )

        get_or_create_user(session, user_id)
        entry = CurrencyLedger(
            user_id=user_id,
            currency_type=kind.value,
            amount=amount,
            reason=reason,
            mission_id=mission_id,
        )
        session.add(entry)
        session.flush()
        new_balance = _balance_for_type(session, user_id, kind)
        transaction_id = entry.id

    logger.info("Credited %d %s to user %s: %s", amount, kind.value, user_id, reason)
    return TransactionResult(
        success=True, new_balance=new_balance, transaction_id=transaction_id
    )


def debit(
    engine: Engine,
    user_id: str,
    kind: CurrencyType,
    amount: int,
    reason: str,
) -> TransactionResult:
    """Append a negative entry if the balance covers *amount*.

    No overdraft: an insufficient balance returns ``success=False`` with the
    balance unchanged.
    """
    kind = CurrencyType(kind)
    with get_session(engine) as session:
        if amount <= 0:
            return TransactionResult(
                success=False,
                new_balance=_balance_for_type(session, user_id, kind),
            )

        _lock_user(session, user_id)
        current = _balance_for_type(session, user_id, kind)
        if current < amount:
            logger.warning(
                "Insufficient %s balance for user %s (%d < %d)",
                kind.value, user_id, current, amount,
            )
            return TransactionResult(success=False, new_balance=current)

        entry = CurrencyLedger(
            user_id=user_id,
            currency_type=kind.value,
            amount=-amount,
            reason=reason,
        )
        session.add(entry)
        session.flush()
        transaction_id = entry.id

    logger.info("Debited %d %s from user %s: %s", amount, kind.value, user_id, reason)
    return TransactionResult(
        success=True, new_balance=current - amount, transaction_id=transaction_id
    )


def apply_momentum_decay(
    engine: Engine, user_id: str, rate: float = DEFAULT_DECAY_RATE
) -> TransactionResult | None:
    """Debit ``ceil(momentum × rate)``; returns None when momentum ≤ 0.

    Not idempotent per period: running it twice decays twice.
    """
    momentum = get_balance_for_type(engine, user_id, CurrencyType.MOMENTUM)
    amount = decay_amount(momentum, rate)
    if amount <= 0:
        return None

    result = debit(engine, user_id, CurrencyType.MOMENTUM, amount, DECAY_REASON)
    if result.success:
        logger.info("Applied momentum decay of %d to user %s", amount, user_id)
    return result


def apply_daily_decay(engine: Engine, rate: float) -> int:
    """Decay momentum for every active user; returns how many were processed."""
    with Session(engine) as session:
        user_ids = session.scalars(
            select(User.id).where(User.is_active.is_(True)).order_by(User.id)
        ).all()

    for user_id in user_ids:
        apply_momentum_decay(engine, user_id, rate)

    logger.info("Applied momentum decay to %d users", len(user_ids))
    return len(user_ids)


def reward_mission(
    engine: Engine,
    user_id: str,
    mission_id: str,
    *,
    momentum: int = 0,
    skill_xp: int = 0,
    arena_points: int = 0,
) -> list[TransactionResult]:
    """Credit each positive mission reward, tagged with *mission_id*."""
    reason = f"Mission completed: {mission_id}"
    rewards = (
        (CurrencyType.MOMENTUM, momentum),
        (CurrencyType.SKILL_XP, skill_xp),
        (CurrencyType.ARENA_POINTS, arena_points),
    )
    return [
        credit(engine, user_id, kind, amount, reason, mission_id)
        for kind, amount in rewards
        if amount and amount > 0
    ]


def record_income_proof(
    engine: Engine, user_id: str, amount: int, income_record_id: str
) -> TransactionResult:
    """Credit INCOME_PROOF for a verified income record."""
    return credit(
        engine,
        user_id,
        CurrencyType.INCOME_PROOF,
        amount,
        f"Verified income: {income_record_id}",
    )
