"""
impact_os.database.models — SQLAlchemy 2.0 Data Models
=======================================================

Tables:
- users            — Participant / applicant accounts (ledger owners)
- applicants       — Intake record with assessment write-back fields
- currency_ledger  — Append-only signed currency entries

Enum columns store the ``StrEnum`` value as a plain string so the schema
stays portable between PostgreSQL and the SQLite test database.
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all Impact OS ORM models."""


def _new_id() -> str:
    return uuid.uuid4().hex


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class CurrentStatus(enum.StrEnum):
    """Applicant's self-reported situation at intake."""
    UNEMPLOYED = "UNEMPLOYED"
    UNDEREMPLOYED = "UNDEREMPLOYED"
    CAREGIVER = "CAREGIVER"
    STUDENT = "STUDENT"
    EMPLOYED = "EMPLOYED"
    OTHER = "OTHER"


class OfferType(enum.StrEnum):
    """Program offer assigned by the assessment."""
    FULL_SUPPORT = "FULL_SUPPORT"
    SKILLS_ONLY = "SKILLS_ONLY"
    ACCELERATOR = "ACCELERATOR"
    CATALYST_TRACK = "CATALYST_TRACK"


class SkillDomain(enum.StrEnum):
    """The three triad axes."""
    TECHNICAL = "TECHNICAL"
    SOFT = "SOFT"
    COMMERCIAL = "COMMERCIAL"


class CurrencyType(enum.StrEnum):
    """Currency kinds tracked by the ledger."""
    MOMENTUM = "MOMENTUM"
    SKILL_XP = "SKILL_XP"
    ARENA_POINTS = "ARENA_POINTS"
    INCOME_PROOF = "INCOME_PROOF"


# ---------------------------------------------------------------------------
# Users — one row per participant account
# ---------------------------------------------------------------------------
class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    ledger_entries: Mapped[list[CurrencyLedger]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.display_name!r}>"


# ---------------------------------------------------------------------------
# Applicants — intake signals + assessment results
# ---------------------------------------------------------------------------
class Applicant(Base):
    """One intake record.

    The signal columns are written at intake; the ``triad_*`` through
    ``assessed_at`` columns are written only by
    :func:`impact_os.services.assessment_service.assess_applicant`.
    """
    __tablename__ = "applicants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    skill_track: Mapped[str | None] = mapped_column(String(50), default=None)

    # Intake signals (0–N scale, nullable)
    readiness_score: Mapped[float | None] = mapped_column(Float, default=None)
    action_orientation: Mapped[float | None] = mapped_column(Float, default=None)
    market_awareness: Mapped[float | None] = mapped_column(Float, default=None)
    commitment_signal: Mapped[float | None] = mapped_column(Float, default=None)

    # Behavioural flags
    tried_learning_skill: Mapped[bool] = mapped_column(Boolean, default=False)
    tried_online_earning: Mapped[bool] = mapped_column(Boolean, default=False)

    current_monthly_income: Mapped[float | None] = mapped_column(Float, default=None)
    current_status: Mapped[str | None] = mapped_column(String(20), default=None)

    # Free-text probes
    technical_probe: Mapped[str | None] = mapped_column(Text, default=None)
    commercial_probe: Mapped[str | None] = mapped_column(Text, default=None)
    commitment_probe: Mapped[str | None] = mapped_column(Text, default=None)
    exposure_probe: Mapped[str | None] = mapped_column(Text, default=None)

    # Assessment write-back
    triad_technical: Mapped[float | None] = mapped_column(Float, default=None)
    triad_soft: Mapped[float | None] = mapped_column(Float, default=None)
    triad_commercial: Mapped[float | None] = mapped_column(Float, default=None)
    offer_type: Mapped[str | None] = mapped_column(String(20), default=None)
    receives_stipend: Mapped[bool] = mapped_column(Boolean, default=False)
    primary_focus: Mapped[str | None] = mapped_column(String(20), default=None)
    kpi_targets: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    assessed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_applicants_offer_type", "offer_type"),
    )

    def __repr__(self) -> str:
        return f"<Applicant id={self.id} name={self.first_name!r} offer={self.offer_type}>"


# ---------------------------------------------------------------------------
# CurrencyLedger — append-only, balance = SUM(amount)
# ---------------------------------------------------------------------------
class CurrencyLedger(Base):
    """One signed currency movement.

    Rows are never updated or deleted.  Reversals and spending are negative
    rows.
    """
    __tablename__ = "currency_ledger"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    currency_type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False, default="")
    mission_id: Mapped[str | None] = mapped_column(String(36), default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    user: Mapped[User] = relationship(back_populates="ledger_entries")

    __table_args__ = (
        Index("ix_currency_ledger_user_type", "user_id", "currency_type"),
        Index("ix_currency_ledger_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<CurrencyLedger id={self.id} user={self.user_id} "
            f"{self.currency_type} {self.amount:+d}>"
        )
