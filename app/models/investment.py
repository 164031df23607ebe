"""
Investment model.

A user's purchase of a plan. Income collection advances
last_income_collection_date and total_days_collected under a row lock.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base
from app.models.enums import InvestmentStatus
from app.models.types import MoneyType

if TYPE_CHECKING:
    from app.models.plan import Plan
    from app.models.user import UserProfile


class Investment(Base):
    """Investment model - purchased plans."""

    __tablename__ = "investments"
    __table_args__ = (
        CheckConstraint(
            'amount_invested > 0', name='check_investment_amount_positive'
        ),
        CheckConstraint(
            'total_days_collected >= 0',
            name='check_investment_days_non_negative'
        ),
        CheckConstraint(
            "status IN ('active', 'completed', 'cancelled')",
            name='check_investment_status'
        ),
        Index('idx_investment_user_status', 'user_id', 'status'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    plan_id: Mapped[int] = mapped_column(
        ForeignKey("plans.id", ondelete="RESTRICT"),
        nullable=False,
    )

    amount_invested: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=InvestmentStatus.ACTIVE.value
    )

    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    # Income collection progress
    last_income_collection_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    total_days_collected: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Plan is always needed to build snapshots, load it eagerly
    plan: Mapped["Plan"] = relationship("Plan", lazy="joined", innerjoin=True)
    user: Mapped["UserProfile"] = relationship(
        "UserProfile", back_populates="investments", lazy="raise"
    )

    def __repr__(self) -> str:
        return (
            f"<Investment(id={self.id}, user_id={self.user_id}, "
            f"status={self.status}, days={self.total_days_collected})>"
        )
