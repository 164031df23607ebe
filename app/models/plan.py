"""
Plan model.

Fixed-term investment products managed by administrators.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base
from app.models.types import MoneyType, RatePercentType


class Plan(Base):
    """Investment plan."""

    __tablename__ = "plans"
    __table_args__ = (
        CheckConstraint('duration_days > 0', name='check_plan_duration_positive'),
        CheckConstraint('profit_percent >= 0', name='check_plan_profit_non_negative'),
        CheckConstraint(
            'max_investment IS NULL OR max_investment >= min_investment',
            name='check_plan_investment_range'
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    duration_days: Mapped[int] = mapped_column(Integer, nullable=False)
    # Total profit over the full duration, in percent of the invested amount
    profit_percent: Mapped[Decimal] = mapped_column(RatePercentType, nullable=False)

    min_investment: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False, default=Decimal("0")
    )
    max_investment: Mapped[Decimal | None] = mapped_column(MoneyType, nullable=True)
    capital_return: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Plan(id={self.id}, name={self.name!r}, days={self.duration_days})>"
