"""
Referral commission model.

Ledger of commissions credited to referrers.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base
from app.models.enums import CommissionStatus
from app.models.types import MoneyType, RatePercentType


class ReferralCommission(Base):
    """Referral commission ledger entry."""

    __tablename__ = "referral_commissions"
    __table_args__ = (
        CheckConstraint('level >= 1 AND level <= 3', name='check_commission_level_range'),
        CheckConstraint('amount >= 0', name='check_commission_amount_non_negative'),
        Index('idx_commission_referrer_created', 'referrer_id', 'created_at'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    referrer_id: Mapped[int] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    referred_user_id: Mapped[int] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
    )

    level: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-3
    percent: Mapped[Decimal] = mapped_column(RatePercentType, nullable=False)
    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    source: Mapped[str] = mapped_column(String(20), nullable=False)  # deposit, earnings
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=CommissionStatus.COMPLETED.value
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<ReferralCommission(id={self.id}, referrer_id={self.referrer_id}, "
            f"level={self.level}, amount={self.amount})>"
        )
