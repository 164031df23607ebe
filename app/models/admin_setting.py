"""
Admin settings model.

Single row holding the commission rates and limits edited in the admin UI.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base
from app.models.types import MoneyType, RatePercentType


class AdminSettings(Base):
    """Platform-wide settings."""

    __tablename__ = "admin_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Referral commission rates, percent
    referral_l1_percent: Mapped[Decimal] = mapped_column(RatePercentType, nullable=False)
    referral_l1_deposit_percent: Mapped[Decimal] = mapped_column(
        RatePercentType, nullable=False
    )
    referral_l2_percent: Mapped[Decimal] = mapped_column(RatePercentType, nullable=False)
    referral_l3_percent: Mapped[Decimal] = mapped_column(RatePercentType, nullable=False)

    # Limits
    min_deposit_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    min_usdt_deposit: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    usdt_to_pkr_rate: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    min_withdrawal_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    withdrawal_fee_percent: Mapped[Decimal] = mapped_column(RatePercentType, nullable=False)
    max_investment_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )
