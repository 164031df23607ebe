"""
Deposit model.

Funds sent by a user through a bank, EasyPaisa or USDT transfer. The
balance is credited only when an admin approves the deposit.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base
from app.models.enums import DepositStatus
from app.models.types import MoneyType


class Deposit(Base):
    """Deposit model - user deposits awaiting or past admin review."""

    __tablename__ = "deposits"
    __table_args__ = (
        CheckConstraint('amount > 0', name='check_deposit_amount_positive'),
        CheckConstraint(
            "deposit_type IN ('bank', 'easypaisa', 'usdt')",
            name='check_deposit_type'
        ),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name='check_deposit_status'
        ),
        Index('idx_deposit_user_created', 'user_id', 'created_at'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    deposit_type: Mapped[str] = mapped_column(String(20), nullable=False)
    # PKR amount credited on approval
    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DepositStatus.PENDING.value, index=True
    )
    proof_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Bank / EasyPaisa
    sender_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sender_account_last4: Mapped[str | None] = mapped_column(String(4), nullable=True)

    # USDT
    amount_usdt: Mapped[Decimal | None] = mapped_column(MoneyType, nullable=True)
    usdt_rate: Mapped[Decimal | None] = mapped_column(MoneyType, nullable=True)
    chain_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    transaction_hash: Mapped[str | None] = mapped_column(
        String(255), nullable=True, unique=True
    )

    # Review
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    processed_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<Deposit(id={self.id}, user_id={self.user_id}, "
            f"type={self.deposit_type}, amount={self.amount}, status={self.status})>"
        )
