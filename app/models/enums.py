"""Status enums stored in string columns."""

from enum import StrEnum

from smartgrow.core.models import DepositType, InvestmentStatus


class CommissionStatus(StrEnum):
    """Referral commission ledger status."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class DepositStatus(StrEnum):
    """Deposit review status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class WithdrawalStatus(StrEnum):
    """Withdrawal request status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


__all__ = [
    "CommissionStatus",
    "DepositStatus",
    "DepositType",
    "InvestmentStatus",
    "WithdrawalStatus",
]
