"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from app.models.admin_setting import AdminSettings
from app.models.base import Base
from app.models.deposit import Deposit
from app.models.enums import (
    CommissionStatus,
    DepositStatus,
    DepositType,
    InvestmentStatus,
    WithdrawalStatus,
)
from app.models.investment import Investment
from app.models.plan import Plan
from app.models.referral_commission import ReferralCommission
from app.models.user import UserProfile
from app.models.withdrawal import Withdrawal

__all__ = [
    "Base",
    "UserProfile",
    "Plan",
    "Investment",
    "ReferralCommission",
    "Deposit",
    "Withdrawal",
    "AdminSettings",
    "InvestmentStatus",
    "CommissionStatus",
    "DepositStatus",
    "DepositType",
    "WithdrawalStatus",
]
