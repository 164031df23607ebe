"""
Services.

Business logic layer.
"""

# Base Service Infrastructure
from app.services.base_service import (
    BaseService,
    log_operation,
    transaction,
)

# Core Services
from app.services.collection_endpoint import SqlCollectionEndpoint
from app.services.deposit_service import DepositService
from app.services.income_collection_service import IncomeCollectionService
from app.services.investment_service import InvestmentService
from app.services.platform_settings_service import PlatformSettingsService

# Referral Services
from app.services.referral import (
    ReferralCommissionProcessor,
    ReferralStatisticsManager,
)
from app.services.withdrawal_service import WithdrawalService

__all__ = [
    # Base
    "BaseService",
    "log_operation",
    "transaction",
    # Core
    "DepositService",
    "IncomeCollectionService",
    "InvestmentService",
    "PlatformSettingsService",
    "SqlCollectionEndpoint",
    "WithdrawalService",
    # Referral
    "ReferralCommissionProcessor",
    "ReferralStatisticsManager",
]
