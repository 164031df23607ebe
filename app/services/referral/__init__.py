"""
Referral services package.

Contains modular services for referral processing:
- commission_processor: Credits commissions to the upline
- statistics: Provides the referral dashboard
"""

from app.services.referral.commission_processor import ReferralCommissionProcessor
from app.services.referral.statistics import ReferralStatisticsManager


__all__ = [
    "ReferralCommissionProcessor",
    "ReferralStatisticsManager",
]
