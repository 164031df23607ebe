"""
Default constants for the SmartGrow calculation core.

Values mirror the defaults shown by the admin settings screen; the
application layer overrides them with the stored admin settings.
"""

from datetime import timedelta
from decimal import Decimal

# Collection windows are rolling 24-hour periods, not calendar days
COLLECTION_PERIOD = timedelta(hours=24)

# Referral tree depth paid by the commission program
REFERRAL_DEPTH = 3

# Commission ledger status counted towards earnings
COMMISSION_STATUS_COMPLETED = "completed"

# Commission sources
COMMISSION_SOURCE_DEPOSIT = "deposit"
COMMISSION_SOURCE_EARNINGS = "earnings"

DEFAULT_REFERRAL_L1_PERCENT = Decimal("5")
DEFAULT_REFERRAL_L1_DEPOSIT_PERCENT = Decimal("5")
DEFAULT_REFERRAL_L2_PERCENT = Decimal("3")
DEFAULT_REFERRAL_L3_PERCENT = Decimal("2")

DEFAULT_MIN_DEPOSIT_AMOUNT = Decimal("500")
DEFAULT_MIN_USDT_DEPOSIT = Decimal("10")
DEFAULT_USDT_TO_PKR_RATE = Decimal("280")

DEFAULT_MIN_WITHDRAWAL_AMOUNT = Decimal("100")
DEFAULT_WITHDRAWAL_FEE_PERCENT = Decimal("3")
DEFAULT_MAX_INVESTMENT_AMOUNT = Decimal("50000")

DEFAULT_CURRENCY = "PKR"
