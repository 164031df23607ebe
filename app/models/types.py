"""
Standard type definitions for database models.

Provides consistent types for monetary and percentage fields across all models.
"""

from sqlalchemy import DECIMAL

# Standard money type for amounts, balances, profits and commissions
# Precision: 18 digits total, 8 after decimal point
# Range: up to 9,999,999,999.99999999
MoneyType = DECIMAL(18, 8)

# Precise percentage type for plan profit and commission rates
# Precision: 10 digits total, 4 after decimal point
# Suitable for: 30.0000% plan profit, 2.5000% commission
RatePercentType = DECIMAL(10, 4)
