"""Withdrawal fee and limit calculations."""

from decimal import Decimal

from smartgrow.core.exceptions import RequestRejected
from smartgrow.core.models import PlatformSettings, WithdrawalQuote


class WithdrawalCalculator:
    """Pure calculator for withdrawal requests."""

    def calculate_fee(self, amount: Decimal, fee_percent: Decimal) -> Decimal:
        """
        Fee withheld from a withdrawal.

        Formula: amount * fee_percent / 100
        """
        if amount <= 0 or fee_percent <= 0:
            return Decimal("0")
        return amount * fee_percent / 100

    def quote(
        self,
        amount: Decimal,
        balance: Decimal,
        settings: PlatformSettings,
    ) -> WithdrawalQuote:
        """
        Validate a withdrawal and break down its fee.

        The full requested amount is deducted from the balance; the fee is
        withheld from the payout.

        Args:
            amount: Requested withdrawal amount
            balance: Current user balance
            settings: Platform settings with minimum and fee percent

        Returns:
            WithdrawalQuote

        Raises:
            RequestRejected: If the amount is not positive, below the
                minimum or above the balance
        """
        if amount <= 0:
            raise RequestRejected("Withdrawal amount must be positive", "invalid_amount")

        if amount < settings.min_withdrawal_amount:
            raise RequestRejected(
                f"Minimum withdrawal amount is {settings.min_withdrawal_amount}",
                "below_minimum",
            )

        if amount > balance:
            raise RequestRejected("Insufficient balance", "insufficient_balance")

        fee = self.calculate_fee(amount, settings.withdrawal_fee_percent)
        return WithdrawalQuote(
            amount=amount,
            fee_percent=settings.withdrawal_fee_percent,
            fee_amount=fee,
            amount_after_fee=amount - fee,
            total_deducted=amount,
        )
