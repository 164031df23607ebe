"""Deposit request validation."""

from smartgrow.core.exceptions import RequestRejected
from smartgrow.core.models import DepositRequest, DepositType, PlatformSettings


class DepositValidator:
    """Pure checks applied to a deposit before it is queued for review."""

    def validate(
        self, request: DepositRequest, settings: PlatformSettings
    ) -> DepositRequest:
        """
        Check a deposit against the channel's required details and minimum.

        USDT deposits are checked against ``min_usdt_deposit`` in USDT and
        need the chain and transaction hash. Bank and EasyPaisa deposits are
        checked against ``min_deposit_amount`` in PKR and need the sender's
        name and account digits.

        Args:
            request: Submitted deposit
            settings: Platform settings with deposit minimums

        Returns:
            The validated request

        Raises:
            RequestRejected: If an amount or a required detail is invalid
        """
        if request.amount <= 0:
            raise RequestRejected("Deposit amount must be positive", "invalid_amount")

        if request.deposit_type == DepositType.USDT:
            if request.amount_usdt is None or request.amount_usdt < settings.min_usdt_deposit:
                raise RequestRejected(
                    f"Minimum USDT deposit is {settings.min_usdt_deposit} USDT",
                    "below_minimum",
                )
            if not request.chain_name or not request.transaction_hash:
                raise RequestRejected(
                    "Chain name and transaction hash are required for USDT deposits",
                    "missing_details",
                )
            return request

        if request.amount < settings.min_deposit_amount:
            raise RequestRejected(
                f"Minimum deposit amount is {settings.min_deposit_amount}",
                "below_minimum",
            )
        if not request.sender_name or not request.sender_account_last4:
            raise RequestRejected(
                "Sender name and account last 4 digits are required",
                "missing_details",
            )
        return request
