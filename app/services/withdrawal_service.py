"""
Withdrawal service.

Validates withdrawal requests, debits the balance and records the request
for admin review; rejected requests can be refunded.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import WithdrawalStatus
from app.models.withdrawal import Withdrawal
from app.repositories.user_repository import UserRepository
from app.repositories.withdrawal_repository import WithdrawalRepository
from app.services.base_service import BaseService, log_operation, transaction
from app.services.platform_settings_service import PlatformSettingsService
from app.utils.datetime_utils import utc_now
from smartgrow.core.exceptions import RequestRejected
from smartgrow.core.models import WithdrawalQuote
from smartgrow.core.withdrawal import WithdrawalCalculator


class WithdrawalService(BaseService):
    """Service for withdrawal requests."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize withdrawal service.

        Args:
            session: Database session
        """
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.withdrawal_repo = WithdrawalRepository(session)
        self.settings_service = PlatformSettingsService(session)
        self.calculator = WithdrawalCalculator()

    async def get_quote(self, user_id: int, amount: Decimal) -> WithdrawalQuote:
        """
        Preview fee and payout for a withdrawal without creating it.

        Raises:
            RequestRejected: If the amount violates a limit
            LookupError: If the user does not exist
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise LookupError(f"User {user_id} not found")

        platform_settings = await self.settings_service.get_settings()
        return self.calculator.quote(amount, user.balance, platform_settings)

    @log_operation
    @transaction
    async def request_withdrawal(
        self,
        user_id: int,
        amount: Decimal,
        now: datetime | None = None,
    ) -> Withdrawal:
        """
        Create a pending withdrawal and debit the full amount.

        Args:
            user_id: User ID
            amount: Requested amount
            now: Request time (defaults to UTC now)

        Returns:
            Created withdrawal

        Raises:
            RequestRejected: If the amount violates a limit or the balance
                is short
            LookupError: If the user does not exist
        """
        user = await self.user_repo.get_for_update(user_id)
        if user is None:
            raise LookupError(f"User {user_id} not found")

        platform_settings = await self.settings_service.get_settings()
        quote = self.calculator.quote(amount, user.balance, platform_settings)

        if not await self.user_repo.decrement_balance(user_id, quote.total_deducted):
            raise RequestRejected("Insufficient balance", "insufficient_balance")

        withdrawal = await self.withdrawal_repo.create(
            user_id=user_id,
            amount=quote.amount,
            fee_percent=quote.fee_percent,
            fee_amount=quote.fee_amount,
            total_deducted=quote.total_deducted,
            status=WithdrawalStatus.PENDING.value,
            created_at=now or utc_now(),
        )

        self.logger.info(
            "Withdrawal requested",
            extra={
                "user_id": user_id,
                "withdrawal_id": withdrawal.id,
                "amount": str(quote.amount),
                "fee": str(quote.fee_amount),
            },
        )
        return withdrawal

    async def list_pending(self) -> list[Withdrawal]:
        """Withdrawals awaiting admin review, oldest first."""
        return await self.withdrawal_repo.get_pending()

    @log_operation
    @transaction
    async def approve_withdrawal(
        self,
        withdrawal_id: int,
        admin_id: int | None = None,
        now: datetime | None = None,
    ) -> Withdrawal:
        """
        Approve a pending withdrawal for payout.

        The balance was debited when the request was made, so only the
        status changes.

        Raises:
            RequestRejected: If the withdrawal is missing or already reviewed
        """
        withdrawal = await self.withdrawal_repo.get_for_update(
            withdrawal_id, status=WithdrawalStatus.PENDING.value
        )
        if withdrawal is None:
            raise RequestRejected(
                f"Withdrawal {withdrawal_id} not found or already processed",
                "not_pending",
            )

        withdrawal.status = WithdrawalStatus.APPROVED.value
        withdrawal.processed_by = admin_id
        withdrawal.processed_at = now or utc_now()
        await self.session.flush()

        self.logger.info(
            "Withdrawal approved",
            extra={
                "withdrawal_id": withdrawal_id,
                "user_id": withdrawal.user_id,
                "amount": str(withdrawal.amount),
                "admin_id": admin_id,
            },
        )
        return withdrawal

    @log_operation
    @transaction
    async def reject_withdrawal(
        self,
        withdrawal_id: int,
        reason: str,
        refund: bool = True,
        admin_id: int | None = None,
        now: datetime | None = None,
    ) -> Withdrawal:
        """
        Reject a pending withdrawal, returning the debited amount by default.

        The status change and the refund commit together; if the refund
        fails the withdrawal stays pending.

        Args:
            withdrawal_id: Withdrawal ID
            reason: Reason shown to the user
            refund: Credit ``total_deducted`` back to the balance
            admin_id: Reviewing admin
            now: Review time (defaults to UTC now)

        Returns:
            Rejected withdrawal

        Raises:
            RequestRejected: If no reason is given, or the withdrawal is
                missing or already reviewed
            LookupError: If the user no longer exists
        """
        if not reason or not reason.strip():
            raise RequestRejected("Rejection reason is required", "missing_reason")

        withdrawal = await self.withdrawal_repo.get_for_update(
            withdrawal_id, status=WithdrawalStatus.PENDING.value
        )
        if withdrawal is None:
            raise RequestRejected(
                f"Withdrawal {withdrawal_id} not found or already processed",
                "not_pending",
            )

        withdrawal.status = WithdrawalStatus.REJECTED.value
        withdrawal.rejection_reason = reason.strip()
        withdrawal.processed_by = admin_id
        withdrawal.processed_at = now or utc_now()

        if refund:
            user = await self.user_repo.increment_balance(
                withdrawal.user_id, withdrawal.total_deducted, count_as_earnings=False
            )
            if user is None:
                raise LookupError(f"User {withdrawal.user_id} not found")
        else:
            await self.session.flush()

        self.logger.info(
            "Withdrawal rejected",
            extra={
                "withdrawal_id": withdrawal_id,
                "user_id": withdrawal.user_id,
                "refunded": str(withdrawal.total_deducted) if refund else "0",
                "admin_id": admin_id,
            },
        )
        return withdrawal
