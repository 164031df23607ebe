"""
Deposit service.

Users submit deposits made outside the platform; an admin approves or
rejects each one. Approval credits the balance and pays the direct
referrer's deposit commission in the same transaction.
"""

import math
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.deposit import Deposit
from app.models.enums import DepositStatus
from app.repositories.deposit_repository import DepositRepository
from app.repositories.user_repository import UserRepository
from app.services.base_service import BaseService, log_operation, transaction
from app.services.platform_settings_service import PlatformSettingsService
from app.services.referral.commission_processor import ReferralCommissionProcessor
from app.utils.datetime_utils import utc_now
from smartgrow.core.deposit import DepositValidator
from smartgrow.core.exceptions import RequestRejected
from smartgrow.core.models import DepositRequest, DepositType


class DepositService(BaseService):
    """Service for deposit submission and review."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize deposit service.

        Args:
            session: Database session
        """
        super().__init__(session)
        self.deposit_repo = DepositRepository(session)
        self.user_repo = UserRepository(session)
        self.settings_service = PlatformSettingsService(session)
        self.commission_processor = ReferralCommissionProcessor(session)
        self.validator = DepositValidator()

    @log_operation
    @transaction
    async def submit_deposit(
        self,
        user_id: int,
        request: DepositRequest | dict[str, Any],
        now: datetime | None = None,
    ) -> Deposit:
        """
        Record a pending deposit for admin review.

        The balance is not touched until the deposit is approved.

        Args:
            user_id: Depositing user ID
            request: Deposit details (model or submitted payload)
            now: Submission time (defaults to UTC now)

        Returns:
            Created deposit

        Raises:
            InvalidRecord: If the payload is malformed
            RequestRejected: If an amount or a required detail is invalid
            LookupError: If the user does not exist
        """
        request = DepositRequest.parse(request)

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise LookupError(f"User {user_id} not found")

        platform_settings = await self.settings_service.get_settings()
        self.validator.validate(request, platform_settings)

        data: dict[str, Any] = {
            "user_id": user_id,
            "deposit_type": request.deposit_type.value,
            "amount": request.amount,
            "proof_url": request.proof_url,
            "status": DepositStatus.PENDING.value,
            "created_at": now or utc_now(),
        }
        if request.deposit_type == DepositType.USDT:
            data.update(
                amount_usdt=request.amount_usdt,
                usdt_rate=platform_settings.usdt_to_pkr_rate,
                chain_name=request.chain_name,
                transaction_hash=request.transaction_hash,
            )
        else:
            data.update(
                sender_name=request.sender_name,
                sender_account_last4=request.sender_account_last4,
            )

        deposit = await self.deposit_repo.create(**data)

        self.logger.info(
            "Deposit submitted",
            extra={
                "user_id": user_id,
                "deposit_id": deposit.id,
                "deposit_type": deposit.deposit_type,
                "amount": str(deposit.amount),
            },
        )
        return deposit

    async def list_deposits(
        self, user_id: int, page: int = 1, limit: int = 10
    ) -> dict[str, Any]:
        """
        One page of a user's deposits with pagination details.

        Args:
            user_id: Owner user ID
            page: 1-based page number
            limit: Page size

        Returns:
            Dict with ``deposits`` and ``pagination``
        """
        page = max(page, 1)
        limit = max(limit, 1)
        deposits = await self.deposit_repo.get_user_deposits(
            user_id, limit=limit, offset=(page - 1) * limit
        )
        total = await self.deposit_repo.count_user_deposits(user_id)

        return {
            "deposits": deposits,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": math.ceil(total / limit),
            },
        }

    @log_operation
    @transaction
    async def approve_deposit(
        self,
        deposit_id: int,
        admin_id: int | None = None,
        admin_notes: str | None = None,
        now: datetime | None = None,
    ) -> Deposit:
        """
        Approve a pending deposit.

        Locks the deposit, credits the depositor's balance and pays the
        level 1 deposit commission. Any failure rolls all of it back, so a
        deposit is never approved without its credit.

        Args:
            deposit_id: Deposit ID
            admin_id: Reviewing admin
            admin_notes: Optional note stored on the deposit
            now: Review time (defaults to UTC now)

        Returns:
            Approved deposit

        Raises:
            RequestRejected: If the deposit is missing or already reviewed
            LookupError: If the depositor no longer exists
        """
        now = now or utc_now()

        deposit = await self.deposit_repo.get_for_update(
            deposit_id, status=DepositStatus.PENDING.value
        )
        if deposit is None:
            raise RequestRejected(
                f"Deposit {deposit_id} not found or already processed", "not_pending"
            )

        deposit.status = DepositStatus.APPROVED.value
        deposit.processed_by = admin_id
        deposit.processed_at = now
        deposit.admin_notes = admin_notes

        user = await self.user_repo.increment_balance(
            deposit.user_id, deposit.amount, count_as_earnings=False
        )
        if user is None:
            raise LookupError(f"User {deposit.user_id} not found")

        payouts = await self.commission_processor.process_deposit_commission(
            deposit.user_id, deposit.amount, now
        )

        self.logger.info(
            "Deposit approved",
            extra={
                "deposit_id": deposit_id,
                "user_id": deposit.user_id,
                "amount": str(deposit.amount),
                "admin_id": admin_id,
                "commissions": len(payouts),
            },
        )
        return deposit

    @log_operation
    @transaction
    async def reject_deposit(
        self,
        deposit_id: int,
        reason: str,
        admin_id: int | None = None,
        admin_notes: str | None = None,
        now: datetime | None = None,
    ) -> Deposit:
        """
        Reject a pending deposit. The balance is not touched.

        Raises:
            RequestRejected: If no reason is given, or the deposit is missing
                or already reviewed
        """
        if not reason or not reason.strip():
            raise RequestRejected("Rejection reason is required", "missing_reason")

        deposit = await self.deposit_repo.get_for_update(
            deposit_id, status=DepositStatus.PENDING.value
        )
        if deposit is None:
            raise RequestRejected(
                f"Deposit {deposit_id} not found or already processed", "not_pending"
            )

        deposit.status = DepositStatus.REJECTED.value
        deposit.rejection_reason = reason.strip()
        deposit.processed_by = admin_id
        deposit.processed_at = now or utc_now()
        deposit.admin_notes = admin_notes
        await self.session.flush()

        self.logger.info(
            "Deposit rejected",
            extra={
                "deposit_id": deposit_id,
                "user_id": deposit.user_id,
                "admin_id": admin_id,
                "reason": deposit.rejection_reason,
            },
        )
        return deposit
