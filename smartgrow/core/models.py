"""Pydantic models for the calculation core."""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any, Self

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from smartgrow.constants import (
    COMMISSION_STATUS_COMPLETED,
    DEFAULT_MAX_INVESTMENT_AMOUNT,
    DEFAULT_MIN_DEPOSIT_AMOUNT,
    DEFAULT_MIN_USDT_DEPOSIT,
    DEFAULT_MIN_WITHDRAWAL_AMOUNT,
    DEFAULT_REFERRAL_L1_DEPOSIT_PERCENT,
    DEFAULT_REFERRAL_L1_PERCENT,
    DEFAULT_REFERRAL_L2_PERCENT,
    DEFAULT_REFERRAL_L3_PERCENT,
    DEFAULT_USDT_TO_PKR_RATE,
    DEFAULT_WITHDRAWAL_FEE_PERCENT,
)
from smartgrow.core.exceptions import InvalidRecord
from smartgrow.types import (
    CollectionRequestDict,
    EarningsSummaryDict,
    Identifier,
    ReferralCountsDict,
)
from smartgrow.utils.dates import ensure_utc


class InvestmentStatus(StrEnum):
    """Lifecycle of an investment."""

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DepositType(StrEnum):
    """Payment channel of a deposit."""

    BANK = "bank"
    EASYPAISA = "easypaisa"
    USDT = "usdt"


class Snapshot(BaseModel):
    """
    Base class for records read from the data store.

    Accepts mappings (API rows) and ORM objects alike. Validation errors
    are reported as InvalidRecord.
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        from_attributes=True,
        populate_by_name=True,
    )

    @classmethod
    def parse(cls, data: Any) -> Self:
        """
        Build a snapshot from a row, an ORM object or an existing instance.

        Args:
            data: Mapping, ORM object or instance of the model

        Returns:
            Validated model instance

        Raises:
            InvalidRecord: If required fields are missing or out of range
        """
        if isinstance(data, cls):
            return data
        if data is None:
            raise InvalidRecord("record is missing", cls.__name__)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidRecord(problems, cls.__name__) from e

    @field_validator("*", mode="after")
    @classmethod
    def _normalize_timestamps(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return ensure_utc(value)
        return value


class Plan(Snapshot):
    """Fixed-term investment product."""

    id: Identifier | None = None
    name: str | None = None
    duration_days: int = Field(..., gt=0, description="Plan length in days")
    profit_percent: Decimal = Field(
        ..., ge=0, description="Total profit over the full duration, in percent"
    )
    min_investment: Decimal | None = Field(default=None, ge=0)
    max_investment: Decimal | None = Field(default=None, ge=0)
    capital_return: bool = False


class Investment(Snapshot):
    """A user's purchase of a plan."""

    id: Identifier
    user_id: Identifier | None = None
    start_date: datetime
    end_date: datetime | None = None
    last_income_collection_date: datetime | None = None
    total_days_collected: int = Field(..., ge=0)
    status: InvestmentStatus
    plan: Plan = Field(..., validation_alias=AliasChoices("plan", "plans"))
    amount_invested: Decimal = Field(..., gt=0)

    @model_validator(mode="after")
    def _check_collected_within_duration(self) -> Self:
        if self.total_days_collected > self.plan.duration_days:
            raise ValueError(
                f"total_days_collected ({self.total_days_collected}) exceeds "
                f"plan duration ({self.plan.duration_days})"
            )
        return self

    @property
    def remaining_days(self) -> int:
        return self.plan.duration_days - self.total_days_collected


class CommissionLedgerEntry(Snapshot):
    """Commission credited to a referrer."""

    id: Identifier | None = None
    referrer_id: Identifier
    referred_user_id: Identifier | None = None
    level: int = Field(..., ge=1, le=3)
    amount: Decimal = Field(..., ge=0)
    created_at: datetime
    status: str

    @property
    def is_completed(self) -> bool:
        return self.status == COMMISSION_STATUS_COMPLETED


class ReferralEdge(Snapshot):
    """Directed edge from a referred user to the user who referred them."""

    user_id: Identifier = Field(..., validation_alias=AliasChoices("user_id", "id"))
    referred_by: Identifier | None = None
    created_at: datetime | None = None


class PlatformSettings(Snapshot):
    """Admin-managed settings read by the calculators."""

    referral_l1_percent: Decimal = Field(default=DEFAULT_REFERRAL_L1_PERCENT, ge=0)
    referral_l1_deposit_percent: Decimal = Field(
        default=DEFAULT_REFERRAL_L1_DEPOSIT_PERCENT, ge=0
    )
    referral_l2_percent: Decimal = Field(default=DEFAULT_REFERRAL_L2_PERCENT, ge=0)
    referral_l3_percent: Decimal = Field(default=DEFAULT_REFERRAL_L3_PERCENT, ge=0)
    min_deposit_amount: Decimal = Field(default=DEFAULT_MIN_DEPOSIT_AMOUNT, ge=0)
    min_usdt_deposit: Decimal = Field(default=DEFAULT_MIN_USDT_DEPOSIT, ge=0)
    usdt_to_pkr_rate: Decimal = Field(default=DEFAULT_USDT_TO_PKR_RATE, gt=0)
    min_withdrawal_amount: Decimal = Field(default=DEFAULT_MIN_WITHDRAWAL_AMOUNT, ge=0)
    withdrawal_fee_percent: Decimal = Field(
        default=DEFAULT_WITHDRAWAL_FEE_PERCENT, ge=0, le=100
    )
    max_investment_amount: Decimal = Field(default=DEFAULT_MAX_INVESTMENT_AMOUNT, ge=0)

    def earnings_percent(self, level: int) -> Decimal:
        """
        Commission percent paid on earnings at a referral level.

        Raises:
            InvalidRecord: If level is outside 1-3
        """
        rates = {
            1: self.referral_l1_percent,
            2: self.referral_l2_percent,
            3: self.referral_l3_percent,
        }
        if level not in rates:
            raise InvalidRecord(f"level must be 1-3, got {level}", "commission")
        return rates[level]


class CollectionRequest(BaseModel):
    """Prepared collection handed to the mutation endpoint."""

    model_config = ConfigDict(frozen=True)

    investment_id: Identifier
    days_to_collect: int = Field(..., ge=1)
    profit_per_day: Decimal = Field(..., ge=0)

    @property
    def expected_profit(self) -> Decimal:
        return self.profit_per_day * self.days_to_collect

    def as_dict(self) -> CollectionRequestDict:
        return {
            "investment_id": self.investment_id,
            "days_to_collect": self.days_to_collect,
            "profit_per_day": self.profit_per_day,
        }


class CollectionResponse(BaseModel):
    """Authoritative result reported by the mutation endpoint."""

    model_config = ConfigDict(frozen=True)

    success: bool
    profit_earned: Decimal | None = None
    days_collected: int | None = None
    is_final_collection: bool = False
    error: str | None = None


class ReferralCounts(BaseModel):
    """Referred users per level."""

    level1: int = 0
    level2: int = 0
    level3: int = 0

    @property
    def total(self) -> int:
        return self.level1 + self.level2 + self.level3

    def as_dict(self) -> ReferralCountsDict:
        return {
            "level1_count": self.level1,
            "level2_count": self.level2,
            "level3_count": self.level3,
        }


class EarningsSummary(BaseModel):
    """Commission earnings broken down by level and by UTC day."""

    total: Decimal = Decimal("0")
    today: Decimal = Decimal("0")
    yesterday: Decimal = Decimal("0")
    level1: Decimal = Decimal("0")
    level2: Decimal = Decimal("0")
    level3: Decimal = Decimal("0")

    @property
    def by_level(self) -> dict[int, Decimal]:
        return {1: self.level1, 2: self.level2, 3: self.level3}

    def as_dict(self) -> EarningsSummaryDict:
        return {
            "total_earnings": self.total,
            "today_earnings": self.today,
            "yesterday_earnings": self.yesterday,
            "level1_earnings": self.level1,
            "level2_earnings": self.level2,
            "level3_earnings": self.level3,
        }


class CommissionPayout(BaseModel):
    """A commission to be credited to one referrer."""

    model_config = ConfigDict(frozen=True)

    referrer_id: Identifier
    referred_user_id: Identifier
    level: int = Field(..., ge=1, le=3)
    percent: Decimal = Field(..., ge=0)
    amount: Decimal = Field(..., ge=0)
    source: str


class InvestmentStats(BaseModel):
    """Portfolio totals shown on the investments dashboard."""

    total_invested: Decimal = Decimal("0")
    active_investments: int = 0
    completed_investments: int = 0
    total_earnings: Decimal = Decimal("0")


class DepositRequest(BaseModel):
    """
    Deposit submitted by a user for admin review.

    ``amount`` is always in PKR. USDT deposits also carry the USDT amount,
    the chain and the transaction hash; bank and EasyPaisa deposits carry
    the sender's name and the last four digits of their account.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    deposit_type: DepositType
    amount: Decimal
    sender_name: str | None = None
    sender_account_last4: str | None = Field(default=None, max_length=4)
    amount_usdt: Decimal | None = None
    chain_name: str | None = None
    transaction_hash: str | None = None
    proof_url: str | None = None

    @classmethod
    def parse(cls, data: Any) -> Self:
        """Validate a submitted payload, raising InvalidRecord on bad input."""
        if isinstance(data, cls):
            return data
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidRecord(str(e), cls.__name__) from e


class WithdrawalQuote(BaseModel):
    """Fee breakdown of a withdrawal request."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal
    fee_percent: Decimal
    fee_amount: Decimal
    amount_after_fee: Decimal
    total_deducted: Decimal
