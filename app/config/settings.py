"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from smartgrow.constants import (
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
from smartgrow.core.models import PlatformSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # Database
    database_url: str
    database_echo: bool = False
    database_pool_size: int = Field(default=5, ge=1)

    # Logging
    log_level: str = "INFO"
    log_file: str = "logs/smartgrow.log"
    log_rotation: str = "1 day"
    log_retention: str = "7 days"

    # Platform defaults, used when the admin_settings row is missing
    default_referral_l1_percent: Decimal = Field(
        default=DEFAULT_REFERRAL_L1_PERCENT, ge=0, le=100
    )
    default_referral_l1_deposit_percent: Decimal = Field(
        default=DEFAULT_REFERRAL_L1_DEPOSIT_PERCENT, ge=0, le=100
    )
    default_referral_l2_percent: Decimal = Field(
        default=DEFAULT_REFERRAL_L2_PERCENT, ge=0, le=100
    )
    default_referral_l3_percent: Decimal = Field(
        default=DEFAULT_REFERRAL_L3_PERCENT, ge=0, le=100
    )
    default_min_deposit_amount: Decimal = Field(
        default=DEFAULT_MIN_DEPOSIT_AMOUNT, ge=0
    )
    default_min_usdt_deposit: Decimal = Field(
        default=DEFAULT_MIN_USDT_DEPOSIT, ge=0
    )
    default_usdt_to_pkr_rate: Decimal = Field(
        default=DEFAULT_USDT_TO_PKR_RATE, gt=0
    )
    default_min_withdrawal_amount: Decimal = Field(
        default=DEFAULT_MIN_WITHDRAWAL_AMOUNT, ge=0
    )
    default_withdrawal_fee_percent: Decimal = Field(
        default=DEFAULT_WITHDRAWAL_FEE_PERCENT, ge=0, le=100
    )
    default_max_investment_amount: Decimal = Field(
        default=DEFAULT_MAX_INVESTMENT_AMOUNT, gt=0
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator('database_url')
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL."""
        if not v.startswith(('postgresql://', 'postgresql+asyncpg://')):
            raise ValueError(
                'DATABASE_URL must start with postgresql:// or postgresql+asyncpg://'
            )
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate loguru level name."""
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f'Unknown LOG_LEVEL: {v}')
        return level

    @property
    def async_database_url(self) -> str:
        """Database URL with the asyncpg driver."""
        if self.database_url.startswith('postgresql://'):
            return self.database_url.replace('postgresql://', 'postgresql+asyncpg://', 1)
        return self.database_url

    def default_platform_settings(self) -> PlatformSettings:
        """Platform settings built from the environment defaults."""
        return PlatformSettings(
            referral_l1_percent=self.default_referral_l1_percent,
            referral_l1_deposit_percent=self.default_referral_l1_deposit_percent,
            referral_l2_percent=self.default_referral_l2_percent,
            referral_l3_percent=self.default_referral_l3_percent,
            min_deposit_amount=self.default_min_deposit_amount,
            min_usdt_deposit=self.default_min_usdt_deposit,
            usdt_to_pkr_rate=self.default_usdt_to_pkr_rate,
            min_withdrawal_amount=self.default_min_withdrawal_amount,
            withdrawal_fee_percent=self.default_withdrawal_fee_percent,
            max_investment_amount=self.default_max_investment_amount,
        )


# Global settings instance
settings = Settings()
