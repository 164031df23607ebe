"""
Tests for deposit validation.

Tests cover:
- Bank and EasyPaisa minimums and sender details
- USDT minimums, chain and transaction hash
- Malformed payloads
"""

from decimal import Decimal

import pytest

from smartgrow import DepositRequest, DepositType, InvalidRecord, RequestRejected


def bank_deposit(**overrides) -> DepositRequest:
    data = {
        "deposit_type": "bank",
        "amount": Decimal("1000"),
        "sender_name": "Ali Khan",
        "sender_account_last4": "4321",
    }
    data.update(overrides)
    return DepositRequest.parse(data)


def usdt_deposit(**overrides) -> DepositRequest:
    data = {
        "deposit_type": "usdt",
        "amount": Decimal("5600"),
        "amount_usdt": Decimal("20"),
        "chain_name": "TRC20",
        "transaction_hash": "0xabc123",
    }
    data.update(overrides)
    return DepositRequest.parse(data)


class TestLocalDeposits:
    """Test bank and EasyPaisa deposits."""

    def test_valid_bank_deposit(self, deposit_validator, platform_settings):
        """A deposit above the minimum with sender details passes."""
        request = bank_deposit()

        assert deposit_validator.validate(request, platform_settings) is request

    def test_minimum_is_inclusive(self, deposit_validator, platform_settings):
        """Exactly the minimum deposit is accepted."""
        request = bank_deposit(deposit_type="easypaisa", amount=Decimal("500"))

        validated = deposit_validator.validate(request, platform_settings)

        assert validated.deposit_type == DepositType.EASYPAISA

    def test_below_minimum(self, deposit_validator, platform_settings):
        """Deposits under the PKR minimum are rejected."""
        with pytest.raises(RequestRejected) as exc_info:
            deposit_validator.validate(bank_deposit(amount=Decimal("499")), platform_settings)

        assert exc_info.value.code == "below_minimum"

    def test_missing_sender(self, deposit_validator, platform_settings):
        """Sender name and account digits are required."""
        with pytest.raises(RequestRejected) as exc_info:
            deposit_validator.validate(bank_deposit(sender_name="  "), platform_settings)

        assert exc_info.value.code == "missing_details"

    def test_non_positive_amount(self, deposit_validator, platform_settings):
        """Zero deposits are rejected before any other check."""
        with pytest.raises(RequestRejected) as exc_info:
            deposit_validator.validate(bank_deposit(amount=Decimal("0")), platform_settings)

        assert exc_info.value.code == "invalid_amount"


class TestUsdtDeposits:
    """Test USDT deposits."""

    def test_valid_usdt_deposit(self, deposit_validator, platform_settings):
        """USDT deposits need no sender details."""
        request = usdt_deposit()

        assert deposit_validator.validate(request, platform_settings) is request

    def test_usdt_minimum_in_usdt(self, deposit_validator, platform_settings):
        """The USDT minimum applies to the USDT amount, not the PKR amount."""
        request = usdt_deposit(amount_usdt=Decimal("9.99"))

        with pytest.raises(RequestRejected) as exc_info:
            deposit_validator.validate(request, platform_settings)

        assert exc_info.value.code == "below_minimum"

    def test_usdt_amount_required(self, deposit_validator, platform_settings):
        """A USDT deposit without its USDT amount is rejected."""
        with pytest.raises(RequestRejected):
            deposit_validator.validate(usdt_deposit(amount_usdt=None), platform_settings)

    def test_missing_hash(self, deposit_validator, platform_settings):
        """The transaction hash is required."""
        with pytest.raises(RequestRejected) as exc_info:
            deposit_validator.validate(usdt_deposit(transaction_hash=None), platform_settings)

        assert exc_info.value.code == "missing_details"


class TestDepositRequest:
    """Test deposit payload parsing."""

    def test_unknown_type(self):
        """Unknown payment channels are invalid records."""
        with pytest.raises(InvalidRecord):
            bank_deposit(deposit_type="paypal")

    def test_account_digits_length(self):
        """Only the last four account digits are stored."""
        with pytest.raises(InvalidRecord):
            bank_deposit(sender_account_last4="123456")
