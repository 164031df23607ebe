"""
Formatting utilities for amounts, percentages and dates.

Used by the presentation layer to render calculator results.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from smartgrow.constants import DEFAULT_CURRENCY
from smartgrow.utils.dates import ensure_utc


def format_currency(
    amount: Decimal | int | float,
    currency: str = DEFAULT_CURRENCY,
    decimals: int = 2,
) -> str:
    """
    Format an amount with thousands separators and a currency prefix.

    Rounds half up, the way amounts are shown to users.

    Args:
        amount: Amount to format
        currency: Currency code or symbol
        decimals: Digits after the decimal point

    Returns:
        Formatted string

    Example:
        >>> format_currency(Decimal("1234.5"))
        'PKR 1,234.50'
        >>> format_currency(Decimal("-20"), currency="$")
        '-$20.00'
    """
    quantum = Decimal(1).scaleb(-decimals)
    value = Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    formatted = f"{abs(value):,.{decimals}f}"

    if currency in ("$", "€", "₨"):
        return f"{sign}{currency}{formatted}"
    return f"{sign}{currency} {formatted}"


def format_percentage(
    value: Decimal | int | float,
    decimals: int = 2,
    show_sign: bool = False,
) -> str:
    """
    Format a value that is already a percentage.

    Example:
        >>> format_percentage(Decimal("12.5"))
        '12.50%'
        >>> format_percentage(5, decimals=0, show_sign=True)
        '+5%'
    """
    sign = "+" if show_sign and value > 0 else ""
    return f"{sign}{Decimal(str(value)):.{decimals}f}%"


def format_days(days: int) -> str:
    """
    Format a day count.

    Example:
        >>> format_days(1)
        '1 day'
        >>> format_days(30)
        '30 days'
    """
    if days <= 0:
        return "0 days"
    return "1 day" if days == 1 else f"{days} days"


def format_date(value: datetime | None) -> str:
    """
    Format a timestamp as a short UTC date, e.g. "Jan 2, 2024".

    Missing dates are shown as "-".
    """
    if value is None:
        return "-"
    value = ensure_utc(value)
    return f"{value:%b} {value.day}, {value.year}"


def format_collection_summary(
    profit_earned: Decimal,
    days_collected: int,
    is_final_collection: bool = False,
    currency: str = DEFAULT_CURRENCY,
) -> str:
    """
    Success message shown after a collection.

    Example:
        >>> format_collection_summary(Decimal("100"), 1)
        'Collected PKR 100.00 for 1 day'
    """
    message = (
        f"Collected {format_currency(profit_earned, currency)} "
        f"for {format_days(days_collected)}"
    )
    if is_final_collection:
        message += ". Investment completed!"
    return message
