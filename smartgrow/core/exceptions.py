"""
Exceptions raised by the calculation core.

The core never guesses: malformed snapshots and impossible requests are
reported to the caller instead of being coerced.
"""


class SmartGrowError(Exception):
    """Base class for all core errors."""


class InvalidRecord(SmartGrowError, ValueError):
    """Raised when an input record is structurally malformed."""

    def __init__(self, message: str, record_type: str | None = None) -> None:
        self.record_type = record_type
        super().__init__(
            f"Invalid {record_type} record: {message}" if record_type else message
        )


class NoCollectableDays(SmartGrowError):
    """Raised when collection is requested but no whole day is available."""

    def __init__(self, investment_id) -> None:
        self.investment_id = investment_id
        super().__init__(f"No collectable days for investment {investment_id}")


class CollectionRejected(SmartGrowError):
    """
    Raised when the mutation endpoint reports a failed collection.

    The message is the endpoint's error text, passed through unchanged.
    """

    def __init__(self, message: str, investment_id=None) -> None:
        self.investment_id = investment_id
        super().__init__(message)


class RequestRejected(SmartGrowError):
    """Raised when a deposit, withdrawal or plan purchase is refused."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.code = code
        super().__init__(message)
