"""
Base service class.

Session ownership, a service-bound logger and the decorators used by the
SmartGrow services to delimit transactions and trace operations.
"""

import functools
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseService:
    """
    Base class for services working on one AsyncSession.

    ``self.logger`` carries ``service=<ClassName>`` in every record.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize base service.

        Args:
            session: Async database session
        """
        self.session = session
        self.logger = logger.bind(service=self.__class__.__name__)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def transaction(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """
    Run a service method as one unit of work.

    The session is committed when the method returns and rolled back when
    it raises; the error is logged and re-raised unchanged.

    Usage:
        @transaction
        async def request_withdrawal(self, user_id, amount):
            ...
    """
    @functools.wraps(func)
    async def wrapper(self: BaseService, *args: Any, **kwargs: Any) -> T:
        try:
            result = await func(self, *args, **kwargs)
            await self.commit()
        except Exception as e:
            await self.rollback()
            self.logger.error(
                f"Transaction rolled back in {func.__name__}",
                extra={
                    "function": func.__name__,
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            )
            raise

        return result

    return wrapper


def log_operation(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """
    Log start, outcome and duration of a user-facing operation.

    Failures are logged as warnings and re-raised.

    Usage:
        @log_operation
        async def collect_income(self, user_id, investment_id):
            ...
    """
    @functools.wraps(func)
    async def wrapper(self: BaseService, *args: Any, **kwargs: Any) -> T:
        started = time.monotonic()
        self.logger.info(
            f"Starting {func.__name__}",
            extra={"function": func.__name__, "kwargs_keys": list(kwargs)},
        )

        try:
            result = await func(self, *args, **kwargs)
        except Exception as e:
            self.logger.warning(
                f"Failed {func.__name__}",
                extra={
                    "function": func.__name__,
                    "duration_seconds": round(time.monotonic() - started, 3),
                    "error": str(e),
                },
            )
            raise

        self.logger.info(
            f"Completed {func.__name__}",
            extra={
                "function": func.__name__,
                "duration_seconds": round(time.monotonic() - started, 3),
            },
        )
        return result

    return wrapper
