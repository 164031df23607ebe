"""
Application startup and shutdown.

Host applications call ``init_application()`` once, open sessions from the
returned factory and hand them to the services.
"""

from dataclasses import dataclass

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.config.database import create_engine, create_session_maker
from app.config.logging import setup_logging
from app.config.settings import Settings, settings as default_settings


@dataclass
class Application:
    """Process-wide database handles."""

    engine: AsyncEngine
    session_maker: async_sessionmaker[AsyncSession]

    async def shutdown(self) -> None:
        """Close pooled connections."""
        await self.engine.dispose()
        logger.info("SmartGrow Mining services stopped")


def init_application(settings: Settings | None = None) -> Application:
    """
    Configure logging and build the engine and session factory.

    Args:
        settings: Settings to use (defaults to the environment settings)

    Returns:
        Application holding the engine and session factory
    """
    settings = settings or default_settings
    setup_logging(settings)

    engine = create_engine(settings)
    session_maker = create_session_maker(engine)

    logger.info(
        "Database configured",
        extra={
            "environment": settings.environment,
            "pool_size": settings.database_pool_size,
        },
    )
    return Application(engine=engine, session_maker=session_maker)
