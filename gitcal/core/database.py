"""
Async engine and request-scoped sessions for the commit and daily summary tables.

Each request gets one session. The session is committed when the handler
returns and rolled back when it raises, so services only commit themselves
when other sessions must see a row before the request ends.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from gitcal.config import Settings, settings

logger = logging.getLogger(__name__)


def build_engine(config: Settings) -> AsyncEngine:
    return create_async_engine(
        config.database_url,
        pool_size=config.database_pool_size,
        max_overflow=config.database_max_overflow,
        pool_pre_ping=True,
        connect_args={"command_timeout": config.database_command_timeout_seconds},
    )


engine = build_engine(settings)

async_session_maker = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for one request, committing on success and rolling back on error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.debug(f"Rolling back request session after {type(e).__name__}")
            await session.rollback()
            raise


async def init_db() -> None:
    """Create missing tables. Debug runs only; migrations own the schema otherwise."""
    import gitcal.models  # noqa: F401  (registers tables on SQLModel.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
