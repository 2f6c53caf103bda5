from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from srbrowser.core.config import settings

engine = create_async_engine(settings.db_url)


async def init_db() -> None:
    """Create missing tables. Only the subscription store lives in the database."""
    # Registers the table on SQLModel.metadata
    from srbrowser.models.subscription import Subscription  # noqa: F401, PLC0415

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession]:
    async with AsyncSession(
        engine, autocommit=False, autoflush=False, expire_on_commit=False
    ) as session:
        yield session
