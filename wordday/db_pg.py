from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def make_engine(database_url: Optional[str]) -> Optional[AsyncEngine]:
    """Build the async engine, or None when no DATABASE_URL is configured."""
    if not database_url:
        return None
    return create_async_engine(database_url, echo=False, pool_pre_ping=True)


def make_sessionmaker(engine: Optional[AsyncEngine]) -> Optional[async_sessionmaker]:
    if engine is None:
        return None
    return async_sessionmaker(engine, expire_on_commit=False)


async def ping(engine: AsyncEngine):
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def create_tables(engine: AsyncEngine):
    from . import models  # noqa: F401  (registers tables on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
