"""
Async SQLAlchemy engine and session factory.

Production runs on PostgreSQL through ``asyncpg``; tests build their own
SQLite engine and only reuse ``Base.metadata``.
"""

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from campusride.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=False,
    pool_size=10,
    max_overflow=5,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base for users, rides, ride requests and ratings."""


async def dispose_engine() -> None:
    """Close pooled connections (app shutdown, end of seed script)."""
    await engine.dispose()
