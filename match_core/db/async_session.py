"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

import json

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from match_core.core.config import settings


def _to_async_uri(uri: str) -> str:
    if uri.startswith("postgresql+asyncpg://"):
        return uri
    if uri.startswith("postgresql+psycopg2://"):
        return uri.replace("postgresql+psycopg2://", "postgresql+asyncpg://", 1)
    if uri.startswith("postgresql://"):
        return uri.replace("postgresql://", "postgresql+asyncpg://", 1)
    if uri.startswith("postgres://"):
        return uri.replace("postgres://", "postgresql+asyncpg://", 1)
    return uri


def json_dumps(value: object) -> str:
    # Keep non-ASCII names readable in the stored JSON.
    return json.dumps(value, ensure_ascii=False)


async_engine = create_async_engine(
    _to_async_uri(settings.sqlalchemy_database_uri),
    pool_pre_ping=True,
    pool_recycle=1800,
    json_serializer=json_dumps,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Repositories open one session per lookup so lookups may run concurrently."""
    return AsyncSessionLocal
