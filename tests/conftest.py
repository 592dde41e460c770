from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from match_core.db.async_session import json_dumps
from match_core.db.models import Base
from match_core.schemas.matching import CandidateProvider, ConditionTaxonomyEntry, PatientIntent


@pytest.fixture
def make_candidate() -> Callable[..., CandidateProvider]:
    def _make(**overrides: Any) -> CandidateProvider:
        data: dict[str, Any] = {"id": "clinic-1", "name": "Test Clinic", "is_public_listed": True}
        data.update(overrides)
        return CandidateProvider.model_validate(data)

    return _make


@pytest.fixture
def make_intent() -> Callable[..., PatientIntent]:
    def _make(**overrides: Any) -> PatientIntent:
        data: dict[str, Any] = {"condition": "Knee Replacement"}
        data.update(overrides)
        return PatientIntent(**data)

    return _make


@pytest.fixture
def orthopedics() -> ConditionTaxonomyEntry:
    return ConditionTaxonomyEntry(
        condition="Knee Replacement",
        specialty="Orthopedics",
        keywords=["knee", "arthroplasty"],
    )


@pytest.fixture
def session_factory(tmp_path: Path) -> async_sessionmaker[AsyncSession]:
    """SQLite-backed session factory with the directory tables created."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'match-core-test.sqlite'}",
        poolclass=NullPool,
        json_serializer=json_dumps,
    )

    async def _create() -> None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create())
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
def add_rows(session_factory: async_sessionmaker[AsyncSession]) -> Callable[..., None]:
    def _add(*rows: Any) -> None:
        async def _insert() -> None:
            async with session_factory() as db:
                db.add_all(list(rows))
                await db.commit()

        asyncio.run(_insert())

    return _add
