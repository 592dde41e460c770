"""Read access to the provider directory.

Every query is restricted to publicly listed clinics.  Rows are validated into
``CandidateProvider`` here; a row that fails validation is a store failure,
not something the scorers should see.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import ValidationError
from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from match_core.core.errors import DataUnavailableError
from match_core.db.json_elements import any_element_ilike
from match_core.models.clinic import Clinic
from match_core.schemas.matching import CandidateProvider
from match_core.services.search_normalization import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)

SOURCE = "provider_directory"


@dataclass
class ProviderNameHit:
    id: str
    name: str


@dataclass
class CityCount:
    city: str
    count: int


class ProviderDirectoryRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def list_public_candidates(self) -> list[CandidateProvider]:
        stmt = select(Clinic).where(Clinic.is_public_listed.is_(True)).order_by(Clinic.id.asc())

        try:
            async with self.session_factory() as db:
                rows = (await db.execute(stmt)).scalars().all()
            return [CandidateProvider.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.exception("Failed to load public candidates")
            raise DataUnavailableError(SOURCE) from exc
        except ValidationError as exc:
            logger.exception("Malformed provider record in public directory")
            raise DataUnavailableError(SOURCE, "malformed provider record") from exc

    async def count_public_offering(self, condition: str, specialty: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Clinic)
            .where(
                Clinic.is_public_listed.is_(True),
                or_(
                    any_element_ilike(Clinic.treatments_offered, contains_pattern(condition)),
                    any_element_ilike(Clinic.specialties, contains_pattern(specialty)),
                ),
            )
        )

        try:
            async with self.session_factory() as db:
                return int((await db.execute(stmt)).scalar_one() or 0)
        except SQLAlchemyError as exc:
            logger.exception("Failed to count providers condition=%r specialty=%r", condition, specialty)
            raise DataUnavailableError(SOURCE) from exc

    async def search_public_by_name(self, text: str, *, limit: int) -> list[ProviderNameHit]:
        stmt = (
            select(Clinic.id, Clinic.name)
            .where(
                Clinic.is_public_listed.is_(True),
                Clinic.name.ilike(contains_pattern(text), escape=LIKE_ESCAPE),
            )
            .order_by(Clinic.name.asc(), Clinic.id.asc())
            .limit(limit)
        )

        try:
            async with self.session_factory() as db:
                rows = (await db.execute(stmt)).all()
        except SQLAlchemyError as exc:
            logger.exception("Provider name lookup failed text=%r", text)
            raise DataUnavailableError(SOURCE) from exc

        return [ProviderNameHit(id=str(r.id), name=r.name) for r in rows]

    async def count_public_by_city(self, text: str, *, limit: int) -> list[CityCount]:
        count = func.count().label("count")
        stmt = (
            select(Clinic.city.label("city"), count)
            .where(
                Clinic.is_public_listed.is_(True),
                Clinic.city.ilike(contains_pattern(text), escape=LIKE_ESCAPE),
            )
            .group_by(Clinic.city)
            .order_by(count.desc(), Clinic.city.asc())
            .limit(limit)
        )

        try:
            async with self.session_factory() as db:
                rows = (await db.execute(stmt)).all()
        except SQLAlchemyError as exc:
            logger.exception("City aggregation failed text=%r", text)
            raise DataUnavailableError(SOURCE) from exc

        return [CityCount(city=r.city, count=int(r.count)) for r in rows]
