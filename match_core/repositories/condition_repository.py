"""Read access to the condition taxonomy.

Matching is case-insensitive containment on the condition name or on the
elements of the keyword list.  "Natural order" is primary key ascending.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError
from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from match_core.core.errors import DataUnavailableError
from match_core.db.json_elements import any_element_ilike
from match_core.models.treatment_condition import TreatmentCondition
from match_core.schemas.matching import ConditionTaxonomyEntry
from match_core.services.search_normalization import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)

SOURCE = "condition_taxonomy"


class ConditionTaxonomyRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def search(self, text: str, *, limit: int) -> list[ConditionTaxonomyEntry]:
        pattern = contains_pattern(text)
        stmt = (
            select(TreatmentCondition)
            .where(
                or_(
                    TreatmentCondition.condition.ilike(pattern, escape=LIKE_ESCAPE),
                    any_element_ilike(TreatmentCondition.keywords, pattern),
                )
            )
            .order_by(TreatmentCondition.id.asc())
            .limit(limit)
        )

        try:
            async with self.session_factory() as db:
                rows = (await db.execute(stmt)).scalars().all()
            return [ConditionTaxonomyEntry.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.exception("Taxonomy lookup failed text=%r", text)
            raise DataUnavailableError(SOURCE) from exc
        except ValidationError as exc:
            logger.exception("Malformed taxonomy row for text=%r", text)
            raise DataUnavailableError(SOURCE, "malformed taxonomy entry") from exc

    async def find_first(self, text: str) -> ConditionTaxonomyEntry | None:
        matches = await self.search(text, limit=1)
        return matches[0] if matches else None
