from __future__ import annotations

import logging
from typing import Optional

from match_core.repositories.condition_repository import ConditionTaxonomyRepository
from match_core.schemas.matching import ConditionTaxonomyEntry
from match_core.services.search_normalization import normalize_query

logger = logging.getLogger(__name__)


class ConditionResolver:
    """Map free-text conditions to a taxonomy entry.

    The first entry (store order) whose name or keywords contain the text
    wins; there is no best-match ranking among several hits.  ``None`` means
    "unknown specialty" and is a normal outcome.
    """

    def __init__(self, repository: ConditionTaxonomyRepository) -> None:
        self.repository = repository

    async def resolve(self, condition: str) -> Optional[ConditionTaxonomyEntry]:
        text = normalize_query(condition)
        if not text:
            return None

        entry = await self.repository.find_first(text)
        if entry is None:
            logger.info("condition_resolver.resolve unresolved condition=%r", text)
        return entry

    async def search(self, text: str, *, limit: int) -> list[ConditionTaxonomyEntry]:
        text = normalize_query(text)
        if not text:
            return []
        return await self.repository.search(text, limit=limit)
