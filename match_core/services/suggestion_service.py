"""Typeahead suggestions across conditions, providers and cities.

The three lookups are independent and run concurrently.  Results are
concatenated in a fixed order (conditions, hospitals, cities) and capped;
the same text may appear under two types.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import List

from match_core.core.matching_config import SuggestionLimits, suggestion_limits
from match_core.repositories.provider_repository import ProviderDirectoryRepository
from match_core.schemas.suggestions import Suggestion
from match_core.services.condition_resolver import ConditionResolver
from match_core.services.search_normalization import normalize_query

logger = logging.getLogger(__name__)


class SearchSuggestionService:
    def __init__(
        self,
        providers: ProviderDirectoryRepository,
        resolver: ConditionResolver,
        *,
        limits: SuggestionLimits = suggestion_limits,
    ) -> None:
        self.providers = providers
        self.resolver = resolver
        self._limits = limits

    async def suggest(self, query: str) -> List[Suggestion]:
        q = normalize_query(query)
        if len(q) < self._limits.min_query_length:
            return []

        t0 = time.perf_counter()
        conditions, hospitals, cities = await asyncio.gather(
            self._condition_suggestions(q),
            self._hospital_suggestions(q),
            self._city_suggestions(q),
        )

        suggestions = (conditions + hospitals + cities)[: self._limits.total]
        logger.info(
            "search_suggest query=%r conditions=%s hospitals=%s cities=%s duration_ms=%.1f",
            q,
            len(conditions),
            len(hospitals),
            len(cities),
            (time.perf_counter() - t0) * 1000,
        )
        return suggestions

    async def _condition_suggestions(self, q: str) -> List[Suggestion]:
        entries = await self.resolver.search(q, limit=self._limits.conditions)
        counts = await asyncio.gather(
            *(self.providers.count_public_offering(e.condition, e.specialty) for e in entries)
        )
        return [
            Suggestion(type="condition", text=entry.condition, count=count)
            for entry, count in zip(entries, counts)
        ]

    async def _hospital_suggestions(self, q: str) -> List[Suggestion]:
        hits = await self.providers.search_public_by_name(q, limit=self._limits.hospitals)
        return [Suggestion(type="hospital", text=h.name, id=h.id) for h in hits]

    async def _city_suggestions(self, q: str) -> List[Suggestion]:
        rows = await self.providers.count_public_by_city(q, limit=self._limits.cities)
        return [Suggestion(type="city", text=r.city, count=r.count) for r in rows]
