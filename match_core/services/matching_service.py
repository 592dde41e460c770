"""Hospital matching service: the ranking aggregator.

Pipeline for one request:

1. **Load** every publicly listed candidate.
2. **Resolve** the intent's condition against the taxonomy (once).
3. **Score** each candidate on the six criteria, fanned out concurrently
   behind a semaphore.
4. **Aggregate** the breakdown with the fixed weight table.
5. **Sort** by match score descending, ties by candidate id ascending.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional

from match_core.core.matching_config import MatchingTuning, MatchWeights, match_weights, matching_tuning
from match_core.repositories.provider_repository import ProviderDirectoryRepository
from match_core.repositories.staff_repository import StaffDirectoryRepository
from match_core.schemas.matching import (
    CandidateProvider,
    ConditionTaxonomyEntry,
    HospitalMatch,
    MatchBreakdown,
    PatientIntent,
)
from match_core.services.condition_resolver import ConditionResolver
from match_core.services.scoring_engine import (
    score_condition,
    score_doctors,
    score_location,
    score_outcomes,
    score_preference,
    score_price,
    weighted_match_score,
)

logger = logging.getLogger(__name__)


class HospitalMatchingService:
    def __init__(
        self,
        providers: ProviderDirectoryRepository,
        staff: StaffDirectoryRepository,
        resolver: ConditionResolver,
        *,
        weights: MatchWeights = match_weights,
        tuning: MatchingTuning = matching_tuning,
    ) -> None:
        self.providers = providers
        self.staff = staff
        self.resolver = resolver
        self._weights = weights
        self._tuning = tuning

    async def match_hospitals(self, intent: PatientIntent) -> List[HospitalMatch]:
        t0 = time.perf_counter()

        candidates = await self.providers.list_public_candidates()
        if not candidates:
            logger.info("match_hospitals no public candidates condition=%r", intent.condition)
            return []

        taxonomy = await self.resolver.resolve(intent.condition)

        semaphore = asyncio.Semaphore(self._tuning.candidate_concurrency)

        async def _bounded(candidate: CandidateProvider) -> HospitalMatch:
            async with semaphore:
                return await self.score_candidate(candidate, intent, taxonomy)

        matches = list(await asyncio.gather(*(_bounded(c) for c in candidates)))
        matches.sort(key=lambda m: (-m.match_score, m.hospital.id))

        logger.info(
            "match_hospitals condition=%r specialty=%r candidates=%s top_score=%s duration_ms=%.1f",
            intent.condition,
            taxonomy.specialty if taxonomy else None,
            len(matches),
            matches[0].match_score,
            (time.perf_counter() - t0) * 1000,
        )
        return matches

    async def score_candidate(
        self,
        candidate: CandidateProvider,
        intent: PatientIntent,
        taxonomy: Optional[ConditionTaxonomyEntry],
    ) -> HospitalMatch:
        breakdown = MatchBreakdown(
            condition=score_condition(candidate, intent.condition, taxonomy),
            doctors=await score_doctors(candidate, taxonomy, self.staff.get_roster),
            outcomes=score_outcomes(candidate),
            price=score_price(candidate, intent),
            location=score_location(candidate, intent),
            preference=score_preference(candidate, intent),
        )
        match_score = weighted_match_score(breakdown, self._weights)

        if self._tuning.debug_breakdowns:
            logger.debug(
                "match_hospitals candidate=%s score=%s breakdown=%s",
                candidate.id,
                match_score,
                breakdown.model_dump(),
            )

        return HospitalMatch(hospital=candidate, match_score=match_score, match_breakdown=breakdown)
