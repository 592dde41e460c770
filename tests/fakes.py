"""In-memory stand-ins for the store repositories used by the services."""

from __future__ import annotations

from typing import Sequence

from match_core.core.errors import DataUnavailableError
from match_core.core.matching_config import STAFF_ROLES
from match_core.repositories.provider_repository import CityCount, ProviderNameHit
from match_core.repositories.staff_repository import StaffRoster
from match_core.schemas.matching import CandidateProvider, ConditionTaxonomyEntry


def _contains(haystack: str | None, needle: str) -> bool:
    return bool(haystack) and needle.lower() in haystack.lower()


class FakeTaxonomyRepository:
    def __init__(self, entries: Sequence[ConditionTaxonomyEntry] = ()) -> None:
        self.entries = list(entries)
        self.search_calls: list[str] = []

    async def search(self, text: str, *, limit: int) -> list[ConditionTaxonomyEntry]:
        self.search_calls.append(text)
        hits = [
            e
            for e in self.entries
            if _contains(e.condition, text) or any(_contains(k, text) for k in e.keywords)
        ]
        return hits[:limit]

    async def find_first(self, text: str) -> ConditionTaxonomyEntry | None:
        hits = await self.search(text, limit=1)
        return hits[0] if hits else None


class FakeProviderRepository:
    def __init__(self, candidates: Sequence[CandidateProvider] = (), *, fail: bool = False) -> None:
        self.candidates = list(candidates)
        self.fail = fail

    def _public(self) -> list[CandidateProvider]:
        if self.fail:
            raise DataUnavailableError("provider_directory")
        return [c for c in self.candidates if c.is_public_listed]

    async def list_public_candidates(self) -> list[CandidateProvider]:
        return self._public()

    async def count_public_offering(self, condition: str, specialty: str) -> int:
        return sum(
            1
            for c in self._public()
            if any(_contains(t, condition) for t in c.treatments_offered)
            or any(_contains(s, specialty) for s in c.specialties)
        )

    async def search_public_by_name(self, text: str, *, limit: int) -> list[ProviderNameHit]:
        hits = sorted((c for c in self._public() if _contains(c.name, text)), key=lambda c: (c.name, c.id))
        return [ProviderNameHit(id=c.id, name=c.name) for c in hits[:limit]]

    async def count_public_by_city(self, text: str, *, limit: int) -> list[CityCount]:
        counts: dict[str, int] = {}
        for c in self._public():
            if c.city and _contains(c.city, text):
                counts[c.city] = counts.get(c.city, 0) + 1
        ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [CityCount(city=city, count=count) for city, count in ordered[:limit]]


class FakeStaffRepository:
    def __init__(self, rosters: dict[str, StaffRoster] | None = None) -> None:
        self.rosters = rosters or {}
        self.calls: list[str] = []

    async def get_roster(self, clinic_id: str, *, roles: Sequence[str] = STAFF_ROLES) -> StaffRoster:
        self.calls.append(clinic_id)
        return self.rosters.get(clinic_id, StaffRoster(member_count=0))
