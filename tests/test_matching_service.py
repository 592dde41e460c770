from __future__ import annotations

import asyncio

import pytest

from fakes import FakeProviderRepository, FakeStaffRepository, FakeTaxonomyRepository
from match_core.core.errors import DataUnavailableError
from match_core.core.matching_config import MatchingTuning, MatchWeights
from match_core.repositories.staff_repository import StaffRoster
from match_core.services.condition_resolver import ConditionResolver
from match_core.services.matching_service import HospitalMatchingService


def _service(candidates, *, taxonomy=(), rosters=None, concurrency=8, fail=False):
    taxonomy_repo = FakeTaxonomyRepository(taxonomy)
    staff_repo = FakeStaffRepository(rosters)
    service = HospitalMatchingService(
        providers=FakeProviderRepository(candidates, fail=fail),
        staff=staff_repo,
        resolver=ConditionResolver(taxonomy_repo),
        tuning=MatchingTuning(candidate_concurrency=concurrency, debug_breakdowns=True),
    )
    return service, taxonomy_repo, staff_repo


def _weighted(breakdown) -> int:
    weights = MatchWeights()
    total = sum(getattr(breakdown, name) * getattr(weights, name) for name in (
        "condition", "doctors", "outcomes", "price", "location", "preference",
    ))
    return int(total + 0.5)


def test_no_public_candidates_returns_empty_list(make_candidate, make_intent):
    service, taxonomy_repo, _ = _service([make_candidate(is_public_listed=False)])
    assert asyncio.run(service.match_hospitals(make_intent())) == []
    assert taxonomy_repo.search_calls == []


def test_ranking_returns_one_entry_per_public_candidate(make_candidate, make_intent, orthopedics):
    candidates = [
        make_candidate(id="a", name="A", treatments_offered=["Knee Replacement"], city="Chennai"),
        make_candidate(id="b", name="B", specialties=["Cardiology"]),
        make_candidate(id="c", name="C", specialties=["Orthopedics"], is_public_listed=False),
        make_candidate(id="d", name="D", specialties=["Orthopedics"], patient_satisfaction=99),
    ]
    service, _, _ = _service(candidates, taxonomy=[orthopedics])

    matches = asyncio.run(service.match_hospitals(make_intent(preferred_location="chennai")))

    assert sorted(m.hospital.id for m in matches) == ["a", "b", "d"]
    scores = [m.match_score for m in matches]
    assert scores == sorted(scores, reverse=True)
    assert matches[0].hospital.id == "a"
    for match in matches:
        assert match.match_score == _weighted(match.match_breakdown)


def test_condition_resolved_once_per_request(make_candidate, make_intent, orthopedics):
    candidates = [make_candidate(id=f"c{i}", name=f"Clinic {i}") for i in range(5)]
    service, taxonomy_repo, staff_repo = _service(candidates, taxonomy=[orthopedics])

    asyncio.run(service.match_hospitals(make_intent()))

    assert taxonomy_repo.search_calls == ["Knee Replacement"]
    assert sorted(staff_repo.calls) == ["c0", "c1", "c2", "c3", "c4"]


def test_unresolved_condition_skips_staff_lookup(make_candidate, make_intent):
    service, _, staff_repo = _service([make_candidate()], taxonomy=[])

    matches = asyncio.run(service.match_hospitals(make_intent(condition="rare disorder")))

    assert staff_repo.calls == []
    assert matches[0].match_breakdown.doctors == 50


def test_equal_scores_are_ordered_by_candidate_id(make_candidate, make_intent):
    candidates = [make_candidate(id=cid, name=cid) for cid in ("m", "c", "x", "a")]
    service, _, _ = _service(candidates)

    matches = asyncio.run(service.match_hospitals(make_intent()))

    assert len({m.match_score for m in matches}) == 1
    assert [m.hospital.id for m in matches] == ["a", "c", "m", "x"]


def test_staff_breakdown_flows_into_match(make_candidate, make_intent, orthopedics):
    rosters = {
        "two": StaffRoster(member_count=2, profile_specialties=[["Orthopedics"], ["Orthopedics"]]),
        "none": StaffRoster(member_count=0),
    }
    candidates = [make_candidate(id="two", name="Two"), make_candidate(id="none", name="None")]
    service, _, _ = _service(candidates, taxonomy=[orthopedics], rosters=rosters)

    matches = {m.hospital.id: m for m in asyncio.run(service.match_hospitals(make_intent()))}

    assert matches["two"].match_breakdown.doctors == 80
    assert matches["none"].match_breakdown.doctors == 20


def test_fan_out_width_does_not_change_results(make_candidate, make_intent, orthopedics):
    candidates = [
        make_candidate(
            id=f"c{i:02d}",
            name=f"Clinic {i}",
            treatments_offered=["Knee Replacement"] if i % 2 else [],
            specialties=["Orthopedics"] if i % 3 else ["Cardiology"],
            rating_avg=(i % 5) + 0.5,
            response_time_hours=i * 3,
        )
        for i in range(12)
    ]
    rosters = {
        c.id: StaffRoster(member_count=i % 4, profile_specialties=[["Orthopedics"]] * (i % 4))
        for i, c in enumerate(candidates)
    }
    intent = make_intent(timeline="immediate", budget_max=300000)

    sequential, _, _ = _service(candidates, taxonomy=[orthopedics], rosters=rosters, concurrency=1)
    parallel, _, _ = _service(candidates, taxonomy=[orthopedics], rosters=rosters, concurrency=8)

    first = asyncio.run(sequential.match_hospitals(intent))
    second = asyncio.run(parallel.match_hospitals(intent))

    assert [m.model_dump() for m in first] == [m.model_dump() for m in second]


def test_store_failure_propagates(make_intent):
    service, _, _ = _service([], fail=True)
    with pytest.raises(DataUnavailableError):
        asyncio.run(service.match_hospitals(make_intent()))
