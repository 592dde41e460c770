from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from match_core.db.async_session import get_session_factory
from match_core.main import create_app
from match_core.scripts.seed_provider_directory import seed_provider_directory


class _BrokenSession:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def execute(self, stmt):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.fixture
def seeded_client(session_factory):
    asyncio.run(seed_provider_directory(session_factory=session_factory))

    app = create_app()
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as client:
        yield client


@pytest.fixture
def broken_client():
    app = create_app()
    app.dependency_overrides[get_session_factory] = lambda: (lambda: _BrokenSession())
    with TestClient(app) as client:
        yield client


def test_health(seeded_client):
    response = seeded_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_match_hospitals_ranks_public_clinics(seeded_client):
    response = seeded_client.post(
        "/match/hospitals",
        json={
            "condition": "Knee Replacement",
            "budget_min": 300000,
            "budget_max": 400000,
            "preferred_location": "chennai",
            "timeline": "immediate",
            "travel_type": "international",
        },
    )
    assert response.status_code == 200
    body = response.json()

    assert len(body) == 4
    assert all(item["hospital"]["is_public_listed"] for item in body)
    scores = [item["match_score"] for item in body]
    assert scores == sorted(scores, reverse=True)

    top = body[0]
    assert top["hospital"]["name"] == "Apollo Heart & Joint Institute"
    assert top["match_breakdown"] == {
        "condition": 99,
        "doctors": 80,
        "outcomes": 93,
        "price": 95,
        "location": 100,
        "preference": 100,
    }
    assert top["match_score"] == 95


def test_match_hospitals_rejects_inverted_budget(seeded_client):
    response = seeded_client.post(
        "/match/hospitals",
        json={"condition": "IVF", "budget_min": 500, "budget_max": 100},
    )
    assert response.status_code == 422


def test_match_hospitals_requires_condition(seeded_client):
    response = seeded_client.post("/match/hospitals", json={"condition": "   "})
    assert response.status_code == 422


def test_suggest_conditions(seeded_client):
    response = seeded_client.get("/search/suggest", params={"q": "knee"})
    assert response.status_code == 200
    assert response.json() == [{"type": "condition", "text": "Knee Replacement", "count": 2}]


def test_suggest_hospital_names(seeded_client):
    response = seeded_client.get("/search/suggest", params={"q": "ortho"})
    assert response.status_code == 200
    body = response.json()
    assert [(item["type"], item["text"]) for item in body] == [("hospital", "Bumrungrad Orthopedic Center")]
    assert body[0]["id"]
    assert "count" not in body[0]


def test_suggest_cities_only_count_public_clinics(seeded_client):
    response = seeded_client.get("/search/suggest", params={"q": "chen"})
    assert response.status_code == 200
    assert response.json() == [{"type": "city", "text": "Chennai", "count": 1}]


def test_suggest_short_query(seeded_client):
    response = seeded_client.get("/search/suggest", params={"q": "k"})
    assert response.status_code == 200
    assert response.json() == []


def test_store_failure_maps_to_503(broken_client):
    response = broken_client.post("/match/hospitals", json={"condition": "IVF"})
    assert response.status_code == 503

    response = broken_client.get("/search/suggest", params={"q": "ivf"})
    assert response.status_code == 503
