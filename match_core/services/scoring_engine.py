"""Criterion scorers for hospital matching.

Each scorer maps one candidate and the patient intent to an integer in
[0, 100].  All of them are deterministic functions of their inputs; only
``score_doctors`` touches a store (through the injected roster lookup).

Missing data is never an error here: every scorer has a documented fallback
value for absent fields.
"""

from __future__ import annotations

import math
from typing import Awaitable, Callable, Mapping, Optional

from match_core.core.matching_config import MatchWeights, match_weights
from match_core.repositories.staff_repository import StaffRoster
from match_core.schemas.matching import (
    CandidateProvider,
    ConditionTaxonomyEntry,
    MatchBreakdown,
    PatientIntent,
)
from match_core.services.search_normalization import contains_ci

RosterLookup = Callable[[str], Awaitable[StaffRoster]]


def round_half_up(value: float) -> int:
    """Nearest integer with .5 rounded up (``round`` would round to even)."""
    return int(math.floor(value + 0.5))


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def lookup_by_condition(mapping: Mapping[str, float], condition: str) -> Optional[float]:
    """Exact key first, then a case-insensitive key match."""
    if condition in mapping:
        return mapping[condition]
    folded = condition.casefold()
    for key, value in mapping.items():
        if key.casefold() == folded:
            return value
    return None


# ---------------------------------------------------------------------------
# Condition fit
# ---------------------------------------------------------------------------

def _overlaps(a: str, b: str) -> bool:
    a_l = a.lower()
    b_l = b.lower()
    return a_l in b_l or b_l in a_l


def score_condition(
    candidate: CandidateProvider,
    condition: str,
    taxonomy: Optional[ConditionTaxonomyEntry],
) -> int:
    treatment_match = any(_overlaps(t, condition) for t in candidate.treatments_offered)

    if not treatment_match and taxonomy is not None:
        specialty = taxonomy.specialty.lower()
        if any(s.lower() == specialty for s in candidate.specialties):
            return 40
        return 10

    if not treatment_match:
        return 35 if any(_overlaps(s, condition) for s in candidate.specialties) else 5

    score = 70.0
    rate = lookup_by_condition(candidate.success_rates, condition)
    if rate is not None and rate > 0:
        score += (rate / 100) * 30
    else:
        score += 15

    return _clamp(round_half_up(min(100.0, score)))


# ---------------------------------------------------------------------------
# Staff / doctor fit
# ---------------------------------------------------------------------------

def score_staff_roster(roster: StaffRoster, specialty: str) -> int:
    """Step function over the number of relevant specialists."""
    if roster.member_count == 0:
        return 20

    relevant = sum(
        1
        for specialties in roster.profile_specialties
        if any(contains_ci(s, specialty) for s in specialties)
    )

    if relevant == 0:
        return 25
    if relevant == 1:
        return 60
    if relevant == 2:
        return 80
    return 95


async def score_doctors(
    candidate: CandidateProvider,
    taxonomy: Optional[ConditionTaxonomyEntry],
    roster_lookup: RosterLookup,
) -> int:
    if taxonomy is None or not taxonomy.specialty:
        return 50
    roster = await roster_lookup(candidate.id)
    return score_staff_roster(roster, taxonomy.specialty)


# ---------------------------------------------------------------------------
# Outcomes fit
# ---------------------------------------------------------------------------

def score_outcomes(candidate: CandidateProvider) -> int:
    factors: list[float] = []
    if candidate.patient_satisfaction is not None:
        factors.append(candidate.patient_satisfaction)
    if candidate.completion_rate is not None:
        factors.append(candidate.completion_rate)
    if candidate.rating_avg is not None:
        factors.append((candidate.rating_avg / 5) * 100)

    if not factors:
        return 50
    return _clamp(round_half_up(sum(factors) / len(factors)))


# ---------------------------------------------------------------------------
# Price fit
# ---------------------------------------------------------------------------

def resolve_cost(candidate: CandidateProvider, condition: str) -> Optional[float]:
    """Condition-specific average, else the midpoint of the general price range."""
    average = lookup_by_condition(candidate.average_cost_by_treatment, condition)
    if average is not None and average > 0:
        return average

    low = candidate.price_range_min
    high = candidate.price_range_max
    if low and high:
        return (low + high) / 2
    return None


def score_price(candidate: CandidateProvider, intent: PatientIntent) -> int:
    if not intent.has_budget:
        return 70
    budget_min, budget_max = intent.budget_bounds

    cost = resolve_cost(candidate, intent.condition)
    if cost is None:
        return 50

    if budget_min is not None and budget_max is not None:
        midpoint = (budget_min + budget_max) / 2
        tolerance = budget_max - budget_min
    else:
        midpoint = budget_max if budget_max is not None else budget_min
        tolerance = midpoint * 0.5

    if tolerance == 0:
        return 80 if cost <= midpoint else 30

    lower = budget_min if budget_min is not None else 0.0
    upper = budget_max if budget_max is not None else math.inf
    if lower <= cost <= upper:
        return 95

    ratio = abs(cost - midpoint) / tolerance
    if ratio < 0.5:
        return 70
    if ratio < 1:
        return 50
    return 20


# ---------------------------------------------------------------------------
# Location fit
# ---------------------------------------------------------------------------

def score_location(candidate: CandidateProvider, intent: PatientIntent) -> int:
    location = intent.preferred_location
    country = intent.preferred_country
    if not location and not country:
        return 60

    if contains_ci(candidate.city, location):
        return 100
    if contains_ci(candidate.country, country):
        return 65

    support = candidate.international_support
    if support.travel_assistance or support.visa_assistance:
        return 40
    return 15


# ---------------------------------------------------------------------------
# Preference fit
# ---------------------------------------------------------------------------

INTERNATIONAL_SUPPORT_POINTS: dict[str, int] = {
    "travel_assistance": 5,
    "airport_pickup": 3,
    "translator_available": 5,
    "visa_assistance": 5,
    "remote_followup": 7,
}


def score_preference(candidate: CandidateProvider, intent: PatientIntent) -> int:
    score = 50
    response_hours = candidate.response_time_hours

    if intent.timeline == "immediate" and response_hours:
        if response_hours <= 6:
            score += 25
        elif response_hours <= 24:
            score += 15
        else:
            score += 5
    elif intent.timeline == "flexible":
        score += 20
    else:
        score += 10

    if intent.travel_type == "international":
        support = candidate.international_support
        for flag, points in INTERNATIONAL_SUPPORT_POINTS.items():
            if getattr(support, flag):
                score += points

    return min(100, score)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def weighted_match_score(breakdown: MatchBreakdown, weights: MatchWeights = match_weights) -> int:
    total = (
        breakdown.condition * weights.condition
        + breakdown.doctors * weights.doctors
        + breakdown.outcomes * weights.outcomes
        + breakdown.price * weights.price
        + breakdown.location * weights.location
        + breakdown.preference * weights.preference
    )
    return _clamp(round_half_up(total))
