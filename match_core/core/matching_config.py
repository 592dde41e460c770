"""Matching configuration for Match Core.

Holds the fixed criterion weight table, the suggestion caps, and the
operational tuning knobs of the ranking engine.  Weights and caps are
constants; only the tuning values are read from environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


# ---------------------------------------------------------------------------
# Ranking weights
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MatchWeights:
    """Weight of each criterion in the aggregated match score (sums to 1.0)."""

    condition: float = 0.30
    doctors: float = 0.15
    outcomes: float = 0.15
    price: float = 0.15
    location: float = 0.15
    preference: float = 0.10

    def total(self) -> float:
        return (
            self.condition
            + self.doctors
            + self.outcomes
            + self.price
            + self.location
            + self.preference
        )


# ---------------------------------------------------------------------------
# Suggestion caps
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SuggestionLimits:
    min_query_length: int = 2
    conditions: int = 5
    hospitals: int = 5
    cities: int = 3
    total: int = 10


# ---------------------------------------------------------------------------
# Tuning
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MatchingTuning:
    """Operational limits for the ranking fan-out."""

    # Max candidates scored at once (each may hit the staff store).
    candidate_concurrency: int = field(
        default_factory=lambda: max(1, _env_int("MATCH_CANDIDATE_CONCURRENCY", 8)),
    )
    debug_breakdowns: bool = field(
        default_factory=lambda: _env_bool("MATCH_DEBUG", default=False),
    )


STAFF_ROLES: tuple[str, ...] = ("owner", "doctor")


# ---------------------------------------------------------------------------
# Singleton instances (importable)
# ---------------------------------------------------------------------------

match_weights = MatchWeights()
suggestion_limits = SuggestionLimits()
matching_tuning = MatchingTuning()
