"""Request and result schemas for hospital matching.

``CandidateProvider`` and ``ConditionTaxonomyEntry`` are the validated shapes
of store rows; all representation quirks (null lists, mappings stored as pair
lists) are resolved here so the scorers only ever see plain lists and dicts.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Timeline = Literal["immediate", "1_month", "3_months", "flexible"]
TravelType = Literal["domestic", "international"]


class PatientIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    condition: str = Field(..., min_length=1)
    budget_min: float | None = Field(default=None, ge=0)
    budget_max: float | None = Field(default=None, ge=0)
    preferred_location: str | None = None
    preferred_country: str | None = None
    timeline: Timeline | None = None
    travel_type: TravelType | None = None

    @field_validator("condition", mode="before")
    @classmethod
    def _strip_condition(cls, value: object) -> str:
        if value is None:
            raise ValueError("condition is required")
        cleaned = str(value).strip()
        if not cleaned:
            raise ValueError("condition must not be empty")
        return cleaned

    @field_validator("preferred_location", "preferred_country", mode="before")
    @classmethod
    def _strip_optional(cls, value: object) -> str | None:
        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None

    @model_validator(mode="after")
    def _check_budget_order(self) -> "PatientIntent":
        if self.budget_min is not None and self.budget_max is not None and self.budget_min > self.budget_max:
            raise ValueError("budget_min must not exceed budget_max")
        return self

    @property
    def budget_bounds(self) -> tuple[float | None, float | None]:
        """The bounds that were actually given; a zero bound counts as absent."""
        return (self.budget_min or None, self.budget_max or None)

    @property
    def has_budget(self) -> bool:
        return any(bound is not None for bound in self.budget_bounds)


def _as_string_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    out: list[str] = []
    for item in value:  # type: ignore[union-attr]
        if item is None:
            continue
        text = str(item).strip()
        if text:
            out.append(text)
    return out


def _as_amount_mapping(value: object) -> dict[str, float]:
    """Normalize a per-condition mapping to ``{condition: amount}``.

    Accepts a mapping, a list of ``(key, value)`` pairs, or a list of
    ``{"key": ..., "value": ...}`` objects.  Null amounts are dropped.
    """
    if value is None:
        return {}

    if isinstance(value, Mapping):
        items = list(value.items())
    elif isinstance(value, (list, tuple)):
        items = []
        for entry in value:
            if isinstance(entry, Mapping):
                items.append((entry.get("key"), entry.get("value")))
            elif isinstance(entry, (list, tuple)) and len(entry) == 2:
                items.append((entry[0], entry[1]))
            else:
                raise ValueError(f"unsupported mapping entry: {entry!r}")
    else:
        raise ValueError(f"unsupported mapping type: {type(value).__name__}")

    out: dict[str, float] = {}
    for key, amount in items:
        if key is None or amount is None:
            continue
        out[str(key)] = float(amount)
    return out


class InternationalSupport(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    travel_assistance: bool = False
    airport_pickup: bool = False
    translator_available: bool = False
    visa_assistance: bool = False
    remote_followup: bool = False

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_false(cls, value: object) -> object:
        return False if value is None else value


class CandidateProvider(BaseModel):
    """Read-only snapshot of one provider record."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    name: str
    treatments_offered: list[str] = Field(default_factory=list)
    specialties: list[str] = Field(default_factory=list)
    success_rates: dict[str, float] = Field(default_factory=dict)
    price_range_min: float | None = None
    price_range_max: float | None = None
    average_cost_by_treatment: dict[str, float] = Field(default_factory=dict)
    city: str | None = None
    country: str | None = None
    patient_satisfaction: float | None = None
    completion_rate: float | None = None
    rating_avg: float | None = Field(default=None, ge=0, le=5)
    response_time_hours: float | None = None
    international_support: InternationalSupport = Field(default_factory=InternationalSupport)
    is_public_listed: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: object) -> str:
        if value is None:
            raise ValueError("id is required")
        return str(value)

    @field_validator("treatments_offered", "specialties", mode="before")
    @classmethod
    def _normalize_lists(cls, value: object) -> list[str]:
        return _as_string_list(value)

    @field_validator("success_rates", "average_cost_by_treatment", mode="before")
    @classmethod
    def _normalize_mappings(cls, value: object) -> dict[str, float]:
        return _as_amount_mapping(value)

    @field_validator("international_support", mode="before")
    @classmethod
    def _default_support(cls, value: object) -> object:
        return {} if value is None else value


class ConditionTaxonomyEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    condition: str
    specialty: str
    keywords: list[str] = Field(default_factory=list)

    @field_validator("keywords", mode="before")
    @classmethod
    def _normalize_keywords(cls, value: object) -> list[str]:
        return _as_string_list(value)


class MatchBreakdown(BaseModel):
    condition: int = Field(..., ge=0, le=100)
    doctors: int = Field(..., ge=0, le=100)
    outcomes: int = Field(..., ge=0, le=100)
    price: int = Field(..., ge=0, le=100)
    location: int = Field(..., ge=0, le=100)
    preference: int = Field(..., ge=0, le=100)


class HospitalMatch(BaseModel):
    hospital: CandidateProvider
    match_score: int = Field(..., ge=0, le=100)
    match_breakdown: MatchBreakdown
