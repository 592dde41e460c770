"""SQLAlchemy model for the provider directory (clinics).

The directory is owned by the clinic-management side of the platform; Match
Core only reads it.  List and per-condition mapping fields are stored as JSON.
"""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, Float, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from match_core.db.base import Base


def _new_id() -> str:
    return str(uuid4())


class Clinic(Base):
    __tablename__ = "clinics"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    city: Mapped[str | None] = mapped_column(String(120), nullable=True, index=True)
    country: Mapped[str | None] = mapped_column(String(120), nullable=True)
    is_public_listed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    treatments_offered: Mapped[list | None] = mapped_column(JSON(none_as_null=True), nullable=True)
    specialties: Mapped[list | None] = mapped_column(JSON(none_as_null=True), nullable=True)
    success_rates: Mapped[dict | None] = mapped_column(JSON(none_as_null=True), nullable=True)
    average_cost_by_treatment: Mapped[dict | None] = mapped_column(JSON(none_as_null=True), nullable=True)
    international_support: Mapped[dict | None] = mapped_column(JSON(none_as_null=True), nullable=True)

    price_range_min: Mapped[float | None] = mapped_column(Float, nullable=True)
    price_range_max: Mapped[float | None] = mapped_column(Float, nullable=True)
    patient_satisfaction: Mapped[float | None] = mapped_column(Float, nullable=True)
    completion_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    rating_avg: Mapped[float | None] = mapped_column(Float, nullable=True)
    response_time_hours: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
