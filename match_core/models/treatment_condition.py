from __future__ import annotations

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from match_core.db.base import Base


class TreatmentCondition(Base):
    __tablename__ = "treatment_conditions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    condition: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    specialty: Mapped[str] = mapped_column(String(120), nullable=False)
    keywords: Mapped[list | None] = mapped_column(JSON(none_as_null=True), nullable=True)
