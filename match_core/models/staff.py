"""Staff membership and profile models.

Both tables belong to the authentication/role side of the platform.  Match
Core reads them to count specialists at a clinic.
"""

from __future__ import annotations

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from match_core.db.base import Base


class ClinicMember(Base):
    __tablename__ = "clinic_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    clinic_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False)


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    full_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    specialties: Mapped[list | None] = mapped_column(JSON(none_as_null=True), nullable=True)
