from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from match_core.core.errors import DataUnavailableError
from match_core.core.matching_config import STAFF_ROLES
from match_core.models.staff import ClinicMember, Profile

logger = logging.getLogger(__name__)

SOURCE = "staff_directory"


@dataclass
class StaffRoster:
    member_count: int
    profile_specialties: list[list[str]] = field(default_factory=list)


class StaffDirectoryRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def get_roster(self, clinic_id: str, *, roles: Sequence[str] = STAFF_ROLES) -> StaffRoster:
        members_stmt = select(ClinicMember.user_id).where(
            ClinicMember.clinic_id == clinic_id,
            ClinicMember.role.in_(list(roles)),
        )

        try:
            async with self.session_factory() as db:
                user_ids = list((await db.execute(members_stmt)).scalars().all())
                if not user_ids:
                    return StaffRoster(member_count=0)

                profiles_stmt = select(Profile.specialties).where(Profile.user_id.in_(user_ids))
                specialties = (await db.execute(profiles_stmt)).scalars().all()
        except SQLAlchemyError as exc:
            logger.exception("Staff lookup failed clinic_id=%s", clinic_id)
            raise DataUnavailableError(SOURCE) from exc

        return StaffRoster(
            member_count=len(user_ids),
            profile_specialties=[[str(s) for s in (row or []) if s] for row in specialties],
        )
