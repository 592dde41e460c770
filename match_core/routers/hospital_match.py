"""Hospital matching router for Match Core.

Ranks every publicly listed provider against a patient's stated treatment
intent and returns the full list, best match first.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from match_core.core.errors import DataUnavailableError
from match_core.db.async_session import get_session_factory
from match_core.repositories.condition_repository import ConditionTaxonomyRepository
from match_core.repositories.provider_repository import ProviderDirectoryRepository
from match_core.repositories.staff_repository import StaffDirectoryRepository
from match_core.schemas.matching import HospitalMatch, PatientIntent
from match_core.services.condition_resolver import ConditionResolver
from match_core.services.matching_service import HospitalMatchingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/match", tags=["hospital-match"])


def build_matching_service(session_factory: async_sessionmaker[AsyncSession]) -> HospitalMatchingService:
    return HospitalMatchingService(
        providers=ProviderDirectoryRepository(session_factory),
        staff=StaffDirectoryRepository(session_factory),
        resolver=ConditionResolver(ConditionTaxonomyRepository(session_factory)),
    )


@router.post("/hospitals", response_model=list[HospitalMatch])
async def match_hospitals(
    intent: PatientIntent,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> list[HospitalMatch]:
    service = build_matching_service(session_factory)
    try:
        return await service.match_hospitals(intent)
    except DataUnavailableError as exc:
        logger.warning("match_hospitals failed source=%s", exc.source)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
