"""Search suggestions router for Match Core.

Typeahead over the condition taxonomy, provider names and cities.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from match_core.core.errors import DataUnavailableError
from match_core.db.async_session import get_session_factory
from match_core.repositories.condition_repository import ConditionTaxonomyRepository
from match_core.repositories.provider_repository import ProviderDirectoryRepository
from match_core.schemas.suggestions import Suggestion
from match_core.services.condition_resolver import ConditionResolver
from match_core.services.suggestion_service import SearchSuggestionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search-suggestions"])


@router.get("/suggest", response_model=list[Suggestion], response_model_exclude_none=True)
async def suggest(
    q: str = Query(default="", description="Partial query typed by the user"),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> list[Suggestion]:
    service = SearchSuggestionService(
        providers=ProviderDirectoryRepository(session_factory),
        resolver=ConditionResolver(ConditionTaxonomyRepository(session_factory)),
    )
    try:
        return await service.suggest(q)
    except DataUnavailableError as exc:
        logger.warning("search_suggest failed source=%s", exc.source)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
