"""Match Core FastAPI application.

Hosts the hospital matching engine and the search-suggestion endpoint used by
the patient-facing search.  It only reads the provider directory, condition
taxonomy and staff tables; records are owned and written elsewhere.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from match_core.core.config import settings
from match_core.routers import hospital_match, search_suggestions


def create_app() -> FastAPI:
    app = FastAPI(
        title="Match Core",
        version="0.1.0",
        description="Hospital matching and search suggestion APIs.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(hospital_match.router)
    app.include_router(search_suggestions.router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
