"""FastAPI application exposing Questlog as a JSON API."""

from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from questlog.context import QuestLog
from questlog.rawg import RawgAPIError, RawgClient
from questlog.web.routes import achievements, daily, library, profile, shop


def create_app(
    quest_log: QuestLog | None = None,
    rawg_client_factory: Callable[[], RawgClient] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Questlog",
        description="Game backlog tracker with XP, achievements and daily rewards",
    )

    # Store shared state for access in routes
    app.state.quest_log = quest_log or QuestLog()
    app.state.rawg_client_factory = rawg_client_factory or RawgClient

    @app.exception_handler(RawgAPIError)
    async def rawg_error(request: Request, exc: RawgAPIError):
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    # Include routers
    app.include_router(profile.router)
    app.include_router(library.router)
    app.include_router(achievements.router)
    app.include_router(daily.router)
    app.include_router(shop.router)

    return app
