"""Library routes - browse and edit games."""

from datetime import date, datetime

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import Field

from questlog.context import QuestLog
from questlog.library import LibraryStats, is_unreleased, new_game_id
from questlog.models import CamelModel, GameRecord, GameStatus

router = APIRouter(prefix="/library")


class AddGameRequest(CamelModel):
    title: str | None = None
    platform: str | None = None
    genres: list[str] = Field(default_factory=list)
    rawg_id: str | None = None  # look the game up instead of using title/genres


class StatusUpdate(CamelModel):
    status: GameStatus


class RatingUpdate(CamelModel):
    rating: int = Field(ge=0, le=5)


def _quest_log(request: Request) -> QuestLog:
    return request.app.state.quest_log


def _get_game(ql: QuestLog, game_id: str) -> GameRecord:
    game = ql.library.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return game


@router.get("", response_model=list[GameRecord])
async def list_games(
    request: Request,
    status: GameStatus | None = Query(None, description="Filter by status"),
    sort: str = Query("recent", description="Sort by: recent, title, rating, playtime, released"),
    search: str | None = Query(None, description="Search titles"),
    separate_unreleased: bool = Query(False, description="List unreleased games last"),
):
    """List games in the library."""
    ql = _quest_log(request)
    games = ql.library.by_status(status) if status else list(ql.library.games)

    if search:
        search_lower = search.lower()
        games = [g for g in games if search_lower in g.title.lower()]

    if sort == "recent":
        games.sort(key=lambda g: g.added_at or datetime.min, reverse=True)
    elif sort == "title":
        games.sort(key=lambda g: g.title.lower())
    elif sort == "rating":
        games.sort(key=lambda g: g.rating, reverse=True)
    elif sort == "playtime":
        games.sort(key=lambda g: g.playtime_hours, reverse=True)
    elif sort == "released":
        games.sort(key=lambda g: g.release_date or date.min, reverse=True)

    if separate_unreleased:
        today = ql.clock().date()
        games.sort(key=lambda g: is_unreleased(g, today))

    return games


@router.get("/stats", response_model=LibraryStats)
async def stats(request: Request):
    return _quest_log(request).library.stats()


@router.post("", response_model=GameRecord, status_code=201)
async def add_game(request: Request, body: AddGameRequest):
    """Add a game to the backlog, optionally from a RAWG id."""
    ql = _quest_log(request)

    if body.rawg_id:
        with request.app.state.rawg_client_factory() as client:
            details = client.get_game_details(body.rawg_id)
        record = details.to_record(body.platform)
    elif body.title:
        record = GameRecord(
            id=new_game_id(),
            title=body.title,
            platform=body.platform or "PC",
            genres=body.genres,
        )
    else:
        raise HTTPException(status_code=422, detail="Either title or rawgId is required")

    if not ql.add_game(record):
        raise HTTPException(status_code=409, detail="Game already in library")
    return ql.library.get(record.id)


@router.post("/quest", response_model=GameRecord)
async def quest(request: Request):
    """Quest Giver: a random backlog pick."""
    pick = _quest_log(request).quest()
    if pick is None:
        raise HTTPException(status_code=404, detail="Backlog is empty")
    return pick


@router.get("/{game_id}", response_model=GameRecord)
async def game_detail(request: Request, game_id: str):
    return _get_game(_quest_log(request), game_id)


@router.delete("/{game_id}", response_model=GameRecord)
async def remove_game(request: Request, game_id: str):
    removed = _quest_log(request).remove_game(game_id)
    if removed is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return removed


@router.put("/{game_id}/status", response_model=GameRecord)
async def update_status(request: Request, game_id: str, body: StatusUpdate):
    ql = _quest_log(request)
    _get_game(ql, game_id)
    ql.set_status(game_id, body.status)
    return ql.library.get(game_id)


@router.put("/{game_id}/rating", response_model=GameRecord)
async def update_rating(request: Request, game_id: str, body: RatingUpdate):
    ql = _quest_log(request)
    _get_game(ql, game_id)
    ql.set_rating(game_id, body.rating)
    return ql.library.get(game_id)


@router.post("/{game_id}/refresh", response_model=GameRecord)
async def refresh_game(request: Request, game_id: str):
    """Re-fetch catalog details for a game."""
    ql = _quest_log(request)
    _get_game(ql, game_id)
    with request.app.state.rawg_client_factory() as client:
        details = client.get_game_details(game_id)
    ql.apply_details(game_id, details)
    return ql.library.get(game_id)
