"""Profile routes - level, titles, gamer card and backups."""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request

from questlog.context import ProfileSummary
from questlog.models import CamelModel

router = APIRouter(prefix="/profile")


class ProfileUpdate(CamelModel):
    name: str | None = None
    title: str | None = None


@router.get("", response_model=ProfileSummary)
async def get_profile(request: Request):
    """Level, wallet, streak and library totals."""
    return request.app.state.quest_log.profile()


@router.patch("", response_model=ProfileSummary)
async def update_profile(request: Request, body: ProfileUpdate):
    ql = request.app.state.quest_log
    if body.name:
        ql.leveling.set_name(body.name)
    if body.title is not None and not ql.leveling.select_title(body.title):
        raise HTTPException(status_code=400, detail="Title not earned yet")
    return ql.profile()


@router.get("/titles", response_model=list[str])
async def titles(request: Request):
    return request.app.state.quest_log.leveling.available_titles()


@router.post("/card", response_model=ProfileSummary)
async def download_card(request: Request):
    """Record that the gamer card was downloaded."""
    ql = request.app.state.quest_log
    ql.track_action("download_card")
    return ql.profile()


@router.get("/backup")
async def export_backup(request: Request) -> dict:
    return request.app.state.quest_log.export_backup()


@router.put("/backup")
async def import_backup(request: Request, data: Any = Body(...)):
    try:
        written = request.app.state.quest_log.import_backup(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"restored": written}
