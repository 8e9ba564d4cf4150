"""Achievement routes - catalog, unlocks, claims and notifications."""

from datetime import datetime

from fastapi import APIRouter, HTTPException, Request

from questlog.models import CamelModel, Tier, UnlockNotification

router = APIRouter(prefix="/achievements")


class AchievementView(CamelModel):
    id: str
    title: str
    description: str
    tier: Tier
    icon: str
    points: int
    secret: bool
    unlocked: bool
    claimed: bool
    unlocked_at: datetime | None = None


@router.get("", response_model=list[AchievementView])
async def list_achievements(request: Request, unlocked_only: bool = False):
    """Every catalog entry with its unlock state."""
    engine = request.app.state.quest_log.achievements
    views = []
    for definition in engine.catalog:
        record = engine.unlocked.get(definition.id)
        if record is None and unlocked_only:
            continue
        views.append(
            AchievementView(
                id=definition.id,
                title=definition.title,
                description=definition.description,
                tier=definition.tier,
                icon=definition.icon,
                points=definition.points,
                secret=definition.secret,
                unlocked=record is not None,
                claimed=bool(record and record.claimed),
                unlocked_at=record.unlocked_at if record else None,
            )
        )
    return views


@router.get("/score")
async def score(request: Request) -> dict:
    engine = request.app.state.quest_log.achievements
    return {"score": engine.score(), "unclaimed": engine.unclaimed()}


@router.get("/notifications", response_model=list[UnlockNotification])
async def notifications(request: Request):
    return request.app.state.quest_log.achievements.pending_notifications()


@router.delete("/notifications/{achievement_id}", status_code=204)
async def dismiss(request: Request, achievement_id: str):
    request.app.state.quest_log.achievements.dismiss(achievement_id)


@router.post("/claim-all")
async def claim_all(request: Request) -> dict:
    ql = request.app.state.quest_log
    claimed = ql.claim_all_achievements()
    return {"claimed": claimed, "score": ql.achievements.score()}


@router.post("/{achievement_id}/claim")
async def claim(request: Request, achievement_id: str) -> dict:
    ql = request.app.state.quest_log
    if ql.achievements.get(achievement_id) is None:
        raise HTTPException(status_code=404, detail="Achievement not found")
    if not ql.claim_achievement(achievement_id):
        raise HTTPException(status_code=409, detail="Not unlocked or already claimed")
    return {"claimed": [achievement_id], "score": ql.achievements.score()}
