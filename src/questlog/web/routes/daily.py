"""Daily login routes."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from questlog.gamification import reward_for_streak
from questlog.models import ClaimResult, LoginCheck, LoginReward

router = APIRouter(prefix="/daily")


class DailyStatus(BaseModel):
    check: LoginCheck
    next_reward: LoginReward
    current_streak: int
    max_streak: int


@router.get("", response_model=DailyStatus)
async def daily_status(request: Request):
    """What claiming today would give."""
    ql = request.app.state.quest_log
    check = ql.daily_status()
    state = ql.daily_login.state
    return DailyStatus(
        check=check,
        next_reward=reward_for_streak(check.streak),
        current_streak=state.current_streak,
        max_streak=state.max_streak,
    )


@router.post("/claim", response_model=ClaimResult)
async def claim(request: Request):
    """Claim today's reward. A second claim the same day reports success=false."""
    return request.app.state.quest_log.claim_daily()
