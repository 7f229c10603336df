from fastapi import APIRouter, Depends, HTTPException
import logging

from fitai.agents.coach import CoachService, get_coach
from fitai.dependencies.auth import get_current_user_id
from fitai.dependencies.profile_store import ProfileStore, get_profile_store
from fitai.models.schemas import AIPlans, Profile, ScheduleResponse

router = APIRouter()

logger = logging.getLogger(__name__)


def _require_profile(uid: str, store: ProfileStore) -> Profile:
    profile = store.get_profile(uid)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.post("/generate-plans", response_model=AIPlans)
async def generate_plans(
    uid: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
    coach: CoachService = Depends(get_coach),
):
    profile = _require_profile(uid, store)
    plans = await coach.generate_plans(profile)
    logger.info(f"[plans.generate] uid={uid} goal={profile.goal}")
    return plans


@router.post("/generate-schedule", response_model=ScheduleResponse)
async def generate_schedule(
    uid: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
    coach: CoachService = Depends(get_coach),
):
    profile = _require_profile(uid, store)
    schedule = await coach.generate_schedule(profile)
    return ScheduleResponse(schedule=schedule)
