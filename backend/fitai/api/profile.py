from fastapi import APIRouter, Body, Depends, HTTPException
import logging
from typing import Any, Dict
from pydantic import ValidationError

from fitai.agents.fallbacks import pick_motivational_phrase, summarize_progress
from fitai.dependencies.auth import get_current_user_id
from fitai.dependencies.profile_store import ProfileNotFoundError, ProfileStore, get_profile_store
from fitai.models.schemas import CompletionResponse, CompletionUpdate, DayCompletion, Profile, ProgressSummary

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("", response_model=Profile)
async def create_or_update_profile(
    payload: Dict[str, Any] = Body(...),
    uid: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
):
    try:
        return store.create_or_update_profile(uid, payload)
    except ValidationError as e:
        logger.warning(f"[profile.upsert] uid={uid} invalid payload: {e.error_count()} error(s)")
        raise HTTPException(status_code=400, detail="Invalid profile data")


@router.get("", response_model=Profile)
async def get_my_profile(uid: str = Depends(get_current_user_id), store: ProfileStore = Depends(get_profile_store)):
    profile = store.get_profile(uid)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.patch("", response_model=Profile)
async def edit_profile(
    payload: Dict[str, Any] = Body(...),
    uid: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
):
    try:
        return store.update_profile(uid, payload)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")
    except ValidationError as e:
        logger.warning(f"[profile.patch] uid={uid} invalid payload: {e.error_count()} error(s)")
        raise HTTPException(status_code=400, detail="Invalid profile data")


@router.patch("/completion", response_model=Profile)
async def update_completion(
    payload: Dict[str, Any] = Body(...),
    uid: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
):
    try:
        update = CompletionUpdate.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid completion data")
    try:
        return store.replace_completion(uid, update.completed)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")


@router.put("/completion/{day_key}", response_model=CompletionResponse)
async def set_day_completion(
    day_key: str,
    payload: DayCompletion,
    uid: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
):
    try:
        profile = store.set_completion(uid, day_key, payload.done)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")
    motivation = pick_motivational_phrase() if payload.done else None
    return CompletionResponse(profile=profile, motivation=motivation)


@router.get("/progress", response_model=ProgressSummary)
async def get_progress(uid: str = Depends(get_current_user_id), store: ProfileStore = Depends(get_profile_store)):
    profile = store.get_profile(uid)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return summarize_progress(profile.completed)
