from __future__ import annotations

from typing import Any, Dict, Optional

import logging
import threading
from uuid import uuid4

from fitai.models.schemas import Profile, ProfileCreate, ProfileUpdate

logger = logging.getLogger(__name__)


class ProfileNotFoundError(LookupError):
    """No profile exists for the requested user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"Profile not found for user '{user_id}'")
        self.user_id = user_id


class ProfileStore:
    """Process-lifetime profile store, one profile per user.

    Rows are keyed by profile id; lookups go through a user_id -> id index.
    Every mutation is a read-modify-write under one lock, so the last writer wins.
    """

    def __init__(self) -> None:
        self._profiles: Dict[str, Profile] = {}
        self._by_user: Dict[str, str] = {}
        self._lock = threading.Lock()

    def _get_locked(self, user_id: str) -> Optional[Profile]:
        profile_id = self._by_user.get(user_id)
        if profile_id is None:
            return None
        return self._profiles.get(profile_id)

    def _require_locked(self, user_id: str) -> Profile:
        existing = self._get_locked(user_id)
        if existing is None:
            raise ProfileNotFoundError(user_id)
        return existing

    def _save_locked(self, profile: Profile) -> Profile:
        self._profiles[profile.id] = profile
        self._by_user[profile.user_id] = profile.id
        return profile

    def get_profile(self, user_id: str) -> Optional[Profile]:
        with self._lock:
            return self._get_locked(user_id)

    def create_or_update_profile(self, user_id: str, fields: Dict[str, Any]) -> Profile:
        """Validate onboarding fields, then create the user's profile or overwrite it.

        Raises pydantic.ValidationError before touching the store.
        """
        payload = ProfileCreate.model_validate(fields)
        data = payload.model_dump(exclude={"completed"})
        with self._lock:
            existing = self._get_locked(user_id)
            if existing is None:
                profile = Profile(
                    id=str(uuid4()),
                    user_id=user_id,
                    completed=dict(payload.completed or {}),
                    **data,
                )
                logger.info(f"[profile.create] uid={user_id} id={profile.id}")
            else:
                completed = dict(existing.completed)
                if payload.completed is not None:
                    completed = dict(payload.completed)
                profile = existing.model_copy(update={**data, "completed": completed})
                logger.info(f"[profile.update] uid={user_id} id={profile.id}")
            return self._save_locked(profile)

    def update_profile(self, user_id: str, fields: Dict[str, Any]) -> Profile:
        """Apply a partial edit of metrics/goal to an existing profile."""
        patch = ProfileUpdate.model_validate(fields).model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            existing = self._require_locked(user_id)
            # re-validate the merged record so bounds still hold
            merged = Profile.model_validate({**existing.model_dump(), **patch})
            logger.info(f"[profile.patch] uid={user_id} fields={sorted(patch)}")
            return self._save_locked(merged)

    def set_completion(self, user_id: str, day_key: str, done: bool) -> Profile:
        with self._lock:
            existing = self._require_locked(user_id)
            completed = {**existing.completed, day_key: bool(done)}
            return self._save_locked(existing.model_copy(update={"completed": completed}))

    def replace_completion(self, user_id: str, completed: Dict[str, bool]) -> Profile:
        """Merge a whole day -> done mapping into the profile."""
        with self._lock:
            existing = self._require_locked(user_id)
            merged = {**existing.completed, **{k: bool(v) for k, v in completed.items()}}
            return self._save_locked(existing.model_copy(update={"completed": merged}))

    def clear(self) -> None:
        with self._lock:
            self._profiles.clear()
            self._by_user.clear()


_store_singleton: Optional[ProfileStore] = None
_singleton_lock = threading.Lock()


def get_profile_store() -> ProfileStore:
    global _store_singleton
    if _store_singleton is not None:
        return _store_singleton
    with _singleton_lock:
        if _store_singleton is None:
            _store_singleton = ProfileStore()
        return _store_singleton
