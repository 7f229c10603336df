import asyncio
import logging
from typing import Any, List, Optional

from fitai.agents.client import GenerationClient
from fitai.agents.prompts import (
    build_chat_prompt,
    build_nutrition_prompt,
    build_schedule_prompt,
    build_sleep_prompt,
    build_workout_prompt,
)
from fitai.agents.schedule import parse_weekly_schedule
from fitai.config import GenerationConfig
from fitai.models.schemas import AIPlans, ScheduleDay

logger = logging.getLogger(__name__)


class CoachService:
    """Plan, schedule and chat operations over a single GenerationClient.

    Every method resolves to usable content; remote failures never reach the caller.
    """

    def __init__(self, client: GenerationClient) -> None:
        self.client = client

    async def generate_workout_plan(self, profile: Any) -> str:
        return await self.client.complete(build_workout_prompt(profile))

    async def generate_nutrition_plan(self, profile: Any) -> str:
        return await self.client.complete(build_nutrition_prompt(profile))

    async def generate_sleep_plan(self, profile: Any) -> str:
        return await self.client.complete(build_sleep_prompt(profile))

    async def generate_plans(self, profile: Any) -> AIPlans:
        workout, nutrition, sleep = await self.client.complete_many([
            build_workout_prompt(profile),
            build_nutrition_prompt(profile),
            build_sleep_prompt(profile),
        ])
        logger.info(f"[coach.plans] goal={getattr(profile, 'goal', None)} remote={self.client.configured}")
        return AIPlans(workout_plan=workout, nutrition_plan=nutrition, sleep_plan=sleep)

    async def generate_schedule(self, profile: Any) -> List[ScheduleDay]:
        # canned chat answers are not schedules, so only remote text is parsed
        text = await self.client.try_complete(build_schedule_prompt(profile))
        return parse_weekly_schedule(text, profile.goal)

    async def chat(self, message: str, profile: Optional[Any] = None) -> str:
        if not message or not message.strip():
            raise ValueError("message is required")
        return await self.client.complete(build_chat_prompt(message, profile))


# Singleton accessor used by FastAPI routes
_coach_singleton: Optional[CoachService] = None
_singleton_lock = asyncio.Lock()


async def get_coach() -> CoachService:
    global _coach_singleton
    if _coach_singleton is not None:
        return _coach_singleton
    async with _singleton_lock:
        if _coach_singleton is None:
            _coach_singleton = CoachService(GenerationClient(GenerationConfig.from_env()))
        return _coach_singleton


def reset_coach() -> None:
    global _coach_singleton
    _coach_singleton = None
