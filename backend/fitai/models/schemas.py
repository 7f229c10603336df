from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Goal(str, Enum):
    CUTTING = "cutting"
    BULKING = "bulking"
    RECOMPOSITION = "recomposition"


class Intent(str, Enum):
    WORKOUT_PLAN = "workout-plan"
    NUTRITION_PLAN = "nutrition-plan"
    SLEEP_PLAN = "sleep-plan"
    WEEKLY_SCHEDULE = "weekly-schedule"
    CHAT = "chat"


class CamelModel(BaseModel):
    # JSON uses camelCase (bodyFat, muscleMass, ...); Python code uses snake_case.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)


class ProfileBase(CamelModel):
    name: str = Field(min_length=1, examples=["Budi"])
    weight: int = Field(strict=True, ge=1, examples=[70])
    body_fat: int = Field(strict=True, ge=0, le=100, examples=[15])
    muscle_mass: int = Field(strict=True, ge=0, le=100, examples=[40])
    age: int = Field(strict=True, ge=1, examples=[25])
    goal: Goal


class ProfileCreate(ProfileBase):
    completed: Optional[Dict[str, bool]] = None


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    weight: Optional[int] = Field(default=None, strict=True, ge=1)
    body_fat: Optional[int] = Field(default=None, strict=True, ge=0, le=100)
    muscle_mass: Optional[int] = Field(default=None, strict=True, ge=0, le=100)
    age: Optional[int] = Field(default=None, strict=True, ge=1)
    goal: Optional[Goal] = None


class Profile(ProfileBase):
    id: str
    user_id: str
    completed: Dict[str, bool] = Field(default_factory=dict)


class CompletionUpdate(CamelModel):
    completed: Dict[str, bool]


class DayCompletion(CamelModel):
    done: bool


class CompletionResponse(CamelModel):
    profile: Profile
    motivation: Optional[str] = None


class ProgressSummary(CamelModel):
    completed_count: int
    total_count: int
    percentage: int
    message: str = Field(strict=True)


class AIPlans(CamelModel):
    workout_plan: str
    nutrition_plan: str
    sleep_plan: str


class ScheduleDay(CamelModel):
    key: str
    day: str
    workout: str


class ScheduleResponse(CamelModel):
    schedule: List[ScheduleDay]


class ChatRequest(CamelModel):
    message: str = Field(strict=True)


class ChatResponse(CamelModel):
    response: str
