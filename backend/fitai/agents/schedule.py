import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from fitai.models.schemas import Goal, ScheduleDay

DAY_KEYS: Sequence[str] = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
DAY_NAMES: Sequence[str] = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")

GENERIC_WORKOUT = "Latihan Umum"

# Per-goal labels, Senin..Minggu, used for any day the generated text does not cover
FALLBACK_SCHEDULES: Dict[Goal, Tuple[str, ...]] = {
    Goal.CUTTING: (
        "Latihan Upper Body & Cardio",
        "Latihan Lower Body",
        "Cardio HIIT",
        "Latihan Push (Dada, Bahu, Trisep)",
        "Latihan Pull (Punggung, Bisep)",
        "Cardio Steady State",
        "Istirahat Total",
    ),
    Goal.BULKING: (
        "Latihan Dada & Trisep",
        "Latihan Punggung & Bisep",
        "Istirahat Aktif",
        "Latihan Kaki & Glutes",
        "Latihan Bahu & Core",
        "Latihan Full Body",
        "Istirahat Total",
    ),
    Goal.RECOMPOSITION: (
        "Latihan Upper Body",
        "Latihan Lower Body",
        "Cardio & Core",
        "Latihan Push",
        "Latihan Pull",
        "Functional Training",
        "Istirahat Total",
    ),
}

_DAY_PATTERNS = [re.compile(rf"{name}:\s*(.+)", re.IGNORECASE) for name in DAY_NAMES]


def fallback_workout(goal: Any, index: int) -> str:
    table = FALLBACK_SCHEDULES.get(goal)
    if table is None:
        return GENERIC_WORKOUT
    return table[index]


def parse_weekly_schedule(text: Optional[str], goal: Any) -> List[ScheduleDay]:
    """Pull one "Hari: latihan" label per weekday out of free text.

    Always returns 7 entries in Senin..Minggu order; days the text does not
    mention take the goal's fallback label.
    """
    text = text or ""
    schedule: List[ScheduleDay] = []
    for index, (key, name, pattern) in enumerate(zip(DAY_KEYS, DAY_NAMES, _DAY_PATTERNS)):
        match = pattern.search(text)
        workout = match.group(1).strip() if match else ""
        if not workout:
            workout = fallback_workout(goal, index)
        schedule.append(ScheduleDay(key=key, day=name, workout=workout))
    return schedule
