from fastapi import APIRouter, Depends
from typing import Dict, Any

from fitai.agents.coach import CoachService, get_coach

router = APIRouter()


@router.get("/generation")
async def generation_status(limit: int = 50, coach: CoachService = Depends(get_coach)) -> Dict[str, Any]:
    # Config state plus the latest trace events; the credential itself is never echoed
    client = coach.client
    return {
        "config": client.config.describe(),
        "remote_enabled": client.configured,
        "events": client.trace.recent(limit),
    }
