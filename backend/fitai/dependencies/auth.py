import os
from fastapi import Header, HTTPException, status

DEFAULT_USER_ID = os.getenv("DEFAULT_USER_ID", "demo-user")


async def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    # No accounts: callers may scope requests with X-User-Id, otherwise the single demo user is used
    if x_user_id is None:
        return DEFAULT_USER_ID
    uid = x_user_id.strip()
    if not uid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty X-User-Id header")
    return uid
