import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import logging
from typing import Any, Dict
from pydantic import ValidationError
from fastapi import Body, Depends, Request
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse
from starlette.requests import Request as StarletteRequest

load_dotenv()

from fitai.agents.coach import CoachService, get_coach
from fitai.api.diagnostics import router as diagnostics_router
from fitai.api.plans import router as plans_router
from fitai.api.profile import router as profile_router
from fitai.dependencies.auth import get_current_user_id
from fitai.dependencies.profile_store import ProfileStore, get_profile_store
from fitai.models.schemas import ChatRequest, ChatResponse

APP_ENV = os.getenv("APP_ENV", "local")

app = FastAPI(title="FitAI Coach API", version="0.1.0")

# CORS for the local web client
origins = [
    "http://localhost",
    "http://127.0.0.1",
    "http://localhost:5173",
    "*",
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

logger = logging.getLogger("uvicorn.error")

@app.middleware("http")
async def log_requests(request: StarletteRequest, call_next):
    logger.info(f"--> {request.method} {request.url.path}")
    try:
        response = await call_next(request)
        logger.info(f"<-- {response.status_code} {request.method} {request.url.path}")
        return response
    except Exception:
        logger.exception(f"!! {request.method} {request.url.path} crashed")
        raise

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    logger.warning(f"HTTPException {exc.status_code} at {request.url.path}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

@app.get("/")
async def root():
    return {"status": "ok", "env": APP_ENV}

# Routers
app.include_router(profile_router, prefix="/api/profile", tags=["profile"])
app.include_router(plans_router, prefix="/api", tags=["plans"])
app.include_router(diagnostics_router, prefix="/diagnostics", tags=["diagnostics"])

# -----------------------------
# Coach startup + chat endpoint
# -----------------------------

@app.on_event("startup")
async def _startup_init_coach():
    # Build the coach singleton so configuration state is logged once at boot
    coach = await get_coach()
    logger.info(f"[startup] Coach initialized remote_enabled={coach.client.configured}")

@app.post("/api/chat", response_model=ChatResponse)
async def coach_chat(
    payload: Dict[str, Any] = Body(...),
    uid: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
    coach: CoachService = Depends(get_coach),
) -> ChatResponse:
    try:
        req = ChatRequest.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Message is required")
    if not req.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")
    # the profile is optional context; chat works before onboarding too
    profile = store.get_profile(uid)
    response = await coach.chat(req.message, profile)
    return ChatResponse(response=response)
