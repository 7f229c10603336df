"""
Pytest configuration and fixtures

No test talks to a real generation endpoint: remote calls go through
httpx.MockTransport or the client is left unconfigured.
"""
import pytest

from fitai.agents.client import GenerationClient
from fitai.agents.coach import CoachService, reset_coach
from fitai.config import GenerationConfig
from fitai.dependencies.profile_store import ProfileStore
from fitai.models.schemas import Profile

_GENERATION_ENV = (
    "GENERATION_MODE",
    "IBM_GRANITE_API_KEY",
    "IBM_GRANITE_API_URL",
    "IBM_WATSONX_API_URL",
    "IBM_WATSONX_PROJECT_ID",
    "API_TOKEN_IBM",
    "MODEL_IBM_VERSION_HASH",
)


@pytest.fixture(autouse=True)
def _no_generation_env(monkeypatch):
    """Keep developer credentials out of the tests and reset the coach singleton."""
    for name in _GENERATION_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_coach()
    yield
    reset_coach()


@pytest.fixture
def profile_fields():
    return {
        "name": "Budi",
        "weight": 70,
        "bodyFat": 15,
        "muscleMass": 40,
        "age": 25,
        "goal": "bulking",
    }


@pytest.fixture
def bulking_profile():
    return Profile(
        id="p-1",
        user_id="u-1",
        name="Budi",
        weight=70,
        body_fat=15,
        muscle_mass=40,
        age=25,
        goal="bulking",
    )


@pytest.fixture
def store():
    return ProfileStore()


@pytest.fixture
def unconfigured_client():
    return GenerationClient(GenerationConfig())


@pytest.fixture
def offline_coach(unconfigured_client):
    return CoachService(unconfigured_client)


@pytest.fixture
def sync_config():
    return GenerationConfig(
        mode="sync",
        api_key="test-key",
        api_url="https://granite.test/ml/v1/text/generation?version=2023-05-29",
    )


@pytest.fixture
def prediction_config():
    return GenerationConfig(
        mode="prediction",
        api_key="test-token",
        base_url="https://replicate.test/v1",
        model_version="abc123",
        poll_interval=0,
        max_poll_attempts=3,
    )
