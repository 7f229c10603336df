import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from dotenv import load_dotenv

load_dotenv()

MODE_SYNC = "sync"
MODE_PREDICTION = "prediction"

DEFAULT_WATSONX_URL = "https://us-south.ml.cloud.ibm.com"
DEFAULT_WATSONX_VERSION = "2023-05-29"
DEFAULT_MODEL_ID = "ibm/granite-13b-instruct-v2"
DEFAULT_REPLICATE_URL = "https://api.replicate.com/v1"


@dataclass(frozen=True)
class DecodingParams:
    max_new_tokens: int = 500
    temperature: float = 0.7
    top_p: float = 0.9
    top_k: int = 50


@dataclass(frozen=True)
class GenerationConfig:
    """Everything the generation client needs, resolved once at construction.

    ``sync`` mode posts to a text-generation URL and reads the text from the
    response body. ``prediction`` mode creates a prediction job and polls it.
    """

    mode: str = MODE_SYNC
    api_key: str = ""
    api_url: str = ""
    model_id: str = DEFAULT_MODEL_ID
    base_url: str = DEFAULT_REPLICATE_URL
    model_version: str = ""
    decoding: DecodingParams = field(default_factory=DecodingParams)
    poll_interval: float = 1.0
    max_poll_attempts: int = 30
    timeout: float = 30.0

    @property
    def has_valid_url(self) -> bool:
        url = self.api_url if self.mode == MODE_SYNC else self.base_url
        return url.startswith("http://") or url.startswith("https://")

    @property
    def is_configured(self) -> bool:
        if not self.api_key:
            return False
        if self.mode == MODE_PREDICTION:
            return bool(self.model_version) and self.has_valid_url
        return bool(self.model_id) and self.has_valid_url

    def describe(self) -> Dict[str, Any]:
        # never includes the credential itself
        return {
            "mode": self.mode,
            "api_key_configured": bool(self.api_key),
            "endpoint_valid": self.has_valid_url,
            "model_configured": bool(self.model_version if self.mode == MODE_PREDICTION else self.model_id),
            "configured": self.is_configured,
        }

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "GenerationConfig":
        env = os.environ if environ is None else environ

        prediction_token = env.get("API_TOKEN_IBM", "")
        model_version = env.get("MODEL_IBM_VERSION_HASH", "")
        mode = (env.get("GENERATION_MODE") or "").strip().lower()
        if not mode:
            mode = MODE_PREDICTION if (prediction_token and model_version) else MODE_SYNC
        if mode not in (MODE_SYNC, MODE_PREDICTION):
            raise ValueError(f"GENERATION_MODE must be '{MODE_SYNC}' or '{MODE_PREDICTION}', got '{mode}'")

        api_url = env.get("IBM_GRANITE_API_URL", "")
        if not api_url:
            watsonx_url = env.get("IBM_WATSONX_API_URL", DEFAULT_WATSONX_URL)
            project_id = env.get("IBM_WATSONX_PROJECT_ID", "")
            if watsonx_url.startswith("http"):
                api_url = f"{watsonx_url.rstrip('/')}/ml/v1/text/generation?version={DEFAULT_WATSONX_VERSION}"
                if project_id:
                    api_url += f"&project_id={project_id}"

        return cls(
            mode=mode,
            api_key=prediction_token if mode == MODE_PREDICTION else env.get("IBM_GRANITE_API_KEY", ""),
            api_url=api_url,
            model_id=env.get("IBM_GRANITE_MODEL_ID", DEFAULT_MODEL_ID),
            base_url=env.get("REPLICATE_BASE_URL", DEFAULT_REPLICATE_URL),
            model_version=model_version,
            poll_interval=float(env.get("GENERATION_POLL_INTERVAL", "1.0")),
            max_poll_attempts=int(env.get("GENERATION_MAX_POLL_ATTEMPTS", "30")),
            timeout=float(env.get("GENERATION_TIMEOUT", "30")),
        )
