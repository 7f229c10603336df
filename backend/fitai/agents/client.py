import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from fitai.agents.fallbacks import fallback_response
from fitai.agents.utils.tracing import GenerationTrace
from fitai.config import MODE_PREDICTION, MODE_SYNC, GenerationConfig

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """The remote service did not produce usable text."""


class PredictionTimeout(GenerationError):
    def __init__(self, prediction_id: str, attempts: int) -> None:
        super().__init__(f"prediction {prediction_id} not finished after {attempts} polls")
        self.prediction_id = prediction_id
        self.attempts = attempts


class TextGenerator(Protocol):
    mode: str
    endpoint: str

    async def complete(self, prompt: str) -> str:
        """Return generated text or raise GenerationError."""
        ...


def _http_timeout(config: GenerationConfig) -> httpx.Timeout:
    return httpx.Timeout(config.timeout, connect=10.0)


def _json_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError as e:
        raise GenerationError(f"malformed JSON from {resp.request.url}: {e}") from e


def _raise_for_status(resp: httpx.Response, what: str) -> None:
    if resp.is_success:
        return
    hint = ""
    if resp.status_code == 401:
        hint = " (credential rejected)"
    elif resp.status_code == 403:
        hint = " (check project permissions)"
    raise GenerationError(f"{what} failed: {resp.status_code}{hint} {resp.text[:200]}")


def extract_generated_text(data: Any) -> Optional[str]:
    """Read generated text from a synchronous response body.

    Known shapes, in priority order: ``results[0].generated_text``,
    top-level ``generated_text``, ``choices[0].text`` or
    ``choices[0].message.content``. The first shape present decides.
    """
    if not isinstance(data, dict):
        return None
    results = data.get("results")
    if isinstance(results, list) and results:
        first = results[0]
        return first.get("generated_text") if isinstance(first, dict) else None
    if data.get("generated_text"):
        return data["generated_text"]
    choices = data.get("choices")
    if isinstance(choices, list) and choices:
        choice = choices[0]
        if not isinstance(choice, dict):
            return None
        message = choice.get("message")
        return choice.get("text") or (message.get("content") if isinstance(message, dict) else None)
    return None


def _join_output(output: Any) -> str:
    # prediction output arrives as a list of token chunks or a plain string
    if isinstance(output, list):
        return "".join(str(chunk) for chunk in output if chunk is not None)
    if isinstance(output, str):
        return output
    return ""


class SyncTextGenerator:
    """One POST; the response body already holds the generated text."""

    mode = MODE_SYNC

    def __init__(self, config: GenerationConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.config = config
        self.endpoint = config.api_url
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _body(self, prompt: str) -> Dict[str, Any]:
        d = self.config.decoding
        return {
            "model_id": self.config.model_id,
            "input": prompt,
            "parameters": {
                "decoding_method": "greedy",
                "max_new_tokens": d.max_new_tokens,
                "min_new_tokens": 1,
                "temperature": d.temperature,
                "top_k": d.top_k,
                "top_p": d.top_p,
                "repetition_penalty": 1.0,
            },
        }

    async def complete(self, prompt: str) -> str:
        async with httpx.AsyncClient(timeout=_http_timeout(self.config), transport=self._transport) as client:
            resp = await client.post(self.endpoint, headers=self._headers(), json=self._body(prompt))
        _raise_for_status(resp, "generation request")
        data = _json_body(resp)
        text = extract_generated_text(data)
        if not text:
            raise GenerationError(f"unexpected response shape: keys={sorted(data) if isinstance(data, dict) else type(data).__name__}")
        return text


class PredictionTextGenerator:
    """Create a prediction job, then poll it until it reaches a terminal status."""

    mode = MODE_PREDICTION

    def __init__(self, config: GenerationConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.config = config
        self.endpoint = f"{config.base_url.rstrip('/')}/predictions"
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

    def _body(self, prompt: str) -> Dict[str, Any]:
        d = self.config.decoding
        return {
            "version": self.config.model_version,
            "input": {
                "prompt": prompt,
                "max_tokens": d.max_new_tokens,
                "temperature": d.temperature,
                "top_p": d.top_p,
                "top_k": d.top_k,
            },
        }

    async def complete(self, prompt: str) -> str:
        async with httpx.AsyncClient(timeout=_http_timeout(self.config), transport=self._transport) as client:
            resp = await client.post(self.endpoint, headers=self._headers(), json=self._body(prompt))
            _raise_for_status(resp, "prediction create")
            prediction = _json_body(resp)
            prediction_id = prediction.get("id") if isinstance(prediction, dict) else None
            if not prediction_id:
                raise GenerationError("prediction create response has no id")
            logger.info(f"[generation.prediction] created id={prediction_id}")
            output = await self._poll(client, prediction_id)
        text = _join_output(output)
        if not text:
            raise GenerationError(f"prediction {prediction_id} succeeded with empty output")
        return text

    async def _poll(self, client: httpx.AsyncClient, prediction_id: str) -> Any:
        url = f"{self.endpoint}/{prediction_id}"
        attempts = self.config.max_poll_attempts
        for attempt in range(1, attempts + 1):
            try:
                resp = await client.get(url, headers=self._headers())
                if not resp.is_success:
                    logger.warning(f"[generation.poll] id={prediction_id} attempt={attempt} status={resp.status_code}")
                else:
                    result = _json_body(resp)
                    status = result.get("status") if isinstance(result, dict) else None
                    if status == "succeeded":
                        return result.get("output")
                    if status in ("failed", "canceled"):
                        raise GenerationError(f"prediction {prediction_id} {status}: {result.get('error')}")
            except GenerationError:
                raise
            except httpx.HTTPError as e:
                # a broken poll consumes an attempt, it does not end the job
                logger.warning(f"[generation.poll] id={prediction_id} attempt={attempt} error={e!r}")
            if attempt < attempts:
                await asyncio.sleep(self.config.poll_interval)
        raise PredictionTimeout(prediction_id, attempts)


def build_generator(config: GenerationConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> TextGenerator:
    if config.mode == MODE_PREDICTION:
        return PredictionTextGenerator(config, transport=transport)
    return SyncTextGenerator(config, transport=transport)


class GenerationClient:
    """Resolve every prompt to usable text.

    Without configuration no request is made. Any remote failure (transport,
    status, body shape, polling budget) is recorded and replaced by the
    canned answer for the prompt.
    """

    def __init__(
        self,
        config: GenerationConfig,
        generator: Optional[TextGenerator] = None,
        trace: Optional[GenerationTrace] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self.trace = trace or GenerationTrace()
        if generator is None and config.is_configured:
            generator = build_generator(config, transport=transport)
        self.generator = generator
        self.trace.on_config(**config.describe())

    @property
    def configured(self) -> bool:
        return self.generator is not None

    async def try_complete(self, prompt: str) -> Optional[str]:
        """Remote text, or None when it is unavailable for any reason."""
        if self.generator is None:
            self.trace.on_unconfigured(self.config.mode)
            return None
        mode = getattr(self.generator, "mode", self.config.mode)
        self.trace.on_request(mode, getattr(self.generator, "endpoint", ""), prompt)
        try:
            text = await self.generator.complete(prompt)
        except PredictionTimeout as e:
            self.trace.on_poll_exhausted(e.prediction_id, e.attempts)
            return None
        except (GenerationError, httpx.HTTPError) as e:
            self.trace.on_failure(mode, e)
            return None
        except Exception as e:
            logger.exception("[generation.complete] unexpected generator error")
            self.trace.on_failure(mode, e)
            return None
        if not isinstance(text, str) or not text.strip():
            self.trace.on_failure(mode, "empty text")
            return None
        self.trace.on_success(mode, text)
        return text

    async def complete(self, prompt: str) -> str:
        text = await self.try_complete(prompt)
        if text is None:
            return fallback_response(prompt)
        return text

    async def complete_many(self, prompts: List[str]) -> List[str]:
        # independent calls; results keep the order of ``prompts``
        return list(await asyncio.gather(*(self.complete(p) for p in prompts)))
