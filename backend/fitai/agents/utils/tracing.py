import logging
from collections import deque
from typing import Any, Deque, Dict, List

logger = logging.getLogger("fitai.generation")


class GenerationTrace:
    """Bounded in-memory record of generation diagnostics.

    Each event is also written to the ``fitai.generation`` logger at the level
    given by the caller. Nothing here changes generation results.
    """

    def __init__(self, max_events: int = 200) -> None:
        self.events: Deque[Dict[str, Any]] = deque(maxlen=max_events)

    def _truncate(self, s: Any, limit: int = 400) -> str:
        try:
            text = s if isinstance(s, str) else repr(s)
        except Exception:
            text = str(s)
        if len(text) > limit:
            return text[:limit] + "…"
        return text

    def _log(self, level: int, kind: str, payload: Dict[str, Any]) -> None:
        entry = {"type": kind, **payload}
        self.events.append(entry)
        detail = " ".join(f"{k}={v}" for k, v in payload.items())
        logger.log(level, f"[generation.{kind}] {detail}".rstrip())

    def on_config(self, **state: Any) -> None:
        self._log(logging.INFO, "config", state)

    def on_unconfigured(self, mode: str) -> None:
        self._log(logging.WARNING, "unconfigured", {"mode": mode, "action": "fallback"})

    def on_request(self, mode: str, url: str, prompt: str) -> None:
        self._log(logging.DEBUG, "request", {"mode": mode, "url": url, "prompt": self._truncate(prompt, 120)})

    def on_success(self, mode: str, text: str) -> None:
        self._log(logging.DEBUG, "success", {"mode": mode, "text": self._truncate(text, 100)})

    def on_failure(self, mode: str, error: Any) -> None:
        self._log(logging.ERROR, "failure", {"mode": mode, "error": self._truncate(error)})

    def on_poll_exhausted(self, prediction_id: str, attempts: int) -> None:
        self._log(logging.WARNING, "poll_exhausted", {"prediction_id": prediction_id, "attempts": attempts})

    def recent(self, limit: int = 50) -> List[Dict[str, Any]]:
        return list(self.events)[-limit:]
