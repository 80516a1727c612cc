"""Retry/timeout policy for outbound calls (email provider, startup DB setup)."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from househub.config import get_settings

log = logging.getLogger("uvicorn.error")

T = TypeVar("T")


class TransientError(Exception):
    """Failure worth retrying (timeouts, connection resets, 5xx/429 responses)."""


@dataclass
class RetryPolicy:
    attempts: int = 3
    delay_seconds: float = 1.0
    timeout_seconds: float = 10.0
    retry_on: tuple[type[BaseException], ...] = (TransientError,)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def call(self, fn: Callable[[], T], *, label: str = "request") -> T:
        """Run fn, retrying on retry_on errors with linear backoff (delay * attempt).

        The last error is re-raised once attempts are exhausted."""
        attempts = max(1, self.attempts)
        for attempt in range(1, attempts + 1):
            try:
                return fn()
            except self.retry_on as e:
                if attempt == attempts:
                    log.warning("[Retry] %s failed after %d attempt(s): %s", label, attempt, e)
                    raise
                log.info("[Retry] %s attempt %d/%d failed: %s", label, attempt, attempts, e)
                self.sleep(self.delay_seconds * attempt)
        raise RuntimeError("unreachable")


def default_policy(**overrides) -> RetryPolicy:
    settings = get_settings()
    params = {
        "attempts": settings.retry_attempts,
        "delay_seconds": settings.retry_delay_seconds,
        "timeout_seconds": settings.request_timeout_seconds,
    }
    params.update(overrides)
    return RetryPolicy(**params)
