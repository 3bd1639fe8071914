"""
LLM call protection: exponential backoff on rate limits and a circuit breaker.
"""

import time
from typing import Callable, Protocol

import pybreaker

from core import get_logger
from monitoring import metrics_collector
from .errors import RateLimitError, UpstreamGenerationError

logger = get_logger(__name__)


class TextLLM(Protocol):
    """Anything with a blocking ``invoke(prompt) -> str`` (GeminiModel, test doubles)."""

    def invoke(self, prompt: str) -> str: ...


_RATE_LIMIT_MARKERS = ("429", "quota exceeded", "rate limit", "resource exhausted", "resourceexhausted")


def is_rate_limit(error: BaseException) -> bool:
    """True when ``error`` is a provider quota/rate-limit refusal."""
    if isinstance(error, RateLimitError):
        return True
    for attr in ("status", "status_code", "code"):
        value = getattr(error, attr, None)
        if value == 429:
            return True
    text = f"{type(error).__name__} {error}".lower()
    return any(marker in text for marker in _RATE_LIMIT_MARKERS)


class BreakerListener(pybreaker.CircuitBreakerListener):
    """Logs circuit breaker state changes."""

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "breaker_state_change",
            breaker=cb.name,
            from_state=str(old_state),
            to_state=str(new_state),
        )


def create_breaker(name: str = "llm", fail_max: int = 5, reset_timeout: int = 30) -> pybreaker.CircuitBreaker:
    return pybreaker.CircuitBreaker(
        fail_max=fail_max,
        reset_timeout=reset_timeout,
        name=name,
        listeners=[BreakerListener()],
    )


class ResilientCaller:
    """
    Calls an LLM with retry-on-429 and circuit breaker protection.

    Retries only rate limits: ``initial_delay * 2**n`` seconds between
    attempts, ``max_retries`` extra attempts. Every other failure is wrapped
    in ``UpstreamGenerationError`` straight away.
    """

    def __init__(
        self,
        llm: TextLLM,
        role: str,
        breaker: pybreaker.CircuitBreaker | None = None,
        max_retries: int = 3,
        initial_delay: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.llm = llm
        self.role = role
        self.breaker = breaker or create_breaker()
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self._sleep = sleep

    def __call__(self, prompt: str) -> str:
        retries = 0
        while True:
            start = time.time()
            try:
                text = self.breaker.call(self.llm.invoke, prompt)
            except pybreaker.CircuitBreakerError as e:
                metrics_collector.record_llm_call(self.role, "breaker_open", time.time() - start)
                logger.error("llm_breaker_open", role=self.role)
                raise UpstreamGenerationError(f"{self.role} unavailable: circuit breaker open", self.role) from e
            except Exception as e:
                duration = time.time() - start
                if is_rate_limit(e):
                    metrics_collector.record_llm_call(self.role, "rate_limited", duration)
                    if retries < self.max_retries:
                        retries += 1
                        delay = self.initial_delay * 2 ** (retries - 1)
                        logger.warning(
                            "llm_rate_limited",
                            role=self.role,
                            attempt=retries,
                            max_retries=self.max_retries,
                            delay=delay,
                        )
                        self._sleep(delay)
                        continue
                    raise RateLimitError(f"Quota Exceeded for {self.role}: {e}", self.role) from e

                metrics_collector.record_llm_call(self.role, "error", duration)
                logger.error("llm_call_failed", role=self.role, error=str(e))
                raise UpstreamGenerationError(f"{self.role} failed: {e}", self.role) from e

            metrics_collector.record_llm_call(self.role, "success", time.time() - start)
            if not isinstance(text, str):
                text = getattr(text, "content", None) or str(text)
            return text
