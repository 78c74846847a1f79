from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")

_logger = logging.getLogger(__name__)


class CircuitOpenError(RuntimeError):
    """Raised instead of calling the identity provider while the breaker is open."""

    def __init__(self) -> None:
        super().__init__("circuit_open")


@dataclass
class CircuitBreakerConfig:
    failure_threshold: int = 5
    reset_timeout_seconds: float = 30.0


class CircuitState:
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    def __init__(
        self,
        config: Optional[CircuitBreakerConfig] = None,
        *,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._config = config or CircuitBreakerConfig()
        self._clock = clock or time.monotonic
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at = 0.0

    @property
    def state(self) -> str:
        return self._state

    def _can_attempt(self) -> bool:
        if self._state == CircuitState.OPEN:
            if (self._clock() - self._opened_at) >= self._config.reset_timeout_seconds:
                self._state = CircuitState.HALF_OPEN
                return True
            return False
        return True

    def _on_success(self) -> None:
        self._state = CircuitState.CLOSED
        self._failures = 0

    def _on_failure(self) -> None:
        self._failures += 1
        if self._state == CircuitState.HALF_OPEN or self._failures >= self._config.failure_threshold:
            if self._state != CircuitState.OPEN:
                _logger.warning("Circuit opened after %d failure(s)", self._failures)
            self._state = CircuitState.OPEN
            self._opened_at = self._clock()

    async def run(self, fn: Callable[[], Awaitable[T]], ignore: tuple = ()) -> T:
        """Call ``fn`` unless open. Exceptions listed in ``ignore`` pass through uncounted."""
        if not self._can_attempt():
            raise CircuitOpenError()
        try:
            result = await fn()
        except ignore:
            raise
        except Exception:
            self._on_failure()
            raise
        else:
            self._on_success()
            return result


async def with_retries(
    coro_factory: Callable[[], Awaitable[T]],
    attempts: int = 3,
    backoff_ms: Optional[Iterable[int]] = None,
    retry_on: tuple = (Exception,),
) -> T:
    """Await ``coro_factory()`` up to ``attempts`` times, sleeping between tries.

    Only exceptions matching ``retry_on`` are retried; anything else, and the
    last failure, propagates unchanged.
    """
    backoff_seq: List[int] = list(backoff_ms or [100, 500, 2000])
    last_exc: Exception | None = None
    for attempt in range(max(1, attempts)):
        try:
            return await coro_factory()
        except retry_on as exc:  # noqa: BLE001 - broad for retry wrapper
            last_exc = exc
            if attempt >= attempts - 1:
                break
            delay_ms = backoff_seq[min(attempt, len(backoff_seq) - 1)]
            _logger.warning("Attempt %d/%d failed (%s); retrying in %dms", attempt + 1, attempts, exc, delay_ms)
            await asyncio.sleep(delay_ms / 1000.0)
    assert last_exc is not None
    raise last_exc
