"""
Circuit breaker for the summarizer endpoint.

When the LLM provider is down, every oversized upload would otherwise
wait out the full summarizer timeout. The breaker fails those calls fast
until the provider has had time to recover. Each summarizer owns its own
breaker instance; nothing here is module-global.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class CircuitState(Enum):
    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Failing, reject requests
    HALF_OPEN = "half_open"  # Probing recovery


class CircuitOpenError(Exception):
    """Raised when a call is rejected because the circuit is open."""

    pass


@dataclass
class CircuitBreaker:
    """
    Async circuit breaker.

    States:
    - CLOSED: calls pass through; consecutive failures are counted
    - OPEN: calls rejected until ``reset_timeout`` seconds pass
    - HALF_OPEN: up to ``half_open_max_calls`` probes; one failure reopens

    Usage:
        breaker = CircuitBreaker(failure_threshold=3)
        summary = await breaker.call(client.summarize, text)
    """

    name: str = "summarizer"
    failure_threshold: int = 3
    reset_timeout: float = 30.0
    half_open_max_calls: int = 1
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    state: CircuitState = field(default=CircuitState.CLOSED)
    failures: int = field(default=0)
    opened_at: Optional[float] = field(default=None)
    half_open_calls: int = field(default=0)

    def _should_allow_request(self) -> bool:
        if self.state == CircuitState.OPEN:
            if self.clock() - (self.opened_at or 0.0) < self.reset_timeout:
                return False
            logger.info(f"Circuit {self.name} HALF_OPEN: probing recovery")
            self.state = CircuitState.HALF_OPEN
            self.half_open_calls = 0

        if self.state == CircuitState.HALF_OPEN:
            return self.half_open_calls < self.half_open_max_calls

        return True

    def _record_success(self):
        if self.state == CircuitState.HALF_OPEN:
            logger.info(f"Circuit {self.name} CLOSED: service recovered")
        self.state = CircuitState.CLOSED
        self.failures = 0
        self.half_open_calls = 0

    def _record_failure(self):
        self.failures += 1
        if self.state == CircuitState.HALF_OPEN or self.failures >= self.failure_threshold:
            logger.warning(f"Circuit {self.name} OPEN after {self.failures} failure(s)")
            self.state = CircuitState.OPEN
            self.opened_at = self.clock()

    async def call(self, fn: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        """
        Await ``fn(*args, **kwargs)`` under breaker protection.

        Raises:
            CircuitOpenError: If the circuit rejects the call
            Exception: Original exception from ``fn``

        Cancellation (including a caller's timeout) counts as a failure
        and is re-raised.
        """
        if not self._should_allow_request():
            raise CircuitOpenError(f"Circuit {self.name} is {self.state.value}")

        if self.state == CircuitState.HALF_OPEN:
            self.half_open_calls += 1

        try:
            result = await fn(*args, **kwargs)
        except asyncio.CancelledError:
            # wait_for() enforces timeouts by cancelling; a hung provider
            # must still count against the circuit and free its probe slot
            self._record_failure()
            raise
        except Exception:
            self._record_failure()
            raise

        self._record_success()
        return result

    def get_stats(self) -> dict:
        """Get circuit breaker statistics."""
        return {
            "name": self.name,
            "state": self.state.value,
            "failures": self.failures,
            "opened_at": self.opened_at,
        }
