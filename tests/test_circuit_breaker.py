import asyncio

import pytest

from mindvault.deployment.circuit_breaker import CircuitBreaker, CircuitOpenError, CircuitState


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


async def ok():
    return "ok"


async def boom():
    raise RuntimeError("provider down")


def fail(breaker):
    with pytest.raises(RuntimeError):
        asyncio.run(breaker.call(boom))


def test_opens_after_threshold_and_rejects():
    breaker = CircuitBreaker(failure_threshold=2, reset_timeout=30.0, clock=FakeClock())

    fail(breaker)
    assert breaker.state == CircuitState.CLOSED
    fail(breaker)
    assert breaker.state == CircuitState.OPEN

    with pytest.raises(CircuitOpenError):
        asyncio.run(breaker.call(ok))


def test_success_resets_failure_count():
    breaker = CircuitBreaker(failure_threshold=2, clock=FakeClock())

    fail(breaker)
    assert asyncio.run(breaker.call(ok)) == "ok"
    fail(breaker)

    assert breaker.state == CircuitState.CLOSED


def test_half_open_probe_closes_on_success():
    clock = FakeClock()
    breaker = CircuitBreaker(failure_threshold=1, reset_timeout=30.0, clock=clock)
    fail(breaker)

    clock.now += 31
    assert asyncio.run(breaker.call(ok)) == "ok"

    assert breaker.state == CircuitState.CLOSED
    assert breaker.get_stats()["failures"] == 0


def test_half_open_probe_reopens_on_failure():
    clock = FakeClock()
    breaker = CircuitBreaker(failure_threshold=3, reset_timeout=30.0, clock=clock)
    for _ in range(3):
        fail(breaker)

    clock.now += 31
    fail(breaker)

    assert breaker.state == CircuitState.OPEN
    with pytest.raises(CircuitOpenError):
        asyncio.run(breaker.call(ok))


async def hang():
    await asyncio.sleep(10)


def time_out(breaker):
    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(asyncio.wait_for(breaker.call(hang), timeout=0.01))


def test_timeouts_count_as_failures():
    breaker = CircuitBreaker(failure_threshold=2, clock=FakeClock())

    time_out(breaker)
    assert breaker.failures == 1
    time_out(breaker)

    assert breaker.state == CircuitState.OPEN
    with pytest.raises(CircuitOpenError):
        asyncio.run(breaker.call(ok))


def test_timed_out_probe_reopens_then_recovers():
    clock = FakeClock()
    breaker = CircuitBreaker(failure_threshold=1, reset_timeout=30.0, clock=clock)
    fail(breaker)

    clock.now += 31
    time_out(breaker)
    assert breaker.state == CircuitState.OPEN

    clock.now += 31
    assert asyncio.run(breaker.call(ok)) == "ok"
    assert breaker.state == CircuitState.CLOSED
    assert breaker.half_open_calls == 0
