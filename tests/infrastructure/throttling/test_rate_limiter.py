# 🧪 tests/infrastructure/throttling/test_rate_limiter.py
"""
🧪 RateLimiter на фейковому годиннику.
"""

from __future__ import annotations

import pytest

from catalog_ingest.infrastructure.throttling import RateLimiter

pytestmark = pytest.mark.asyncio


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class ClockSleep:
    """Пауза, що просуває фейковий годинник."""

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        self.clock.now += seconds


async def test_first_request_does_not_wait() -> None:
    clock = FakeClock()
    sleep = ClockSleep(clock)
    limiter = RateLimiter(1000, clock=clock, sleep=sleep)

    assert limiter.is_armed is False
    await limiter.wait_for_next_request()

    assert sleep.calls == []
    assert limiter.is_armed is True
    assert limiter.last_request_at == 100.0


async def test_second_request_waits_remaining_interval() -> None:
    clock = FakeClock()
    sleep = ClockSleep(clock)
    limiter = RateLimiter(1000, clock=clock, sleep=sleep)

    await limiter.wait_for_next_request()
    clock.now += 0.1
    await limiter.wait_for_next_request()

    assert len(sleep.calls) == 1
    assert sleep.calls[0] == pytest.approx(0.9)
    assert limiter.last_request_at == pytest.approx(101.0)


async def test_no_wait_after_interval_elapsed() -> None:
    clock = FakeClock()
    sleep = ClockSleep(clock)
    limiter = RateLimiter(1000, clock=clock, sleep=sleep)

    await limiter.wait_for_next_request()
    clock.now += 5
    await limiter.wait_for_next_request()

    assert sleep.calls == []


async def test_zero_interval_never_sleeps() -> None:
    clock = FakeClock()
    sleep = ClockSleep(clock)
    limiter = RateLimiter(0, clock=clock, sleep=sleep)

    for _ in range(3):
        await limiter.wait_for_next_request()

    assert sleep.calls == []
