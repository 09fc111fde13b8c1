from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from aiolimiter import AsyncLimiter

from app.core.config import AppSettings

SleepFunc = Callable[[float], Awaitable[None]]


class BatchPacer:
    """Strategy consulted around each translation group.

    ``admit`` is awaited before every group is dispatched (the first included)
    and ``wait`` between consecutive groups. Both default to no-ops.
    """

    async def admit(self) -> None:
        return None

    async def wait(self) -> None:
        return None


class NoDelayPacer(BatchPacer):
    """Dispatch groups back to back."""


class FixedDelayPacer(BatchPacer):
    """Pause for a constant delay between groups."""

    def __init__(self, delay: float = 0.1, *, sleep: SleepFunc | None = None) -> None:
        if delay < 0:
            raise ValueError("Pacing delay must not be negative.")
        self._delay = delay
        self._sleep = sleep or asyncio.sleep

    @property
    def delay(self) -> float:
        return self._delay

    async def wait(self) -> None:
        if self._delay:
            await self._sleep(self._delay)


class TokenBucketPacer(BatchPacer):
    """Admit at most ``rate`` groups per second, with bursts up to ``capacity``.

    Every group dispatch takes a token, so a group following a fast one is held
    until the bucket has leaked enough to admit it.
    """

    def __init__(
        self,
        rate: float = 10.0,
        capacity: int = 1,
        *,
        limiter: AsyncLimiter | None = None,
    ) -> None:
        if rate <= 0:
            raise ValueError("Token bucket rate must be positive.")
        if capacity < 1:
            raise ValueError("Token bucket capacity must be at least 1.")
        self._limiter = limiter or AsyncLimiter(max_rate=capacity, time_period=capacity / rate)

    @property
    def limiter(self) -> AsyncLimiter:
        return self._limiter

    async def admit(self) -> None:
        await self._limiter.acquire()


def build_pacer(settings: AppSettings) -> BatchPacer:
    """Return the pacing strategy selected in configuration."""
    if settings.translation_pacing == "none":
        return NoDelayPacer()
    if settings.translation_pacing == "token_bucket":
        return TokenBucketPacer(
            settings.translation_token_rate,
            settings.translation_token_capacity,
        )
    return FixedDelayPacer(settings.translation_batch_delay_ms / 1000)
