from __future__ import annotations

import pytest

from app.core.config import AppSettings
from app.services.pacing import (
    FixedDelayPacer,
    NoDelayPacer,
    TokenBucketPacer,
    build_pacer,
)


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.mark.asyncio
async def test_fixed_delay_pacer_sleeps_constant_delay() -> None:
    sleep = RecordingSleep()
    pacer = FixedDelayPacer(0.1, sleep=sleep)

    await pacer.wait()
    await pacer.wait()

    assert sleep.delays == [0.1, 0.1]


def test_fixed_delay_pacer_rejects_negative_delay() -> None:
    with pytest.raises(ValueError):
        FixedDelayPacer(-1)


@pytest.mark.asyncio
async def test_token_bucket_admits_burst_up_to_capacity() -> None:
    pacer = TokenBucketPacer(rate=10.0, capacity=2)

    await pacer.admit()
    await pacer.admit()

    assert not pacer.limiter.has_capacity()


def test_token_bucket_limiter_matches_rate_and_capacity() -> None:
    pacer = TokenBucketPacer(rate=4.0, capacity=2)

    assert pacer.limiter.max_rate == 2
    assert pacer.limiter.time_period == pytest.approx(0.5)


@pytest.mark.parametrize(("rate", "capacity"), [(0.0, 1), (-1.0, 1), (1.0, 0)])
def test_token_bucket_rejects_invalid_parameters(rate: float, capacity: int) -> None:
    with pytest.raises(ValueError):
        TokenBucketPacer(rate, capacity)


@pytest.mark.parametrize(
    ("mode", "expected"),
    [
        ("fixed", FixedDelayPacer),
        ("token_bucket", TokenBucketPacer),
        ("none", NoDelayPacer),
    ],
)
def test_build_pacer_follows_settings(mode: str, expected: type) -> None:
    settings = AppSettings(translation_pacing=mode)
    assert isinstance(build_pacer(settings), expected)


def test_build_pacer_uses_configured_delay() -> None:
    settings = AppSettings(translation_batch_delay_ms=250)
    pacer = build_pacer(settings)
    assert isinstance(pacer, FixedDelayPacer)
    assert pacer.delay == pytest.approx(0.25)
