from __future__ import annotations

import asyncio

import pytest

from conduit_providers.base.errors import (
    AuthenticationError,
    ErrorCode,
    ProviderError,
    RateLimitedError,
    TransientNetworkError,
)
from conduit_providers.base.resilience import retry as retry_mod
from conduit_providers.base.resilience.retry import RetryConfig, retry, retry_async


class _Flaky:
    def __init__(self, *errors: ProviderError):
        self.calls = 0
        self.errors = list(errors)

    async def __call__(self):
        self.calls += 1
        if self.calls <= len(self.errors):
            raise self.errors[self.calls - 1]
        return "ok"


def _server_error(status: int = 500) -> TransientNetworkError:
    return TransientNetworkError("boom", provider="x", code=ErrorCode.SERVER_ERROR, status=status)


@pytest.fixture()
def sleeps(monkeypatch):
    recorded = []

    async def _fake_sleep(delay):
        recorded.append(delay)

    monkeypatch.setattr(retry_mod.asyncio, "sleep", _fake_sleep)
    return recorded


def test_delays_are_capped_exponential():
    cfg = RetryConfig(max_attempts=5, initial_delay_s=1.0, backoff_multiplier=2.0, max_delay_s=3.0)
    assert list(cfg.delays()) == [1.0, 2.0, 3.0, 3.0]


def test_invalid_config_rejected():
    with pytest.raises(ValueError):
        RetryConfig(max_attempts=0)
    with pytest.raises(ValueError):
        RetryConfig(backoff_multiplier=0)
    with pytest.raises(ValueError):
        RetryConfig(max_delay_s=float("inf"))


@pytest.mark.asyncio
async def test_retry_succeeds_after_two_server_errors(sleeps):
    attempt_log = []
    cfg = RetryConfig(attempt_logger=lambda **kw: attempt_log.append(kw))
    flaky = _Flaky(_server_error(), _server_error(502))

    assert await retry_async(flaky, cfg) == "ok"
    assert flaky.calls == 3
    assert sleeps == [1.0, 2.0]
    assert attempt_log[-1]["error"] is None


@pytest.mark.asyncio
async def test_non_retryable_raises_on_first_attempt(sleeps):
    flaky = _Flaky(AuthenticationError("denied", provider="x", status=401))

    with pytest.raises(AuthenticationError):
        await retry_async(flaky, RetryConfig(max_attempts=4))
    assert flaky.calls == 1
    assert sleeps == []


@pytest.mark.asyncio
async def test_exhaustion_surfaces_last_error(sleeps):
    first, second, last = _server_error(500), _server_error(502), _server_error(503)
    flaky = _Flaky(first, second, last)

    with pytest.raises(TransientNetworkError) as ei:
        await retry_async(flaky, RetryConfig(max_attempts=3))
    assert ei.value is last
    assert flaky.calls == 3


@pytest.mark.asyncio
async def test_retry_after_raises_delay(sleeps):
    flaky = _Flaky(RateLimitedError("slow down", provider="x", retry_after=7.0))

    assert await retry_async(flaky, RetryConfig(initial_delay_s=1.0)) == "ok"
    assert sleeps == [7.0]


@pytest.mark.asyncio
async def test_retry_after_is_capped_at_max_delay(sleeps):
    flaky = _Flaky(
        RateLimitedError("slow down", provider="x", retry_after=3600.0),
        RateLimitedError("slow down", provider="x", retry_after=float("inf")),
    )

    assert await retry_async(flaky, RetryConfig(initial_delay_s=1.0, max_delay_s=30.0)) == "ok"
    assert sleeps == [30.0, 30.0]


@pytest.mark.asyncio
async def test_jitter_stays_within_bounds(sleeps):
    flaky = _Flaky(_server_error(), _server_error())
    await retry_async(flaky, RetryConfig(initial_delay_s=1.0, jitter=True))
    assert len(sleeps) == 2
    assert 0.0 <= sleeps[0] <= 1.0
    assert 0.0 <= sleeps[1] <= 2.0


@pytest.mark.asyncio
async def test_decorator_form(sleeps):
    flaky = _Flaky(_server_error())

    @retry(RetryConfig())
    async def run():
        return await flaky()

    assert await run() == "ok"
    assert flaky.calls == 2


@pytest.mark.asyncio
async def test_cancellation_during_backoff_stops_retrying():
    flaky = _Flaky(_server_error(), _server_error())
    task = asyncio.create_task(retry_async(flaky, RetryConfig(initial_delay_s=30.0)))
    for _ in range(5):
        await asyncio.sleep(0)
    assert flaky.calls == 1
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert flaky.calls == 1
