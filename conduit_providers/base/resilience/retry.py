"""Async retry policy for provider calls.

Only :class:`ProviderError` instances whose ``code`` is in
``RetryConfig.retryable_codes`` are retried; every other error (including
authentication and configuration failures) propagates on the attempt that
raised it. After the final attempt the last error is re-raised unchanged.

Delays grow exponentially from ``initial_delay_s`` by ``backoff_multiplier``
and are capped at ``max_delay_s``. A ``retry_after`` hint on the error (rate
limiting) raises the delay to at least that value, still capped at
``max_delay_s``. Sleeping uses ``asyncio.sleep`` so cancelling the awaiting
task cancels the pending wait and no timer outlives the call.
"""
from __future__ import annotations

import asyncio
import functools
import math
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, Protocol, TypeVar

from ...config.defaults import (
    RETRY_DEFAULT_BACKOFF_MULTIPLIER,
    RETRY_DEFAULT_INITIAL_DELAY_SECONDS,
    RETRY_DEFAULT_MAX_ATTEMPTS,
    RETRY_DEFAULT_MAX_DELAY_SECONDS,
)
from ..errors import RETRYABLE_CODES, ErrorCode, ProviderError

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    """Bounded exponential backoff.

    ``max_attempts`` counts the first call, so ``max_attempts=1`` disables
    retrying. With ``jitter`` enabled each delay is drawn uniformly from
    ``[0, computed_delay]``.
    """

    max_attempts: int = RETRY_DEFAULT_MAX_ATTEMPTS
    initial_delay_s: float = RETRY_DEFAULT_INITIAL_DELAY_SECONDS
    backoff_multiplier: float = RETRY_DEFAULT_BACKOFF_MULTIPLIER
    max_delay_s: float = RETRY_DEFAULT_MAX_DELAY_SECONDS
    jitter: bool = False
    retryable_codes: tuple[ErrorCode, ...] = RETRYABLE_CODES
    attempt_logger: AttemptLogger | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("RetryConfig.max_attempts must be >= 1")
        if self.initial_delay_s < 0:
            raise ValueError("RetryConfig.initial_delay_s must be >= 0")
        if self.backoff_multiplier <= 0:
            raise ValueError("RetryConfig.backoff_multiplier must be > 0")
        if not math.isfinite(self.max_delay_s) or self.max_delay_s < 0:
            raise ValueError("RetryConfig.max_delay_s must be finite and >= 0")

    def delay_for(self, retry_index: int) -> float:
        """Backoff before retry number ``retry_index`` (1-based), without jitter."""
        base = self.initial_delay_s * (self.backoff_multiplier ** max(0, retry_index - 1))
        return max(0.0, min(self.max_delay_s, base))

    def delays(self) -> Iterator[float]:
        """Yield the un-jittered delay preceding each retry."""
        for idx in range(1, self.max_attempts):
            yield self.delay_for(idx)

    def is_retryable(self, error: ProviderError) -> bool:
        return error.code in self.retryable_codes


DEFAULT_RETRY_CONFIG = RetryConfig()


def _next_delay(config: RetryConfig, retry_index: int, error: ProviderError) -> float:
    delay = config.delay_for(retry_index)
    if config.jitter and delay > 0:
        delay = random.random() * delay  # noqa: S311 - not security sensitive
    retry_after = getattr(error, "retry_after", None)
    if isinstance(retry_after, (int, float)) and retry_after > 0:
        delay = max(delay, float(retry_after))
    return min(delay, config.max_delay_s)


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
) -> T:
    """Await ``operation()`` under ``config``, retrying retryable provider errors.

    Raises the last :class:`ProviderError` once attempts are exhausted, or the
    first non-retryable one immediately. ``asyncio.CancelledError`` is never
    caught.
    """
    for attempt in range(1, config.max_attempts + 1):
        try:
            result = await operation()
        except ProviderError as e:
            final = attempt >= config.max_attempts or not config.is_retryable(e)
            delay = None if final else _next_delay(config, attempt, e)
            if config.attempt_logger:
                config.attempt_logger(
                    attempt=attempt,
                    max_attempts=config.max_attempts,
                    delay=delay,
                    error=e,
                )
            if delay is None:
                raise
            if delay > 0:
                await asyncio.sleep(delay)
            continue
        if config.attempt_logger:
            config.attempt_logger(
                attempt=attempt,
                max_attempts=config.max_attempts,
                delay=None,
                error=None,
            )
        return result
    raise RuntimeError("retry_async: loop exited without result")  # pragma: no cover


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Decorator form of :func:`retry_async` for coroutine functions."""

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            return await retry_async(lambda: func(*args, **kwargs), config)

        return wrapper

    return decorator


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry_async",
    "retry",
]
