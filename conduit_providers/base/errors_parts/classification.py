"""
Error classification helpers mapping exceptions and HTTP answers to the taxonomy.

Implements HTTP status extraction, status-to-code mapping, conversion of a
failed HTTP answer into the matching :class:`ProviderError` subclass, and a
message-based heuristic fallback for exceptions that carry no status.
"""
from __future__ import annotations

import asyncio
import math
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from .error_code import ErrorCode
from .provider_error import (
    AuthenticationError,
    ProviderError,
    RateLimitedError,
    TransientNetworkError,
)


def _as_status(value: Any) -> Optional[int]:
    return value if isinstance(value, int) and 100 <= value < 600 else None


def _extract_status(exc: BaseException) -> Optional[int]:
    """HTTP status carried by ``exc`` itself or by its ``response``, if any."""
    candidates = (
        getattr(exc, "status_code", None),
        getattr(exc, "status", None),
        getattr(getattr(exc, "response", None), "status_code", None),
    )
    for candidate in candidates:
        status = _as_status(candidate)
        if status is not None:
            return status
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def classify_status(status: int) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode`.

    Unlisted 5xx answers are treated as ``SERVER_ERROR``; unlisted 4xx answers
    as ``VALIDATION``; anything else is ``UNKNOWN``.
    """
    mapped = _HTTP_STATUS_MAP.get(status)
    if mapped is not None:
        return mapped
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    if 400 <= status < 500:
        return ErrorCode.VALIDATION
    return ErrorCode.UNKNOWN


def parse_retry_after(headers: Optional[Mapping[str, str]]) -> Optional[float]:
    """Return the ``Retry-After`` header in seconds when it is a finite, non-negative number."""
    if not headers:
        return None
    raw = headers.get("retry-after") or headers.get("Retry-After")
    if not raw:
        return None
    try:
        seconds = float(raw.strip())
    except ValueError:
        return None
    return seconds if math.isfinite(seconds) and seconds >= 0 else None


def error_from_status(
    status: int,
    message: str,
    *,
    provider: str,
    model: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> ProviderError:
    """Build the taxonomy error matching a non-success HTTP answer.

    401/403 become :class:`AuthenticationError`, 429 a :class:`RateLimitedError`
    carrying the ``Retry-After`` hint, 408 and 5xx a
    :class:`TransientNetworkError`; remaining 4xx answers stay a plain
    non-retryable :class:`ProviderError` with the mapped code.
    """
    code = classify_status(status)
    if code is ErrorCode.AUTH:
        return AuthenticationError(message, provider=provider, model=model, status=status)
    if code is ErrorCode.RATE_LIMIT:
        return RateLimitedError(
            message,
            provider=provider,
            model=model,
            status=status,
            retry_after=parse_retry_after(headers),
        )
    if code in (ErrorCode.TIMEOUT, ErrorCode.TRANSIENT, ErrorCode.SERVER_ERROR, ErrorCode.UNAVAILABLE):
        return TransientNetworkError(message, provider=provider, code=code, model=model, status=status)
    return ProviderError(code=code, message=message, provider=provider, model=model, status=status)


# Each entry matches when every fragment occurs in the lowercased message.
_MESSAGE_HINTS: Tuple[Tuple[Tuple[str, ...], ErrorCode], ...] = (
    (("rate", "limit"), ErrorCode.RATE_LIMIT),
    (("timeout",), ErrorCode.TIMEOUT),
    (("timed out",), ErrorCode.TIMEOUT),
    (("unauthorized",), ErrorCode.AUTH),
    (("forbidden",), ErrorCode.AUTH),
    (("api key",), ErrorCode.AUTH),
    (("connection reset",), ErrorCode.TRANSIENT),
    (("unavailable",), ErrorCode.UNAVAILABLE),
    (("not found",), ErrorCode.NOT_FOUND),
    (("server error",), ErrorCode.SERVER_ERROR),
    (("internal error",), ErrorCode.SERVER_ERROR),
)


def _code_from_message(message: str) -> Optional[ErrorCode]:
    text = message.lower()
    for fragments, code in _MESSAGE_HINTS:
        if all(fragment in text for fragment in fragments):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Map any exception onto an :class:`ErrorCode`, first matching rule wins.

    Rules:
        1. A ProviderError keeps its own code.
        2. Timeout exceptions (stdlib, asyncio and httpx).
        3. httpx transport failures (connection refused/reset, protocol errors).
        4. HTTP status mapping.
        5. Substring heuristics.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    status = _extract_status(exc)
    if status is not None:
        return classify_status(status)
    code = _code_from_message(str(exc))
    return code if code is not None else ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
    "classify_status",
    "error_from_status",
    "parse_retry_after",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
