"""
Structured provider error exception types.

`ProviderError` wraps backend- and transport-level failures with a normalized
`ErrorCode` for consistent handling, retry logic, and structured logging. The
subclasses name the error kinds callers are expected to branch on; each one
pins its code and retry hint so raise sites stay short.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import RETRYABLE_CODES, ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"swiss-ai"``).
        model: Optional model name associated with the failure.
        retryable: Hint for upstream retry logic (the retry policy decides
            from ``code``).
        status: HTTP status code when the backend answered.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    status: Optional[int] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, status and message."""
        status = f" (status={self.status})" if self.status is not None else ""
        return f"{self.provider}:{self.model or '-'} {self.code.value}{status}: {self.message}"


class ConfigurationError(ProviderError):
    """Required credential or configuration is missing or invalid."""

    def __init__(self, message: str, *, provider: str, key: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.CONFIGURATION, message=message, provider=provider)
        self.key = key


class AuthenticationError(ProviderError):
    """The backend rejected the supplied credentials (401/403)."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        status: Optional[int] = None,
        raw: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.AUTH, message=message, provider=provider, model=model, status=status, raw=raw
        )


class RateLimitedError(ProviderError):
    """The backend signalled throttling; ``retry_after`` holds its hint in seconds."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        status: Optional[int] = 429,
        retry_after: Optional[float] = None,
        raw: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.RATE_LIMIT,
            message=message,
            provider=provider,
            model=model,
            retryable=True,
            status=status,
            raw=raw,
        )
        self.retry_after = retry_after


class TransientNetworkError(ProviderError):
    """Connection reset, timeout or 5xx answer; safe to retry."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        code: ErrorCode = ErrorCode.TRANSIENT,
        model: Optional[str] = None,
        status: Optional[int] = None,
        raw: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            provider=provider,
            model=model,
            retryable=code in RETRYABLE_CODES,
            status=status,
            raw=raw,
        )


class MalformedInputError(ProviderError):
    """The conversation or tools cannot be represented in the backend's schema."""

    def __init__(self, message: str, *, provider: str, model: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.MALFORMED_INPUT, message=message, provider=provider, model=model)


class ResponseShapeError(ProviderError):
    """The backend answered but a required field is absent or invalid."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        status: Optional[int] = None,
        raw: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.RESPONSE_SHAPE,
            message=message,
            provider=provider,
            model=model,
            status=status,
            raw=raw,
        )


__all__ = [
    "ProviderError",
    "ConfigurationError",
    "AuthenticationError",
    "RateLimitedError",
    "TransientNetworkError",
    "MalformedInputError",
    "ResponseShapeError",
]
