"""
Normalized provider error codes (taxonomy).

Defines the `ErrorCode` enumeration used across provider adapters, the
transport client and the retry policy. Values are lowercase snake_case and are
considered a stable public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CONFIGURATION = "configuration"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    MALFORMED_INPUT = "malformed_input"
    RESPONSE_SHAPE = "response_shape"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNKNOWN = "unknown"


# Codes the retry policy treats as worth another attempt.
RETRYABLE_CODES: tuple[ErrorCode, ...] = (
    ErrorCode.RATE_LIMIT,
    ErrorCode.TRANSIENT,
    ErrorCode.TIMEOUT,
    ErrorCode.SERVER_ERROR,
    ErrorCode.UNAVAILABLE,
)


__all__ = ["ErrorCode", "RETRYABLE_CODES"]
