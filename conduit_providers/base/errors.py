"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``conduit_providers.base.errors_parts`` to maintain a stable import path while
enforcing the one-class-per-file governance rule.
"""

from .errors_parts.error_code import RETRYABLE_CODES, ErrorCode
from .errors_parts.provider_error import (
    AuthenticationError,
    ConfigurationError,
    MalformedInputError,
    ProviderError,
    RateLimitedError,
    ResponseShapeError,
    TransientNetworkError,
)
from .errors_parts.classification import (
    classify_exception,
    classify_status,
    error_from_status,
    parse_retry_after,
)

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "ConfigurationError",
    "AuthenticationError",
    "RateLimitedError",
    "TransientNetworkError",
    "MalformedInputError",
    "ResponseShapeError",
    "classify_exception",
    "classify_status",
    "error_from_status",
    "parse_retry_after",
]
