"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `conduit_providers.base.errors` for the stable surface.
"""

from .error_code import RETRYABLE_CODES, ErrorCode
from .provider_error import (
    AuthenticationError,
    ConfigurationError,
    MalformedInputError,
    ProviderError,
    RateLimitedError,
    ResponseShapeError,
    TransientNetworkError,
)
from .classification import classify_exception, classify_status, error_from_status

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
]
