"""
Providers Base Package

Provider-agnostic building blocks shared by every adapter:

- Models: conversation, tool and usage records
- Errors: the normalized failure taxonomy
- Timeouts: HTTP deadlines derived from the environment

Adapters, codecs, transport and the factory live in submodules
(``base.adapter``, ``base.codecs``, ``base.http``, ``base.factory``) and are
imported from there; keeping this surface small lets ``config`` depend on
``base.errors`` without an import cycle.
"""

from .errors import (
    AuthenticationError,
    ConfigurationError,
    ErrorCode,
    MalformedInputError,
    ProviderError,
    RateLimitedError,
    ResponseShapeError,
    TransientNetworkError,
)
from .models import (
    ContentPart,
    ContentPartType,
    ImageContent,
    Message,
    ModelConfig,
    ProviderUsage,
    Role,
    TextContent,
    Tool,
    ToolRequest,
    ToolResponse,
    Usage,
)
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "Role",
    "ContentPartType",
    "ContentPart",
    "TextContent",
    "ImageContent",
    "ToolRequest",
    "ToolResponse",
    "Message",
    "ModelConfig",
    "Tool",
    "Usage",
    "ProviderUsage",
    # Errors
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "AuthenticationError",
    "RateLimitedError",
    "TransientNetworkError",
    "MalformedInputError",
    "ResponseShapeError",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
