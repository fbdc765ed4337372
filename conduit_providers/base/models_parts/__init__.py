"""Models parts package public surface.

One-class-per-file implementations re-exported for convenience. Prefer
importing from ``conduit_providers.base.models`` for the stable surface.
"""

from .content_part import (
    ContentPart,
    ContentPartType,
    ImageContent,
    TextContent,
    ToolRequest,
    ToolResponse,
)
from .message import Message, Role
from .model_config import ModelConfig
from .tool import Tool
from .usage import ProviderUsage, Usage

__all__ = [
    "ContentPart",
    "ContentPartType",
    "TextContent",
    "ImageContent",
    "ToolRequest",
    "ToolResponse",
    "Message",
    "Role",
    "ModelConfig",
    "Tool",
    "Usage",
    "ProviderUsage",
]
