"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``conduit_providers.base.models_parts`` to preserve stable imports while
enforcing governance on file size and cohesion.
"""

from .models_parts.content_part import (
    ContentPart,
    ContentPartType,
    ImageContent,
    TextContent,
    ToolRequest,
    ToolResponse,
)
from .models_parts.message import Message, Role
from .models_parts.model_config import ModelConfig
from .models_parts.tool import Tool
from .models_parts.usage import ProviderUsage, Usage

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
