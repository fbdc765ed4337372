"""Format codec public surface.

Re-exports the implementations under ``conduit_providers.base.codecs_parts``.
"""

from .codecs_parts.format_codec import FormatCodec
from .codecs_parts.openai_chat_codec import SUPPORTED_IMAGE_TYPES, TOOL_ERROR_PREFIX, OpenAIChatCodec

__all__ = ["FormatCodec", "OpenAIChatCodec", "SUPPORTED_IMAGE_TYPES", "TOOL_ERROR_PREFIX"]
