"""One-class-per-file implementations behind ``conduit_providers.base.codecs``."""

from .format_codec import FormatCodec
from .openai_chat_codec import OpenAIChatCodec

__all__ = ["FormatCodec", "OpenAIChatCodec"]
