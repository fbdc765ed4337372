"""XAIProvider adapter.

xAI exposes Grok models through the OpenAI-compatible chat-completions and
model-listing endpoints, so the adapter is pure wiring over
:class:`ProviderAdapter` and :class:`OpenAIChatCodec`. Keeps xAI defaults and
provider naming intact.
"""

from __future__ import annotations

from ..base.adapter import ProviderAdapter
from ..base.codecs import OpenAIChatCodec
from ..base.dto.metadata import ConfigKey, ProviderMetadata
from ..config.defaults import (
    XAI_API_HOST,
    XAI_DEFAULT_MODEL,
    XAI_DOC_URL,
    XAI_KNOWN_MODELS,
)


class XAIProvider(ProviderAdapter):
    codec = OpenAIChatCodec(provider="xai")
    api_key_config = "XAI_API_KEY"
    host_config = "XAI_HOST"

    @classmethod
    def metadata(cls) -> ProviderMetadata:
        return ProviderMetadata.new(
            "xai",
            "xAI",
            "Grok models from xAI",
            XAI_DEFAULT_MODEL,
            XAI_KNOWN_MODELS,
            XAI_DOC_URL,
            [
                ConfigKey.new("XAI_API_KEY", True, True),
                ConfigKey.new("XAI_HOST", False, False, XAI_API_HOST),
            ],
        )
