"""SwissAIProvider adapter.

Swiss AI Platform serves Llama models behind an OpenAI-compatible API:
``POST /v1/chat/completions`` and ``GET /v1/models``, bearer-token auth.
All orchestration (retry, logging, tracing) comes from
:class:`~conduit_providers.base.adapter.ProviderAdapter`; this module only
declares the metadata and wiring.
"""

from __future__ import annotations

from ..base.adapter import ProviderAdapter
from ..base.codecs import OpenAIChatCodec
from ..base.dto.metadata import ConfigKey, ProviderMetadata
from ..config.defaults import (
    SWISS_AI_API_HOST,
    SWISS_AI_DEFAULT_MODEL,
    SWISS_AI_DOC_URL,
    SWISS_AI_KNOWN_MODELS,
)

SWISS_AI_API_KEY = "SWISS_AI_API_KEY"
SWISS_AI_HOST = "SWISS_AI_HOST"


class SwissAIProvider(ProviderAdapter):
    codec = OpenAIChatCodec(provider="swiss-ai")
    api_key_config = SWISS_AI_API_KEY
    host_config = SWISS_AI_HOST

    @classmethod
    def metadata(cls) -> ProviderMetadata:
        return ProviderMetadata.new(
            "swiss-ai",
            "Swiss AI Platform",
            "Swiss AI Platform with Llama models",
            SWISS_AI_DEFAULT_MODEL,
            SWISS_AI_KNOWN_MODELS,
            SWISS_AI_DOC_URL,
            [
                ConfigKey.new(SWISS_AI_API_KEY, True, True, None),
                ConfigKey.new(SWISS_AI_HOST, False, False, SWISS_AI_API_HOST),
            ],
        )


__all__ = ["SwissAIProvider", "SWISS_AI_API_KEY", "SWISS_AI_HOST"]
