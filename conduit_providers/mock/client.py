"""Deterministic offline provider for tests and CLI demos.

Purpose
-------
Exercise the full adapter pipeline (encode, transport, retry, decode,
tracing) without network access. The adapter is an ordinary
:class:`ProviderAdapter` whose HTTP client is backed by
``httpx.MockTransport``; the handler answers chat completions by echoing the
last user text with synthetic usage.

The mock publishes no model listing, so ``fetch_supported_models`` returns
``None`` and callers fall back to ``metadata().known_models``.

External dependencies
---------------------
``httpx`` only (``MockTransport``).
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import httpx

from ..base.adapter import ProviderAdapter
from ..base.codecs import OpenAIChatCodec
from ..base.dto.metadata import ProviderMetadata
from ..config.defaults import CHAT_COMPLETIONS_PATH, MOCK_API_HOST, MOCK_DEFAULT_MODEL, MOCK_KNOWN_MODELS

ECHO_PREFIX = "echo: "


def _text_of(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "\n".join(
            p.get("text", "") for p in content if isinstance(p, dict) and p.get("type") == "text"
        )
    return ""


def _word_count(text: str) -> int:
    return len(text.split())


def echo_completion(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Build an OpenAI-style completion echoing the last user message."""
    messages: List[Dict[str, Any]] = payload.get("messages") or []
    last_user = next((m for m in reversed(messages) if m.get("role") == "user"), None)
    reply = ECHO_PREFIX + _text_of(last_user.get("content") if last_user else "")
    prompt_tokens = sum(_word_count(_text_of(m.get("content"))) for m in messages)
    completion_tokens = _word_count(reply)
    return {
        "id": "mock-completion",
        "object": "chat.completion",
        "model": payload.get("model") or MOCK_DEFAULT_MODEL,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": reply},
                "finish_reason": "stop",
            }
        ],
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        },
    }


def _handler(request: httpx.Request) -> httpx.Response:
    if request.method == "POST" and request.url.path.endswith("/" + CHAT_COMPLETIONS_PATH):
        payload = json.loads(request.content or b"{}")
        return httpx.Response(200, json=echo_completion(payload))
    return httpx.Response(404, json={"error": {"message": f"no mock route for {request.url.path}"}})


class MockProvider(ProviderAdapter):
    codec = OpenAIChatCodec(provider="mock")
    models_path: Optional[str] = None

    @classmethod
    def metadata(cls) -> ProviderMetadata:
        return ProviderMetadata.new(
            "mock",
            "Mock",
            "Offline echo backend for tests and demos",
            MOCK_DEFAULT_MODEL,
            MOCK_KNOWN_MODELS,
            "",
            [],
        )

    @classmethod
    def resolve_host(cls, store) -> str:
        return MOCK_API_HOST

    @classmethod
    def build_http_transport(cls) -> httpx.AsyncBaseTransport:
        return httpx.MockTransport(_handler)


__all__ = ["MockProvider", "echo_completion", "ECHO_PREFIX"]
