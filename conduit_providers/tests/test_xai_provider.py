from __future__ import annotations

import httpx
import pytest

from conduit_providers.base.errors import ConfigurationError
from conduit_providers.base.models import Message
from conduit_providers.config import InMemoryConfigStore
from conduit_providers.config.defaults import XAI_API_HOST, XAI_DEFAULT_MODEL
from conduit_providers.xai import XAIProvider

from conftest import TEST_API_KEY, ScriptedBackend, completion_body


def test_metadata():
    meta = XAIProvider.metadata()
    assert meta.name == "xai"  # nosec B101
    assert meta.default_model == XAI_DEFAULT_MODEL  # nosec B101
    assert meta.config_key("XAI_API_KEY").secret  # nosec B101
    assert meta.config_key("XAI_HOST").default == XAI_API_HOST  # nosec B101


def test_missing_key():
    with pytest.raises(ConfigurationError) as ei:
        XAIProvider.from_config(None, InMemoryConfigStore({"SWISS_AI_API_KEY": TEST_API_KEY}))
    assert ei.value.key == "XAI_API_KEY"  # nosec B101
    assert ei.value.provider == "xai"  # nosec B101


@pytest.mark.asyncio
async def test_complete_and_list(store, fast_retry):
    backend = ScriptedBackend(
        httpx.Response(200, json=completion_body("grok says hi", model="grok-4")),
    )
    adapter = XAIProvider.from_config(None, store, retry_config=fast_retry, client=backend.client())
    message, usage = await adapter.complete("", [Message.user("hi")])
    assert message.as_concat_text() == "grok says hi"  # nosec B101
    assert usage.model == "grok-4"  # nosec B101
    assert str(backend.requests[0].url) == f"{XAI_API_HOST}/v1/chat/completions"  # nosec B101

    backend.steps = [httpx.Response(200, json={"data": [{"id": "grok-4"}, {"id": "grok-3"}]})]
    backend.requests.clear()
    assert await adapter.fetch_supported_models() == ["grok-3", "grok-4"]  # nosec B101
