"""Tests for the AdapterParams DTO and how adapters apply it.

Covers:
- Basic creation and `.model_dump()` round-trip of `AdapterParams`.
- Bounds validation.
- Precedence: explicit model argument over ``params.model`` over the
  provider default; timeout and attempt overrides reach the transport and
  retry policy.
"""

from __future__ import annotations

import pydantic
import pytest

from conduit_providers.base.dto.adapter_params import AdapterParams
from conduit_providers.base.errors import ConfigurationError
from conduit_providers.base.factory import ProviderFactory
from conduit_providers.config import InMemoryConfigStore
from conduit_providers.swiss_ai import SwissAIProvider

from conftest import TEST_API_KEY


def test_adapter_params_round_trip():
    params = AdapterParams(model="llama-4-405b-instruct", temperature=0.3, timeout_seconds=12.5)
    dumped = params.model_dump()
    assert dumped["model"] == "llama-4-405b-instruct"  # nosec B101 - test assertion
    assert dumped["timeout_seconds"] == 12.5  # nosec B101 - test assertion
    assert dumped["max_attempts"] is None  # nosec B101 - test assertion


@pytest.mark.parametrize(
    "kwargs",
    [
        {"temperature": 2.5},
        {"max_tokens": 0},
        {"context_limit": -1},
        {"timeout_seconds": 0},
        {"max_attempts": 0},
    ],
)
def test_adapter_params_bounds(kwargs):
    with pytest.raises(pydantic.ValidationError):
        AdapterParams(**kwargs)


def test_model_precedence():
    store = InMemoryConfigStore({"SWISS_AI_API_KEY": TEST_API_KEY})
    params = AdapterParams(model="from-params")
    explicit = ProviderFactory.create("swiss-ai", "explicit", store, params=params)
    assert explicit.get_model_config().model_name == "explicit"  # nosec B101 - test assertion
    from_params = ProviderFactory.create("swiss-ai", store=store, params=params)
    assert from_params.get_model_config().model_name == "from-params"  # nosec B101 - test assertion
    default = ProviderFactory.create("swiss-ai", store=store)
    assert default.get_model_config().model_name == "llama-3.3-70b-instruct"  # nosec B101 - test assertion


def test_timeout_and_attempts_applied():
    store = InMemoryConfigStore({"SWISS_AI_API_KEY": TEST_API_KEY})
    adapter = ProviderFactory.create(
        "swiss-ai", store=store, params=AdapterParams(timeout_seconds=7.0, max_attempts=5)
    )
    assert adapter._retry_config.max_attempts == 5  # nosec B101 - test assertion
    assert adapter._transport._client.timeout.read == 7.0  # nosec B101 - test assertion


class _UnpublishedHostProvider(SwissAIProvider):
    host_config = "CUSTOM_GATEWAY_HOST"


def test_missing_host_is_configuration_error():
    store = InMemoryConfigStore({"SWISS_AI_API_KEY": TEST_API_KEY})
    with pytest.raises(ConfigurationError) as ei:
        _UnpublishedHostProvider.from_config(None, store)
    assert ei.value.key == "CUSTOM_GATEWAY_HOST"  # nosec B101 - test assertion
    assert ei.value.provider == "swiss-ai"  # nosec B101 - test assertion

    store = InMemoryConfigStore({"SWISS_AI_API_KEY": TEST_API_KEY, "CUSTOM_GATEWAY_HOST": "https://gw.test"})
    assert _UnpublishedHostProvider.resolve_host(store) == "https://gw.test"  # nosec B101 - test assertion
