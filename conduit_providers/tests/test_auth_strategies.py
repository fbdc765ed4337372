from __future__ import annotations

import httpx
import pytest

from conduit_providers.base.auth import (
    ApiKeyHeaderAuth,
    BearerTokenAuth,
    CompositeAuth,
    NoAuth,
    mask_secret,
)
from conduit_providers.base.errors import ConfigurationError
from conduit_providers.config import InMemoryConfigStore

from conftest import TEST_API_KEY


def _apply(auth: httpx.Auth) -> httpx.Request:
    request = httpx.Request("GET", "https://example.test/v1/models")
    flow = auth.sync_auth_flow(request)
    return next(flow)


def test_bearer_sets_authorization_header():
    req = _apply(BearerTokenAuth(TEST_API_KEY))
    assert req.headers["Authorization"] == f"Bearer {TEST_API_KEY}"


def test_api_key_header():
    req = _apply(ApiKeyHeaderAuth("x-api-key", TEST_API_KEY))
    assert req.headers["x-api-key"] == TEST_API_KEY
    assert "Authorization" not in req.headers


def test_no_auth_leaves_request_untouched():
    req = _apply(NoAuth())
    assert "Authorization" not in req.headers


def test_composite_applies_all_strategies():
    req = _apply(CompositeAuth(BearerTokenAuth(TEST_API_KEY), ApiKeyHeaderAuth("x-org", "org-123456789")))
    assert req.headers["Authorization"].startswith("Bearer ")
    assert req.headers["x-org"] == "org-123456789"


def test_repr_never_shows_credential():
    for auth in (
        BearerTokenAuth(TEST_API_KEY),
        ApiKeyHeaderAuth("x-api-key", TEST_API_KEY),
        CompositeAuth(BearerTokenAuth(TEST_API_KEY)),
    ):
        assert TEST_API_KEY not in repr(auth)
    assert mask_secret("short") == "***"
    assert mask_secret(TEST_API_KEY) == "***cdef"


def test_from_config_reads_store():
    store = InMemoryConfigStore({"SWISS_AI_API_KEY": f"  {TEST_API_KEY} "})
    req = _apply(BearerTokenAuth.from_config(store, "SWISS_AI_API_KEY", provider="swiss-ai"))
    assert req.headers["Authorization"] == f"Bearer {TEST_API_KEY}"


@pytest.mark.parametrize("value", [None, "", "   ", "changeme", "<your key>"])
def test_from_config_missing_key_raises_configuration_error(value):
    store = InMemoryConfigStore({} if value is None else {"SWISS_AI_API_KEY": value})
    with pytest.raises(ConfigurationError) as ei:
        BearerTokenAuth.from_config(store, "SWISS_AI_API_KEY", provider="swiss-ai")
    assert ei.value.key == "SWISS_AI_API_KEY"
    assert ei.value.provider == "swiss-ai"
    assert "SWISS_AI_API_KEY" in ei.value.message


def test_empty_token_rejected():
    with pytest.raises(ValueError):
        BearerTokenAuth("")
    with pytest.raises(ValueError):
        ApiKeyHeaderAuth("", "value")
