"""Authentication strategies attached to outgoing provider requests.

Each strategy is an ``httpx.Auth`` so the transport stays unaware of how a
backend authenticates; the adapter picks a strategy from its configuration
keys and hands it to :class:`~conduit_providers.base.http.TransportClient`.

Strategies
----------
* :class:`BearerTokenAuth` - ``Authorization: Bearer <token>``.
* :class:`ApiKeyHeaderAuth` - credential in a named header (``x-api-key``).
* :class:`NoAuth` - sends nothing; used by local and mock backends.
* :class:`CompositeAuth` - applies several strategies in order.

Credentials are resolved through :func:`require_secret`, so a missing or
placeholder key surfaces as :class:`ConfigurationError` before any request is
built. ``repr`` never shows the credential.
"""
from __future__ import annotations

from typing import Generator

import httpx

from ..config.store import ConfigStore, require_secret


def mask_secret(value: str) -> str:
    """Return a display-safe form of ``value`` keeping at most the last 4 chars."""
    if len(value) <= 8:
        return "***"
    return f"***{value[-4:]}"


class BearerTokenAuth(httpx.Auth):
    """Attach a bearer token to every request."""

    def __init__(self, token: str) -> None:
        if not token:
            raise ValueError("BearerTokenAuth requires a non-empty token")
        self._token = token

    @classmethod
    def from_config(cls, store: ConfigStore, key: str, *, provider: str) -> "BearerTokenAuth":
        return cls(require_secret(store, key, provider=provider))

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request

    def __repr__(self) -> str:
        return f"BearerTokenAuth(token={mask_secret(self._token)!r})"


class ApiKeyHeaderAuth(httpx.Auth):
    """Attach a raw credential under a named header."""

    def __init__(self, header: str, value: str) -> None:
        if not header or not value:
            raise ValueError("ApiKeyHeaderAuth requires a header name and a non-empty value")
        self.header = header
        self._value = value

    @classmethod
    def from_config(
        cls, store: ConfigStore, key: str, *, provider: str, header: str = "x-api-key"
    ) -> "ApiKeyHeaderAuth":
        return cls(header, require_secret(store, key, provider=provider))

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers[self.header] = self._value
        yield request

    def __repr__(self) -> str:
        return f"ApiKeyHeaderAuth(header={self.header!r}, value={mask_secret(self._value)!r})"


class NoAuth(httpx.Auth):
    """Leave requests untouched."""

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        yield request

    def __repr__(self) -> str:
        return "NoAuth()"


class CompositeAuth(httpx.Auth):
    """Apply several single-step strategies to the same request, in order."""

    def __init__(self, *strategies: httpx.Auth) -> None:
        self.strategies = strategies

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        for strategy in self.strategies:
            flow = strategy.auth_flow(request)
            request = next(flow)
            flow.close()
        yield request

    def __repr__(self) -> str:
        return f"CompositeAuth({', '.join(repr(s) for s in self.strategies)})"


__all__ = ["BearerTokenAuth", "ApiKeyHeaderAuth", "NoAuth", "CompositeAuth", "mask_secret"]
