"""Async HTTP transport for provider adapters.

Purpose:
    Execute authenticated JSON requests against one backend host and turn
    every non-success outcome into the provider error taxonomy. The transport
    never retries; that is the retry policy's job.

External dependencies:
    - ``httpx`` for the underlying ``AsyncClient``. Tests inject a client
      built on ``httpx.MockTransport``.

Timeout strategy:
    - When the transport creates its own client, timeouts come from
      :func:`get_timeout_config` unless an explicit ``httpx.Timeout`` is given.

Error mapping:
    - ``httpx.TimeoutException`` -> ``TransientNetworkError`` (``timeout``)
    - other ``httpx.TransportError`` -> ``TransientNetworkError`` (``transient``)
    - non-2xx answers -> :func:`error_from_status` (auth, rate limit, 5xx, 4xx)
    - 2xx body that is not a JSON object -> ``ResponseShapeError``

Lifecycle:
    - ``aclose()`` / ``async with`` close the client only when the transport
      created it; injected clients belong to the caller.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..errors import ErrorCode, ResponseShapeError, TransientNetworkError, error_from_status
from ..timeouts import get_timeout_config

_ERROR_BODY_LIMIT = 500


def _error_message(response: httpx.Response) -> str:
    """Extract a short human-readable message from an error answer."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:_ERROR_BODY_LIMIT] or response.reason_phrase or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])[:_ERROR_BODY_LIMIT]
        if isinstance(err, str) and err:
            return err[:_ERROR_BODY_LIMIT]
        if body.get("message"):
            return str(body["message"])[:_ERROR_BODY_LIMIT]
    return response.reason_phrase or f"HTTP {response.status_code}"


class TransportClient:
    """Authenticated JSON transport bound to a single backend host.

    Parameters:
        host: Base URL such as ``https://api.swiss-ai-platform.ch``.
        auth: ``httpx.Auth`` strategy applied to every request.
        provider: Provider name stamped on raised errors.
        timeout: Optional explicit timeout for a self-created client.
        client: Optional pre-built ``httpx.AsyncClient`` (not closed by us).
        http_transport: Optional httpx transport for a self-created client.
    """

    def __init__(
        self,
        host: str,
        auth: httpx.Auth,
        *,
        provider: str,
        timeout: Optional[httpx.Timeout] = None,
        client: Optional[httpx.AsyncClient] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.host = host.rstrip("/")
        self.provider = provider
        self._auth = auth
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout or get_timeout_config().as_httpx(),
            transport=http_transport,
        )

    def url(self, path: str) -> str:
        return f"{self.host}/{path.lstrip('/')}"

    async def post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST ``payload`` as JSON and return the decoded JSON object."""
        return await self._send("POST", path, json=payload)

    async def get(self, path: str) -> Dict[str, Any]:
        """GET ``path`` and return the decoded JSON object."""
        return await self._send("GET", path)

    async def _send(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = await self._client.request(
                method,
                self.url(path),
                auth=self._auth,
                headers={"Accept": "application/json"},
                **kwargs,
            )
        except httpx.TimeoutException as e:
            raise TransientNetworkError(
                f"{method} {path} timed out", provider=self.provider, code=ErrorCode.TIMEOUT, raw=e
            ) from e
        except httpx.TransportError as e:
            raise TransientNetworkError(
                f"{method} {path} failed: {e.__class__.__name__}", provider=self.provider, raw=e
            ) from e

        if not response.is_success:
            raise error_from_status(
                response.status_code,
                _error_message(response),
                provider=self.provider,
                headers=response.headers,
            )
        try:
            body = response.json()
        except ValueError as e:
            raise ResponseShapeError(
                "response body is not valid JSON",
                provider=self.provider,
                status=response.status_code,
                raw=e,
            ) from e
        if not isinstance(body, dict):
            raise ResponseShapeError(
                "response body is not a JSON object", provider=self.provider, status=response.status_code
            )
        return body

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "TransportClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"TransportClient(host={self.host!r}, provider={self.provider!r}, auth={self._auth!r})"


__all__ = ["TransportClient"]
