"""ProviderAdapter: the uniform per-backend orchestration unit.

Purpose:
- Give every backend the same three operations (``metadata``, ``complete``,
  ``fetch_supported_models``) while delegating the parts that vary to two
  pluggable capabilities: an ``httpx.Auth`` strategy and a
  :class:`~conduit_providers.base.codecs.FormatCodec`.
- New backends subclass this class, set ``codec`` and the path attributes,
  and implement :meth:`metadata`. They do not override ``complete``.

Call flow (``complete``):
    encode -> retry(post + check_error) -> decode -> resolve model
    -> trace -> ``(Message, ProviderUsage)``

Failure modes:
- :class:`ConfigurationError` from :meth:`from_config` when a required
  credential is absent; raised before any transport exists.
- :class:`MalformedInputError` from encoding; never retried.
- Transport and backend errors after the retry policy gave up; the last
  observed error is raised unchanged.
- :class:`ResponseShapeError` when the reply cannot be decoded.
Missing usage is the one tolerated gap: it degrades to ``Usage()``.

Concurrency:
- Adapters hold only read-only state (model config, transport, retry config)
  so independent ``complete`` calls may run concurrently on one instance.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from typing import ClassVar, List, Optional, Sequence, Tuple

import httpx

from ..config import ConfigStore, default_config_store, get_param
from ..config.defaults import CHAT_COMPLETIONS_PATH, MODELS_PATH
from .auth import BearerTokenAuth, NoAuth
from .codecs import FormatCodec
from .dto.adapter_params import AdapterParams
from .dto.metadata import ProviderMetadata
from .errors import ConfigurationError, ProviderError
from .http import TransportClient
from .logging import LogContext, get_logger, normalized_log_event
from .models import Message, ModelConfig, ProviderUsage, Tool, Usage
from .resilience.retry import RetryConfig, retry_async
from .tracing import TraceRecord, emit_debug_trace


class ProviderAdapter:
    """Base class for provider adapters.

    Class attributes set by subclasses:
        codec: Format codec instance for the backend's wire format.
        chat_path: Path of the chat-completion endpoint.
        models_path: Path of the model listing endpoint; ``None`` when the
            backend has no listing capability.
        api_key_config: Name of the required secret key; ``None`` for
            unauthenticated backends.
        host_config: Name of the optional host override key.
    """

    codec: ClassVar[FormatCodec]
    chat_path: ClassVar[str] = CHAT_COMPLETIONS_PATH
    models_path: ClassVar[Optional[str]] = MODELS_PATH
    api_key_config: ClassVar[Optional[str]] = None
    host_config: ClassVar[Optional[str]] = None

    def __init__(
        self,
        model_config: ModelConfig,
        transport: TransportClient,
        *,
        retry_config: Optional[RetryConfig] = None,
    ) -> None:
        self._model = model_config
        self._transport = transport
        self._retry_config = retry_config or RetryConfig()
        self._logger = get_logger(self.provider_name)

    # ----- Static description -----
    @classmethod
    def metadata(cls) -> ProviderMetadata:  # pragma: no cover - abstract
        """Return the static provider descriptor. Pure: no I/O, no credentials."""
        raise NotImplementedError

    @property
    def provider_name(self) -> str:
        return self.metadata().name

    def get_model_config(self) -> ModelConfig:
        return self._model

    # ----- Construction -----
    @classmethod
    def build_auth(cls, store: ConfigStore) -> httpx.Auth:
        """Return the auth strategy; raises ``ConfigurationError`` when the credential is missing."""
        if cls.api_key_config is None:
            return NoAuth()
        return BearerTokenAuth.from_config(store, cls.api_key_config, provider=cls.metadata().name)

    @classmethod
    def resolve_host(cls, store: ConfigStore) -> str:
        """Return the host override from ``store`` or the key's published default.

        Raises ``ConfigurationError`` when neither yields a host.
        """
        meta = cls.metadata()
        key = meta.config_key(cls.host_config) if cls.host_config else None
        default = key.default if key is not None else None
        host = get_param(store, cls.host_config, default) if cls.host_config else default
        if not host:
            raise ConfigurationError(
                f"no host configured for {meta.name} (set {cls.host_config or 'a host key'})",
                provider=meta.name,
                key=cls.host_config,
            )
        return host

    @classmethod
    def build_http_transport(cls) -> Optional[httpx.AsyncBaseTransport]:
        """Return a custom httpx transport, or ``None`` for the default network one."""
        return None

    @classmethod
    def from_config(
        cls,
        model: str | ModelConfig | None = None,
        store: Optional[ConfigStore] = None,
        *,
        retry_config: Optional[RetryConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        params: Optional[AdapterParams] = None,
    ) -> "ProviderAdapter":
        """Build an adapter from configuration.

        Parameters:
            model: Model id or config; defaults to the provider's default model.
            store: Config store; defaults to :func:`default_config_store`.
            retry_config: Retry policy override.
            client: Pre-built ``httpx.AsyncClient`` (tests inject a mock transport).
            params: Optional typed overrides (host, sampling, timeout, attempts).

        Raises:
            ConfigurationError: A required credential is missing. Raised
                before any transport is created.
        """
        store = store if store is not None else default_config_store()
        auth = cls.build_auth(store)
        host = params.host if params is not None and params.host else cls.resolve_host(store)
        model_config = cls._model_config(model, params)

        timeout = None
        if params is not None and params.timeout_seconds is not None:
            timeout = httpx.Timeout(params.timeout_seconds)
        if params is not None and params.max_attempts is not None:
            retry_config = dataclasses.replace(retry_config or RetryConfig(), max_attempts=params.max_attempts)

        transport = TransportClient(
            host,
            auth,
            provider=cls.metadata().name,
            timeout=timeout,
            client=client,
            http_transport=cls.build_http_transport(),
        )
        return cls(model_config, transport, retry_config=retry_config)

    @classmethod
    def _model_config(cls, model: str | ModelConfig | None, params: Optional[AdapterParams]) -> ModelConfig:
        if isinstance(model, ModelConfig):
            return model
        name = model or (params.model if params else None) or cls.metadata().default_model
        if params is None:
            return ModelConfig.new_or_fail(name)
        return ModelConfig(
            model_name=name,
            context_limit=params.context_limit,
            temperature=params.temperature,
            max_tokens=params.max_tokens,
        )

    # ----- Operations -----
    async def complete(
        self,
        system: str,
        messages: Sequence[Message],
        tools: Sequence[Tool] = (),
    ) -> Tuple[Message, ProviderUsage]:
        """Run one chat completion and return the reply with usage.

        The request payload is built once and re-sent verbatim on every retry.
        """
        model_name = self._model.model_name
        ctx = LogContext(provider=self.provider_name, model=model_name, operation="complete")
        self._log_chat_start(ctx, messages, tools)
        started = time.monotonic()
        try:
            payload = self.codec.encode(self._model, system, messages, tools)

            async def _attempt() -> dict:
                body = await self._transport.post(self.chat_path, payload)
                self.codec.check_error(body)
                return body

            response = await retry_async(_attempt, self._build_retry_config(ctx, phase="chat"))
            message, usage = self.codec.decode(response)
        except ProviderError as e:
            if e.model is None:
                e.model = model_name
            self._log_error(ctx, e)
            raise

        if usage is None:
            normalized_log_event(
                self._logger, "chat.usage_missing", ctx, phase="decode", level=logging.DEBUG
            )
            usage = Usage()
        resolved = self.codec.get_model(response) or model_name
        emit_debug_trace(
            TraceRecord(
                provider=self.provider_name,
                model_config=self._model,
                request=payload,
                response=response,
                usage=usage,
            )
        )
        normalized_log_event(
            self._logger,
            "chat.success",
            dataclasses.replace(ctx, model=resolved),
            phase="finalize",
            emitted=bool(message.content),
            tokens=usage,
            latency_ms=int((time.monotonic() - started) * 1000),
            tool_requests=len(message.tool_requests()) or None,
        )
        return message, ProviderUsage(model=resolved, usage=usage)

    async def fetch_supported_models(self) -> Optional[List[str]]:
        """Return the backend's live model ids, sorted and de-duplicated.

        Returns ``None`` when the backend has no listing capability. Raises
        :class:`ResponseShapeError` when the listing is malformed.
        """
        if self.models_path is None:
            return None
        ctx = LogContext(provider=self.provider_name, model=self._model.model_name, operation="models")
        models_path = self.models_path
        try:
            body = await retry_async(
                lambda: self._transport.get(models_path),
                self._build_retry_config(ctx, phase="models"),
            )
            ids = self.codec.decode_model_listing(body)
        except ProviderError as e:
            self._log_error(ctx, e, event="models.error")
            raise
        models = sorted(set(ids))
        normalized_log_event(self._logger, "models.fetch", ctx, phase="finalize", count=len(models))
        return models

    # ----- Lifecycle -----
    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "ProviderAdapter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ----- helpers -----
    def _build_retry_config(self, ctx: LogContext, phase: str) -> RetryConfig:
        """Attach a structured ``retry.attempt`` logger unless the caller supplied one."""
        if self._retry_config.attempt_logger is not None:
            return self._retry_config

        def _attempt_logger(*, attempt: int, max_attempts: int, delay, error: ProviderError | None):
            if error is None:
                return
            normalized_log_event(
                self._logger,
                "retry.attempt",
                ctx,
                phase=phase,
                attempt=attempt,
                max_attempts=max_attempts,
                delay=delay,
                error_code=error.code.value,
                status=error.status,
                will_retry=delay is not None,
                level=logging.WARNING,
            )

        return dataclasses.replace(self._retry_config, attempt_logger=_attempt_logger)

    def _log_chat_start(self, ctx: LogContext, messages: Sequence[Message], tools: Sequence[Tool]) -> None:
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            messages=len(messages),
            has_tools=bool(tools),
            temperature=self._model.temperature,
            max_tokens=self._model.max_tokens,
        )

    def _log_error(self, ctx: LogContext, error: ProviderError, event: str = "chat.error") -> None:
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="error",
            error_code=error.code.value,
            status=error.status,
            error=error.message,
            level=logging.ERROR,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self._model.model_name!r}, transport={self._transport!r})"


__all__ = ["ProviderAdapter"]
