"""conduit_providers package

Uniform adapter layer between a conversational-agent runtime and LLM
chat-completion backends.

Purpose:
    Provide a minimal, stable API for external consumption. Callers build an
    adapter through :func:`create` (or :class:`ProviderFactory`) and use
    ``await adapter.complete(system, messages, tools)``; they never branch on
    which backend answered.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError` and its subclasses, :class:`ErrorCode`
    - Models: :class:`Message`, :class:`Tool`, :class:`Usage`, :class:`ProviderUsage`
    - Factory: :func:`create`, :class:`ProviderFactory`
"""

from typing import Any, Optional

from .base.adapter import ProviderAdapter
from .base.dto import AdapterParams, ConfigKey, ModelInfo, ProviderMetadata
from .base.errors import (
    AuthenticationError,
    ConfigurationError,
    ErrorCode,
    MalformedInputError,
    ProviderError,
    RateLimitedError,
    ResponseShapeError,
    TransientNetworkError,
)
from .base.factory import ProviderFactory, UnknownProviderError
from .base.models import Message, ModelConfig, ProviderUsage, Tool, Usage
from .config import ConfigStore

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "ProviderError",
    "ErrorCode",
    "ConfigurationError",
    "AuthenticationError",
    "RateLimitedError",
    "TransientNetworkError",
    "MalformedInputError",
    "ResponseShapeError",
    "UnknownProviderError",
    # Models
    "Message",
    "ModelConfig",
    "Tool",
    "Usage",
    "ProviderUsage",
    # Metadata
    "ProviderMetadata",
    "ConfigKey",
    "ModelInfo",
    "AdapterParams",
    # Core helpers
    "ProviderAdapter",
    "ProviderFactory",
    "create",
]


def create(
    provider_name: str,
    model: Optional[str] = None,
    store: Optional[ConfigStore] = None,
    *,
    params: Optional[AdapterParams] = None,
    **kwargs: Any,
) -> ProviderAdapter:
    """Instantiate a provider adapter via :class:`ProviderFactory`.

    Parameters
    ----------
    provider_name:
        Canonical provider name (for example, ``"swiss-ai"``).
    model:
        Model id; defaults to the provider's default model.
    store:
        Config store; defaults to the environment (plus ``CONDUIT_CONFIG_FILE``).
    params:
        Optional :class:`AdapterParams` overrides.
    **kwargs:
        ``retry_config`` / ``client`` forwarded to ``from_config``.

    Raises
    ------
    UnknownProviderError
        If the provider name is not registered.
    ConfigurationError
        If a required credential is missing.
    """
    return ProviderFactory.create(provider_name, model, store, params=params, **kwargs)
