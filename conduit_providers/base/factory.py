"""Name-based lookup and construction of provider adapters.

Map canonical provider names to :class:`ProviderAdapter` subclasses, expose
their static metadata, and build configured instances. Adapter modules are
imported lazily using ``importlib`` so listing providers stays cheap and free
of side effects.

Behavior
--------
- No network I/O or retries happen here. A call returns an
  adapter or raises.
- :class:`ConfigurationError` from adapter construction (missing
  credentials) propagates unchanged so callers can tell a misconfigured
  provider from an unknown one.

Scope
-----
Supported providers: ``swiss-ai``, ``xai`` and ``mock``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, List, Optional, Tuple, Type

from ..config import ConfigStore
from .adapter import ProviderAdapter
from .dto.adapter_params import AdapterParams
from .dto.metadata import ProviderMetadata


class UnknownProviderError(Exception):
    """The name is unregistered, or its module or adapter class cannot be loaded."""


class ProviderFactory:
    """Resolve and create provider adapters by canonical name (e.g., ``"swiss-ai"``).

    Names are matched case-insensitively after trimming; ``_`` and ``-``
    are interchangeable (``swiss_ai`` resolves to ``swiss-ai``).
    """

    # canonical name -> (module path, adapter class name)
    _REGISTRY: Dict[str, Tuple[str, str]] = {
        "swiss-ai": ("conduit_providers.swiss_ai.client", "SwissAIProvider"),
        "xai": ("conduit_providers.xai.client", "XAIProvider"),
        "mock": ("conduit_providers.mock.client", "MockProvider"),
    }

    @classmethod
    def _canonical(cls, provider: str) -> str:
        return (provider or "").lower().strip().replace("_", "-")

    @classmethod
    def adapter_class(cls, provider: str) -> Type[ProviderAdapter]:
        """Return the adapter class registered for ``provider``.

        Raises
        ------
        UnknownProviderError
            When the name or its adapter cannot be resolved.
        """
        entry = cls._REGISTRY.get(cls._canonical(provider))
        if entry is None:
            raise UnknownProviderError(
                f"Unknown provider '{provider}' (supported: {', '.join(cls.supported())})"
            )
        module_path, class_name = entry
        try:
            module = import_module(module_path)
        except ImportError as exc:
            raise UnknownProviderError(f"Provider '{provider}': cannot import {module_path}: {exc}") from exc
        adapter = getattr(module, class_name, None)
        if adapter is None:
            raise UnknownProviderError(f"Provider '{provider}': {module_path} defines no {class_name}")
        return adapter

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the canonical provider names in deterministic order."""
        return tuple(cls._REGISTRY)

    @classmethod
    def metadata(cls, provider: str) -> ProviderMetadata:
        """Return the static metadata of ``provider``; needs no credentials."""
        return cls.adapter_class(provider).metadata()

    @classmethod
    def all_metadata(cls) -> List[ProviderMetadata]:
        return [cls.metadata(name) for name in cls.supported()]

    @classmethod
    def create(
        cls,
        provider: str,
        model: Optional[str] = None,
        store: Optional[ConfigStore] = None,
        *,
        params: Optional[AdapterParams] = None,
        **kwargs: Any,
    ) -> ProviderAdapter:
        """Build a configured adapter via :meth:`ProviderAdapter.from_config`.

        ``model`` defaults to ``params.model`` and then the provider default;
        ``store`` defaults to the environment-backed store. Extra keywords
        (``retry_config``, ``client``) pass through unchanged. Raises
        :class:`UnknownProviderError` or :class:`ConfigurationError`.
        """
        klass = cls.adapter_class(provider)
        return klass.from_config(model, store, params=params, **kwargs)


def create_provider(provider: str, **kwargs: Any) -> ProviderAdapter:
    """Compatibility helper that delegates to :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
