"""
Pydantic DTOs describing a provider type for discovery and configuration.

Purpose
-------
Every adapter class publishes one :class:`ProviderMetadata` so a runtime can
list backends, show their known models, and prompt for the configuration keys
they need, without importing backend-specific code or holding credentials.

External dependencies: Pydantic only (no network/CLI calls). No timeouts.

Failure modes
-------------
Construction raises ``pydantic.ValidationError`` when invariants are broken:
a required :class:`ConfigKey` with a default, blank names, or duplicate key
and model names.

Design
------
- Models are frozen so two calls to ``metadata()`` compare equal and callers
  cannot mutate a shared descriptor.
- Ordered tuples keep display order stable.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ConfigKey(BaseModel):
    """A configuration entry a provider reads from the config store.

    Attributes:
        name: Store key, e.g. ``"SWISS_AI_API_KEY"``.
        required: Whether construction fails when the key is absent.
        secret: Whether the value is a credential (never logged or echoed).
        default: Fallback for optional keys. Must be ``None`` when required.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    required: bool
    secret: bool
    default: Optional[str] = None

    @model_validator(mode="after")
    def _required_has_no_default(self) -> "ConfigKey":
        """Reject required keys that also declare a default."""
        if self.required and self.default is not None:
            raise ValueError(f"required config key {self.name!r} cannot declare a default")
        return self

    @classmethod
    def new(cls, name: str, required: bool, secret: bool, default: Optional[str] = None) -> "ConfigKey":
        return cls(name=name, required=required, secret=secret, default=default)


class ModelInfo(BaseModel):
    """A known model entry published by a provider."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    context_limit: Optional[int] = Field(default=None, gt=0)


class ProviderMetadata(BaseModel):
    """Static descriptor of a provider type.

    Parameters:
        name: Canonical provider key used by the registry (e.g. ``"swiss-ai"``).
        display_name: Human-facing name.
        description: One-line description.
        default_model: Model id used when the caller does not choose one.
        known_models: Curated, display-ordered model list.
        model_doc_link: Documentation URL for the model catalogue.
        config_keys: Ordered configuration keys the provider reads.

    Methods:
        new: Positional convenience constructor accepting plain model names.
        known_model_names: Model ids in display order.
        config_key: Lookup a key by name.
        to_dict: JSON-serializable representation.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    display_name: str
    description: str
    default_model: str = Field(..., min_length=1)
    known_models: Tuple[ModelInfo, ...] = ()
    model_doc_link: str = ""
    config_keys: Tuple[ConfigKey, ...] = ()

    @field_validator("known_models", mode="before")
    @classmethod
    def _coerce_model_names(cls, value: Any) -> Any:
        """Accept bare model-name strings alongside ``ModelInfo`` entries."""
        if isinstance(value, (list, tuple)):
            return tuple(ModelInfo(name=v) if isinstance(v, str) else v for v in value)
        return value

    @model_validator(mode="after")
    def _validate_unique_keys(self) -> "ProviderMetadata":
        """Ensure config key names and known model names are unique."""
        key_names = [k.name for k in self.config_keys]
        if len(key_names) != len(set(key_names)):
            raise ValueError(f"duplicate config keys for provider {self.name!r}")
        model_names = self.known_model_names()
        if len(model_names) != len(set(model_names)):
            raise ValueError(f"duplicate known models for provider {self.name!r}")
        return self

    @classmethod
    def new(
        cls,
        name: str,
        display_name: str,
        description: str,
        default_model: str,
        known_models: Sequence[Union[str, ModelInfo]],
        model_doc_link: str,
        config_keys: Sequence[ConfigKey],
    ) -> "ProviderMetadata":
        return cls(
            name=name,
            display_name=display_name,
            description=description,
            default_model=default_model,
            known_models=tuple(known_models),
            model_doc_link=model_doc_link,
            config_keys=tuple(config_keys),
        )

    def known_model_names(self) -> Tuple[str, ...]:
        return tuple(m.name for m in self.known_models)

    def config_key(self, name: str) -> Optional[ConfigKey]:
        return next((k for k in self.config_keys if k.name == name), None)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the descriptor."""
        return self.model_dump(mode="json")


__all__ = ["ConfigKey", "ModelInfo", "ProviderMetadata"]
