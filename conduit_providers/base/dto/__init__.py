"""DTO validation package for providers."""

from .adapter_params import AdapterParams
from .metadata import ConfigKey, ModelInfo, ProviderMetadata

__all__ = [
    "AdapterParams",
    "ConfigKey",
    "ModelInfo",
    "ProviderMetadata",
]
