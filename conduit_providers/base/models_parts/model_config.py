"""
ModelConfig: the backend model an adapter instance targets.

Immutable once constructed; each adapter instance owns exactly one. Optional
sampling hints are forwarded by codecs only when set.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ModelConfig:
    """Target model identifier plus size and sampling hints.

    Attributes:
        model_name: Backend model identifier (non-empty).
        context_limit: Optional context-window size in tokens.
        temperature: Optional sampling temperature.
        max_tokens: Optional completion token cap.
    """

    model_name: str
    context_limit: Optional[int] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.model_name, str) or not self.model_name.strip():
            raise ValueError("ModelConfig.model_name must be a non-empty string")
        if self.context_limit is not None and self.context_limit <= 0:
            raise ValueError("ModelConfig.context_limit must be > 0")
        if self.max_tokens is not None and self.max_tokens <= 0:
            raise ValueError("ModelConfig.max_tokens must be > 0")

    @classmethod
    def new_or_fail(cls, model_name: str) -> "ModelConfig":
        """Construct a config for ``model_name``; raises ``ValueError`` when blank."""
        return cls(model_name=model_name)


__all__ = ["ModelConfig"]
