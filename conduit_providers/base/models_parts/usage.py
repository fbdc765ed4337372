"""
Token accounting DTOs.

`Usage` holds normalized token counts. Every field is optional: ``None`` means
the backend did not report the value, which is not an error. ``Usage()`` is the
zeroed usage returned when a backend omits usage entirely.
`ProviderUsage` pairs a usage record with the model id the backend reported.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Usage:
    """Normalized token counts for one completion."""

    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    @classmethod
    def from_counts(
        cls,
        input_tokens: Optional[int],
        output_tokens: Optional[int],
        total_tokens: Optional[int] = None,
    ) -> "Usage":
        """Build a usage record, deriving ``total_tokens`` when both parts are known."""
        if total_tokens is None and input_tokens is not None and output_tokens is not None:
            total_tokens = input_tokens + output_tokens
        return cls(input_tokens=input_tokens, output_tokens=output_tokens, total_tokens=total_tokens)

    def is_empty(self) -> bool:
        return self.input_tokens is None and self.output_tokens is None and self.total_tokens is None

    def to_dict(self) -> Dict[str, Optional[int]]:
        return asdict(self)


@dataclass(frozen=True)
class ProviderUsage:
    """Usage plus the model identifier resolved for the call."""

    model: str
    usage: Usage = field(default_factory=Usage)

    def to_dict(self) -> Dict[str, Any]:
        return {"model": self.model, "usage": self.usage.to_dict()}


__all__ = ["Usage", "ProviderUsage"]
