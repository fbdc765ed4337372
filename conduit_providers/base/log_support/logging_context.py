"""Structured logging context carried through adapter operations.

:class:`LogContext` groups the fields every adapter event repeats (provider
name, resolved model, operation and the backend's response id) so call sites
pass one object instead of four keyword arguments. ``None`` values are pruned
from :meth:`LogContext.to_dict` output.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for provider logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    operation: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def with_response(self, response_id: Optional[str]) -> "LogContext":
        return replace(self, response_id=response_id)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
