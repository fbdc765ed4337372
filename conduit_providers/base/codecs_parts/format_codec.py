"""
Format codec contract.

A codec translates between the provider-agnostic conversation model and one
backend's JSON request/response shapes. Codecs are pure: no I/O, no clock,
no state between calls. Adapters hold one codec instance and never branch on
the backend themselves.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from ..models import Message, ModelConfig, Tool, Usage


@runtime_checkable
class FormatCodec(Protocol):
    """Encode/decode pair for a single backend wire format."""

    def encode(
        self,
        model_config: ModelConfig,
        system: str,
        messages: Sequence[Message],
        tools: Sequence[Tool],
    ) -> Dict[str, Any]:
        """Build the request payload; raises ``MalformedInputError`` on unrepresentable input."""
        ...

    def decode(self, payload: Dict[str, Any]) -> Tuple[Message, Optional[Usage]]:
        """Build the reply message; raises ``ResponseShapeError`` when it cannot."""
        ...

    def check_error(self, payload: Dict[str, Any]) -> None:
        """Raise the classified error carried inside a successful HTTP answer, if any."""
        ...

    def get_model(self, payload: Dict[str, Any]) -> Optional[str]:
        """Return the model id the backend reports, or ``None``."""
        ...

    def decode_model_listing(self, payload: Dict[str, Any]) -> List[str]:
        """Return the model ids in a listing payload (unsorted, possibly repeated)."""
        ...


__all__ = ["FormatCodec"]
