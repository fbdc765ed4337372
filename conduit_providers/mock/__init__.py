"""Mock provider package: an offline echo backend."""

from .client import ECHO_PREFIX, MockProvider, echo_completion

__all__ = ["MockProvider", "echo_completion", "ECHO_PREFIX"]
