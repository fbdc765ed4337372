"""Swiss AI Platform provider package."""

from .client import SwissAIProvider

__all__ = ["SwissAIProvider"]
