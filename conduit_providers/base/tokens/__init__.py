"""Token usage helpers package."""

from .extraction import extract_openai_token_usage

__all__ = ["extract_openai_token_usage"]
