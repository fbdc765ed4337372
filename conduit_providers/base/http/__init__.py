"""HTTP utilities package for providers.

Exposes the async authenticated transport.
"""

from .client import TransportClient

__all__ = ["TransportClient"]
