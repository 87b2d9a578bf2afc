"""HTTP Client Utilities."""

from .client import FetchClient

__all__ = [
    "FetchClient",
]
