"""
Shared kernel for Wiki Resolver.

Provides:
- Unified exception hierarchy
- Immutable endpoint configuration
- Logging setup helper
"""

from .config import EndpointConfig
from .exceptions import (
    APIError,
    ConfigurationError,
    DataError,
    ErrorCategory,
    ErrorContext,
    NotFoundError,
    ParseError,
    TransportError,
    WikiResolverError,
)
from .logging_utils import configure_logging

__all__ = [
    # Configuration
    "EndpointConfig",
    "configure_logging",
    # Exceptions
    "WikiResolverError",
    "ErrorContext",
    "ErrorCategory",
    "APIError",
    "TransportError",
    "DataError",
    "NotFoundError",
    "ParseError",
    "ConfigurationError",
]
