"""
Unified Exception Hierarchy for Wiki Resolver.

None of these cross the public lookup API: the Wikipedia client collapses
transport and decoding failures into ``NotFound`` at its boundary. They exist
so the infrastructure layer can say precisely what went wrong, and so the
failure can be logged with context before it is collapsed.

Exception Hierarchy:
    WikiResolverError (base)
    ├── APIError
    │   └── TransportError
    ├── DataError
    │   ├── NotFoundError
    │   └── ParseError
    └── ConfigurationError
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories for error classification."""

    API = "api"
    DATA = "data"
    CONFIGURATION = "config"
    NETWORK = "network"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Rich context attached to an error for logging."""

    operation: str | None = None
    url: str | None = None
    input_value: Any = None
    suggestion: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class WikiResolverError(Exception):
    """
    Base exception for all Wiki Resolver errors.

    Provides:
    - Structured error context
    - Category classification
    - Retry guidance (informational only, nothing retries automatically)
    """

    __slots__ = ("category", "context", "retryable")

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        category: ErrorCategory = ErrorCategory.API,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.category = category
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured logging."""
        result: dict[str, Any] = {
            "error": str(self),
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.context.operation:
            result["operation"] = self.context.operation
        if self.context.url:
            result["url"] = self.context.url
        if self.context.suggestion:
            result["suggestion"] = self.context.suggestion
        return result


# =============================================================================
# API Errors
# =============================================================================


class APIError(WikiResolverError):
    """Base class for upstream API errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(
            message,
            context=context,
            category=ErrorCategory.API,
            retryable=retryable,
        )


class TransportError(APIError):
    """
    Raised when a request could not be completed.

    Timeouts, DNS failures and connection resets all map to this single kind;
    callers only distinguish transport failure from success.
    """

    def __init__(
        self,
        message: str = "Request failed",
        *,
        url: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = context or ErrorContext(operation="fetch", url=url)
        super().__init__(message, context=ctx, retryable=True)
        self.category = ErrorCategory.NETWORK


# =============================================================================
# Data Errors
# =============================================================================


class DataError(WikiResolverError):
    """Base class for payload errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            category=ErrorCategory.DATA,
            retryable=False,
        )


class NotFoundError(DataError):
    """Raised when a payload decodes but the upstream reports no content."""

    def __init__(
        self,
        resource: str = "page",
        *,
        detail: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        message = f"{resource} not found"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, context=context)
        self.detail = detail


class ParseError(DataError):
    """Raised when an upstream body cannot be decoded."""

    def __init__(
        self,
        message: str = "Failed to parse response",
        *,
        source: str = "wikipedia",
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(f"{source}: {message}", context=context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(WikiResolverError):
    """Raised for invalid endpoint configuration."""

    def __init__(
        self,
        message: str,
        *,
        setting: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = context or ErrorContext(operation="configure", input_value=setting)
        super().__init__(
            message,
            context=ctx,
            category=ErrorCategory.CONFIGURATION,
            retryable=False,
        )
        self.setting = setting
