"""Query parsing: language tag extraction and URL sanitization."""

from .language import extract_language, resolve_query
from .sanitizer import sanitize

__all__ = [
    "extract_language",
    "resolve_query",
    "sanitize",
]
