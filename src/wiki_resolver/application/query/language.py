"""
Language tag extraction.

Users select a wiki by writing ``lang=<code>`` anywhere in their query:

    >>> extract_language("lang=fr hello world")
    ('fr', 'hello world')
    >>> extract_language("hello world")
    ('en', 'hello world')

The code itself is not validated. An unknown language ends up as an
unreachable host, which the fetch layer reports as not found.
"""

from __future__ import annotations

import re

from wiki_resolver.domain.entities import ResolvedQuery
from wiki_resolver.shared.config import DEFAULT_LANGUAGE

# Case-sensitive key, standalone token, at least one letter/underscore/hyphen
_LANG_TAG = re.compile(r"(?:^|\s+)lang=([A-Za-z_-]+)(?=\s|$)\s*")


def extract_language(text: str, default: str = DEFAULT_LANGUAGE) -> tuple[str, str]:
    """
    Split an inline ``lang=`` tag from free text.

    Only the first tag is honored. ``lang=`` with nothing after it is not a
    tag and stays in the text.

    Args:
        text: Raw user text
        default: Language returned when no tag is present

    Returns:
        ``(language, remainder)`` with the remainder trimmed
    """
    match = _LANG_TAG.search(text)
    if match is None:
        return default, text.strip()

    remainder = f"{text[: match.start()]} {text[match.end() :]}"
    return match.group(1), remainder.strip()


def resolve_query(text: str, default: str = DEFAULT_LANGUAGE) -> ResolvedQuery:
    """Extract the language and normalized term from raw text."""
    language, term = extract_language(text, default)
    return ResolvedQuery(language=language, normalized_term=term)
