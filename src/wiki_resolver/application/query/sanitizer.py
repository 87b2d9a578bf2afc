"""Query sanitization for URL paths and query strings."""

from __future__ import annotations

import urllib.parse


def sanitize(text: str) -> str:
    """
    Make text safe to drop into a URL path segment or query value.

    Standard query escaping turns spaces into ``+``, which the REST API does
    not accept as a space in path segments. Those are rewritten to ``%20``;
    a literal ``+`` in the input was already escaped to ``%2B`` and survives.

    Examples:
        >>> sanitize("foo bar")
        'foo%20bar'
        >>> sanitize(" foo + bar ")
        'foo%20%2B%20bar'
        >>> sanitize("FoO bAr")
        'FoO%20bAr'
    """
    escaped = urllib.parse.quote_plus(text.strip())
    return escaped.replace("+", "%20")
