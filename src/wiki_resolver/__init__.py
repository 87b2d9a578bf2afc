"""
Wiki Resolver - Free-form query to Wikipedia article resolution

Resolves user text into normalized article data by combining the Wikipedia
REST API (summary, related pages) with the Action API (near-match search),
and looks up the most viewed articles of a day with UTC date correction.

Usage:
    from wiki_resolver import TermResolver, WikipediaClient

    async with WikipediaClient() as client:
        primary, related, language, term = await TermResolver(client).resolve_general_term("lang=fr Paris")

        if primary:
            for article in primary.articles:
                print(f"{article.title}: {article.canonical_url}")

Features:
    - lang=<code> tags select the wiki
    - Summary lookup with search fallback and related pages
    - Typed Found / NotFound outcomes, no sentinel titles
    - Top pageviews for a free-form date
"""

from .application.dates import correct_requested_date, is_before_utc_today, parse_date
from .application.query import extract_language, resolve_query, sanitize
from .application.resolution import TermResolver, TopPageviewsResolver, resolve_general_term
from .domain.entities import (
    NOT_FOUND,
    Article,
    Found,
    LookupOutcome,
    NotFound,
    RankedArticle,
    Resolution,
    ResolvedQuery,
    TopPageviews,
)
from .infrastructure.http import FetchClient
from .infrastructure.sources import WikipediaClient
from .shared.config import EndpointConfig, __version__

__all__ = [
    "__version__",
    # High-level API
    "TermResolver",
    "TopPageviewsResolver",
    "WikipediaClient",
    "resolve_general_term",
    # Entities
    "Article",
    "RankedArticle",
    "Found",
    "NotFound",
    "NOT_FOUND",
    "LookupOutcome",
    "Resolution",
    "ResolvedQuery",
    "TopPageviews",
    # Building blocks
    "EndpointConfig",
    "FetchClient",
    "extract_language",
    "resolve_query",
    "sanitize",
    "parse_date",
    "is_before_utc_today",
    "correct_requested_date",
]
