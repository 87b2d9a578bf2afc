"""Domain entities."""

from .article import NOT_FOUND_TITLE, Article, RankedArticle
from .outcome import NOT_FOUND, Found, LookupOutcome, NotFound, outcome_from
from .resolution import Resolution, ResolvedQuery, TopPageviews

__all__ = [
    "NOT_FOUND",
    "NOT_FOUND_TITLE",
    "Article",
    "Found",
    "LookupOutcome",
    "NotFound",
    "RankedArticle",
    "Resolution",
    "ResolvedQuery",
    "TopPageviews",
    "outcome_from",
]
