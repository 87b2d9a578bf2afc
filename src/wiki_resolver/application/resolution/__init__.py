"""Resolution use cases: general term lookup and top pageviews."""

from .pageviews import DEFAULT_EXCLUDED_TITLES, PageviewsSource, TopPageviewsResolver
from .pipeline import ArticleSource, TermResolver, resolve_general_term

__all__ = [
    "DEFAULT_EXCLUDED_TITLES",
    "ArticleSource",
    "PageviewsSource",
    "TermResolver",
    "TopPageviewsResolver",
    "resolve_general_term",
]
