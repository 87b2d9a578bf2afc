"""Upstream source clients and response normalization."""

from .normalizer import parse_generator_pages, parse_pageviews, parse_rest_page, parse_rest_pages
from .wikipedia import WikipediaClient

__all__ = [
    "WikipediaClient",
    "parse_generator_pages",
    "parse_pageviews",
    "parse_rest_page",
    "parse_rest_pages",
]
