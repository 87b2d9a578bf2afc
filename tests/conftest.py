"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from wiki_resolver.domain.entities import NOT_FOUND, Article, Found
from wiki_resolver.shared.config import EndpointConfig

# ============================================================
# Endpoint Fixtures
# ============================================================


@pytest.fixture
def endpoint_config():
    """Endpoint config pointing every family at a fake host."""
    return EndpointConfig(
        summary_url="https://{lang}.wiki.test/summary/{title}",
        related_url="https://{lang}.wiki.test/related/{title}",
        search_url="https://{lang}.wiki.test/search?gsrsearch={term}",
        pageviews_url="https://stats.test/top/{lang}/{year}/{month:02d}/{day:02d}",
        article_url="https://{lang}.wiki.test/wiki/{title}",
        user_agent="wiki-resolver-tests",
    )


# ============================================================
# Mock Wikipedia REST Responses
# ============================================================


def rest_page(title: str, normalized: str | None = None, extract: str = "", image: str | None = None) -> dict:
    """Build a REST page object the way /page/summary returns it."""
    page = {
        "type": "standard",
        "title": title.replace(" ", "_"),
        "displaytitle": title,
        "titles": {
            "canonical": title.replace(" ", "_"),
            "normalized": normalized or title,
            "display": title,
        },
        "pageid": 534366,
        "lang": "en",
        "extract": extract,
        "content_urls": {
            "desktop": {"page": f"https://en.wikipedia.org/wiki/{title.replace(' ', '_')}"},
            "mobile": {"page": f"https://en.m.wikipedia.org/wiki/{title.replace(' ', '_')}"},
        },
    }
    if image:
        page["thumbnail"] = {"source": image, "width": 320, "height": 400}
    return page


@pytest.fixture
def summary_obama_body():
    """Summary response for 'Obama' after redirect to the canonical page."""
    return json.dumps(
        rest_page(
            "Barack Obama",
            extract="  Barack Hussein Obama II is an American politician.  \n",
            image="https://upload.wikimedia.org/obama.jpg",
        )
    ).encode()


@pytest.fixture
def summary_not_found_body():
    """Summary 404 payload."""
    return json.dumps(
        {
            "type": "https://mediawiki.org/wiki/HyperSwitch/errors/not_found",
            "title": "Not found.",
            "method": "get",
            "detail": "Page or revision not found.",
            "uri": "/en.wikipedia.org/v1/page/summary/Xyzzy",
        }
    ).encode()


@pytest.fixture
def related_body():
    """Related pages response."""
    return json.dumps(
        {
            "pages": [
                rest_page("Michelle Obama", extract="Michelle LaVaughn Robinson Obama"),
                rest_page("Joe Biden", extract="Joseph Robinette Biden Jr."),
            ]
        }
    ).encode()


# ============================================================
# Mock Action API Responses
# ============================================================


def generator_page(pageid: int, title: str, index: int) -> dict:
    """Build an Action API page entry."""
    slug = title.replace(" ", "_")
    return {
        "pageid": pageid,
        "ns": 0,
        "title": title,
        "index": index,
        "extract": f"Extract for {title} ",
        "thumbnail": {"source": f"https://image.test/{slug}.png", "width": 40, "height": 50},
        "contentmodel": "wikitext",
        "pagelanguage": "en",
        "fullurl": f"https://en.wikipedia.org/wiki/{slug}",
        "canonicalurl": f"https://en.wikipedia.org/wiki/{slug}",
    }


def generator_body(*pages: dict) -> bytes:
    """Wrap page entries in a generator=search response keyed by page id."""
    return json.dumps(
        {
            "batchcomplete": "",
            "continue": {"gsroffset": len(pages), "continue": "gsroffset||"},
            "query": {"pages": {str(page["pageid"]): page for page in pages}},
        }
    ).encode()


@pytest.fixture
def search_three_body():
    """Three search results keyed in index order 3, 1, 2."""
    return generator_body(
        generator_page(534366, "Title 3", 3),
        generator_page(2204744, "Title 1", 1),
        generator_page(17775180, "Title 2", 2),
    )


# ============================================================
# Mock Analytics Responses
# ============================================================


@pytest.fixture
def pageviews_body():
    """Top pageviews response for one day."""
    return json.dumps(
        {
            "items": [
                {
                    "project": "en.wikipedia",
                    "access": "all-access",
                    "year": "2020",
                    "month": "06",
                    "day": "04",
                    "articles": [
                        {"article": "Main_Page", "views": 5872458, "rank": 1},
                        {"article": "Special:Search", "views": 1286392, "rank": 2},
                        {"article": "George_Floyd", "views": 735021, "rank": 3},
                        {"article": "Rayshard_Brooks", "views": 301223, "rank": 4},
                    ],
                }
            ]
        }
    ).encode()


@pytest.fixture
def pageviews_error_body():
    """Analytics error payload for a date with no data yet."""
    return json.dumps(
        {
            "type": "https://mediawiki.org/wiki/HyperSwitch/errors/not_found",
            "title": "Not found.",
            "method": "get",
            "detail": "The date(s) you used are valid, but we either do not have data for those date(s), "
            "or the project you asked for is not loaded yet.",
            "uri": "/analytics.wikimedia.org/v1/pageviews/top/en.wikipedia/all-access/2020/06/06",
        }
    ).encode()


# ============================================================
# Mock Source
# ============================================================


def found(*titles: str) -> Found[Article]:
    """Found outcome with one article per title, ranked in order."""
    return Found(
        tuple(
            Article(title=title, canonical_url=f"https://en.wikipedia.org/wiki/{title}", rank=i)
            for i, title in enumerate(titles, start=1)
        )
    )


@pytest.fixture
def mock_source():
    """AsyncMock article source; every lookup misses unless told otherwise."""
    source = AsyncMock()
    source.default_language = "en"
    source.fetch_summary.return_value = NOT_FOUND
    source.fetch_related.return_value = NOT_FOUND
    source.fetch_search.return_value = NOT_FOUND
    source.fetch_top_pageviews.return_value = NOT_FOUND
    return source


# ============================================================
# Factory Fixtures
# ============================================================


@pytest.fixture
def make_found():
    """Factory: ``make_found("A", "B")`` -> Found with ranked articles A, B."""
    return found


@pytest.fixture
def make_search_body():
    """Factory: ``make_search_body(("Title", index), ...)`` -> generator response body."""

    def _make(*entries: tuple[str, int]) -> bytes:
        return generator_body(
            *(generator_page(1000 + position, title, index) for position, (title, index) in enumerate(entries))
        )

    return _make


@pytest.fixture
def make_rest_body():
    """Factory: ``make_rest_body("Title")`` -> summary response body."""

    def _make(title: str, **kwargs: str) -> bytes:
        return json.dumps(rest_page(title, **kwargs)).encode()

    return _make
