"""
Response Normalizer

Maps the upstream JSON shapes onto domain entities:

- REST single page   (``/page/summary/{title}``)   -> Found[Article] | NotFound
- REST page list     (``/page/related/{title}``)   -> Found[Article] | NotFound
- Action API pages   (``generator=search``)        -> Found[Article] | NotFound
- Analytics top list (``/metrics/pageviews/top``)  -> Found[RankedArticle] | NotFound

Which decoder applies is decided by the caller, based on the endpoint hit.
A body that cannot be decoded is treated exactly like an empty result.

The Action API returns ``query.pages`` as an object keyed by page id. Those
keys carry no order; relevance order is the ``index`` field of each page, so
results are always re-sorted by it.
"""

from __future__ import annotations

import json
import logging
import urllib.parse
from typing import Any

from wiki_resolver.domain.entities import (
    NOT_FOUND,
    NOT_FOUND_TITLE,
    Article,
    Found,
    NotFound,
    RankedArticle,
    outcome_from,
)
from wiki_resolver.shared.exceptions import NotFoundError, ParseError

logger = logging.getLogger(__name__)


# =============================================================================
# Decoding helpers
# =============================================================================


def _decode_object(body: bytes | str, source: str) -> dict[str, Any]:
    """Decode a JSON body that must be an object."""
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ParseError(f"Invalid JSON response: {e}", source=source) from e
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}", source=source)
    return data


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _is_valid_title(title: str) -> bool:
    return bool(title) and title != NOT_FOUND_TITLE


def _check_not_found(record: dict[str, Any], resource: str) -> None:
    """Raise when the payload is an upstream error document (has ``detail``)."""
    detail = _text(record.get("detail"))
    if detail:
        raise NotFoundError(resource, detail=detail)


# =============================================================================
# REST API
# =============================================================================


def _rest_article(page: dict[str, Any]) -> Article | None:
    """Map one REST page object; None when it does not describe a page."""
    title = _text(_as_dict(page.get("titles")).get("normalized")) or _text(page.get("title"))
    if not _is_valid_title(title):
        return None

    desktop = _as_dict(_as_dict(page.get("content_urls")).get("desktop"))
    return Article(
        title=title,
        extract=_text(page.get("extract")),
        image_url=_text(_as_dict(page.get("thumbnail")).get("source")) or None,
        canonical_url=_text(desktop.get("page")),
    )


def parse_rest_page(body: bytes | str) -> Found[Article] | NotFound:
    """
    Normalize a REST summary response.

    The 404 payload of the summary endpoint decodes fine but carries the
    ``"Not found."`` title; that maps to ``NotFound`` like a decode failure.
    """
    try:
        record = _decode_object(body, "rest")
        _check_not_found(record, "summary")
    except ParseError as e:
        logger.debug(f"Summary response not decodable: {e}")
        return NOT_FOUND
    except NotFoundError as e:
        logger.debug(str(e))
        return NOT_FOUND

    article = _rest_article(record)
    if article is None:
        return NOT_FOUND
    return Found((article,))


def parse_rest_pages(body: bytes | str) -> Found[Article] | NotFound:
    """
    Normalize a REST page-list response (``{"pages": [...]}``).

    Upstream gives no relevance order for this endpoint, so ranks stay 0.
    """
    try:
        record = _decode_object(body, "rest")
    except ParseError as e:
        logger.debug(f"Page list response not decodable: {e}")
        return NOT_FOUND

    pages = record.get("pages")
    if not isinstance(pages, list):
        return NOT_FOUND

    articles = (_rest_article(page) for page in pages if isinstance(page, dict))
    return outcome_from(article for article in articles if article is not None)


# =============================================================================
# Action API (generator=search)
# =============================================================================


def _generator_article(page: dict[str, Any]) -> Article | None:
    if "missing" in page or "invalid" in page:
        return None
    title = _text(page.get("title"))
    if not _is_valid_title(title):
        return None
    return Article(
        title=title,
        extract=_text(page.get("extract")),
        image_url=_text(_as_dict(page.get("thumbnail")).get("source")) or None,
        canonical_url=_text(page.get("canonicalurl")) or _text(page.get("fullurl")),
        rank=_as_int(page.get("index")),
    )


def parse_generator_pages(body: bytes | str) -> Found[Article] | NotFound:
    """
    Normalize an Action API generator response.

    ``query.pages`` is decoded into a list, then stable-sorted by ``index``
    ascending; ``rank`` carries that index. Both the keyed-object form and the
    ``formatversion=2`` list form are accepted.
    """
    try:
        record = _decode_object(body, "action")
    except ParseError as e:
        logger.debug(f"Search response not decodable: {e}")
        return NOT_FOUND

    error = _as_dict(record.get("error"))
    if error:
        logger.warning(f"Search API error {error.get('code', '')}: {error.get('info', '')}")
        return NOT_FOUND

    pages = _as_dict(record.get("query")).get("pages")
    if isinstance(pages, dict):
        entries = list(pages.values())
    elif isinstance(pages, list):
        entries = pages
    else:
        return NOT_FOUND

    articles = [
        article
        for article in (_generator_article(page) for page in entries if isinstance(page, dict))
        if article is not None
    ]
    articles.sort(key=lambda article: article.rank)
    return outcome_from(articles)


# =============================================================================
# Analytics API (pageviews)
# =============================================================================


def parse_pageviews(
    body: bytes | str,
    article_url: str,
    language: str,
) -> Found[RankedArticle] | NotFound:
    """
    Normalize a top-pageviews response.

    Args:
        body: Raw response body
        article_url: Template with ``{lang}`` and ``{title}`` for article links
        language: Language code substituted into ``article_url``

    Returns:
        First day's articles in upstream (rank) order, or ``NotFound`` for an
        error payload or an empty item list. The error detail is logged only.
    """
    try:
        record = _decode_object(body, "analytics")
        _check_not_found(record, "pageviews")
    except ParseError as e:
        logger.warning(f"Pageviews response not decodable: {e}")
        return NOT_FOUND
    except NotFoundError as e:
        logger.warning(f"Pageviews lookup failed: {e}")
        return NOT_FOUND

    items = record.get("items")
    if not isinstance(items, list) or not items:
        logger.warning("Pageviews response has no items")
        return NOT_FOUND

    collection: list[RankedArticle] = []
    for entry in _as_dict(items[0]).get("articles") or []:
        if not isinstance(entry, dict):
            continue
        identifier = _text(entry.get("article"))
        if not identifier:
            continue
        collection.append(
            RankedArticle(
                title=identifier.replace("_", " "),
                url=article_url.format(lang=language, title=urllib.parse.quote(identifier, safe="")),
                rank=_as_int(entry.get("rank")),
                view_count=str(_as_int(entry.get("views"))),
            )
        )
    return outcome_from(collection)
