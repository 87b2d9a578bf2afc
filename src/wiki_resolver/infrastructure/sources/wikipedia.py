"""
Wikipedia API Integration

Lookups against the two Wikipedia API families plus the Wikimedia analytics
API, each returning ``Found``/``NotFound`` rather than raw payloads.

API Documentation:
- REST:      https://en.wikipedia.org/api/rest_v1/
- Action:    https://www.mediawiki.org/wiki/API:Search
- Analytics: https://wikimedia.org/api/rest_v1/#/Pageviews_data

Features:
- Page summary (follows redirects to the canonical title)
- Related pages
- Near-match search via the ``generator=search`` Action API
- Top viewed articles for a calendar day

Error handling:
Transport failures and undecodable bodies are logged and reported as
``NotFound``; no network detail reaches the caller.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wiki_resolver.application.query import sanitize
from wiki_resolver.domain.entities import NOT_FOUND
from wiki_resolver.infrastructure.http import FetchClient
from wiki_resolver.infrastructure.sources.normalizer import (
    parse_generator_pages,
    parse_pageviews,
    parse_rest_page,
    parse_rest_pages,
)
from wiki_resolver.shared.config import EndpointConfig
from wiki_resolver.shared.exceptions import TransportError

if TYPE_CHECKING:
    from datetime import date

    from typing_extensions import Self

    from wiki_resolver.domain.entities import Article, Found, NotFound, RankedArticle

logger = logging.getLogger(__name__)


class WikipediaClient:
    """
    Wikipedia lookup client.

    Usage:
        async with WikipediaClient() as client:
            summary = await client.fetch_summary("Barack Obama")
            related = await client.fetch_related("Barack Obama")
            results = await client.fetch_search("obama", lang="de")
            top = await client.fetch_top_pageviews(date(2020, 6, 4))

    Every method takes an optional ``lang``; it defaults to the configured
    default language.
    """

    def __init__(
        self,
        fetch_client: FetchClient | None = None,
        config: EndpointConfig | None = None,
    ) -> None:
        """
        Initialize Wikipedia client.

        Args:
            fetch_client: Transport to use (default: one built from ``config``)
            config: Endpoint templates (default: the fetch client's config)
        """
        if config is None:
            config = fetch_client.config if fetch_client is not None else EndpointConfig()
        self._config = config
        self._fetch_client = fetch_client or FetchClient(config)

    @property
    def config(self) -> EndpointConfig:
        return self._config

    @property
    def default_language(self) -> str:
        return self._config.default_language

    async def _fetch(self, url: str, operation: str) -> bytes | None:
        """Fetch a body, mapping transport failure to None."""
        logger.debug(f"Fetching {operation}: {url}")
        try:
            return await self._fetch_client.fetch(url)
        except TransportError as e:
            logger.warning(f"Wikipedia {operation} failed: {e}")
            return None

    async def fetch_summary(self, title: str, lang: str | None = None) -> Found[Article] | NotFound:
        """
        Get the summary of one page.

        Redirects are followed, so the returned title is the canonical one
        and may differ from ``title``.
        """
        safe_title = sanitize(title)
        if not safe_title:
            return NOT_FOUND

        url = self._config.summary_url.format(lang=lang or self.default_language, title=safe_title)
        body = await self._fetch(url, "summary")
        if body is None:
            return NOT_FOUND
        return parse_rest_page(body)

    async def fetch_related(self, title: str, lang: str | None = None) -> Found[Article] | NotFound:
        """Get pages related to the given title (unranked)."""
        safe_title = sanitize(title)
        if not safe_title:
            return NOT_FOUND

        url = self._config.related_url.format(lang=lang or self.default_language, title=safe_title)
        body = await self._fetch(url, "related")
        if body is None:
            return NOT_FOUND
        return parse_rest_pages(body)

    async def fetch_search(self, term: str, lang: str | None = None) -> Found[Article] | NotFound:
        """
        Search for near matches of free text.

        Results are ranked by upstream relevance (``rank`` 1 is best).
        """
        safe_term = sanitize(term)
        if not safe_term:
            return NOT_FOUND

        url = self._config.search_url.format(lang=lang or self.default_language, term=safe_term)
        body = await self._fetch(url, "search")
        if body is None:
            return NOT_FOUND
        return parse_generator_pages(body)

    async def fetch_top_pageviews(self, day: date, lang: str | None = None) -> Found[RankedArticle] | NotFound:
        """
        Get the most viewed articles for one calendar day.

        No date correction happens here; see ``TopPageviewsResolver``.
        """
        language = lang or self.default_language
        url = self._config.pageviews_url.format(lang=language, year=day.year, month=day.month, day=day.day)
        body = await self._fetch(url, "pageviews")
        if body is None:
            return NOT_FOUND
        return parse_pageviews(body, self._config.article_url, language)

    async def close(self) -> None:
        """Close the underlying fetch client."""
        await self._fetch_client.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
