"""
Top pageviews resolution: free-form date in, ranked articles out.

The requested date is parsed, stepped back one day if UTC has not reached it
yet, and only then looked up. The caller gets both dates so it can tell the
user when a substitution happened.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from typing import Protocol

from wiki_resolver.application.dates import correct_requested_date, parse_date
from wiki_resolver.application.query import extract_language
from wiki_resolver.domain.entities import Found, NotFound, RankedArticle, TopPageviews, outcome_from

logger = logging.getLogger(__name__)

# Non-article pages that top the English list every day
DEFAULT_EXCLUDED_TITLES = ("Main Page", "Special:Search")


class PageviewsSource(Protocol):
    """What the resolver needs from an upstream client."""

    @property
    def default_language(self) -> str: ...

    async def fetch_top_pageviews(self, day: date, lang: str | None = None) -> Found[RankedArticle] | NotFound: ...


class TopPageviewsResolver:
    """
    Date-aware top pageviews lookup.

    Args:
        source: Upstream client (normally ``WikipediaClient``)
        exclude_titles: Titles dropped from the result
        limit: Maximum number of articles kept after exclusion
    """

    def __init__(
        self,
        source: PageviewsSource,
        *,
        exclude_titles: Iterable[str] = (),
        limit: int | None = None,
    ) -> None:
        self._source = source
        self._exclude_titles = frozenset(exclude_titles)
        self._limit = limit

    async def resolve(
        self,
        text: str,
        lang: str | None = None,
        *,
        today: date | None = None,
        utc_date: date | None = None,
    ) -> TopPageviews:
        """
        Resolve a date expression into the top viewed articles.

        Args:
            text: Date expression, may carry a ``lang=`` tag; empty means today
            lang: Language when ``text`` has no tag (default: source default)
            today: Local reference date for parsing (default: today)
            utc_date: UTC calendar date for correction (default: UTC today)
        """
        language, date_text = extract_language(text, lang or self._source.default_language)
        requested = parse_date(date_text, today)
        resolved, _ = correct_requested_date(requested, utc_date)
        logger.info(f"Top pageviews for {resolved.isoformat()} on {language}")

        outcome = await self._source.fetch_top_pageviews(resolved, language)
        return TopPageviews(
            requested_date=requested,
            resolved_date=resolved,
            language=language,
            outcome=self._select(outcome),
        )

    def _select(self, outcome: Found[RankedArticle] | NotFound) -> Found[RankedArticle] | NotFound:
        if not isinstance(outcome, Found):
            return outcome
        kept = [article for article in outcome.articles if article.title not in self._exclude_titles]
        if self._limit is not None:
            kept = kept[: self._limit]
        return outcome_from(kept)
