"""
Term resolution pipeline.

Turns a free-form term into either one resolved article (with related pages)
or a disambiguation list:

    Summary ──found──► Related(summary title) ──► done
       │
    not found
       │
       ▼
    Search ──not found──────────────────────────► NotFound
       │
       ├─ one result, or top title == term ─► Related(top title), primary = top
       │
       └─ otherwise ────────────────────────────► primary = all results

The "one result or case-insensitive title match" rule is a heuristic. The
search endpoint may return several loosely related near-matches when the
intended page only differs in casing; a single result is trusted because
upstream only returns one when it is confident.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from wiki_resolver.application.query import resolve_query
from wiki_resolver.domain.entities import (
    NOT_FOUND,
    Article,
    Found,
    NotFound,
    Resolution,
    ResolvedQuery,
)

logger = logging.getLogger(__name__)


class ArticleSource(Protocol):
    """What the pipeline needs from an upstream client."""

    @property
    def default_language(self) -> str: ...

    async def fetch_summary(self, title: str, lang: str | None = None) -> Found[Article] | NotFound: ...

    async def fetch_related(self, title: str, lang: str | None = None) -> Found[Article] | NotFound: ...

    async def fetch_search(self, term: str, lang: str | None = None) -> Found[Article] | NotFound: ...


class TermResolver:
    """
    Summary → related → search fallback orchestrator.

    Args:
        source: Upstream client (normally ``WikipediaClient``)
        speculative_search: Run the search concurrently with the summary
            lookup and cancel it once the summary is found. Results are the
            same as sequential execution; only latency changes.
    """

    def __init__(self, source: ArticleSource, *, speculative_search: bool = False) -> None:
        self._source = source
        self._speculative_search = speculative_search

    async def resolve_general_term(self, term: str) -> Resolution:
        """
        Resolve ``term`` (which may carry a ``lang=`` tag).

        Returns:
            Resolution unpacking as ``(primary, related, language, normalized_term)``
        """
        query = resolve_query(term, self._source.default_language)
        logger.info(f"Resolving {query.normalized_term!r} on {query.language}")

        if self._speculative_search:
            summary, search = await self._summary_with_speculative_search(query)
        else:
            summary = await self._source.fetch_summary(query.normalized_term, query.language)
            search = None

        if isinstance(summary, Found):
            canonical_title = summary.first.title
            logger.info(f"Summary found for {query.normalized_term!r}: {canonical_title!r}")
            related = await self._fetch_related(canonical_title, query.language)
            return Resolution(summary, related, query.language, query.normalized_term)

        logger.info(f"No summary for {query.normalized_term!r}, falling back to search")
        if search is None:
            search = await self._source.fetch_search(query.normalized_term, query.language)

        if not isinstance(search, Found):
            logger.info(f"Search found nothing for {query.normalized_term!r}")
            return Resolution(NOT_FOUND, (), query.language, query.normalized_term)

        top = search.first
        if len(search) == 1 or top.title.casefold() == query.normalized_term.casefold():
            logger.info(f"Search resolved {query.normalized_term!r} to {top.title!r}")
            related = await self._fetch_related(top.title, query.language)
            return Resolution(search.truncate(1), related, query.language, query.normalized_term)

        logger.info(f"Search returned {len(search)} candidates for {query.normalized_term!r}")
        return Resolution(search, (), query.language, query.normalized_term)

    async def _fetch_related(self, title: str, lang: str) -> tuple[Article, ...]:
        """Related pages, best effort: a miss is an empty tuple."""
        related = await self._source.fetch_related(title, lang)
        return related.articles

    async def _summary_with_speculative_search(
        self,
        query: ResolvedQuery,
    ) -> tuple[Found[Article] | NotFound, Found[Article] | NotFound | None]:
        """Run summary and search together; drop the search if the summary hits."""
        async with asyncio.TaskGroup() as tg:
            summary_task = tg.create_task(self._source.fetch_summary(query.normalized_term, query.language))
            search_task = tg.create_task(self._source.fetch_search(query.normalized_term, query.language))
            summary = await summary_task
            if isinstance(summary, Found):
                search_task.cancel()

        if isinstance(summary, Found):
            return summary, None
        return summary, search_task.result()


async def resolve_general_term(source: ArticleSource, term: str) -> Resolution:
    """Resolve ``term`` against ``source`` with sequential lookups."""
    return await TermResolver(source).resolve_general_term(term)
