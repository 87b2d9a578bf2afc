"""Tests for the term resolution pipeline (summary → related → search)."""

import asyncio

import httpx

from wiki_resolver.application.resolution import TermResolver, resolve_general_term
from wiki_resolver.domain.entities import NOT_FOUND, Article, Found, Resolution
from wiki_resolver.infrastructure.http import FetchClient
from wiki_resolver.infrastructure.sources import WikipediaClient

# =============================================================================
# Summary branch
# =============================================================================


class TestSummaryBranch:
    """Summary hits resolve directly."""

    async def test_summary_hit_returns_summary_and_related(self, mock_source, make_found):
        mock_source.fetch_summary.return_value = make_found("Barack Obama")
        mock_source.fetch_related.return_value = make_found("Michelle Obama", "Joe Biden")

        resolution = await TermResolver(mock_source).resolve_general_term("Obama")

        assert resolution.primary == make_found("Barack Obama")
        assert [a.title for a in resolution.related] == ["Michelle Obama", "Joe Biden"]
        assert resolution.language == "en"
        assert resolution.normalized_term == "Obama"
        mock_source.fetch_search.assert_not_awaited()

    async def test_related_uses_canonical_title(self, mock_source, make_found):
        """Related lookup follows the summary's title, not the user's text."""
        mock_source.fetch_summary.return_value = make_found("Barack Obama")

        await TermResolver(mock_source).resolve_general_term("  obama ")

        mock_source.fetch_summary.assert_awaited_once_with("obama", "en")
        mock_source.fetch_related.assert_awaited_once_with("Barack Obama", "en")

    async def test_related_failure_is_empty(self, mock_source, make_found):
        mock_source.fetch_summary.return_value = make_found("Barack Obama")
        mock_source.fetch_related.return_value = NOT_FOUND

        resolution = await TermResolver(mock_source).resolve_general_term("Obama")

        assert isinstance(resolution.primary, Found)
        assert resolution.related == ()

    async def test_language_tag_routes_every_lookup(self, mock_source, make_found):
        mock_source.fetch_summary.return_value = make_found("Paris")

        resolution = await TermResolver(mock_source).resolve_general_term("lang=fr Paris")

        assert resolution.language == "fr"
        assert resolution.normalized_term == "Paris"
        mock_source.fetch_summary.assert_awaited_once_with("Paris", "fr")
        mock_source.fetch_related.assert_awaited_once_with("Paris", "fr")


# =============================================================================
# Search fallback
# =============================================================================


class TestSearchFallback:
    """Summary misses fall back to search."""

    async def test_both_miss(self, mock_source):
        resolution = await TermResolver(mock_source).resolve_general_term("Xyzzy")

        assert resolution.primary is NOT_FOUND
        assert resolution.related == ()
        mock_source.fetch_search.assert_awaited_once_with("Xyzzy", "en")
        mock_source.fetch_related.assert_not_awaited()

    async def test_single_hit_trusted_without_title_match(self, mock_source, make_found):
        mock_source.fetch_search.return_value = make_found("Completely Different")
        mock_source.fetch_related.return_value = make_found("Neighbour")

        resolution = await TermResolver(mock_source).resolve_general_term("obscure thing")

        assert len(resolution.primary) == 1
        assert resolution.primary.first.title == "Completely Different"
        assert [a.title for a in resolution.related] == ["Neighbour"]
        mock_source.fetch_related.assert_awaited_once_with("Completely Different", "en")

    async def test_top_title_match_is_case_insensitive(self, mock_source, make_found):
        mock_source.fetch_search.return_value = make_found("Kevin Bacon", "Kevin Bacon (disambiguation)", "Bacon")
        mock_source.fetch_related.return_value = make_found("Footloose")

        resolution = await TermResolver(mock_source).resolve_general_term("kevin BACON")

        assert resolution.primary == make_found("Kevin Bacon")
        assert [a.title for a in resolution.related] == ["Footloose"]
        mock_source.fetch_related.assert_awaited_once_with("Kevin Bacon", "en")

    async def test_multiple_hits_without_match_is_disambiguation(self, mock_source, make_found):
        results = make_found("Mercury (planet)", "Mercury (element)", "Freddie Mercury")
        mock_source.fetch_search.return_value = results

        resolution = await TermResolver(mock_source).resolve_general_term("mercury")

        assert resolution.primary == results
        assert resolution.related == ()
        assert resolution.is_disambiguation
        mock_source.fetch_related.assert_not_awaited()

    async def test_match_only_checked_on_top_result(self, mock_source, make_found):
        """A title match further down the list does not resolve the term."""
        results = make_found("Mercury (planet)", "Mercury")
        mock_source.fetch_search.return_value = results

        resolution = await TermResolver(mock_source).resolve_general_term("Mercury")

        assert resolution.primary == results
        assert resolution.related == ()

    async def test_unpacks_as_tuple(self, mock_source, make_found):
        mock_source.fetch_search.return_value = make_found("Only One")

        primary, related, language, term = await TermResolver(mock_source).resolve_general_term("lang=it one")

        assert primary.first.title == "Only One"
        assert related == ()
        assert (language, term) == ("it", "one")


# =============================================================================
# Speculative search
# =============================================================================


class TestSpeculativeSearch:
    """Concurrent summary + search gives the same results as sequential."""

    async def test_summary_hit_cancels_search(self, mock_source, make_found):
        search_started = asyncio.Event()
        search_cancelled = asyncio.Event()

        async def slow_search(term, lang=None):
            search_started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                search_cancelled.set()
                raise
            return make_found("never")

        async def summary(title, lang=None):
            await search_started.wait()
            return make_found("Barack Obama")

        mock_source.fetch_summary.side_effect = summary
        mock_source.fetch_search.side_effect = slow_search
        mock_source.fetch_related.return_value = make_found("Michelle Obama")

        resolution = await TermResolver(mock_source, speculative_search=True).resolve_general_term("Obama")

        assert resolution.primary == make_found("Barack Obama")
        assert [a.title for a in resolution.related] == ["Michelle Obama"]
        assert search_cancelled.is_set()

    async def test_summary_miss_uses_concurrent_search(self, mock_source, make_found):
        results = make_found("Mercury (planet)", "Mercury (element)")
        mock_source.fetch_search.return_value = results

        resolution = await TermResolver(mock_source, speculative_search=True).resolve_general_term("mercury")

        assert resolution.primary == results
        mock_source.fetch_search.assert_awaited_once_with("mercury", "en")


# =============================================================================
# End-to-end over a mock transport
# =============================================================================


class TestEndToEnd:
    """Real client stack with canned upstream responses."""

    async def test_resolve_obama(self, endpoint_config, summary_obama_body, related_body):
        routes = {
            "/summary/Obama": httpx.Response(200, content=summary_obama_body),
            "/related/Barack%20Obama": httpx.Response(200, content=related_body),
        }
        requested: list[str] = []

        def handler(request):
            requested.append(request.url.raw_path.decode())
            return routes.get(request.url.raw_path.decode(), httpx.Response(404, content=b"{}"))

        fetch_client = FetchClient(endpoint_config, transport=httpx.MockTransport(handler))
        async with WikipediaClient(fetch_client) as client:
            primary, related, language, term = await resolve_general_term(client, "Obama")

        assert isinstance(primary, Found)
        assert primary.articles == (
            Article(
                title="Barack Obama",
                extract="Barack Hussein Obama II is an American politician.",
                image_url="https://upload.wikimedia.org/obama.jpg",
                canonical_url="https://en.wikipedia.org/wiki/Barack_Obama",
            ),
        )
        assert [a.title for a in related] == ["Michelle Obama", "Joe Biden"]
        assert (language, term) == ("en", "Obama")
        assert requested == ["/summary/Obama", "/related/Barack%20Obama"]

    async def test_fallback_to_search(self, endpoint_config, summary_not_found_body, make_search_body):
        search_body = make_search_body(("Obama (surname)", 2), ("Barack Obama", 1), ("Obama, Fukui", 3))

        def handler(request):
            path = request.url.raw_path.decode()
            if path.startswith("/summary/"):
                return httpx.Response(404, content=summary_not_found_body)
            if path.startswith("/search"):
                return httpx.Response(200, content=search_body)
            raise httpx.ConnectError("unreachable", request=request)

        fetch_client = FetchClient(endpoint_config, transport=httpx.MockTransport(handler))
        async with WikipediaClient(fetch_client) as client:
            resolution = await TermResolver(client).resolve_general_term("obamma")

        assert isinstance(resolution, Resolution)
        assert [a.title for a in resolution.primary.articles] == ["Barack Obama", "Obama (surname)", "Obama, Fukui"]
        assert [a.rank for a in resolution.primary.articles] == [1, 2, 3]
        assert resolution.related == ()

    async def test_transport_down_everywhere(self, endpoint_config):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        fetch_client = FetchClient(endpoint_config, transport=httpx.MockTransport(handler))
        async with WikipediaClient(fetch_client) as client:
            resolution = await TermResolver(client).resolve_general_term("Obama")

        assert resolution.primary is NOT_FOUND
        assert resolution.related == ()
