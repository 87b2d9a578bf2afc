"""
Application DI Container (dependency-injector).

Centralizes client creation so callers never touch module-level state.

Usage::

    from wiki_resolver.container import ApplicationContainer

    container = ApplicationContainer()
    resolver = container.term_resolver()
    resolution = await resolver.resolve_general_term("lang=fr Paris")

    # Environment-driven endpoints
    container = ApplicationContainer(config=providers.Object(EndpointConfig.from_env()))

    # In tests, override any provider:
    container.wikipedia_client.override(providers.Object(fake_client))
"""

from __future__ import annotations

from dependency_injector import containers, providers

from wiki_resolver.application.resolution import (
    DEFAULT_EXCLUDED_TITLES,
    TermResolver,
    TopPageviewsResolver,
)
from wiki_resolver.infrastructure.http import FetchClient
from wiki_resolver.infrastructure.sources import WikipediaClient
from wiki_resolver.shared.config import EndpointConfig


class ApplicationContainer(containers.DeclarativeContainer):
    """Central DI container for Wiki Resolver.

    Manages creation of:
    - ``fetch_client``: shared httpx-backed transport
    - ``wikipedia_client``: the four lookups plus top pageviews
    - ``term_resolver``: summary → search fallback pipeline
    - ``top_pageviews_resolver``: date-corrected top pageviews
    """

    config = providers.Singleton(EndpointConfig)

    fetch_client = providers.Singleton(FetchClient, config=config)

    wikipedia_client = providers.Singleton(
        WikipediaClient,
        fetch_client=fetch_client,
        config=config,
    )

    term_resolver = providers.Factory(TermResolver, source=wikipedia_client)

    top_pageviews_resolver = providers.Factory(
        TopPageviewsResolver,
        source=wikipedia_client,
        exclude_titles=DEFAULT_EXCLUDED_TITLES,
    )


__all__ = ["ApplicationContainer"]
