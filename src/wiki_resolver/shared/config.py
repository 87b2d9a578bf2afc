"""
Endpoint configuration.

All upstream URL templates, the identifying User-Agent and the request timeout
live in one immutable record that is handed to the fetch layer at
construction. Tests point every endpoint family at a fake host by building a
different record; nothing is read from module-level mutable state.

Usage:
    from wiki_resolver.shared.config import EndpointConfig

    config = EndpointConfig.from_env()
    url = config.summary_url.format(lang="fr", title="Paris")

Environment variables (all optional):
    WIKI_RESOLVER_TIMEOUT          Request timeout in seconds (default 2.0)
    WIKI_RESOLVER_USER_AGENT       User-Agent header value
    WIKI_RESOLVER_DEFAULT_LANGUAGE Language used when the query has no lang= tag
    WIKI_RESOLVER_SUMMARY_URL      \\
    WIKI_RESOLVER_RELATED_URL       |
    WIKI_RESOLVER_SEARCH_URL        |  URL templates, see the defaults below
    WIKI_RESOLVER_PAGEVIEWS_URL     |
    WIKI_RESOLVER_ARTICLE_URL      /
"""

from __future__ import annotations

import dataclasses
import logging
import os
import string
from dataclasses import dataclass
from typing import TYPE_CHECKING

from wiki_resolver.shared.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

__version__ = "0.1.0"

ENV_PREFIX = "WIKI_RESOLVER_"

DEFAULT_LANGUAGE = "en"
DEFAULT_TIMEOUT = 2.0
DEFAULT_USER_AGENT = f"wiki-resolver/{__version__}"

DEFAULT_SUMMARY_URL = "https://{lang}.wikipedia.org/api/rest_v1/page/summary/{title}?redirect=true"
DEFAULT_RELATED_URL = "https://{lang}.wikipedia.org/api/rest_v1/page/related/{title}"
DEFAULT_SEARCH_URL = (
    "https://{lang}.wikipedia.org/w/api.php"
    "?action=query&format=json&prop=extracts|pageimages|info&generator=search"
    "&redirects=1&exchars=250&exlimit=5&exintro=1&explaintext=1&inprop=url"
    "&gsrlimit=5&gsrwhat=nearmatch&gsrsearch={term}"
)
DEFAULT_PAGEVIEWS_URL = (
    "https://wikimedia.org/api/rest_v1/metrics/pageviews/top/"
    "{lang}.wikipedia/all-access/{year}/{month:02d}/{day:02d}"
)
DEFAULT_ARTICLE_URL = "https://{lang}.wikipedia.org/wiki/{title}"

# Placeholders each template must carry
_REQUIRED_FIELDS: dict[str, set[str]] = {
    "summary_url": {"lang", "title"},
    "related_url": {"lang", "title"},
    "search_url": {"lang", "term"},
    "pageviews_url": {"lang", "year", "month", "day"},
    "article_url": {"lang", "title"},
}


@dataclass(frozen=True, slots=True)
class EndpointConfig:
    """Immutable upstream endpoint settings."""

    summary_url: str = DEFAULT_SUMMARY_URL
    related_url: str = DEFAULT_RELATED_URL
    search_url: str = DEFAULT_SEARCH_URL
    pageviews_url: str = DEFAULT_PAGEVIEWS_URL
    article_url: str = DEFAULT_ARTICLE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    default_language: str = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Check that every template carries its placeholders.

        Raises:
            ConfigurationError: On a missing placeholder, a non-positive
                timeout or an empty default language.
        """
        for name, required in _REQUIRED_FIELDS.items():
            template = getattr(self, name)
            try:
                present = {field for _, field, _, _ in string.Formatter().parse(template) if field}
            except ValueError as e:
                raise ConfigurationError(f"Malformed template for {name}: {e}", setting=name) from e
            missing = required - present
            if missing:
                raise ConfigurationError(
                    f"Template for {name} is missing placeholders: {', '.join(sorted(missing))}",
                    setting=name,
                )
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout}", setting="timeout")
        if not self.default_language.strip():
            raise ConfigurationError("Default language must not be empty", setting="default_language")

    def replace(self, **changes: object) -> EndpointConfig:
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EndpointConfig:
        """
        Build a config from ``WIKI_RESOLVER_*`` environment variables.

        Unset or blank variables keep their defaults.

        Args:
            environ: Mapping to read from (default: ``os.environ``)
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}

        for field in dataclasses.fields(cls):
            raw = env.get(f"{ENV_PREFIX}{field.name.upper()}", "").strip()
            if not raw:
                continue
            if field.name == "timeout":
                try:
                    overrides["timeout"] = float(raw)
                except ValueError as e:
                    raise ConfigurationError(
                        f"Invalid {ENV_PREFIX}TIMEOUT value: {raw!r}",
                        setting="timeout",
                    ) from e
            else:
                overrides[field.name] = raw

        if overrides:
            logger.info(f"Endpoint config overrides from environment: {sorted(overrides)}")
        return cls(**overrides)  # type: ignore[arg-type]
