"""
Domain Entities: ResolvedQuery, Resolution, TopPageviews

Result records handed back to the caller. The presentation layer decides how
to render them; nothing here is pre-formatted text.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .article import Article, RankedArticle
from .outcome import NOT_FOUND, Found, NotFound


@dataclass(frozen=True, slots=True)
class ResolvedQuery:
    """Language and trimmed term extracted from raw user text."""

    language: str
    normalized_term: str

    @property
    def is_empty(self) -> bool:
        """True when there is nothing left to look up."""
        return not self.normalized_term


@dataclass(frozen=True, slots=True)
class Resolution:
    """
    Outcome of resolving a general term.

    ``primary`` is either one resolved article or a disambiguation list;
    ``related`` is only populated when ``primary`` resolved to one identity.
    Unpacks as ``primary, related, language, normalized_term``.
    """

    primary: Found[Article] | NotFound
    related: tuple[Article, ...] = ()
    language: str = ""
    normalized_term: str = ""

    def __iter__(self) -> Iterator[Any]:
        return iter((self.primary, self.related, self.language, self.normalized_term))

    @property
    def is_disambiguation(self) -> bool:
        """Several plausible matches and no related pages."""
        return isinstance(self.primary, Found) and len(self.primary) > 1 and not self.related


@dataclass(frozen=True, slots=True)
class TopPageviews:
    """
    Top-viewed articles for one calendar day.

    ``requested_date`` is what the caller asked for; ``resolved_date`` is what was
    actually queried after UTC correction.
    """

    requested_date: date
    resolved_date: date
    language: str
    outcome: Found[RankedArticle] | NotFound = field(default=NOT_FOUND)

    @property
    def corrected(self) -> bool:
        return self.resolved_date != self.requested_date
