"""
Domain Entity: LookupOutcome

Two-variant result of every lookup: ``Found`` with a non-empty ordered tuple
of articles, or ``NotFound``. Failure is never signalled through a title.

Example:
    >>> outcome = Found((Article(title="Paris"),))
    >>> bool(outcome), outcome.first.title
    (True, 'Paris')
    >>> bool(NOT_FOUND)
    False
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Found[T]:
    """A lookup that produced at least one article."""

    articles: tuple[T, ...]

    def __post_init__(self) -> None:
        if not self.articles:
            raise ValueError("Found requires at least one article")

    def __bool__(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self.articles)

    @property
    def first(self) -> T:
        return self.articles[0]

    def truncate(self, limit: int) -> Found[T]:
        """Return a copy keeping only the first ``limit`` articles (at least one)."""
        return Found(self.articles[: max(limit, 1)])


@dataclass(frozen=True, slots=True)
class NotFound:
    """A lookup that produced nothing, for whatever reason."""

    def __bool__(self) -> bool:
        return False

    def __len__(self) -> int:
        return 0

    @property
    def articles(self) -> tuple[()]:
        return ()


NOT_FOUND = NotFound()

type LookupOutcome[T] = Found[T] | NotFound


def outcome_from[T](articles: Iterable[T]) -> Found[T] | NotFound:
    """Wrap an article sequence, mapping an empty one to ``NOT_FOUND``."""
    collected = tuple(articles)
    if not collected:
        return NOT_FOUND
    return Found(collected)
