"""
Domain Entity: Article

Normalized encyclopedia page, independent of which upstream schema
(REST summary, REST related, Action API generator) produced it.
Source mapping is handled by the Infrastructure layer normalizer.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

# Title the REST API returns in its 404 payload
NOT_FOUND_TITLE = "Not found."


@dataclass(frozen=True, slots=True)
class Article:
    """
    One encyclopedia page.

    ``rank`` is 0 unless the article came from the search generator, where it
    carries the upstream relevance index.
    """

    title: str
    extract: str = ""
    image_url: str | None = None
    canonical_url: str = ""
    rank: int = 0

    @property
    def is_ranked(self) -> bool:
        return self.rank > 0

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return dataclasses.asdict(self)


@dataclass(frozen=True, slots=True)
class RankedArticle:
    """
    One entry of a top-pageviews list.

    Pageview data carries no extract or image, hence a separate entity.
    ``view_count`` is kept as the stringified upstream number.
    """

    title: str
    url: str
    rank: int
    view_count: str

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return dataclasses.asdict(self)
