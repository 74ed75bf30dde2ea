"""
In-memory cache of published ratings for synchronous reads.

Owned by whoever renders ratings: construct one, populate it after a sync,
and pass it to the views that need it. There is no module-level instance.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from common.config import config
from common.logging.logger import get_logger
from common.models import RatingsDocument
from ratings_core.errors import RatingsError
from ratings_core.types import ConfidenceLevel
from engagement.scoring.confidence import get_confidence_level

logger = get_logger("rating_cache")


@dataclass(frozen=True)
class CachedRating:
    """Cached rating entry with metadata."""
    bundle_id: str
    star_rating: float
    wilson_score: float
    vote_count: int
    upvotes: int
    confidence: ConfidenceLevel
    cached_at: float


@dataclass(frozen=True)
class RatingDisplay:
    """Short label plus tooltip for a rating."""
    text: str
    tooltip: str


def format_rating_for_display(
    star_rating: float,
    total_votes: int,
    upvotes: int,
    min_votes: Optional[int] = None,
) -> str:
    """
    ``★ 4.2`` once there are enough votes to trust the stars, ``👍 N`` below
    that, and an empty string with no votes at all.
    """
    if total_votes == 0:
        return ""
    if min_votes is None:
        min_votes = config.get("cache.display_min_votes")
    if total_votes >= min_votes:
        return f"★ {star_rating:.1f}"
    return f"👍 {upvotes}"


class RatingCache:
    """Bundle id → CachedRating, filled from a RatingsDocument."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._entries: Dict[str, CachedRating] = {}
        self._clock = clock

    # -- population -----------------------------------------------------------

    def populate(self, document: RatingsDocument) -> int:
        """Add or replace entries for every collection in *document*."""
        now = self._clock()
        for bundle_id, rating in document.collections.items():
            self._entries[bundle_id] = CachedRating(
                bundle_id=bundle_id,
                star_rating=rating.star_rating,
                wilson_score=rating.wilson_score,
                vote_count=rating.rating_count,
                upvotes=rating.up,
                confidence=get_confidence_level(rating.rating_count),
                cached_at=now,
            )
        logger.debug("RatingCache populated: %d ratings", len(document.collections))
        return len(document.collections)

    def refresh(self, loader: Callable[[], RatingsDocument], label: str = "ratings") -> bool:
        """
        Populate from *loader*. On failure the existing entries are kept.

        Returns:
            True when the cache was refreshed.
        """
        try:
            document = loader()
        except (RatingsError, OSError, ValueError) as exc:
            logger.warning("Failed to refresh rating cache from %s: %s", label, exc)
            return False
        self.populate(document)
        return True

    def set_rating(self, rating: CachedRating) -> None:
        self._entries[rating.bundle_id] = rating

    # -- reads ------------------------------------------------------------------

    def get_rating(self, bundle_id: str) -> Optional[CachedRating]:
        return self._entries.get(bundle_id)

    def has_rating(self, bundle_id: str) -> bool:
        return bundle_id in self._entries

    def get_rating_display(self, bundle_id: str) -> Optional[RatingDisplay]:
        """Display label for a bundle, or None when uncached or unvoted."""
        rating = self._entries.get(bundle_id)
        if rating is None or rating.vote_count == 0:
            return None

        tooltip = "\n".join([
            f"Rating: {rating.star_rating:.1f} / 5",
            f"Votes: {rating.vote_count}",
            f"Confidence: {rating.confidence.value}",
        ])
        return RatingDisplay(
            text=format_rating_for_display(rating.star_rating, rating.vote_count, rating.upvotes),
            tooltip=tooltip,
        )

    @property
    def bundle_ids(self) -> List[str]:
        return list(self._entries.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, bundle_id: str) -> bool:
        return bundle_id in self._entries

    # -- eviction ---------------------------------------------------------------

    def clear(self) -> None:
        self._entries.clear()

    def clear_prefix(self, prefix: str) -> int:
        """Drop every entry whose bundle id starts with *prefix* (one hub's bundles)."""
        doomed = [b for b in self._entries if b.startswith(prefix)]
        for bundle_id in doomed:
            del self._entries[bundle_id]
        return len(doomed)
