"""Average of individual star ratings."""

from typing import Sequence

from common.rounding import round_half_up
from ratings_core.types import StarSummary
from engagement.scoring.confidence import get_confidence_level


def compute_average_star_rating(ratings: Sequence[int]) -> StarSummary:
    """Mean of deduplicated 1-5 ratings, rounded to one decimal; 0.0 when empty."""
    count = len(ratings)
    if count == 0:
        return StarSummary(average=0.0, count=0, confidence=get_confidence_level(0))

    return StarSummary(
        average=round_half_up(sum(ratings) / count, 1),
        count=count,
        confidence=get_confidence_level(count),
    )
