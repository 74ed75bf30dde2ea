"""Sample-size confidence buckets."""

from ratings_core.types import ConfidenceLevel

MEDIUM_THRESHOLD = 5
HIGH_THRESHOLD = 20
VERY_HIGH_THRESHOLD = 100


def get_confidence_level(count: int) -> ConfidenceLevel:
    """Classify a vote or rating count: <5 low, 5-19 medium, 20-99 high, 100+ very_high."""
    if count < MEDIUM_THRESHOLD:
        return ConfidenceLevel.LOW
    if count < HIGH_THRESHOLD:
        return ConfidenceLevel.MEDIUM
    if count < VERY_HIGH_THRESHOLD:
        return ConfidenceLevel.HIGH
    return ConfidenceLevel.VERY_HIGH
