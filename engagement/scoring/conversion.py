"""Conversions between the 0-1 score space and the 1-5 star scale."""

from common.rounding import round_half_up


def score_to_stars(score: float, min_stars: int = 1, max_stars: int = 5) -> float:
    """
    Map a 0-1 score linearly onto the star scale, rounded to one decimal.

    Args:
        score: Score in [0.0, 1.0].
        min_stars: Lowest star value (score 0.0).
        max_stars: Highest star value (score 1.0).

    Returns:
        Star rating in [min_stars, max_stars].
    """
    star_range = max_stars - min_stars
    return round_half_up(score * star_range + min_stars, 1)


def stars_to_score(stars: float, min_stars: int = 1, max_stars: int = 5) -> float:
    """Inverse of :func:`score_to_stars`, without rounding."""
    star_range = max_stars - min_stars
    return (stars - min_stars) / star_range
