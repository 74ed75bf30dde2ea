"""Complete vote-based metrics for one resource."""

from ratings_core.types import RatingMetrics
from engagement.scoring.aggregation import bayesian_smoothing, wilson_lower_bound
from engagement.scoring.confidence import get_confidence_level
from engagement.scoring.conversion import score_to_stars


def compute_rating_metrics(
    upvotes: int,
    downvotes: int,
    prior_mean: float = 0.6,
    *,
    z: float = 1.96,
    prior_strength: float = 10,
    min_stars: int = 1,
    max_stars: int = 5,
) -> RatingMetrics:
    """
    Score one resource's reactions.

    The star rating is derived from the Wilson bound, not the raw ratio, so
    thinly voted resources sit near the bottom of the scale until evidence
    accumulates.

    Args:
        upvotes: Thumbs-up count.
        downvotes: Thumbs-down count.
        prior_mean: Prior positive rate for Bayesian smoothing.
        z: Z-score for the Wilson interval.
        prior_strength: Pseudo-vote weight of the prior.
        min_stars: Lowest star value.
        max_stars: Highest star value.

    Returns:
        RatingMetrics with unrounded scores.
    """
    total_votes = upvotes + downvotes
    wilson_score = wilson_lower_bound(upvotes, downvotes, z)

    return RatingMetrics(
        wilson_score=wilson_score,
        bayesian_score=bayesian_smoothing(upvotes, total_votes, prior_mean, prior_strength),
        star_rating=score_to_stars(wilson_score, min_stars, max_stars),
        upvotes=upvotes,
        downvotes=downvotes,
        total_votes=total_votes,
        confidence=get_confidence_level(total_votes),
    )
