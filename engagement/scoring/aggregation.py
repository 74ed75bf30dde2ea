"""Vote scoring and score aggregation strategies."""

import math
from typing import Sequence

import numpy as np

from ratings_core.types import ResourceScoreInput
from engagement.scoring.protocols import ScoreAggregator


def wilson_lower_bound(up: int, down: int, z: float = 1.96) -> float:
    """
    Compute the Wilson score lower bound for up/down votes.

    Args:
        up: Number of upvotes.
        down: Number of downvotes.
        z: Z-score for confidence level (1.96 = 95%).

    Returns:
        Lower bound of the confidence interval, 0.0 with no votes. Below 1.0
        for any realistic tally; float precision lets it reach 1.0 once the
        vote count nears 1e16, so the result is clamped to [0.0, 1.0].
    """
    total = up + down
    if total == 0:
        return 0.0
    # center == spread exactly when up == 0; float noise must not leave a residue
    if up == 0:
        return 0.0

    p = up / total
    z2 = z * z

    denominator = 1 + z2 / total
    center = p + z2 / (2 * total)
    spread = z * math.sqrt((p * (1 - p) + z2 / (4 * total)) / total)

    return min(max((center - spread) / denominator, 0.0), 1.0)


def bayesian_smoothing(
    positive_count: float,
    total_count: float,
    prior_mean: float = 0.6,
    prior_strength: float = 10,
) -> float:
    """
    Blend an observed positive rate with a prior belief.

    The prior acts as *prior_strength* pseudo-votes at rate *prior_mean*, so
    1/1 does not outrank 1000/1010.
    """
    return (positive_count + prior_strength * prior_mean) / (total_count + prior_strength)


class LogWeightedAggregator(ScoreAggregator):
    """
    Weighted mean of resource scores with weight ln(1 + vote_count).

    Log damping keeps one heavily-voted resource from dominating the
    collection while still favouring resources with real engagement.
    Resources with no votes get zero weight.
    """

    def aggregate(self, resources: Sequence[ResourceScoreInput]) -> float:
        if not resources:
            return 0.0

        scores = np.array([r.score for r in resources], dtype=np.float64)
        weights = np.log1p(np.array([r.vote_count for r in resources], dtype=np.float64))

        total_weight = weights.sum()
        if total_weight <= 0:
            return 0.0
        return float(np.dot(scores, weights) / total_weight)


def aggregate_resource_scores(resources: Sequence[ResourceScoreInput]) -> float:
    """Collection-level score from many ``(score, vote_count)`` pairs."""
    return LogWeightedAggregator().aggregate(resources)
