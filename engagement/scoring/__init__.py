"""
Scoring package: engagement rating engine.

Functional API (pure, stateless):
    wilson_lower_bound, bayesian_smoothing, score_to_stars, stars_to_score,
    get_confidence_level, compute_rating_metrics,
    parse_star_rating_from_comment, deduplicate_ratings_by_user,
    compute_average_star_rating, aggregate_resource_scores

Pluggable components:
    RatingPipeline, StarCommentParser, MatcherRegistry, RatingMatcher,
    ScoreAggregator, LogWeightedAggregator, UserDeduplicator
"""

from engagement.scoring.protocols import RatingMatcher, ScoreAggregator
from engagement.scoring.conversion import score_to_stars, stars_to_score
from engagement.scoring.confidence import get_confidence_level
from engagement.scoring.aggregation import (
    LogWeightedAggregator,
    aggregate_resource_scores,
    bayesian_smoothing,
    wilson_lower_bound,
)
from engagement.scoring.metrics import compute_rating_metrics
from engagement.scoring.registry import MatcherRegistry
from engagement.scoring.parser import StarCommentParser, parse_star_rating_from_comment
from engagement.scoring.deduplication import UserDeduplicator, deduplicate_ratings_by_user
from engagement.scoring.stars import compute_average_star_rating
from engagement.scoring.pipeline import RatingPipeline

__all__ = [
    # Protocols
    "RatingMatcher",
    "ScoreAggregator",
    # Vote scoring
    "wilson_lower_bound",
    "bayesian_smoothing",
    "score_to_stars",
    "stars_to_score",
    "get_confidence_level",
    "compute_rating_metrics",
    # Comment ratings
    "MatcherRegistry",
    "StarCommentParser",
    "parse_star_rating_from_comment",
    "UserDeduplicator",
    "deduplicate_ratings_by_user",
    "compute_average_star_rating",
    # Aggregation
    "LogWeightedAggregator",
    "aggregate_resource_scores",
    # Pipeline
    "RatingPipeline",
]
