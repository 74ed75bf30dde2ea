"""Rating pipeline: orchestrates vote scoring, comment ratings, and aggregation."""

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from common.config import config
from common.logging.logger import get_logger
from common.models import CollectionRating, RatingsDocument, ResourceRating, round_score
from ratings_core.errors import RatingsConfigError
from ratings_core.types import Comment, RatingMetrics, ResourceScoreInput, StarSummary, VoteTally
from engagement.scoring.aggregation import LogWeightedAggregator, bayesian_smoothing
from engagement.scoring.conversion import stars_to_score
from engagement.scoring.deduplication import UserDeduplicator
from engagement.scoring.metrics import compute_rating_metrics
from engagement.scoring.protocols import ScoreAggregator
from engagement.scoring.stars import compute_average_star_rating
from engagement.snapshots import CollectionSnapshot

logger = get_logger("rating_pipeline")


class RatingPipeline:
    """
    Turns pre-fetched reactions and comments into published ratings.

    Star ratings from discussion comments take precedence over reactions for
    a collection; reactions are the fallback when nobody left a rating.
    Resources are always scored from their own reactions.

    Args:
        deduplicator: Optional per-user deduplicator (defaults to UserDeduplicator).
        aggregator: Optional cross-resource aggregator (defaults to LogWeightedAggregator).
        prior_mean: Bayesian prior; defaults to ``scoring.prior_mean``.
        collection_weight: Share of the collection's own score in the
            aggregated score; defaults to ``aggregation.collection_weight``.

    Raises:
        RatingsConfigError: If the weight, star scale or prior strength is
            out of range.
    """

    def __init__(
        self,
        deduplicator: Optional[UserDeduplicator] = None,
        aggregator: Optional[ScoreAggregator] = None,
        prior_mean: Optional[float] = None,
        collection_weight: Optional[float] = None,
    ):
        self.deduplicator = deduplicator or UserDeduplicator()
        self.aggregator = aggregator or LogWeightedAggregator()

        self.z = config.get("scoring.wilson_z")
        self.prior_mean = prior_mean if prior_mean is not None else config.get("scoring.prior_mean")
        self.prior_strength = config.get("scoring.prior_strength")
        self.min_stars = config.get("scoring.min_stars")
        self.max_stars = config.get("scoring.max_stars")
        self.collection_weight = (
            collection_weight if collection_weight is not None
            else config.get("aggregation.collection_weight")
        )

        if not 0.0 <= self.collection_weight <= 1.0:
            raise RatingsConfigError(
                "aggregation.collection_weight", f"must be within [0, 1], got {self.collection_weight!r}"
            )
        if self.max_stars <= self.min_stars:
            raise RatingsConfigError(
                "scoring.max_stars", f"must exceed scoring.min_stars ({self.min_stars}), got {self.max_stars!r}"
            )
        if self.prior_strength < 0:
            raise RatingsConfigError(
                "scoring.prior_strength", f"must be non-negative, got {self.prior_strength!r}"
            )

    # -- single signals ------------------------------------------------------

    def score_votes(self, votes: VoteTally) -> RatingMetrics:
        """Vote metrics for one tally, using the configured constants."""
        return compute_rating_metrics(
            votes.up,
            votes.down,
            self.prior_mean,
            z=self.z,
            prior_strength=self.prior_strength,
            min_stars=self.min_stars,
            max_stars=self.max_stars,
        )

    def rate_resource(self, votes: VoteTally) -> ResourceRating:
        return ResourceRating.from_metrics(self.score_votes(votes))

    def collect_star_ratings(self, comments: Iterable[Comment]) -> List[int]:
        return self.deduplicator.deduplicate(comments)

    def summarize_ratings(self, ratings: Sequence[int]) -> StarSummary:
        return compute_average_star_rating(ratings)

    def summarize_comments(self, comments: Iterable[Comment]) -> StarSummary:
        """Parse, deduplicate and average the star ratings in *comments*."""
        return self.summarize_ratings(self.collect_star_ratings(comments))

    # -- collections ---------------------------------------------------------

    def rate_collection(self, snapshot: CollectionSnapshot) -> CollectionRating:
        """Rate one collection from its discussion comments, reactions and resources."""
        ratings = self.collect_star_ratings(snapshot.comments)

        if ratings:
            summary = self.summarize_ratings(ratings)
            star_rating = summary.average
            wilson_score = stars_to_score(summary.average, self.min_stars, self.max_stars)
            positive = sum(stars_to_score(r, self.min_stars, self.max_stars) for r in ratings)
            bayesian_score = bayesian_smoothing(
                positive, len(ratings), self.prior_mean, self.prior_strength
            )
            confidence = summary.confidence
            rating_count = summary.count
            logger.info(
                "%s: %d star ratings, average %.1f", snapshot.id, rating_count, star_rating
            )
        else:
            metrics = self.score_votes(snapshot.votes)
            star_rating = metrics.star_rating
            wilson_score = metrics.wilson_score
            bayesian_score = metrics.bayesian_score
            confidence = metrics.confidence
            rating_count = metrics.total_votes
            logger.info(
                "%s: no star ratings, using reactions (%d up, %d down)",
                snapshot.id, snapshot.votes.up, snapshot.votes.down,
            )

        resources = {
            resource_id: self.rate_resource(votes)
            for resource_id, votes in snapshot.resources.items()
        }

        aggregated_score = wilson_score
        if resources:
            resource_score = self.aggregator.aggregate([
                ResourceScoreInput(score=r.wilson_score, vote_count=r.total_votes)
                for r in resources.values()
            ])
            aggregated_score = (
                self.collection_weight * wilson_score
                + (1 - self.collection_weight) * resource_score
            )

        return CollectionRating(
            source_id=snapshot.source_id,
            discussion_number=snapshot.discussion_number,
            up=snapshot.votes.up,
            down=snapshot.votes.down,
            wilson_score=round_score(wilson_score),
            bayesian_score=round_score(bayesian_score),
            aggregated_score=round_score(aggregated_score),
            star_rating=star_rating,
            rating_count=rating_count,
            confidence=confidence.value,
            resources=resources,
        )

    def rate_all(
        self,
        snapshots: Iterable[CollectionSnapshot],
        repository: str,
        generated_at: Optional[str] = None,
    ) -> RatingsDocument:
        """Rate every collection and wrap the results in a RatingsDocument."""
        document = RatingsDocument(
            generated_at=generated_at or datetime.now(timezone.utc).isoformat(),
            repository=repository,
        )
        for snapshot in snapshots:
            document.collections[snapshot.id] = self.rate_collection(snapshot)

        logger.info(
            "Rated %d collections, %d resources",
            len(document.collections), document.resource_count,
        )
        return document
