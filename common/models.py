"""
Output records for the ratings artifact.

Each model provides:
- from_dict(): classmethod to construct from the published JSON document
- from_bundle() (CollectionRating only): the camelCase hub `bundles` entry
- to_dict(): returns dict with the artifact's snake_case key names

Vote-based scores are stored rounded to 3 decimals and star averages to 1
decimal so that artifacts from different runs compare cleanly.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ratings_core.errors import RatingsFormatError
from ratings_core.types import RatingMetrics
from common.rounding import round_half_up

SCORE_DECIMALS = 3


def round_score(value: float) -> float:
    return round_half_up(value, SCORE_DECIMALS)


@dataclass
class ResourceRating:
    """Reaction-based rating of one resource inside a collection."""
    up: int
    down: int
    wilson_score: float
    bayesian_score: float
    star_rating: float
    confidence: str

    @classmethod
    def from_metrics(cls, metrics: RatingMetrics) -> "ResourceRating":
        return cls(
            up=metrics.upvotes,
            down=metrics.downvotes,
            wilson_score=round_score(metrics.wilson_score),
            bayesian_score=round_score(metrics.bayesian_score),
            star_rating=metrics.star_rating,
            confidence=metrics.confidence.value,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResourceRating":
        return cls(
            up=data.get('up', 0),
            down=data.get('down', 0),
            wilson_score=data.get('wilson_score', 0.0),
            bayesian_score=data.get('bayesian_score', 0.0),
            star_rating=data.get('star_rating', 0.0),
            confidence=data.get('confidence', 'low'),
        )

    @property
    def total_votes(self) -> int:
        return self.up + self.down

    def to_dict(self) -> Dict[str, Any]:
        return {
            'up': self.up,
            'down': self.down,
            'wilson_score': self.wilson_score,
            'bayesian_score': self.bayesian_score,
            'star_rating': self.star_rating,
            'confidence': self.confidence,
        }


@dataclass
class CollectionRating:
    """Rating of one collection (bundle) and its resources."""
    discussion_number: int
    up: int
    down: int
    wilson_score: float
    bayesian_score: float
    aggregated_score: float
    star_rating: float
    rating_count: int
    confidence: str
    source_id: Optional[str] = None
    resources: Dict[str, ResourceRating] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CollectionRating":
        return cls(
            discussion_number=data.get('discussion_number', 0),
            up=data.get('up', 0),
            down=data.get('down', 0),
            wilson_score=data.get('wilson_score', 0.0),
            bayesian_score=data.get('bayesian_score', 0.0),
            aggregated_score=data.get('aggregated_score', 0.0),
            star_rating=data.get('star_rating', 0.0),
            rating_count=data.get('rating_count', 0),
            confidence=data.get('confidence', 'low'),
            source_id=data.get('source_id'),
            resources={
                resource_id: ResourceRating.from_dict(resource)
                for resource_id, resource in (data.get('resources') or {}).items()
            },
        )

    @classmethod
    def from_bundle(cls, data: Dict[str, Any]) -> "CollectionRating":
        """
        Construct from a hub ``bundles`` entry (camelCase keys).

        Bundle entries carry no Bayesian, aggregated, or per-resource data;
        the aggregated score falls back to the Wilson score.
        """
        wilson_score = data.get('wilsonScore', 0.0)
        return cls(
            discussion_number=data.get('discussionNumber', 0),
            up=data.get('upvotes', 0),
            down=data.get('downvotes', 0),
            wilson_score=wilson_score,
            bayesian_score=0.0,
            aggregated_score=wilson_score,
            star_rating=data.get('starRating', 0.0),
            rating_count=data.get('totalVotes', 0),
            confidence=data.get('confidence', 'low'),
            source_id=data.get('sourceId'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_id': self.source_id,
            'discussion_number': self.discussion_number,
            'up': self.up,
            'down': self.down,
            'wilson_score': self.wilson_score,
            'bayesian_score': self.bayesian_score,
            'aggregated_score': self.aggregated_score,
            'star_rating': self.star_rating,
            'rating_count': self.rating_count,
            'confidence': self.confidence,
            'resources': {
                resource_id: resource.to_dict()
                for resource_id, resource in self.resources.items()
            },
        }


@dataclass
class RatingsDocument:
    """The published ratings artifact, keyed by collection id."""
    generated_at: str
    repository: str
    collections: Dict[str, CollectionRating] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RatingsDocument":
        """
        Read either layout hubs serve: ``bundles`` (camelCase, newer) or the
        ``collections`` artifact written by :meth:`to_dict`.
        """
        if not isinstance(data, dict):
            raise RatingsFormatError("document is not a JSON object")

        bundles = data.get('bundles')
        if isinstance(bundles, dict):
            return cls(
                generated_at=data.get('generatedAt', ''),
                repository=data.get('repository', ''),
                collections={
                    bundle_id: CollectionRating.from_bundle(bundle)
                    for bundle_id, bundle in bundles.items()
                },
            )

        collections = data.get('collections')
        if not isinstance(collections, dict):
            raise RatingsFormatError("missing 'bundles' or 'collections' mapping")
        return cls(
            generated_at=data.get('generated_at', ''),
            repository=data.get('repository', ''),
            collections={
                collection_id: CollectionRating.from_dict(collection)
                for collection_id, collection in collections.items()
            },
        )

    @property
    def resource_count(self) -> int:
        return sum(len(c.resources) for c in self.collections.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'generated_at': self.generated_at,
            'repository': self.repository,
            'collections': {
                collection_id: collection.to_dict()
                for collection_id, collection in self.collections.items()
            },
        }
