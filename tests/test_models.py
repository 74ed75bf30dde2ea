"""Tests for common/models.py: the published ratings artifact."""

import json

import pytest

from common.models import CollectionRating, RatingsDocument, ResourceRating, round_score
from ratings_core.errors import RatingsFormatError
from engagement.scoring import compute_rating_metrics


# Hub-served layout: camelCase BundleRating records under "bundles"
HUB_BUNDLES = {
    "version": "1.0",
    "generatedAt": "2024-06-01T00:00:00Z",
    "bundles": {
        "hub/a": {
            "sourceId": "hub",
            "bundleId": "hub/a",
            "upvotes": 40,
            "downvotes": 2,
            "wilsonScore": 0.85,
            "starRating": 4.4,
            "totalVotes": 42,
            "lastUpdated": "2024-06-01T00:00:00Z",
            "discussionNumber": 9,
            "confidence": "high",
        },
    },
}


def _collection(**overrides):
    fields = dict(
        discussion_number=3,
        up=10,
        down=2,
        wilson_score=0.55,
        bayesian_score=0.72,
        aggregated_score=0.6,
        star_rating=3.2,
        rating_count=12,
        confidence="medium",
        source_id="hub",
        resources={"r1": ResourceRating(5, 0, 0.566, 0.733, 3.3, "medium")},
    )
    fields.update(overrides)
    return CollectionRating(**fields)


class TestRoundScore:
    def test_three_decimals(self):
        assert round_score(0.123456) == 0.123

    def test_half_up(self):
        assert round_score(0.0625) == 0.063


class TestResourceRating:
    def test_from_metrics_rounds(self):
        rating = ResourceRating.from_metrics(compute_rating_metrics(7, 3))
        assert rating.wilson_score == round(rating.wilson_score, 3)
        assert rating.confidence == "medium"
        assert rating.total_votes == 10

    def test_from_dict_defaults(self):
        rating = ResourceRating.from_dict({})
        assert rating.up == 0
        assert rating.confidence == "low"

    def test_to_dict_keys(self):
        data = ResourceRating(1, 2, 0.1, 0.5, 1.4, "low").to_dict()
        assert set(data) == {"up", "down", "wilson_score", "bayesian_score", "star_rating", "confidence"}


class TestCollectionRating:
    def test_to_dict_nests_resources(self):
        data = _collection().to_dict()
        assert data["resources"]["r1"]["up"] == 5
        assert data["source_id"] == "hub"

    def test_from_dict_restores(self):
        rating = _collection()
        assert CollectionRating.from_dict(rating.to_dict()) == rating

    def test_missing_resources(self):
        rating = CollectionRating.from_dict({"discussion_number": 1, "resources": None})
        assert rating.resources == {}


class TestRatingsDocument:
    def test_json_round_trip(self):
        document = RatingsDocument(
            generated_at="2024-06-01T00:00:00+00:00",
            repository="owner/repo",
            collections={"hub/a": _collection(), "hub/b": _collection(resources={})},
        )
        restored = RatingsDocument.from_dict(json.loads(json.dumps(document.to_dict())))
        assert restored == document
        assert restored.resource_count == 1

    def test_not_a_dict(self):
        with pytest.raises(RatingsFormatError):
            RatingsDocument.from_dict([])

    def test_missing_collections(self):
        with pytest.raises(RatingsFormatError):
            RatingsDocument.from_dict({"repository": "owner/repo"})

    def test_bundles_layout(self):
        document = RatingsDocument.from_dict(HUB_BUNDLES)
        assert document.generated_at == "2024-06-01T00:00:00Z"
        rating = document.collections["hub/a"]
        assert rating.star_rating == 4.4
        assert rating.wilson_score == 0.85
        assert rating.aggregated_score == 0.85
        assert rating.rating_count == 42
        assert rating.up == 40
        assert rating.down == 2
        assert rating.discussion_number == 9
        assert rating.source_id == "hub"
        assert rating.confidence == "high"
        assert rating.resources == {}

    def test_bundles_preferred_over_collections(self):
        data = dict(HUB_BUNDLES, collections={"hub/old": _collection().to_dict()})
        assert list(RatingsDocument.from_dict(data).collections) == ["hub/a"]

    def test_empty_collections(self):
        document = RatingsDocument.from_dict({"collections": {}})
        assert document.collections == {}
        assert document.resource_count == 0
