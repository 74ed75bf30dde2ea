"""Tests for the rating pipeline: collection and resource scoring end to end."""

import pytest

from common.models import round_score
from ratings_core.errors import RatingsConfigError
from ratings_core.types import Comment, VoteTally
from engagement.scoring import score_to_stars, wilson_lower_bound
from engagement.scoring import pipeline as pipeline_module
from engagement.scoring.pipeline import RatingPipeline
from engagement.scoring.protocols import ScoreAggregator
from engagement.snapshots import CollectionSnapshot


class _FixedAggregator(ScoreAggregator):
    """Test aggregator that ignores its input."""

    def __init__(self, val: float):
        self._val = val

    def aggregate(self, resources):
        return self._val


def _snapshot(up=0, down=0, comments=(), resources=None):
    return CollectionSnapshot(
        id="hub/bundle",
        discussion_number=1,
        votes=VoteTally(up=up, down=down),
        comments=tuple(comments),
        resources=resources or {},
    )


# ── Resources ─────────────────────────────────────────────────

class TestRateResource:
    def test_scores_from_reactions(self, pipeline):
        rating = pipeline.rate_resource(VoteTally(up=40, down=2))
        assert rating.up == 40
        assert rating.down == 2
        assert rating.wilson_score == round_score(wilson_lower_bound(40, 2))
        assert rating.star_rating == score_to_stars(wilson_lower_bound(40, 2))
        assert rating.confidence == "high"

    def test_unvoted(self, pipeline):
        rating = pipeline.rate_resource(VoteTally())
        assert rating.wilson_score == 0.0
        assert rating.bayesian_score == 0.6
        assert rating.star_rating == 1.0
        assert rating.confidence == "low"

    def test_scores_rounded_to_three_decimals(self, pipeline):
        rating = pipeline.rate_resource(VoteTally(up=7, down=3))
        assert rating.wilson_score == round(rating.wilson_score, 3)
        assert rating.bayesian_score == round(rating.bayesian_score, 3)


# ── Comments ──────────────────────────────────────────────────

class TestSummarizeComments:
    def test_rated_snapshot_comments(self, pipeline, rated_snapshot):
        assert sorted(pipeline.collect_star_ratings(rated_snapshot.comments)) == [4, 5]
        summary = pipeline.summarize_comments(rated_snapshot.comments)
        assert summary.average == 4.5
        assert summary.count == 2
        assert summary.confidence == "low"

    def test_no_ratings(self, pipeline, make_comment):
        summary = pipeline.summarize_comments([make_comment("hello")])
        assert summary.average == 0.0
        assert summary.count == 0


# ── Collections ───────────────────────────────────────────────

class TestRateCollection:
    def test_star_ratings_take_precedence(self, pipeline, rated_snapshot):
        rating = pipeline.rate_collection(rated_snapshot)
        assert rating.star_rating == 4.5
        assert rating.rating_count == 2
        assert rating.wilson_score == 0.875
        assert rating.confidence == "low"

    def test_star_branch_bayesian(self, pipeline, rated_snapshot):
        # ratings 5 and 4 map to 1.0 and 0.75
        rating = pipeline.rate_collection(rated_snapshot)
        assert rating.bayesian_score == round_score((1.75 + 10 * 0.6) / (2 + 10))

    def test_reactions_still_reported(self, pipeline, rated_snapshot):
        rating = pipeline.rate_collection(rated_snapshot)
        assert rating.up == 12
        assert rating.down == 3
        assert rating.discussion_number == 7
        assert rating.source_id == "hub"

    def test_resources_rated(self, pipeline, rated_snapshot):
        rating = pipeline.rate_collection(rated_snapshot)
        assert set(rating.resources) == {"prompt-one", "prompt-two"}
        assert rating.resources["prompt-two"].wilson_score == 0.0

    def test_aggregated_blends_collection_and_resources(self, pipeline, rated_snapshot):
        rating = pipeline.rate_collection(rated_snapshot)
        # prompt-two has no votes and carries no weight
        expected = 0.7 * 0.875 + 0.3 * rating.resources["prompt-one"].wilson_score
        assert rating.aggregated_score == pytest.approx(expected, abs=1e-3)

    def test_reaction_fallback(self, pipeline, make_comment):
        snapshot = _snapshot(up=12, down=3, comments=[make_comment("Thanks!", "dave")])
        rating = pipeline.rate_collection(snapshot)
        wilson = wilson_lower_bound(12, 3)
        assert rating.wilson_score == round_score(wilson)
        assert rating.star_rating == score_to_stars(wilson)
        assert rating.rating_count == 15
        assert rating.confidence == "medium"

    def test_no_resources_aggregated_equals_wilson(self, pipeline):
        rating = pipeline.rate_collection(_snapshot(up=30, down=4))
        assert rating.aggregated_score == rating.wilson_score
        assert rating.resources == {}

    def test_no_signal_at_all(self, pipeline):
        rating = pipeline.rate_collection(_snapshot())
        assert rating.wilson_score == 0.0
        assert rating.star_rating == 1.0
        assert rating.rating_count == 0
        assert rating.confidence == "low"

    def test_custom_aggregator_and_weight(self):
        pipeline = RatingPipeline(aggregator=_FixedAggregator(0.5), collection_weight=0.5)
        snapshot = _snapshot(
            comments=[Comment("Rating: ⭐⭐⭐⭐⭐", "2024-01-01T00:00:00Z", "u")],
            resources={"r": VoteTally(up=1)},
        )
        rating = pipeline.rate_collection(snapshot)
        assert rating.aggregated_score == 0.75

    def test_prior_mean_override(self):
        low = RatingPipeline(prior_mean=0.2).rate_collection(_snapshot(up=2, down=1))
        high = RatingPipeline(prior_mean=0.9).rate_collection(_snapshot(up=2, down=1))
        assert low.wilson_score == high.wilson_score
        assert low.bayesian_score < high.bayesian_score

    def test_scores_within_bounds(self, pipeline, rated_snapshot):
        rating = pipeline.rate_collection(rated_snapshot)
        for score in (rating.wilson_score, rating.bayesian_score, rating.aggregated_score):
            assert 0.0 <= score <= 1.0
        assert 1.0 <= rating.star_rating <= 5.0


# ── rate_all ──────────────────────────────────────────────────

class TestRateAll:
    def test_document_keyed_by_collection_id(self, pipeline, rated_snapshot):
        document = pipeline.rate_all([rated_snapshot], "owner/repo", generated_at="2024-06-01T00:00:00Z")
        assert document.repository == "owner/repo"
        assert document.generated_at == "2024-06-01T00:00:00Z"
        assert list(document.collections) == ["hub/bundle-a"]
        assert document.resource_count == 2

    def test_generated_at_defaults_to_now(self, pipeline):
        document = pipeline.rate_all([], "owner/repo")
        assert document.generated_at
        assert document.collections == {}

    def test_serializable(self, pipeline, rated_snapshot):
        data = pipeline.rate_all([rated_snapshot], "owner/repo").to_dict()
        collection = data["collections"]["hub/bundle-a"]
        assert collection["star_rating"] == 4.5
        assert collection["resources"]["prompt-one"]["up"] == 40


# ── Configuration ─────────────────────────────────────────────

class TestPipelineConfig:
    def test_defaults_from_config(self, pipeline):
        assert pipeline.z == 1.96
        assert pipeline.prior_mean == 0.6
        assert pipeline.collection_weight == 0.7

    @pytest.mark.parametrize("weight", [-0.1, 1.5])
    def test_weight_out_of_range(self, weight):
        with pytest.raises(RatingsConfigError) as excinfo:
            RatingPipeline(collection_weight=weight)
        assert excinfo.value.key == "aggregation.collection_weight"

    def test_weight_bounds_accepted(self):
        assert RatingPipeline(collection_weight=0.0).collection_weight == 0.0
        assert RatingPipeline(collection_weight=1.0).collection_weight == 1.0

    def test_degenerate_star_scale(self, monkeypatch):
        monkeypatch.setattr(pipeline_module.config, "_config", {"scoring": {"min_stars": 5, "max_stars": 5}})
        with pytest.raises(RatingsConfigError) as excinfo:
            RatingPipeline()
        assert excinfo.value.key == "scoring.max_stars"

    def test_negative_prior_strength(self, monkeypatch):
        monkeypatch.setattr(pipeline_module.config, "_config", {"scoring": {"prior_strength": -1}})
        with pytest.raises(RatingsConfigError):
            RatingPipeline()

    def test_configured_z_reaches_scores(self, monkeypatch):
        monkeypatch.setattr(pipeline_module.config, "_config", {"scoring": {"wilson_z": 2.58}})
        rating = RatingPipeline().rate_resource(VoteTally(up=20, down=5))
        assert rating.wilson_score == round_score(wilson_lower_bound(20, 5, z=2.58))
