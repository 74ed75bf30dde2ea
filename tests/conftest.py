"""
Shared pytest fixtures for rating engine tests.

The conftest patches the Config singleton at import time so that modules
reading `common.config.config` see schema defaults instead of whatever
config.json sits in the working directory.
"""

import sys
from pathlib import Path

# Ensure project root is on sys.path so imports work from tests/
sys.path.insert(0, str(Path(__file__).parent.parent))

# Patch Config BEFORE anything else imports the scoring modules, which read
# the module-level `config` accessor.
import common.config
from common.config import Config

_test_config = Config.__new__(Config)
_test_config._config = {}
Config._instance = _test_config
common.config.config = _test_config

# Now it's safe to import the pipeline
import pytest
from ratings_core.types import Comment, VoteTally
from engagement.snapshots import CollectionSnapshot
from engagement.scoring.pipeline import RatingPipeline


@pytest.fixture
def pipeline():
    return RatingPipeline()


@pytest.fixture
def make_comment():
    """Factory for discussion comments."""
    def _make(body: str, author=None, created_at: str = "2024-01-01T00:00:00Z") -> Comment:
        return Comment(body=body, created_at=created_at, author=author)
    return _make


@pytest.fixture
def rated_snapshot(make_comment):
    """A collection with star-rated comments, reactions, and two resources."""
    return CollectionSnapshot(
        id="hub/bundle-a",
        discussion_number=7,
        source_id="hub",
        votes=VoteTally(up=12, down=3),
        comments=(
            make_comment("Rating: ⭐⭐⭐\nFeedback: ok", "alice", "2024-01-01T10:00:00Z"),
            make_comment("Rating: ⭐⭐⭐⭐⭐\nFeedback: grew on me", "alice", "2024-02-01T10:00:00Z"),
            make_comment("**Feedback** (4 ⭐⭐⭐⭐)\n\nSolid", "bob", "2024-01-15T10:00:00Z"),
            make_comment("Thanks for sharing!", "carol", "2024-01-20T10:00:00Z"),
        ),
        resources={
            "prompt-one": VoteTally(up=40, down=2),
            "prompt-two": VoteTally(up=0, down=0),
        },
    )
