"""
Domain types for ratings_core.

Small frozen dataclasses and enums that every scoring module shares. They
are built fresh for each scoring pass from externally supplied counts and
comments, and discarded once the output records are produced.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ConfidenceLevel(str, Enum):
    """How reliable a score is, judged purely by sample size."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VoteTally:
    """Up/down reaction counts for one resource."""
    up: int = 0
    down: int = 0

    @property
    def total(self) -> int:
        return self.up + self.down


@dataclass(frozen=True)
class Comment:
    """
    A single discussion comment.

    *author* is the login of the commenter, or None for anonymous or deleted
    accounts. *created_at* is the ISO-8601 timestamp string as delivered by
    the discussion API.
    """
    body: str
    created_at: str
    author: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Comment":
        """Build from the discussion API shape ``{body, author: {login}, createdAt}``."""
        author = payload.get("author") or {}
        login = author.get("login") if isinstance(author, dict) else None
        return cls(
            body=payload.get("body") or "",
            created_at=payload.get("createdAt") or payload.get("created_at") or "",
            author=login or None,
        )


@dataclass(frozen=True)
class ResourceScoreInput:
    """A resource's 0-1 score and the number of votes behind it."""
    score: float
    vote_count: int


# ---------------------------------------------------------------------------
# Derived records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RatingMetrics:
    """All vote-based metrics for one resource. Recomputed, never mutated."""
    wilson_score: float
    bayesian_score: float
    star_rating: float
    upvotes: int
    downvotes: int
    total_votes: int
    confidence: ConfidenceLevel


@dataclass(frozen=True)
class StarSummary:
    """Mean of deduplicated star ratings for one resource."""
    average: float
    count: int
    confidence: ConfidenceLevel
