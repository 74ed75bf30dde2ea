"""
ratings_core: minimal core library for the engagement rating engine.

Every scoring module imports from this package.  It provides:
- Domain types (VoteTally, Comment, RatingMetrics, StarSummary, ...)
- The ConfidenceLevel enum
- Custom exception hierarchy

This package contains **zero** scoring logic, only primitives and
contracts.
"""

# Errors: import first, no internal deps
from ratings_core.errors import (
    RatingsConfigError,
    RatingsError,
    RatingsFormatError,
    RatingsInputError,
)

# Domain types
from ratings_core.types import (
    Comment,
    ConfidenceLevel,
    RatingMetrics,
    ResourceScoreInput,
    StarSummary,
    VoteTally,
)

__all__ = [
    # Errors
    "RatingsError",
    "RatingsConfigError",
    "RatingsInputError",
    "RatingsFormatError",
    # Types
    "ConfidenceLevel",
    "VoteTally",
    "Comment",
    "ResourceScoreInput",
    "RatingMetrics",
    "StarSummary",
]
