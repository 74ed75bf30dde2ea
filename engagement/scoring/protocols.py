"""Abstract base classes for the rating engine."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ratings_core.types import ResourceScoreInput


class RatingMatcher(ABC):
    """Protocol for one comment rating format."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique matcher name (e.g. 'rating_line')."""
        ...

    @abstractmethod
    def match(self, line: str) -> Optional[int]:
        """
        Extract a star rating from a single comment line.

        Args:
            line: One line of the comment body, without its newline.

        Returns:
            Rating in [1, 5], or None when the line is not in this format.
        """
        ...


class ScoreAggregator(ABC):
    """Protocol for combining many resource scores into one collection score."""

    @abstractmethod
    def aggregate(self, resources: Sequence[ResourceScoreInput]) -> float:
        """Return a single aggregate score in [0.0, 1.0]."""
        ...
