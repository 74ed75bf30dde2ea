"""
Custom exception hierarchy for ratings_core.

The scoring functions themselves are total over their documented domain and
raise nothing. Errors are raised only at the boundaries: configuration,
loading pre-fetched snapshots, and loading ratings documents. Callers catch
RatingsError or a specific subclass.
"""


class RatingsError(Exception):
    """Base exception for all rating engine errors."""


class RatingsConfigError(RatingsError):
    """Raised when a configured value is missing or out of range."""

    def __init__(self, key: str, reason: str = "missing or None"):
        self.key = key
        super().__init__(f"Configuration error for '{key}': {reason}")


class RatingsInputError(RatingsError):
    """Raised when a pre-fetched snapshot entry cannot be turned into engine inputs."""

    def __init__(self, source: str, detail: str):
        self.source = source
        super().__init__(f"Input error [{source}]: {detail}")


class RatingsFormatError(RatingsError):
    """Raised when a ratings document does not have the expected layout."""

    def __init__(self, detail: str):
        super().__init__(f"Ratings format error: {detail}")
