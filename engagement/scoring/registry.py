"""Priority-ordered registry of comment rating matchers."""

from typing import List, Optional

from engagement.scoring.protocols import RatingMatcher


class MatcherRegistry:
    """
    Holds matchers in the order the parser tries them.

    New formats append at the lowest priority unless placed ahead of an
    existing matcher with ``before=``. Re-registering a name swaps the
    matcher in place, so a format can be overridden without changing its
    priority.
    """

    def __init__(self):
        self._matchers: List[RatingMatcher] = []

    def _index(self, name: str) -> Optional[int]:
        for i, m in enumerate(self._matchers):
            if m.name == name:
                return i
        return None

    def register(self, matcher: RatingMatcher, before: Optional[str] = None) -> None:
        """
        Add *matcher*, or replace the one with the same name in place.

        Raises:
            KeyError: If *before* names no registered matcher.
        """
        existing = self._index(matcher.name)
        if existing is not None and before in (None, matcher.name):
            self._matchers[existing] = matcher
            return
        if before is not None and self._index(before) is None:
            raise KeyError(f"No matcher named '{before}'")
        if existing is not None:
            del self._matchers[existing]

        if before is None:
            self._matchers.append(matcher)
        else:
            self._matchers.insert(self._index(before), matcher)

    def unregister(self, name: str) -> None:
        index = self._index(name)
        if index is not None:
            del self._matchers[index]

    @property
    def names(self) -> List[str]:
        return [m.name for m in self._matchers]

    @property
    def matchers(self) -> List[RatingMatcher]:
        """Matchers in priority order, highest first."""
        return list(self._matchers)

    def __len__(self) -> int:
        return len(self._matchers)

    def __contains__(self, name: str) -> bool:
        return self._index(name) is not None
