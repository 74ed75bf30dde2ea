"""
Pre-fetched discussion data for one batch scoring run.

The fetcher (outside this package) writes a JSON snapshot; this module turns
it into engine inputs. Expected layout::

    {
      "repository": "owner/repo",
      "collections": [
        {
          "id": "bundle-id",
          "source_id": "hub-source",
          "discussion_number": 12,
          "reactions": {"up": 10, "down": 2},
          "comments": [{"body": "...", "author": {"login": "u"}, "createdAt": "..."}],
          "resources": [{"id": "prompt-a", "up": 3, "down": 0}]
        }
      ]
    }
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ratings_core.errors import RatingsInputError
from ratings_core.types import Comment, VoteTally


@dataclass(frozen=True)
class CollectionSnapshot:
    """Everything needed to rate one collection, already fetched."""
    id: str
    discussion_number: int
    votes: VoteTally
    source_id: Optional[str] = None
    comments: Tuple[Comment, ...] = ()
    resources: Dict[str, VoteTally] = field(default_factory=dict)


def _count(value: Any, source: str, name: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise RatingsInputError(source, f"'{name}' must be a non-negative integer, got {value!r}")
    return value


def _tally(payload: Dict[str, Any], source: str) -> VoteTally:
    return VoteTally(
        up=_count(payload.get("up"), source, "up"),
        down=_count(payload.get("down"), source, "down"),
    )


def parse_collection(payload: Dict[str, Any]) -> CollectionSnapshot:
    """Build a CollectionSnapshot from one entry of the snapshot file."""
    if not isinstance(payload, dict):
        raise RatingsInputError("snapshot", "collection entry is not an object")

    collection_id = payload.get("id")
    if not collection_id:
        raise RatingsInputError("snapshot", "collection entry has no 'id'")

    comments = payload.get("comments") or []
    if not isinstance(comments, list):
        raise RatingsInputError(collection_id, "'comments' must be a list")
    if not all(isinstance(c, dict) for c in comments):
        raise RatingsInputError(collection_id, "every comment entry must be an object")

    resources: Dict[str, VoteTally] = {}
    for resource in payload.get("resources") or []:
        resource_id = resource.get("id") if isinstance(resource, dict) else None
        if not resource_id:
            raise RatingsInputError(collection_id, "resource entry has no 'id'")
        resources[resource_id] = _tally(resource, f"{collection_id}/{resource_id}")

    return CollectionSnapshot(
        id=collection_id,
        discussion_number=_count(payload.get("discussion_number"), collection_id, "discussion_number"),
        votes=_tally(payload.get("reactions") or {}, collection_id),
        source_id=payload.get("source_id"),
        comments=tuple(Comment.from_dict(c) for c in comments),
        resources=resources,
    )


def load_snapshots(payload: Dict[str, Any]) -> Tuple[str, List[CollectionSnapshot], List[str]]:
    """
    Parse a whole snapshot file.

    Malformed collections are skipped rather than failing the run.

    Returns:
        (repository, snapshots, errors) where *errors* holds one message per
        skipped collection.
    """
    if not isinstance(payload, dict):
        raise RatingsInputError("snapshot", "top level is not an object")

    repository = payload.get("repository")
    collections = payload.get("collections")
    if not repository or not isinstance(collections, list):
        raise RatingsInputError("snapshot", "must have 'repository' and a 'collections' list")

    snapshots: List[CollectionSnapshot] = []
    errors: List[str] = []
    for entry in collections:
        try:
            snapshots.append(parse_collection(entry))
        except RatingsInputError as exc:
            errors.append(str(exc))
    return repository, snapshots, errors
