#!/usr/bin/env python3
"""
Batch Script: Compute Ratings

Scores every collection in a pre-fetched discussion snapshot and writes the
ratings document that hubs serve as static JSON.

Input:
    - Snapshot JSON with reactions, comments and resource reactions per
      collection (see engagement/snapshots.py for the layout)

Output:
    - ratings.json keyed by collection id, with per-resource ratings

Usage:
    python scripts/compute_ratings.py --input snapshot.json
    python scripts/compute_ratings.py --input snapshot.json --output dist/ratings.json
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from common.logging.logger import setup_logger, get_logger
from common.config import config
from engagement.scoring.pipeline import RatingPipeline
from engagement.snapshots import load_snapshots
from ratings_core.errors import RatingsError

logger = get_logger("compute_ratings")


def main():
    parser = argparse.ArgumentParser(
        description="Compute Ratings: score collections from a discussion snapshot"
    )

    parser.add_argument(
        "--input",
        required=True,
        help="Snapshot JSON written by the discussion fetcher"
    )
    parser.add_argument(
        "--output",
        default=None,
        help=f"Ratings JSON to write (default: {config.get('output.ratings_path')})"
    )
    parser.add_argument(
        "--collection-weight",
        type=float,
        default=None,
        help=f"Share of the collection score in aggregated_score (default: {config.get('aggregation.collection_weight')})"
    )

    args = parser.parse_args()
    output_path = Path(args.output or config.get("output.ratings_path"))

    # Setup logging
    setup_logger("compute_ratings", console_output=True)
    config.validate()

    try:
        with open(args.input, "r", encoding="utf-8") as f:
            payload = json.load(f)
        repository, snapshots, errors = load_snapshots(payload)
    except (OSError, ValueError, RatingsError) as exc:
        logger.error(f"Cannot read snapshot {args.input}: {exc}")
        sys.exit(1)

    for error in errors:
        logger.warning(f"Skipping collection: {error}")

    logger.info(f"Computing ratings for {repository}")
    logger.info(f"Processing {len(snapshots)} collections...")

    try:
        pipeline = RatingPipeline(collection_weight=args.collection_weight)
    except RatingsError as exc:
        logger.error(str(exc))
        sys.exit(1)

    document = pipeline.rate_all(snapshots, repository)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(document.to_dict(), f, indent=config.get("output.indent"), ensure_ascii=False)

    # Summary
    print("\n" + "=" * 60)
    print("RATINGS COMPUTED")
    print("=" * 60)
    print(f"Output: {output_path}")
    print(f"Collections: {len(document.collections):,}")
    print(f"Resources: {document.resource_count:,}")
    print(f"Skipped: {len(errors):,}")
    print("=" * 60)


if __name__ == "__main__":
    main()
