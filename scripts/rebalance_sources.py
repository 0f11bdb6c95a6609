#!/usr/bin/env python3
"""Source weight rebalancing script.

Rewrites each source's weight so future collection runs approach the
desired number of items per category.

Usage:
    # Packaged default targets
    python scripts/rebalance_sources.py

    # Explicit targets, preview only
    python scripts/rebalance_sources.py --target aiml=5 --target news=0 --dry-run
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from feedsift.core.config import get_config
from feedsift.core.config_loader import load_category_table
from feedsift.core.exceptions import FeedSiftError
from feedsift.core.logging import get_logger, setup_logging
from feedsift.infrastructure import FileSourceConfigStore
from feedsift.services.distribution import (
    DistributionRebalancer,
    RebalanceResult,
    rebalance_sources,
)

# Load environment variables
load_dotenv()

logger = get_logger(__name__)


def parse_target(value: str) -> tuple[str, int]:
    """Parse a `category=count` pair."""
    key, sep, count = value.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected CATEGORY=COUNT, got {value!r}")
    try:
        return key.strip(), int(count)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"count must be an integer: {value!r}") from e


def format_changes(result: RebalanceResult) -> str:
    """Render the weight changes."""
    if not result.changes:
        return "No sources affected."
    lines = []
    for change in result.changes:
        marker = "" if change.changed else " (unchanged)"
        lines.append(
            f"{change.category.display_name:<24} {change.name:<32} "
            f"{change.old_weight:g} -> {change.new_weight:g}{marker}"
        )
    if result.ignored:
        lines.append(f"Ignored targets: {', '.join(result.ignored)}")
    return "\n".join(lines)


def rebalance(sources_path: Path, targets: dict[str, int], dry_run: bool) -> None:
    """Apply `targets` to the store at `sources_path`."""
    store = FileSourceConfigStore(sources_path)

    if dry_run:
        result = rebalance_sources(store.read().sources, targets)
    else:
        result = DistributionRebalancer(store).rebalance(targets)

    logger.info(
        "Rebalance finished",
        path=str(sources_path),
        dry_run=dry_run,
        changed=sum(1 for c in result.changes if c.changed),
    )
    print(format_changes(result))


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Rebalance source weights toward a per-category distribution",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/rebalance_sources.py
  python scripts/rebalance_sources.py --target aiml=5 --target culture=3
  python scripts/rebalance_sources.py --sources config/feeds.json --dry-run
        """,
    )

    parser.add_argument(
        "--sources",
        "-s",
        type=Path,
        default=None,
        help="Source store file (default: SOURCES_PATH setting)",
    )

    parser.add_argument(
        "--target",
        "-t",
        type=parse_target,
        action="append",
        default=None,
        help="Desired count per category, as CATEGORY=COUNT (repeatable)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the new weights without writing them",
    )

    args = parser.parse_args()
    setup_logging()

    targets = dict(args.target) if args.target else load_category_table().default_targets()
    sources_path = args.sources or get_config().sources_path

    try:
        rebalance(sources_path, targets, args.dry_run)
    except KeyboardInterrupt:
        logger.info("Rebalance cancelled by user")
        sys.exit(1)
    except FeedSiftError as e:
        logger.error("Rebalance failed", error=str(e), **e.context)
        sys.exit(1)


if __name__ == "__main__":
    main()
