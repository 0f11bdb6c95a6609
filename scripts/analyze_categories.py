#!/usr/bin/env python3
"""Source category analysis script.

Classifies every configured source by its topics and prints how sources are
spread across categories, next to the desired distribution targets.

Usage:
    # Packaged default targets, store from settings (SOURCES_PATH)
    python scripts/analyze_categories.py

    # Explicit store file and targets
    python scripts/analyze_categories.py --sources config/feeds.json --target aiml=5
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from feedsift.core.config import get_config
from feedsift.core.exceptions import FeedSiftError
from feedsift.core.logging import get_logger, setup_logging
from feedsift.infrastructure import FileSourceConfigStore
from feedsift.services.distribution import CategorySummary, DistributionRebalancer

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


def format_report(summaries: list[CategorySummary]) -> str:
    """Render the category table."""
    lines = [f"{'Category':<24} {'Sources':>7} {'Target':>6}  Weights", "-" * 60]
    for summary in summaries:
        target = "-" if summary.target is None else str(summary.target)
        weights = ", ".join(f"{s.name}={s.weight:g}" for s in summary.sources)
        lines.append(f"{summary.name:<24} {summary.count:>7} {target:>6}  {weights}")
    total = sum(s.count for s in summaries)
    lines.append("-" * 60)
    lines.append(f"{'Total':<24} {total:>7}")
    return "\n".join(lines)


def analyze(sources_path: Path, targets: dict[str, int] | None) -> None:
    """Print the current distribution for the store at `sources_path`."""
    store = FileSourceConfigStore(sources_path)
    rebalancer = DistributionRebalancer(store)

    summaries = rebalancer.analyze(targets)
    logger.info("Category analysis", path=str(sources_path))
    print(format_report(summaries))


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Show how configured sources are spread across categories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/analyze_categories.py
  python scripts/analyze_categories.py --sources config/feeds.yaml --target aiml=5 --target tech=2
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

    args = parser.parse_args()
    setup_logging()

    targets = dict(args.target) if args.target else None
    sources_path = args.sources or get_config().sources_path

    try:
        analyze(sources_path, targets)
    except FeedSiftError as e:
        logger.error("Analysis failed", error=str(e), **e.context)
        sys.exit(1)


if __name__ == "__main__":
    main()
