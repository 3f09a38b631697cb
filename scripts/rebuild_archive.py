#!/usr/bin/env python
"""
Re-settle a range of race days and merge them into the results archive.

Usage:
    python scripts/rebuild_archive.py 2026-02-01 2026-02-28

Days without a prediction or result document are skipped.
"""

import argparse
import logging
import sys
from datetime import date, timedelta
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.settlement.aggregator import DayAggregator
from src.settlement.archive import ArchiveFile, merge_archive
from src.settlement.config import SettlementConfig
from src.settlement.loader import DocumentLoader

logger = logging.getLogger(__name__)


def date_range(start: str, end: str):
    current = date.fromisoformat(start)
    last = date.fromisoformat(end)
    while current <= last:
        yield current.isoformat()
        current += timedelta(days=1)


def main():
    parser = argparse.ArgumentParser(description="Rebuild archive for a date range")
    parser.add_argument("start", help="First date YYYY-MM-DD")
    parser.add_argument("end", help="Last date YYYY-MM-DD")
    parser.add_argument("--data-dir", help="Shared data repository root")
    parser.add_argument("--archive", help="Archive JSON path")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    config = SettlementConfig()
    if args.data_dir:
        config.data_shared_dir = Path(args.data_dir)
    if args.archive:
        config.archive_path = Path(args.archive)

    loader = DocumentLoader(config)
    aggregator = DayAggregator()
    archive_file = ArchiveFile.from_config(config)
    archive = archive_file.load()

    settled = 0
    for target_date in date_range(args.start, args.end):
        try:
            prediction_set = loader.load_prediction(target_date)
            result_set = loader.load_result(target_date)
        except FileNotFoundError as e:
            logger.info(f"Skipping {target_date}: {e}")
            continue

        fragment = aggregator.aggregate(prediction_set, result_set, target_date)
        archive = merge_archive(archive, fragment, target_date)
        settled += 1

    archive_file.save(archive)

    print("=" * 60)
    print(f"Settled {settled} race days ({args.start} - {args.end})")
    print(f"Archive: {config.archive_path}")
    print("=" * 60)


if __name__ == "__main__":
    main()
