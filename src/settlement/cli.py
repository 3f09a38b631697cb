"""
Nankan Settlement - CLI

Command-line interface for settling race days and maintaining the
results archive.
"""

import argparse
import json
import logging
import sys
from datetime import date as date_cls
from pathlib import Path

from .aggregator import DayAggregator, split_date
from .archive import ArchiveFile
from .config import SettlementConfig
from .loader import DocumentLoader
from .prediction_formatter import format_prediction
from .report import monthly_summary

logger = logging.getLogger(__name__)


def _write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def build_config(args) -> SettlementConfig:
    """Build config from common command-line options."""
    config = SettlementConfig()
    if getattr(args, "data_dir", None):
        config.data_shared_dir = Path(args.data_dir)
    if getattr(args, "test_data_dir", None):
        config.test_data_dir = Path(args.test_data_dir)
    if getattr(args, "output_dir", None):
        config.output_dir = Path(args.output_dir)
    if getattr(args, "archive", None):
        config.archive_path = Path(args.archive)
    if getattr(args, "public_archive", None):
        config.public_archive_path = Path(args.public_archive)
    return config


def cmd_generate_results(args) -> int:
    """Handle generate-results command."""
    config = build_config(args)
    target_date = args.date
    year, month, day = split_date(target_date)

    loader = DocumentLoader(config)
    try:
        prediction_set = loader.load_prediction(target_date)
        result_set = loader.load_result(target_date)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    logger.info(
        f"Loaded {prediction_set.track} {prediction_set.declared_races}R "
        f"({len(result_set.races)} results)"
    )

    fragment = DayAggregator().aggregate(prediction_set, result_set, target_date)
    entry = fragment[year][month][day]

    output_path = config.get_archive_fragment_path(target_date)
    _write_json(output_path, fragment)

    print(f"Date: {target_date}")
    print(f"Venue: {entry['venue']}")
    print(f"Hits: {entry['hitRaces']}/{entry['totalRaces']}R")
    print(f"Total payout: ¥{entry['totalPayout']:,}")
    print(f"Recovery rate: {entry['recoveryRate']}%")
    print(f"Perfect hit: {'YES' if entry['perfectHit'] else 'NO'}")
    print(f"Fragment saved to: {output_path}")

    if args.merge:
        ArchiveFile.from_config(config).merge_day(fragment, target_date)
        print(f"Merged into: {config.archive_path}")

    return 0


def cmd_merge_archive(args) -> int:
    """Handle merge-archive command."""
    config = build_config(args)
    fragment_path = Path(args.fragment)

    if not fragment_path.exists():
        logger.error(f"Fragment not found: {fragment_path}")
        return 1

    with open(fragment_path, "r", encoding="utf-8") as f:
        fragment = json.load(f)

    ArchiveFile.from_config(config).merge_day(fragment, args.date)
    print(f"Merged {args.date} into: {config.archive_path}")
    return 0


def cmd_generate_prediction(args) -> int:
    """Handle generate-prediction command."""
    config = build_config(args)
    loader = DocumentLoader(config)

    try:
        source = loader.load_prediction_document(args.date)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    output = format_prediction(source)
    output_path = config.get_prediction_output_path(args.date)
    _write_json(output_path, output)

    print(f"Track: {output['track']} ({output['totalRaces']}R)")
    print(f"Prediction saved to: {output_path}")
    return 0


def cmd_summary(args) -> int:
    """Handle summary command."""
    config = build_config(args)
    archive = ArchiveFile.from_config(config).load()

    summary = monthly_summary(archive)
    if summary.empty:
        print("Archive is empty")
        return 0

    print(summary.to_string(index=False))
    return 0


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data-dir", help="Shared data repository root")
    parser.add_argument("--test-data-dir", help="Local documents checked first")
    parser.add_argument("--output-dir", help="Output directory for generated files")
    parser.add_argument("--archive", help="Archive JSON path")
    parser.add_argument("--public-archive", help="Mirror copy of the archive")


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Nankan Settlement - umatan results archive",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    today = date_cls.today().isoformat()

    # generate-results command
    results_parser = subparsers.add_parser(
        "generate-results", help="Settle a race day and write its archive fragment"
    )
    results_parser.add_argument(
        "--date", default=today, help="Race date YYYY-MM-DD (default: today)"
    )
    results_parser.add_argument(
        "--merge", action="store_true", help="Also merge the fragment into the archive"
    )
    _add_common_options(results_parser)

    # merge-archive command
    merge_parser = subparsers.add_parser(
        "merge-archive", help="Merge a day fragment into the archive"
    )
    merge_parser.add_argument("fragment", help="Fragment JSON path")
    merge_parser.add_argument("--date", required=True, help="Race date YYYY-MM-DD")
    _add_common_options(merge_parser)

    # generate-prediction command
    prediction_parser = subparsers.add_parser(
        "generate-prediction", help="Format the day's prediction for the site"
    )
    prediction_parser.add_argument(
        "--date", default=today, help="Race date YYYY-MM-DD (default: today)"
    )
    _add_common_options(prediction_parser)

    # summary command
    summary_parser = subparsers.add_parser(
        "summary", help="Show monthly summary of the archive"
    )
    _add_common_options(summary_parser)

    args = parser.parse_args(argv)

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.command == "generate-results":
        return cmd_generate_results(args)
    elif args.command == "merge-archive":
        return cmd_merge_archive(args)
    elif args.command == "generate-prediction":
        return cmd_generate_prediction(args)
    elif args.command == "summary":
        return cmd_summary(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
