# main.py

"""Entry point for the flight_offers headless runner."""

import argparse
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("flight_offers.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="flight_offers",
        description="Cluster, deduplicate and rank flight search offers.",
        epilog=f"Cabins: {', '.join(Settings.STANDARD_CABINS)}",
    )
    parser.add_argument(
        "offers_file",
        help="JSON file with a list of offers or a search response.",
    )
    parser.add_argument(
        "-c",
        "--cabin",
        default=None,
        help="Only show offers in this cabin (default: all).",
    )
    parser.add_argument(
        "--sort",
        choices=Settings.SORT_MODES,
        default=Settings.DEFAULT_SORT_MODE,
        dest="sort_mode",
        help="Order flights by price (cheap) or duration (best).",
    )
    parser.add_argument(
        "--stop",
        type=int,
        default=None,
        dest="active_stop",
        help="Preferred active stop section (falls back to fewest stops).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Echo clustering decisions to stderr.",
    )
    return parser


def main() -> None:
    """Parse arguments and run the headless clustering."""
    args = _build_parser().parse_args()

    log_file = setup_logging(
        console_level=logging.DEBUG if args.verbose else logging.WARNING
    )
    logger.info("flight_offers starting, log file: %s", log_file)

    from src.cli.runner import cli_run

    exit_code = cli_run(
        offers_file=args.offers_file,
        cabin=args.cabin,
        sort_mode=args.sort_mode,
        active_stop=args.active_stop,
        output_format=args.output_format,
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
