#!/usr/bin/env python3
"""Command-line interface for the proxy page generator."""

import argparse
import logging
import sys
from pathlib import Path

from proxy_pages.database import DATABASE_PATTERN, find_database_file
from proxy_pages.decklist import read_decklist
from proxy_pages.errors import ProxyPagesError
from proxy_pages.fetcher import DEFAULT_CONCURRENCY
from proxy_pages.logging_utils import setup_cli_logging
from proxy_pages.pipeline import ProxyPipeline

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the command line."""
    parser = argparse.ArgumentParser(
        description="Generate printable proxy pages from a Magic: The Gathering decklist"
    )
    parser.add_argument(
        "--file",
        "-f",
        type=Path,
        help="Decklist file (default: read from stdin)",
    )
    parser.add_argument(
        "--database",
        type=Path,
        help=f"Scryfall bulk data file (default: newest {DATABASE_PATTERN} here)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("img"),
        help="Output directory for page images (default: img)",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=DEFAULT_CONCURRENCY,
        help=f"Maximum simultaneous image downloads (default: {DEFAULT_CONCURRENCY})",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    return parser


def main(argv=None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_cli_logging(verbose=args.verbose)

    if args.concurrency < 1:
        parser.error("--concurrency must be at least 1")

    database_path = args.database or find_database_file(Path("."))

    pipeline = ProxyPipeline(
        database_path=database_path,
        output_dir=args.output_dir,
        concurrency=args.concurrency,
    )

    try:
        summary = pipeline.build(lambda: read_decklist(args.file))
    except ProxyPagesError as e:
        log.error("Error: %s", e)
        sys.exit(1)

    if summary.failed_pages:
        sys.exit(1)


if __name__ == "__main__":
    main()
