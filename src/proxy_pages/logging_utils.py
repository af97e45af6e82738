#!/usr/bin/env python3
"""Common logging utilities for the proxy_pages library."""

import logging
import sys
from typing import Optional


def setup_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None
) -> None:
    """Set up logging with a sensible formatter for console output.

    Logs go to stderr so that stdout stays free for piping.

    Args:
        level: Logging level (default: INFO)
        format_string: Custom format string (optional)

    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))

    root_logger.addHandler(console_handler)

    # Quieten down PIL and urllib3
    logging.getLogger("PIL").setLevel(logging.INFO)
    logging.getLogger("urllib3").setLevel(logging.INFO)


def setup_cli_logging(verbose: bool = False) -> None:
    """Set up logging for the command line with clean output.

    Args:
        verbose: If True, show DEBUG messages

    """
    level = logging.DEBUG if verbose else logging.INFO
    setup_logging(level=level, format_string="%(levelname)s: %(message)s")
