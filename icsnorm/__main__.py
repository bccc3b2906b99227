"""Command-line entry for icsnorm.

Reads one or more iCalendar files (or ``-`` for stdin), normalizes them and
prints the combined records as a JSON array on stdout. Diagnostics go to
stderr through logging.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

from . import _init_logging
from .calendar.parser import ICSNormalizer
from .core.config_manager import ConfigManager, get_config_value
from .core.exceptions import ICSParseError
from .core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for icsnorm CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="icsnorm",
        description="Normalize iCalendar (.ics) documents into JSON event records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  icsnorm calendar.ics                  # Print records as indented JSON
  cat calendar.ics | icsnorm -          # Read from stdin
  icsnorm --indent 0 a.ics b.ics        # Compact output for several files
        """,
    )

    parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE",
        help="iCalendar file(s) to normalize, or '-' for stdin",
    )
    parser.add_argument(
        "--indent",
        type=int,
        metavar="N",
        help="JSON indentation (default: 2, or from ICSNORM_JSON_INDENT env var; 0 for compact)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (also enabled by ICSNORM_DEBUG=1)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        metavar="PATH",
        help="Path to .env file with defaults (default: ./.env)",
    )

    return parser


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def run(args: argparse.Namespace, cfg: Optional[dict[str, Any]] = None) -> int:
    """Normalize every requested file and write JSON to stdout.

    Args:
        args: Parsed command line arguments
        cfg: Configuration dictionary (see ConfigManager.build_config_from_env)

    Returns:
        Process exit code
    """
    cfg = cfg or {}
    indent = args.indent if args.indent is not None else get_config_value(cfg, "json_indent", 2)

    normalizer = ICSNormalizer()
    payload: list[dict[str, Any]] = []

    for source in args.files:
        try:
            content = _read_source(source)
        except OSError as e:
            logger.error("Cannot read %s: %s", source, e)
            return 1

        try:
            records = normalizer.normalize(content)
        except ICSParseError as e:
            logger.error("Failed to parse %s: %s", source, e)
            return 1

        logger.info(f"{source}: {len(records)} events")
        payload.extend(record.to_dict() for record in records)

    json.dump(payload, sys.stdout, indent=indent or None)
    sys.stdout.write("\n")
    return 0


def main() -> NoReturn:
    """Run the icsnorm CLI."""
    parser = _create_parser()
    args = parser.parse_args()

    cfg = ConfigManager(args.env_file).load_full_config()
    debug = bool(args.debug or get_config_value(cfg, "debug", False))

    _init_logging("DEBUG" if debug else get_config_value(cfg, "log_level", "INFO"))
    configure_logging(debug_mode=debug)

    try:
        sys.exit(run(args, cfg))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
