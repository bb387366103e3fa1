"""Command-line entry point for cargo-profclean."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from cargo_profclean import __version__
from cargo_profclean.core.config import CleanConfig
from cargo_profclean.core.locator import default_cache_root
from cargo_profclean.core.pipeline import run_clean
from cargo_profclean.plugins.registry import DEFAULT_REPORTER, PluginRegistry
from cargo_profclean.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

CARGO_SUBCOMMAND = "profclean"


def build_parser(registry: Optional[PluginRegistry] = None) -> argparse.ArgumentParser:
    """Builds the argument parser with its single ``clean`` subcommand."""
    registry = registry or PluginRegistry.create_default()

    parser = argparse.ArgumentParser(
        prog="cargo-profclean",
        description="Remove stale .mm_profdata files from the Cargo registry cache.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    clean_parser = subparsers.add_parser("clean", help="Clean all profdata files")
    clean_parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=None,
        help="Path to cargo base dir, defaults to $HOME/.cargo",
    )
    clean_parser.add_argument(
        "--reporter",
        choices=registry.names(),
        default=DEFAULT_REPORTER,
        help="Output style (default: %(default)s)",
    )
    clean_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the JSON report to this file instead of stdout",
    )
    clean_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any file could not be deleted",
    )
    clean_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    clean_parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console logging level (default: %(default)s)",
    )
    clean_parser.add_argument(
        "--log-file", type=Path, default=None, help="Also write logs to this file"
    )

    return parser


def _strip_cargo_subcommand(argv: List[str]) -> List[str]:
    """Drops the leading ``profclean`` cargo passes to external subcommands."""
    if argv and argv[0] == CARGO_SUBCOMMAND:
        return argv[1:]
    return argv


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parses arguments and runs the requested command.

    Args:
        argv (Optional[Sequence[str]], optional): Arguments without the program name. Defaults to sys.argv[1:].

    Returns:
        int: The process exit status.
    """
    argv = _strip_cargo_subcommand(list(sys.argv[1:] if argv is None else argv))

    registry = PluginRegistry.create_default()
    args = build_parser(registry).parse_args(argv)

    config = CleanConfig.from_args(args, default_root=default_cache_root())
    setup_logging(
        log_file=config.log_file, log_level=config.log_level, verbose=config.verbose
    )

    reporter = registry.create_reporter(config.reporter, **config.reporter_options())

    try:
        outcome = run_clean(config.cache_root, reporter=reporter)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130

    if config.strict and not outcome.success:
        logger.error(f"{outcome.summary.files_failed} file(s) could not be deleted")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
