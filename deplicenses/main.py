"""Main CLI entry point for deplicenses.

Usable directly (``deplicenses include-licenses``) or as a cargo
subcommand (``cargo include-licenses``).
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from deplicenses import __version__
from deplicenses.cli.collect import collect_command

logger = logging.getLogger("deplicenses.cli")

COMMAND_NAME = "include-licenses"


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def output_directory(value: str) -> str:
    """argparse type: accept an existing directory or a path that does not exist."""
    path = Path(value)
    if path.is_dir() or not path.exists():
        return value
    raise argparse.ArgumentTypeError("Not a directory")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deplicenses",
        description=(
            "Finds licenses for the dependencies of your program and copies "
            "the files to a directory"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    collect_parser = subparsers.add_parser(
        COMMAND_NAME,
        help="Copy the license files of all external dependencies into DIR",
    )
    collect_parser.add_argument(
        "out_dir",
        nargs="?",
        default="licenses",
        metavar="DIR",
        type=output_directory,
        help="The directory where to put the licenses into (default: licenses)",
    )
    collect_parser.add_argument(
        "--manifest-path",
        help="Path to Cargo.toml (passed through to cargo metadata)",
    )
    collect_parser.add_argument(
        "--metadata",
        metavar="FILE",
        help="Read dependency metadata from a saved `cargo metadata` JSON file instead of running cargo",
    )
    collect_parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional configuration. Can be a path to a TOML/JSON file or an "
            "inline TOML/JSON string. When omitted, built-in defaults are used."
        ),
    )
    collect_parser.add_argument(
        "--only-reachable",
        action="store_true",
        help="Only include packages reachable from a workspace member",
    )
    collect_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any file could not be copied",
    )
    collect_parser.add_argument(
        "--log-file",
        help="Also write logs to this file",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == COMMAND_NAME:
        return collect_command(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
