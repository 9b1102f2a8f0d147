"""Main CLI entry point for slncmake.

Provides commands: convert, versions
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from slncmake.cli.convert import convert_command
from slncmake.provider.registry import ProviderRegistry

logger = logging.getLogger("slncmake.cli")


def setup_logging(
    verbose: bool = False,
    console: Optional[Console] = None,
    log_file: Optional[str] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
        log_file: Also write plain log records to this file (optional).
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

    # Configure root logger
    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to set up file logging: %s", e)
            return
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        file_handler.setLevel(logging.DEBUG)
        slncmake_logger = logging.getLogger("slncmake")
        slncmake_logger.addHandler(file_handler)
        # Keep INFO records for the file even when the console shows warnings only.
        slncmake_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
        handler.setLevel(level)
        logger.info("File logging enabled: %s", log_file)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the ``slncmake`` command."""
    parser = argparse.ArgumentParser(
        prog="slncmake",
        description="slncmake - Visual C++ solution to CMake converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        help="Output log to file (optional). When specified, logs are written to this file in addition to console.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a solution snapshot into CMakeLists.txt files",
    )
    convert_parser.add_argument(
        "snapshot",
        help="Snapshot of the solution's project model (.json or .toml)",
    )
    convert_parser.add_argument(
        "-p",
        "--platform",
        help="Target platform (default: x64). 'Any CPU' is rejected.",
    )
    convert_parser.add_argument(
        "-c",
        "--configuration",
        dest="configurations",
        action="append",
        metavar="CFG",
        help=(
            "Configuration to convert; repeat for several. "
            "Defaults to every configuration of the platform."
        ),
    )
    convert_parser.add_argument(
        "-o",
        "--output-dir",
        help=(
            "Directory the aggregate CMakeLists.txt is written to; target "
            "descriptors mirror the project layout below it. Defaults to the "
            "snapshot's directory."
        ),
    )
    convert_parser.add_argument(
        "--config",
        help=(
            "Optional converter configuration. Can be a path to a TOML/JSON "
            "file (e.g. slncmake.toml) or an inline TOML/JSON string. "
            "Command-line options override its values."
        ),
    )
    convert_parser.add_argument(
        "--newline",
        choices=["lf", "crlf"],
        help="Line ending of written descriptors (default: lf)",
    )
    convert_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the descriptors instead of writing them",
    )

    subparsers.add_parser(
        "versions",
        help="List supported IDE versions",
    )
    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, log_file=args.log_file)

    if args.command == "convert":
        return convert_command(args)
    elif args.command == "versions":
        console = Console()
        for version in ProviderRegistry.get_instance().list_versions():
            console.print(version)
        return 0
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
