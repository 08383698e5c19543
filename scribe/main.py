"""Command-line entry point for scribe."""

import argparse
import sys

from . import __version__
from .codegen.cli_integration import create_render_subparser, create_sources_subparser
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the top-level argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="scribe",
        description="Render Java source files from declaration descriptions",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: $SCRIBE_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--log-file", metavar="FILE", help="Also write log records to FILE")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    create_render_subparser(subparsers)
    create_sources_subparser(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)
    logger.debug(f"Parsed arguments: {args}")

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
