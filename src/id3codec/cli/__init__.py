"""Command-line interface for id3codec (id3tag).

This package provides the 'id3tag' command-line tool with these subcommands:
    inspect: Show the tag header and frame table
    dump: Print every frame as one line of text
    set: Edit text frames
    strip: Remove the tag

Modules:
    commands/: Command implementations
    schemas.py: Pydantic models for --json output
    utils.py: CLI utility functions
"""

import argparse
import logging
import sys

from rich_argparse import RichHelpFormatter

from .. import __version__
from .utils import ExitCode, setup_logging
from .commands import (
    cmd_inspect,
    cmd_dump,
    cmd_set,
    cmd_strip,
)

__all__ = [
    "main",
    "cmd_inspect",
    "cmd_dump",
    "cmd_set",
    "cmd_strip",
    "setup_logging",
]


class RichRawHelpFormatter(RichHelpFormatter, argparse.RawDescriptionHelpFormatter):
    """Combines Rich formatting with the ability to keep line breaks (Raw)."""
    pass


def main() -> None:
    """Main CLI entry point."""

    # Parent parser for shared options
    parent_parser = argparse.ArgumentParser(add_help=False)

    parent_parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parent_parser.add_argument(
        "-l",
        "--log-level",
        default=None,
        help="Set logging level (disabled by default)",
    )
    parent_parser.add_argument("-c", "--config", help="Path to configuration file")

    parser = argparse.ArgumentParser(
        prog="id3tag",
        usage="id3tag <command> [options]",
        description="id3tag - Read, edit and write ID3v2.3/2.4 tags",
        formatter_class=RichRawHelpFormatter,
        parents=[parent_parser],
    )

    subparsers = parser.add_subparsers(
        title="Commands",
        dest="command",
        metavar="",
    )

    # ──────────────────────────────
    # inspect
    # ──────────────────────────────
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show the tag header and frame table",
        usage="id3tag inspect <file> [options]",
        description="Parse the ID3v2 tag at the start of a file and display its structure",
        parents=[parent_parser],
        formatter_class=RichHelpFormatter,
    )
    inspect_parser.add_argument("file", help="Audio file to inspect")
    inspect_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Show only header information, not frames",
    )
    inspect_parser.add_argument("--json", action="store_true", help="Output JSON")
    inspect_parser.set_defaults(func=cmd_inspect)

    # ──────────────────────────────
    # dump
    # ──────────────────────────────
    dump_parser = subparsers.add_parser(
        "dump",
        help="Print every frame as text",
        usage="id3tag dump <file>",
        description="Print one line per frame",
        parents=[parent_parser],
        formatter_class=RichHelpFormatter,
    )
    dump_parser.add_argument("file", help="Audio file to read")
    dump_parser.set_defaults(func=cmd_dump)

    # ──────────────────────────────
    # set
    # ──────────────────────────────
    set_parser = subparsers.add_parser(
        "set",
        help="Set text frames",
        usage="id3tag set <file> FRAME=value [FRAME=value ...] [options]",
        description="Add or replace text frames, e.g. TIT2=Title TPE1=Artist",
        parents=[parent_parser],
        formatter_class=RichHelpFormatter,
    )
    set_parser.add_argument("file", help="Audio file to edit")
    set_parser.add_argument("frames", nargs="+", metavar="FRAME=value", help="Frames to set")
    set_parser.add_argument("-o", "--output", help="Write to this file instead of editing in place")
    set_parser.add_argument("--json", action="store_true", help="Output JSON")
    set_parser.set_defaults(func=cmd_set)

    # ──────────────────────────────
    # strip
    # ──────────────────────────────
    strip_parser = subparsers.add_parser(
        "strip",
        help="Remove the ID3v2 tag",
        usage="id3tag strip <file> [options]",
        description="Write the file without its ID3v2 tag",
        parents=[parent_parser],
        formatter_class=RichHelpFormatter,
    )
    strip_parser.add_argument("file", help="Audio file to strip")
    strip_parser.add_argument("-o", "--output", help="Write to this file instead of editing in place")
    strip_parser.add_argument("--json", action="store_true", help="Output JSON")
    strip_parser.set_defaults(func=cmd_strip)

    args = parser.parse_args()

    # Show help if no command is provided
    if not args.command:
        parser.print_help()
        sys.exit(ExitCode.ERROR)

    if args.log_level:
        setup_logging(args.log_level)
    else:
        setup_logging("critical")

    try:
        args.func(args)
    except KeyboardInterrupt:
        logging.info("\nOperation cancelled by user")
        sys.exit(ExitCode.INTERRUPTED)
    except Exception as e:
        logging.error(f"Error: {e}", exc_info=args.log_level == "debug")
        sys.exit(ExitCode.ERROR)


if __name__ == "__main__":
    main()
