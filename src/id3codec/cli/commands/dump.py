"""Dump command - Print every frame as one line of text."""

import argparse
import sys
from pathlib import Path

from ...config import Config
from ..utils import ExitCode, read_tag


def cmd_dump(args: argparse.Namespace) -> None:
    """Print the human-readable rendering of every frame.

    Args:
        args: Parsed command-line arguments
    """
    file_path = Path(args.file)
    config = Config(args.config) if getattr(args, "config", None) else Config()

    if not file_path.is_file():
        print(f"File not found: {file_path}", file=sys.stderr)
        sys.exit(ExitCode.INVALID_INPUT)

    tag, _ = read_tag(file_path, config)
    if not tag.valid:
        print(f"No usable tag: {tag.error}", file=sys.stderr)
        sys.exit(ExitCode.DATA_ERROR)

    sys.stdout.write(tag.to_display_text())
