"""Set command - Edit text frames and write the file back."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from ...config import Config
from ...tag import Tag
from ..schemas import ErrorResponse, WriteSuccessResponse
from ..utils import ExitCode, audio_bytes, json_output, read_tag


def _fail(use_json: bool, console: Console, error: str, message: str, code: ExitCode) -> None:
    if use_json:
        json_output(ErrorResponse(error=error, message=message), code)
    console.print(f"[red]Error: {message}[/red]")
    sys.exit(code)


def cmd_set(args: argparse.Namespace) -> None:
    """Set text frames from FRAME=value pairs.

    A file without a tag gets a new one; a file with a corrupt tag is left
    alone.

    Args:
        args: Parsed command-line arguments

    Exit Codes:
        0: Success
        10: Invalid input (missing file, bad FRAME=value pair)
        20: Data error (corrupt tag)
        30: Write failed
    """
    file_path = Path(args.file)
    output_path = Path(args.output) if args.output else file_path
    use_json = getattr(args, "json", False)
    config = Config(args.config) if getattr(args, "config", None) else Config()
    console = Console(quiet=use_json)

    if not file_path.is_file():
        _fail(use_json, console, "invalid_input", f"File not found: {file_path}", ExitCode.INVALID_INPUT)

    tag, data = read_tag(file_path, config)
    if not tag.valid:
        if tag.header is not None and tag.header.is_set:
            _fail(use_json, console, tag.error.kind.value, str(tag.error), ExitCode.DATA_ERROR)
        logging.info(f"No tag in {file_path}, creating a new one")
        tag = Tag(
            logger=logging.getLogger("id3codec"),
            default_version=config.get_default_version(),
            text_encoding=config.get_text_encoding(),
        )

    for assignment in args.frames:
        name, sep, value = assignment.partition("=")
        if not sep:
            _fail(use_json, console, "invalid_input", f"Expected FRAME=value, got {assignment!r}", ExitCode.INVALID_INPUT)
        if not tag.add_frame(name.strip(), value):
            _fail(use_json, console, "invalid_input", f"Cannot set frame {name!r}", ExitCode.INVALID_INPUT)

    audio = audio_bytes(tag, data)
    encoded = tag.encode()
    try:
        output_path.write_bytes(encoded + audio)
    except OSError as e:
        _fail(use_json, console, "write_failed", f"Could not write {output_path}: {e}", ExitCode.WRITE_FAILED)

    if use_json:
        json_output(
            WriteSuccessResponse(
                source=str(file_path),
                destination=str(output_path),
                tag_size=len(encoded),
                frames=len(tag),
            )
        )
    console.print(f"[green]✓ Wrote {len(tag)} frames ({len(encoded):,} byte tag) to {output_path}[/green]")
