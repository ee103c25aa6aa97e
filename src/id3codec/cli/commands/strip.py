"""Strip command - Remove the tag, keeping the audio bytes."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from ...config import Config
from ..schemas import ErrorResponse, WriteSuccessResponse
from ..utils import ExitCode, audio_bytes, json_output, read_tag


def cmd_strip(args: argparse.Namespace) -> None:
    """Write the file without its ID3v2 tag.

    Args:
        args: Parsed command-line arguments

    Exit Codes:
        0: Success (also when the file has no tag)
        10: Invalid input (file doesn't exist)
        20: Data error (the tag is corrupt, so its end is unknown)
        30: Write failed
    """
    file_path = Path(args.file)
    output_path = Path(args.output) if args.output else file_path
    use_json = getattr(args, "json", False)
    config = Config(args.config) if getattr(args, "config", None) else Config()
    console = Console(quiet=use_json)

    if not file_path.is_file():
        if use_json:
            json_output(
                ErrorResponse(error="invalid_input", message=f"File not found: {file_path}"),
                ExitCode.INVALID_INPUT,
            )
        console.print(f"[red]Error: File not found: {file_path}[/red]")
        sys.exit(ExitCode.INVALID_INPUT)

    tag, data = read_tag(file_path, config)
    if not tag.valid:
        if tag.header is not None and tag.header.is_set:
            if use_json:
                json_output(
                    ErrorResponse(error=tag.error.kind.value, message=str(tag.error)),
                    ExitCode.DATA_ERROR,
                )
            console.print(f"[red]Error: {tag.error}[/red]")
            sys.exit(ExitCode.DATA_ERROR)
        logging.info(f"Nothing to strip from {file_path}: {tag.error}")

    audio = audio_bytes(tag, data)

    try:
        output_path.write_bytes(audio)
    except OSError as e:
        if use_json:
            json_output(ErrorResponse(error="write_failed", message=str(e)), ExitCode.WRITE_FAILED)
        console.print(f"[red]Error: Could not write {output_path}: {e}[/red]")
        sys.exit(ExitCode.WRITE_FAILED)

    if use_json:
        json_output(
            WriteSuccessResponse(source=str(file_path), destination=str(output_path), tag_size=0, frames=0)
        )
    removed = len(data) - len(audio)
    console.print(f"[green]✓ Removed {removed:,} tag bytes, wrote {output_path}[/green]")
