"""Inspect command - Display the tag header and frame table."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ...config import Config
from ..schemas import ErrorResponse, FrameInfo, InspectSuccessResponse
from ..utils import ExitCode, json_output, read_tag


def _truncate(value: str, width: int) -> str:
    if len(value) > width:
        return value[:width - 3] + "..."
    return value


def cmd_inspect(args: argparse.Namespace) -> None:
    """Inspect the ID3v2 tag at the start of a file.

    Args:
        args: Parsed command-line arguments

    Exit Codes:
        0: Success
        10: Invalid input (file doesn't exist)
        20: Data error (no tag, or the tag is corrupt)
    """
    file_path = Path(args.file)
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
        if use_json:
            json_output(
                ErrorResponse(error=tag.error.kind.value, message=str(tag.error)),
                ExitCode.DATA_ERROR,
            )
        console.print(f"[red]Error: {tag.error}[/red]")
        sys.exit(ExitCode.DATA_ERROR)

    header = tag.header
    if use_json:
        frames = [
            FrameInfo(
                id=frame.frame_id,
                description=frame.description,
                size=frame.size,
                flags=frame.flags.hex(),
                encoding=frame.payload.encoding if frame.is_text else None,
                text=frame.payload.values if frame.is_text else None,
            )
            for frame in tag
        ]
        json_output(
            InspectSuccessResponse(
                file=str(file_path),
                version=header.version,
                flags=header.flags,
                size=header.total_size,
                extended_header=len(tag.extended_header) if tag.extended_header is not None else None,
                padding=tag.padding,
                frames=frames,
            )
        )

    console.print(f"[cyan]Reading tag from: {file_path}[/cyan]")
    console.print(f"[cyan]File size: {len(data):,} bytes[/cyan]\n")

    table = Table(title="Tag Header", show_header=False)
    table.add_column("Field", style="cyan", width=18)
    table.add_column("Value", style="magenta")

    table.add_row("Version", f"ID3v{header.version}")
    table.add_row("Flags", f"0x{header.flags:02x}")
    table.add_row("Unsynchronisation", "Yes" if header.unsynchronisation else "No")
    table.add_row("Extended Header", f"{len(tag.extended_header)} bytes" if tag.extended_header else "No")
    table.add_row("Experimental", "Yes" if header.experimental else "No")
    table.add_row("Tag Size", f"{header.total_size:,} bytes")
    table.add_row("Padding", f"{tag.padding:,} bytes")
    table.add_row("Frame Count", str(len(tag)))

    console.print(table)
    console.print()

    if args.quiet or len(tag) == 0:
        return

    width = config.get_max_value_width()
    frames_table = Table(title="Frames")
    frames_table.add_column("ID", style="cyan")
    frames_table.add_column("Offset", style="yellow", justify="right")
    frames_table.add_column("Size", style="green", justify="right")
    frames_table.add_column("Flags", style="yellow")
    frames_table.add_column("Value", style="magenta")

    for frame in tag:
        if frame.is_text:
            value = _truncate(" / ".join(frame.payload.values), width)
        else:
            value = f"[dim]<{len(frame.payload)} bytes>[/dim]"
        frames_table.add_row(
            frame.frame_id,
            f"0x{frame.offset:x}" if frame.offset is not None else "N/A",
            str(frame.size),
            frame.flags.hex(),
            value,
        )

    console.print(frames_table)
    logging.debug(f"Inspected {len(tag)} frames in {file_path}")
