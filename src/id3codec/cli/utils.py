"""Utility functions for CLI operations."""

import logging
import sys
from enum import IntEnum
from pathlib import Path
from typing import Tuple

from pydantic import BaseModel

from ..tag import Tag


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    INVALID_INPUT = 10
    DATA_ERROR = 20
    WRITE_FAILED = 30
    INTERRUPTED = 130


def setup_logging(level: str) -> None:
    """Configure logging based on user-specified level.

    Args:
        level: Logging level (debug, info, warning, error, critical)
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def json_output(response: BaseModel, exit_code: int = ExitCode.SUCCESS) -> None:
    """Print a response model as JSON and exit with ``exit_code``."""
    print(response.model_dump_json(exclude_none=True, indent=2))
    sys.exit(int(exit_code))


def read_tag(path: Path, config) -> Tuple[Tag, bytes]:
    """Read ``path`` into memory and decode the tag at its start.

    Returns:
        The Tag (check ``tag.valid``) and the complete file contents
    """
    data = path.read_bytes()
    tag = Tag(
        logger=logging.getLogger("id3codec"),
        default_version=config.get_default_version(),
        text_encoding=config.get_text_encoding(),
    )
    tag.decode(data)
    return tag, data


def audio_bytes(tag: Tag, data: bytes) -> bytes:
    """Return the part of ``data`` that follows the tag and its footer.

    Call this before ``tag.encode()``, which rewrites the header size.
    """
    if tag.valid:
        return data[tag.header.total_size + tag.header.footer_size:]
    return data
