"""id3codec - ID3v2.3 / ID3v2.4 tag codec.

Parses the metadata tag at the front of an in-memory buffer, lets callers
edit its frames, and writes it back byte for byte.

Main modules:
    tag: Tag orchestration (header + extended header + frames + padding)
    header: The fixed 10-byte tag header
    frame: Frames and their text/raw payloads
    cli: Command-line interface (id3tag command)

Core modules:
    config: Configuration management
    constants: Format constants and frame descriptions
    errors: Error kinds
    utils: Synch-safe and plain integer helpers
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("id3codec")
except PackageNotFoundError:
    __version__ = "unknown"

from .errors import (
    ErrorKind,
    Id3Error,
    NoHeaderFound,
    InsufficientData,
    MalformedSize,
    TruncatedFrame,
    MissingRequiredField,
    UnsupportedVersion,
    MalformedFrameId,
)
from .header import TagHeader
from .frame import TagFrame, TextPayload, RawPayload
from .tag import Tag, TagState

__all__ = [
    "Tag",
    "TagState",
    "TagHeader",
    "TagFrame",
    "TextPayload",
    "RawPayload",
    "ErrorKind",
    "Id3Error",
    "NoHeaderFound",
    "InsufficientData",
    "MalformedSize",
    "TruncatedFrame",
    "MissingRequiredField",
    "UnsupportedVersion",
    "MalformedFrameId",
]
