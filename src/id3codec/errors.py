"""Error kinds raised by the header and frame codecs.

Every exception carries an ``ErrorKind`` so callers that only see a failed
``Tag.decode()`` can still tell "no tag here" apart from a corrupt tag.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    NO_HEADER_FOUND = "no_header_found"
    INSUFFICIENT_DATA = "insufficient_data"
    MALFORMED_SIZE = "malformed_size"
    TRUNCATED_FRAME = "truncated_frame"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    UNSUPPORTED_VERSION = "unsupported_version"
    MALFORMED_FRAME_ID = "malformed_frame_id"


class Id3Error(ValueError):
    """Base class for all codec errors."""

    kind: ErrorKind

    def __init__(self, message: str, offset: Optional[int] = None):
        super().__init__(message)
        self.offset = offset


class NoHeaderFound(Id3Error):
    """The buffer does not start with an ID3v2 header."""

    kind = ErrorKind.NO_HEADER_FOUND


class InsufficientData(Id3Error):
    """The declared tag size is larger than the buffer supplied."""

    kind = ErrorKind.INSUFFICIENT_DATA


class MalformedSize(Id3Error):
    """A synch-safe integer has a byte with its high bit set."""

    kind = ErrorKind.MALFORMED_SIZE


class TruncatedFrame(Id3Error):
    """A frame claims more bytes than remain in the buffer."""

    kind = ErrorKind.TRUNCATED_FRAME


class MissingRequiredField(Id3Error):
    """A frame was built without a name or without data."""

    kind = ErrorKind.MISSING_REQUIRED_FIELD


class UnsupportedVersion(Id3Error):
    """The tag is neither ID3v2.3 nor ID3v2.4."""

    kind = ErrorKind.UNSUPPORTED_VERSION


class MalformedFrameId(Id3Error):
    """A frame id is not four characters from A-Z and 0-9."""

    kind = ErrorKind.MALFORMED_FRAME_ID
