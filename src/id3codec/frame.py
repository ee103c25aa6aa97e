"""ID3v2 frames and their payloads.

A frame is ``id (4) + size (4) + flags (2) + payload``. The size field is
synch-safe in ID3v2.4 and a plain big-endian integer in ID3v2.3, so every
frame remembers which version it belongs to.

Payloads come in two flavours, picked from the frame id when the frame is
decoded:

    TextPayload: ``T***`` frames, an encoding byte followed by encoded text
    RawPayload: everything else, kept as opaque bytes

Both re-encode to exactly the bytes they were read from.
"""

import re
from typing import List, Optional, Union

from .constants import (
    DEFAULT_VERSION,
    ENCODING_UTF16,
    ENCODING_UTF8,
    FRAME_DESCRIPTIONS,
    FRAME_FLAGS,
    FRAME_HEADER_SIZE,
    FRAME_ID_LENGTH,
    OPAQUE_FRAME_FLAGS,
    TEXT_ENCODINGS,
    VERSION_ENCODINGS,
)
from .errors import MalformedFrameId, MissingRequiredField, TruncatedFrame
from .utils import decode_frame_size, encode_frame_size

FRAME_ID_PATTERN = re.compile(r"^[A-Z0-9]{4}$")


def is_valid_frame_id(frame_id: str) -> bool:
    return bool(frame_id) and FRAME_ID_PATTERN.match(frame_id) is not None


def default_encoding(version: int) -> int:
    """UTF-8 where the version allows it, UTF-16 with BOM otherwise."""
    return ENCODING_UTF8 if version >= 4 else ENCODING_UTF16


class TextPayload:
    """Text frame payload: encoding indicator byte + encoded text."""

    is_text = True

    def __init__(self, encoding: int, data: bytes = b""):
        if encoding not in TEXT_ENCODINGS:
            raise ValueError(f"Unknown text encoding indicator: {encoding}")
        self.encoding = encoding
        self.data = bytes(data)

    @property
    def codec(self) -> str:
        return TEXT_ENCODINGS[self.encoding][0]

    @property
    def text(self) -> str:
        """The decoded text, without trailing null terminators.

        Values of a multi-value ID3v2.4 frame stay joined by null separators so the
        text can be written back unchanged; use ``values`` to split them.
        """
        return self.data.decode(self.codec, errors="replace").rstrip("\x00").replace("\ufeff", "")

    @property
    def values(self) -> List[str]:
        """Null-separated values (ID3v2.4 allows several per text frame)."""
        text = self.data.decode(self.codec, errors="replace").rstrip("\x00")
        return [value.replace("\ufeff", "") for value in text.split("\x00")]

    def set_text(self, text: str) -> None:
        """Replace the text, keeping the encoding indicator byte.

        Raises:
            UnicodeEncodeError: If ``text`` cannot be stored in this encoding
        """
        self.data = text.encode(self.codec)

    def to_bytes(self) -> bytes:
        return bytes((self.encoding,)) + self.data

    def __len__(self):
        return 1 + len(self.data)

    def __repr__(self):
        return f"TextPayload(encoding={self.encoding}, text={self.text!r})"


class RawPayload:
    """Opaque payload of a frame the codec does not interpret."""

    is_text = False

    def __init__(self, data: bytes = b""):
        self.data = bytes(data)

    def to_bytes(self) -> bytes:
        return self.data

    def __len__(self):
        return len(self.data)

    def __repr__(self):
        return f"RawPayload({len(self.data)} bytes)"


Payload = Union[TextPayload, RawPayload]


def make_payload(frame_id: str, raw: bytes, opaque: bool = False) -> Payload:
    """Pick the payload variant for a frame from its id and raw bytes.

    Args:
        frame_id: The 4-character frame identifier
        raw: Payload bytes as stored on disk
        opaque: True if the frame flags make the bytes unreadable as text
            (compressed, encrypted, grouped or unsynchronised frames)
    """
    if not opaque and frame_id.startswith("T") and raw and raw[0] in TEXT_ENCODINGS:
        return TextPayload(raw[0], raw[1:])
    return RawPayload(raw)


def _frame_flag(name: str) -> property:
    def getter(self):
        try:
            index, mask = FRAME_FLAGS[self.version][name]
        except KeyError:
            return False
        return bool(self.flags[index] & mask)

    def setter(self, value):
        try:
            index, mask = FRAME_FLAGS[self.version][name]
        except KeyError:
            raise AttributeError(f"ID3v2.{self.version} frames have no {name} flag")
        flags = bytearray(self.flags)
        if value:
            flags[index] |= mask
        else:
            flags[index] &= ~mask & 0xFF
        self.flags = bytes(flags)

    return property(getter, setter)


class TagFrame:
    def __init__(
        self,
        frame_id: str = "",
        payload: Optional[Payload] = None,
        flags: bytes = b"\x00\x00",
        version: int = DEFAULT_VERSION,
    ):
        self.frame_id = frame_id
        self.payload = payload if payload is not None else RawPayload()
        self.flags = bytes(flags)
        self.version = version
        self.offset: Optional[int] = None

    tag_alter_preservation = _frame_flag("tag_alter_preservation")
    file_alter_preservation = _frame_flag("file_alter_preservation")
    read_only = _frame_flag("read_only")
    grouping = _frame_flag("grouping")
    compression = _frame_flag("compression")
    encryption = _frame_flag("encryption")
    unsynchronisation = _frame_flag("unsynchronisation")
    data_length_indicator = _frame_flag("data_length_indicator")

    @property
    def name(self) -> str:
        return self.frame_id

    @property
    def description(self) -> str:
        return FRAME_DESCRIPTIONS.get(self.frame_id, "Unknown frame")

    @property
    def is_well_formed(self) -> bool:
        return is_valid_frame_id(self.frame_id)

    @property
    def is_text(self) -> bool:
        return self.payload.is_text

    @property
    def opaque(self) -> bool:
        """True if the flags say the payload is transformed on disk."""
        return any(getattr(self, flag) for flag in OPAQUE_FRAME_FLAGS)

    def __get_raw(self):
        return self.payload.to_bytes()

    def __set_raw(self, raw):
        self.payload = make_payload(self.frame_id, bytes(raw), self.opaque)

    raw = property(__get_raw, __set_raw)

    def __get_text(self):
        if not self.payload.is_text:
            return None
        return self.payload.text

    def __set_text(self, text):
        self.set_data(text)

    text = property(__get_text, __set_text)

    @property
    def size(self) -> int:
        """Encoded size on disk, frame header included."""
        return FRAME_HEADER_SIZE + len(self.payload)

    def set_data(self, text: str) -> None:
        """Set the frame text.

        A text payload keeps its encoding indicator byte; any other payload is
        replaced by a text payload in the default encoding for the version.
        """
        if self.payload.is_text:
            self.payload.set_text(text)
        else:
            payload = TextPayload(default_encoding(self.version))
            payload.set_text(text)
            self.payload = payload

    def decode(
        self,
        buffer: bytes,
        offset: int = 0,
        length: Optional[int] = None,
        version: Optional[int] = None,
    ) -> int:
        """Parse one frame starting at ``offset``.

        Args:
            buffer: Bytes containing the frame
            offset: Position of the first byte of the frame id
            length: Number of valid bytes from ``offset`` (default: rest of buffer)
            version: Major version of the enclosing tag; selects the size rule

        Returns:
            The offset immediately after this frame

        Raises:
            TruncatedFrame: If the frame runs past ``offset + length``
            MalformedSize: If a v2.4 size field is not synch-safe
        """
        if version is not None:
            self.version = version
        if length is None:
            length = len(buffer) - offset
        length = min(length, len(buffer) - offset)

        if length < FRAME_HEADER_SIZE:
            raise TruncatedFrame(
                f"Frame header at offset {offset} needs {FRAME_HEADER_SIZE} bytes, "
                f"{max(length, 0)} remain",
                offset,
            )

        header = bytes(buffer[offset:offset + FRAME_HEADER_SIZE])
        frame_id = header[:FRAME_ID_LENGTH].decode("latin-1")
        size = decode_frame_size(header[4:8], self.version, offset + 4)

        if FRAME_HEADER_SIZE + size > length:
            raise TruncatedFrame(
                f"Frame {frame_id!r} at offset {offset} declares {size} payload bytes, "
                f"only {length - FRAME_HEADER_SIZE} remain",
                offset,
            )

        start = offset + FRAME_HEADER_SIZE
        self.frame_id = frame_id
        self.flags = header[8:10]
        self.offset = offset
        self.payload = make_payload(frame_id, bytes(buffer[start:start + size]), self.opaque)
        return start + size

    def encode(self, version: Optional[int] = None) -> bytes:
        """Return the frame as bytes: id + size + flags + payload."""
        if version is not None:
            self.version = version
        data = self.payload.to_bytes()
        return (
            self.frame_id.encode("latin-1")
            + encode_frame_size(len(data), self.version)
            + self.flags
            + data
        )

    @staticmethod
    def from_bytes(buffer: bytes, offset: int = 0, version: int = DEFAULT_VERSION) -> "TagFrame":
        frame = TagFrame(version=version)
        frame.decode(buffer, offset, version=version)
        return frame

    @staticmethod
    def from_text(
        name: str,
        text: str,
        encoding: Optional[int] = None,
        version: int = DEFAULT_VERSION,
    ) -> "TagFrame":
        """Build a text frame from a frame id and a string.

        Raises:
            MissingRequiredField: If ``name`` is empty or ``text`` is None
            MalformedFrameId: If ``name`` is not 4 uppercase letters/digits
            ValueError: If ``encoding`` is not allowed in this version
        """
        if not name:
            raise MissingRequiredField("A frame needs a name")
        if text is None:
            raise MissingRequiredField(f"Frame {name!r} has no data")
        if not is_valid_frame_id(name):
            raise MalformedFrameId(f"Invalid frame id {name!r}: expected 4 of A-Z, 0-9")

        if encoding is None:
            encoding = default_encoding(version)
        if encoding not in VERSION_ENCODINGS.get(version, TEXT_ENCODINGS):
            raise ValueError(f"Text encoding {encoding} is not allowed in ID3v2.{version}")

        payload = TextPayload(encoding)
        payload.set_text(text)
        return TagFrame(name, payload, version=version)

    def __repr__(self):
        return f"TagFrame({self.frame_id!r}, {self.payload!r})"

    def to_display_text(self) -> str:
        """One-line, human-readable rendering of the frame."""
        if self.payload.is_text:
            value = " / ".join(self.payload.values)
        else:
            value = f"<{len(self.payload)} bytes>"
        return f"{self.frame_id} ({self.description}): {value}"
