"""ID3v2 tag: header, optional extended header, frames and padding."""

import logging
from enum import Enum
from typing import Dict, Iterator, Optional

from .constants import DEFAULT_VERSION, HEADER_SIZE, SUPPORTED_VERSIONS, VERSION_ENCODINGS
from .errors import (
    Id3Error,
    InsufficientData,
    MalformedSize,
    UnsupportedVersion,
)
from .frame import TagFrame
from .header import TagHeader
from .utils import decode_synchsafe, decode_uint32


class TagState(Enum):
    EMPTY = "empty"
    PARSING = "parsing"
    VALID = "valid"
    INVALID = "invalid"


class Tag:
    """An ID3v2.3 / ID3v2.4 tag that can be decoded, edited and re-encoded.

    Frames are kept in a dict keyed by frame id, in insertion order. A frame
    with an id that is already present replaces the earlier one.

    Decoding never raises: failures are logged to ``logger`` and leave the
    tag in the INVALID state with the reason stored in ``self.error``.

    Args:
        logger: Diagnostic sink (defaults to this module's logger)
        default_version: Major version used when a header has to be created
        text_encoding: Encoding indicator for frames built by ``add_frame``
            (None picks UTF-8 for v2.4 and UTF-16 for v2.3)
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        default_version: int = DEFAULT_VERSION,
        text_encoding: Optional[int] = None,
    ):
        self.log = logger if logger is not None else logging.getLogger(__name__)
        self.default_version = default_version
        self.text_encoding = text_encoding
        self.header: Optional[TagHeader] = None
        self.extended_header: Optional[bytes] = None
        self.padding = 0
        self.state = TagState.EMPTY
        self.error: Optional[Id3Error] = None
        self._frames: Dict[str, TagFrame] = {}

    def __contains__(self, name):
        return name in self._frames

    def __getitem__(self, name):
        return self._frames[name]

    def __iter__(self) -> Iterator[TagFrame]:
        return iter(self._frames.values())

    def __len__(self):
        return len(self._frames)

    @property
    def frames(self) -> Dict[str, TagFrame]:
        return self._frames

    @property
    def valid(self) -> bool:
        return self.state is TagState.VALID

    @property
    def version(self) -> int:
        if self._header_usable():
            return self.header.major
        return self.default_version

    @property
    def payload_size(self) -> int:
        """Bytes after the 10-byte header: extended header, frames and padding."""
        size = len(self.extended_header) if self.extended_header is not None else 0
        size += sum(frame.size for frame in self._frames.values())
        return size + self.padding

    @property
    def size(self) -> int:
        """Bytes on disk: header, payload and footer."""
        footer = self.header.footer_size if self._header_usable() else 0
        return HEADER_SIZE + self.payload_size + footer

    def _header_usable(self) -> bool:
        """False for a header left behind by a failed or unsupported decode."""
        return (
            self.header is not None
            and self.header.error is None
            and self.header.major in SUPPORTED_VERSIONS
        )

    def _fail(self, error: Id3Error, level: int = logging.WARNING) -> bool:
        self.error = error
        self.state = TagState.INVALID
        self.log.log(level, f"Could not parse ID3 tag: {error}")
        return False

    def _parse_extended_header(self, buffer: bytes, offset: int, end: int) -> int:
        """Store the extended header as opaque bytes and return the offset after it.

        ID3v2.4 gives its size as a synch-safe integer that counts the whole
        block; ID3v2.3 uses a plain integer that leaves out the 4 size bytes.
        """
        if end - offset < 4:
            raise InsufficientData(
                f"Extended header at offset {offset} needs 4 bytes, {end - offset} remain",
                offset,
            )
        raw = bytes(buffer[offset:offset + 4])
        if self.header.major >= 4:
            block_size = decode_synchsafe(raw, offset)
            if block_size < 6:
                raise MalformedSize(f"Extended header size {block_size} is too small", offset)
        else:
            block_size = decode_uint32(raw) + 4

        if offset + block_size > end:
            raise InsufficientData(
                f"Extended header at offset {offset} declares {block_size} bytes, "
                f"{end - offset} remain in the tag",
                offset,
            )
        self.extended_header = bytes(buffer[offset:offset + block_size])
        return offset + block_size

    def decode(self, buffer: bytes, offset: int = 0, length: Optional[int] = None) -> bool:
        """Parse a tag from ``buffer``.

        Args:
            buffer: Bytes that should start with an ID3v2 tag
            offset: Position of the tag in ``buffer``
            length: Number of valid bytes from ``offset`` (default: rest of buffer)

        Returns:
            True if a complete tag was parsed
        """
        if length is None:
            length = len(buffer) - offset
        length = min(length, len(buffer) - offset)

        self.state = TagState.PARSING
        self.error = None
        self.extended_header = None
        self.padding = 0
        self._frames = {}

        self.header = TagHeader()
        if not self.header.decode(buffer, offset, length):
            # No header is the normal case for an untagged file
            level = logging.WARNING if isinstance(self.header.error, MalformedSize) else logging.DEBUG
            return self._fail(self.header.error, level)

        if self.header.major not in SUPPORTED_VERSIONS:
            return self._fail(UnsupportedVersion(
                f"ID3v2.{self.header.major} is not supported "
                f"(supported: {', '.join(f'2.{v}' for v in SUPPORTED_VERSIONS)})",
                offset,
            ))

        total = self.header.total_size + self.header.footer_size
        if total > length:
            return self._fail(InsufficientData(
                f"Not enough data: {total} bytes needed, {length} bytes given",
                offset,
            ))

        end = offset + self.header.total_size
        cursor = offset + HEADER_SIZE
        try:
            if self.header.extended_header:
                cursor = self._parse_extended_header(buffer, cursor, end)

            while cursor < end:
                if buffer[cursor] == 0:
                    self.padding = end - cursor
                    self.log.debug(f"{self.padding} bytes of padding at offset {cursor}")
                    break
                frame = TagFrame()
                cursor = frame.decode(buffer, cursor, end - cursor, self.header.major)
                if not frame.is_well_formed:
                    self.log.warning(f"Frame id {frame.frame_id!r} at offset {frame.offset} is not well formed")
                if frame.frame_id in self._frames:
                    self.log.debug(f"Duplicate {frame.frame_id} frame at offset {frame.offset} replaces earlier one")
                self._frames[frame.frame_id] = frame
        except Id3Error as e:
            return self._fail(e)

        self.log.debug(f"Parsed ID3v{self.header.version} tag: {len(self._frames)} frames, {total} bytes")
        self.state = TagState.VALID
        return True

    def encode(self) -> bytes:
        """Serialize the current header, extended header, frames, padding and footer.

        A header left over from a failed decode is replaced by a fresh one for
        ``default_version``.
        """
        if not self._header_usable():
            self.header = TagHeader(major=self.default_version)

        self.header.extended_header = self.extended_header is not None
        self.header.size = self.payload_size

        parts = [self.header.encode()]
        if self.extended_header is not None:
            parts.append(self.extended_header)
        for frame in self._frames.values():
            parts.append(frame.encode(self.header.major))
        parts.append(b"\x00" * self.padding)
        parts.append(self.header.encode_footer())

        data = b"".join(parts)
        assert len(data) == self.header.total_size + self.header.footer_size
        return data

    def _text_encoding_for(self, version: int) -> Optional[int]:
        if self.text_encoding in VERSION_ENCODINGS.get(version, []):
            return self.text_encoding
        return None

    def add_frame(self, name: str, data: str) -> bool:
        """Add a text frame, replacing any frame with the same id.

        Returns:
            True if the frame was added, False if ``name`` or ``data`` is unusable
        """
        try:
            frame = TagFrame.from_text(name, data, self._text_encoding_for(self.version), self.version)
        except (Id3Error, ValueError) as e:
            self.log.warning(f"Could not add frame {name!r}: {e}")
            return False
        self.set_frame(frame)
        return True

    def set_frame(self, frame: TagFrame) -> None:
        frame.version = self.version
        self._frames[frame.frame_id] = frame

    def get_frame(self, name: str) -> Optional[TagFrame]:
        return self._frames.get(name)

    def remove_frame(self, name: str) -> bool:
        return self._frames.pop(name, None) is not None

    def to_display_text(self) -> str:
        """Human-readable dump, one frame per line."""
        return "".join(frame.to_display_text() + "\n" for frame in self._frames.values())

    @staticmethod
    def from_bytes(buffer: bytes, offset: int = 0, logger: Optional[logging.Logger] = None) -> "Tag":
        """Return a Tag decoded from ``buffer``; check ``tag.valid`` for the outcome."""
        tag = Tag(logger=logger)
        tag.decode(buffer, offset)
        return tag

    def __repr__(self):
        return f"Tag(state={self.state.value}, version={self.version}, frames={list(self._frames)})"
