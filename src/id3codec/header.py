"""The fixed 10-byte ID3v2 tag header."""

from typing import Optional

from .constants import (
    MAGIC,
    FOOTER_MAGIC,
    HEADER_SIZE,
    DEFAULT_VERSION,
    FLAG_UNSYNCHRONISATION,
    FLAG_EXTENDED_HEADER,
    FLAG_EXPERIMENTAL,
    FLAG_FOOTER,
)
from .errors import Id3Error, NoHeaderFound
from .utils import decode_synchsafe, encode_synchsafe


def _flag_property(mask: int, doc: str) -> property:
    def getter(self):
        return bool(self.flags & mask)

    def setter(self, value):
        if value:
            self.flags |= mask
        else:
            self.flags &= ~mask & 0xFF

    return property(getter, setter, doc=doc)


class TagHeader:
    """Header of an ID3v2 tag.

    ``size`` is the declared payload size: everything after these 10 bytes
    (extended header, frames and padding). Unknown flag bits are kept in
    ``flags`` untouched so they survive a round trip.
    """

    header_size = HEADER_SIZE

    def __init__(self, major: int = DEFAULT_VERSION, minor: int = 0, flags: int = 0, size: int = 0):
        self.magic = MAGIC
        self.major = major
        self.minor = minor
        self.flags = flags
        self.size = size
        self.is_set = False
        self.error: Optional[Id3Error] = None

    unsynchronisation = _flag_property(FLAG_UNSYNCHRONISATION, "Tag-wide unsynchronisation")
    extended_header = _flag_property(FLAG_EXTENDED_HEADER, "An extended header follows")
    experimental = _flag_property(FLAG_EXPERIMENTAL, "Tag is experimental")
    footer = _flag_property(FLAG_FOOTER, "A footer is present (v2.4)")

    @property
    def total_size(self) -> int:
        return HEADER_SIZE + self.size

    @property
    def footer_size(self) -> int:
        """Bytes taken by the footer after the tag (only ID3v2.4 has one)."""
        return HEADER_SIZE if self.footer and self.major >= 4 else 0

    @property
    def version(self) -> str:
        return f"2.{self.major}.{self.minor}"

    def decode(self, buffer: bytes, offset: int = 0, length: Optional[int] = None) -> bool:
        """Read the header from ``buffer`` at ``offset``.

        Args:
            buffer: Bytes containing the tag
            offset: Position of the first header byte
            length: Number of valid bytes from ``offset`` (default: rest of buffer)

        Returns:
            True on success. On failure the header is left unset and
            ``self.error`` holds the reason.
        """
        self.is_set = False
        self.error = None
        if length is None:
            length = len(buffer) - offset

        try:
            if length < HEADER_SIZE or len(buffer) < offset + HEADER_SIZE:
                raise NoHeaderFound(
                    f"Need {HEADER_SIZE} bytes for a tag header, got {max(length, 0)}", offset
                )

            raw = bytes(buffer[offset:offset + HEADER_SIZE])
            if raw[:3] != MAGIC:
                raise NoHeaderFound(f"No ID3 marker at offset {offset}: {raw[:3]!r}", offset)

            size = decode_synchsafe(raw[6:10], offset + 6)
        except Id3Error as e:
            self.error = e
            return False

        self.major = raw[3]
        self.minor = raw[4]
        self.flags = raw[5]
        self.size = size
        self.is_set = True
        return True

    def encode(self) -> bytes:
        """Return the 10 header bytes for the current field values."""
        return (
            MAGIC
            + bytes((self.major & 0xFF, self.minor & 0xFF, self.flags & 0xFF))
            + encode_synchsafe(self.size)
        )

    def encode_footer(self) -> bytes:
        """Return the 10 footer bytes, or nothing if no footer is written."""
        if not self.footer_size:
            return b""
        return FOOTER_MAGIC + self.encode()[len(MAGIC):]

    @staticmethod
    def from_bytes(buffer: bytes, offset: int = 0) -> Optional["TagHeader"]:
        """Return a decoded TagHeader, or None if there is no valid header."""
        header = TagHeader()
        if header.decode(buffer, offset):
            return header
        return None

    def __repr__(self):
        return (
            f"TagHeader(version={self.version!r}, flags=0x{self.flags:02x}, "
            f"size={self.size})"
        )

    def to_display_text(self) -> str:
        return (
            f"ID3v{self.version} flags=0x{self.flags:02x} "
            f"size={self.size} total={self.total_size}"
        )
