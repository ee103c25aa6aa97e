"""Integer helpers for the ID3v2 size fields."""

import struct
from typing import Optional

from mutagen.id3 import BitPaddedInt

from .constants import MAX_SYNCHSAFE
from .errors import MalformedSize


def is_synchsafe(raw: bytes) -> bool:
    """Return True if no byte in ``raw`` has its high bit set."""
    return all(b & 0x80 == 0 for b in raw)


def decode_synchsafe(raw: bytes, offset: Optional[int] = None) -> int:
    """Convert a 4-byte synch-safe integer to an int.

    Each byte contributes its low 7 bits, most significant byte first.

    Args:
        raw: The 4 bytes as stored on disk
        offset: Position of ``raw`` in the source buffer, for error reporting

    Returns:
        The decoded 28-bit value

    Raises:
        MalformedSize: If any byte has its high bit set
    """
    if not is_synchsafe(raw):
        where = f" at offset {offset}" if offset is not None else ""
        raise MalformedSize(f"Malformed synch-safe integer {bytes(raw).hex()}{where}", offset)
    return int(BitPaddedInt(bytes(raw)))


def encode_synchsafe(value: int) -> bytes:
    """Convert an int to a 4-byte synch-safe integer.

    Raises:
        ValueError: If the value does not fit in 28 bits
    """
    if value < 0 or value > MAX_SYNCHSAFE:
        raise ValueError(f"Value {value} does not fit in a synch-safe integer")
    return bytes(BitPaddedInt.to_str(value, width=4))


def decode_uint32(raw: bytes) -> int:
    return struct.unpack(">I", raw)[0]


def encode_uint32(value: int) -> bytes:
    return struct.pack(">I", value)


def decode_frame_size(raw: bytes, version: int, offset: Optional[int] = None) -> int:
    """Decode a frame size field using the rule for the tag's major version.

    ID3v2.4 stores frame sizes as synch-safe integers, ID3v2.3 as plain
    big-endian 32-bit integers.
    """
    if version >= 4:
        return decode_synchsafe(raw, offset)
    return decode_uint32(raw)


def encode_frame_size(value: int, version: int) -> bytes:
    if version >= 4:
        return encode_synchsafe(value)
    return encode_uint32(value)
