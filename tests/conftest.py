"""Pytest configuration and fixtures."""

import struct

import pytest


def synchsafe(value):
    return bytes([(value >> 21) & 0x7F, (value >> 14) & 0x7F, (value >> 7) & 0x7F, value & 0x7F])


def frame_bytes(frame_id, payload, version=4, flags=b"\x00\x00"):
    if version >= 4:
        size = synchsafe(len(payload))
    else:
        size = struct.pack(">I", len(payload))
    return frame_id.encode("latin-1") + size + flags + payload


def tag_bytes(frames=(), version=4, flags=0, extended=b"", padding=0):
    body = extended + b"".join(frames) + b"\x00" * padding
    return b"ID3" + bytes([version, 0, flags]) + synchsafe(len(body)) + body


@pytest.fixture
def make_frame():
    """Build raw frame bytes: make_frame(id, payload, version=4, flags=b'\\0\\0')."""
    return frame_bytes


@pytest.fixture
def make_tag():
    """Build raw tag bytes from a list of raw frames."""
    return tag_bytes


@pytest.fixture
def empty_tag_bytes():
    """A v2.4 header with no frames."""
    return b"ID3\x04\x00\x00" + synchsafe(0)


@pytest.fixture
def sample_tag_bytes():
    """A v2.4 tag with two text frames and one binary frame."""
    return tag_bytes([
        frame_bytes("TIT2", b"\x03Song"),
        frame_bytes("TPE1", b"\x03Artist"),
        frame_bytes("APIC", b"\x00image/png\x00\x03\x00" + bytes(range(32))),
    ])


@pytest.fixture
def audio_payload():
    """Bytes standing in for the MPEG audio that follows a tag."""
    return b"\xff\xfb\x90\x64" * 64
