"""Tests for Tag orchestration: decode, encode and frame editing."""

import logging

from id3codec.constants import ENCODING_UTF16, FRAME_HEADER_SIZE, HEADER_SIZE
from id3codec.errors import ErrorKind
from id3codec.tag import Tag, TagState
from id3codec.utils import decode_synchsafe, encode_synchsafe


class TestTagDecode:
    """Test the Empty -> Parsing -> Valid/Invalid transitions."""

    def test_new_tag_is_empty(self):
        tag = Tag()
        assert tag.state is TagState.EMPTY
        assert not tag.valid
        assert len(tag) == 0

    def test_empty_tag(self, empty_tag_bytes):
        """A header with no frames is a valid tag."""
        tag = Tag()
        assert tag.decode(empty_tag_bytes) is True
        assert tag.state is TagState.VALID
        assert tag.frames == {}
        assert tag.size == HEADER_SIZE

    def test_decode_frames(self, sample_tag_bytes):
        tag = Tag()
        assert tag.decode(sample_tag_bytes)
        assert list(tag.frames) == ["TIT2", "TPE1", "APIC"]
        assert tag.get_frame("TIT2").text == "Song"
        assert tag.get_frame("TPE1").text == "Artist"
        assert not tag.get_frame("APIC").is_text
        assert tag.size == len(sample_tag_bytes)

    def test_nine_bytes_is_no_header(self):
        """Too little data for a header means "untagged", not a crash."""
        tag = Tag()
        assert tag.decode(b"ID3\x04\x00\x00\x00\x00\x00") is False
        assert tag.state is TagState.INVALID
        assert tag.error.kind is ErrorKind.NO_HEADER_FOUND

    def test_untagged_audio(self, audio_payload):
        tag = Tag()
        assert tag.decode(audio_payload) is False
        assert tag.error.kind is ErrorKind.NO_HEADER_FOUND

    def test_insufficient_data(self, sample_tag_bytes):
        """A buffer shorter than the declared size is rejected up front."""
        tag = Tag()
        assert tag.decode(sample_tag_bytes[:-1]) is False
        assert tag.state is TagState.INVALID
        assert tag.error.kind is ErrorKind.INSUFFICIENT_DATA

    def test_length_argument(self, sample_tag_bytes):
        tag = Tag()
        assert tag.decode(sample_tag_bytes, 0, len(sample_tag_bytes) - 1) is False
        assert tag.error.kind is ErrorKind.INSUFFICIENT_DATA

    def test_truncated_frame(self, make_frame):
        """A frame running 5 bytes past the end of the buffer."""
        frame = make_frame("TIT2", b"\x03" + b"x" * 14)[:20]
        buffer = b"ID3\x04\x00\x00" + encode_synchsafe(20) + frame
        assert len(buffer) == 30

        tag = Tag()
        assert tag.decode(buffer) is False
        assert tag.state is TagState.INVALID
        assert tag.error.kind is ErrorKind.TRUNCATED_FRAME

    def test_malformed_header_size(self):
        tag = Tag()
        assert tag.decode(b"ID3\x04\x00\x00\x00\x00\x00\xff") is False
        assert tag.error.kind is ErrorKind.MALFORMED_SIZE

    def test_malformed_frame_size(self, make_tag):
        frame = b"TIT2\x00\x00\x00\x85\x00\x00" + b"x" * 5
        tag = Tag()
        assert tag.decode(make_tag([frame])) is False
        assert tag.error.kind is ErrorKind.MALFORMED_SIZE

    def test_unsupported_version(self, make_tag, make_frame):
        tag = Tag()
        assert tag.decode(make_tag([make_frame("TT2", b"\x00Song")], version=2)) is False
        assert tag.error.kind is ErrorKind.UNSUPPORTED_VERSION

    def test_decode_at_offset(self, sample_tag_bytes):
        tag = Tag()
        assert tag.decode(b"\xff" * 5 + sample_tag_bytes, 5)
        assert len(tag) == 3
        assert tag.get_frame("TIT2").offset == 5 + HEADER_SIZE

    def test_trailing_audio_is_ignored(self, sample_tag_bytes, audio_payload):
        tag = Tag()
        assert tag.decode(sample_tag_bytes + audio_payload)
        assert tag.header.total_size == len(sample_tag_bytes)

    def test_v23_tag(self, make_tag, make_frame):
        data = make_tag([
            make_frame("TIT2", b"\x01" + "Song".encode("utf-16"), version=3),
            make_frame("PRIV", b"x" * 200, version=3),
        ], version=3)
        tag = Tag()
        assert tag.decode(data)
        assert tag.version == 3
        assert tag.get_frame("TIT2").text == "Song"
        assert tag.encode() == data

    def test_decode_resets_previous_state(self, sample_tag_bytes, empty_tag_bytes):
        tag = Tag()
        tag.decode(sample_tag_bytes)
        assert tag.decode(empty_tag_bytes)
        assert len(tag) == 0
        assert tag.error is None


class TestTagDuplicates:
    """Later frames with the same id replace earlier ones."""

    def test_duplicate_frames_on_decode(self, make_tag, make_frame):
        data = make_tag([
            make_frame("TIT2", b"\x03First"),
            make_frame("TPE1", b"\x03Artist"),
            make_frame("TIT2", b"\x03Second"),
        ])
        tag = Tag()
        assert tag.decode(data)
        assert len(tag) == 2
        assert tag.get_frame("TIT2").text == "Second"
        assert list(tag.frames) == ["TIT2", "TPE1"]

    def test_add_frame_twice(self):
        tag = Tag()
        assert tag.add_frame("TIT2", "First")
        assert tag.add_frame("TIT2", "Second")
        assert len(tag) == 1
        assert tag.get_frame("TIT2").text == "Second"


class TestTagEncode:
    """Test serializing the current in-memory tag."""

    def test_round_trip_is_byte_exact(self, sample_tag_bytes):
        tag = Tag.from_bytes(sample_tag_bytes)
        assert tag.encode() == sample_tag_bytes

    def test_round_trip_frames(self, sample_tag_bytes):
        original = Tag.from_bytes(sample_tag_bytes)
        copy = Tag.from_bytes(original.encode())
        assert copy.valid
        assert {k: f.raw for k, f in copy.frames.items()} == {k: f.raw for k, f in original.frames.items()}

    def test_declared_size_matches_output(self, sample_tag_bytes):
        tag = Tag.from_bytes(sample_tag_bytes)
        tag.add_frame("TALB", "Album")
        data = tag.encode()
        assert decode_synchsafe(data[6:10]) == len(data) - HEADER_SIZE
        assert tag.size == len(data)

    def test_encode_twice_is_identical(self, sample_tag_bytes):
        tag = Tag.from_bytes(sample_tag_bytes)
        assert tag.encode() == tag.encode()

    def test_add_frame_to_empty_tag(self, empty_tag_bytes):
        tag = Tag()
        assert tag.decode(empty_tag_bytes)
        assert tag.add_frame("TIT2", "Song")

        data = tag.encode()
        assert len(data) == HEADER_SIZE + FRAME_HEADER_SIZE + len(b"\x03Song")
        assert decode_synchsafe(data[6:10]) == FRAME_HEADER_SIZE + 5
        assert data[HEADER_SIZE:] == b"TIT2\x00\x00\x00\x05\x00\x00\x03Song"

    def test_fresh_tag_without_header(self):
        """encode() creates a header when there is none."""
        assert Tag().encode() == b"ID3\x04\x00\x00\x00\x00\x00\x00"
        assert Tag(default_version=3).encode() == b"ID3\x03\x00\x00\x00\x00\x00\x00"

    def test_encode_after_failed_decode(self):
        """An invalid tag can still be populated and written."""
        tag = Tag()
        assert not tag.decode(b"not a tag")
        tag.add_frame("TIT2", "Song")
        copy = Tag.from_bytes(tag.encode())
        assert copy.valid
        assert copy.get_frame("TIT2").text == "Song"

    def test_failed_decode_uses_default_version(self):
        """A header that failed to decode is not reused by encode()."""
        tag = Tag(default_version=3)
        assert not tag.decode(b"not a tag at all")
        assert tag.version == 3
        assert tag.add_frame("TIT2", "Song")
        assert tag.get_frame("TIT2").payload.encoding == ENCODING_UTF16

        data = tag.encode()
        assert data[3] == 3
        copy = Tag.from_bytes(data)
        assert copy.valid
        assert copy.get_frame("TIT2").text == "Song"

    def test_encode_after_unsupported_version(self, make_tag, make_frame):
        """A v2.2 tag is rewritten as a tag this codec can read back."""
        tag = Tag()
        assert not tag.decode(make_tag([make_frame("TT2", b"\x00Song")], version=2))
        assert tag.error.kind is ErrorKind.UNSUPPORTED_VERSION
        tag.add_frame("TIT2", "Song")

        data = tag.encode()
        assert data[3] == 4
        copy = Tag.from_bytes(data)
        assert copy.valid
        assert copy.get_frame("TIT2").text == "Song"

    def test_encode_reflects_removed_frames(self, sample_tag_bytes):
        tag = Tag.from_bytes(sample_tag_bytes)
        assert tag.remove_frame("APIC")
        copy = Tag.from_bytes(tag.encode())
        assert list(copy.frames) == ["TIT2", "TPE1"]

    def test_padding_round_trip(self, make_tag, make_frame):
        """Zero padding after the frames is kept."""
        data = make_tag([make_frame("TIT2", b"\x03Song")], padding=64)
        tag = Tag.from_bytes(data)
        assert tag.valid
        assert tag.padding == 64
        assert len(tag) == 1
        assert tag.encode() == data

    def test_v23_tag_from_scratch(self):
        tag = Tag(default_version=3)
        tag.add_frame("TIT2", "Song")
        frame = tag.get_frame("TIT2")
        assert frame.payload.encoding == ENCODING_UTF16

        data = tag.encode()
        assert data[3] == 3
        assert data[HEADER_SIZE + 4:HEADER_SIZE + 8] == (frame.size - FRAME_HEADER_SIZE).to_bytes(4, "big")

    def test_utf8_setting_falls_back_for_v23(self):
        tag = Tag(default_version=3, text_encoding=3)
        assert tag.add_frame("TIT2", "Song")
        assert tag.get_frame("TIT2").payload.encoding == ENCODING_UTF16


class TestExtendedHeader:
    """The extended header is carried as an opaque block."""

    def test_v24_extended_header(self, make_tag, make_frame):
        extended = encode_synchsafe(6) + b"\x01\x00"
        data = make_tag([make_frame("TIT2", b"\x03Song")], flags=0x40, extended=extended)
        tag = Tag.from_bytes(data)
        assert tag.valid
        assert tag.header.extended_header
        assert tag.extended_header == extended
        assert tag.get_frame("TIT2").text == "Song"
        assert tag.encode() == data

    def test_v23_extended_header(self, make_tag, make_frame):
        """v2.3 sizes leave out the 4 size bytes themselves."""
        extended = b"\x00\x00\x00\x06" + b"\x00\x00" + b"\x00\x00\x00\x00"
        data = make_tag([make_frame("TIT2", b"\x00Song", version=3)], version=3, flags=0x40, extended=extended)
        tag = Tag.from_bytes(data)
        assert tag.valid
        assert tag.extended_header == extended
        assert tag.encode() == data

    def test_extended_header_too_large(self, make_tag):
        extended = encode_synchsafe(100) + b"\x01\x00"
        tag = Tag.from_bytes(make_tag([], flags=0x40, extended=extended))
        assert not tag.valid
        assert tag.error.kind is ErrorKind.INSUFFICIENT_DATA

    def test_dropping_extended_header_clears_flag(self, make_tag, make_frame):
        extended = encode_synchsafe(6) + b"\x01\x00"
        tag = Tag.from_bytes(make_tag([make_frame("TIT2", b"\x03Song")], flags=0x40, extended=extended))
        tag.extended_header = None
        data = tag.encode()
        assert data[5] & 0x40 == 0
        assert Tag.from_bytes(data).get_frame("TIT2").text == "Song"


class TestFrameAccess:
    """Test add/get/remove and iteration."""

    def test_get_missing_frame(self):
        assert Tag().get_frame("TIT2") is None

    def test_add_frame_rejects_bad_names(self, caplog):
        tag = Tag()
        with caplog.at_level(logging.WARNING):
            assert tag.add_frame("", "Song") is False
            assert tag.add_frame("bad!", "Song") is False
            assert tag.add_frame("TIT2", None) is False
        assert len(tag) == 0
        assert "Could not add frame" in caplog.text

    def test_remove_frame(self, sample_tag_bytes):
        tag = Tag.from_bytes(sample_tag_bytes)
        assert tag.remove_frame("TPE1") is True
        assert tag.remove_frame("TPE1") is False
        assert "TPE1" not in tag

    def test_iteration_order(self):
        tag = Tag()
        for name in ("TPE1", "TIT2", "TALB"):
            tag.add_frame(name, name.lower())
        assert [frame.frame_id for frame in tag] == ["TPE1", "TIT2", "TALB"]

    def test_display_text(self, sample_tag_bytes):
        tag = Tag.from_bytes(sample_tag_bytes)
        lines = tag.to_display_text().splitlines()
        assert len(lines) == 3
        assert lines[0] == "TIT2 (Title/songname/content description): Song"
        assert lines[2].startswith("APIC (Attached picture): <")


class TestDiagnostics:
    """Failures are reported through the injected logger."""

    def test_injected_logger(self, sample_tag_bytes, caplog):
        logger = logging.getLogger("test.id3.sink")
        tag = Tag(logger=logger)
        with caplog.at_level(logging.DEBUG, logger="test.id3.sink"):
            tag.decode(sample_tag_bytes[:20])
        assert any(r.name == "test.id3.sink" for r in caplog.records)
        assert f"{len(sample_tag_bytes)} bytes needed, 20 bytes given" in caplog.text

    def test_no_header_logged_at_debug(self, caplog):
        tag = Tag()
        with caplog.at_level(logging.DEBUG, logger="id3codec.tag"):
            tag.decode(b"RIFF")
        records = [r for r in caplog.records if r.name == "id3codec.tag"]
        assert records and all(r.levelno == logging.DEBUG for r in records)

    def test_truncated_frame_logged_as_warning(self, make_frame, caplog):
        frame = make_frame("TIT2", b"\x03" + b"x" * 14)[:20]
        buffer = b"ID3\x04\x00\x00" + encode_synchsafe(20) + frame
        with caplog.at_level(logging.WARNING, logger="id3codec.tag"):
            Tag().decode(buffer)
        assert "TIT2" in caplog.text


class TestFooter:
    """ID3v2.4 tags may end with a 10-byte "3DI" footer."""

    def footer_tag(self, make_tag, make_frame):
        body = make_tag([make_frame("TIT2", b"\x03Song")], flags=0x10)
        return body + b"3DI" + body[3:HEADER_SIZE]

    def test_footer_round_trip(self, make_tag, make_frame):
        data = self.footer_tag(make_tag, make_frame)
        tag = Tag.from_bytes(data)
        assert tag.valid
        assert tag.size == len(data)
        assert tag.encode() == data

    def test_footer_follows_edited_size(self, make_tag, make_frame):
        tag = Tag.from_bytes(self.footer_tag(make_tag, make_frame))
        tag.add_frame("TALB", "Album")
        data = tag.encode()
        assert data[-HEADER_SIZE:] == b"3DI" + data[3:HEADER_SIZE]
        assert Tag.from_bytes(data).get_frame("TALB").text == "Album"

    def test_missing_footer(self, make_tag, make_frame):
        data = self.footer_tag(make_tag, make_frame)[:-HEADER_SIZE]
        tag = Tag.from_bytes(data)
        assert not tag.valid
        assert tag.error.kind is ErrorKind.INSUFFICIENT_DATA
