# Tag header: "ID3" + major + minor + flags + 4-byte synch-safe size
MAGIC = b"ID3"
HEADER_SIZE = 10

# v2.4 footer: same layout as the header with "3DI" as the marker
FOOTER_MAGIC = b"3DI"

# Frame header: 4-char id + 4-byte size + 2 flag bytes
FRAME_HEADER_SIZE = 10
FRAME_ID_LENGTH = 4

SUPPORTED_VERSIONS = [3, 4]
DEFAULT_VERSION = 4

# Largest value a 4-byte synch-safe integer can hold (28 bits)
MAX_SYNCHSAFE = 0x0FFFFFFF

# Header flag bits
FLAG_UNSYNCHRONISATION = 0x80
FLAG_EXTENDED_HEADER = 0x40
FLAG_EXPERIMENTAL = 0x20
FLAG_FOOTER = 0x10

# Frame flag bits, keyed by major version: (byte index, mask)
FRAME_FLAGS = {
    3: {
        "tag_alter_preservation": (0, 0x80),
        "file_alter_preservation": (0, 0x40),
        "read_only": (0, 0x20),
        "compression": (1, 0x80),
        "encryption": (1, 0x40),
        "grouping": (1, 0x20),
    },
    4: {
        "tag_alter_preservation": (0, 0x40),
        "file_alter_preservation": (0, 0x20),
        "read_only": (0, 0x10),
        "grouping": (1, 0x40),
        "compression": (1, 0x08),
        "encryption": (1, 0x04),
        "unsynchronisation": (1, 0x02),
        "data_length_indicator": (1, 0x01),
    },
}

# Flags that make a frame payload unreadable as plain text
OPAQUE_FRAME_FLAGS = (
    "compression",
    "encryption",
    "grouping",
    "unsynchronisation",
    "data_length_indicator",
)

# Text encoding indicator byte -> (codec, null terminator)
ENCODING_LATIN1 = 0
ENCODING_UTF16 = 1
ENCODING_UTF16BE = 2
ENCODING_UTF8 = 3

TEXT_ENCODINGS = {
    ENCODING_LATIN1: ("latin-1", b"\x00"),
    ENCODING_UTF16: ("utf-16", b"\x00\x00"),
    ENCODING_UTF16BE: ("utf-16-be", b"\x00\x00"),
    ENCODING_UTF8: ("utf-8", b"\x00"),
}

# UTF-16BE and UTF-8 were introduced with ID3v2.4
VERSION_ENCODINGS = {
    3: [ENCODING_LATIN1, ENCODING_UTF16],
    4: [ENCODING_LATIN1, ENCODING_UTF16, ENCODING_UTF16BE, ENCODING_UTF8],
}

FRAME_DESCRIPTIONS = {
    "AENC": "Audio encryption",
    "APIC": "Attached picture",
    "COMM": "Comments",
    "COMR": "Commercial frame",
    "ENCR": "Encryption method registration",
    "ETCO": "Event timing codes",
    "GEOB": "General encapsulated object",
    "GRID": "Group identification registration",
    "LINK": "Linked information",
    "MCDI": "Music CD identifier",
    "MLLT": "MPEG location lookup table",
    "OWNE": "Ownership frame",
    "PCNT": "Play counter",
    "POPM": "Popularimeter",
    "POSS": "Position synchronisation frame",
    "PRIV": "Private frame",
    "RBUF": "Recommended buffer size",
    "SYLT": "Synchronised lyric/text",
    "SYTC": "Synchronised tempo codes",
    "TALB": "Album/Movie/Show title",
    "TBPM": "BPM (beats per minute)",
    "TCOM": "Composer",
    "TCON": "Content type",
    "TCOP": "Copyright message",
    "TDAT": "Date",
    "TDRC": "Recording time",
    "TENC": "Encoded by",
    "TEXT": "Lyricist/Text writer",
    "TIT1": "Content group description",
    "TIT2": "Title/songname/content description",
    "TIT3": "Subtitle/Description refinement",
    "TKEY": "Initial key",
    "TLAN": "Language(s)",
    "TLEN": "Length",
    "TPE1": "Lead performer(s)/Soloist(s)",
    "TPE2": "Band/orchestra/accompaniment",
    "TPE3": "Conductor/performer refinement",
    "TPE4": "Interpreted, remixed, or otherwise modified by",
    "TPOS": "Part of a set",
    "TPUB": "Publisher",
    "TRCK": "Track number/Position in set",
    "TSSE": "Software/Hardware and settings used for encoding",
    "TXXX": "User defined text information frame",
    "TYER": "Year",
    "UFID": "Unique file identifier",
    "USER": "Terms of use",
    "USLT": "Unsynchronised lyric/text transcription",
    "WCOM": "Commercial information",
    "WOAR": "Official artist/performer webpage",
    "WXXX": "User defined URL link frame",
}
