"""CLI command implementations.

Each module in this package implements a specific id3tag subcommand:
    inspect.py: Show the tag header and frame table
    dump.py: Print every frame as text
    set.py: Edit text frames and write the file back
    strip.py: Remove the tag
"""

from .inspect import cmd_inspect
from .dump import cmd_dump
from .set import cmd_set
from .strip import cmd_strip

__all__ = [
    "cmd_inspect",
    "cmd_dump",
    "cmd_set",
    "cmd_strip",
]
