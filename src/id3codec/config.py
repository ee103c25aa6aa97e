"""Configuration management for id3codec.

Settings live in a TOML file (``~/.id3codec/config.toml``) and are merged
over ``Config.DEFAULT_CONFIG``, so a partial file only overrides what it
mentions.
"""

import copy
import logging
import tomllib
from pathlib import Path
from typing import Dict, Any, Optional

import tomli_w

from .constants import SUPPORTED_VERSIONS, TEXT_ENCODINGS


def get_config_dir() -> Path:
    """Get the configuration directory.

    Returns:
        Path to config directory (~/.id3codec on all platforms)
    """
    return Path.home() / ".id3codec"


def get_config_path() -> Path:
    """Get the full path to the config file."""
    return get_config_dir() / "config.toml"


class Config:
    """Configuration manager for codec and CLI settings."""

    DEFAULT_CONFIG: Dict[str, Any] = {
        "codec": {
            # Major version for tags created from scratch: 3 or 4
            "default_version": 4,
            # Encoding indicator for new text frames:
            # 0 = latin-1, 1 = UTF-16 with BOM, 2 = UTF-16BE, 3 = UTF-8
            # UTF-16BE and UTF-8 only exist in v2.4; v2.3 tags fall back to UTF-16
            "default_text_encoding": 3,
        },
        "display": {
            # Longest frame value shown by `id3tag inspect` before truncation
            "max_value_width": 60,
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_path: TOML file to use instead of the default location
        """
        self.config_path = Path(config_path) if config_path is not None else get_config_path()
        self.data: Dict[str, Any] = copy.deepcopy(self.DEFAULT_CONFIG)
        self._dirty = False
        self.load()

    def load(self) -> bool:
        """Load configuration from file.

        Returns:
            True if loaded successfully, False if file doesn't exist or error occurred
        """
        if not self.config_path.exists():
            return False

        try:
            with open(self.config_path, "rb") as f:
                loaded_data = tomllib.load(f)
            self._merge_config(self.data, loaded_data)
            self._dirty = False
            return True
        except (OSError, tomllib.TOMLDecodeError) as e:
            logging.error(f"Error loading config {self.config_path}: {e}")
            return False

    def save(self, force: bool = False) -> bool:
        """Save configuration to file.

        Args:
            force: If True, save even if config hasn't been modified

        Returns:
            True if saved successfully, False otherwise
        """
        if not force and not self._dirty:
            return True

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "wb") as f:
                tomli_w.dump(self.data, f)
            self._dirty = False
            return True
        except OSError as e:
            logging.error(f"Error saving config {self.config_path}: {e}")
            return False

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        """Recursively merge override dict into base dict."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def is_dirty(self) -> bool:
        return self._dirty

    # Codec settings
    def get_default_version(self) -> int:
        """Get the major version used for new tags (defaults to 4)."""
        return self.data.get("codec", {}).get("default_version", 4)

    def set_default_version(self, version: int) -> None:
        """Set the major version used for new tags.

        Raises:
            ValueError: If the version is not 3 or 4
        """
        if version not in SUPPORTED_VERSIONS:
            raise ValueError(f"Unsupported ID3v2 version: {version}")
        self.data.setdefault("codec", {})["default_version"] = version
        self._dirty = True

    def get_text_encoding(self) -> int:
        return self.data.get("codec", {}).get("default_text_encoding", 3)

    def set_text_encoding(self, encoding: int) -> None:
        """Set the encoding indicator for new text frames.

        Raises:
            ValueError: If the indicator is not 0-3
        """
        if encoding not in TEXT_ENCODINGS:
            raise ValueError(f"Unknown text encoding indicator: {encoding}")
        self.data.setdefault("codec", {})["default_text_encoding"] = encoding
        self._dirty = True

    # Display settings
    def get_max_value_width(self) -> int:
        return self.data.get("display", {}).get("max_value_width", 60)

    def set_max_value_width(self, width: int) -> None:
        if width < 10:
            raise ValueError("Display width must be at least 10 characters")
        self.data.setdefault("display", {})["max_value_width"] = width
        self._dirty = True
