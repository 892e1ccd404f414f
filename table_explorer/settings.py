"""Persisted application state, stored as JSON in the user's home directory."""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from .constants import (
    APP_LABEL,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    MAX_RECENT_FILES,
    SETTINGS_FILE_NAME,
)

logger = logging.getLogger(__name__)


def default_settings_path() -> Path:
    return Path.home() / SETTINGS_FILE_NAME


def _valid_value(value: Any, default: Any) -> bool:
    if isinstance(value, bool) and not isinstance(default, bool):
        return False
    if isinstance(default, list):
        return isinstance(value, list) and all(isinstance(item, str) for item in value)
    if isinstance(default, int):
        return isinstance(value, int) and value > 0
    return isinstance(value, type(default))


@dataclass
class AppSettings:
    """State restored on startup and saved on shutdown.

    Unknown keys in the file are ignored and missing keys keep their
    defaults, so files written by older versions still load.
    """

    label: str = APP_LABEL
    window_width: int = DEFAULT_WINDOW_WIDTH
    window_height: int = DEFAULT_WINDOW_HEIGHT
    last_directory: str = ""
    recent_files: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppSettings":
        """Build settings from ``data``; values of the wrong type keep their defaults."""
        defaults = cls()
        values = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if _valid_value(value, getattr(defaults, f.name)):
                values[f.name] = value
            else:
                logger.warning("Ignoring setting %s=%r, keeping the default", f.name, value)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def add_recent_file(self, path: str | Path) -> None:
        """Move ``path`` to the front of the recent files list."""
        path_str = str(Path(path))
        if path_str in self.recent_files:
            self.recent_files.remove(path_str)
        self.recent_files.insert(0, path_str)
        del self.recent_files[MAX_RECENT_FILES:]
        self.last_directory = str(Path(path_str).parent)

    @classmethod
    def load(cls, path: Path | None = None) -> "AppSettings":
        """Load settings from file, falling back to defaults."""
        path = path or default_settings_path()
        if not path.exists():
            return cls()
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("settings file does not contain an object")
            return cls.from_dict(data)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Error loading settings from %s: %s", path, e)
            return cls()

    def save(self, path: Path | None = None) -> None:
        """Save settings to file. Failures are logged, not raised."""
        path = path or default_settings_path()
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            logger.warning("Error saving settings to %s: %s", path, e)
