"""Tests for settings.py module."""

import json
from pathlib import Path
from unittest.mock import patch

from table_explorer.constants import (
    APP_LABEL,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    MAX_RECENT_FILES,
)
from table_explorer.settings import AppSettings, default_settings_path


class TestAppSettings:
    """Test cases for AppSettings persistence."""

    def test_defaults_when_file_missing(self, tmp_path: Path) -> None:
        settings = AppSettings.load(tmp_path / "missing.json")
        assert settings.label == APP_LABEL
        assert settings.window_width == DEFAULT_WINDOW_WIDTH
        assert settings.recent_files == []

    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        settings = AppSettings(window_width=1024, last_directory="/data")
        settings.add_recent_file("/data/a.csv")
        settings.save(path)

        loaded = AppSettings.load(path)
        assert loaded == settings
        assert json.loads(path.read_text())["window_width"] == 1024

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"label": "Mine", "titles": ["a.csv"], "version": 0.1}))
        loaded = AppSettings.load(path)
        assert loaded.label == "Mine"
        assert loaded.window_width == DEFAULT_WINDOW_WIDTH

    def test_corrupt_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        with patch("table_explorer.settings.logger") as mock_logger:
            loaded = AppSettings.load(path)
        assert loaded == AppSettings()
        mock_logger.warning.assert_called_once()

    def test_non_object_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")
        assert AppSettings.load(path) == AppSettings()

    def test_wrong_types_keep_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps({"label": "Mine", "recent_files": None, "window_width": "wide", "window_height": -3}),
        )
        with patch("table_explorer.settings.logger") as mock_logger:
            loaded = AppSettings.load(path)

        assert loaded.label == "Mine"
        assert loaded.window_width == DEFAULT_WINDOW_WIDTH
        assert loaded.window_height == DEFAULT_WINDOW_HEIGHT
        assert loaded.recent_files == []
        assert mock_logger.warning.call_count == 3

        loaded.add_recent_file("/a/b.csv")
        assert loaded.recent_files == [str(Path("/a/b.csv"))]

    def test_recent_files_must_be_strings(self) -> None:
        assert AppSettings.from_dict({"recent_files": ["/a.csv", 3]}).recent_files == []
        assert AppSettings.from_dict({"window_width": True}).window_width == DEFAULT_WINDOW_WIDTH

    def test_save_failure_is_logged(self, tmp_path: Path) -> None:
        with patch("table_explorer.settings.logger") as mock_logger:
            AppSettings().save(tmp_path / "no_such_dir" / "settings.json")
        mock_logger.warning.assert_called_once()

    def test_recent_files_most_recent_first(self) -> None:
        settings = AppSettings()
        settings.add_recent_file("/a/one.csv")
        settings.add_recent_file("/b/two.csv")
        settings.add_recent_file("/a/one.csv")
        assert settings.recent_files == [str(Path("/a/one.csv")), str(Path("/b/two.csv"))]
        assert settings.last_directory == str(Path("/a"))

    def test_recent_files_capped(self) -> None:
        settings = AppSettings()
        for i in range(MAX_RECENT_FILES + 5):
            settings.add_recent_file(f"/data/file{i}.csv")
        assert len(settings.recent_files) == MAX_RECENT_FILES
        assert settings.recent_files[0].endswith(f"file{MAX_RECENT_FILES + 4}.csv")

    def test_default_path_in_home(self) -> None:
        assert default_settings_path().parent == Path.home()
