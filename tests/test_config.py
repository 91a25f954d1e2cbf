"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from fskit import config
from fskit.config import FilesystemSettings, load_settings, parse_mode


class TestFilesystemSettings:
    """Tests for FilesystemSettings model."""

    def test_default_values(self) -> None:
        """Test FilesystemSettings has correct defaults."""
        settings = FilesystemSettings()
        assert settings.directory_mode == 0o755
        assert settings.encoding == "utf-8"

    def test_octal_string_mode(self) -> None:
        """Test octal strings are accepted for the mode."""
        assert FilesystemSettings(directory_mode="0700").directory_mode == 0o700
        assert FilesystemSettings(directory_mode="0o750").directory_mode == 0o750

    def test_alias(self) -> None:
        """Test the camelCase alias is accepted."""
        assert FilesystemSettings(directoryMode=0o700).directory_mode == 0o700

    def test_mode_out_of_range(self) -> None:
        """Test modes beyond the permission bits are rejected."""
        with pytest.raises(ValueError):
            FilesystemSettings(directory_mode=0o17777)

    def test_unknown_encoding(self) -> None:
        """Test an unknown codec is rejected."""
        with pytest.raises(ValueError):
            FilesystemSettings(encoding="no-such-codec")

    def test_from_file(self, tmp_path: Path) -> None:
        """Test loading settings from YAML."""
        path = tmp_path / "config.yaml"
        path.write_text("directoryMode: '0700'\nencoding: latin-1\n")

        settings = FilesystemSettings.from_file(path)

        assert settings.directory_mode == 0o700
        assert settings.encoding == "latin-1"

    def test_from_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file yields defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert FilesystemSettings.from_file(path) == FilesystemSettings()

    def test_from_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            FilesystemSettings.from_file(tmp_path / "missing.yaml")

    def test_from_invalid_yaml(self, tmp_path: Path) -> None:
        """Test malformed YAML raises ValueError."""
        path = tmp_path / "config.yaml"
        path.write_text("encoding: [unclosed\n")
        with pytest.raises(ValueError):
            FilesystemSettings.from_file(path)

    def test_from_non_mapping(self, tmp_path: Path) -> None:
        """Test a YAML list is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            FilesystemSettings.from_file(path)


class TestParseMode:
    """Tests for parse_mode."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("755", 0o755), ("0644", 0o644), ("0o700", 0o700), (" 600 ", 0o600)],
    )
    def test_valid(self, text: str, expected: int) -> None:
        """Test octal spellings."""
        assert parse_mode(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "888"])
    def test_invalid(self, text: str) -> None:
        """Test non-octal input raises ValueError."""
        with pytest.raises(ValueError):
            parse_mode(text)


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test built-in defaults when no default file exists."""
        monkeypatch.setattr(config, "CONFIG_FILE", tmp_path / "missing.yaml")
        assert load_settings() == FilesystemSettings()

    def test_default_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the default file is used when present."""
        path = tmp_path / "config.yaml"
        path.write_text("encoding: ascii\n")
        monkeypatch.setattr(config, "CONFIG_FILE", path)
        assert load_settings().encoding == "ascii"

    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        """Test an explicit path must exist."""
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")
