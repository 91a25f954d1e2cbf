"""Settings for filesystem implementations."""

from __future__ import annotations

import codecs
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fskit.protocols import DEFAULT_DIRECTORY_MODE

# Default settings location
CONFIG_DIR = Path.home() / ".fskit"
CONFIG_FILE = CONFIG_DIR / "config.yaml"


class FilesystemSettings(BaseModel):
    """Tunable behavior shared by all filesystem implementations."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    directory_mode: int = Field(default=DEFAULT_DIRECTORY_MODE, alias="directoryMode")
    encoding: str = "utf-8"

    @field_validator("directory_mode", mode="before")
    @classmethod
    def _parse_mode(cls, value: Any) -> Any:
        """Accept octal strings such as "0755" or "0o755"."""
        if isinstance(value, str):
            return parse_mode(value)
        return value

    @field_validator("directory_mode")
    @classmethod
    def _check_mode(cls, value: int) -> int:
        if not 0 <= value <= 0o7777:
            raise ValueError(f"Permission mode out of range: {oct(value)}")
        return value

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value}") from e
        return value

    @classmethod
    def from_file(cls, path: Path) -> FilesystemSettings:
        """Load settings from a YAML file.

        Args:
            path: Path to the settings file.

        Returns:
            Parsed FilesystemSettings.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If the YAML or any value is invalid.
        """
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {path} must contain a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid settings in {path}: {e}") from e


def parse_mode(value: str) -> int:
    """Parse an octal permission mode string.

    Args:
        value: Mode such as "755", "0755" or "0o755".

    Returns:
        Numeric mode.

    Raises:
        ValueError: If the string is not an octal number.
    """
    text = value.strip().lower()
    if text.startswith("0o"):
        text = text[2:]
    try:
        return int(text, 8)
    except ValueError as e:
        raise ValueError(f"Invalid octal mode: {value!r}") from e


def load_settings(path: Path | None = None) -> FilesystemSettings:
    """Load settings from ``path`` or the default location.

    An explicit path must exist. Without one, the default file is used when
    present and built-in defaults otherwise.

    Args:
        path: Optional settings file.

    Returns:
        Loaded FilesystemSettings.
    """
    if path is not None:
        return FilesystemSettings.from_file(path)
    if CONFIG_FILE.exists():
        return FilesystemSettings.from_file(CONFIG_FILE)
    return FilesystemSettings()
