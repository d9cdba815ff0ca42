"""
User settings stored in ~/.drop/settings.json.

The file is a flat JSON object. Every key is optional; the GITHUB_TOKEN
environment variable takes precedence over the stored token.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from constants import DEFAULT_TIMEOUT
from core.exceptions import FileReadError, FileWriteError

CONFIG_DIR = Path.home() / ".drop"
CONFIG_FILE = CONFIG_DIR / "settings.json"

SETTINGS_KEYS = ("github_token", "download_path", "timeout")


@dataclass
class Settings:
    github_token: str = ""
    download_path: str = "."
    timeout: int = DEFAULT_TIMEOUT


def get_config_file(path: Path = CONFIG_FILE) -> dict[str, Any]:
    """
    Read the settings file.

    Returns:
        The stored settings, or an empty dict if the file does not exist.

    Raises:
        FileReadError: If the file cannot be read or is not a JSON object.
    """
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise FileReadError(
            message=f"Failed to read settings file: {path}",
            file_path=str(path),
            original_exception=e,
        ) from e

    if not isinstance(data, dict):
        raise FileReadError(
            message=f"Settings file is not a JSON object: {path}",
            file_path=str(path),
        )
    return data


def save_config(data: dict[str, Any], path: Path = CONFIG_FILE) -> None:
    """
    Write the settings file, creating its directory if needed.

    Raises:
        FileWriteError: If the directory or the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    except OSError as e:
        raise FileWriteError(
            message=f"Failed to write settings file: {path}",
            file_path=str(path),
            original_exception=e,
        ) from e


def load_settings(path: Path = CONFIG_FILE) -> Settings:
    """Merge the settings file, the environment and the defaults."""
    config = get_config_file(path)
    settings = Settings()

    if config.get("github_token"):
        settings.github_token = str(config["github_token"])
    if config.get("download_path"):
        settings.download_path = str(config["download_path"])
    if config.get("timeout"):
        try:
            settings.timeout = int(config["timeout"])
        except (TypeError, ValueError):
            settings.timeout = DEFAULT_TIMEOUT

    token = os.environ.get("GITHUB_TOKEN")
    if token:
        settings.github_token = token

    return settings
