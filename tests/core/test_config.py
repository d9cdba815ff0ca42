"""
Tests for the settings file.

Tests cover:
- get_config_file: missing, valid and malformed files
- save_config: directory creation and write failures
- load_settings: defaults, file values and the GITHUB_TOKEN override
"""

import json

import pytest

from constants import DEFAULT_TIMEOUT
from core.config import Settings, get_config_file, load_settings, save_config
from core.exceptions import FileReadError, FileWriteError


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / ".drop" / "settings.json"


@pytest.fixture(autouse=True)
def no_env_token(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


# ============================================================================
# Tests for get_config_file / save_config
# ============================================================================


@pytest.mark.unit
def test_get_config_file_missing(config_path):
    assert get_config_file(config_path) == {}


@pytest.mark.unit
def test_save_and_read_config(config_path):
    """Saving creates the directory and the file is read back as written."""
    save_config({"download_path": "/tmp/bin", "timeout": 60}, config_path)

    assert config_path.exists()
    assert get_config_file(config_path) == {"download_path": "/tmp/bin", "timeout": 60}


@pytest.mark.unit
def test_get_config_file_malformed(config_path):
    config_path.parent.mkdir(parents=True)
    config_path.write_text("{not json")

    with pytest.raises(FileReadError) as exc_info:
        get_config_file(config_path)

    assert exc_info.value.file_path == str(config_path)
    assert isinstance(exc_info.value.original_exception, json.JSONDecodeError)


@pytest.mark.unit
def test_get_config_file_not_an_object(config_path):
    config_path.parent.mkdir(parents=True)
    config_path.write_text("[1, 2]")

    with pytest.raises(FileReadError, match="not a JSON object"):
        get_config_file(config_path)


@pytest.mark.unit
def test_save_config_write_failure(tmp_path):
    """A file where the directory should be makes the write fail."""
    blocker = tmp_path / ".drop"
    blocker.write_text("")

    with pytest.raises(FileWriteError) as exc_info:
        save_config({"timeout": 1}, blocker / "settings.json")

    assert exc_info.value.original_exception is not None


# ============================================================================
# Tests for load_settings
# ============================================================================


@pytest.mark.unit
def test_load_settings_defaults(config_path):
    assert load_settings(config_path) == Settings(
        github_token="", download_path=".", timeout=DEFAULT_TIMEOUT
    )


@pytest.mark.unit
def test_load_settings_from_file(config_path):
    save_config(
        {"github_token": "ghp_file", "download_path": "/opt/bin", "timeout": "120"},
        config_path,
    )

    settings = load_settings(config_path)

    assert settings.github_token == "ghp_file"
    assert settings.download_path == "/opt/bin"
    assert settings.timeout == 120


@pytest.mark.unit
def test_load_settings_environment_token_wins(config_path, monkeypatch):
    save_config({"github_token": "ghp_file"}, config_path)
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_env")

    assert load_settings(config_path).github_token == "ghp_env"


@pytest.mark.unit
def test_load_settings_bad_timeout_uses_default(config_path):
    save_config({"timeout": "soon"}, config_path)
    assert load_settings(config_path).timeout == DEFAULT_TIMEOUT
