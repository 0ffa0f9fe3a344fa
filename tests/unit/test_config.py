"""
Test Configuration Loading
"""

import pytest
from pydantic import ValidationError

from haste.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.PORT == 7777
    assert settings.STORAGE_TYPE == "file"
    assert settings.KEY_LENGTH == 10
    assert settings.KEY_GENERATOR == "phonetic"
    assert settings.MAX_LENGTH == 400000
    assert settings.EXPIRE_SECONDS is None
    assert settings.DOCUMENTS == {}


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STORAGE_TYPE", "redis")
    monkeypatch.setenv("KEY_LENGTH", "6")
    monkeypatch.setenv("EXPIRE_SECONDS", "3600")
    monkeypatch.setenv("DOCUMENTS", '{"about": "./about.md"}')

    settings = Settings(_env_file=None)

    assert settings.STORAGE_TYPE == "redis"
    assert settings.KEY_LENGTH == 6
    assert settings.EXPIRE_SECONDS == 3600
    assert settings.DOCUMENTS == {"about": "./about.md"}


def test_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("STORAGE_TYPE=memory\nMAX_LENGTH=50\n", encoding="utf-8")

    settings = Settings(_env_file=str(env_file))

    assert settings.STORAGE_TYPE == "memory"
    assert settings.MAX_LENGTH == 50


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, KEY_LENGTH=0)

    with pytest.raises(ValidationError):
        Settings(_env_file=None, STORAGE_TYPE="memcached")
