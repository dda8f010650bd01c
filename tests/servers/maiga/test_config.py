from __future__ import annotations

import pytest
from pydantic import ValidationError

from servers.maiga.config import DEFAULT_BASE_URL, MaigaSettings


def test_api_token_is_required(monkeypatch):
    monkeypatch.delenv("MAIGA_API_TOKEN", raising=False)

    with pytest.raises(ValidationError):
        MaigaSettings()


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("MAIGA_API_TOKEN", "env-token")
    monkeypatch.setenv("MAIGA_DEBUG", "true")
    monkeypatch.setenv("MAIGA_LOG_LEVEL", "debug")

    settings = MaigaSettings()

    assert settings.api_token == "env-token"
    assert settings.debug is True
    assert settings.log_level == "DEBUG"
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.transport_type == "stdio"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        MaigaSettings(api_token="t", log_level="chatty")


def test_settings_are_read_only():
    settings = MaigaSettings(api_token="t")

    with pytest.raises(ValidationError):
        settings.api_token = "other"
