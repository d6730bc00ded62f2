"""Tests for environment-driven settings."""

from leanquery.settings import LeanQuerySettings

ENV_KEYS = (
    "LEANCLOUD_APP_ID",
    "LEANCLOUD_APP_KEY",
    "LEANCLOUD_API_SERVER",
    "LEANCLOUD_API_VERSION",
    "LEANCLOUD_REQUEST_TIMEOUT",
    "LOG_LEVEL",
)


def test_defaults(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    config = LeanQuerySettings(_env_file=None)
    assert config.LEANCLOUD_APP_ID is None
    assert config.LEANCLOUD_API_SERVER is None
    assert config.LEANCLOUD_API_VERSION == "1.1"
    assert config.LEANCLOUD_REQUEST_TIMEOUT == 30.0
    assert config.LOG_LEVEL == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LEANCLOUD_API_SERVER", "https://api.example.com")
    monkeypatch.setenv("LEANCLOUD_REQUEST_TIMEOUT", "5")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    config = LeanQuerySettings(_env_file=None)
    assert config.LEANCLOUD_API_SERVER == "https://api.example.com"
    assert config.LEANCLOUD_REQUEST_TIMEOUT == 5.0
    assert config.LOG_LEVEL == "DEBUG"


def test_env_file(tmp_path, monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("LEANCLOUD_APP_ID=from-file\nUNRELATED=1\n", encoding="utf-8")
    config = LeanQuerySettings(_env_file=env_file)
    assert config.LEANCLOUD_APP_ID == "from-file"
