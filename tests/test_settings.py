from pathlib import Path

from app.settings import Settings, choose_env_file


def test_defaults_select_filesystem_provider():
    s = Settings(_env_file=None)
    assert s.CONTENT_PROVIDER == "filesystem"
    assert s.STRAPI_URL == "http://localhost:1337"
    assert s.CONTENTFUL_ENVIRONMENT == "master"
    assert s.CONTENTFUL_BASE_URL == "https://cdn.contentful.com"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("CONTENT_PROVIDER", "contentful")
    monkeypatch.setenv("CONTENTFUL_SPACE_ID", "space")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "2.5")

    s = Settings(_env_file=None)

    assert s.CONTENT_PROVIDER == "contentful"
    assert s.CONTENTFUL_SPACE_ID == "space"
    assert s.HTTP_TIMEOUT_SECONDS == 2.5


def test_choose_env_file_prefers_env_local(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: str(self) == ".env.local")
    assert choose_env_file() == ".env.local"


def test_choose_env_file_falls_back(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert choose_env_file() == ".env"
