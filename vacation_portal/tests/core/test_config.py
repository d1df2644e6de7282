"""Tests for the environment-driven settings."""
import pytest

from vacation_portal.core.config import Settings


def cors_origins(settings: Settings) -> list[str]:
    return [str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS]


@pytest.mark.parametrize("raw", [
    "http://a.com,http://b.com",
    " http://a.com , http://b.com ,",
    '["http://a.com", "http://b.com"]',
])
def test_cors_origins_from_environment(monkeypatch, raw):
    monkeypatch.setenv("BACKEND_CORS_ORIGINS", raw)

    assert cors_origins(Settings()) == ["http://a.com", "http://b.com"]


def test_cors_origins_default_to_none(monkeypatch):
    monkeypatch.delenv("BACKEND_CORS_ORIGINS", raising=False)

    assert Settings().BACKEND_CORS_ORIGINS == []


def test_api_url_loses_trailing_slash(monkeypatch):
    monkeypatch.setenv("API_URL", "http://backend:8080/api/")

    assert Settings().API_URL == "http://backend:8080/api"
