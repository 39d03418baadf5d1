"""Tests for environment-driven settings."""

import pytest

from itinerary_planner.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_without_credential(monkeypatch):
    for name in ("GROQ_API_KEY", "GROQ_BASE_URL", "REQUEST_TIMEOUT_MS", "ITINERARY_STRICT_DAYS"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.groq_api_key is None
    assert settings.groq_base_url == DEFAULT_BASE_URL
    assert settings.request_timeout_ms == DEFAULT_TIMEOUT_MS
    assert settings.request_timeout == 60.0
    assert settings.strict_days is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk_test")
    monkeypatch.setenv("GROQ_BASE_URL", "http://localhost:8080/v1/")
    monkeypatch.setenv("REQUEST_TIMEOUT_MS", "1500")
    monkeypatch.setenv("ITINERARY_STRICT_DAYS", "true")

    settings = get_settings()

    assert settings.groq_api_key == "gsk_test"
    assert settings.groq_base_url == "http://localhost:8080/v1"
    assert settings.request_timeout == 1.5
    assert settings.strict_days is True


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_bad_timeout_falls_back_to_default(monkeypatch, raw):
    monkeypatch.setenv("REQUEST_TIMEOUT_MS", raw)
    assert get_settings().request_timeout_ms == DEFAULT_TIMEOUT_MS
