"""
tests/test_crawler_config.py

Pytest unit tests for environment-driven crawler settings.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from app.crawler.config import RendererKind, get_crawler_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_crawler_settings.cache_clear()
    yield
    get_crawler_settings.cache_clear()


def test_defaults(monkeypatch) -> None:
    for name in (
        "CRAWLER_ROSTER_PATH",
        "CRAWLER_DISCOVERY_TIMEOUT_SECONDS",
        "CRAWLER_MAX_CONTAINERS",
        "CRAWLER_MAX_RETRIES",
        "CRAWLER_RENDERER",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_crawler_settings()

    assert Path(settings.roster_path).parts[-2:] == ("data", "dealers.csv")
    assert settings.discovery_timeout_seconds == 10.0
    assert settings.max_containers == 20
    assert settings.max_retries == 0
    assert settings.renderer == RendererKind.PLAYWRIGHT


def test_environment_overrides_are_clamped(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("CRAWLER_ROSTER_PATH", str(tmp_path / "roster.csv"))
    monkeypatch.setenv("CRAWLER_MAX_CONTAINERS", "0")
    monkeypatch.setenv("CRAWLER_INTER_DEALER_DELAY_SECONDS", "-3")
    monkeypatch.setenv("CRAWLER_RENDERER", "STATIC")
    monkeypatch.setenv("CRAWLER_HEADLESS", "false")

    settings = get_crawler_settings()

    assert settings.roster_path == str(tmp_path / "roster.csv")
    assert settings.max_containers == 1
    assert settings.inter_dealer_delay_seconds == 0.0
    assert settings.renderer == RendererKind.STATIC
    assert settings.headless is False


def test_unparseable_values_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("CRAWLER_MAX_RETRIES", "lots")
    monkeypatch.setenv("CRAWLER_RENDERER", "netscape")

    settings = get_crawler_settings()

    assert settings.max_retries == 0
    assert settings.renderer == RendererKind.PLAYWRIGHT
