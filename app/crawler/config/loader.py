"""
Environment-driven settings loader for the inventory crawler.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from app.config import load_env_files, project_root
from app.crawler.config.models import CrawlerSettings, RendererKind


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    stripped = raw.strip()
    return stripped if stripped else default


def resolve_data_path(raw_path: str) -> Path:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return (project_root() / candidate).resolve()


def _renderer_kind(raw: str) -> str:
    normalized = raw.strip().lower()
    if normalized in RendererKind.ALL:
        return normalized
    return RendererKind.PLAYWRIGHT


@lru_cache(maxsize=1)
def get_crawler_settings() -> CrawlerSettings:
    """
    Return cached crawler settings from environment variables.
    """

    load_env_files()
    return CrawlerSettings(
        roster_path=str(resolve_data_path(_get_str_env("CRAWLER_ROSTER_PATH", "data/dealers.csv"))),
        catalog_path=str(resolve_data_path(_get_str_env("CRAWLER_CATALOG_PATH", "data/stock.csv"))),
        user_agent=_get_str_env(
            "CRAWLER_USER_AGENT",
            "DealerInventoryCrawler/1.0 (+https://example.com/bot)",
        ),
        discovery_timeout_seconds=max(
            1.0,
            _get_float_env("CRAWLER_DISCOVERY_TIMEOUT_SECONDS", 10.0),
        ),
        render_timeout_seconds=max(
            1.0,
            _get_float_env("CRAWLER_RENDER_TIMEOUT_SECONDS", 30.0),
        ),
        settle_delay_seconds=max(
            0.0,
            _get_float_env("CRAWLER_SETTLE_DELAY_SECONDS", 3.0),
        ),
        inter_dealer_delay_seconds=max(
            0.0,
            _get_float_env("CRAWLER_INTER_DEALER_DELAY_SECONDS", 2.0),
        ),
        max_containers=max(
            1,
            _get_int_env("CRAWLER_MAX_CONTAINERS", 20),
        ),
        max_retries=max(
            0,
            _get_int_env("CRAWLER_MAX_RETRIES", 0),
        ),
        backoff_initial_seconds=max(
            0.1,
            _get_float_env("CRAWLER_BACKOFF_INITIAL_SECONDS", 0.5),
        ),
        backoff_multiplier=max(
            1.0,
            _get_float_env("CRAWLER_BACKOFF_MULTIPLIER", 2.0),
        ),
        renderer=_renderer_kind(_get_str_env("CRAWLER_RENDERER", RendererKind.PLAYWRIGHT)),
        headless=_get_bool_env("CRAWLER_HEADLESS", True),
    )
