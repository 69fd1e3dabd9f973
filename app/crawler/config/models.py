"""
Crawler configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass


class RendererKind:
    PLAYWRIGHT = "playwright"
    STATIC = "static"

    ALL = frozenset({PLAYWRIGHT, STATIC})


@dataclass(frozen=True)
class CrawlerSettings:
    """
    Runtime settings for discovery, extraction and crawl pacing.
    """

    roster_path: str
    catalog_path: str
    user_agent: str = "DealerInventoryCrawler/1.0 (+https://example.com/bot)"
    discovery_timeout_seconds: float = 10.0
    render_timeout_seconds: float = 30.0
    settle_delay_seconds: float = 3.0
    inter_dealer_delay_seconds: float = 2.0
    max_containers: int = 20
    max_retries: int = 0
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    renderer: str = RendererKind.PLAYWRIGHT
    headless: bool = True
