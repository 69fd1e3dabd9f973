"""
Config helpers for the inventory crawler.
"""

from app.crawler.config.loader import get_crawler_settings, resolve_data_path
from app.crawler.config.models import CrawlerSettings, RendererKind

__all__ = [
    "CrawlerSettings",
    "RendererKind",
    "get_crawler_settings",
    "resolve_data_path",
]
