"""
app/services/inventory_crawl_service.py

Service wiring for the dealer inventory crawl and the vehicle catalog.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache
from typing import Any

import requests
from fastapi import BackgroundTasks

from app.crawler.config import CrawlerSettings, get_crawler_settings
from app.crawler.discovery import PageDiscovery
from app.crawler.extractor import ListingExtractor
from app.crawler.orchestrator import CrawlOrchestrator
from app.crawler.rendering import build_renderer
from app.crawler.storage import CatalogStorage, CsvCatalogStorage
from app.crawler.throttle import DealerThrottle
from app.services.dealer_directory_service import get_dealer_directory_service


class FastAPIBackgroundTaskExecutor:
    def __init__(self, background_tasks: BackgroundTasks) -> None:
        self._background_tasks = background_tasks

    def submit(self, task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        self._background_tasks.add_task(task, *args, **kwargs)


def build_catalog_storage(settings: CrawlerSettings) -> CatalogStorage:
    return CsvCatalogStorage(path=settings.catalog_path)


def build_crawl_orchestrator(settings: CrawlerSettings) -> CrawlOrchestrator:
    """
    Assemble the orchestrator with production collaborators.
    """

    session = requests.Session()
    return CrawlOrchestrator(
        roster=get_dealer_directory_service(),
        discovery=PageDiscovery(settings=settings, session=session),
        extractor=ListingExtractor(
            settings=settings,
            renderer=build_renderer(settings=settings, session=session),
        ),
        storage=build_catalog_storage(settings),
        throttle=DealerThrottle(delay_seconds=settings.inter_dealer_delay_seconds),
    )


@lru_cache(maxsize=1)
def get_crawl_orchestrator() -> CrawlOrchestrator:
    """
    Process-wide orchestrator; its state is the single crawl state.
    """

    return build_crawl_orchestrator(get_crawler_settings())


@lru_cache(maxsize=1)
def get_catalog_storage() -> CatalogStorage:
    return build_catalog_storage(get_crawler_settings())
