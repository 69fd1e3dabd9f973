"""
app/services package marker.
"""

from app.services.dealer_directory_service import (
    DealerDirectoryService,
    get_dealer_directory_service,
)
from app.services.inventory_crawl_service import (
    FastAPIBackgroundTaskExecutor,
    build_crawl_orchestrator,
    get_catalog_storage,
    get_crawl_orchestrator,
)

__all__ = [
    "DealerDirectoryService",
    "FastAPIBackgroundTaskExecutor",
    "build_crawl_orchestrator",
    "get_catalog_storage",
    "get_crawl_orchestrator",
    "get_dealer_directory_service",
]
