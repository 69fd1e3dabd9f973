"""
app/schemas package marker.
"""

from app.schemas.inventory_crawl import (
    CrawlStartRequest,
    CrawlStartResponse,
    CrawlStatusResponse,
    CrawlSummaryResponse,
    DealerOutcomeResponse,
    DealerResponse,
    DealerSearchRequest,
    StockResponse,
    VehicleResponse,
)

__all__ = [
    "CrawlStartRequest",
    "CrawlStartResponse",
    "CrawlStatusResponse",
    "CrawlSummaryResponse",
    "DealerOutcomeResponse",
    "DealerResponse",
    "DealerSearchRequest",
    "StockResponse",
    "VehicleResponse",
]
