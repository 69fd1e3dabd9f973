"""
app/domain package marker.
"""

from app.domain.dealer_inventory import (
    CrawlStartResult,
    CrawlStatus,
    CrawlSummary,
    DealerOutcome,
    DealerOutcomeStatus,
    DealerRecord,
    VehicleRecord,
)

__all__ = [
    "CrawlStartResult",
    "CrawlStatus",
    "CrawlSummary",
    "DealerOutcome",
    "DealerOutcomeStatus",
    "DealerRecord",
    "VehicleRecord",
]
