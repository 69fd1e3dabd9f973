"""
app/domain/dealer_inventory.py

Domain models for dealers, scraped vehicles and crawl outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class DealerRecord:
    """
    One dealer row from the roster.
    """

    brand: str
    name: str
    address: str = ""
    city: str = ""
    phone: str = ""
    website: str = ""
    validation_status: str = ""
    last_checked: str = ""

    @property
    def has_website(self) -> bool:
        return bool(self.website.strip())


@dataclass(frozen=True)
class VehicleRecord:
    """
    One vehicle listing extracted from a dealer inventory page.
    """

    dealer: str
    brand: str
    city: str
    make: str
    model: str
    year: str
    trim: str
    price: str
    stock: str
    scraped_at: datetime
    source_url: str


class DealerOutcomeStatus:
    SUCCESS = "success"
    NO_WEBSITE = "no_website"
    NO_INVENTORY_PAGE = "no_inventory_page"
    ERROR = "error"


@dataclass(frozen=True)
class DealerOutcome:
    """
    Result of processing one dealer during a crawl.

    Only `success` outcomes carry vehicles and an inventory URL; every other
    status carries an error message describing why the dealer was skipped.
    """

    dealer: str
    status: str
    vehicles: tuple[VehicleRecord, ...] = ()
    inventory_url: str | None = None
    error: str | None = None

    @classmethod
    def success(
        cls,
        *,
        dealer: str,
        vehicles: list[VehicleRecord] | tuple[VehicleRecord, ...],
        inventory_url: str,
    ) -> "DealerOutcome":
        return cls(
            dealer=dealer,
            status=DealerOutcomeStatus.SUCCESS,
            vehicles=tuple(vehicles),
            inventory_url=inventory_url,
        )

    @classmethod
    def no_website(cls, *, dealer: str) -> "DealerOutcome":
        return cls(
            dealer=dealer,
            status=DealerOutcomeStatus.NO_WEBSITE,
            error="No website URL provided",
        )

    @classmethod
    def no_inventory_page(cls, *, dealer: str) -> "DealerOutcome":
        return cls(
            dealer=dealer,
            status=DealerOutcomeStatus.NO_INVENTORY_PAGE,
            error="Could not find inventory page",
        )

    @classmethod
    def failed(cls, *, dealer: str, message: str) -> "DealerOutcome":
        return cls(dealer=dealer, status=DealerOutcomeStatus.ERROR, error=message)

    @property
    def is_success(self) -> bool:
        return self.status == DealerOutcomeStatus.SUCCESS


@dataclass(frozen=True)
class CrawlSummary:
    """
    Totals and ordered per-dealer outcomes for one finished crawl.
    """

    total_dealers: int
    success_count: int
    fail_count: int
    total_vehicles: int
    timestamp: datetime
    outcomes: tuple[DealerOutcome, ...] = field(default_factory=tuple)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class CrawlStartResult:
    """
    Answer to a crawl start request.
    """

    accepted: bool
    reason: str | None = None


@dataclass(frozen=True)
class CrawlStatus:
    """
    Point-in-time view of the crawl state.
    """

    in_progress: bool
    last_summary: CrawlSummary | None
    outcomes: tuple[DealerOutcome, ...]
    last_error: str | None
