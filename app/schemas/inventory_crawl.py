"""
app/schemas/inventory_crawl.py

Request and response schemas for dealer search, crawl control and stock.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.dealer_inventory import CrawlSummary, DealerOutcome, DealerRecord, VehicleRecord


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class DealerSearchRequest(BaseModel):
    brand: str | None = None


class DealerResponse(_CamelModel):
    brand: str
    name: str
    address: str
    city: str
    phone: str
    website: str
    validation_status: str = Field(alias="validationStatus")
    last_checked: str = Field(alias="lastChecked")

    @classmethod
    def from_domain(cls, dealer: DealerRecord) -> "DealerResponse":
        return cls(
            brand=dealer.brand,
            name=dealer.name,
            address=dealer.address,
            city=dealer.city,
            phone=dealer.phone,
            website=dealer.website,
            validation_status=dealer.validation_status,
            last_checked=dealer.last_checked,
        )


class CrawlStartRequest(_CamelModel):
    max_dealers: int | None = Field(default=None, ge=1, alias="maxDealers")


class CrawlStartResponse(_CamelModel):
    message: str
    in_progress: bool = Field(alias="inProgress")


class VehicleResponse(_CamelModel):
    dealer: str
    brand: str
    city: str
    make: str
    model: str
    year: str
    trim: str
    price: str
    stock: str
    scraped_at: datetime = Field(alias="scrapedAt")
    source_url: str = Field(alias="sourceUrl")

    @classmethod
    def from_domain(cls, vehicle: VehicleRecord) -> "VehicleResponse":
        return cls(
            dealer=vehicle.dealer,
            brand=vehicle.brand,
            city=vehicle.city,
            make=vehicle.make,
            model=vehicle.model,
            year=vehicle.year,
            trim=vehicle.trim,
            price=vehicle.price,
            stock=vehicle.stock,
            scraped_at=vehicle.scraped_at,
            source_url=vehicle.source_url,
        )


class DealerOutcomeResponse(_CamelModel):
    dealer: str
    status: str
    count: int = Field(..., ge=0)
    vehicles: list[VehicleResponse] = Field(default_factory=list)
    inventory_url: str | None = Field(default=None, alias="inventoryUrl")
    error: str | None = None

    @classmethod
    def from_domain(cls, outcome: DealerOutcome) -> "DealerOutcomeResponse":
        return cls(
            dealer=outcome.dealer,
            status=outcome.status,
            count=len(outcome.vehicles),
            vehicles=[VehicleResponse.from_domain(vehicle) for vehicle in outcome.vehicles],
            inventory_url=outcome.inventory_url,
            error=outcome.error,
        )


class CrawlSummaryResponse(_CamelModel):
    total_dealers: int = Field(..., ge=0, alias="totalDealers")
    success_count: int = Field(..., ge=0, alias="successCount")
    fail_count: int = Field(..., ge=0, alias="failCount")
    total_vehicles: int = Field(..., ge=0, alias="totalVehicles")
    timestamp: datetime
    error: str | None = None
    results: list[DealerOutcomeResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, summary: CrawlSummary) -> "CrawlSummaryResponse":
        return cls(
            total_dealers=summary.total_dealers,
            success_count=summary.success_count,
            fail_count=summary.fail_count,
            total_vehicles=summary.total_vehicles,
            timestamp=summary.timestamp,
            error=summary.error,
            results=[DealerOutcomeResponse.from_domain(outcome) for outcome in summary.outcomes],
        )


class CrawlStatusResponse(_CamelModel):
    in_progress: bool = Field(alias="inProgress")
    last_results: list[DealerOutcomeResponse] = Field(default_factory=list, alias="lastResults")
    last_summary: CrawlSummaryResponse | None = Field(default=None, alias="lastSummary")
    last_error: str | None = Field(default=None, alias="lastError")
    total_dealers: int = Field(..., ge=0, alias="totalDealers")


class StockResponse(_CamelModel):
    total_vehicles: int = Field(..., ge=0, alias="totalVehicles")
    vehicles: list[VehicleResponse] = Field(default_factory=list)
    last_updated: datetime | None = Field(default=None, alias="lastUpdated")
