"""
app/api/routers/inventory_crawl.py

Dealer search, crawl control and vehicle stock endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from app.crawler.orchestrator import CrawlOrchestrator
from app.crawler.storage import CatalogStorage
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
from app.services.dealer_directory_service import (
    DealerDirectoryService,
    get_dealer_directory_service,
)
from app.services.inventory_crawl_service import (
    FastAPIBackgroundTaskExecutor,
    get_catalog_storage,
    get_crawl_orchestrator,
)

router = APIRouter(tags=["inventory-crawl"])


@router.post("/search", response_model=list[DealerResponse])
def search_dealers(
    payload: DealerSearchRequest,
    directory: DealerDirectoryService = Depends(get_dealer_directory_service),
) -> list[DealerResponse]:
    """
    Find dealers by brand substring.
    """

    return [DealerResponse.from_domain(dealer) for dealer in directory.search(payload.brand)]


@router.get("/brands", response_model=list[str])
def list_brands(
    directory: DealerDirectoryService = Depends(get_dealer_directory_service),
) -> list[str]:
    """
    Distinct dealer brands, sorted, for search suggestions.
    """

    return directory.brands()


@router.post(
    "/scrape/start",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=CrawlStartResponse,
)
def start_scrape(
    background_tasks: BackgroundTasks,
    payload: CrawlStartRequest | None = None,
    orchestrator: CrawlOrchestrator = Depends(get_crawl_orchestrator),
) -> CrawlStartResponse:
    max_dealers = payload.max_dealers if payload is not None else None
    result = orchestrator.start(
        max_dealers=max_dealers,
        executor=FastAPIBackgroundTaskExecutor(background_tasks),
    )
    if not result.accepted:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Scraping already in progress",
        )
    return CrawlStartResponse(message="Scraping started", in_progress=True)


@router.get("/scrape/status", response_model=CrawlStatusResponse)
def get_scrape_status(
    orchestrator: CrawlOrchestrator = Depends(get_crawl_orchestrator),
    directory: DealerDirectoryService = Depends(get_dealer_directory_service),
) -> CrawlStatusResponse:
    snapshot = orchestrator.status()
    return CrawlStatusResponse(
        in_progress=snapshot.in_progress,
        last_results=[DealerOutcomeResponse.from_domain(outcome) for outcome in snapshot.outcomes],
        last_summary=(
            CrawlSummaryResponse.from_domain(snapshot.last_summary)
            if snapshot.last_summary is not None
            else None
        ),
        last_error=snapshot.last_error,
        total_dealers=directory.count(),
    )


@router.get("/stock", response_model=StockResponse)
def get_stock(
    storage: CatalogStorage = Depends(get_catalog_storage),
) -> StockResponse:
    if not storage.exists():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No stock data available yet",
        )

    vehicles = storage.load()
    return StockResponse(
        total_vehicles=len(vehicles),
        vehicles=[VehicleResponse.from_domain(vehicle) for vehicle in vehicles],
        last_updated=vehicles[0].scraped_at if vehicles else None,
    )
