"""
Fleet-level inventory crawl orchestration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Protocol

from app.crawler.errors import (
    CatalogPersistenceError,
    CrawlAlreadyRunningError,
    DealerProcessingError,
)
from app.crawler.executors import CrawlTaskExecutor, ThreadTaskExecutor
from app.crawler.logging_utils import log_event
from app.crawler.state import CrawlState
from app.crawler.storage import CatalogStorage, DealerRoster
from app.crawler.throttle import DealerThrottle
from app.crawler.types import InventoryCandidate
from app.domain.dealer_inventory import (
    CrawlStartResult,
    CrawlStatus,
    CrawlSummary,
    DealerOutcome,
    DealerRecord,
    VehicleRecord,
)

logger = logging.getLogger(__name__)

ALREADY_RUNNING = "already_running"


class InventoryDiscoverer(Protocol):
    def discover(self, homepage_url: str) -> InventoryCandidate | None:
        ...


class InventoryExtractor(Protocol):
    def extract(self, inventory_url: str, dealer: DealerRecord) -> list[VehicleRecord]:
        ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CrawlOrchestrator:
    """
    Runs discovery and extraction across the dealer roster, one dealer at a
    time, and persists the consolidated catalog once the roster is done.
    """

    def __init__(
        self,
        *,
        roster: DealerRoster,
        discovery: InventoryDiscoverer,
        extractor: InventoryExtractor,
        storage: CatalogStorage,
        throttle: DealerThrottle,
        state: CrawlState | None = None,
        executor: CrawlTaskExecutor | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._roster = roster
        self._discovery = discovery
        self._extractor = extractor
        self._storage = storage
        self._throttle = throttle
        self._state = state or CrawlState()
        self._executor = executor or ThreadTaskExecutor()
        self._clock = clock

    @property
    def state(self) -> CrawlState:
        return self._state

    def start(
        self,
        *,
        max_dealers: int | None = None,
        executor: CrawlTaskExecutor | None = None,
    ) -> CrawlStartResult:
        """
        Begin a crawl in the background unless one is already running.
        """

        if not self._state.try_begin():
            log_event(logger, logging.WARNING, "crawl_rejected", reason=ALREADY_RUNNING)
            return CrawlStartResult(accepted=False, reason=ALREADY_RUNNING)

        try:
            (executor or self._executor).submit(self._run_in_background, max_dealers)
        except Exception:
            self._state.finish()
            raise

        log_event(logger, logging.INFO, "crawl_accepted", max_dealers=max_dealers)
        return CrawlStartResult(accepted=True)

    def run(self, *, max_dealers: int | None = None) -> CrawlSummary:
        """
        Run a crawl on the calling thread and return its summary.

        Raises `CrawlAlreadyRunningError` on conflict and propagates
        `CatalogPersistenceError`.
        """

        if not self._state.try_begin():
            log_event(logger, logging.WARNING, "crawl_rejected", reason=ALREADY_RUNNING)
            raise CrawlAlreadyRunningError("Scraping already in progress")
        return self._execute(max_dealers)

    def status(self) -> CrawlStatus:
        return self._state.snapshot()

    def _run_in_background(self, max_dealers: int | None) -> None:
        try:
            self._execute(max_dealers)
        except Exception as exc:
            log_event(logger, logging.ERROR, "crawl_failed", error=str(exc))

    def _execute(self, max_dealers: int | None) -> CrawlSummary:
        try:
            dealers = self._select_dealers(max_dealers)
            log_event(logger, logging.INFO, "crawl_started", dealers=len(dealers))

            outcomes: list[DealerOutcome] = []
            for index, dealer in enumerate(dealers):
                outcome = self._process_dealer_safely(dealer, position=index + 1, total=len(dealers))
                outcomes.append(outcome)
                self._state.record_outcome(outcome)
                self._throttle.pause()

            vehicles = [vehicle for outcome in outcomes for vehicle in outcome.vehicles]
            error: str | None = None
            try:
                if vehicles:
                    self._storage.store(vehicles)
            except CatalogPersistenceError as exc:
                error = str(exc)
                self._state.record_failure(error)
                self._state.record_summary(self._summarize(dealers, outcomes, vehicles, error))
                raise

            summary = self._summarize(dealers, outcomes, vehicles, error)
            self._state.record_summary(summary)
            log_event(
                logger,
                logging.INFO,
                "crawl_completed",
                total_dealers=summary.total_dealers,
                success_count=summary.success_count,
                fail_count=summary.fail_count,
                total_vehicles=summary.total_vehicles,
            )
            return summary
        except Exception as exc:
            if self._state.last_error is None:
                self._state.record_failure(str(exc))
            raise
        finally:
            self._state.finish()

    def _select_dealers(self, max_dealers: int | None) -> list[DealerRecord]:
        dealers = self._roster.load()
        if max_dealers is not None and max_dealers > 0:
            return dealers[:max_dealers]
        return dealers

    def _process_dealer_safely(
        self,
        dealer: DealerRecord,
        *,
        position: int,
        total: int,
    ) -> DealerOutcome:
        try:
            outcome = self._process_dealer(dealer)
        except DealerProcessingError as exc:
            log_event(
                logger,
                logging.ERROR,
                "dealer_failed",
                dealer=dealer.name,
                position=position,
                total=total,
                error=str(exc),
            )
            return DealerOutcome.failed(dealer=dealer.name, message=str(exc))

        log_event(
            logger,
            logging.INFO,
            "dealer_processed",
            dealer=dealer.name,
            position=position,
            total=total,
            status=outcome.status,
            vehicles=len(outcome.vehicles),
        )
        return outcome

    def _process_dealer(self, dealer: DealerRecord) -> DealerOutcome:
        if not dealer.has_website:
            return DealerOutcome.no_website(dealer=dealer.name)

        try:
            candidate = self._discovery.discover(dealer.website.strip())
            if candidate is None:
                return DealerOutcome.no_inventory_page(dealer=dealer.name)

            vehicles = self._extractor.extract(candidate.url, dealer)
        except Exception as exc:
            raise DealerProcessingError(dealer.name, str(exc) or type(exc).__name__) from exc

        return DealerOutcome.success(
            dealer=dealer.name,
            vehicles=vehicles,
            inventory_url=candidate.url,
        )

    def _summarize(
        self,
        dealers: list[DealerRecord],
        outcomes: list[DealerOutcome],
        vehicles: list[VehicleRecord],
        error: str | None,
    ) -> CrawlSummary:
        success_count = sum(1 for outcome in outcomes if outcome.is_success)
        return CrawlSummary(
            total_dealers=len(dealers),
            success_count=success_count,
            fail_count=len(outcomes) - success_count,
            total_vehicles=len(vehicles),
            timestamp=self._clock(),
            outcomes=tuple(outcomes),
            error=error,
        )
