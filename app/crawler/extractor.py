"""
Vehicle listing extraction from a rendered inventory page.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from app.crawler.cascade import first_match
from app.crawler.config.models import CrawlerSettings
from app.crawler.errors import RenderError
from app.crawler.logging_utils import log_event
from app.crawler.normalization import VehicleFieldNormalizer
from app.crawler.patterns import VEHICLE_SELECTORS, FieldSelectors, VehicleField
from app.crawler.rendering import PageElement, PageRenderer, RenderedPage
from app.domain.dealer_inventory import DealerRecord, VehicleRecord

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = frozenset({"undefined", "null"})


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def lookup_text(element: PageElement, selector: str) -> str | None:
    """
    Text of the first descendant matching `selector`, or None.

    Invalid selectors, detached elements and placeholder text all count as a
    miss so the caller can move on to the next selector.
    """

    try:
        match = element.select_one(selector)
        if match is None:
            return None
        text = match.text()
    except Exception:
        return None
    if not text or text.strip().lower() in PLACEHOLDER_TEXT:
        return None
    return text


def lookup_elements(page: RenderedPage, selector: str) -> list[PageElement]:
    try:
        return page.select(selector)
    except Exception:
        return []


class ListingExtractor:
    """
    Applies the container and field selector cascades to one inventory page.
    """

    def __init__(
        self,
        *,
        settings: CrawlerSettings,
        renderer: PageRenderer,
        selectors: FieldSelectors = VEHICLE_SELECTORS,
        normalizer: VehicleFieldNormalizer | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._renderer = renderer
        self._selectors = selectors
        self._normalizer = normalizer or VehicleFieldNormalizer()
        self._clock = clock
        self._max_containers = max(1, settings.max_containers)

    def extract(self, inventory_url: str, dealer: DealerRecord) -> list[VehicleRecord]:
        """
        Return the vehicles found on `inventory_url`; never raises.
        """

        try:
            with self._renderer.open(inventory_url) as page:
                vehicles = first_match(
                    self._selectors.container,
                    lambda selector: self._extract_with_container(
                        page=page,
                        selector=selector,
                        inventory_url=inventory_url,
                        dealer=dealer,
                    ),
                )
        except RenderError as exc:
            log_event(
                logger,
                logging.WARNING,
                "inventory_render_failed",
                dealer=dealer.name,
                inventory_url=inventory_url,
                error=str(exc),
            )
            return []
        except Exception as exc:
            log_event(
                logger,
                logging.ERROR,
                "inventory_extraction_failed",
                dealer=dealer.name,
                inventory_url=inventory_url,
                error=str(exc),
            )
            return []

        if vehicles is None:
            log_event(
                logger,
                logging.INFO,
                "no_vehicles_found",
                dealer=dealer.name,
                inventory_url=inventory_url,
            )
            return []
        return vehicles

    def _extract_with_container(
        self,
        *,
        page: RenderedPage,
        selector: str,
        inventory_url: str,
        dealer: DealerRecord,
    ) -> list[VehicleRecord] | None:
        containers = lookup_elements(page, selector)
        if not containers:
            return None

        log_event(
            logger,
            logging.INFO,
            "containers_matched",
            dealer=dealer.name,
            selector=selector,
            matched=len(containers),
        )
        vehicles: list[VehicleRecord] = []
        for index, container in enumerate(containers[: self._max_containers]):
            try:
                vehicle = self.extract_vehicle(
                    container=container,
                    dealer=dealer,
                    source_url=inventory_url,
                )
            except Exception as exc:
                log_event(
                    logger,
                    logging.WARNING,
                    "vehicle_extraction_failed",
                    dealer=dealer.name,
                    selector=selector,
                    container_index=index,
                    error=str(exc),
                )
                continue
            if vehicle is not None:
                vehicles.append(vehicle)

        if not vehicles:
            return None
        log_event(
            logger,
            logging.INFO,
            "vehicles_extracted",
            dealer=dealer.name,
            selector=selector,
            vehicles=len(vehicles),
        )
        return vehicles

    def extract_vehicle(
        self,
        *,
        container: PageElement,
        dealer: DealerRecord,
        source_url: str,
    ) -> VehicleRecord | None:
        values = {
            field_name: self._field_value(container, field_name)
            for field_name in VehicleField.ALL
        }
        if not values[VehicleField.MAKE] and dealer.brand:
            values[VehicleField.MAKE] = dealer.brand
        if not values[VehicleField.MAKE] and not values[VehicleField.MODEL]:
            return None

        return VehicleRecord(
            dealer=dealer.name,
            brand=dealer.brand,
            city=dealer.city,
            make=values[VehicleField.MAKE],
            model=values[VehicleField.MODEL],
            year=values[VehicleField.YEAR],
            trim=values[VehicleField.TRIM],
            price=values[VehicleField.PRICE],
            stock=values[VehicleField.STOCK],
            scraped_at=self._clock(),
            source_url=source_url,
        )

    def _field_value(self, container: PageElement, field_name: str) -> str:
        raw = first_match(
            self._selectors.for_field(field_name),
            lambda selector: lookup_text(container, selector),
        )
        if raw is None:
            return ""
        return self._normalizer.normalize(field_name, raw)
