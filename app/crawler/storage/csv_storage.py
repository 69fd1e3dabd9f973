"""
CSV-backed vehicle catalog storage.
"""

from __future__ import annotations

import csv
import logging
import os
import tempfile
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from app.crawler.errors import CatalogPersistenceError
from app.crawler.logging_utils import log_event
from app.crawler.storage.base import CatalogStorage
from app.domain.dealer_inventory import VehicleRecord

logger = logging.getLogger(__name__)

CATALOG_COLUMNS = (
    "Dealer",
    "Brand",
    "City",
    "Make",
    "Model",
    "Year",
    "Trim",
    "Price",
    "Stock",
    "ScrapedAt",
    "SourceURL",
)


def vehicle_to_row(vehicle: VehicleRecord) -> list[str]:
    return [
        vehicle.dealer,
        vehicle.brand,
        vehicle.city,
        vehicle.make,
        vehicle.model,
        vehicle.year,
        vehicle.trim,
        vehicle.price,
        vehicle.stock,
        vehicle.scraped_at.isoformat(),
        vehicle.source_url,
    ]


def row_to_vehicle(row: Sequence[str]) -> VehicleRecord:
    return VehicleRecord(
        dealer=row[0],
        brand=row[1],
        city=row[2],
        make=row[3],
        model=row[4],
        year=row[5],
        trim=row[6],
        price=row[7],
        stock=row[8],
        scraped_at=datetime.fromisoformat(row[9]),
        source_url=row[10],
    )


class CsvCatalogStorage(CatalogStorage):
    """
    Writes the catalog as one CSV file, replacing any previous catalog.

    Fields holding a comma, quote or line break are quoted with embedded
    quotes doubled (`csv.QUOTE_MINIMAL`).
    """

    def __init__(self, *, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def store(self, vehicles: Sequence[VehicleRecord]) -> int:
        temp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                newline="",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_name = handle.name
                writer = csv.writer(handle, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
                writer.writerow(CATALOG_COLUMNS)
                for vehicle in vehicles:
                    writer.writerow(vehicle_to_row(vehicle))
            os.replace(temp_name, self._path)
        except OSError as exc:
            if temp_name is not None and os.path.exists(temp_name):
                os.unlink(temp_name)
            raise CatalogPersistenceError(f"Failed to write catalog {self._path}: {exc}") from exc

        log_event(
            logger,
            logging.INFO,
            "catalog_saved",
            path=str(self._path),
            vehicles=len(vehicles),
        )
        return len(vehicles)

    def load(self) -> list[VehicleRecord]:
        if not self.exists():
            return []

        vehicles: list[VehicleRecord] = []
        with self._path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.reader(handle)
            next(reader, None)
            for row_number, row in enumerate(reader, start=2):
                if len(row) < len(CATALOG_COLUMNS):
                    continue
                try:
                    vehicles.append(row_to_vehicle(row))
                except ValueError as exc:
                    log_event(
                        logger,
                        logging.WARNING,
                        "catalog_row_skipped",
                        path=str(self._path),
                        row_number=row_number,
                        error=str(exc),
                    )
        return vehicles

    def exists(self) -> bool:
        return self._path.is_file()
