"""
CSV dealer roster loader.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from app.crawler.logging_utils import log_event
from app.crawler.storage.base import DealerRoster
from app.domain.dealer_inventory import DealerRecord

logger = logging.getLogger(__name__)

ROSTER_COLUMNS = (
    "brand",
    "name",
    "address",
    "city",
    "phone",
    "website",
    "validationStatus",
    "lastChecked",
)
MIN_ROSTER_COLUMNS = 6


class CsvDealerRoster(DealerRoster):
    """
    Reads dealers from a headed CSV with the `ROSTER_COLUMNS` layout.

    Rows with fewer than six columns are dropped; missing trailing columns
    are treated as empty.
    """

    def __init__(self, *, path: str | Path) -> None:
        self._path = Path(path)

    def load(self) -> list[DealerRecord]:
        if not self._path.exists():
            raise FileNotFoundError(f"Dealer roster file not found: {self._path}")

        dealers: list[DealerRecord] = []
        dropped = 0
        with self._path.open("r", encoding="utf-8-sig", newline="") as handle:
            reader = csv.reader(handle)
            next(reader, None)
            for row in reader:
                if not any(value.strip() for value in row):
                    continue
                if len(row) < MIN_ROSTER_COLUMNS:
                    dropped += 1
                    continue
                values = [value.strip() for value in row] + [""] * len(ROSTER_COLUMNS)
                dealers.append(
                    DealerRecord(
                        brand=values[0],
                        name=values[1],
                        address=values[2],
                        city=values[3],
                        phone=values[4],
                        website=values[5],
                        validation_status=values[6],
                        last_checked=values[7],
                    )
                )

        log_event(
            logger,
            logging.INFO,
            "roster_loaded",
            path=str(self._path),
            dealers=len(dealers),
            dropped_rows=dropped,
        )
        return dealers
