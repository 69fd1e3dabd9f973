"""
app/services/dealer_directory_service.py

In-memory dealer directory backed by the roster file.
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache

from app.crawler.config import get_crawler_settings
from app.crawler.storage import CsvDealerRoster, DealerRoster
from app.domain.dealer_inventory import DealerRecord

logger = logging.getLogger(__name__)


class DealerDirectoryService(DealerRoster):
    """
    Loads the roster once and serves brand searches from memory.

    Also acts as the crawl roster, so a crawl sees the same dealers the
    directory lists.
    """

    def __init__(self, *, roster: DealerRoster) -> None:
        self._roster = roster
        self._dealers: list[DealerRecord] | None = None
        self._lock = threading.Lock()

    def load(self) -> list[DealerRecord]:
        with self._lock:
            if self._dealers is None:
                self._dealers = self._load_or_empty()
            return list(self._dealers)

    def reload(self) -> int:
        with self._lock:
            self._dealers = self._load_or_empty()
            return len(self._dealers)

    def search(self, brand: str | None) -> list[DealerRecord]:
        """
        Dealers whose brand contains `brand`, case-insensitively.
        """

        needle = (brand or "").strip().lower()
        dealers = self.load()
        if not needle:
            return dealers
        return [dealer for dealer in dealers if needle in dealer.brand.lower()]

    def brands(self) -> list[str]:
        return sorted({dealer.brand for dealer in self.load() if dealer.brand})

    def count(self) -> int:
        return len(self.load())

    def _load_or_empty(self) -> list[DealerRecord]:
        try:
            return self._roster.load()
        except FileNotFoundError as exc:
            logger.warning("Dealer roster unavailable: %s", exc)
            return []


@lru_cache(maxsize=1)
def get_dealer_directory_service() -> DealerDirectoryService:
    """
    Build and cache the dealer directory.
    """

    settings = get_crawler_settings()
    return DealerDirectoryService(roster=CsvDealerRoster(path=settings.roster_path))
