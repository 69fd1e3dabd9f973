"""
Storage layer interfaces for the dealer roster and vehicle catalog.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from app.domain.dealer_inventory import DealerRecord, VehicleRecord


class CatalogStorage(ABC):
    """
    Storage abstraction for the consolidated vehicle catalog.
    """

    @abstractmethod
    def store(self, vehicles: Sequence[VehicleRecord]) -> int:
        """
        Replace the catalog with `vehicles` and return the written row count.

        Raises `CatalogPersistenceError` when the catalog cannot be written.
        """

    @abstractmethod
    def load(self) -> list[VehicleRecord]:
        """
        Return the persisted catalog, or an empty list when none exists.
        """

    @abstractmethod
    def exists(self) -> bool:
        """
        Whether a catalog has been persisted.
        """


class DealerRoster(ABC):
    """
    Read-only source of dealers to crawl, in roster order.
    """

    @abstractmethod
    def load(self) -> list[DealerRecord]:
        """
        Return all usable dealer rows.
        """
