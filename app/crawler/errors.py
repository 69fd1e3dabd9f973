"""
Exceptions raised by the inventory crawler.
"""

from __future__ import annotations


class InventoryCrawlError(Exception):
    """Base exception for inventory crawl failures."""


class DiscoveryFetchError(InventoryCrawlError):
    """Raised when a dealer homepage cannot be fetched or is not HTML."""


class RenderError(InventoryCrawlError):
    """Raised when an inventory page cannot be navigated or rendered."""


class DealerProcessingError(InventoryCrawlError):
    """Raised for unexpected failures while processing one dealer."""

    def __init__(self, dealer: str, message: str) -> None:
        super().__init__(message)
        self.dealer = dealer


class CatalogPersistenceError(InventoryCrawlError):
    """Raised when the vehicle catalog cannot be written."""


class CrawlAlreadyRunningError(InventoryCrawlError):
    """Raised when a crawl is requested while another one is in progress."""
