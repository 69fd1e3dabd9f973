"""
Storage layer exports.
"""

from app.crawler.storage.base import CatalogStorage, DealerRoster
from app.crawler.storage.csv_storage import CATALOG_COLUMNS, CsvCatalogStorage
from app.crawler.storage.roster import CsvDealerRoster

__all__ = [
    "CATALOG_COLUMNS",
    "CatalogStorage",
    "CsvCatalogStorage",
    "CsvDealerRoster",
    "DealerRoster",
]
