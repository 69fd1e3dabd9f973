"""
Static rule tables for inventory-page discovery and listing extraction.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class InventoryPathRule:
    """
    Scores homepage links that look like an inventory page.

    A link containing `path` in its href earns the full `score`; a link that
    only mentions one of the `keywords` (href or anchor text) earns half,
    rounded down.
    """

    path: str
    keywords: tuple[str, ...]
    score: int

    @property
    def keyword_score(self) -> int:
        return self.score // 2

    def score_link(self, *, href: str, anchor_text: str) -> int:
        lowered_href = href.lower()
        lowered_text = anchor_text.lower()
        if self.path in lowered_href:
            return self.score
        if any(keyword in lowered_text or keyword in lowered_href for keyword in self.keywords):
            return self.keyword_score
        return 0


# Priority order matters: ties between candidates keep link order, and within
# one link the rules are evaluated top to bottom.
INVENTORY_PATH_RULES: tuple[InventoryPathRule, ...] = (
    InventoryPathRule("/new-vehicles", ("new", "inventory", "vehicles"), 10),
    InventoryPathRule("/inventory/new", ("new", "inventory"), 9),
    InventoryPathRule("/new-inventory", ("new", "inventory"), 9),
    InventoryPathRule("/vehicles/new", ("vehicles", "new"), 8),
    InventoryPathRule("/new", ("new",), 6),
    InventoryPathRule("/inventory", ("inventory",), 7),
    InventoryPathRule("/showroom", ("showroom", "new"), 5),
    InventoryPathRule("/browse", ("browse", "vehicles"), 4),
)


class VehicleField:
    MAKE = "make"
    MODEL = "model"
    YEAR = "year"
    TRIM = "trim"
    PRICE = "price"
    STOCK = "stock"

    ALL = (MAKE, MODEL, YEAR, TRIM, PRICE, STOCK)


@dataclass(frozen=True)
class FieldSelectors:
    """
    Container selectors plus one ordered selector cascade per vehicle field.
    """

    container: tuple[str, ...]
    fields: Mapping[str, tuple[str, ...]]

    def for_field(self, field_name: str) -> tuple[str, ...]:
        return self.fields.get(field_name, ())


VEHICLE_SELECTORS = FieldSelectors(
    container=(
        ".vehicle-card",
        ".inventory-item",
        ".car-item",
        ".vehicle-listing",
        ".product-item",
        ".vehicle-tile",
        ".inventory-card",
        "[data-vehicle]",
        ".vehicle",
        ".car",
        ".auto",
        ".listing",
    ),
    fields=MappingProxyType(
        {
            VehicleField.MAKE: (
                ".make",
                ".vehicle-make",
                "[data-make]",
                ".manufacturer",
                "h2",
                "h3",
                ".title",
                ".vehicle-title",
                ".brand",
            ),
            VehicleField.MODEL: (
                ".model",
                ".vehicle-model",
                "[data-model]",
                ".vehicle-name",
                ".car-model",
                ".product-name",
                ".vehicle-title",
            ),
            VehicleField.YEAR: (
                ".year",
                ".vehicle-year",
                "[data-year]",
                ".model-year",
            ),
            VehicleField.PRICE: (
                ".price",
                ".vehicle-price",
                "[data-price]",
                ".cost",
                ".msrp",
                ".pricing",
                ".amount",
                ".currency",
                ".vehicle-cost",
            ),
            VehicleField.STOCK: (
                ".stock",
                ".vin",
                "[data-vin]",
                ".vehicle-id",
                ".stock-number",
                ".stock-no",
                ".inventory-id",
            ),
            VehicleField.TRIM: (
                ".trim",
                ".vehicle-trim",
                "[data-trim]",
                ".grade",
                ".variant",
                ".package",
                ".level",
            ),
        }
    ),
)
