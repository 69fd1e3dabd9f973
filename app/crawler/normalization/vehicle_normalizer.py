"""
Field normalization for scraped vehicle listings.
"""

from __future__ import annotations

import re

from app.crawler.patterns import VehicleField

_WHITESPACE = re.compile(r"\s+")
_PRICE_DISALLOWED = re.compile(r"[^\d,.$]")
_NAME_DISALLOWED = re.compile(r"[^\w\s-]|_")
_YEAR = re.compile(r"20\d{2}")

NAME_FIELD_LIMIT = 50
DEFAULT_FIELD_LIMIT = 100
RAW_YEAR_LIMIT = 10


class VehicleFieldNormalizer:
    """
    Clean raw listing text into catalog-ready values, one rule per field.
    """

    _NAME_FIELDS = frozenset({VehicleField.MAKE, VehicleField.MODEL, VehicleField.TRIM})

    def normalize(self, field_name: str, raw: str) -> str:
        text = _WHITESPACE.sub(" ", raw).strip()
        if not text:
            return ""
        if field_name == VehicleField.PRICE:
            return self.normalize_price(text)
        if field_name == VehicleField.YEAR:
            return self.normalize_year(text)
        if field_name in self._NAME_FIELDS:
            return self.normalize_name(text)
        return text[:DEFAULT_FIELD_LIMIT]

    @staticmethod
    def normalize_price(text: str) -> str:
        return _PRICE_DISALLOWED.sub("", text)

    @staticmethod
    def normalize_year(text: str) -> str:
        match = _YEAR.search(text)
        if match is not None:
            return match.group(0)
        return text[:RAW_YEAR_LIMIT]

    @staticmethod
    def normalize_name(text: str) -> str:
        return _NAME_DISALLOWED.sub("", text).strip()[:NAME_FIELD_LIMIT]
