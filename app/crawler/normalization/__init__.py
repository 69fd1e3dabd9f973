"""
Normalization layer exports.
"""

from app.crawler.normalization.vehicle_normalizer import VehicleFieldNormalizer

__all__ = ["VehicleFieldNormalizer"]
