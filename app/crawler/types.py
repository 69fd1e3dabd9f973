"""
Shared crawler runtime data models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InventoryCandidate:
    """
    One scored link that may point at a dealer's inventory page.
    """

    url: str
    confidence_score: int
    matched_pattern: str
    anchor_text: str


@dataclass(frozen=True)
class HomepageLink:
    """
    Outbound link parsed from a homepage, before scoring.
    """

    href: str
    url: str
    anchor_text: str
