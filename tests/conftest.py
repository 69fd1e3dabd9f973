"""
tests/conftest.py

Shared fixtures: offline crawler settings and a sample dealer.
"""

from __future__ import annotations

import pytest

from app.crawler.config.models import CrawlerSettings, RendererKind
from app.domain.dealer_inventory import DealerRecord


@pytest.fixture()
def settings(tmp_path) -> CrawlerSettings:
    return CrawlerSettings(
        roster_path=str(tmp_path / "dealers.csv"),
        catalog_path=str(tmp_path / "stock.csv"),
        settle_delay_seconds=0.0,
        inter_dealer_delay_seconds=0.0,
        renderer=RendererKind.STATIC,
    )


@pytest.fixture()
def dealer() -> DealerRecord:
    return DealerRecord(
        brand="Honda",
        name="Downtown Honda",
        address="1 King St",
        city="Toronto",
        phone="416-555-0100",
        website="https://downtownhonda.test",
    )
