"""
tests/test_extractor.py

Pytest unit tests for ListingExtractor.

HTML cases go through StaticPageRenderer over a fake session; lifecycle and
isolation cases use the in-memory FakeRenderer.

Coverage
--------
- Field cascades and normalization on a realistic listing card
- Container cap, container-selector fallthrough and early stop
- Brand backfill and the make-or-model retention rule
- Placeholder text treated as a miss
- Render failures and broken containers never raising
"""

from __future__ import annotations

from app.crawler.errors import RenderError
from app.crawler.extractor import ListingExtractor, lookup_text
from app.crawler.rendering import StaticPageRenderer
from app.domain.dealer_inventory import DealerRecord
from tests.fakes import FIXED_NOW, FakeElement, FakePage, FakeRenderer, FakeSession

INVENTORY_URL = "https://downtownhonda.test/new-vehicles"


def _card(make: str = "", model: str = "", extra: str = "", css: str = "vehicle-card") -> str:
    parts = []
    if make:
        parts.append(f'<span class="make">{make}</span>')
    if model:
        parts.append(f'<span class="model">{model}</span>')
    return f'<div class="{css}">{"".join(parts)}{extra}</div>'


def _static_extractor(settings, html: str) -> ListingExtractor:
    session = FakeSession()
    session.add_html(INVENTORY_URL, f"<html><body>{html}</body></html>")
    return ListingExtractor(
        settings=settings,
        renderer=StaticPageRenderer(settings=settings, session=session),
        clock=lambda: FIXED_NOW,
    )


def _fake_extractor(settings, renderer: FakeRenderer) -> ListingExtractor:
    return ListingExtractor(settings=settings, renderer=renderer, clock=lambda: FIXED_NOW)


class TestListingExtractorOnHtml:
    def test_extracts_and_normalizes_listing_fields(self, settings, dealer: DealerRecord) -> None:
        html = """
        <div class="vehicle-card">
          <h2>2024 Honda Civic</h2>
          <span class="model">Civic&reg; Sedan</span>
          <span class="year">Model Year 2024</span>
          <span class="trim">EX-L (Leather)</span>
          <div class="price">Sale price: $28,500.00 <small>+ HST</small></div>
          <span class="stock">Stock #   H12345</span>
        </div>
        """

        vehicles = _static_extractor(settings, html).extract(INVENTORY_URL, dealer)

        assert len(vehicles) == 1
        vehicle = vehicles[0]
        assert vehicle.make == "2024 Honda Civic"
        assert vehicle.model == "Civic Sedan"
        assert vehicle.year == "2024"
        assert vehicle.trim == "EX-L Leather"
        assert vehicle.price == "$28,500.00"
        assert vehicle.stock == "Stock # H12345"
        assert vehicle.dealer == "Downtown Honda"
        assert vehicle.brand == "Honda"
        assert vehicle.city == "Toronto"
        assert vehicle.scraped_at == FIXED_NOW
        assert vehicle.source_url == INVENTORY_URL

    def test_caps_processed_containers_at_twenty(self, settings, dealer: DealerRecord) -> None:
        html = "".join(_card(model=f"Model {index}") for index in range(25))

        vehicles = _static_extractor(settings, html).extract(INVENTORY_URL, dealer)

        assert len(vehicles) == 20
        assert vehicles[-1].model == "Model 19"

    def test_price_only_container_yields_no_record(self, settings) -> None:
        no_brand = DealerRecord(brand="", name="Independent Motors", city="Oshawa")
        html = _card(extra='<span class="price">$19,999</span>')

        assert _static_extractor(settings, html).extract(INVENTORY_URL, no_brand) == []

    def test_empty_make_is_backfilled_from_dealer_brand(self, settings, dealer: DealerRecord) -> None:
        html = _card(model="Accord")

        vehicles = _static_extractor(settings, html).extract(INVENTORY_URL, dealer)

        assert [(vehicle.make, vehicle.model) for vehicle in vehicles] == [("Honda", "Accord")]

    def test_falls_through_to_next_container_selector(self, settings) -> None:
        no_brand = DealerRecord(brand="", name="Independent Motors")
        html = (
            _card(extra='<span class="price">$1</span>')
            + _card(make="Mazda", model="CX-5", css="inventory-item")
        )

        vehicles = _static_extractor(settings, html).extract(INVENTORY_URL, no_brand)

        assert [(vehicle.make, vehicle.model) for vehicle in vehicles] == [("Mazda", "CX-5")]

    def test_stops_at_first_container_selector_with_vehicles(self, settings, dealer: DealerRecord) -> None:
        html = _card(model="Civic") + _card(model="Pilot", css="inventory-item")

        vehicles = _static_extractor(settings, html).extract(INVENTORY_URL, dealer)

        assert [vehicle.model for vehicle in vehicles] == ["Civic"]

    def test_placeholder_text_falls_through_to_next_selector(self, settings, dealer: DealerRecord) -> None:
        html = '<div class="vehicle-card"><span class="make">undefined</span><h2>Acura</h2></div>'

        vehicles = _static_extractor(settings, html).extract(INVENTORY_URL, dealer)

        assert vehicles[0].make == "Acura"

    def test_year_without_modern_token_keeps_first_ten_characters(self, settings, dealer: DealerRecord) -> None:
        html = _card(model="Prelude", extra='<span class="year">Classic MY1999 edition</span>')

        vehicles = _static_extractor(settings, html).extract(INVENTORY_URL, dealer)

        assert vehicles[0].year == "Classic MY"

    def test_page_without_listings_returns_empty(self, settings, dealer: DealerRecord) -> None:
        assert _static_extractor(settings, "<p>Call us for pricing</p>").extract(INVENTORY_URL, dealer) == []

    def test_fetch_failure_returns_empty(self, settings, dealer: DealerRecord) -> None:
        extractor = ListingExtractor(
            settings=settings,
            renderer=StaticPageRenderer(settings=settings, session=FakeSession()),
        )

        assert extractor.extract(INVENTORY_URL, dealer) == []


class _ExplodingElement(FakeElement):
    def select_one(self, selector: str) -> FakeElement | None:
        raise RuntimeError("element detached")


class TestListingExtractorIsolation:
    def test_render_error_returns_empty_and_closes_session(self, settings, dealer: DealerRecord) -> None:
        renderer = FakeRenderer(error=RenderError("navigation timeout"))

        assert _fake_extractor(settings, renderer).extract(INVENTORY_URL, dealer) == []
        assert renderer.closed == 1

    def test_session_closed_after_success(self, settings, dealer: DealerRecord) -> None:
        page = FakePage({".vehicle-card": [FakeElement(children={".model": FakeElement("Civic")})]})
        renderer = FakeRenderer(page)

        vehicles = _fake_extractor(settings, renderer).extract(INVENTORY_URL, dealer)

        assert len(vehicles) == 1
        assert renderer.opened == [INVENTORY_URL]
        assert renderer.closed == 1

    def test_broken_container_does_not_abort_siblings(self, settings, dealer: DealerRecord) -> None:
        no_brand = DealerRecord(brand="", name=dealer.name)
        page = FakePage(
            {
                ".vehicle-card": [
                    _ExplodingElement(),
                    FakeElement(children={".make": FakeElement("Kia"), ".model": FakeElement("EV9")}),
                ]
            }
        )

        vehicles = _fake_extractor(settings, FakeRenderer(page)).extract(INVENTORY_URL, no_brand)

        assert [(vehicle.make, vehicle.model) for vehicle in vehicles] == [("Kia", "EV9")]

    def test_unexpected_failure_inside_session_returns_empty(self, settings, dealer: DealerRecord) -> None:
        class _BrokenPage(FakePage):
            def select(self, selector: str):
                raise RuntimeError("target closed")

        renderer = FakeRenderer(_BrokenPage({}))

        assert _fake_extractor(settings, renderer).extract(INVENTORY_URL, dealer) == []
        assert renderer.closed == 1


class TestLookupText:
    def test_miss_returns_none(self) -> None:
        assert lookup_text(FakeElement(), ".price") is None

    def test_blank_and_placeholder_text_are_misses(self) -> None:
        element = FakeElement(children={".a": FakeElement(""), ".b": FakeElement("null")})
        assert lookup_text(element, ".a") is None
        assert lookup_text(element, ".b") is None

    def test_lookup_error_is_a_miss(self) -> None:
        assert lookup_text(_ExplodingElement(), ".price") is None

    def test_hit_returns_text(self) -> None:
        element = FakeElement(children={".price": FakeElement("$9,999")})
        assert lookup_text(element, ".price") == "$9,999"
