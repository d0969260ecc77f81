# 🧪 tests/infrastructure/parsers/test_field_extractors.py
"""
🧪 Окремі стратегії та FieldExtractor на HTML-фікстурах.
"""

from __future__ import annotations

import pytest

from catalog_ingest.domain.products import ShippingOption, StockStatus, SupplierInfo
from catalog_ingest.infrastructure.parsers.extractors import (
    CURRENCY_EXTRACTOR,
    IMAGES_EXTRACTOR,
    PRICE_EXTRACTOR,
    STOCK_EXTRACTOR,
    SUPPLIER_EXTRACTOR,
    TITLE_EXTRACTOR,
    FieldExtractor,
    PageSnapshot,
)
from catalog_ingest.infrastructure.parsers.extractors.json_ld import json_ld_products, raw_price_from_json_ld
from catalog_ingest.infrastructure.parsers.extractors.logistics import parse_shipping_text
from catalog_ingest.infrastructure.parsers.extractors.media import to_high_res
from catalog_ingest.infrastructure.parsers.extractors.pricing import ORIGINAL_PRICE_EXTRACTOR, currency_from_price_text
from catalog_ingest.infrastructure.parsers.extractors.variants import (
    variants_from_array,
    variants_from_dom,
    variants_from_sku_map,
)


# ───────────────────────────────────────────────────────────────────────────
# FieldExtractor
# ───────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_failing_strategy_falls_through_to_next(empty_html) -> None:
    def boom(snapshot):
        raise RuntimeError("selector exploded")

    async def async_value(snapshot):
        return "from async"

    extractor = FieldExtractor("title", (boom, lambda s: "", async_value), str)
    assert await extractor.extract(PageSnapshot(empty_html)) == "from async"


@pytest.mark.asyncio
async def test_all_strategies_empty_returns_default(empty_html) -> None:
    extractor = FieldExtractor("images", (lambda s: None, lambda s: []), list)
    assert await extractor.extract(PageSnapshot(empty_html)) == []


# ───────────────────────────────────────────────────────────────────────────
# Ціна / валюта / назва
# ───────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_price_prefers_dom_over_json_ld(full_html) -> None:
    assert await PRICE_EXTRACTOR.extract(PageSnapshot(full_html)) == pytest.approx(12.99)


@pytest.mark.asyncio
async def test_price_falls_back_to_json_ld(ld_only_html) -> None:
    snapshot = PageSnapshot(ld_only_html)
    assert await PRICE_EXTRACTOR.extract(snapshot) == pytest.approx(19.99)
    assert await CURRENCY_EXTRACTOR.extract(snapshot) == "EUR"


@pytest.mark.asyncio
async def test_strike_through_price_is_not_taken_as_current() -> None:
    html = """
    <script type="application/ld+json">
      {"@type": "Product", "name": "Tote Bag", "offers": {"price": "19.99", "priceCurrency": "GBP"}}
    </script>
    <div class="price-original"><span class="price-value">£ 25.00</span></div>
    """
    snapshot = PageSnapshot(html)

    assert await PRICE_EXTRACTOR.extract(snapshot) == pytest.approx(19.99)
    assert await ORIGINAL_PRICE_EXTRACTOR.extract(snapshot) == pytest.approx(25.0)
    assert currency_from_price_text(snapshot) is None


@pytest.mark.asyncio
async def test_zero_placeholder_price_is_skipped() -> None:
    html = '<div class="product-price-current">US $0.00</div><meta itemprop="price" content="4.20">'
    assert await PRICE_EXTRACTOR.extract(PageSnapshot(html)) == pytest.approx(4.2)


@pytest.mark.asyncio
async def test_currency_from_price_symbol() -> None:
    html = '<div class="product-price-current">€ 9,99</div>'
    assert await CURRENCY_EXTRACTOR.extract(PageSnapshot(html)) == "EUR"


@pytest.mark.asyncio
async def test_title_fallbacks(full_html, ld_only_html, empty_html) -> None:
    assert await TITLE_EXTRACTOR.extract(PageSnapshot(full_html)) == "Summer Baby Dress"
    assert await TITLE_EXTRACTOR.extract(PageSnapshot(ld_only_html)) == "Linen Shirt"
    snapshot = PageSnapshot(empty_html, page_title="Wool Socks | AliExpress")
    assert await TITLE_EXTRACTOR.extract(snapshot) == "Wool Socks"


def test_json_ld_graph_and_aggregate_offer() -> None:
    html = """
    <script type="application/ld+json">
    {"@graph": [{"@type": "WebPage"},
                {"@type": ["Product"], "name": "Graph",
                 "offers": {"@type": "AggregateOffer", "lowPrice": "7.50", "priceCurrency": "usd"}}]}
    </script>
    """
    snapshot = PageSnapshot(html)
    assert [p["name"] for p in json_ld_products(snapshot)] == ["Graph"]
    assert raw_price_from_json_ld(snapshot) == "7.50"


# ───────────────────────────────────────────────────────────────────────────
# Медіа
# ───────────────────────────────────────────────────────────────────────────

def test_to_high_res_strips_thumbnail_suffixes() -> None:
    assert to_high_res("https://a.com/kf/abc.jpg_220x220.jpg") == "https://a.com/kf/abc.jpg"
    assert to_high_res("https://a.com/kf/def_640x640.jpg") == "https://a.com/kf/def.jpg"
    assert to_high_res("https://a.com/kf/plain.png") == "https://a.com/kf/plain.png"


@pytest.mark.asyncio
async def test_gallery_images_are_absolute_and_filtered(full_html) -> None:
    images = await IMAGES_EXTRACTOR.extract(PageSnapshot(full_html))
    assert images == ["https://ae01.alicdn.com/kf/abc.jpg", "https://ae01.alicdn.com/kf/def.jpg"]


@pytest.mark.asyncio
async def test_images_fall_back_to_json_ld(ld_only_html) -> None:
    images = await IMAGES_EXTRACTOR.extract(PageSnapshot(ld_only_html))
    assert images == ["https://ae01.alicdn.com/kf/shirt.jpg"]


# ───────────────────────────────────────────────────────────────────────────
# Варіанти
# ───────────────────────────────────────────────────────────────────────────

def test_variants_from_sku_map(full_html) -> None:
    variants = variants_from_sku_map(PageSnapshot(full_html))
    assert [(v.sku_id, v.name, v.price, v.stock) for v in variants] == [
        ("101", "Red", 12.99, 5),
        ("102", "Blue", 13.5, 0),
    ]


def test_variants_from_array_with_defaults() -> None:
    html = """<script>var data = {variants: [{"skuId": "a1", "name": "S", "price": "5.5", "stock": "3"}, {}]};</script>"""
    variants = variants_from_array(PageSnapshot(html))
    assert [(v.sku_id, v.name, v.price, v.stock) for v in variants] == [
        ("a1", "S", 5.5, 3),
        ("variant-1", "Variant 2", 0.0, 0),
    ]


def test_variants_from_dom_marks_disabled_as_out_of_stock() -> None:
    html = """
    <ul>
      <li class="sku-item" data-sku-id="s1">Red</li>
      <li class="sku-item disabled">Blue</li>
    </ul>
    """
    variants = variants_from_dom(PageSnapshot(html))
    assert [(v.sku_id, v.name, v.stock) for v in variants] == [("s1", "Red", 999), ("sku-1", "Blue", 0)]
    assert dict(variants[0].attributes) == {"name": "Red"}


# ───────────────────────────────────────────────────────────────────────────
# Доставка / продавець / наявність
# ───────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "text, expected",
    [
        (
            "Standard Shipping $2.99 Delivery in 15 days via Cainiao",
            ShippingOption("Standard Shipping", 2.99, 15, "Cainiao"),
        ),
        ("Free Shipping 15-20 days", ShippingOption("Free Shipping", 0.0, 20, None)),
        ("Express 7 days $10.50 by DHL", ShippingOption("Express", 10.5, 7, "DHL")),
        ("Standard Shipping Delivery in 15 days", ShippingOption("Standard Shipping Delivery", 0.0, 15, None)),
        ("Standard Shipping 15 to 20 days", ShippingOption("Standard Shipping", 0.0, 20, None)),
        ("Express EUR 3.50 10-12 days", ShippingOption("Express", 3.5, 12, None)),
        ("", ShippingOption("Standard Shipping", 0.0, 30, None)),
    ],
)
def test_parse_shipping_text(text: str, expected: ShippingOption) -> None:
    assert parse_shipping_text(text) == expected


@pytest.mark.asyncio
async def test_supplier_from_store_link(full_html) -> None:
    supplier = await SUPPLIER_EXTRACTOR.extract(PageSnapshot(full_html))
    assert supplier == SupplierInfo(
        id="1234",
        name="Happy Kids Store",
        store_url="https://www.aliexpress.com/store/1234",
        rating=4.8,
    )


@pytest.mark.asyncio
async def test_supplier_falls_back_to_json_ld_seller(ld_only_html) -> None:
    supplier = await SUPPLIER_EXTRACTOR.extract(PageSnapshot(ld_only_html))
    assert (supplier.id, supplier.name) == ("555", "LD Store")


@pytest.mark.asyncio
async def test_stock_from_text_and_json_ld(full_html, ld_only_html) -> None:
    assert await STOCK_EXTRACTOR.extract(PageSnapshot(full_html)) == StockStatus(True, 37)
    assert await STOCK_EXTRACTOR.extract(PageSnapshot(ld_only_html)) == StockStatus(True, None)


@pytest.mark.asyncio
async def test_static_sold_out_indicator_respects_hidden() -> None:
    visible = '<div class="sold-out-badge">Sold out</div><p>5 pieces available</p>'
    hidden = '<div class="sold-out-badge" style="display: none">Sold out</div><p>5 pieces available</p>'

    assert await STOCK_EXTRACTOR.extract(PageSnapshot(visible)) == StockStatus(False, 0)
    assert await STOCK_EXTRACTOR.extract(PageSnapshot(hidden)) == StockStatus(True, 5)


class FakeElement:
    def __init__(self, visible: bool) -> None:
        self.visible = visible

    async def is_visible(self) -> bool:
        return self.visible


class FakeLivePage:
    def __init__(self, elements: dict) -> None:
        self.elements = elements

    async def query_selector(self, selector: str):
        return self.elements.get(selector)


@pytest.mark.asyncio
async def test_live_indicator_checks_visibility() -> None:
    html = '<div class="sold-out-badge">Sold out</div><p>5 pieces available</p>'

    visible_page = FakeLivePage({'[class*="sold-out"]': FakeElement(True)})
    snapshot = PageSnapshot(html, page=visible_page)  # type: ignore[arg-type]
    assert await STOCK_EXTRACTOR.extract(snapshot) == StockStatus(False, 0)

    # Прихований у живому DOM індикатор ігнорується, статичний HTML не перевіряється
    hidden_page = FakeLivePage({'[class*="sold-out"]': FakeElement(False)})
    snapshot = PageSnapshot(html, page=hidden_page)  # type: ignore[arg-type]
    assert await STOCK_EXTRACTOR.extract(snapshot) == StockStatus(True, 5)
