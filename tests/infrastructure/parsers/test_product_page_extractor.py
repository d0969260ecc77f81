# 🧪 tests/infrastructure/parsers/test_product_page_extractor.py
"""
🧪 ProductPageExtractor: повний запис, деградація полів, кастомні екстрактори.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from catalog_ingest.domain.products import ProductRecord, ShippingOption, StockStatus, SupplierInfo
from catalog_ingest.infrastructure.parsers import (
    ExtractedFields,
    FieldExtractor,
    PageSnapshot,
    ProductPageExtractor,
)

URL = "https://www.aliexpress.com/item/1005001234567890.html"


class FakeCapturePage:
    def __init__(self, html: str) -> None:
        self.html = html

    async def content(self) -> str:
        return self.html

    async def title(self) -> str:
        return "Baby Dress | AliExpress"


@pytest.mark.asyncio
async def test_full_page_produces_complete_record(full_html) -> None:
    snapshot = PageSnapshot(full_html, url=URL)
    record = await ProductPageExtractor().extract_record(
        snapshot, product_id="1005001234567890", source_url=URL
    )

    assert isinstance(record, ProductRecord)
    assert record.product_id == "1005001234567890"
    assert record.title == "Summer Baby Dress"
    assert record.description == "Soft cotton dress"
    assert record.price == pytest.approx(12.99)
    assert record.original_price == pytest.approx(25.0)
    assert record.currency == "EUR"
    assert record.images == ("https://ae01.alicdn.com/kf/abc.jpg", "https://ae01.alicdn.com/kf/def.jpg")
    assert record.videos == ("https://cloud.video.alibaba.com/v1.mp4",)
    assert [v.sku_id for v in record.variants] == ["101", "102"]
    assert dict(record.specifications) == {"Material": "Cotton", "Season": "Summer"}
    assert record.shipping == (ShippingOption("Standard Shipping", 2.99, 15, "Cainiao"),)
    assert record.supplier.id == "1234"
    assert record.stock == StockStatus(True, 37)
    assert record.scraped_at.tzinfo is not None


@pytest.mark.asyncio
async def test_empty_page_degrades_every_field_to_defaults(empty_html) -> None:
    fields = await ProductPageExtractor().extract(PageSnapshot(empty_html, url=URL))

    assert fields.title == ""
    assert fields.description == ""
    assert fields.price == 0.0
    assert fields.original_price is None
    assert fields.currency == "USD"
    assert fields.images == [] and fields.videos == [] and fields.variants == []
    assert fields.specifications == {}
    assert fields.shipping == [ShippingOption("Standard Shipping", 0.0, 30)]
    assert fields.supplier == SupplierInfo()
    assert fields.stock == StockStatus()


@pytest.mark.asyncio
async def test_capture_reads_live_page(full_html) -> None:
    snapshot = await PageSnapshot.capture(FakeCapturePage(full_html), URL)  # type: ignore[arg-type]
    assert snapshot.page_title == "Baby Dress | AliExpress"
    assert snapshot.url == URL
    assert snapshot.select_one("h1") is not None


@pytest.mark.asyncio
async def test_custom_extractor_overrides_field(full_html) -> None:
    extractor = ProductPageExtractor({"title": FieldExtractor("title", (lambda s: "Fixed",), str)})
    fields = await extractor.extract(PageSnapshot(full_html))
    assert fields.title == "Fixed"
    assert fields.price == pytest.approx(12.99)


def test_unknown_field_is_rejected() -> None:
    with pytest.raises(ValueError):
        ProductPageExtractor({"colour": FieldExtractor("colour", (), str)})


def test_build_record_keeps_given_timestamp() -> None:
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    record = ProductPageExtractor.build_record(
        ExtractedFields(title="T", price=3.5, images=["https://x/a.jpg", "https://x/a.jpg"]),
        product_id="1",
        source_url=URL,
        scraped_at=ts,
    )
    assert record.scraped_at == ts
    assert record.images == ("https://x/a.jpg",)
    assert record.to_dict()["scraped_at"] == ts.isoformat()
