# 🧪 tests/infrastructure/scraper/test_extraction_pipeline.py
"""
🧪 run_extraction_pipeline: успіх з перевіркою залишків, пропуск перевірки, санітизовані збої.
"""

from __future__ import annotations

import pytest

from catalog_ingest.config import ScraperConfig
from catalog_ingest.domain.products import ProductRecord, StockValidatorConfig, Variant
from catalog_ingest.infrastructure.scraper import ExtractionResult, MarketplaceScraper, run_extraction_pipeline
from catalog_ingest.infrastructure.scraper.extraction_pipeline import PIPELINE_ERROR_MESSAGE

pytestmark = pytest.mark.asyncio

URL = "https://www.aliexpress.com/item/1005001234567890.html"


def make_product() -> ProductRecord:
    return ProductRecord(
        product_id="1005001234567890",
        source_url=URL,
        title="Linen Shirt",
        price=19.99,
        variants=(
            Variant(sku_id="101", name="White", stock=12),
            Variant(sku_id="102", name="Black", stock=0),
        ),
    )


class FakeScraper:
    def __init__(self, *, product: ProductRecord | None = None, error: Exception | None = None) -> None:
        self.product = product
        self.error = error
        self.urls: list[str] = []
        self.closed = 0

    async def scrape_product(self, url: str) -> ProductRecord:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        assert self.product is not None
        return self.product

    async def close(self) -> None:
        self.closed += 1


class ShutdownOnlySession:
    def __init__(self) -> None:
        self.startups = 0
        self.shutdowns = 0

    async def startup(self) -> None:
        self.startups += 1

    async def shutdown(self) -> None:
        self.shutdowns += 1


async def test_success_runs_stock_validation() -> None:
    scraper = FakeScraper(product=make_product())
    configs: list[ScraperConfig | None] = []

    def factory(config):
        configs.append(config)
        return scraper

    config = ScraperConfig(max_retries=1)
    result = await run_extraction_pipeline(URL, config, scraper_factory=factory)

    assert isinstance(result, ExtractionResult)
    assert result.success is True
    assert result.error is None
    assert result.product is scraper.product
    assert result.stock_validation.is_valid is True
    assert result.stock_validation.has_partial_stock is True
    assert result.stock_validation.out_of_stock_variants == ("102",)
    assert result.stock_validation.total_available_stock == 12
    assert configs == [config]
    assert scraper.urls == [URL]
    assert scraper.closed == 1


async def test_validator_config_is_applied() -> None:
    scraper = FakeScraper(product=make_product())
    result = await run_extraction_pipeline(
        URL,
        validator_config=StockValidatorConfig(reject_on_partial_stock=True),
        scraper_factory=lambda config: scraper,
    )

    assert result.success is True
    assert result.stock_validation.is_valid is False


async def test_stock_validation_can_be_skipped() -> None:
    scraper = FakeScraper(product=make_product())
    result = await run_extraction_pipeline(URL, validate_stock=False, scraper_factory=lambda config: scraper)

    validation = result.stock_validation
    assert result.success is True
    assert validation.is_valid is True
    assert validation.message == "Stock validation skipped"
    assert [v.sku_id for v in validation.available_variants] == ["101", "102"]
    assert validation.out_of_stock_variants == ()
    assert validation.total_available_stock == 0
    assert validation.is_completely_out_of_stock is False


async def test_failure_returns_sanitized_error_and_closes_scraper() -> None:
    scraper = FakeScraper(error=RuntimeError("net::ERR_PROXY_CONNECTION_FAILED at 10.1.2.3"))
    result = await run_extraction_pipeline(URL, scraper_factory=lambda config: scraper)

    assert result.success is False
    assert result.product is None
    assert result.error == PIPELINE_ERROR_MESSAGE
    assert "10.1.2.3" not in result.error
    assert result.stock_validation.is_valid is False
    assert result.stock_validation.message == "Extraction failed"
    assert result.stock_validation.is_completely_out_of_stock is True
    assert scraper.closed == 1


async def test_invalid_url_is_reported_without_touching_browser() -> None:
    session = ShutdownOnlySession()

    def factory(config):
        return MarketplaceScraper(config, session=session)  # type: ignore[arg-type]

    result = await run_extraction_pipeline("https://www.amazon.com/item/123.html", scraper_factory=factory)

    assert result.success is False
    assert result.error == PIPELINE_ERROR_MESSAGE
    assert session.startups == 0
    assert session.shutdowns == 1
