# 🛍️ catalog_ingest/__init__.py
"""
🛍️ catalog_ingest — імпорт товарів маркетплейсу в нормалізований `ProductRecord`.

    from catalog_ingest import MarketplaceScraper

    async with MarketplaceScraper() as scraper:
        record = await scraper.scrape_product("https://www.aliexpress.com/item/1005001234567890.html")
"""

from .config import ConfigService, ProxyConfig, ScraperConfig
from .domain.products import (
    ProductRecord,
    ShippingOption,
    StockStatus,
    StockValidator,
    SupplierInfo,
    Variant,
)
from .errors import AppError, InputError, TransientFetchError
from .infrastructure.scraper import ExtractionResult, MarketplaceScraper, run_extraction_pipeline, scrape_product
from .shared.utils import clean_title, extract_product_id, is_valid_source_url, normalize_url, parse_price

__all__ = [
    "AppError",
    "ConfigService",
    "ExtractionResult",
    "InputError",
    "MarketplaceScraper",
    "ProductRecord",
    "ProxyConfig",
    "ScraperConfig",
    "ShippingOption",
    "StockStatus",
    "StockValidator",
    "SupplierInfo",
    "TransientFetchError",
    "Variant",
    "clean_title",
    "extract_product_id",
    "is_valid_source_url",
    "normalize_url",
    "parse_price",
    "run_extraction_pipeline",
    "scrape_product",
]
