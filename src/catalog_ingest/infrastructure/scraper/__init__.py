# 🛒 catalog_ingest/infrastructure/scraper/__init__.py
"""🛒 Оркестратор імпорту товарів маркетплейсу та повний конвеєр з перевіркою залишків."""

from .extraction_pipeline import ExtractionResult, run_extraction_pipeline
from .marketplace_scraper import MarketplaceScraper, scrape_product

__all__ = ["ExtractionResult", "MarketplaceScraper", "run_extraction_pipeline", "scrape_product"]
