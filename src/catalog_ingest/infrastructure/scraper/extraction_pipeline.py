# 🧪 catalog_ingest/infrastructure/scraper/extraction_pipeline.py
"""
🧪 Повний конвеєр імпорту: завантаження товару → перевірка залишків → результат.

🔹 Ніколи не кидає: будь-який збій повертається як `ExtractionResult(success=False)`.
🔹 Текст помилки для клієнта завжди однаковий; справжня причина лише в логах.
🔹 Оркестратор створюється на один виклик і закривається у `finally`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging	# 🧾 Логування
from dataclasses import dataclass	# 🧱 DTO результату
from typing import Callable, Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.config.scraper_config import ScraperConfig
from catalog_ingest.domain.products.entities import ProductRecord
from catalog_ingest.domain.products.stock_validator import (
    StockValidationResult,
    StockValidator,
    StockValidatorConfig,
)
from catalog_ingest.shared.metrics import PARSING_FAILURE, safe_inc
from catalog_ingest.shared.utils.logger import LOG_NAME

from .marketplace_scraper import MarketplaceScraper

logger = logging.getLogger(f"{LOG_NAME}.pipeline")

PIPELINE_ERROR_MESSAGE = "Failed to fetch product data. Please check the URL and try again."

ScraperFactory = Callable[[Optional[ScraperConfig]], MarketplaceScraper]


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Підсумок конвеєра; `product` є None лише коли `success` хибне."""

    product: Optional[ProductRecord]
    stock_validation: StockValidationResult
    success: bool
    error: Optional[str] = None


def skipped_stock_validation(product: ProductRecord) -> StockValidationResult:
    """⏭️ Нейтральний результат, коли перевірку залишків вимкнено."""
    return StockValidationResult(
        is_valid=True,
        available_variants=tuple(product.variants),
        out_of_stock_variants=(),
        message="Stock validation skipped",
        total_available_stock=0,
        is_completely_out_of_stock=False,
        has_partial_stock=False,
    )


def failed_stock_validation() -> StockValidationResult:
    return StockValidationResult(
        is_valid=False,
        available_variants=(),
        out_of_stock_variants=(),
        message="Extraction failed",
        total_available_stock=0,
        is_completely_out_of_stock=True,
        has_partial_stock=False,
    )


async def run_extraction_pipeline(
    url: str,
    config: Optional[ScraperConfig] = None,
    *,
    validator_config: Optional[StockValidatorConfig] = None,
    validate_stock: bool = True,
    scraper_factory: ScraperFactory = MarketplaceScraper,
) -> ExtractionResult:
    """
    🧪 Імпортує товар і оцінює його залишки.

    Args:
        url: Посилання на сторінку товару.
        config: Налаштування оркестратора (None → дефолти).
        validator_config: Пороги `StockValidator`.
        validate_stock: False → замість перевірки повертається «skipped».
        scraper_factory: Конструктор оркестратора (для тестів).

    Returns:
        ExtractionResult: `success=False` та санітизований `error` при будь-якому збої.
    """
    scraper = scraper_factory(config)
    try:
        product = await scraper.scrape_product(url)
        if validate_stock:
            stock_validation = StockValidator(validator_config).validate_product_stock(product)
        else:
            stock_validation = skipped_stock_validation(product)
        logger.info("🧪 Конвеєр %s: %s", product.product_id, stock_validation.message)
        return ExtractionResult(product=product, stock_validation=stock_validation, success=True)
    except Exception as exc:  # noqa: BLE001
        logger.exception("❌ Конвеєр імпорту не вдався для %s", url)
        safe_inc(PARSING_FAILURE, source="pipeline", reason=type(exc).__name__)
        return ExtractionResult(
            product=None,
            stock_validation=failed_stock_validation(),
            success=False,
            error=PIPELINE_ERROR_MESSAGE,
        )
    finally:
        await scraper.close()


__all__ = [
    "ExtractionResult",
    "PIPELINE_ERROR_MESSAGE",
    "run_extraction_pipeline",
    "skipped_stock_validation",
]
