# 📦 catalog_ingest/domain/products/__init__.py
"""📦 Доменні сутності товару та перевірка залишків."""

from .entities import (
    DEFAULT_CURRENCY,
    ProductRecord,
    ShippingOption,
    StockStatus,
    SupplierInfo,
    Variant,
)
from .stock_validator import (
    StockAction,
    StockActionPriority,
    StockActionType,
    StockValidationResult,
    StockValidator,
    StockValidatorConfig,
    VariantStockStatus,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "ProductRecord",
    "ShippingOption",
    "StockAction",
    "StockActionPriority",
    "StockActionType",
    "StockStatus",
    "StockValidationResult",
    "StockValidator",
    "StockValidatorConfig",
    "SupplierInfo",
    "Variant",
    "VariantStockStatus",
]
