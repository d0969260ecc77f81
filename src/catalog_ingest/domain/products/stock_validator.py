# 📦 catalog_ingest/domain/products/stock_validator.py
"""
📦 Перевірка наявності товару перед публікацією у каталозі.

🔹 `StockValidator.validate_product_stock` — розкладає варіанти на доступні / відсутні.
🔹 `calculate_inventory_health_score` — 0..100 (70% частка доступних варіантів + 30% обсяг залишку).
🔹 `get_recommended_action` — що робити з карткою товару (сховати, оновити залишки, нічого).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування рішень
import math                                                         # ♾️ Необмежений поріг за замовчуванням
from dataclasses import dataclass, field                            # 🧱 DTO результатів
from enum import Enum                                               # 🔖 Дії та пріоритети
from typing import List, Optional, Tuple                            # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.shared.utils.logger import LOG_NAME

from .entities import ProductRecord, Variant

logger = logging.getLogger(f"{LOG_NAME}.domain.stock")


# ================================
# 🔖 ПЕРЕЛІКИ
# ================================
class StockActionType(str, Enum):
    NONE = "NONE"
    UPDATE_STOCK = "UPDATE_STOCK"
    HIDE_VARIANTS = "HIDE_VARIANTS"
    HIDE_PRODUCT = "HIDE_PRODUCT"


class StockActionPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


# ================================
# 🧱 DTO
# ================================
@dataclass(frozen=True, slots=True)
class StockValidationResult:
    """Підсумок перевірки залишків товару."""

    is_valid: bool
    available_variants: Tuple[Variant, ...]
    out_of_stock_variants: Tuple[str, ...]                           # 🏷️ SKU відсутніх варіантів
    message: str
    total_available_stock: int
    is_completely_out_of_stock: bool
    has_partial_stock: bool


@dataclass(frozen=True, slots=True)
class StockAction:
    action: StockActionType
    priority: StockActionPriority
    message: str


@dataclass(frozen=True, slots=True)
class VariantStockStatus:
    exists: bool
    in_stock: bool
    stock: Optional[int] = None


@dataclass(frozen=True, slots=True)
class StockValidatorConfig:
    min_stock_threshold: int = 1                                    # 🔢 Мінімум одиниць, щоб варіант вважався доступним
    reject_on_partial_stock: bool = False                           # 🚫 Відхиляти, якщо бракує хоча б одного варіанта
    max_out_of_stock_variants: float = field(default=math.inf)      # 📉 Допустима кількість відсутніх варіантів
    min_in_stock_percentage: float = 0.0                            # 📊 Мінімальний % доступних варіантів


# ================================
# 🏛️ ВАЛІДАТОР
# ================================
class StockValidator:
    """Оцінює залишки товару та рекомендує дію для каталогу."""

    def __init__(self, config: Optional[StockValidatorConfig] = None, **overrides) -> None:
        base = config or StockValidatorConfig()
        if overrides:
            base = StockValidatorConfig(
                min_stock_threshold=overrides.get("min_stock_threshold", base.min_stock_threshold),
                reject_on_partial_stock=overrides.get("reject_on_partial_stock", base.reject_on_partial_stock),
                max_out_of_stock_variants=overrides.get("max_out_of_stock_variants", base.max_out_of_stock_variants),
                min_in_stock_percentage=overrides.get("min_in_stock_percentage", base.min_in_stock_percentage),
            )
        self.config = base

    # ================================
    # ✅ ВАЛІДАЦІЯ
    # ================================
    def validate_product_stock(self, product: ProductRecord) -> StockValidationResult:
        """Розкладає варіанти товару на доступні та відсутні."""
        variants = tuple(product.variants or ())
        if not variants:
            return self._validate_no_variant_product(product)

        available = tuple(v for v in variants if self._is_variant_in_stock(v))
        out_of_stock = tuple(v.sku_id for v in variants if not self._is_variant_in_stock(v))

        total_stock = sum(v.stock for v in available)
        is_valid = self._determine_validity(len(available), len(out_of_stock), len(variants))
        message = self._generate_message(is_valid, len(available), len(out_of_stock), len(variants), total_stock)

        logger.debug(
            "📦 Stock %s: %s/%s варіантів доступні, valid=%s",
            product.product_id, len(available), len(variants), is_valid,
        )
        return StockValidationResult(
            is_valid=is_valid,
            available_variants=available,
            out_of_stock_variants=out_of_stock,
            message=message,
            total_available_stock=total_stock,
            is_completely_out_of_stock=not available,
            has_partial_stock=bool(out_of_stock) and bool(available),
        )

    def _validate_no_variant_product(self, product: ProductRecord) -> StockValidationResult:
        count = product.stock.count
        has_stock = count is not None and count >= self.config.min_stock_threshold

        if has_stock:
            message = f"Product in stock ({count} units available)"
        elif count == 0:
            message = "Product is out of stock"
        else:
            message = "Product stock status unknown - assumed unavailable"

        return StockValidationResult(
            is_valid=has_stock,
            available_variants=(),
            out_of_stock_variants=(),
            message=message,
            total_available_stock=(count or 0) if has_stock else 0,
            is_completely_out_of_stock=not has_stock,
            has_partial_stock=False,
        )

    def _is_variant_in_stock(self, variant: Variant) -> bool:
        if variant.stock == 0:
            return False
        return variant.stock >= self.config.min_stock_threshold

    def _determine_validity(self, available_count: int, out_of_stock_count: int, total_count: int) -> bool:
        if available_count == 0:
            return False
        if self.config.reject_on_partial_stock and out_of_stock_count > 0:
            return False
        if out_of_stock_count > self.config.max_out_of_stock_variants:
            return False
        if total_count > 0 and (available_count / total_count) * 100 < self.config.min_in_stock_percentage:
            return False
        return True

    def _generate_message(
        self,
        is_valid: bool,
        available_count: int,
        out_of_stock_count: int,
        total_count: int,
        total_stock: int,
    ) -> str:
        cfg = self.config
        if not is_valid:
            if available_count == 0:
                return "Product is completely out of stock"
            if cfg.reject_on_partial_stock and out_of_stock_count > 0:
                return (
                    f"Product rejected: {out_of_stock_count} variant(s) out of stock "
                    "(partial stock not allowed)"
                )
            if out_of_stock_count > cfg.max_out_of_stock_variants:
                return (
                    f"Product rejected: {out_of_stock_count} variant(s) out of stock exceeds "
                    f"maximum allowed ({cfg.max_out_of_stock_variants:g})"
                )
            percentage = (available_count / total_count) * 100
            if percentage < cfg.min_in_stock_percentage:
                return (
                    f"Product rejected: Only {percentage:.1f}% variants in stock "
                    f"(minimum: {cfg.min_in_stock_percentage:g}%)"
                )

        if out_of_stock_count == 0:
            return f"All {total_count} variant(s) in stock (total: {total_stock} units)"
        return (
            f"{available_count} of {total_count} variant(s) in stock, {out_of_stock_count} out of stock "
            f"(total available: {total_stock} units)"
        )

    # ================================
    # 🧭 РІШЕННЯ ДЛЯ КАТАЛОГУ
    # ================================
    def should_reject_product(self, validation: StockValidationResult) -> bool:
        return not validation.is_valid

    def get_variants_to_hide(self, validation: StockValidationResult) -> List[str]:
        return list(validation.out_of_stock_variants)

    def needs_stock_update(self, validation: StockValidationResult) -> bool:
        return validation.has_partial_stock or validation.is_completely_out_of_stock

    def get_variant_stock_status(self, product: ProductRecord, sku_id: str) -> VariantStockStatus:
        """Стан конкретного SKU; неіснуючий SKU → exists=False."""
        for variant in product.variants:
            if variant.sku_id == sku_id:
                return VariantStockStatus(exists=True, in_stock=self._is_variant_in_stock(variant), stock=variant.stock)
        return VariantStockStatus(exists=False, in_stock=False)

    def calculate_inventory_health_score(self, validation: StockValidationResult) -> int:
        """
        Оцінка «здоровʼя» залишків від 0 до 100.

        70% ваги — частка доступних варіантів, 30% — обсяг залишку (насичення на 100 одиницях).
        """
        if validation.is_completely_out_of_stock:
            return 0
        total_variants = len(validation.available_variants) + len(validation.out_of_stock_variants)
        if total_variants == 0:
            return 100
        in_stock_ratio = len(validation.available_variants) / total_variants
        quantity_score = min(validation.total_available_stock / 100, 1)
        # ⚠️ math.floor(x + 0.5) повторює округлення «половини вгору», на відміну від round()
        return int(math.floor(in_stock_ratio * 70 + quantity_score * 30 + 0.5))

    def get_recommended_action(self, validation: StockValidationResult) -> StockAction:
        if validation.is_completely_out_of_stock:
            return StockAction(
                action=StockActionType.HIDE_PRODUCT,
                priority=StockActionPriority.HIGH,
                message="Product is completely out of stock - consider hiding or marking as unavailable",
            )
        if validation.has_partial_stock:
            if self.calculate_inventory_health_score(validation) < 30:
                return StockAction(
                    action=StockActionType.HIDE_VARIANTS,
                    priority=StockActionPriority.MEDIUM,
                    message="Low inventory health - consider hiding out-of-stock variants",
                )
            return StockAction(
                action=StockActionType.UPDATE_STOCK,
                priority=StockActionPriority.LOW,
                message="Some variants out of stock - update inventory display",
            )
        return StockAction(
            action=StockActionType.NONE,
            priority=StockActionPriority.LOW,
            message="All variants in stock - no action needed",
        )


__all__ = [
    "StockAction",
    "StockActionPriority",
    "StockActionType",
    "StockValidationResult",
    "StockValidator",
    "StockValidatorConfig",
    "VariantStockStatus",
]
