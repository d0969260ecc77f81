# 📦 catalog_ingest/domain/products/entities.py
"""
📦 Доменні сутності імпортованого товару.

🔹 `ProductRecord` — нормалізований результат одного імпорту сторінки.
🔹 `Variant`, `ShippingOption`, `SupplierInfo`, `StockStatus` — вкладені value-objects.
🔹 Усі сутності іммʼютабельні (frozen dataclass + mapping proxy), `to_dict()` віддає JSON-дружні типи.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування нормалізації
import re                                                           # 🔤 Перевірка коду валюти
from dataclasses import dataclass, field                            # 🧱 Опис сутностей
from datetime import datetime, timezone                             # ⏰ Час захоплення (UTC)
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple    # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.shared.utils.immutables import freeze_str_mapping, is_frozen_mapping, thaw
from catalog_ingest.shared.utils.logger import LOG_NAME

# ================================
# 🪵 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.domain.products")

# ================================
# 📏 КОНСТАНТИ
# ================================
DEFAULT_CURRENCY = "USD"                                            # 💱 Валюта за замовчуванням
_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


# ================================
# 🧽 НОРМАЛІЗАЦІЙНІ ХЕЛПЕРИ
# ================================
def _clean_str(value: Any, default: str = "") -> str:
    """Trim; порожній результат → `default`."""
    raw = str(value).strip() if value is not None else ""
    return raw or default


def _coerce_currency(value: Any) -> str:
    """Приводить код валюти до `XXX`; невідоме значення → USD."""
    code = _clean_str(value).upper()
    if _CURRENCY_RE.match(code):
        return code
    if code:
        logger.debug("💱 Некоректний код валюти %r → %s", value, DEFAULT_CURRENCY)
    return DEFAULT_CURRENCY


def _non_negative(value: Any, name: str) -> float:
    """Перевіряє числове значення ≥ 0."""
    number = float(value or 0)
    if number < 0:
        raise ValueError(f"{name} must be >= 0, got {number!r}")
    return number


def _uniq_keep_order(sequence: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """Унікальні непорожні рядки зі збереженням порядку."""
    result: list[str] = []
    seen: set[str] = set()
    for item in sequence or ():
        text = _clean_str(item)
        if text and text not in seen:
            result.append(text)
            seen.add(text)
    return tuple(result)


# ================================
# 🧩 VALUE OBJECTS
# ================================
@dataclass(frozen=True, slots=True)
class StockStatus:
    """📦 Наявність товару: прапорець плюс опційна кількість."""

    available: bool = True
    count: Optional[int] = None

    def __post_init__(self) -> None:
        if self.count is not None:
            object.__setattr__(self, "count", max(0, int(self.count)))

    def to_dict(self) -> Dict[str, Any]:
        return {"available": self.available, "count": self.count}


@dataclass(frozen=True, slots=True)
class SupplierInfo:
    """🏪 Продавець на маркетплейсі."""

    id: str = ""
    name: str = "Unknown Store"
    store_url: str = ""
    rating: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", _clean_str(self.id))
        object.__setattr__(self, "name", _clean_str(self.name, "Unknown Store"))
        object.__setattr__(self, "store_url", _clean_str(self.store_url))
        if self.rating is not None:
            object.__setattr__(self, "rating", float(self.rating))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "store_url": self.store_url, "rating": self.rating}


@dataclass(frozen=True, slots=True)
class ShippingOption:
    """🚚 Варіант доставки."""

    name: str
    cost: float = 0.0
    estimated_days: int = 30
    carrier: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _clean_str(self.name, "Standard Shipping"))
        object.__setattr__(self, "cost", _non_negative(self.cost, "ShippingOption.cost"))
        days = int(self.estimated_days)
        if days <= 0:
            raise ValueError(f"ShippingOption.estimated_days must be > 0, got {days!r}")
        object.__setattr__(self, "estimated_days", days)
        object.__setattr__(self, "carrier", _clean_str(self.carrier) or None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "cost": self.cost,
            "estimated_days": self.estimated_days,
            "carrier": self.carrier,
        }


@dataclass(frozen=True, slots=True)
class Variant:
    """🎨 SKU-варіант товару (колір/розмір тощо)."""

    sku_id: str
    name: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)
    price: float = 0.0
    stock: int = 0
    image: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "sku_id", _clean_str(self.sku_id))
        object.__setattr__(self, "name", _clean_str(self.name))
        object.__setattr__(self, "attributes", freeze_str_mapping(self.attributes))
        object.__setattr__(self, "price", _non_negative(self.price, "Variant.price"))
        object.__setattr__(self, "stock", max(0, int(self.stock or 0)))     # 🔢 Відʼємний залишок → 0
        object.__setattr__(self, "image", _clean_str(self.image) or None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sku_id": self.sku_id,
            "name": self.name,
            "attributes": thaw(self.attributes),
            "price": self.price,
            "stock": self.stock,
            "image": self.image,
        }


# ================================
# 📦 ЗАПИС ТОВАРУ
# ================================
@dataclass(frozen=True, slots=True)
class ProductRecord:
    """
    📦 Нормалізований товар, готовий до передачі у фулфілмент.

    Інваріанти:
        • `product_id` та `source_url` непорожні;
        • `price >= 0`;
        • `currency` — трилітерний код у верхньому регістрі (інакше USD).
    """

    product_id: str
    source_url: str
    title: str = ""
    description: str = ""
    price: float = 0.0
    original_price: Optional[float] = None
    currency: str = DEFAULT_CURRENCY
    images: Tuple[str, ...] = ()
    videos: Tuple[str, ...] = ()
    variants: Tuple[Variant, ...] = ()
    specifications: Mapping[str, str] = field(default_factory=dict)
    shipping: Tuple[ShippingOption, ...] = ()
    supplier: SupplierInfo = field(default_factory=SupplierInfo)
    stock: StockStatus = field(default_factory=StockStatus)
    scraped_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        product_id = _clean_str(self.product_id)
        source_url = _clean_str(self.source_url)
        if not product_id:
            raise ValueError("ProductRecord.product_id must be non-empty")
        if not source_url:
            raise ValueError("ProductRecord.source_url must be non-empty")
        object.__setattr__(self, "product_id", product_id)
        object.__setattr__(self, "source_url", source_url)
        object.__setattr__(self, "title", _clean_str(self.title))
        object.__setattr__(self, "description", _clean_str(self.description))
        object.__setattr__(self, "price", _non_negative(self.price, "ProductRecord.price"))
        if self.original_price is not None:
            object.__setattr__(
                self, "original_price", _non_negative(self.original_price, "ProductRecord.original_price")
            )
        object.__setattr__(self, "currency", _coerce_currency(self.currency))
        object.__setattr__(self, "images", _uniq_keep_order(self.images))
        object.__setattr__(self, "videos", _uniq_keep_order(self.videos))
        object.__setattr__(self, "variants", tuple(self.variants or ()))
        object.__setattr__(self, "shipping", tuple(self.shipping or ()))
        if not is_frozen_mapping(self.specifications):
            object.__setattr__(self, "specifications", freeze_str_mapping(self.specifications))
        if self.scraped_at.tzinfo is None:
            object.__setattr__(self, "scraped_at", self.scraped_at.replace(tzinfo=timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Серіалізація у прості типи (JSON-friendly)."""
        return {
            "product_id": self.product_id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "original_price": self.original_price,
            "currency": self.currency,
            "images": list(self.images),
            "videos": list(self.videos),
            "variants": [variant.to_dict() for variant in self.variants],
            "specifications": thaw(self.specifications),
            "shipping": [option.to_dict() for option in self.shipping],
            "supplier": self.supplier.to_dict(),
            "stock": self.stock.to_dict(),
            "source_url": self.source_url,
            "scraped_at": self.scraped_at.isoformat(),
        }


__all__ = [
    "DEFAULT_CURRENCY",
    "ProductRecord",
    "ShippingOption",
    "StockStatus",
    "SupplierInfo",
    "Variant",
]
