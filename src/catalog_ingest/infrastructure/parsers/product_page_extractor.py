# 🧠 catalog_ingest/infrastructure/parsers/product_page_extractor.py
"""
🧠 ProductPageExtractor — паралельне витягування всіх полів товару зі знімка сторінки.

🔹 Запускає дванадцять `FieldExtractor` одночасно через `asyncio.gather`.
🔹 Жодне поле не зриває витягування: деградоване поле отримує безпечний дефолт.
🔹 `build_record` збирає `ProductRecord` з витягнутих полів.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio	# ⏳ Паралельний запуск екстракторів
import logging	# 🧾 Логування
from dataclasses import dataclass, field	# 🧱 DTO полів
from datetime import datetime, timezone	# ⏰ Час захоплення
from typing import Any, Dict, List, Mapping, Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.domain.products.entities import (
    ProductRecord,
    ShippingOption,
    StockStatus,
    SupplierInfo,
    Variant,
)
from catalog_ingest.shared.utils.logger import LOG_NAME

from .extractors import (
    CURRENCY_EXTRACTOR,
    DESCRIPTION_EXTRACTOR,
    IMAGES_EXTRACTOR,
    ORIGINAL_PRICE_EXTRACTOR,
    PRICE_EXTRACTOR,
    SHIPPING_EXTRACTOR,
    SPECIFICATIONS_EXTRACTOR,
    STOCK_EXTRACTOR,
    SUPPLIER_EXTRACTOR,
    TITLE_EXTRACTOR,
    VARIANTS_EXTRACTOR,
    VIDEOS_EXTRACTOR,
    FieldExtractor,
    PageSnapshot,
)

logger = logging.getLogger(f"{LOG_NAME}.parser.product_page")

DEFAULT_EXTRACTORS: Mapping[str, FieldExtractor[Any]] = {
    "title": TITLE_EXTRACTOR,
    "description": DESCRIPTION_EXTRACTOR,
    "price": PRICE_EXTRACTOR,
    "original_price": ORIGINAL_PRICE_EXTRACTOR,
    "currency": CURRENCY_EXTRACTOR,
    "images": IMAGES_EXTRACTOR,
    "videos": VIDEOS_EXTRACTOR,
    "variants": VARIANTS_EXTRACTOR,
    "specifications": SPECIFICATIONS_EXTRACTOR,
    "shipping": SHIPPING_EXTRACTOR,
    "supplier": SUPPLIER_EXTRACTOR,
    "stock": STOCK_EXTRACTOR,
}	# 🧩 Поле → екстрактор


@dataclass(slots=True)
class ExtractedFields:
    """📦 Сирі результати екстракторів до складання запису."""

    title: str = ""
    description: str = ""
    price: float = 0.0
    original_price: Optional[float] = None
    currency: str = "USD"
    images: List[str] = field(default_factory=list)
    videos: List[str] = field(default_factory=list)
    variants: List[Variant] = field(default_factory=list)
    specifications: Dict[str, str] = field(default_factory=dict)
    shipping: List[ShippingOption] = field(default_factory=list)
    supplier: SupplierInfo = field(default_factory=SupplierInfo)
    stock: StockStatus = field(default_factory=StockStatus)


class ProductPageExtractor:
    """🧠 Оркеструє екстрактори полів над одним `PageSnapshot`."""

    def __init__(self, extractors: Optional[Mapping[str, FieldExtractor[Any]]] = None) -> None:
        self._extractors: Dict[str, FieldExtractor[Any]] = dict(DEFAULT_EXTRACTORS)
        if extractors:
            unknown = set(extractors) - set(DEFAULT_EXTRACTORS)
            if unknown:
                raise ValueError(f"Unknown product fields: {sorted(unknown)}")
            self._extractors.update(extractors)

    async def extract(self, snapshot: PageSnapshot) -> ExtractedFields:
        """⚡ Запускає всі екстрактори паралельно."""
        names = list(self._extractors)
        values = await asyncio.gather(*(self._extractors[name].extract(snapshot) for name in names))
        fields = ExtractedFields(**dict(zip(names, values)))
        logger.debug(
            "🧠 Поля %s: title=%r price=%s images=%d variants=%d",
            snapshot.url, fields.title[:60], fields.price, len(fields.images), len(fields.variants),
        )
        return fields

    @staticmethod
    def build_record(
        fields: ExtractedFields,
        *,
        product_id: str,
        source_url: str,
        scraped_at: Optional[datetime] = None,
    ) -> ProductRecord:
        """🧱 Складає `ProductRecord` з витягнутих полів."""
        return ProductRecord(
            product_id=product_id,
            source_url=source_url,
            title=fields.title,
            description=fields.description,
            price=fields.price,
            original_price=fields.original_price,
            currency=fields.currency,
            images=tuple(fields.images),
            videos=tuple(fields.videos),
            variants=tuple(fields.variants),
            specifications=fields.specifications,
            shipping=tuple(fields.shipping),
            supplier=fields.supplier,
            stock=fields.stock,
            scraped_at=scraped_at or datetime.now(timezone.utc),
        )

    async def extract_record(self, snapshot: PageSnapshot, *, product_id: str, source_url: str) -> ProductRecord:
        """📦 extract + build_record одним викликом."""
        return self.build_record(await self.extract(snapshot), product_id=product_id, source_url=source_url)


__all__ = ["DEFAULT_EXTRACTORS", "ExtractedFields", "ProductPageExtractor"]
