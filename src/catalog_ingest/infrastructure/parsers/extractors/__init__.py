# 🧩 catalog_ingest/infrastructure/parsers/extractors/__init__.py
"""
🧩 Екстрактори полів сторінки товару (по одному `FieldExtractor` на поле).
"""

from .base import FieldExtractor, PageSnapshot, Strategy
from .logistics import SHIPPING_EXTRACTOR, STOCK_EXTRACTOR, SUPPLIER_EXTRACTOR
from .media import IMAGES_EXTRACTOR, VIDEOS_EXTRACTOR
from .pricing import CURRENCY_EXTRACTOR, ORIGINAL_PRICE_EXTRACTOR, PRICE_EXTRACTOR
from .text_fields import DESCRIPTION_EXTRACTOR, TITLE_EXTRACTOR
from .variants import SPECIFICATIONS_EXTRACTOR, VARIANTS_EXTRACTOR

__all__ = [
    "CURRENCY_EXTRACTOR",
    "DESCRIPTION_EXTRACTOR",
    "FieldExtractor",
    "IMAGES_EXTRACTOR",
    "ORIGINAL_PRICE_EXTRACTOR",
    "PRICE_EXTRACTOR",
    "PageSnapshot",
    "SHIPPING_EXTRACTOR",
    "SPECIFICATIONS_EXTRACTOR",
    "STOCK_EXTRACTOR",
    "SUPPLIER_EXTRACTOR",
    "Strategy",
    "TITLE_EXTRACTOR",
    "VARIANTS_EXTRACTOR",
    "VIDEOS_EXTRACTOR",
]
