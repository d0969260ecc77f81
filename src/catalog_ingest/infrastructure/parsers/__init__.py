# 🧩 catalog_ingest/infrastructure/parsers/__init__.py
"""🧩 Розбір сторінки товару: знімок, екстрактори полів, складання запису."""

from .extractors import FieldExtractor, PageSnapshot
from .product_page_extractor import ExtractedFields, ProductPageExtractor

__all__ = ["ExtractedFields", "FieldExtractor", "PageSnapshot", "ProductPageExtractor"]
