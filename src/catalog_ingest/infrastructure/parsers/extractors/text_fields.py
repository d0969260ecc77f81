# 🏷️ catalog_ingest/infrastructure/parsers/extractors/text_fields.py
"""
🏷️ Стратегії для текстових полів: назва та опис товару.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from .base import FieldExtractor, PageSnapshot, _norm_ws
from .json_ld import description_from_json_ld, name_from_json_ld

# ================================
# 📦 СЕЛЕКТОРИ
# ================================
TITLE_SELECTORS = (
    '[data-pl="product-title"]',
    'h1[class*="product-title"]',
    '[class*="product-title"]',
    "h1",
    ".product-title-text",
)

DESCRIPTION_SELECTORS = (
    '[data-pl="product-description"]',
    "#product-description",
    ".product-description",
    '[class*="product-description"]',
    'div[class*="description"]',
)


# ================================
# 🏷️ НАЗВА
# ================================
def title_from_dom(snapshot: PageSnapshot) -> Optional[str]:
    for selector in TITLE_SELECTORS:
        text = snapshot.text_of(selector)
        if text:
            return text
    return None


def title_from_og(snapshot: PageSnapshot) -> Optional[str]:
    return snapshot.meta_content('meta[property="og:title"]') or None


def title_from_page_title(snapshot: PageSnapshot) -> Optional[str]:
    """`Baby Dress | AliExpress` → `Baby Dress`."""
    raw = snapshot.page_title or snapshot.text_of("title")
    return _norm_ws(raw.split("|")[0]) or None


TITLE_EXTRACTOR: FieldExtractor[str] = FieldExtractor(
    "title",
    (title_from_dom, name_from_json_ld, title_from_og, title_from_page_title),
    str,
)


# ================================
# 📝 ОПИС
# ================================
def description_from_dom(snapshot: PageSnapshot) -> Optional[str]:
    for selector in DESCRIPTION_SELECTORS:
        text = snapshot.text_of(selector)
        if text:
            return text
    return None


def description_from_meta(snapshot: PageSnapshot) -> Optional[str]:
    return (
        snapshot.meta_content('meta[name="description"]')
        or snapshot.meta_content('meta[property="og:description"]')
        or None
    )


DESCRIPTION_EXTRACTOR: FieldExtractor[str] = FieldExtractor(
    "description",
    (description_from_dom, description_from_json_ld, description_from_meta),
    str,
)


__all__ = [
    "DESCRIPTION_EXTRACTOR",
    "TITLE_EXTRACTOR",
    "description_from_dom",
    "description_from_meta",
    "title_from_dom",
    "title_from_og",
    "title_from_page_title",
]
