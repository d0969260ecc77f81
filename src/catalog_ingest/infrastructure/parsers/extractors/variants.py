# 🎨 catalog_ingest/infrastructure/parsers/extractors/variants.py
"""
🎨 Стратегії для SKU-варіантів і таблиці характеристик.

🔹 Варіанти: `skuMap` у скриптах → масив `variants` у скриптах → DOM-перемикачі SKU.
🔹 Характеристики: таблиці → списки `dl` → JSON-LD `additionalProperty`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re	# 🧵 Пошук JSON-літералів у скриптах
from typing import Any, Dict, List, Mapping, Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.domain.products.entities import Variant	# 🎨 Доменна сутність
from catalog_ingest.shared.utils.number import parse_price	# 💰 Розбір цін

from .base import (
    FieldExtractor,
    PageSnapshot,
    _absolutize,
    _attr_to_str,
    _decode_json_after,
    _norm_ws,
    logger,
)
from .json_ld import additional_properties_from_json_ld

# ================================
# 📦 ПАТЕРНИ ТА СЕЛЕКТОРИ
# ================================
_SKU_MAP = re.compile(r"[\"']?skuMap[\"']?\s*[:=]\s*(?=\{)")
_VARIANTS_ARRAY = re.compile(r"[\"']?variants[\"']?\s*[:=]\s*(?=\[)")

SKU_ITEM_SELECTOR = '[class*="sku-item"], [class*="variant-item"], [class*="option-item"]'
UNAVAILABLE_CLASSES = ("disabled", "sold-out")
DOM_IN_STOCK = 999	# 📦 Доступний DOM-варіант без відомої кількості

SPEC_ROW_SELECTORS = (
    '[class*="specification"] tr',
    '[class*="specs"] tr',
    '[class*="attribute"] tr',
    ".product-attribute tr",
    '[data-pl="specification"] tr',
)


def _to_int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _attributes(raw: Any) -> Dict[str, str]:
    return {str(k): str(v) for k, v in raw.items()} if isinstance(raw, Mapping) else {}


# ================================
# 🎨 ВАРІАНТИ
# ================================
def variants_from_sku_map(snapshot: PageSnapshot) -> List[Variant]:
    """`skuMap = {"<sku>": {"skuName": ..., "price": ..., "stock": ...}}`."""
    variants: List[Variant] = []
    for content in snapshot.script_texts():
        sku_map = _decode_json_after(content, _SKU_MAP)
        if not isinstance(sku_map, dict):
            continue
        for sku_id, data in sku_map.items():
            data = data if isinstance(data, dict) else {}
            variants.append(
                Variant(
                    sku_id=str(sku_id),
                    name=str(data.get("skuName") or sku_id),
                    attributes=_attributes(data.get("attributes")),
                    price=parse_price(data.get("price")),
                    stock=_to_int(data.get("stock")),
                    image=_absolutize(str(data.get("image") or ""), snapshot.url) or None,
                )
            )
    return variants


def variants_from_array(snapshot: PageSnapshot) -> List[Variant]:
    """`variants = [{"skuId": ..., "name": ..., ...}, ...]`."""
    variants: List[Variant] = []
    for content in snapshot.script_texts():
        items = _decode_json_after(content, _VARIANTS_ARRAY)
        if not isinstance(items, list):
            continue
        for index, item in enumerate(items):
            item = item if isinstance(item, dict) else {}
            variants.append(
                Variant(
                    sku_id=str(item.get("skuId") or f"variant-{index}"),
                    name=str(item.get("name") or f"Variant {index + 1}"),
                    attributes=_attributes(item.get("attributes")),
                    price=parse_price(item.get("price")),
                    stock=_to_int(item.get("stock")),
                    image=_absolutize(str(item.get("image") or ""), snapshot.url) or None,
                )
            )
    return variants


def variants_from_dom(snapshot: PageSnapshot) -> List[Variant]:
    """Перемикачі SKU на сторінці; `disabled`/`sold-out` → залишок 0."""
    variants: List[Variant] = []
    for index, item in enumerate(snapshot.select(SKU_ITEM_SELECTOR)):
        name = _norm_ws(item.get_text(" ", strip=True)) or f"Variant {index + 1}"
        price_el = item.select_one('[class*="price"]')
        price = parse_price(price_el.get_text(" ", strip=True)) if price_el is not None else 0.0
        classes = _attr_to_str(item.get("class"))
        unavailable = any(marker in classes.split() for marker in UNAVAILABLE_CLASSES)
        img = item.select_one("img")
        image = _absolutize(_attr_to_str(img.get("src")), snapshot.url) if img is not None else ""
        variants.append(
            Variant(
                sku_id=_attr_to_str(item.get("data-sku-id")) or _attr_to_str(item.get("data-id")) or f"sku-{index}",
                name=name,
                attributes={"name": name},
                price=price,
                stock=0 if unavailable else DOM_IN_STOCK,
                image=image or None,
            )
        )
    logger.debug("🎨 DOM-варіантів: %d", len(variants))
    return variants


VARIANTS_EXTRACTOR: FieldExtractor[List[Variant]] = FieldExtractor(
    "variants",
    (variants_from_sku_map, variants_from_array, variants_from_dom),
    list,
)


# ================================
# 🧾 ХАРАКТЕРИСТИКИ
# ================================
def specifications_from_tables(snapshot: PageSnapshot) -> Dict[str, str]:
    specs: Dict[str, str] = {}
    for selector in SPEC_ROW_SELECTORS:
        for row in snapshot.select(selector):
            cells = row.select("td, th")
            if len(cells) < 2:
                continue
            key = _norm_ws(cells[0].get_text(" ", strip=True))
            value = _norm_ws(cells[1].get_text(" ", strip=True))
            if key and value:
                specs[key] = value
    return specs


def specifications_from_dl(snapshot: PageSnapshot) -> Dict[str, str]:
    specs: Dict[str, str] = {}
    for dl in snapshot.select("dl"):
        terms = dl.select("dt")
        definitions = dl.select("dd")
        for index, term in enumerate(terms):
            if index >= len(definitions):
                break
            key = _norm_ws(term.get_text(" ", strip=True))
            value = _norm_ws(definitions[index].get_text(" ", strip=True))
            if key and value:
                specs[key] = value
    return specs


def specifications_from_ld(snapshot: PageSnapshot) -> Optional[Dict[str, str]]:
    return additional_properties_from_json_ld(snapshot) or None


SPECIFICATIONS_EXTRACTOR: FieldExtractor[Dict[str, str]] = FieldExtractor(
    "specifications",
    (specifications_from_tables, specifications_from_dl, specifications_from_ld),
    dict,
)


__all__ = [
    "SPECIFICATIONS_EXTRACTOR",
    "VARIANTS_EXTRACTOR",
    "specifications_from_dl",
    "specifications_from_ld",
    "specifications_from_tables",
    "variants_from_array",
    "variants_from_dom",
    "variants_from_sku_map",
]
