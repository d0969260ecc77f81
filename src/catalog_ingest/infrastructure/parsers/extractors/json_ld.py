# 🧾 catalog_ingest/infrastructure/parsers/extractors/json_ld.py
"""
🧾 Утиліти для витягування даних товару з JSON-LD блоків.

🔹 Збирає усі JSON-LD скрипти сторінки та фільтрує лише обʼєкти `Product` (включно з `@graph`).
🔹 Повертає назву, опис, ціну, валюту, зображення, наявність і додаткові властивості.
🔹 Використовується як резервна стратегія майже для кожного поля.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Any, Dict, List, Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from .base import (	# 🔗 Спільні утиліти екстракторів
    JSON_LD_SCRIPT,
    PageSnapshot,
    _absolutize,
    _as_list,
    _norm_ws,
    _try_json_loads,
    logger,
)


# ================================
# 📄 БЛОКИ JSON-LD
# ================================
def json_ld_blocks(snapshot: PageSnapshot) -> List[Any]:
    """📄 Збирає всі JSON-LD скрипти, повертає у вигляді списку обʼєктів."""
    blocks: List[Any] = []
    for script in snapshot.select(JSON_LD_SCRIPT):
        obj = _try_json_loads(script.string or script.get_text() or "")
        if obj is None:
            continue
        for item in _as_list(obj):
            blocks.append(item)
            if isinstance(item, dict) and isinstance(item.get("@graph"), list):
                blocks.extend(item["@graph"])	# 🕸️ Розгортаємо @graph
    logger.debug("📄 JSON-LD: знайдено %d блоків.", len(blocks))
    return blocks


def json_ld_products(snapshot: PageSnapshot) -> List[Dict[str, Any]]:
    """
    📦 Фільтрує обʼєкти продуктів (де @type містить Product).

    Якщо типізованих блоків немає, беремо нетипізовані dict з `offers`/`price`.
    """
    products: List[Dict[str, Any]] = []
    untyped: List[Dict[str, Any]] = []
    for obj in json_ld_blocks(snapshot):
        if not isinstance(obj, dict):
            continue
        types = _as_list(obj.get("@type"))
        if any(str(t).lower() == "product" for t in types):
            products.append(obj)
        elif not types and ("offers" in obj or "price" in obj):
            untyped.append(obj)
    return products or untyped


def extract_offers(offers_obj: Any) -> List[Dict[str, Any]]:
    """🧰 Приводить offers/aggregateOffer до списку пропозицій."""
    if isinstance(offers_obj, dict) and str(offers_obj.get("@type", "")).lower() == "aggregateoffer":
        nested = _as_list(offers_obj.get("offers"))
        raw_offers = [offers_obj, *nested]	# 💰 lowPrice/priceCurrency живуть на самому aggregateOffer
    else:
        raw_offers = _as_list(offers_obj)
    return [offer for offer in raw_offers if isinstance(offer, dict)]


def _first_not_empty(*values: Any) -> Any:
    for value in values:
        if value not in (None, "", [], {}):
            return value
    return None


def _price_from_spec(spec_obj: Any) -> Any:
    """💰 Витягує price з priceSpecification (dict або список)."""
    for spec in _as_list(spec_obj):
        if isinstance(spec, dict) and spec.get("price") not in (None, ""):
            return spec.get("price")
    return None


# ================================
# 🏷️ ПОЛЯ ПРОДУКТУ
# ================================
def name_from_json_ld(snapshot: PageSnapshot) -> Optional[str]:
    """🏷️ Назва товару з JSON-LD."""
    for product in json_ld_products(snapshot):
        name = _norm_ws(str(product.get("name") or ""))
        if name:
            return name
    return None


def description_from_json_ld(snapshot: PageSnapshot) -> Optional[str]:
    """📝 Опис товару (рядок або обʼєкт з @value)."""
    for product in json_ld_products(snapshot):
        description = product.get("description")
        if isinstance(description, dict):
            description = description.get("@value") or description.get("value") or description.get("text")
        if isinstance(description, str):
            cleaned = _norm_ws(description)
            if cleaned:
                return cleaned
    return None


def raw_price_from_json_ld(snapshot: PageSnapshot) -> Any:
    """💰 Сире значення ціни з offers (price → priceSpecification → lowPrice) або з самого Product."""
    for product in json_ld_products(snapshot):
        for offer in extract_offers(product.get("offers")):
            price = _first_not_empty(
                offer.get("price"),
                _price_from_spec(offer.get("priceSpecification")),
                offer.get("lowPrice"),
            )
            if price is not None:
                return price
        if product.get("price") not in (None, ""):
            return product.get("price")
    return None


def currency_from_json_ld(snapshot: PageSnapshot) -> Optional[str]:
    """💱 priceCurrency з offers або з Product."""
    for product in json_ld_products(snapshot):
        for offer in extract_offers(product.get("offers")):
            currency = offer.get("priceCurrency")
            if not currency and isinstance(offer.get("priceSpecification"), dict):
                currency = offer["priceSpecification"].get("priceCurrency")
            if currency:
                return str(currency).strip()
        if product.get("priceCurrency"):
            return str(product["priceCurrency"]).strip()
    return None


def images_from_json_ld(snapshot: PageSnapshot) -> List[str]:
    """🖼️ Усі зображення з JSON-LD, зберігаючи порядок."""
    images: List[str] = []
    for product in json_ld_products(snapshot):
        for item in _as_list(product.get("image")):
            if isinstance(item, dict):
                item = item.get("url") or item.get("contentUrl") or ""
            url = _absolutize(str(item or ""), snapshot.url)
            if url:
                images.append(url)
    return images


def availability_from_json_ld(snapshot: PageSnapshot) -> Optional[str]:
    """📦 Перше значення availability (наприклад `https://schema.org/InStock`)."""
    for product in json_ld_products(snapshot):
        for offer in extract_offers(product.get("offers")):
            availability = offer.get("availability")
            if availability:
                return str(availability)
    return None


def seller_from_json_ld(snapshot: PageSnapshot) -> Optional[Dict[str, Any]]:
    """🏪 offers.seller (Organization) як dict."""
    for product in json_ld_products(snapshot):
        for offer in extract_offers(product.get("offers")):
            seller = offer.get("seller")
            if isinstance(seller, dict) and seller.get("name"):
                return seller
    return None


def additional_properties_from_json_ld(snapshot: PageSnapshot) -> Dict[str, str]:
    """🧾 additionalProperty (PropertyValue) → {name: value}."""
    props: Dict[str, str] = {}
    for product in json_ld_products(snapshot):
        for prop in _as_list(product.get("additionalProperty")):
            if not isinstance(prop, dict):
                continue
            key = _norm_ws(str(prop.get("name") or ""))
            value = _norm_ws(str(prop.get("value") if prop.get("value") is not None else ""))
            if key and value:
                props[key] = value
    return props


__all__ = [
    "additional_properties_from_json_ld",
    "availability_from_json_ld",
    "currency_from_json_ld",
    "description_from_json_ld",
    "extract_offers",
    "images_from_json_ld",
    "json_ld_blocks",
    "json_ld_products",
    "name_from_json_ld",
    "raw_price_from_json_ld",
    "seller_from_json_ld",
]
