# 🚚 catalog_ingest/infrastructure/parsers/extractors/logistics.py
"""
🚚 Стратегії для доставки, продавця та наявності товару.

🔹 Доставка: блоки shipping/delivery/logistics → назва, вартість, термін, перевізник.
🔹 Продавець: посилання на магазин (id з `store/<digits>`), рейтинг «4.8 out of 5».
🔹 Наявність: видимий індикатор «sold out» → текст «N pieces available» → JSON-LD availability.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re	# 🧵 Розбір текстів доставки/рейтингу
from typing import List, Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.domain.products.entities import ShippingOption, StockStatus, SupplierInfo	# 📦 Сутності
from catalog_ingest.shared.utils.number import parse_price	# 💰 Розбір вартості

from .base import FieldExtractor, PageSnapshot, _absolutize, _attr_to_str, _norm_ws, logger
from .json_ld import availability_from_json_ld, seller_from_json_ld

# ================================
# 🚚 ДОСТАВКА
# ================================
SHIPPING_SELECTORS = (
    '[class*="shipping-option"]',
    '[class*="delivery-option"]',
    '[class*="logistics"]',
)

DEFAULT_SHIPPING_NAME = "Standard Shipping"
DEFAULT_SHIPPING_DAYS = 30

_SHIPPING_NAME = re.compile(r"([A-Za-z\s]+(?:Shipping|Delivery|Express|Standard))", re.IGNORECASE)
_SHIPPING_COST_DOLLAR = re.compile(r"\$\s*([\d.,]+)")
_SHIPPING_COST_CODE = re.compile(
    r"(?:€|£|\bUSD|\bEUR|\bGBP)\s*([\d.,]+)|([\d.,]+)\s*(?:€|£|USD\b|EUR\b|GBP\b)", re.IGNORECASE
)	# 💱 Число лише поруч із валютою
_SHIPPING_DAYS = re.compile(r"(\d+)(?:\s*(?:-|to)\s*(\d+))?\s*days?", re.IGNORECASE)
_SHIPPING_CARRIER = re.compile(r"(?:via|by)\s+([A-Za-z]+)", re.IGNORECASE)
_FREE = re.compile(r"\bfree\b", re.IGNORECASE)


def parse_shipping_text(text: str) -> ShippingOption:
    """
    🚚 Розбирає текст блоку доставки.

    `"Standard Shipping $2.99 Delivery in 15 days via Cainiao"` →
    ShippingOption("Standard Shipping", 2.99, 15, "Cainiao"). Для діапазону
    `"15-20 days"` чи `"15 to 20 days"` береться верхня межа. Число без
    валюти (`$`, `€`, `USD`…) вартістю не вважається.
    """
    name_match = _SHIPPING_NAME.search(text)
    name = _norm_ws(name_match.group(1)) if name_match else DEFAULT_SHIPPING_NAME

    cost_match = _SHIPPING_COST_DOLLAR.search(text)
    if cost_match:
        cost = parse_price(cost_match.group(1))
    elif _FREE.search(text):
        cost = 0.0
    else:
        code_match = _SHIPPING_COST_CODE.search(text)
        cost = parse_price(code_match.group(1) or code_match.group(2)) if code_match else 0.0

    days_match = _SHIPPING_DAYS.search(text)
    days = int(days_match.group(2) or days_match.group(1)) if days_match else DEFAULT_SHIPPING_DAYS
    if days <= 0:
        days = DEFAULT_SHIPPING_DAYS

    carrier_match = _SHIPPING_CARRIER.search(text)
    carrier = carrier_match.group(1) if carrier_match else None

    return ShippingOption(name=name or DEFAULT_SHIPPING_NAME, cost=cost, estimated_days=days, carrier=carrier)


def shipping_from_dom(snapshot: PageSnapshot) -> List[ShippingOption]:
    options: List[ShippingOption] = []
    for selector in SHIPPING_SELECTORS:
        for el in snapshot.select(selector):
            text = _norm_ws(el.get_text(" ", strip=True))
            if not text:
                continue
            option = parse_shipping_text(text)
            if option not in options:	# ♻️ Вкладені блоки дають однакові опції
                options.append(option)
    return options


def default_shipping() -> List[ShippingOption]:
    return [ShippingOption(name=DEFAULT_SHIPPING_NAME, cost=0.0, estimated_days=DEFAULT_SHIPPING_DAYS)]


SHIPPING_EXTRACTOR: FieldExtractor[List[ShippingOption]] = FieldExtractor(
    "shipping",
    (shipping_from_dom,),
    default_shipping,
)


# ================================
# 🏪 ПРОДАВЕЦЬ
# ================================
STORE_LINK_SELECTOR = '[class*="store"] a, [class*="seller"] a, a[href*="store"]'
RATING_SELECTOR = '[class*="rating"], [class*="score"]'

_STORE_ID = re.compile(r"store/(\d+)")
_RATING = re.compile(r"([\d.]+)\s*(?:out of|/)?\s*5", re.IGNORECASE)


def _rating_from_dom(snapshot: PageSnapshot) -> Optional[float]:
    el = snapshot.select_one(RATING_SELECTOR)
    if el is None:
        return None
    match = _RATING.search(el.get_text(" ", strip=True))
    if not match:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None


def supplier_from_dom(snapshot: PageSnapshot) -> Optional[SupplierInfo]:
    link = snapshot.select_one(STORE_LINK_SELECTOR)
    if link is None:
        return None
    href = _attr_to_str(link.get("href")).strip()
    id_match = _STORE_ID.search(href)
    return SupplierInfo(
        id=id_match.group(1) if id_match else "",
        name=_norm_ws(link.get_text(" ", strip=True)) or "Unknown Store",
        store_url=_absolutize(href, snapshot.url),
        rating=_rating_from_dom(snapshot),
    )


def supplier_from_ld(snapshot: PageSnapshot) -> Optional[SupplierInfo]:
    seller = seller_from_json_ld(snapshot)
    if not seller:
        return None
    store_url = _absolutize(str(seller.get("url") or ""), snapshot.url)
    id_match = _STORE_ID.search(store_url)
    return SupplierInfo(
        id=id_match.group(1) if id_match else "",
        name=str(seller.get("name")),
        store_url=store_url,
    )


SUPPLIER_EXTRACTOR: FieldExtractor[SupplierInfo] = FieldExtractor(
    "supplier",
    (supplier_from_dom, supplier_from_ld),
    SupplierInfo,
)


# ================================
# 📦 НАЯВНІСТЬ
# ================================
OUT_OF_STOCK_SELECTORS = (
    '[class*="out-of-stock"]',
    '[class*="sold-out"]',
    '[class*="unavailable"]',
    ".product-unavailable",
)

_STOCK_COUNT = re.compile(r"(\d+)\s*(?:pieces?|items?|units?)\s*(?:left|available)", re.IGNORECASE)
_HIDDEN_STYLE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE)
_OUT_OF_STOCK_AVAILABILITY = ("outofstock", "soldout", "discontinued")


async def stock_from_live_indicator(snapshot: PageSnapshot) -> Optional[StockStatus]:
    """👀 Видимий на живій сторінці індикатор «немає в наявності»."""
    page = snapshot.page
    if page is None:
        return None
    for selector in OUT_OF_STOCK_SELECTORS:
        element = await page.query_selector(selector)
        if element is not None and await element.is_visible():
            logger.debug("📦 Видимий індикатор відсутності: %s", selector)
            return StockStatus(available=False, count=0)
    return None


def stock_from_static_indicator(snapshot: PageSnapshot) -> Optional[StockStatus]:
    """📄 Офлайн-варіант: індикатор без `hidden`/`display:none` (лише без живої сторінки)."""
    if snapshot.page is not None:
        return None
    for selector in OUT_OF_STOCK_SELECTORS:
        for el in snapshot.select(selector):
            if el.has_attr("hidden") or _HIDDEN_STYLE.search(_attr_to_str(el.get("style"))):
                continue
            return StockStatus(available=False, count=0)
    return None


def stock_from_text(snapshot: PageSnapshot) -> Optional[StockStatus]:
    match = _STOCK_COUNT.search(snapshot.body_text())
    if not match:
        return None
    count = int(match.group(1))
    return StockStatus(available=count > 0, count=count)


def stock_from_ld(snapshot: PageSnapshot) -> Optional[StockStatus]:
    availability = (availability_from_json_ld(snapshot) or "").lower()
    if not availability:
        return None
    if any(marker in availability for marker in _OUT_OF_STOCK_AVAILABILITY):
        return StockStatus(available=False, count=0)
    if "instock" in availability:
        return StockStatus(available=True)
    return None


STOCK_EXTRACTOR: FieldExtractor[StockStatus] = FieldExtractor(
    "stock",
    (stock_from_live_indicator, stock_from_static_indicator, stock_from_text, stock_from_ld),
    StockStatus,
)


__all__ = [
    "DEFAULT_SHIPPING_DAYS",
    "DEFAULT_SHIPPING_NAME",
    "SHIPPING_EXTRACTOR",
    "STOCK_EXTRACTOR",
    "SUPPLIER_EXTRACTOR",
    "default_shipping",
    "parse_shipping_text",
    "shipping_from_dom",
    "stock_from_ld",
    "stock_from_live_indicator",
    "stock_from_static_indicator",
    "stock_from_text",
    "supplier_from_dom",
    "supplier_from_ld",
]
