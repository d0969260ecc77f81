# 💰 catalog_ingest/infrastructure/parsers/extractors/pricing.py
"""
💰 Стратегії для ціни, старої ціни та валюти.

Ціна рахується знайденою лише якщо вона > 0: нульові плейсхолдери на кшталт
`US $0.00` пропускаються, і пошук іде далі по стратегіях.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4.element import Tag	# 🧱 Вузол DOM

# 🔠 Системні імпорти
import re	# 🧵 Пошук коду валюти
from typing import Iterable, Iterator, Optional, Set	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.shared.utils.number import parse_price	# 💰 Розбір цін

from .base import FieldExtractor, PageSnapshot
from .json_ld import currency_from_json_ld, raw_price_from_json_ld

# ================================
# 📦 СЕЛЕКТОРИ
# ================================
PRICE_SELECTORS = (
    '[class*="price-current"]',
    '[data-pl="price"]',
    ".uniform-banner-box-price",
    ".product-price-value",
    '[class*="price"]',
)

ORIGINAL_PRICE_SELECTORS = (
    '[class*="price-original"]',
    '[class*="original-price"]',
    '[class*="was-price"]',
    ".uniform-banner-box-price-original",
)

_CURRENCY_CODE = re.compile(r"\b(USD|EUR|GBP|CNY|RUB|JPY|CAD|AUD)\b")
_CURRENCY_SYMBOLS = (
    ("US $", "USD"),
    ("US$", "USD"),
    ("€", "EUR"),
    ("£", "GBP"),
    ("₽", "RUB"),
    ("¥", "CNY"),
    ("$", "USD"),
)	# 🔎 Порядок важливий: "US $" раніше за "$"
_ISO_CODE = re.compile(r"^[A-Za-z]{3}$")


def _original_price_ids(snapshot: PageSnapshot) -> Set[int]:
    return {id(el) for selector in ORIGINAL_PRICE_SELECTORS for el in snapshot.select(selector)}


def _current_price_elements(snapshot: PageSnapshot) -> Iterator[Tag]:
    """🚫 Елементи поточної ціни без закресленої старої (і всього всередині неї)."""
    skip = _original_price_ids(snapshot)
    for selector in PRICE_SELECTORS:
        for el in snapshot.select(selector):
            if id(el) in skip or any(id(parent) in skip for parent in el.parents):
                continue
            yield el


def _first_positive_price(elements: Iterable[Tag]) -> Optional[float]:
    for el in elements:
        price = parse_price(el.get_text(" ", strip=True))
        if price > 0:
            return price
    return None


# ================================
# 💰 ПОТОЧНА ЦІНА
# ================================
def price_from_dom(snapshot: PageSnapshot) -> Optional[float]:
    return _first_positive_price(_current_price_elements(snapshot))


def price_from_meta(snapshot: PageSnapshot) -> Optional[float]:
    for selector in ('meta[itemprop="price"]', 'meta[property="product:price:amount"]'):
        price = parse_price(snapshot.meta_content(selector))
        if price > 0:
            return price
    return None


def price_from_json_ld(snapshot: PageSnapshot) -> Optional[float]:
    price = parse_price(raw_price_from_json_ld(snapshot))
    return price if price > 0 else None


PRICE_EXTRACTOR: FieldExtractor[float] = FieldExtractor(
    "price",
    (price_from_dom, price_from_meta, price_from_json_ld),
    float,
)


# ================================
# 🏷️ СТАРА ЦІНА
# ================================
def original_price_from_dom(snapshot: PageSnapshot) -> Optional[float]:
    return _first_positive_price(el for selector in ORIGINAL_PRICE_SELECTORS for el in snapshot.select(selector))


ORIGINAL_PRICE_EXTRACTOR: FieldExtractor[Optional[float]] = FieldExtractor(
    "original_price",
    (original_price_from_dom,),
    lambda: None,
)


# ================================
# 💱 ВАЛЮТА
# ================================
def _as_iso_code(value: Optional[str]) -> Optional[str]:
    code = (value or "").strip()
    return code.upper() if _ISO_CODE.match(code) else None


def currency_from_ld(snapshot: PageSnapshot) -> Optional[str]:
    return _as_iso_code(currency_from_json_ld(snapshot))


def currency_from_meta(snapshot: PageSnapshot) -> Optional[str]:
    return _as_iso_code(
        snapshot.meta_content('meta[property="product:price:currency"]')
        or snapshot.meta_content('meta[itemprop="priceCurrency"]')
    )


def currency_from_price_text(snapshot: PageSnapshot) -> Optional[str]:
    """💱 Код або символ валюти у тексті ціни."""
    for el in _current_price_elements(snapshot):
        text = el.get_text(" ", strip=True)
        if not text:
            continue
        match = _CURRENCY_CODE.search(text.upper())
        if match:
            return match.group(1)
        for symbol, code in _CURRENCY_SYMBOLS:
            if symbol in text:
                return code
    return None


CURRENCY_EXTRACTOR: FieldExtractor[str] = FieldExtractor(
    "currency",
    (currency_from_ld, currency_from_meta, currency_from_price_text),
    lambda: "USD",
)


__all__ = [
    "CURRENCY_EXTRACTOR",
    "ORIGINAL_PRICE_EXTRACTOR",
    "PRICE_EXTRACTOR",
    "currency_from_ld",
    "currency_from_meta",
    "currency_from_price_text",
    "original_price_from_dom",
    "price_from_dom",
    "price_from_json_ld",
    "price_from_meta",
]
