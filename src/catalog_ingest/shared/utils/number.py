# 💰 catalog_ingest/shared/utils/number.py
"""
💰 Розбір цін зі сторінок маркетплейсу.

🔹 `sanitize_price_text` — прибирає валютні символи, коди та пробіли.
🔹 `parse_price` — перше числове значення як float (0.0, якщо числа немає).

Особливості розбору: мінус ігнорується (результат ≥ 0),
з кількох чисел береться перше, `"12.99.99"` → `12.99`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re                                                  # 🔤 Регулярні вирази
from typing import Any, Optional                           # 🧰 Типізація

# ================================
# 📦 ПАТЕРНИ
# ================================
_US_DOLLAR_PREFIX = re.compile(r"US\s*\$", re.IGNORECASE)	# 💵 "US $12.99" / "US$12.99"
_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]")
_CURRENCY_CODES = re.compile(r"USD|EUR|GBP|CNY|RUB|JPY|CAD|AUD", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_NUMERIC_TOKEN = re.compile(r"[\d,]+\.?\d*")               # 🔢 Перше число з тисячними комами


def sanitize_price_text(raw: Optional[str]) -> str:
    """🧼 Повертає текст ціни без валютних позначок і пробілів."""
    if not raw:
        return ""
    cleaned = _US_DOLLAR_PREFIX.sub("", str(raw), count=1)
    cleaned = _CURRENCY_SYMBOLS.sub("", cleaned)
    cleaned = _CURRENCY_CODES.sub("", cleaned)
    return _WHITESPACE.sub("", cleaned).strip()


def parse_price(raw: Any) -> float:
    """
    💰 Перетворює текст ціни у число.

    Args:
        raw: Рядок на кшталт "$12.99", "US $1,234.56", "12.99 EUR" (числа приймаються як є).

    Returns:
        float: Невідʼємна ціна; 0.0 для порожнього або нечислового входу.
    """
    if isinstance(raw, bool) or raw is None:
        return 0.0
    if isinstance(raw, (int, float)):
        return abs(float(raw))
    match = _NUMERIC_TOKEN.search(sanitize_price_text(raw))
    if not match:
        return 0.0
    try:
        return float(match.group(0).replace(",", ""))
    except ValueError:
        return 0.0                                         # 🪣 Токен складався лише з ком


__all__ = ["parse_price", "sanitize_price_text"]
