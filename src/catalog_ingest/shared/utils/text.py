# 🧼 catalog_ingest/shared/utils/text.py
"""
🧼 Очищення текстових полів, отриманих зі сторінки товару.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re                                                  # 🔤 Регулярні вирази
from typing import Optional                                # 🧰 Типізація

# ================================
# 📦 ПАТЕРНИ
# ================================
_BRACKETED = re.compile(r"\[.*?\]")                        # 🏷️ [HOT SALE], [2024 NEW]
_PARENTHESIZED = re.compile(r"\(.*?\)")                    # 🏷️ (free shipping), (sale)
_DISALLOWED = re.compile(r"[^\w\s.,'&-]|_")                # 🚫 Усе, крім літер/цифр/пробілів/.,'&-
_WHITESPACE = re.compile(r"\s+")


def norm_ws(text: Optional[str]) -> str:
    """Стискає послідовності пробілів і обрізає краї."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def clean_title(raw: Optional[str]) -> str:
    """
    🏷️ Готує назву товару до показу.

    Прибирає промо-фрагменти у `[...]` та `(...)`, сторонні символи, зайві пробіли
    і переводить кожне слово у Title Case. Довжина не обмежується.
    """
    if not raw:
        return ""
    text = _BRACKETED.sub(" ", str(raw))
    text = _PARENTHESIZED.sub(" ", text)
    text = _DISALLOWED.sub("", text)
    words = norm_ws(text).split(" ")
    return " ".join(word[:1].upper() + word[1:].lower() for word in words if word)


__all__ = ["clean_title", "norm_ws"]
