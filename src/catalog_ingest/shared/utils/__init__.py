# 🧰 catalog_ingest/shared/utils/__init__.py
"""
🧰 Спільні утиліти: логування, розбір URL, очищення тексту та цін.
"""

from __future__ import annotations

# 🔠 Логування
from .logger import (
    LOG_NAME,
    get_logger,
    init_logging,
    init_logging_from_config,
)

# 🌐 Парсинг URL
from .url_parser_service import extract_product_id, is_valid_source_url, normalize_url

# 🧼 Текст і числа
from .number import parse_price, sanitize_price_text
from .text import clean_title, norm_ws

# 🧊 Незмінні структури
from .immutables import freeze_str_mapping, is_frozen_mapping, thaw

# ================================
# 📦 ЕКСПОРТ ПАКЕТУ
# ================================
__all__ = [
    # logging
    "LOG_NAME",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
    # url parsing
    "extract_product_id",
    "is_valid_source_url",
    "normalize_url",
    # sanitizers
    "clean_title",
    "norm_ws",
    "parse_price",
    "sanitize_price_text",
    # immutables
    "freeze_str_mapping",
    "is_frozen_mapping",
    "thaw",
]
