# 📊 catalog_ingest/shared/metrics/__init__.py
"""
📊 Пакет метрик Prometheus для конвеєра імпорту.
"""

from __future__ import annotations

# 🧾 Логер
import logging

from catalog_ingest.shared.utils.logger import LOG_NAME

from .parsing import FIELD_DEGRADED, PARSING_FAILURE, PARSING_SUCCESS, SCRAPE_LATENCY

logger = logging.getLogger(f"{LOG_NAME}.metrics")


def safe_inc(counter, **labels) -> None:
    """📈 Інкрементує лічильник; збій метрики ніколи не ламає основний потік."""
    try:
        (counter.labels(**labels) if labels else counter).inc()
    except Exception:  # noqa: BLE001
        logger.debug("⚠️ Неможливо інкрементувати метрику %s", labels, exc_info=True)


# ================================
# 📦 ЕКСПОРТ ПАКЕТУ
# ================================
__all__ = [
    "FIELD_DEGRADED",
    "PARSING_FAILURE",
    "PARSING_SUCCESS",
    "SCRAPE_LATENCY",
    "safe_inc",
]
