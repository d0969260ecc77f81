# 📈 catalog_ingest/shared/metrics/parsing.py
"""
📈 Prometheus-метрики конвеєра витягування товарів.

🔹 `PARSING_SUCCESS` / `PARSING_FAILURE` — результати завантаження та складання запису.
🔹 `FIELD_DEGRADED` — поле впало на дефолт після вичерпання всіх стратегій.
🔹 `SCRAPE_LATENCY` — тривалість повного виклику `scrape_product`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter, Histogram                      # 📊 Prometheus-метрики

# ================================
# 📊 ЛІЧИЛЬНИКИ
# ================================
PARSING_SUCCESS = Counter(
    "catalog_ingest_parsing_success_total",
    "Successfully assembled product records",
    ["source"],
)

PARSING_FAILURE = Counter(
    "catalog_ingest_parsing_failure_total",
    "Failed fetch or extraction attempts",
    ["source", "reason"],
)

FIELD_DEGRADED = Counter(
    "catalog_ingest_field_degraded_total",
    "Fields that fell back to their safe default",
    ["field"],
)

# ================================
# ⏱️ ГІСТОГРАМА ЛАТЕНТНОСТІ
# ================================
SCRAPE_LATENCY = Histogram(
    "catalog_ingest_scrape_seconds",
    "Wall time of one scrape_product call",
)


__all__ = [
    "FIELD_DEGRADED",
    "PARSING_FAILURE",
    "PARSING_SUCCESS",
    "SCRAPE_LATENCY",
]
