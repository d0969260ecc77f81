# ⚙️ catalog_ingest/config/__init__.py
"""
⚙️ Конфігурація конвеєра: `ConfigService` та `ScraperConfig`.
"""

from .config_service import ConfigService
from .scraper_config import ProxyConfig, ScraperConfig

__all__ = ["ConfigService", "ProxyConfig", "ScraperConfig"]
