# 🧾 catalog_ingest/config/scraper_config.py
"""
🧾 Налаштування оркестратора імпорту товарів.

🔹 `ScraperConfig` — іммутабельні параметри браузера, ретраїв і троттлінгу.
🔹 `ProxyConfig` — опційний проксі для запуску Chromium.
🔹 Збирається з `ConfigService` (розділ `scraper.*`) або напряму з ENV.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging	# 🧾 Логування ініціалізації та валідації
import os	# 🌱 Зчитування ENV
from dataclasses import dataclass, field	# 🧱 Dataclass для опцій
from typing import Any, Dict, Optional, Tuple	# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.shared.utils.logger import LOG_NAME	# 🏷️ Базове імʼя логера

from .config_service import ConfigService

logger = logging.getLogger(f"{LOG_NAME}.config.scraper")	# 🧾 Модульний логер

_BOOL_TRUE = {"1", "true", "yes", "on", "y", "t"}	# ✅ Булеві true-представлення
_BOOL_FALSE = {"0", "false", "no", "off", "n", "f"}	# ❌ Булеві false-представлення


# ================================
# 🛠️ ХЕЛПЕРИ КОНВЕРСІЙ
# ================================
def _parse_bool(val: Optional[str], default: bool) -> bool:
    """🔀 Перетворює ENV-рядок у bool з fallback."""
    if val is None:
        return default
    cleaned = val.strip().lower()
    if cleaned in _BOOL_TRUE:
        return True
    if cleaned in _BOOL_FALSE:
        return False
    logger.warning("⚠️ Некоректне булеве значення '%s' → fallback=%s.", val, default)
    return default


def _to_int(val: Optional[str], default_val: int) -> int:
    """🔢 Конвертує рядок у int із захистом від помилок."""
    try:
        return int(val) if val is not None else default_val
    except (TypeError, ValueError):
        logger.warning("⚠️ Неможливо перетворити '%s' у int → fallback=%s.", val, default_val)
        return default_val


def _to_delay_range(val: Any, default: Tuple[int, int]) -> Tuple[int, int]:
    """⏱️ '2000,5000' / [2000, 5000] → (2000, 5000)."""
    if val is None or val == "":
        return default
    parts = val.split(",") if isinstance(val, str) else list(val)
    try:
        low, high = (int(str(p).strip()) for p in parts)
    except (TypeError, ValueError):
        logger.warning("⚠️ Некоректний діапазон затримки '%s' → fallback=%s.", val, default)
        return default
    return (low, high)


# ================================
# 🧱 МОДЕЛІ ОПЦІЙ
# ================================
@dataclass(frozen=True, slots=True)
class ProxyConfig:
    """🛰️ Проксі для Chromium."""

    server: str
    username: Optional[str] = None
    password: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.server or not self.server.strip():
            raise ValueError("proxy.server must be a non-empty string")

    def to_playwright(self) -> Dict[str, str]:
        """Словник у форматі `chromium.launch(proxy=...)`."""
        proxy = {"server": self.server}
        if self.username:
            proxy["username"] = self.username
        if self.password:
            proxy["password"] = self.password
        return proxy


@dataclass(frozen=True, slots=True)
class ScraperConfig:
    """🧱 Іммутабельні параметри одного екземпляра `MarketplaceScraper`."""

    headless: bool = True	# 🙈 Режим без інтерфейсу
    min_request_interval_ms: int = 3000	# 🚦 Мінімальний інтервал між запитами
    max_retries: int = 3	# 🔁 Кількість повторів після першої спроби
    navigation_timeout_ms: int = 30_000	# ⏳ Таймаут page.goto
    proxy: Optional[ProxyConfig] = None	# 🛰️ Опційний проксі
    retry_base_delay_ms: int = 2000	# ⏱️ База експоненційного бекоффу
    network_idle_timeout_ms: int = 10_000	# 💤 Очікування networkidle (best-effort)
    content_wait_timeout_ms: int = 10_000	# 🧩 Очікування ключових селекторів
    humanize_delay_ms: Tuple[int, int] = field(default=(2000, 5000))	# 🧍 Людська пауза перед витягуванням
    enable_stealth: bool = True	# 🥷 Додатково застосовувати playwright_stealth

    def __post_init__(self) -> None:
        """🛡️ Валідує інваріанти одразу після створення."""
        if self.min_request_interval_ms < 0:
            raise ValueError("min_request_interval_ms must be >= 0")
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.navigation_timeout_ms <= 0:
            raise ValueError("navigation_timeout_ms must be > 0")
        if self.retry_base_delay_ms < 0:
            raise ValueError("retry_base_delay_ms must be >= 0")
        if self.network_idle_timeout_ms < 0:
            raise ValueError("network_idle_timeout_ms must be >= 0")
        if self.content_wait_timeout_ms < 0:
            raise ValueError("content_wait_timeout_ms must be >= 0")
        low, high = self.humanize_delay_ms
        if low < 0 or high < low:
            raise ValueError("humanize_delay_ms must be (min, max) with 0 <= min <= max")
        logger.debug("🛡️ ScraperConfig ініціалізовано з валідними значеннями.")

    # ================================
    # 🧱 КОНСТРУКТОРИ
    # ================================
    @classmethod
    def default(cls) -> "ScraperConfig":
        """🧾 Повертає дефолтний набір опцій."""
        return cls()

    @classmethod
    def from_config_service(cls, config_service: Optional[ConfigService] = None) -> "ScraperConfig":
        """⚙️ Будує опції з розділу `scraper.*` конфігурації."""
        cfg = config_service or ConfigService()
        defaults = cls.default()

        proxy_server = cfg.get("scraper.proxy.server")
        proxy = (
            ProxyConfig(
                server=str(proxy_server),
                username=cfg.get("scraper.proxy.username"),
                password=cfg.get("scraper.proxy.password"),
            )
            if proxy_server
            else None
        )

        return cls(
            headless=cfg.get("scraper.headless", defaults.headless, cast=bool),
            min_request_interval_ms=cfg.get(
                "scraper.min_request_interval_ms", defaults.min_request_interval_ms, cast=int
            ),
            max_retries=cfg.get("scraper.max_retries", defaults.max_retries, cast=int),
            navigation_timeout_ms=cfg.get(
                "scraper.navigation_timeout_ms", defaults.navigation_timeout_ms, cast=int
            ),
            proxy=proxy,
            retry_base_delay_ms=cfg.get(
                "scraper.retry_base_delay_ms", defaults.retry_base_delay_ms, cast=int
            ),
            network_idle_timeout_ms=cfg.get(
                "scraper.network_idle_timeout_ms", defaults.network_idle_timeout_ms, cast=int
            ),
            content_wait_timeout_ms=cfg.get(
                "scraper.content_wait_timeout_ms", defaults.content_wait_timeout_ms, cast=int
            ),
            humanize_delay_ms=_to_delay_range(
                cfg.get("scraper.humanize_delay_ms"), defaults.humanize_delay_ms
            ),
            enable_stealth=cfg.get("scraper.enable_stealth", defaults.enable_stealth, cast=bool),
        )

    @classmethod
    def from_env(cls, prefix: str = "SCRAPER_") -> "ScraperConfig":
        """🌱 Будує опції з ENV (невідомі значення ігноруємо)."""
        defaults = cls.default()

        proxy_server = os.getenv(f"{prefix}PROXY_SERVER")
        proxy = (
            ProxyConfig(
                server=proxy_server,
                username=os.getenv(f"{prefix}PROXY_USERNAME") or None,
                password=os.getenv(f"{prefix}PROXY_PASSWORD") or None,
            )
            if proxy_server
            else None
        )

        logger.info("🌱 ScraperConfig зібрано з ENV (prefix=%s).", prefix)
        return cls(
            headless=_parse_bool(os.getenv(f"{prefix}HEADLESS"), defaults.headless),
            min_request_interval_ms=_to_int(
                os.getenv(f"{prefix}MIN_REQUEST_INTERVAL_MS"), defaults.min_request_interval_ms
            ),
            max_retries=_to_int(os.getenv(f"{prefix}MAX_RETRIES"), defaults.max_retries),
            navigation_timeout_ms=_to_int(
                os.getenv(f"{prefix}NAVIGATION_TIMEOUT_MS"), defaults.navigation_timeout_ms
            ),
            proxy=proxy,
            retry_base_delay_ms=_to_int(
                os.getenv(f"{prefix}RETRY_BASE_DELAY_MS"), defaults.retry_base_delay_ms
            ),
            network_idle_timeout_ms=_to_int(
                os.getenv(f"{prefix}NETWORK_IDLE_TIMEOUT_MS"), defaults.network_idle_timeout_ms
            ),
            content_wait_timeout_ms=_to_int(
                os.getenv(f"{prefix}CONTENT_WAIT_TIMEOUT_MS"), defaults.content_wait_timeout_ms
            ),
            humanize_delay_ms=_to_delay_range(
                os.getenv(f"{prefix}HUMANIZE_DELAY_MS"), defaults.humanize_delay_ms
            ),
            enable_stealth=_parse_bool(os.getenv(f"{prefix}ENABLE_STEALTH"), defaults.enable_stealth),
        )


__all__ = ["ProxyConfig", "ScraperConfig"]
