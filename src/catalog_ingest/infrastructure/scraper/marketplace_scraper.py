# 🛒 catalog_ingest/infrastructure/scraper/marketplace_scraper.py
"""
🛒 MarketplaceScraper — оркестратор імпорту товару за посиланням.

🔹 Валідує URL ще до черги, лімітера та браузера (`InputError` без повторів).
🔹 Кожна спроба: rate limit → сесія → нова сторінка → навігація → очікування контенту →
   людська пауза → розгортання доставки → знімок → паралельні екстрактори → запис.
🔹 Спроби обгорнуті в `retry_with_backoff`; сторінка закривається завжди.
🔹 `submit()` проводить виклики через FIFO-чергу екземпляра (один запит за раз).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio	# ⏳ Futures та паузи
import logging	# 🧾 Логування
import random	# 🎲 Генератор для відбитка
import time	# ⏱️ Латентність
from typing import Any, Awaitable, Callable, Optional, Tuple	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.config.scraper_config import ScraperConfig
from catalog_ingest.domain.products.entities import ProductRecord
from catalog_ingest.errors import InputError
from catalog_ingest.infrastructure.parsers import PageSnapshot, ProductPageExtractor
from catalog_ingest.infrastructure.throttling import (
    RateLimiter,
    RequestQueue,
    random_delay,
    retry_with_backoff,
)
from catalog_ingest.infrastructure.web import BrowserSession, ClientFingerprint, generate_fingerprint
from catalog_ingest.shared.metrics import PARSING_FAILURE, PARSING_SUCCESS, SCRAPE_LATENCY, safe_inc
from catalog_ingest.shared.utils.logger import LOG_NAME
from catalog_ingest.shared.utils.url_parser_service import (
    extract_product_id,
    is_valid_source_url,
    normalize_url,
)

logger = logging.getLogger(f"{LOG_NAME}.scraper")

Sleep = Callable[[float], Awaitable[None]]


class MarketplaceScraper:
    """
    🛒 Власник браузерної сесії, відбитка, лімітера та черги.

    Екземпляр створює викликач і сам закриває (`close()` або `async with`).
    """

    def __init__(
        self,
        config: Optional[ScraperConfig] = None,
        *,
        fingerprint: Optional[ClientFingerprint] = None,
        session: Optional[BrowserSession] = None,
        rate_limiter: Optional[RateLimiter] = None,
        queue: Optional[RequestQueue] = None,
        page_extractor: Optional[ProductPageExtractor] = None,
        rng: Optional[random.Random] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config or ScraperConfig()
        self._fingerprint = fingerprint or generate_fingerprint(rng)
        self._session = session or BrowserSession(self._config, self._fingerprint)
        self._rate_limiter = rate_limiter or RateLimiter(self._config.min_request_interval_ms, sleep=sleep)
        self._queue = queue or RequestQueue()
        self._extractor = page_extractor or ProductPageExtractor()
        self._sleep = sleep
        self._closed = False

        logger.info(
            "✅ MarketplaceScraper: headless=%s, interval_ms=%s, retries=%s, timeout_ms=%s",
            self._config.headless,
            self._config.min_request_interval_ms,
            self._config.max_retries,
            self._config.navigation_timeout_ms,
        )

    @classmethod
    def from_config_service(cls, **kwargs: Any) -> "MarketplaceScraper":
        """⚙️ Налаштування з `ConfigService` (розділ `scraper.*`)."""
        return cls(ScraperConfig.from_config_service(), **kwargs)

    @property
    def config(self) -> ScraperConfig:
        return self._config

    @property
    def fingerprint(self) -> ClientFingerprint:
        return self._fingerprint

    @property
    def queue(self) -> RequestQueue:
        return self._queue

    async def __aenter__(self) -> "MarketplaceScraper":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ================================
    # 🚪 ПУБЛІЧНИЙ ІНТЕРФЕЙС
    # ================================
    async def scrape_product(self, url: str) -> ProductRecord:
        """
        🛒 Імпортує один товар.

        Raises:
            InputError: посилання не з маркетплейсу або без ідентифікатора.
            Exception: остання помилка після вичерпання повторів (як є).
        """
        started = time.perf_counter()
        product_id, canonical_url = self._validate(url)
        self._closed = False

        try:
            record = await retry_with_backoff(
                lambda: self._attempt(product_id, canonical_url),
                max_attempts=self._config.max_retries,
                base_delay_ms=self._config.retry_base_delay_ms,
                should_retry=lambda exc: not isinstance(exc, InputError),
                sleep=self._sleep,
            )
        except Exception as exc:
            logger.error("❌ Імпорт %s не вдався: %s", canonical_url, type(exc).__name__)
            safe_inc(PARSING_FAILURE, source="scraper", reason=type(exc).__name__)
            raise

        elapsed = time.perf_counter() - started
        try:
            SCRAPE_LATENCY.observe(elapsed)
        except Exception:  # noqa: BLE001
            logger.debug("⚠️ Неможливо записати латентність", exc_info=True)
        safe_inc(PARSING_SUCCESS, source="scraper")
        logger.info("✅ Товар %s імпортовано за %.1f с: %s", product_id, elapsed, record.title[:60])
        return record

    def submit(self, url: str) -> "asyncio.Future[ProductRecord]":
        """📬 Ставить імпорт у чергу екземпляра; результат — у повернутому future."""
        return self._queue.add(lambda: self.scrape_product(url))

    async def close(self) -> None:
        """📴 Звільняє браузер; повторний виклик безпечний і ніколи не кидає."""
        if self._closed:
            return
        self._closed = True
        try:
            await self._session.shutdown()
        except Exception:  # noqa: BLE001
            logger.debug("⚠️ Помилка при закритті сесії", exc_info=True)

    # ================================
    # 🔧 ВНУТРІШНІ КРОКИ
    # ================================
    @staticmethod
    def _validate(url: str) -> Tuple[str, str]:
        """🔗 (product_id, canonical_url) або `InputError`."""
        if not is_valid_source_url(url):
            raise InputError("Invalid AliExpress product URL", url=url)
        canonical_url = normalize_url(url)
        if not canonical_url:
            raise InputError("Could not normalize AliExpress URL", url=url)
        product_id = extract_product_id(canonical_url)
        if not product_id:
            raise InputError("Could not extract product ID from URL", url=url)
        return product_id, canonical_url

    async def _attempt(self, product_id: str, canonical_url: str) -> ProductRecord:
        await self._rate_limiter.wait_for_next_request()
        await self._session.startup()
        page = await self._session.new_page()
        try:
            await self._session.navigate(page, canonical_url)
            await self._session.wait_for_content(page)
            low, high = self._config.humanize_delay_ms
            await random_delay(low, high, sleep=self._sleep)
            await self._session.expand_shipping(page)
            snapshot = await PageSnapshot.capture(page, canonical_url)
            return await self._extractor.extract_record(snapshot, product_id=product_id, source_url=canonical_url)
        finally:
            await self._session.release_page(page)


async def scrape_product(url: str, config: Optional[ScraperConfig] = None) -> ProductRecord:
    """🛒 Одноразовий імпорт: створює оркестратор, імпортує товар, закриває браузер."""
    async with MarketplaceScraper(config) as scraper:
        return await scraper.scrape_product(url)


__all__ = ["MarketplaceScraper", "scrape_product"]
