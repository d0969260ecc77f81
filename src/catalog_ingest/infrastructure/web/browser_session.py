# 🧭 catalog_ingest/infrastructure/web/browser_session.py
"""
🧭 BrowserSession — адаптер Playwright для сторінок товару маркетплейсу.

🔹 Лінивий запуск Chromium з відбитком клієнта та ініціалізаторами маскування.
🔹 Навігація з санітизованою помилкою (`TransientFetchError`), best-effort `networkidle`.
🔹 Очікування ключового контенту «гонкою» селекторів; сторінка завжди закривається.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from playwright.async_api import (	# 🧠 Асинхронний API Playwright
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    async_playwright,
)

# 🔠 Системні імпорти
import asyncio	# ⏳ Гонка очікувань
import logging	# 🧾 Логування подій
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.config.scraper_config import ScraperConfig	# ⚙️ Налаштування
from catalog_ingest.errors import TransientFetchError	# 🚨 Санітизована помилка навігації
from catalog_ingest.infrastructure.throttling.retry import random_delay	# 🎲 Людська пауза
from catalog_ingest.shared.metrics import PARSING_FAILURE, safe_inc	# 📈 Метрики
from catalog_ingest.shared.utils.logger import LOG_NAME	# 🏷️ Базове ім'я логера

from .fingerprint import ClientFingerprint
from .stealth import InitScriptStealth, PlaywrightStealth, SessionInitializer

logger = logging.getLogger(f"{LOG_NAME}.web")

# ================================
# 📦 КОНСТАНТИ
# ================================
LAUNCH_ARGS: tuple[str, ...] = (
    "--disable-blink-features=AutomationControlled",
    "--disable-features=IsolateOrigins,site-per-process",
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
)

CONTENT_SELECTORS: tuple[str, ...] = (
    '[class*="title"]',
    '[class*="product-title"]',
    "h1",
    '[data-pl="product-title"]',
)	# 🧩 Будь-який з них означає, що основний контент відмалювався

SHIPPING_EXPANDER_SELECTOR = '[class*="shipping"], [class*="delivery"]'


def default_initializers(config: ScraperConfig) -> List[SessionInitializer]:
    """🥷 Власний init-скрипт завжди; `playwright_stealth` — якщо увімкнено."""
    initializers: List[SessionInitializer] = [InitScriptStealth()]
    if config.enable_stealth:
        initializers.append(PlaywrightStealth())
    return initializers


# ================================
# 🏛️ ГОЛОВНИЙ КЛАС
# ================================
class BrowserSession:
    """🧭 Один браузер + один контекст на екземпляр; кожна спроба відкриває свою сторінку."""

    def __init__(
        self,
        config: ScraperConfig,
        fingerprint: ClientFingerprint,
        *,
        initializers: Optional[Sequence[SessionInitializer]] = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ) -> None:
        self._config = config
        self._fingerprint = fingerprint
        self._initializers: List[SessionInitializer] = (
            list(initializers) if initializers is not None else default_initializers(config)
        )
        self._playwright_factory = playwright_factory

        self._playwright: Optional[Playwright] = None	# 🧠 Лінива ініціалізація
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    @property
    def is_started(self) -> bool:
        return self._context is not None

    # ================================
    # 🔌 ЖИТТЄВИЙ ЦИКЛ
    # ================================
    def _launch_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"headless": self._config.headless, "args": list(LAUNCH_ARGS)}
        if self._config.proxy is not None:
            kwargs["proxy"] = self._config.proxy.to_playwright()
        return kwargs

    def _context_kwargs(self) -> Dict[str, Any]:
        fp = self._fingerprint
        return {
            "user_agent": fp.user_agent,
            "viewport": fp.viewport.to_playwright(),
            "locale": fp.locale,
            "timezone_id": fp.timezone,
            "java_script_enabled": True,
            "bypass_csp": True,
            "extra_http_headers": {
                "Accept-Language": fp.accept_language(),
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
                "Accept-Encoding": "gzip, deflate, br",
                "Connection": "keep-alive",
                "Upgrade-Insecure-Requests": "1",
            },
        }

    async def startup(self) -> None:
        """🔌 Запускає Playwright, Chromium і контекст, якщо вони ще не активні."""
        if self._context is not None:
            return

        if self._playwright is None:
            self._playwright = await self._playwright_factory().start()

        launch_kwargs = self._launch_kwargs()
        logger.info(
            "🚀 Запуск Chromium (headless=%s, proxy=%s)…",
            launch_kwargs["headless"], "ON" if "proxy" in launch_kwargs else "OFF",
        )
        browser = await self._playwright.chromium.launch(**launch_kwargs)
        context: Optional[BrowserContext] = None
        try:
            context = await browser.new_context(**self._context_kwargs())
            for initializer in self._initializers:
                await initializer.apply(context, self._fingerprint)
        except Exception:
            logger.error("❌ Не вдалося підготувати контекст, закриваємо Chromium", exc_info=True)
            await self._close_quietly("context", context.close if context else None)
            await self._close_quietly("browser", browser.close)
            raise

        self._browser = browser
        self._context = context
        logger.info("✅ Chromium готовий (ua=%s…, locale=%s)", self._fingerprint.user_agent[:40], self._fingerprint.locale)

    async def shutdown(self) -> None:
        """📴 Закриває контекст, браузер і Playwright; повторний виклик нічого не робить."""
        context, self._context = self._context, None
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None

        await self._close_quietly("context", context.close if context else None)
        await self._close_quietly("browser", browser.close if browser else None)
        await self._close_quietly("playwright", playwright.stop if playwright else None)
        if browser is not None:
            logger.info("🔒 Chromium закрито")

    @staticmethod
    async def _close_quietly(name: str, closer: Optional[Callable[[], Awaitable[Any]]]) -> None:
        """🧹 Best-effort закриття ресурсу Playwright."""
        if closer is None:
            return
        try:
            await closer()
        except Exception:  # noqa: BLE001
            logger.debug("⚠️ Помилка при закритті %s", name, exc_info=True)

    # ================================
    # 📄 СТОРІНКИ
    # ================================
    async def new_page(self) -> Page:
        await self.startup()
        assert self._context is not None
        return await self._context.new_page()

    async def release_page(self, page: Optional[Page]) -> None:
        """🧹 Закриває сторінку, не кидаючи винятків."""
        if page is None:
            return
        try:
            await page.close()
        except Exception:  # noqa: BLE001
            logger.debug("⚠️ Не вдалося закрити сторінку", exc_info=True)

    async def navigate(self, page: Page, url: str) -> None:
        """
        🌐 Переходить на сторінку товару.

        Raises:
            TransientFetchError: будь-який збій `goto`; причина лише у логах.
        """
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=self._config.navigation_timeout_ms)
        except Exception as exc:  # noqa: BLE001
            logger.error("❌ Навігація не вдалася: %s", url, exc_info=True)
            safe_inc(PARSING_FAILURE, source="browser", reason="navigation")
            raise TransientFetchError(url=url, details=type(exc).__name__) from None

        if self._config.network_idle_timeout_ms > 0:
            try:
                await page.wait_for_load_state("networkidle", timeout=self._config.network_idle_timeout_ms)
            except PlaywrightError:
                logger.debug("💤 networkidle не настав за %d мс, продовжуємо", self._config.network_idle_timeout_ms)

    async def wait_for_content(self, page: Page, selectors: Sequence[str] = CONTENT_SELECTORS) -> bool:
        """
        🧩 Чекає першого з ключових селекторів; повертає True, якщо щось зʼявилося.

        Відсутність контенту не є помилкою: сторінка може мати іншу розмітку.
        """
        timeout_ms = self._config.content_wait_timeout_ms
        if timeout_ms <= 0 or not selectors:
            return False

        tasks = [asyncio.ensure_future(page.wait_for_selector(sel, timeout=timeout_ms)) for sel in selectors]
        try:
            done, _ = await asyncio.wait(tasks, timeout=timeout_ms / 1000, return_when=asyncio.FIRST_COMPLETED)
            return any(not task.cancelled() and task.exception() is None for task in done)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    async def expand_shipping(self, page: Page) -> None:
        """🖱️ Best-effort клік по блоку доставки, щоб підвантажити опції."""
        try:
            button = await page.query_selector(SHIPPING_EXPANDER_SELECTOR)
            if button is None:
                return
            await button.click(timeout=2000)
            await random_delay(500, 1000)
        except Exception:  # noqa: BLE001
            logger.debug("🖱️ Не вдалося розгорнути доставку", exc_info=True)


__all__ = ["BrowserSession", "CONTENT_SELECTORS", "LAUNCH_ARGS", "default_initializers"]
