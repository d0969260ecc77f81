# 🥷 catalog_ingest/infrastructure/web/stealth.py
"""
🥷 Ініціалізатори браузерного контексту, що маскують автоматизацію.

🔹 `InitScriptStealth` — власний init-скрипт (webdriver, plugins, languages, chrome, permissions).
🔹 `PlaywrightStealth` — патчі бібліотеки `playwright_stealth`.
🔹 Обидва реалізують протокол `SessionInitializer` і виконуються до першої навігації.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from playwright.async_api import BrowserContext	# 🪟 Контекст Playwright
from playwright_stealth import Stealth	# 🥷 Прибирає сигнатуру браузера

# 🔠 Системні імпорти
import json	# 🧾 Серіалізація списку мов у JS
import logging	# 🧾 Логування
from typing import Protocol, runtime_checkable	# 🧰 Контракти

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.shared.utils.logger import LOG_NAME

from .fingerprint import ClientFingerprint

logger = logging.getLogger(f"{LOG_NAME}.web.stealth")

_INIT_SCRIPT_TEMPLATE = """
() => {
  Object.defineProperty(navigator, 'webdriver', { get: () => undefined });
  Object.defineProperty(navigator, 'plugins', { get: () => [1, 2, 3, 4, 5] });
  Object.defineProperty(navigator, 'languages', { get: () => __LANGUAGES__ });
  window.chrome = { runtime: {} };
  const originalQuery = window.navigator.permissions && window.navigator.permissions.query;
  if (originalQuery) {
    window.navigator.permissions.query = (parameters) =>
      parameters.name === 'notifications'
        ? Promise.resolve({ state: Notification.permission })
        : originalQuery.call(window.navigator.permissions, parameters);
  }
}
"""


@runtime_checkable
class SessionInitializer(Protocol):
    """Крок підготовки контексту перед будь-якою навігацією."""

    async def apply(self, context: BrowserContext, fingerprint: ClientFingerprint) -> None: ...


class InitScriptStealth:
    """🥷 Додає init-скрипт, що ховає ознаки WebDriver."""

    @staticmethod
    def build_script(fingerprint: ClientFingerprint) -> str:
        languages = json.dumps([fingerprint.locale, fingerprint.language])
        return "(" + _INIT_SCRIPT_TEMPLATE.strip().replace("__LANGUAGES__", languages) + ")()"

    async def apply(self, context: BrowserContext, fingerprint: ClientFingerprint) -> None:
        await context.add_init_script(self.build_script(fingerprint))
        logger.debug("🥷 Init-скрипт маскування додано (locale=%s)", fingerprint.locale)


class PlaywrightStealth:
    """🥷 Патчі `playwright_stealth` на рівні контексту."""

    def __init__(self, stealth: Stealth | None = None) -> None:
        self._stealth = stealth or Stealth()

    async def apply(self, context: BrowserContext, fingerprint: ClientFingerprint) -> None:
        await self._stealth.apply_stealth_async(context)
        logger.debug("🥷 playwright_stealth застосовано")


__all__ = ["InitScriptStealth", "PlaywrightStealth", "SessionInitializer"]
