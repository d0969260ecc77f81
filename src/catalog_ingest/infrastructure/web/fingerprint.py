# 🪪 catalog_ingest/infrastructure/web/fingerprint.py
"""
🪪 Генерація «відбитка» клієнта для браузерного контексту.

Відбиток обирається один раз на екземпляр оркестратора і не змінюється,
щоб уся сесія виглядала як один і той самий десктопний Chrome.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import random	# 🎲 Вибір із пулів
from dataclasses import dataclass	# 🧱 Іммутабельні DTO
from typing import Dict, Optional, Tuple	# 🧰 Типізація

# ================================
# 📦 ПУЛИ ЗНАЧЕНЬ
# ================================
USER_AGENTS: Tuple[str, ...] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
)

VIEWPORTS: Tuple[Tuple[int, int], ...] = (
    (1920, 1080),
    (1366, 768),
    (1536, 864),
    (1440, 900),
    (1280, 720),
)

LOCALES: Tuple[str, ...] = ("en-US", "en-GB", "en-CA", "en-AU")

TIMEZONES: Tuple[str, ...] = (
    "America/New_York",
    "America/Los_Angeles",
    "America/Chicago",
    "Europe/London",
    "Asia/Singapore",
)


@dataclass(frozen=True, slots=True)
class Viewport:
    width: int
    height: int

    def to_playwright(self) -> Dict[str, int]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True, slots=True)
class ClientFingerprint:
    """🪪 UA + розмір вікна + локаль + часовий пояс."""

    user_agent: str
    viewport: Viewport
    locale: str
    timezone: str

    @property
    def language(self) -> str:
        """`en-GB` → `en`."""
        return self.locale.split("-")[0]

    def accept_language(self) -> str:
        return f"{self.locale},{self.language};q=0.9"


def generate_fingerprint(rng: Optional[random.Random] = None) -> ClientFingerprint:
    """🎲 Випадковий відбиток з пулів (передайте `rng` із seed для відтворюваності)."""
    chooser = rng or random
    width, height = chooser.choice(VIEWPORTS)
    return ClientFingerprint(
        user_agent=chooser.choice(USER_AGENTS),
        viewport=Viewport(width=width, height=height),
        locale=chooser.choice(LOCALES),
        timezone=chooser.choice(TIMEZONES),
    )


__all__ = [
    "ClientFingerprint",
    "LOCALES",
    "TIMEZONES",
    "USER_AGENTS",
    "VIEWPORTS",
    "Viewport",
    "generate_fingerprint",
]
