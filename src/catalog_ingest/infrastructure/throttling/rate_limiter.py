# 🚦 catalog_ingest/infrastructure/throttling/rate_limiter.py
"""
🚦 RateLimiter — мінімальний інтервал між послідовними запитами до маркетплейсу.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio	# ⏳ Неблокуюча пауза
import logging	# 🧾 Логування
import time	# ⏱️ Монотонний годинник
from typing import Awaitable, Callable, Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.throttling.rate_limiter")

Clock = Callable[[], float]	# ⏱️ Секунди (монотонно)
Sleep = Callable[[float], Awaitable[None]]	# 💤 Пауза у секундах


class RateLimiter:
    """
    🚦 Гарантує паузу щонайменше `min_interval_ms` між завершеними очікуваннями.

    Стан: Idle (ще не було запитів) → Armed (зафіксовано час останнього запиту).
    Лімітер не дає взаємного виключення: два конкурентні виклики можуть обчислити
    однакову паузу. Для строгого порядку «один запит за раз» поєднуйте його з
    `RequestQueue`.
    """

    def __init__(
        self,
        min_interval_ms: int = 3000,
        *,
        clock: Optional[Clock] = None,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self.min_interval_ms = int(min_interval_ms)
        self.last_request_at: Optional[float] = None	# 🕒 None → Idle
        self._clock: Clock = clock or time.monotonic
        self._sleep: Sleep = sleep or asyncio.sleep

    @property
    def is_armed(self) -> bool:
        return self.last_request_at is not None

    async def wait_for_next_request(self) -> None:
        """⏳ Чекає залишок інтервалу (якщо треба) і фіксує момент запиту."""
        if self.is_armed and self.min_interval_ms > 0:
            elapsed_ms = (self._clock() - self.last_request_at) * 1000
            remaining_ms = self.min_interval_ms - elapsed_ms
            if remaining_ms > 0:
                logger.debug("🚦 Rate limit: чекаємо %.0f мс", remaining_ms)
                await self._sleep(remaining_ms / 1000)
        self.last_request_at = self._clock()


__all__ = ["RateLimiter"]
