# 🔁 catalog_ingest/infrastructure/throttling/retry.py
"""
🔁 Повтори з експоненційним бекоффом і «людські» випадкові паузи.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio	# ⏳ Паузи
import logging	# 🧾 Логування
import random	# 🎲 Випадкові затримки
from typing import Awaitable, Callable, Optional, TypeVar	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.throttling.retry")

T = TypeVar("T")
Sleep = Callable[[float], Awaitable[None]]


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay_ms: int = 1000,
    *,
    should_retry: Optional[Callable[[Exception], bool]] = None,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """
    🔁 Викликає `operation` до `max_attempts + 1` разів.

    Перед повтором `i` (з нуля) чекає `base_delay_ms * 2**i`. Після вичерпання
    спроб піднімається остання помилка без обгортки. `should_retry(exc) -> False`
    зупиняє повтори одразу.
    """
    attempts = max(0, int(max_attempts)) + 1
    for attempt in range(attempts):
        try:
            return await operation()
        except Exception as exc:
            is_last = attempt == attempts - 1
            if is_last or (should_retry is not None and not should_retry(exc)):
                raise
            delay_ms = base_delay_ms * (2 ** attempt)
            logger.warning(
                "🔁 Спроба %d/%d невдала (%s) → повтор через %d мс",
                attempt + 1, attempts, type(exc).__name__, delay_ms,
            )
            await sleep(delay_ms / 1000)
    raise RuntimeError("unreachable")  # pragma: no cover


async def random_delay(min_ms: int, max_ms: int, *, sleep: Sleep = asyncio.sleep) -> float:
    """🎲 Рівномірна пауза у межах [min_ms, max_ms]; повертає фактичні мілісекунди."""
    low, high = sorted((max(0, int(min_ms)), max(0, int(max_ms))))
    delay_ms = random.uniform(low, high)
    await sleep(delay_ms / 1000)
    return delay_ms


__all__ = ["random_delay", "retry_with_backoff"]
