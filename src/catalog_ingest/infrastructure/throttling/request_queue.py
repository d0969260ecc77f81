# 📬 catalog_ingest/infrastructure/throttling/request_queue.py
"""
📬 RequestQueue — FIFO-черга асинхронних задач з одним виконавцем.

🔹 `add(task)` повертає `asyncio.Future` з результатом саме цієї задачі.
🔹 Задачі виконуються строго по одній у порядку надходження.
🔹 Помилка задачі падає лише у її future; черга продовжує розбір.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio	# ⏳ Futures та задачі
import logging	# 🧾 Логування
from collections import deque	# 📬 FIFO-буфер
from dataclasses import dataclass	# 🧱 Запис черги
from typing import Any, Awaitable, Callable, Deque, Optional	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.throttling.queue")

Task = Callable[[], Awaitable[Any]]	# 🧩 Фабрика корутини без аргументів


@dataclass(slots=True)
class QueueEntry:
    task: Task
    future: "asyncio.Future[Any]"


class RequestQueue:
    """📬 Послідовне виконання задач; доступ із одного event loop."""

    def __init__(self) -> None:
        self._pending: Deque[QueueEntry] = deque()
        self._processing = False
        self._drain_task: Optional["asyncio.Task[None]"] = None

    def add(self, task: Task) -> "asyncio.Future[Any]":
        """➕ Ставить задачу в кінець черги; викликати всередині запущеного loop."""
        loop = asyncio.get_running_loop()
        future: "asyncio.Future[Any]" = loop.create_future()
        self._pending.append(QueueEntry(task=task, future=future))
        logger.debug("📬 Задачу додано, у черзі: %d", self.queue_length())
        if self._drain_task is None or self._drain_task.done():
            self._drain_task = loop.create_task(self._drain())
        return future

    def queue_length(self) -> int:
        """Кількість задач, що ще не завершились (включно з поточною)."""
        return len(self._pending) + (1 if self._processing else 0)

    def is_processing(self) -> bool:
        return self._processing

    async def _drain(self) -> None:
        while self._pending:
            entry = self._pending.popleft()
            if entry.future.cancelled():
                logger.debug("📬 Пропускаємо скасовану задачу")
                continue
            self._processing = True
            try:
                result = await entry.task()
            except asyncio.CancelledError:
                if not entry.future.done():
                    entry.future.cancel()
                raise
            except Exception as exc:  # noqa: BLE001
                if not entry.future.done():
                    entry.future.set_exception(exc)
            else:
                if not entry.future.done():
                    entry.future.set_result(result)
            finally:
                self._processing = False


__all__ = ["QueueEntry", "RequestQueue", "Task"]
