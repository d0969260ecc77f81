# 🚨 catalog_ingest/errors/custom_errors.py
"""
🚨 Ієрархія помилок конвеєра імпорту.

🔹 `InputError` — посилання не пройшло валідацію/нормалізацію (без ретраїв).
🔹 `TransientFetchError` — збій навігації чи мережі; повідомлення санітизоване, причина лише в логах.
🔹 Деградація окремих полів не є помилкою і сюди не потрапляє.
🔹 Після вичерпання ретраїв назовні летить остання оригінальна помилка без обгортки.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging														# 🧾 Логування створення помилок
from typing import Dict, Optional									# 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.shared.utils.logger import LOG_NAME				# 🏷️ Базове імʼя логера

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors")


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    """⚠️ Стабільні коди для логів і метрик."""

    INPUT = "input_error"											# 🔗 Некоректний URL
    NETWORK = "network_error"										# 🌐 Навігація / мережа
    UNKNOWN = "unknown_error"										# ❓ Резервний код


# ================================
# 🧠 БАЗОВИЙ КЛАС
# ================================
class AppError(Exception):
    """🧠 Базова помилка застосунку з безпечним для користувача повідомленням."""

    code: str = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message										# 👀 Текст для викликача
        self.details = details										# 🔒 Діагностика (не показується)

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Формує словник для `logger.extra`."""
        extra: Dict[str, object] = {"error_code": self.code}
        if self.details:
            extra["details"] = self.details
        return extra


# ================================
# 🧾 КОНКРЕТНІ ВИНЯТКИ
# ================================
class InputError(AppError, ValueError):
    """🔗 URL не належить маркетплейсу або з нього не виходить ідентифікатор товару."""

    code = ErrorCode.INPUT

    def __init__(self, message: str, *, url: Optional[str] = None, details: Optional[str] = None) -> None:
        super().__init__(message, details=details)
        self.url = url
        logger.debug("🧾 InputError created", extra={"url": url})

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url:
            extra["url"] = self.url
        return extra


class TransientFetchError(AppError):
    """🌐 Тимчасовий збій завантаження сторінки; придатний для повтору."""

    code = ErrorCode.NETWORK
    DEFAULT_MESSAGE = "Failed to navigate to product page. Please try again later."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        url: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message or self.DEFAULT_MESSAGE, details=details)
        self.url = url

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url:
            extra["url"] = self.url
        return extra


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "AppError",
    "ErrorCode",
    "InputError",
    "TransientFetchError",
]
