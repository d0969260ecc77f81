# 📜 catalog_ingest/shared/utils/logger.py
"""
📜 Єдина схема логування для конвеєра імпорту каталогу.

🔹 Налаштовує кореневий логер `catalog_ingest` (консоль + файл із ротацією).
🔹 Підтримує JSON-формат для файлу та приглушення сторонніх бібліотек (playwright, asyncio).
🔹 Видає дочірні логери через `get_logger("web")` → `catalog_ingest.web`.
"""
from __future__ import annotations

# 🔠 Системні імпорти
import json									# 📦 Серіалізація payload логів
import logging									# 🪵 Робота з логерами Python
import sys									# 🧵 Потік stdout
import threading								# 🔒 Захист ініціалізації
from dataclasses import dataclass, field					# 🧱 DTO-конфіг логування
from logging.handlers import TimedRotatingFileHandler			# 📁 Хендлер з ротацією файлів
from pathlib import Path								# 📂 Операції з файловими шляхами
from typing import Any, Dict, Optional, Union				# 🧰 Типізація

# ================================
# 🧾 КОНСТАНТИ МОДУЛЯ
# ================================
LOG_NAME: str = "catalog_ingest"						# 🏷️ Базовий префікс логерів
PLAIN_FORMAT: str = "%(asctime)s [%(levelname)s] - (%(name)s).%(funcName)s(%(lineno)d) - %(message)s"	# 📄 Формат для файлів
CONSOLE_FORMAT: str = "[%(levelname).1s] %(name)s: %(message)s"	# 🖥️ Консольний формат

_RESERVED_RECORD_KEYS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}							# 🚫 Службові поля LogRecord

_lock = threading.Lock()							# 🔒 Блокуємо одночасну ініціалізацію


# ================================
# 🧾 DTO КОНФІГУРАЦІЇ
# ================================
@dataclass
class LoggingConfig:
    """Налаштування логування з дефолтними значеннями."""
    level: str = "INFO"							# 🎚️ Глобальний рівень
    console: bool = True							# 🖥️ Консольний вивід
    json: bool = False								# 📦 JSON-формат для файлу
    file: Optional[str] = "logs/ingest.log"			# 📁 Лог-файл (None → без файлу)
    when: str = "midnight"						# ⏰ Періодичність ротації
    backup_count: int = 7							# ♻️ Скільки копій зберігати
    suppress: Dict[str, str] = field(default_factory=dict)		# 🙊 Сторонні логери та їх рівні
    console_level: str = "INFO"						# 🖥️ Рівень консолі
    file_level: str = "DEBUG"						# 📁 Рівень файлу


# ================================
# 🧰 ФОРМАТТЕРИ
# ================================
class JsonFormatter(logging.Formatter):
    """Форматує записи у плоский JSON разом із `extra`-полями."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "func": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():			# 🔎 Додаємо extra-поля (url, error_code…)
            if key.startswith("_") or key in _RESERVED_RECORD_KEYS or key in payload:
                continue
            try:
                json.dumps(value)						# ✅ Перевіряємо серіалізованість
                payload[key] = value
            except (TypeError, ValueError):
                payload[key] = str(value)				# 🔄 Нестерилізований обʼєкт → рядок
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _to_level(value: Union[str, int, None], default: int) -> int:
    """Перетворює рядок/інт у числовий рівень логування."""
    if isinstance(value, int):
        return value
    if not value:
        return default
    return getattr(logging, str(value).upper(), default)


def _make_file_handler(cfg: LoggingConfig, fmt: logging.Formatter) -> logging.Handler:
    """Готує файловий хендлер із ротацією за часом."""
    log_path = Path(str(cfg.file))					# 📂 Конвертуємо шлях
    log_path.parent.mkdir(parents=True, exist_ok=True)		# 🧱 Гарантуємо існування директорії
    handler = TimedRotatingFileHandler(
        filename=str(log_path),
        when=cfg.when,
        backupCount=cfg.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(fmt)
    return handler


def _suppress_third_party(suppress: Dict[str, str]) -> None:
    """Знижує рівні логування для сторонніх бібліотек."""
    for name, level in (suppress or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.WARNING))


# ================================
# 🚀 ПУБЛІЧНИЙ API
# ================================
def init_logging(
    *,
    level: Optional[str] = None,
    console: Optional[bool] = None,
    json_mode: Optional[bool] = None,
    file: Optional[str] = "logs/ingest.log",
    suppress: Optional[Dict[str, str]] = None,
    console_level: Optional[Union[str, int]] = None,
    file_level: Optional[Union[str, int]] = None,
) -> logging.Logger:
    """Ініціалізує кореневий логер `catalog_ingest` за єдиною схемою."""
    with _lock:
        cfg = LoggingConfig(
            level=level or "INFO",
            console=True if console is None else bool(console),
            json=bool(json_mode),
            file=file,
            suppress=suppress or {"playwright": "WARNING", "asyncio": "WARNING"},
            console_level=str(console_level or level or "INFO"),
            file_level=str(file_level or level or "DEBUG"),
        )

        root_logger = logging.getLogger(LOG_NAME)			# 🏷️ Кореневий логер застосунку
        root_logger.setLevel(min(
            _to_level(cfg.level, logging.INFO),
            _to_level(cfg.console_level, logging.INFO),
            _to_level(cfg.file_level, logging.DEBUG) if cfg.file else logging.CRITICAL,
        ))

        for handler in list(root_logger.handlers):			# 🧹 Прибираємо хендлери попередньої ініціалізації
            root_logger.removeHandler(handler)
            handler.close()

        if cfg.console:
            console_handler = logging.StreamHandler(sys.stdout)	# 🖥️ Потік stdout
            console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
            console_handler.setLevel(_to_level(cfg.console_level, logging.INFO))
            root_logger.addHandler(console_handler)

        if cfg.file:
            fmt_file = JsonFormatter() if cfg.json else logging.Formatter(PLAIN_FORMAT)	# 📄 Формат файлу
            file_handler = _make_file_handler(cfg, fmt_file)
            file_handler.setLevel(_to_level(cfg.file_level, logging.DEBUG))
            root_logger.addHandler(file_handler)

        _suppress_third_party(cfg.suppress)

        root_logger.info(
            "✅ Logging initialized | level=%s console=%s json=%s file=%s",
            cfg.level.upper(),
            "ON" if cfg.console else "OFF",
            "ON" if cfg.json else "OFF",
            cfg.file or "OFF",
        )
        return root_logger


def init_logging_from_config(config: Optional[Dict[str, Any]]) -> logging.Logger:
    """
    Ініціалізує логування з розділу `logging` конфігурації.

    Args:
        config: Словник `ConfigService().get("logging")`.

    Returns:
        logging.Logger: Кореневий логер застосунку.
    """
    node = config or {}							# 🧾 Гарантуємо словник
    return init_logging(
        level=node.get("level"),
        console=node.get("console"),
        json_mode=node.get("json"),
        file=node.get("file", "logs/ingest.log"),
        suppress=node.get("suppress"),
        console_level=node.get("console_level"),
        file_level=node.get("file_level"),
    )


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """Повертає дочірній логер `catalog_ingest.<suffix>`."""
    return logging.getLogger(LOG_NAME if not suffix else f"{LOG_NAME}.{suffix}")
