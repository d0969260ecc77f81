# ⚙️ catalog_ingest/config/config_service.py
"""
⚙️ config_service.py — єдиний доступ до статичної конфігурації конвеєра.

🔹 Клас `ConfigService`:
- Завантажує `config.yaml` пакета, потім перекриває значення з `.env` / змінних середовища.
- Надає метод `.get("scraper.headless", default, cast=bool)` із крапковими ключами.
- Працює як Singleton — конфігурація зчитується лише один раз (див. `reload()`).
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Callable, Dict, Optional  # 🧩 Типізація

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.config")

# ================================
# 🌱 ENV → КЛЮЧІ КОНФІГУ
# ================================
ENV_KEYS: Dict[str, str] = {
    "SCRAPER_HEADLESS": "scraper.headless",
    "SCRAPER_MIN_REQUEST_INTERVAL_MS": "scraper.min_request_interval_ms",
    "SCRAPER_MAX_RETRIES": "scraper.max_retries",
    "SCRAPER_NAVIGATION_TIMEOUT_MS": "scraper.navigation_timeout_ms",
    "SCRAPER_PROXY_SERVER": "scraper.proxy.server",
    "SCRAPER_PROXY_USERNAME": "scraper.proxy.username",
    "SCRAPER_PROXY_PASSWORD": "scraper.proxy.password",
    "LOG_LEVEL": "logging.level",
}                                           # 🔁 Змінні середовища, що перекривають YAML

_BOOL_TRUE = {"1", "true", "yes", "on", "y", "t"}


def _to_bool(value: Any) -> bool:
    """🔀 bool із рядків ENV ('false' → False)."""
    if isinstance(value, str):
        return value.strip().lower() in _BOOL_TRUE
    return bool(value)


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх конфігураційних параметрів конвеєра.
    Пріоритет: config.yaml → .env/ENV.
    """

    _instance: Optional["ConfigService"] = None   # 🧩 Singleton-екземпляр
    _config: Dict[str, Any]                       # 📦 Обʼєднана конфігурація
    YAML_PATH: Path = Path(__file__).parent / "config.yaml"

    def __new__(cls):
        # ✅ Патерн Singleton: створюємо лише один екземпляр
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = {}
            cls._instance._load_all_configs()
            logger.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    def reload(self) -> None:
        """♻️ Перечитує всі джерела (потрібно після зміни ENV у тестах)."""
        self._config = {}
        self._load_all_configs()

    def _load_all_configs(self) -> None:
        """📥 Завантажує YAML і накладає ENV-перекриття."""
        # --- 1. YAML-файл ---
        try:
            with open(self.YAML_PATH, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (FileNotFoundError, yaml.YAMLError) as e:
            logger.warning("⚠️ Не вдалося завантажити config.yaml: %s", e)

        # --- 2. .env / ENV ---
        load_dotenv()  # 🔐 Ініціалізує змінні середовища з файлу .env
        env_vars = {
            dotted: os.getenv(env_name)
            for env_name, dotted in ENV_KEYS.items()
            if os.getenv(env_name) not in (None, "")
        }
        self._deep_update(self._config, self._unflatten_dict(env_vars))

        logger.info("✅ Конфігурацію успішно завантажено.")

    def get(self, key: str, default: Any = None, cast: Optional[Callable[[Any], Any]] = None) -> Any:
        """
        🔑 Отримує значення за крапковим ключем (наприклад: 'scraper.max_retries').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення, якщо ключ не знайдено.
            cast (Callable | None): Приведення типу (`int`, `bool`, …); при збої → default.

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]                 # 🔎 Переходимо глибше в структуру
            else:
                return default
        if value is None or cast is None:
            return value if value is not None else default
        try:
            return _to_bool(value) if cast is bool else cast(value)
        except (TypeError, ValueError):
            logger.warning("⚠️ Ключ '%s': значення %r не приводиться до %s", key, value, cast)
            return default

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================
    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """🔁 'scraper.proxy.server' → {'scraper': {'proxy': {'server': ...}}}"""
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split(".")
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """🔁 Рекурсивно обʼєднує два словники."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)
            else:
                source[key] = value
