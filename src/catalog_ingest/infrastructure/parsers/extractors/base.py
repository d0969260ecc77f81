# 🧾 catalog_ingest/infrastructure/parsers/extractors/base.py
"""
🧾 Базові абстракції для витягування полів товару.

🔹 `PageSnapshot` — зафіксований стан сторінки (HTML + BeautifulSoup + живий `Page`).
🔹 `FieldExtractor` — упорядкований список стратегій; перший непорожній результат перемагає.
🔹 Нормалізує текстові дані й посилання для стратегій.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4 import BeautifulSoup	# 🥣 Парсимо HTML-документи
from bs4.element import Tag	# 🧱 Типи DOM-вузлів
from playwright.async_api import Page	# 🧠 Живий хендл сторінки

# 🔠 Системні імпорти
import inspect	# 🔍 Розрізняємо sync/async стратегії
import json	# 🧾 Десеріалізація JSON
import logging	# 🧾 Логування подій
import re	# 🧵 Регулярні вирази
from dataclasses import dataclass, field	# 🧱 Датакласи
from typing import Any, Awaitable, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, Union	# 🧰 Типи
from urllib.parse import urljoin	# 🔗 Відносні посилання

# 🧩 Внутрішні модулі проєкту
from catalog_ingest.shared.metrics import FIELD_DEGRADED, safe_inc	# 📈 Метрика деградацій
from catalog_ingest.shared.utils.logger import LOG_NAME	# 🏷️ Базова назва логера
from catalog_ingest.shared.utils.text import norm_ws	# 🧼 Стискання пробілів

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.parser.extractor")	# 🧾 Логер для екстракторів

# ================================
# 📦 КОНСТАНТИ МОДУЛЯ
# ================================
HTML_PARSER = "lxml"	# 🥣 Парсер DOM за замовчуванням
JSON_LD_SCRIPT = 'script[type="application/ld+json"]'	# 🧾 Селектор JSON-LD

T = TypeVar("T")
Strategy = Callable[["PageSnapshot"], Union[Any, Awaitable[Any]]]	# 🧩 Стратегія: snapshot → значення | None


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _norm_ws(text: Optional[str]) -> str:
    """Нормалізує пробіли у переданому рядку."""
    return norm_ws(text)


def _attr_to_str(value: Any) -> str:
    """Повертає перше непорожнє текстове значення атрибута."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):	# 📚 class та інші мультиатрибути
        return " ".join(str(v) for v in value if v)
    return str(value)


def _as_list(x: Any) -> List[Any]:
    """Гарантує отримання списку елементів."""
    if x is None:
        return []
    if isinstance(x, list):
        return x
    return [x]


def _try_json_loads(raw: str) -> Optional[Any]:
    """Безпечно десеріалізує JSON, повертаючи None у разі помилок."""
    raw_clean = (raw or "").strip()
    if not raw_clean:
        return None
    try:
        return json.loads(raw_clean)
    except ValueError as exc:
        logger.debug("🐛 Помилка декодування JSON: %s", exc)
        return None


def _decode_json_after(content: str, pattern: re.Pattern[str]) -> Optional[Any]:
    """
    Декодує JSON-літерал, що йде одразу після `pattern` у тексті скрипта.

    `raw_decode` коректно обробляє вкладені обʼєкти, тож хвіст скрипта ігнорується.
    """
    match = pattern.search(content or "")
    if not match:
        return None
    try:
        value, _ = json.JSONDecoder().raw_decode(content, match.end())
    except ValueError as exc:
        logger.debug("🐛 Не вдалося декодувати JSON після %r: %s", pattern.pattern, exc)
        return None
    return value


def _absolutize(src: str, base_url: str = "") -> str:
    """Уніфікує URL: `//cdn` → `https://cdn`, відносні шляхи → від `base_url`."""
    head = (src or "").strip().split(" ")[0]	# ✂️ Відсікаємо дані srcset
    if not head:
        return ""
    if head.startswith("//"):
        return f"https:{head}"
    if head.startswith(("http://", "https://")):
        return head
    return urljoin(base_url, head) if base_url else ""


def _uniq_keep_order(items: Sequence[str]) -> List[str]:
    """Унікальні непорожні значення зі збереженням порядку."""
    seen: set[str] = set()
    result: List[str] = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            result.append(item)
    return result


def _is_empty(value: Any) -> bool:
    """Порожній результат стратегії: None, порожній рядок чи колекція."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)) or hasattr(value, "keys"):
        return len(value) == 0
    return False


# ================================
# 📸 ЗНІМОК СТОРІНКИ
# ================================
@dataclass(frozen=True, slots=True)
class PageSnapshot:
    """
    📸 Незмінний знімок сторінки товару для стратегій витягування.

    `page` — живий хендл Playwright (None у юніт-тестах та офлайн-розборі).
    """

    html: str
    url: str = ""
    page_title: str = ""
    page: Optional[Page] = None
    soup: BeautifulSoup = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "soup", BeautifulSoup(self.html or "", HTML_PARSER))

    @classmethod
    async def capture(cls, page: Page, url: str) -> "PageSnapshot":
        """📸 Знімає HTML і заголовок з відкритої сторінки."""
        html = await page.content()
        title = await page.title()
        logger.debug("📸 Snapshot %s: %d байт HTML", url, len(html or ""))
        return cls(html=html, url=url, page_title=title or "", page=page)

    # ================================
    # 🔎 ДОСТУП ДО DOM
    # ================================
    def select(self, selector: str) -> List[Tag]:
        return [el for el in self.soup.select(selector) if isinstance(el, Tag)]

    def select_one(self, selector: str) -> Optional[Tag]:
        el = self.soup.select_one(selector)
        return el if isinstance(el, Tag) else None

    def text_of(self, selector: str) -> str:
        """Текст першого елемента з непорожнім вмістом."""
        for el in self.select(selector):
            text = _norm_ws(el.get_text(" ", strip=True))
            if text:
                return text
        return ""

    def meta_content(self, selector: str) -> str:
        el = self.select_one(selector)
        return _norm_ws(_attr_to_str(el.get("content"))) if el is not None else ""

    def script_texts(self) -> List[str]:
        """Вміст усіх `<script>` без JSON-LD."""
        texts: List[str] = []
        for script in self.select("script"):
            if (script.get("type") or "").lower() == "application/ld+json":
                continue
            content = script.string or script.get_text() or ""
            if content.strip():
                texts.append(content)
        return texts

    def body_text(self) -> str:
        body = self.soup.body or self.soup
        return _norm_ws(body.get_text(" ", strip=True))


# ================================
# 🧩 ЕКСТРАКТОР ПОЛЯ
# ================================
class FieldExtractor(Generic[T]):
    """
    🧩 Поле товару + упорядковані стратегії його витягування.

    Кожна стратегія повертає значення або None. Виняток стратегії не зупиняє
    пошук: він логується на рівні debug і береться наступна. Якщо жодна не дала
    результату, повертається `default_factory()` і рахується деградація поля.
    """

    def __init__(
        self,
        name: str,
        strategies: Sequence[Strategy],
        default_factory: Callable[[], T],
    ) -> None:
        self.name = name
        self.strategies: Tuple[Strategy, ...] = tuple(strategies)
        self.default_factory = default_factory

    def __repr__(self) -> str:
        return f"FieldExtractor({self.name!r}, strategies={len(self.strategies)})"

    async def extract(self, snapshot: PageSnapshot) -> T:
        for strategy in self.strategies:
            strategy_name = getattr(strategy, "__name__", repr(strategy))
            try:
                value = strategy(snapshot)
                if inspect.isawaitable(value):
                    value = await value
            except Exception as exc:  # noqa: BLE001
                logger.debug("🐛 %s: стратегія %s впала: %s", self.name, strategy_name, exc, exc_info=True)
                continue
            if not _is_empty(value):
                logger.debug("✅ %s ← %s", self.name, strategy_name)
                return value

        logger.info("🪣 %s: жодна стратегія не спрацювала → дефолт.", self.name)
        safe_inc(FIELD_DEGRADED, field=self.name)
        return self.default_factory()


__all__ = [
    "FieldExtractor",
    "HTML_PARSER",
    "JSON_LD_SCRIPT",
    "PageSnapshot",
    "Strategy",
]
