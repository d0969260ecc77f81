# 🔗 catalog_ingest/shared/utils/url_parser_service.py
"""
🔗 url_parser_service.py — розбір, валідація та канонізація посилань маркетплейсу.

🔹 `extract_product_id` — знаходить ідентифікатор товару у шляху чи query.
🔹 `is_valid_source_url` — whitelist доменів, захист від SSRF, наявність ідентифікатора.
🔹 `normalize_url` — канонічна форма `https://www.aliexpress.com/item/<id>.html`.

Жодна функція не кидає винятків: на порожній/некоректний вхід повертається «немає збігу».
"""

from __future__ import annotations

# 🔠 Системні імпорти
import ipaddress                                           # 🧮 Розпізнавання IP-літералів
import re                                                  # 🔤 Регулярні вирази для шляхів
from typing import Optional, Tuple                         # 🧰 Типізація
from urllib.parse import parse_qs, urlsplit                # 🌐 Парсинг URL

# ================================
# 📦 КОНСТАНТИ
# ================================
CANONICAL_HOST = "www.aliexpress.com"                      # 🏠 Канонічний хост
CANONICAL_TEMPLATE = "https://" + CANONICAL_HOST + "/item/{product_id}.html"	# 🧾 Шаблон канонічного URL

MARKETPLACE_DOMAINS: Tuple[str, ...] = ("aliexpress.com", "aliexpress.us")	# 🌍 Родина доменів
_ALLOWED_SCHEMES = ("http", "https")

_PATH_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"/item/(\d+)\.html"),
    re.compile(r"/item/(\d+)"),
    re.compile(r"/product/(\d+)\.html"),
    re.compile(r"/product/(\d+)"),
)                                                          # 🔎 Патерни у порядку пріоритету
_QUERY_KEY = "productId"
_BLOCKED_HOSTS = ("localhost",)


# ================================
# 🕵️‍♂️ ПРИВАТНІ ДОПОМІЖНІ
# ================================
def _split(url: Optional[str]):
    """Безпечно розбирає URL; None якщо вхід порожній чи зламаний."""
    if not url or not isinstance(url, str):
        return None
    try:
        parts = urlsplit(url.strip())
        _ = parts.port                                     # ⚠️ Невалідний порт кидає ValueError
    except ValueError:
        return None
    if parts.scheme.lower() not in _ALLOWED_SCHEMES or not parts.hostname:
        return None
    return parts


def _is_marketplace_host(hostname: str) -> bool:
    """🌍 Хост належить родині доменів (включно з мобільними/регіональними піддоменами)."""
    host = hostname.lower().rstrip(".")
    return any(host == domain or host.endswith("." + domain) for domain in MARKETPLACE_DOMAINS)


def _is_internal_host(hostname: str) -> bool:
    """🛡️ Відсікає localhost та IP-літерали (SSRF)."""
    host = hostname.lower().strip("[]")
    if host in _BLOCKED_HOSTS:
        return True
    try:
        ipaddress.ip_address(host)
        return True                                        # 🚫 Будь-яка IP-адреса замість домену
    except ValueError:
        return False


# ================================
# 🧐 ПУБЛІЧНІ ФУНКЦІЇ
# ================================
def extract_product_id(url: Optional[str]) -> Optional[str]:
    """
    🧩 Витягує ідентифікатор товару.

    Підтримує `/item/<id>.html`, `/item/<id>`, `/product/<id>.html`, `/product/<id>`
    та параметр `productId=<id>`. Ідентифікатор непрозорий: ведучі нулі зберігаються.
    """
    parts = _split(url)
    if parts is None or not _is_marketplace_host(parts.hostname or ""):
        return None

    for pattern in _PATH_PATTERNS:
        match = pattern.search(parts.path)
        if match:
            return match.group(1)

    values = parse_qs(parts.query).get(_QUERY_KEY) or []
    for value in values:
        candidate = value.strip()
        if candidate.isdigit():
            return candidate
    return None


def is_valid_source_url(url: Optional[str]) -> bool:
    """🛍️ True лише для абсолютного http(s) URL маркетплейсу з ідентифікатором товару."""
    parts = _split(url)
    if parts is None:
        return False
    hostname = parts.hostname or ""
    if _is_internal_host(hostname) or not _is_marketplace_host(hostname):
        return False
    return extract_product_id(url) is not None


def normalize_url(url: Optional[str]) -> Optional[str]:
    """🏗️ Повертає канонічний URL товару або None, якщо ідентифікатор не знайдено."""
    product_id = extract_product_id(url)
    if not product_id:
        return None
    return CANONICAL_TEMPLATE.format(product_id=product_id)


__all__ = [
    "CANONICAL_HOST",
    "MARKETPLACE_DOMAINS",
    "extract_product_id",
    "is_valid_source_url",
    "normalize_url",
]
