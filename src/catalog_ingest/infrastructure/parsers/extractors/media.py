# 🖼️ catalog_ingest/infrastructure/parsers/extractors/media.py
"""
🖼️ Стратегії для медіа товару: галерея зображень і відео.

🔹 Мініатюри CDN (`_220x220.jpg`, `.jpg_640x640.jpg`) переписуються на оригінал.
🔹 Плейсхолдери, лоадери та аватарки відкидаються.
🔹 Порядок зберігається, дублікати прибираються.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re	# 🧵 Патерни URL
from typing import List	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from .base import FieldExtractor, PageSnapshot, _absolutize, _attr_to_str, _uniq_keep_order
from .json_ld import images_from_json_ld

# ================================
# 📦 СЕЛЕКТОРИ ТА ПАТЕРНИ
# ================================
GALLERY_SELECTORS = (
    '[class*="gallery"] img',
    '[class*="product-image"] img',
    '[class*="main-image"] img',
    ".product-preview img",
    '[data-pl="product-image"] img',
)

_THUMB_SIZE = re.compile(r"_\d+x\d+\.")	# 🔍 ..._220x220.jpg
_JPG_SUFFIX = re.compile(r"\.jpg_.*")	# 🔍 ....jpg_640x640q90.jpg_.webp
_SCRIPT_IMAGE_URL = re.compile(r"https?://[^\"'\s]*\.(?:jpg|jpeg|png|webp)", re.IGNORECASE)
_SCRIPT_VIDEO_URL = re.compile(r"https?://[^\"'\s]*\.(?:mp4|webm)", re.IGNORECASE)

_GALLERY_SKIP = ("placeholder", "loading")
_SCRIPT_SKIP = ("placeholder", "avatar")


def to_high_res(src: str) -> str:
    """🔍 Прибирає суфікс мініатюри з URL зображення."""
    return _THUMB_SIZE.sub(".", _JPG_SUFFIX.sub(".jpg", src), count=1)


# ================================
# 🖼️ ЗОБРАЖЕННЯ
# ================================
def images_from_gallery(snapshot: PageSnapshot) -> List[str]:
    images: List[str] = []
    for selector in GALLERY_SELECTORS:
        for img in snapshot.select(selector):
            src = _attr_to_str(img.get("src")) or _attr_to_str(img.get("data-src"))
            if not src or any(marker in src for marker in _GALLERY_SKIP):
                continue
            url = _absolutize(to_high_res(src), snapshot.url)
            if url:
                images.append(url)
    return _uniq_keep_order(images)


def images_from_ld(snapshot: PageSnapshot) -> List[str]:
    return _uniq_keep_order(images_from_json_ld(snapshot))


def images_from_og(snapshot: PageSnapshot) -> List[str]:
    url = _absolutize(snapshot.meta_content('meta[property="og:image"]'), snapshot.url)
    return [url] if url else []


def images_from_scripts(snapshot: PageSnapshot) -> List[str]:
    found: List[str] = []
    for content in snapshot.script_texts():
        for url in _SCRIPT_IMAGE_URL.findall(content):
            if not any(marker in url for marker in _SCRIPT_SKIP):
                found.append(url)
    return _uniq_keep_order(found)


IMAGES_EXTRACTOR: FieldExtractor[List[str]] = FieldExtractor(
    "images",
    (images_from_gallery, images_from_ld, images_from_og, images_from_scripts),
    list,
)


# ================================
# 🎬 ВІДЕО
# ================================
def videos_from_dom(snapshot: PageSnapshot) -> List[str]:
    videos: List[str] = []
    for video in snapshot.select("video"):
        src = _attr_to_str(video.get("src"))
        if not src:
            source = video.select_one("source[src]")
            src = _attr_to_str(source.get("src")) if source is not None else ""
        url = _absolutize(src, snapshot.url)
        if url:
            videos.append(url)
    return _uniq_keep_order(videos)


def videos_from_og(snapshot: PageSnapshot) -> List[str]:
    url = _absolutize(
        snapshot.meta_content('meta[property="og:video"]')
        or snapshot.meta_content('meta[property="og:video:url"]'),
        snapshot.url,
    )
    return [url] if url else []


def videos_from_scripts(snapshot: PageSnapshot) -> List[str]:
    found: List[str] = []
    for content in snapshot.script_texts():
        found.extend(_SCRIPT_VIDEO_URL.findall(content))
    return _uniq_keep_order(found)


VIDEOS_EXTRACTOR: FieldExtractor[List[str]] = FieldExtractor(
    "videos",
    (videos_from_dom, videos_from_og, videos_from_scripts),
    list,
)


__all__ = [
    "IMAGES_EXTRACTOR",
    "VIDEOS_EXTRACTOR",
    "images_from_gallery",
    "images_from_ld",
    "images_from_og",
    "images_from_scripts",
    "to_high_res",
    "videos_from_dom",
    "videos_from_og",
    "videos_from_scripts",
]
