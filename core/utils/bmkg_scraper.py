# -*- coding: utf-8 -*-
"""
Поиск картинки погоды на странице BMKG (bmkg.go.id).

Порядок эвристик (первое совпадение побеждает):
1. <meta property="og:image">, затем <meta name="twitter:image">
2. <link rel="image_src">
3. <img>, у которого src/data-src/data-original + alt содержат ключевое слово
4. (опционально) первый <img> с расширением .png/.jpg/.jpeg/.gif
"""

import re
import logging
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from core.models.weather_response import BmkgImageResult

logger = logging.getLogger("bmkg_scraper")

# === КОНФИГУРАЦИЯ ===
BMKG_HOST = "bmkg.go.id"
BMKG_ORIGIN = "https://www.bmkg.go.id"
DEFAULT_USER_AGENT = "BOTPADIL/1.0 (+https://github.com/)"
REQUEST_TIMEOUT = 30  # секунд

NO_IMAGE_FOUND = "no-image-found"

URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
IMAGE_KEYWORDS = re.compile(r"cuaca|prakiraan|forecast|peta|map|kondisi", re.IGNORECASE)
RASTER_EXTENSION = re.compile(r"\.(png|jpe?g|gif)$", re.IGNORECASE)
SOURCE_ATTRS = ("src", "data-src", "data-original")


def is_bmkg_url(query: str) -> bool:
    """True, если запрос является http(s)-ссылкой на домен BMKG."""
    return bool(query) and bool(URL_PATTERN.match(query)) and BMKG_HOST in query


def absolutize_image_url(url: str) -> str:
    """
    //x/y.png → https://x/y.png
    /a/b.jpg  → https://www.bmkg.go.id/a/b.jpg
    Абсолютные ссылки не меняются.
    """
    if url.startswith("//"):
        return "https:" + url
    if url.startswith("/"):
        return BMKG_ORIGIN + url
    return url


def _image_sources(img) -> List[str]:
    return [img.get(attr) for attr in SOURCE_ATTRS if img.get(attr)]


def _meta_content(soup: BeautifulSoup, **attrs) -> Optional[str]:
    tag = soup.find("meta", attrs=attrs)
    return tag.get("content") if tag else None


def extract_image_url(html: str, raster_fallback: bool = False) -> Optional[str]:
    """
    Применяет эвристики к HTML и возвращает «сырой» URL картинки.

    Args:
        html (str): HTML страницы
        raster_fallback (bool): Разрешить шаг 4 (любая растровая картинка)

    Returns:
        Optional[str]: URL как есть в разметке (без нормализации) или None
    """
    soup = BeautifulSoup(html, "html.parser")

    # 1) og:image / twitter:image
    image_url = _meta_content(soup, property="og:image") or _meta_content(soup, name="twitter:image")
    if image_url:
        return image_url

    # 2) link rel=image_src
    link = soup.find("link", rel="image_src")
    if link and link.get("href"):
        return link.get("href")

    # 3) картинки с ключевыми словами в источнике или alt
    images = soup.find_all("img")
    candidates = []
    for img in images:
        sources = _image_sources(img)
        joined = " ".join(sources) + " " + (img.get("alt") or "")
        if IMAGE_KEYWORDS.search(joined):
            candidates.append(sources[0] if sources else None)
    if candidates and candidates[0]:
        return candidates[0]

    # 4) первая растровая картинка
    if raster_fallback:
        for img in images:
            sources = _image_sources(img)
            if sources and RASTER_EXTENSION.search(sources[0]):
                return sources[0]

    return None


def fetch_bmkg_page(url: str, user_agent: str = DEFAULT_USER_AGENT, timeout: float = REQUEST_TIMEOUT) -> str:
    """Скачивает страницу BMKG с идентифицирующим User-Agent."""
    response = requests.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
    response.raise_for_status()
    return response.text


def find_bmkg_image(
    url: str,
    raster_fallback: bool = False,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = REQUEST_TIMEOUT
) -> BmkgImageResult:
    """
    Скачивает страницу BMKG и ищет на ней картинку погоды.

    Returns:
        BmkgImageResult: image_url абсолютный, либо None + диагностика 'no-image-found'

    Raises:
        requests.RequestException: страница недоступна
    """
    html = fetch_bmkg_page(url, user_agent=user_agent, timeout=timeout)
    image_url = extract_image_url(html, raster_fallback=raster_fallback)

    if not image_url:
        logger.info(f"🖼️ Картинка не найдена на {url}")
        return BmkgImageResult(page_url=url, image_url=None, diagnostic=NO_IMAGE_FOUND)

    image_url = absolutize_image_url(image_url)
    logger.info(f"🖼️ Картинка BMKG: {image_url}")
    return BmkgImageResult(page_url=url, image_url=image_url)
