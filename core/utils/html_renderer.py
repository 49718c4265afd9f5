# -*- coding: utf-8 -*-
"""
Рендерер HTML → PNG на базе Playwright (headless Chromium).

Узкий контракт:
- render_html(html) → байты PNG карточки
- screenshot_url(url) → байты PNG страницы (fallback для BMKG)

Каждый вызов поднимает и закрывает собственный браузер, общего
состояния между запросами нет. Наличие рендерера решает конфигурация
(RENDER_ENABLED), а не попытка импорта: process_manager либо создаёт
PlaywrightRenderer, либо передаёт None.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

from core.utils.error_handler import log_and_raise

logger = logging.getLogger("html_renderer")

# Ленивый импорт Playwright; в тестах переменная подменяется.
sync_playwright: Any | None = None

# === КОНФИГУРАЦИЯ ===
CARD_VIEWPORT = {"width": 900, "height": 420}
PAGE_VIEWPORT = {"width": 1200, "height": 800}
PAGE_LOAD_TIMEOUT_MS = 30_000
LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]
MAIN_SELECTORS = ("main", "#content", ".container", "article")


class PlaywrightRenderer:
    """
    Рендер HTML и страниц в PNG.

    Parameters
    ----------
    headless: bool, default ``True``
        Запускать Chromium без окна.
    page_timeout_ms: int
        Таймаут загрузки страницы для screenshot_url.
    """

    def __init__(self, *, headless: bool = True, page_timeout_ms: int = PAGE_LOAD_TIMEOUT_MS):
        self.headless = headless
        self.page_timeout_ms = page_timeout_ms

    @contextmanager
    def _page(self, viewport: dict) -> Iterator[Any]:
        global sync_playwright
        if sync_playwright is None:
            from playwright.sync_api import sync_playwright as _sp
            sync_playwright = _sp
        playwright = sync_playwright().start()
        browser = None
        try:
            browser = playwright.chromium.launch(headless=self.headless, args=LAUNCH_ARGS)
            page = browser.new_page(viewport=viewport)
            yield page
        finally:
            if browser is not None:
                browser.close()
            playwright.stop()

    def render_html(self, html: str, selector: str = "#card") -> bytes:
        """Рендерит HTML-документ и снимает элемент `selector` (или body)."""
        try:
            with self._page(CARD_VIEWPORT) as page:
                page.set_content(html, wait_until="networkidle")
                element = page.query_selector(selector) or page.query_selector("body")
                image = element.screenshot(type="png")
        except Exception as e:
            log_and_raise("❌ Ошибка рендера карточки", e)
        logger.info(f"🖼️ Карточка отрендерена ({len(image)} байт)")
        return image

    def screenshot_url(self, url: str, selectors: Sequence[str] = MAIN_SELECTORS) -> bytes:
        """
        Скриншот страницы: сначала основной блок (main/#content/...),
        иначе вся страница целиком.
        """
        try:
            with self._page(PAGE_VIEWPORT) as page:
                page.goto(url, wait_until="networkidle", timeout=self.page_timeout_ms)
                image = self._main_element_screenshot(page, selectors)
                if image is None:
                    image = page.screenshot(full_page=True, type="png")
        except Exception as e:
            log_and_raise("❌ Ошибка скриншота страницы", e, {"url": url})
        logger.info(f"🖼️ Скриншот страницы {url} ({len(image)} байт)")
        return image

    @staticmethod
    def _main_element_screenshot(page: Any, selectors: Sequence[str]) -> Optional[bytes]:
        for selector in selectors:
            element = page.query_selector(selector)
            if element is None:
                continue
            try:
                return element.screenshot(type="png")
            except Exception as e:
                # Элемент может быть невидим, тогда снимаем всю страницу
                logger.warning(f"⚠️ Не удалось снять {selector}: {e}")
                return None
        return None
