# core/weather_pipeline.py
# -*- coding: utf-8 -*-
"""
Единый конвейер разрешения запроса о погоде.

Используется и ботом, и HTTP API:
1. URL BMKG → поиск картинки на странице (геокодер и прогноз не вызываются)
2. Иначе → геокодинг Nominatim → прогноз Open-Meteo

Все исключения внешних вызовов ловятся здесь и превращаются в ErrorResult.
Состояния нет: один экземпляр обслуживает любые параллельные запросы.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from core.models.weather_response import (
    BmkgImageResult,
    ErrorReason,
    ErrorResult,
    ForecastResult,
    WeatherResult,
)
from core.utils.api_client import API_TIMEOUT, OpenMeteoClient
from core.utils.bmkg_scraper import DEFAULT_USER_AGENT, find_bmkg_image, is_bmkg_url
from core.utils.coordinate_manager import geocode_nominatim
from core.utils.error_handler import UpstreamError, log_exception
from core.utils.validator import DEFAULT_DAYS, clamp_days, validate_query

logger = logging.getLogger("weather_pipeline")

LOCATION_NOT_FOUND = "location not found"
SCREENSHOT = "screenshot"
SCREENSHOT_UNAVAILABLE = "screenshot-unavailable"


@dataclass
class PipelineOptions:
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = API_TIMEOUT
    enable_screenshot_fallback: bool = False
    enable_raster_fallback: bool = False


class WeatherPipeline:
    """
    Оркестратор: BMKG-ветка или геокодинг + прогноз.

    Все внешние зависимости передаются в конструктор, поэтому
    в тестах их легко подменить.
    """

    def __init__(
        self,
        options: Optional[PipelineOptions] = None,
        renderer: Optional[Any] = None,
        geocoder: Callable = geocode_nominatim,
        forecast_client: Optional[OpenMeteoClient] = None,
        image_finder: Callable = find_bmkg_image,
    ):
        self.options = options or PipelineOptions()
        self.renderer = renderer
        self.geocoder = geocoder
        self.forecast_client = forecast_client or OpenMeteoClient(timeout=self.options.timeout)
        self.image_finder = image_finder

    def resolve(self, query: Optional[str], days: Any = DEFAULT_DAYS) -> WeatherResult:
        """
        Разрешает запрос пользователя.

        Args:
            query (str): Город/адрес или URL страницы BMKG
            days (int): Горизонт прогноза (зажимается в 1..14)

        Returns:
            WeatherResult: ForecastResult | BmkgImageResult | ErrorResult

        Raises:
            InvalidInput: пустой запрос (до любых сетевых вызовов)
        """
        query = validate_query(query)
        horizon = clamp_days(days)

        try:
            if is_bmkg_url(query):
                return self._resolve_bmkg(query)
            return self._resolve_forecast(query, horizon)
        except UpstreamError as e:
            logger.warning(f"⚠️ Внешний сервис без данных для {query!r}: {e}")
            return ErrorResult(reason=ErrorReason.UPSTREAM_FAILURE, message=str(e))
        except Exception as e:
            log_exception(e, "❌ Ошибка конвейера погоды", {"query": query, "days": horizon})
            return ErrorResult(reason=ErrorReason.UPSTREAM_FAILURE, message="internal error", detail=str(e))

    def _resolve_bmkg(self, url: str) -> BmkgImageResult:
        result = self.image_finder(
            url,
            raster_fallback=self.options.enable_raster_fallback,
            user_agent=self.options.user_agent,
            timeout=self.options.timeout,
        )
        if result.image_url or not self.options.enable_screenshot_fallback:
            return result

        if self.renderer is None:
            logger.info("🖼️ Скриншот недоступен: рендерер не подключён")
            return BmkgImageResult(page_url=url, diagnostic=SCREENSHOT_UNAVAILABLE)

        screenshot = self.renderer.screenshot_url(url)
        return BmkgImageResult(page_url=url, diagnostic=SCREENSHOT, screenshot=screenshot)

    def _resolve_forecast(self, query: str, days: int) -> WeatherResult:
        place = self.geocoder(query, user_agent=self.options.user_agent, timeout=self.options.timeout)
        if place is None:
            return ErrorResult(reason=ErrorReason.NOT_FOUND, message=LOCATION_NOT_FOUND)

        current, daily = self.forecast_client.get_forecast(place.lat, place.lon, days)
        return ForecastResult(place=place, current=current, daily=daily)
