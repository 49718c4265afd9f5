# -*- coding: utf-8 -*-
"""
Обёртка для Open-Meteo API.
Поддерживает:
- Текущую погоду + дневной прогноз: OpenMeteoClient.get_forecast(lat, lon, days)
- Обрезку дневных рядов до горизонта: truncate_daily(daily, days)
"""
import requests
import logging
from typing import Any, Dict, Tuple

from core.models.weather_response import CurrentConditions
from core.utils.error_handler import UpstreamError
from core.utils.validator import DEFAULT_DAYS, clamp_days

logger = logging.getLogger("api_client")

# === КОНФИГУРАЦИЯ API ===
API_TIMEOUT = 30  # секунд
DAILY_FIELDS = "weathercode,temperature_2m_max,temperature_2m_min"


def truncate_daily(daily: Dict[str, Any], days: int) -> Dict[str, Any]:
    """
    Обрезает все ряды дневного прогноза до первых `days` значений.

    Списки режутся одинаково (выравнивание по индексу сохраняется),
    остальные поля проходят без изменений.
    """
    limit = clamp_days(days)
    return {
        key: value[:limit] if isinstance(value, list) else value
        for key, value in (daily or {}).items()
    }


class OpenMeteoClient:
    """Клиент для Open-Meteo API."""
    BASE_URL = "https://api.open-meteo.com/v1/forecast"

    def __init__(self, timeout: float = API_TIMEOUT):
        self.timeout = timeout

    def get_forecast(self, lat: str, lon: str, days: int = DEFAULT_DAYS) -> Tuple[CurrentConditions, Dict[str, Any]]:
        """
        Получает текущую погоду и дневной прогноз.

        Args:
            lat (str): Широта (строка из геокодера, передаётся как есть)
            lon (str): Долгота
            days (int): Горизонт, 1..14 (зажимается)

        Returns:
            (CurrentConditions, daily): daily уже обрезан до горизонта

        Raises:
            UpstreamError: в ответе нет current_weather
            requests.RequestException: ошибка сети / HTTP
        """
        limit = clamp_days(days)
        params = {
            "latitude": lat,
            "longitude": lon,
            "current_weather": "true",
            "daily": DAILY_FIELDS,
            "timezone": "auto",
            "forecast_days": limit
        }

        response = requests.get(self.BASE_URL, params=params, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()

        if not data or not data.get("current_weather"):
            logger.error(f"❌ Open-Meteo: нет current_weather для ({lat}, {lon})")
            raise UpstreamError("failed to get weather")

        current = CurrentConditions.from_open_meteo(data["current_weather"])
        daily = truncate_daily(data.get("daily") or {}, limit)
        logger.info(f"✅ Open-Meteo: прогноз на {limit} дн. получен для ({lat}, {lon})")
        return current, daily
