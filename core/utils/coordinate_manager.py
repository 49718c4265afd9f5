# -*- coding: utf-8 -*-
"""
Менеджер координат и геокодирования.

Функции:
- Прямой геокодинг: текст → название места и координаты (Nominatim)
- Валидация запроса

Использование:
>>> from core.utils.coordinate_manager import geocode_nominatim
>>> place = geocode_nominatim("Jakarta")
>>> print(place.display_name)
'Daerah Khusus ibukota Jakarta, Indonesia'
"""

import requests
import logging
from typing import Optional

from core.models.weather_response import ResolvedPlace
from core.utils.validator import validate_query

logger = logging.getLogger("coordinate_manager")

# === КОНФИГУРАЦИЯ ===
NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_USER_AGENT = "BOTPADIL/1.0 (+https://github.com/)"
REQUEST_TIMEOUT = 30  # секунд


def geocode_nominatim(
    query: str,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = REQUEST_TIMEOUT
) -> Optional[ResolvedPlace]:
    """
    Ищет место по тексту через Nominatim (только первый результат).

    Args:
        query (str): Город или адрес
        user_agent (str): Идентифицирующий заголовок (Nominatim блокирует анонимов)
        timeout (float): Таймаут запроса

    Returns:
        Optional[ResolvedPlace]: Место или None, если ничего не найдено

    Raises:
        InvalidInput: пустой запрос
        requests.RequestException: ошибка сети / HTTP
    """
    query = validate_query(query)

    params = {
        "format": "json",
        "q": query,
        "limit": 1,
        "addressdetails": 1
    }
    headers = {"User-Agent": user_agent}

    response = requests.get(NOMINATIM_URL, params=params, headers=headers, timeout=timeout)
    response.raise_for_status()
    data = response.json()

    if not data:
        logger.info(f"🌍 Место не найдено: {query!r}")
        return None

    place = data[0]
    # Координаты оставляем строками
    result = ResolvedPlace(
        display_name=place.get("display_name", query),
        lat=str(place["lat"]),
        lon=str(place["lon"])
    )
    logger.info(f"🌍 Найдено: {result.display_name} ({result.lat}, {result.lon})")
    return result
