# core/utils/weather_codes.py
# -*- coding: utf-8 -*-
"""
Таблицы кодов погоды Open-Meteo (WMO):
- описание на индонезийском,
- иконка OpenWeatherMap (дневная),
- цвет для карточки.
"""
from typing import Optional

ICON_BASE_URL = "https://openweathermap.org/img/wn"

WEATHER_DESCRIPTIONS = {
    0: "Cerah",
    1: "Cerah Berawan",
    2: "Berawan",
    3: "Teredu/berawan tebal",
    45: "Kabut",
    48: "Kabut berdebu",
    51: "Gerimis ringan",
    53: "Gerimis sedang",
    55: "Gerimis lebat",
    56: "Hujan beku ringan",
    57: "Hujan beku lebat",
    61: "Hujan ringan",
    63: "Hujan sedang",
    65: "Hujan lebat",
    66: "Hujan es ringan",
    67: "Hujan es lebat",
    71: "Salju ringan",
    73: "Salju sedang",
    75: "Salju lebat",
    80: "Hujan lokal ringan",
    81: "Hujan lokal sedang",
    82: "Hujan lokal lebat",
    95: "Badai Petir",
    96: "Badai Petir dengan hujan ringan",
    99: "Badai Petir dengan hujan lebat",
}

UNKNOWN_DESCRIPTION = "Tidak diketahui"
DEFAULT_COLOR = "#0f172a"


def describe_weather(code: Optional[int]) -> str:
    """Текстовое описание кода; неизвестный код → 'Tidak diketahui'."""
    return WEATHER_DESCRIPTIONS.get(code, UNKNOWN_DESCRIPTION)


def weather_icon(code: Optional[int]) -> str:
    """
    Код Open-Meteo → id иконки OpenWeatherMap.

    Args:
        code (int): Код погоды WMO

    Returns:
        str: Например, '01d'; для неизвестных кодов '01d'.
    """
    if code is None:
        return "01d"
    if code == 0:
        return "01d"  # ясно
    if code == 1:
        return "02d"
    if code == 2:
        return "03d"
    if code == 3:
        return "04d"  # пасмурно
    if code in (45, 48):
        return "50d"  # туман
    if 51 <= code <= 57:
        return "09d"  # морось
    if 61 <= code <= 67:
        return "10d"  # дождь
    if 71 <= code <= 75:
        return "13d"  # снег
    if 80 <= code <= 82:
        return "09d"  # ливни
    if 95 <= code <= 99:
        return "11d"  # гроза
    return "01d"


def weather_color(code: Optional[int]) -> str:
    """CSS-цвет для фона карточки/ячейки прогноза."""
    if code is None:
        return DEFAULT_COLOR
    if 51 <= code <= 67 or 80 <= code <= 82:
        return "#0ea5e9"
    if code in (0, 1):
        return "#fb923c"
    if code in (2, 3):
        return "#94a3b8"
    if 95 <= code <= 99:
        return "#7c3aed"
    if code in (45, 48):
        return "#64748b"
    return DEFAULT_COLOR


def icon_url(icon_id: str, scale: str = "2x") -> str:
    return f"{ICON_BASE_URL}/{icon_id}@{scale}.png"
