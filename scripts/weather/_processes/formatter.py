# -*- coding: utf-8 -*-
"""
Форматирование погодного отчёта (текст, карточка HTML → PNG).
"""

import math
import os
import logging
from datetime import date
from typing import Any, List, Optional

from jinja2 import Template

from core.models.weather_response import ForecastResult
from core.utils.error_handler import RenderUnavailable
from core.utils.validator import clamp_days
from core.utils.weather_codes import icon_url, weather_color, weather_icon

logger = logging.getLogger("formatter")

# Загружаем шаблон из файла
TEMPLATE_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "_io", "templates", "weather_card.html.j2")
with open(TEMPLATE_PATH, "r", encoding="utf-8") as f:
    CARD_TEMPLATE = f.read()

# Локаль id-ID: короткие дни недели (пн = 0) и месяцы
WEEKDAYS_ID = ["Sen", "Sel", "Rab", "Kam", "Jum", "Sab", "Min"]
MONTHS_ID = ["Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des"]


def round_half_up(value: Any) -> str:
    """27.5 → '28', -0.4 → '0'; пустое значение → '-'."""
    if value is None:
        return "-"
    return str(int(math.floor(float(value) + 0.5)))


def _date_labels(raw: Optional[str]) -> tuple:
    try:
        d = date.fromisoformat(str(raw)[:10])
    except (TypeError, ValueError):
        return "", ""
    return WEEKDAYS_ID[d.weekday()], f"{d.day} {MONTHS_ID[d.month - 1]}"


def _or_dash(value: Any) -> Any:
    return "-" if value is None else value


def _at(series: List[Any], i: int) -> Any:
    return series[i] if i < len(series) else None


def forecast_days(daily: dict, days: int) -> List[dict]:
    """
    Готовит ячейки прогноза для карточки.

    Args:
        daily (dict): Дневные ряды Open-Meteo (time, weathercode, temperature_2m_max/min)
        days (int): Сколько дней показать

    Returns:
        list[dict]: [{"weekday", "date", "icon_url", "color", "tmax", "tmin"}, ...]
    """
    times = daily.get("time") or []
    codes = daily.get("weathercode") or []
    tmax = daily.get("temperature_2m_max") or []
    tmin = daily.get("temperature_2m_min") or []

    cells = []
    for i in range(min(clamp_days(days), len(times))):
        code = _at(codes, i)
        weekday, short_date = _date_labels(times[i])
        cells.append({
            "weekday": weekday,
            "date": short_date,
            "icon_url": icon_url(weather_icon(code), "2x"),
            "color": weather_color(code),
            "tmax": round_half_up(_at(tmax, i)),
            "tmin": round_half_up(_at(tmin, i)),
        })
    return cells


def format_weather_text(result: ForecastResult) -> str:
    """Текст ответа / подпись к фото для чата."""
    current = result.current
    return (
        f"Cuaca untuk: {result.place.display_name}\n"
        f"Status: {result.description}\n"
        f"Suhu: {_or_dash(current.temperature)}°C\n"
        f"Kecepatan angin: {_or_dash(current.wind_speed)} km/h (arah {_or_dash(current.wind_direction)}°)\n"
        f"Sumber: Open-Meteo"
    )


def build_card_html(result: ForecastResult, days: int) -> str:
    """
    Собирает HTML карточки погоды.

    Название места и статус приходят от геокодера без проверки,
    поэтому шаблон рендерится с autoescape.
    """
    template = Template(CARD_TEMPLATE, autoescape=True)
    current = result.current
    return template.render(
        main_color=weather_color(current.weather_code),
        icon_url=icon_url(result.icon, "4x"),
        location=result.place.display_name,
        status=result.description,
        temperature=_or_dash(current.temperature),
        wind_speed=_or_dash(current.wind_speed),
        wind_direction=_or_dash(current.wind_direction),
        days=forecast_days(result.daily, days),
    )


def render_card_png(result: ForecastResult, days: int, renderer: Optional[Any]) -> bytes:
    """
    HTML карточки → PNG через внешний рендерер.

    Raises:
        RenderUnavailable: рендерер не подключён
    """
    if renderer is None:
        raise RenderUnavailable("Server-side PNG generation is not enabled in this deployment.")
    html = build_card_html(result, days)
    image = renderer.render_html(html)
    logger.info(f"✅ Карточка готова для {result.place.display_name}")
    return image
