# -*- coding: utf-8 -*-
"""
Общие фикстуры: подделки HTTP-ответов и типовые ответы Nominatim / Open-Meteo.
Сеть в тестах не используется.
"""
import logging

import pytest
import requests

from core.models.weather_response import CurrentConditions, ForecastResult, ResolvedPlace


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Не даём обработчикам root-логгера перетекать между тестами."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class FakeResponse:
    def __init__(self, json_data=None, text="", content=b"", headers=None, status_code=200):
        self._json = json_data
        self.text = text
        self.content = content
        self.headers = headers or {}
        self.status_code = status_code

    def json(self):
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def nominatim_jakarta():
    return [{
        "display_name": "Daerah Khusus ibukota Jakarta, Indonesia",
        "lat": "-6.1753942",
        "lon": "106.827183",
        "address": {"city": "Jakarta", "country": "Indonesia"}
    }]


@pytest.fixture
def open_meteo_payload():
    return {
        "latitude": -6.2,
        "longitude": 106.8,
        "current_weather": {
            "temperature": 27.3,
            "windspeed": 8.4,
            "winddirection": 220,
            "weathercode": 0,
            "time": "2025-11-13T10:00"
        },
        "daily_units": {"time": "iso8601"},
        "daily": {
            "time": ["2025-11-13", "2025-11-14", "2025-11-15", "2025-11-16", "2025-11-17", "2025-11-18", "2025-11-19"],
            "weathercode": [0, 3, 61, 95, 2, 45, 80],
            "temperature_2m_max": [31.4, 30.5, 29.0, 28.6, 31.0, 30.2, 29.9],
            "temperature_2m_min": [24.1, 24.5, 23.9, 23.2, 24.0, 24.4, 23.8]
        }
    }


@pytest.fixture
def forecast_result():
    return ForecastResult(
        place=ResolvedPlace(display_name="Jakarta, Indonesia", lat="-6.1753942", lon="106.827183"),
        current=CurrentConditions(temperature=27.3, wind_speed=8.4, wind_direction=220, weather_code=0),
        daily={
            "time": ["2025-11-13", "2025-11-14", "2025-11-15"],
            "weathercode": [0, 61, 95],
            "temperature_2m_max": [31.5, 30.4, 29.0],
            "temperature_2m_min": [24.1, 24.5, 23.9]
        }
    )
