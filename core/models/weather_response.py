# core/models/weather_response.py
# -*- coding: utf-8 -*-
"""
Результаты конвейера погоды.

Ровно один вариант на запрос: ForecastResult, BmkgImageResult или ErrorResult.
Перед доступом к полям проверяйте `kind`.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from core.utils.weather_codes import describe_weather, weather_icon


class ErrorReason(str, Enum):
    NOT_FOUND = "not_found"
    UPSTREAM_FAILURE = "upstream_failure"


@dataclass
class ResolvedPlace:
    display_name: str
    lat: str  # десятичная строка из Nominatim, не float
    lon: str


@dataclass
class CurrentConditions:
    temperature: float
    wind_speed: float
    wind_direction: float
    weather_code: int
    time: Optional[str] = None

    @classmethod
    def from_open_meteo(cls, data: Dict[str, Any]) -> "CurrentConditions":
        """Собирает объект из блока `current_weather` ответа Open-Meteo."""
        return cls(
            temperature=data.get("temperature"),
            wind_speed=data.get("windspeed"),
            wind_direction=data.get("winddirection"),
            weather_code=data.get("weathercode"),
            time=data.get("time"),
        )

    def to_dict(self) -> Dict[str, Any]:
        # Ключи как у Open-Meteo
        return {
            "temperature": self.temperature,
            "windspeed": self.wind_speed,
            "winddirection": self.wind_direction,
            "weathercode": self.weather_code,
            "time": self.time,
        }


@dataclass
class ForecastResult:
    place: ResolvedPlace
    current: CurrentConditions
    daily: Dict[str, Any] = field(default_factory=dict)
    kind: str = field(default="forecast", init=False)

    @property
    def description(self) -> str:
        return describe_weather(self.current.weather_code)

    @property
    def icon(self) -> str:
        return weather_icon(self.current.weather_code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": "open-meteo",
            "place": self.place.display_name,
            "lat": self.place.lat,
            "lon": self.place.lon,
            "current": self.current.to_dict(),
            "daily": self.daily,
            "description": self.description,
            "icon": self.icon,
        }


@dataclass
class BmkgImageResult:
    page_url: str
    image_url: Optional[str] = None
    diagnostic: Optional[str] = None
    screenshot: Optional[bytes] = None  # PNG, только при fallback-скриншоте
    kind: str = field(default="bmkg", init=False)

    def to_dict(self) -> Dict[str, Any]:
        data = {"source": "bmkg", "imageUrl": self.image_url}
        if self.diagnostic:
            data["message"] = self.diagnostic
        if self.screenshot is not None:
            data["screenshot"] = True
        return data


@dataclass
class ErrorResult:
    reason: ErrorReason
    message: str
    detail: Optional[str] = None
    kind: str = field(default="error", init=False)

    def to_dict(self) -> Dict[str, Any]:
        if self.detail:
            return {"error": "internal error", "detail": self.detail}
        return {"error": self.message}


WeatherResult = Union[ForecastResult, BmkgImageResult, ErrorResult]
