# core/utils/validator.py
from typing import Any, Optional

from core.utils.error_handler import InvalidInput

DEFAULT_DAYS = 5
MIN_DAYS = 1
MAX_DAYS = 14


def validate_query(query: Optional[str]) -> str:
    """Проверяет запрос (город/адрес или URL BMKG). Пустой → InvalidInput."""
    if not isinstance(query, str) or not query.strip():
        raise InvalidInput("q required")
    return query.strip()


def clamp_days(days: Any, default: int = DEFAULT_DAYS) -> int:
    """
    Приводит горизонт прогноза к диапазону [1, 14].

    Нечисловое значение (None, 'abc') → default; 0 → 1; 20 → 14.
    """
    try:
        value = int(days)
    except (TypeError, ValueError):
        value = default
    return max(MIN_DAYS, min(MAX_DAYS, value))
