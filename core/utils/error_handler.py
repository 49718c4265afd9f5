# -*- coding: utf-8 -*-
"""
Утилита для централизованной обработки ошибок.

Иерархия:
- WeatherError: базовое исключение модуля погоды
  - InvalidInput: пустой запрос (сеть не трогаем)
  - UpstreamError: внешний сервис ответил, но без нужных данных
  - RenderUnavailable: рендерер не сконфигурирован
"""

import logging
from typing import Optional

logger = logging.getLogger("error_handler")


class WeatherError(Exception):
    """Базовое исключение конвейера погоды."""


class InvalidInput(WeatherError):
    """Некорректный ввод пользователя."""


class UpstreamError(WeatherError):
    """Внешний API вернул неполные данные."""


class RenderUnavailable(WeatherError):
    """Рендерер HTML → PNG не подключён в этом развёртывании."""


def log_and_raise(message: str, exception: Exception, context: Optional[dict] = None):
    """
    Логирует ошибку и выбрасывает её дальше.

    Args:
        message (str): Пользовательское сообщение
        exception (Exception): Исключение, которое обрабатывается
        context (dict): Дополнительный контекст (например, query, days)
    """
    log_context = f" | Контекст: {context}" if context else ""
    logger.error(f"{message}{log_context} | Ошибка: {exception!r}", exc_info=exception)
    raise exception


def log_exception(exception: Exception, message: str = "Необработанное исключение", context: Optional[dict] = None):
    """
    Просто логирует исключение без выбрасывания.

    Args:
        exception (Exception): Исключение
        message (str): Описание
        context (dict): Контекст (query, chat_id и т.п.)
    """
    log_context = f" | Контекст: {context}" if context else ""
    logger.error(f"{message}{log_context} | Ошибка: {exception!r}", exc_info=exception)
