# process_manager.py
# -*- coding: utf-8 -*-
"""
Глобальный координатор зависимостей.
Инициализирует все сервисы один раз и предоставляет к ним доступ
(бот и HTTP API используют один и тот же экземпляр).
"""

import logging
from typing import Optional

from config.bot_config import BotConfig
from config.logging_config import setup_logging
from core.utils.html_renderer import PlaywrightRenderer
from core.weather_pipeline import PipelineOptions, WeatherPipeline


class ProcessManager:
    """
    Единый контекст приложения. Все зависимости инициализируются здесь.
    """

    def __init__(self):
        self._initialized = False
        # Конфигурация
        self.config: Optional[BotConfig] = None
        # Рендерер HTML → PNG (None, если не включён в этом развёртывании)
        self.renderer: Optional[PlaywrightRenderer] = None
        # Конвейер погоды
        self.pipeline: Optional[WeatherPipeline] = None

    def initialize_sync(self, config: Optional[BotConfig] = None):
        """Синхронная инициализация всех компонентов."""
        if self._initialized:
            return

        # 1. Загрузка конфигурации
        self.config = config or BotConfig.load()

        # 2. Логирование
        setup_logging(self.config.log_level, self.config.log_dir)

        # 3. Рендерер: None, если выключен в конфигурации
        self.renderer = PlaywrightRenderer() if self.config.render_enabled else None

        # 4. Конвейер
        options = PipelineOptions(
            user_agent=self.config.user_agent,
            timeout=self.config.http_timeout,
            enable_screenshot_fallback=self.config.screenshot_fallback,
            enable_raster_fallback=self.config.raster_fallback
        )
        self.pipeline = WeatherPipeline(options=options, renderer=self.renderer)

        self._initialized = True
        logging.info(
            f"✅ ProcessManager: initialized (renderer={'on' if self.renderer else 'off'}, "
            f"screenshot_fallback={options.enable_screenshot_fallback})"
        )

    def shutdown_sync(self):
        """Синхронное завершение (закрытие ресурсов)."""
        if not self._initialized:
            return

        # Браузер поднимается на каждый запрос, закрывать нечего
        self._initialized = False
        logging.info("🛑 ProcessManager: shut down")


# Глобальный экземпляр, общий для бота и HTTP API
process_manager = ProcessManager()
