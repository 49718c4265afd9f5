# server.py
# -*- coding: utf-8 -*-
"""
HTTP API погоды (Flask).

- GET /api/cuaca?q=<запрос>&days=<1..14>: JSON
- GET /api/card?q=<запрос>&days=<1..14>: PNG (картинка BMKG или карточка)
"""
import logging

from flask import Flask

from process_manager import process_manager
from scripts.weather.api_handler import weather_api_bp


def create_app() -> Flask:
    process_manager.initialize_sync()

    app = Flask(__name__)
    app.json.ensure_ascii = False
    app.register_blueprint(weather_api_bp)
    logging.info("🚀 HTTP API готов")
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(port=process_manager.config.port)
