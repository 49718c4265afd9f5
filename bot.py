# bot.py
# -*- coding: utf-8 -*-
"""
Основной скрипт Telegram-бота погоды (/start, /help, /cuaca).
"""
import logging
from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    ContextTypes
)
from process_manager import process_manager

from scripts.weather.weather_handler import (
    start,
    help_command,
    cuaca_command
)


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    logging.error(f"⚠️ Исключение при обработке: {context.error}", exc_info=context.error)
    if isinstance(update, Update):
        logging.error(f"Update ID: {update.update_id}")


def build_application(token: str) -> Application:
    app = Application.builder().token(token).build()

    # === РЕГИСТРАЦИЯ ОБРАБОТЧИКОВ ===
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("help", help_command))
    app.add_handler(CommandHandler("cuaca", cuaca_command))
    app.add_error_handler(error_handler)
    return app


# === Основная функция запуска ===
def main():
    # Инициализация
    process_manager.initialize_sync()
    logging.info("🚀 Запуск бота")
    if not process_manager.config.telegram_token:
        logging.critical("❌ TELEGRAM_BOT_TOKEN не задан")
        raise ValueError("TELEGRAM_BOT_TOKEN не задан в .env!")

    app = build_application(process_manager.config.telegram_token)
    logging.info("🚀 Бот запущен. Ожидание команд...")

    try:
        app.run_polling(drop_pending_updates=True)
    except KeyboardInterrupt:
        logging.info("🛑 Остановка по запросу пользователя.")
    finally:
        process_manager.shutdown_sync()


if __name__ == "__main__":
    main()
