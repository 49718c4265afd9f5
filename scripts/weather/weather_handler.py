# scripts/weather/weather_handler.py
import asyncio
import logging

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from process_manager import process_manager
from core.models.weather_response import ErrorReason
from core.utils.error_handler import log_exception
from core.utils.validator import DEFAULT_DAYS
from core.utils.weather_codes import icon_url
from core.weather_pipeline import SCREENSHOT_UNAVAILABLE
from scripts.weather._processes.formatter import format_weather_text, render_card_png

logger = logging.getLogger("weather_handler")

START_TEXT = (
    "Halo! Saya bot cuaca sederhana. Gunakan /cuaca <lokasi> untuk melihat cuaca. "
    "Contoh: /cuaca Jakarta"
)
HELP_TEXT = (
    "/cuaca <lokasi> — tampilkan cuaca saat ini untuk lokasi yang diberikan.\n"
    "/cuaca <url bmkg.go.id> — ambil gambar cuaca dari halaman BMKG.\n"
    "/start — mulai percakapan."
)
USAGE_TEXT = "Gunakan: /cuaca <kota atau alamat>. Contoh: /cuaca Bandung"
NOT_FOUND_TEXT = "Lokasi tidak ditemukan. Coba kata kunci lain."
FAILURE_TEXT = "Terjadi kesalahan saat mengambil data cuaca. Coba lagi nanti."
UPSTREAM_TEXT = "Gagal mendapatkan data cuaca untuk lokasi tersebut."
NO_BMKG_IMAGE_TEXT = "Gambar cuaca tidak ditemukan di halaman BMKG."
SCREENSHOT_UNAVAILABLE_TEXT = "Fitur screenshot tidak tersedia — renderer belum diaktifkan di server."


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Приветствие."""
    await context.bot.send_message(chat_id=update.effective_chat.id, text=START_TEXT)


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Справка по командам."""
    await context.bot.send_message(chat_id=update.effective_chat.id, text=HELP_TEXT)


async def _delete_status(context: ContextTypes.DEFAULT_TYPE, chat_id: int, message_id: int):
    try:
        await context.bot.delete_message(chat_id=chat_id, message_id=message_id)
    except TelegramError as e:
        logger.warning(f"⚠️ Не удалось удалить статус-сообщение {message_id}: {e}")


async def _edit_status(context: ContextTypes.DEFAULT_TYPE, chat_id: int, message_id: int, text: str):
    await context.bot.edit_message_text(text=text, chat_id=chat_id, message_id=message_id)


async def cuaca_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/cuaca <город | URL BMKG>: запускает конвейер и отвечает текстом или фото."""
    chat_id = update.effective_chat.id
    query = " ".join(context.args or []).strip()
    if not query:
        await context.bot.send_message(chat_id=chat_id, text=USAGE_TEXT)
        return

    logger.info(f"👤 Чат {chat_id}: /cuaca {query!r}")
    status = await context.bot.send_message(chat_id=chat_id, text=f'Mencari lokasi "{query}"...')

    try:
        pipeline = process_manager.pipeline
        result = await asyncio.to_thread(pipeline.resolve, query, DEFAULT_DAYS)

        if result.kind == "error":
            text = NOT_FOUND_TEXT if result.reason is ErrorReason.NOT_FOUND else (
                FAILURE_TEXT if result.detail else UPSTREAM_TEXT
            )
            await _edit_status(context, chat_id, status.message_id, text)
            return

        if result.kind == "bmkg":
            await _reply_bmkg(context, chat_id, status.message_id, query, result)
            return

        await _reply_forecast(context, chat_id, status.message_id, result)
    except Exception as e:
        log_exception(e, "❌ Ошибка обработки /cuaca", {"chat_id": chat_id, "query": query})
        await context.bot.send_message(chat_id=chat_id, text=FAILURE_TEXT)


async def _reply_bmkg(context, chat_id, status_id, query, result):
    if result.image_url:
        await context.bot.send_photo(chat_id=chat_id, photo=result.image_url, caption=f"Gambar dari BMKG: {query}")
    elif result.screenshot is not None:
        await context.bot.send_photo(chat_id=chat_id, photo=result.screenshot, caption=f"Screenshot halaman BMKG: {query}")
    else:
        text = SCREENSHOT_UNAVAILABLE_TEXT if result.diagnostic == SCREENSHOT_UNAVAILABLE else NO_BMKG_IMAGE_TEXT
        await _edit_status(context, chat_id, status_id, text)
        return
    await _delete_status(context, chat_id, status_id)


async def _reply_forecast(context, chat_id, status_id, result):
    reply = format_weather_text(result)
    renderer = process_manager.renderer

    photo = None
    if renderer is not None:
        try:
            photo = await asyncio.to_thread(render_card_png, result, DEFAULT_DAYS, renderer)
        except Exception as e:
            # Карточка не получилась, отправим хотя бы иконку
            log_exception(e, "❌ Ошибка рендера карточки", {"chat_id": chat_id})
    if photo is None:
        photo = icon_url(result.icon, "4x")

    try:
        await context.bot.send_photo(chat_id=chat_id, photo=photo, caption=reply)
    except TelegramError as e:
        log_exception(e, "❌ Ошибка отправки фото", {"chat_id": chat_id})
        await _edit_status(context, chat_id, status_id, reply)
        return
    await _delete_status(context, chat_id, status_id)
