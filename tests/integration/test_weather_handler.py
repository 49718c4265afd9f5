# -*- coding: utf-8 -*-
"""
Тесты обработчиков бота (scripts/weather/weather_handler.py).
Telegram-бот подменяется AsyncMock, конвейер MagicMock.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram.error import BadRequest

from core.models.weather_response import BmkgImageResult, ErrorReason, ErrorResult
from process_manager import process_manager
from scripts.weather import weather_handler

CHAT_ID = 42
STATUS_ID = 7


def _update():
    return SimpleNamespace(effective_chat=SimpleNamespace(id=CHAT_ID))


def _context(*args):
    bot = AsyncMock()
    bot.send_message.return_value = SimpleNamespace(message_id=STATUS_ID)
    return SimpleNamespace(bot=bot, args=list(args))


@pytest.fixture
def pipeline(monkeypatch):
    fake = MagicMock()
    monkeypatch.setattr(process_manager, "pipeline", fake)
    monkeypatch.setattr(process_manager, "renderer", None)
    return fake


@pytest.mark.asyncio
async def test_start_and_help():
    context = _context()
    await weather_handler.start(_update(), context)
    await weather_handler.help_command(_update(), context)
    texts = [call.kwargs["text"] for call in context.bot.send_message.call_args_list]
    assert "/cuaca" in texts[0]
    assert "/start" in texts[1]


@pytest.mark.asyncio
async def test_cuaca_without_query(pipeline):
    context = _context()
    await weather_handler.cuaca_command(_update(), context)
    context.bot.send_message.assert_awaited_once_with(chat_id=CHAT_ID, text=weather_handler.USAGE_TEXT)
    pipeline.resolve.assert_not_called()


@pytest.mark.asyncio
async def test_cuaca_forecast_sends_icon_without_renderer(pipeline, forecast_result):
    pipeline.resolve.return_value = forecast_result
    context = _context("Jakarta")
    await weather_handler.cuaca_command(_update(), context)

    pipeline.resolve.assert_called_once_with("Jakarta", 5)
    assert context.bot.send_message.call_args.kwargs["text"] == 'Mencari lokasi "Jakarta"...'
    photo_call = context.bot.send_photo.call_args.kwargs
    assert photo_call["photo"] == "https://openweathermap.org/img/wn/01d@4x.png"
    assert photo_call["caption"].startswith("Cuaca untuk: Jakarta, Indonesia")
    context.bot.delete_message.assert_awaited_once_with(chat_id=CHAT_ID, message_id=STATUS_ID)


@pytest.mark.asyncio
async def test_cuaca_forecast_sends_rendered_card(pipeline, forecast_result, monkeypatch):
    renderer = MagicMock()
    renderer.render_html.return_value = b"\x89PNG"
    monkeypatch.setattr(process_manager, "renderer", renderer)
    pipeline.resolve.return_value = forecast_result
    context = _context("Jakarta")
    await weather_handler.cuaca_command(_update(), context)
    assert context.bot.send_photo.call_args.kwargs["photo"] == b"\x89PNG"


@pytest.mark.asyncio
async def test_cuaca_forecast_render_failure_falls_back_to_icon(pipeline, forecast_result, monkeypatch):
    renderer = MagicMock()
    renderer.render_html.side_effect = RuntimeError("browser crashed")
    monkeypatch.setattr(process_manager, "renderer", renderer)
    pipeline.resolve.return_value = forecast_result
    context = _context("Jakarta")
    await weather_handler.cuaca_command(_update(), context)
    assert context.bot.send_photo.call_args.kwargs["photo"].endswith("01d@4x.png")


@pytest.mark.asyncio
async def test_cuaca_photo_failure_edits_status(pipeline, forecast_result):
    pipeline.resolve.return_value = forecast_result
    context = _context("Jakarta")
    context.bot.send_photo.side_effect = BadRequest("wrong file identifier")
    await weather_handler.cuaca_command(_update(), context)
    edit = context.bot.edit_message_text.call_args.kwargs
    assert edit["message_id"] == STATUS_ID
    assert edit["text"].startswith("Cuaca untuk:")
    context.bot.delete_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_cuaca_not_found(pipeline):
    pipeline.resolve.return_value = ErrorResult(reason=ErrorReason.NOT_FOUND, message="location not found")
    context = _context("Zzzznotaplace")
    await weather_handler.cuaca_command(_update(), context)
    assert context.bot.edit_message_text.call_args.kwargs["text"] == weather_handler.NOT_FOUND_TEXT


@pytest.mark.asyncio
async def test_cuaca_upstream_detail_is_hidden(pipeline):
    pipeline.resolve.return_value = ErrorResult(
        reason=ErrorReason.UPSTREAM_FAILURE, message="internal error", detail="secret stack"
    )
    context = _context("Jakarta")
    await weather_handler.cuaca_command(_update(), context)
    text = context.bot.edit_message_text.call_args.kwargs["text"]
    assert text == weather_handler.FAILURE_TEXT
    assert "secret" not in text


@pytest.mark.asyncio
async def test_cuaca_bmkg_image(pipeline):
    url = "https://www.bmkg.go.id/page"
    pipeline.resolve.return_value = BmkgImageResult(page_url=url, image_url="https://www.bmkg.go.id/a.png")
    context = _context(url)
    await weather_handler.cuaca_command(_update(), context)
    photo_call = context.bot.send_photo.call_args.kwargs
    assert photo_call["photo"] == "https://www.bmkg.go.id/a.png"
    assert photo_call["caption"] == f"Gambar dari BMKG: {url}"
    context.bot.delete_message.assert_awaited_once()


@pytest.mark.asyncio
async def test_cuaca_bmkg_screenshot(pipeline):
    url = "https://www.bmkg.go.id/page"
    pipeline.resolve.return_value = BmkgImageResult(page_url=url, diagnostic="screenshot", screenshot=b"\x89PNG")
    context = _context(url)
    await weather_handler.cuaca_command(_update(), context)
    photo_call = context.bot.send_photo.call_args.kwargs
    assert photo_call["photo"] == b"\x89PNG"
    assert photo_call["caption"] == f"Screenshot halaman BMKG: {url}"


@pytest.mark.asyncio
async def test_cuaca_bmkg_no_image_and_screenshot_unavailable(pipeline):
    url = "https://www.bmkg.go.id/page"
    pipeline.resolve.return_value = BmkgImageResult(page_url=url, diagnostic="no-image-found")
    context = _context(url)
    await weather_handler.cuaca_command(_update(), context)
    assert context.bot.edit_message_text.call_args.kwargs["text"] == weather_handler.NO_BMKG_IMAGE_TEXT

    pipeline.resolve.return_value = BmkgImageResult(page_url=url, diagnostic="screenshot-unavailable")
    context = _context(url)
    await weather_handler.cuaca_command(_update(), context)
    assert context.bot.edit_message_text.call_args.kwargs["text"] == weather_handler.SCREENSHOT_UNAVAILABLE_TEXT
    context.bot.send_photo.assert_not_awaited()


@pytest.mark.asyncio
async def test_cuaca_delete_failure_is_tolerated(pipeline, forecast_result):
    pipeline.resolve.return_value = forecast_result
    context = _context("Jakarta")
    context.bot.delete_message.side_effect = BadRequest("message to delete not found")
    await weather_handler.cuaca_command(_update(), context)
    # Ошибка удаления статуса не превращается в сообщение об ошибке
    texts = [call.kwargs["text"] for call in context.bot.send_message.call_args_list]
    assert weather_handler.FAILURE_TEXT not in texts
