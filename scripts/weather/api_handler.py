# scripts/weather/api_handler.py
import logging

import requests
from flask import Blueprint, Response, jsonify, request

from process_manager import process_manager
from core.utils.error_handler import InvalidInput, RenderUnavailable, log_exception
from core.utils.validator import DEFAULT_DAYS
from scripts.weather._processes.formatter import render_card_png

logger = logging.getLogger("api_handler")

weather_api_bp = Blueprint("weather_api", __name__, url_prefix="/api")


def _missing_query():
    return jsonify({"error": "q parameter required"}), 400


def _internal_error(e: Exception):
    log_exception(e, "❌ Ошибка API", {"path": request.path, "q": request.args.get("q")})
    return jsonify({"error": "internal error", "detail": str(e)}), 500


def _proxy_bmkg_image(image_url: str) -> Response:
    """Отдаёт байты картинки BMKG с исходным content-type."""
    options = process_manager.pipeline.options
    upstream = requests.get(
        image_url,
        headers={"User-Agent": options.user_agent},
        timeout=options.timeout
    )
    upstream.raise_for_status()
    content_type = upstream.headers.get("content-type") or "image/jpeg"
    return Response(upstream.content, status=200, content_type=content_type)


@weather_api_bp.route("/cuaca", methods=["GET"])
def cuaca():
    q = request.args.get("q")
    days = request.args.get("days", DEFAULT_DAYS)
    if not q:
        return _missing_query()

    try:
        result = process_manager.pipeline.resolve(q, days)
    except InvalidInput:
        logger.info(f"⚠️ Пустой запрос: {q!r}")
        return _missing_query()
    except Exception as e:
        return _internal_error(e)

    if result.kind == "error":
        return jsonify(result.to_dict()), 500
    return jsonify(result.to_dict()), 200


@weather_api_bp.route("/card", methods=["GET"])
def card():
    q = request.args.get("q")
    days = request.args.get("days", DEFAULT_DAYS)
    if not q:
        return _missing_query()

    try:
        result = process_manager.pipeline.resolve(q, days)

        if result.kind == "error":
            return jsonify(result.to_dict()), 500

        if result.kind == "bmkg":
            if result.image_url:
                return _proxy_bmkg_image(result.image_url)
            if result.screenshot is not None:
                return Response(result.screenshot, status=200, content_type="image/png")
            return jsonify({"error": "no-bmkg-image"}), 404

        try:
            image = render_card_png(result, days, process_manager.renderer)
        except RenderUnavailable as e:
            return jsonify({
                "error": "renderer-not-available",
                "message": f"{e} Use /api/cuaca instead.",
                "data": result.to_dict()
            }), 501
        return Response(image, status=200, content_type="image/png")

    except InvalidInput:
        logger.info(f"⚠️ Пустой запрос: {q!r}")
        return _missing_query()
    except Exception as e:
        return _internal_error(e)
