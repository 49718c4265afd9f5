# config/logging_config.py
import logging
import os
import logging.handlers
from pathlib import Path

DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE_NAME = "cuaca_bot.log"

# Болтливые библиотеки HTTP-клиентов и Telegram
NOISY_LOGGERS = ("httpx", "telegram", "urllib3", "werkzeug")


def _has_file_handler(logger: logging.Logger, log_file: Path) -> bool:
    target = os.path.abspath(log_file)
    return any(
        isinstance(h, logging.handlers.RotatingFileHandler) and h.baseFilename == target
        for h in logger.handlers
    )


def setup_logging(log_level: str = "INFO", log_dir: str = "") -> Path:
    """
    Настраивает логирование бота и HTTP API: консоль + файл с ротацией.

    Повторный вызов (бот и сервер в одном процессе) не дублирует обработчики.

    Returns:
        Path: путь к файлу лога
    """
    log_dir = Path(log_dir) if log_dir else DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    logger = logging.getLogger()
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)-18s | %(funcName)-20s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if not _has_file_handler(logger, log_file):
        # Ротация 5 МБ, 3 файла
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(f"🔧 Логирование инициализировано: {log_file}")
    return log_file
