# -*- coding: utf-8 -*-
"""
Тесты для config/logging_config.py.
"""
import logging
import logging.handlers

import pytest

from config.logging_config import LOG_FILE_NAME, setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def _file_handlers(root):
    return [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]


def test_setup_logging_writes_project_log(root_logger, tmp_path):
    log_file = setup_logging("debug", str(tmp_path))

    assert log_file == tmp_path / LOG_FILE_NAME
    assert log_file.name == "cuaca_bot.log"
    assert log_file.exists()
    assert root_logger.level == logging.DEBUG
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_setup_logging_twice_keeps_one_file_handler(root_logger, tmp_path):
    setup_logging("INFO", str(tmp_path))
    setup_logging("INFO", str(tmp_path))
    assert len(_file_handlers(root_logger)) == 1


def test_unknown_level_falls_back_to_info(root_logger, tmp_path):
    setup_logging("verbose", str(tmp_path))
    assert root_logger.level == logging.INFO
