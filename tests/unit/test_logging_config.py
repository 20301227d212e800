"""Tests pour configure_logging."""

import logging
from pathlib import Path

import pytest
from loguru import logger

from filmotheque.config import Settings
from filmotheque.logging_config import configure_logging


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    for name in ("httpx", "httpcore", "uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = []
        std_logger.propagate = True


class TestConfigureLogging:
    def test_creates_log_directory(self, tmp_path: Path, restore_logger):
        settings = Settings(_env_file=None, log_file=tmp_path / "logs" / "app.log")

        configure_logging(settings)

        assert (tmp_path / "logs").is_dir()

    def test_stdlib_loggers_redirected(self, test_settings: Settings, restore_logger):
        configure_logging(test_settings)
        messages = []
        logger.add(messages.append, format="{message}")

        logging.getLogger("httpx").warning("HTTP Request: GET http://x/poster.jpg")

        assert any("HTTP Request" in str(m) for m in messages)
        assert logging.getLogger("httpx").propagate is False

    def test_can_be_called_twice(self, test_settings: Settings, restore_logger):
        configure_logging(test_settings)
        configure_logging(test_settings)

        assert len(logging.getLogger("uvicorn").handlers) == 1
