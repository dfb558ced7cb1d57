"""Unit tests for divirpc.core.log."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from divirpc.core.log import configure_logging


class TestConfigureLogging:
    """Tests for logging presets."""

    def test_normal_preset(self):
        logger = configure_logging("normal")
        assert logger.name == "divirpc"
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_debug_preset(self):
        logger = configure_logging("debug")
        assert logger.level == logging.DEBUG

    def test_none_preset_is_silent(self):
        logger = configure_logging("none")
        assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)
        assert not logger.isEnabledFor(logging.CRITICAL)

    def test_reconfigure_replaces_handlers(self):
        configure_logging("normal")
        logger = configure_logging("debug")
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "divirpc.log"
        logger = configure_logging("normal", log_file=log_file)
        assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
        logging.getLogger("divirpc.rpc.protocol").info("hello file")
        for handler in logger.handlers:
            handler.flush()
        assert "hello file" in log_file.read_text()

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            configure_logging("loud")  # type: ignore[arg-type]
