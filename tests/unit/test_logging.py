"""Tests for logging module."""
import logging

import pytest

from dropboxpy import setup_logging
from dropboxpy.core.logging import (
    ROOT_LOGGER,
    DEBUG_FORMAT,
    get_logger,
    configure_logging,
)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Restore the package logger after each test."""
    logger = logging.getLogger(ROOT_LOGGER)
    level = logger.level
    yield
    configure_logging(level=level, enable_console=False)
    logger.setLevel(level)


class TestGetLogger:
    """Test suite for get_logger function."""

    def test_get_logger_with_name(self):
        """Test short names are placed under the package."""
        assert get_logger('upload.chunk').name == 'dropboxpy.upload.chunk'

    def test_get_logger_with_full_name(self):
        assert get_logger('dropboxpy.auth').name == 'dropboxpy.auth'

    def test_get_logger_without_name(self):
        assert get_logger().name == 'dropboxpy'

    def test_propagates(self):
        assert get_logger('client').propagate is True

    def test_same_logger_for_both_names(self):
        assert get_logger('transport') is get_logger('dropboxpy.transport')


class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def _own_handlers(self, logger):
        return [h for h in logger.handlers if getattr(h, '_dropboxpy', False)]

    def test_console_handler(self):
        logger = configure_logging(level=logging.INFO)

        assert logger.level == logging.INFO
        assert len(self._own_handlers(logger)) == 1

    def test_without_console(self):
        logger = configure_logging(enable_console=False)

        assert self._own_handlers(logger) == []

    def test_repeated_calls_replace_handlers(self):
        configure_logging()
        logger = configure_logging()

        assert len(self._own_handlers(logger)) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / 'dropbox.log'
        logger = configure_logging(level=logging.DEBUG, log_file=str(log_file), enable_console=False)

        get_logger('upload.coordinator').debug('chunk sent')
        for handler in logger.handlers:
            handler.flush()

        assert 'chunk sent' in log_file.read_text()
        assert 'dropboxpy.upload.coordinator' in log_file.read_text()

    def test_debug_format(self):
        """Test debug format includes file and line info."""
        logger = configure_logging(level=logging.DEBUG)

        handler = self._own_handlers(logger)[0]
        assert handler.formatter._fmt == DEBUG_FORMAT
        assert '%(lineno)d' in DEBUG_FORMAT


def test_setup_logging_sets_levels():
    setup_logging(logging.DEBUG)

    assert logging.getLogger('dropboxpy.upload.coordinator').level == logging.DEBUG
    setup_logging(logging.NOTSET)
