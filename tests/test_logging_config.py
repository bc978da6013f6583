"""
Tests for logging_config module.
"""

import logging

import pytest

from diff_voyager.infra.logging_config import (
    LOGGER_NAME,
    DailyRotatingFileHandler,
    setup_logging,
)


@pytest.fixture
def restore_logger():
    """Restore the package logger after setup_logging() reconfigures it."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate

    yield logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


class TestDailyRotatingFileHandler:
    """Tests for DailyRotatingFileHandler class."""

    def test_handler_creates_log_directory(self, tmp_path):
        log_dir = tmp_path / "new_logs"
        assert not log_dir.exists()

        handler = DailyRotatingFileHandler(log_dir=str(log_dir))
        assert log_dir.exists()
        handler.close()

    def test_handler_creates_log_file(self, tmp_path):
        handler = DailyRotatingFileHandler(log_dir=str(tmp_path))

        log_files = list(tmp_path.glob("diff_voyager_*.log"))
        assert len(log_files) == 1
        handler.close()

    def test_handler_emits_record(self, tmp_path):
        handler = DailyRotatingFileHandler(log_dir=str(tmp_path))
        handler.setFormatter(logging.Formatter('%(message)s'))

        record = logging.LogRecord(
            name="test",
            level=logging.INFO,
            pathname="",
            lineno=0,
            msg="Snapshot queued",
            args=(),
            exc_info=None
        )
        handler.emit(record)
        handler.close()

        content = next(tmp_path.glob("diff_voyager_*.log")).read_text()
        assert "Snapshot queued" in content


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_returns_package_logger(self, restore_logger):
        logger = setup_logging("INFO", log_dir=None)

        assert isinstance(logger, logging.Logger)
        assert logger.name == LOGGER_NAME
        assert logger.propagate is False

    def test_sets_log_level(self, restore_logger):
        logger = setup_logging("DEBUG", log_dir=None)
        assert logger.level == logging.DEBUG

    def test_unknown_level_defaults_to_info(self, restore_logger):
        logger = setup_logging("CHATTY", log_dir=None)
        assert logger.level == logging.INFO

    def test_console_only_without_log_dir(self, restore_logger):
        logger = setup_logging("INFO", log_dir=None)

        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], DailyRotatingFileHandler)

    def test_file_handler_with_log_dir(self, restore_logger, tmp_path):
        logger = setup_logging("INFO", log_dir=tmp_path)

        assert any(isinstance(h, DailyRotatingFileHandler) for h in logger.handlers)
        assert list(tmp_path.glob("diff_voyager_*.log"))

    def test_repeated_setup_does_not_duplicate_handlers(self, restore_logger, tmp_path):
        setup_logging("INFO", log_dir=tmp_path)
        logger = setup_logging("INFO", log_dir=tmp_path)

        assert len(logger.handlers) == 2

    def test_module_loggers_reach_package_handlers(self, restore_logger, tmp_path):
        setup_logging("INFO", log_dir=tmp_path)

        logging.getLogger("diff_voyager.scheduler.worker").info("Worker started")
        for handler in restore_logger.handlers:
            handler.flush()

        content = next(tmp_path.glob("diff_voyager_*.log")).read_text()
        assert "Worker started" in content
