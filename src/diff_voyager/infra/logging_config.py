"""
Logging configuration module.

Daily log rotation with process start time tracking.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "diff_voyager"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# HHMMSS of the first handler created in this process; shared by every
# daily file so one run can be told apart from the next
_PROCESS_START_TIME: Optional[str] = None


def _today() -> str:
    return datetime.now().strftime("%Y%m%d")


class DailyRotatingFileHandler(logging.FileHandler):
    """
    Daily rotating file handler.

    Creates one log file per calendar day with format:
    <log_dir>/diff_voyager_YYYYMMDD_<START_HHMMSS>.log

    START_HHMMSS is fixed at process start, only YYYYMMDD changes.
    """

    def __init__(self, log_dir: str | Path = "logs", encoding: str = "utf-8"):
        global _PROCESS_START_TIME
        if _PROCESS_START_TIME is None:
            _PROCESS_START_TIME = datetime.now().strftime("%H%M%S")

        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.start_time = _PROCESS_START_TIME
        self.current_date = _today()

        super().__init__(self.path_for(self.current_date), mode="a", encoding=encoding)

    def path_for(self, date: str) -> str:
        """Absolute log file path for a YYYYMMDD date."""
        return str((self.log_dir / f"{LOGGER_NAME}_{date}_{self.start_time}.log").absolute())

    def _rotate(self, date: str) -> None:
        self.close()
        self.current_date = date
        self.baseFilename = self.path_for(date)
        self.stream = self._open()

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a record, switching files when the calendar day changes."""
        today = _today()
        if today != self.current_date:
            self._rotate(today)
        super().emit(record)


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[str | Path] = "logs",
) -> logging.Logger:
    """
    Configure the diff_voyager logger and return it.

    Module loggers (diff_voyager.scheduler.worker, ...) propagate here.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for daily log files; None disables file logging

    Returns:
        logging.Logger: Configured logger instance
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # Handlers live here only; the root logger would print everything twice
    logger.propagate = False

    for stale in list(logger.handlers):
        logger.removeHandler(stale)
        stale.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_dir is not None:
        handlers.append(DailyRotatingFileHandler(log_dir=log_dir))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    destination = handlers[-1].baseFilename if log_dir is not None else "console only"
    logger.info(f"Logging started - level: {log_level}, output: {destination}")
    return logger
