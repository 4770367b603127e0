"""
Logging configuration for the Iuran Sampah application.
Provides structured logging with different levels and formats.

PERFORMANCE:
- Uses QueueHandler to prevent log writes from blocking the event loop
- QueueListener handles file I/O in a separate thread
- No synchronous file operations in the main async loop
"""

import atexit
import logging
import logging.handlers
import queue
import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from core.middleware.correlation import CorrelationIdFilter


# Global queue listener for cleanup
_queue_listener: Optional[logging.handlers.QueueListener] = None

# Loggers whose records also go to ledger.log
LEDGER_LOGGERS = (
    "api.services.payment_service",
    "api.services.dispute_service",
    "api.services.user_service",
    "core.policy",
)


class LogConfig(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    enable_file_logging: bool = True
    log_dir: str = "logs"
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    enable_console: bool = True
    enable_query_logging: bool = False


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    # Color codes
    grey = "\x1b[38;21m"
    yellow = "\x1b[33;21m"
    red = "\x1b[31;21m"
    bold_red = "\x1b[31;1m"
    blue = "\x1b[34;21m"
    reset = "\x1b[0m"

    COLORS = {
        logging.DEBUG: grey,
        logging.INFO: blue,
        logging.WARNING: yellow,
        logging.ERROR: red,
        logging.CRITICAL: bold_red,
    }

    def format(self, record):
        # Color a copy so file handlers sharing the record see plain text
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelno, self.grey)
        record.levelname = f"{color}{record.levelname}{self.reset}"
        return f"{super().format(record)}{self.reset}"


class LedgerFilter(logging.Filter):
    """Pass only records from the ledger and authorization loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name.startswith(LEDGER_LOGGERS)


def _rotating_handler(config: LogConfig, filename: str, formatter: logging.Formatter):
    handler = logging.handlers.RotatingFileHandler(
        Path(config.log_dir) / filename,
        maxBytes=config.max_file_size,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    handler.setLevel(getattr(logging, config.level.upper()))
    handler.setFormatter(formatter)
    return handler


def setup_logging(config: Optional[LogConfig] = None) -> None:
    """Setup application logging with configuration.

    - Console handler with colors, written directly
    - app.log (everything) and ledger.log (payments, disputes, user
      changes and authorization denials) behind a QueueListener
    - Every record carries the request correlation id
    """
    global _queue_listener

    if config is None:
        config = LogConfig()

    # Stop existing listener if running
    if _queue_listener:
        _queue_listener.stop()
        _queue_listener = None

    level = getattr(logging, config.level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    correlation_filter = CorrelationIdFilter()

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(
            ColoredFormatter(
                fmt="%(asctime)s | %(name)s | %(levelname)s | %(correlation_id)s | %(message)s",
                datefmt=config.date_format,
            )
        )
        console_handler.addFilter(correlation_filter)
        root_logger.addHandler(console_handler)

    if config.enable_file_logging:
        Path(config.log_dir).mkdir(parents=True, exist_ok=True)

        file_formatter = logging.Formatter(
            fmt="%(asctime)s | %(name)s | %(levelname)s | %(correlation_id)s | %(funcName)s:%(lineno)d | %(message)s",
            datefmt=config.date_format,
        )
        app_handler = _rotating_handler(config, "app.log", file_formatter)
        ledger_handler = _rotating_handler(config, "ledger.log", file_formatter)
        ledger_handler.addFilter(LedgerFilter())

        # Queue for log records (unbounded)
        log_queue = queue.Queue(-1)

        # The filter runs on the request thread, where the context var is set
        queue_handler = logging.handlers.QueueHandler(log_queue)
        queue_handler.addFilter(correlation_filter)
        root_logger.addHandler(queue_handler)

        _queue_listener = logging.handlers.QueueListener(
            log_queue,
            app_handler,
            ledger_handler,
            respect_handler_level=True,
        )
        _queue_listener.start()

        # Register cleanup on exit
        atexit.register(stop_queue_listener)

    # SQLAlchemy logger configuration
    sqlalchemy_logger = logging.getLogger("sqlalchemy.engine")
    if config.enable_query_logging:
        sqlalchemy_logger.setLevel(level)
    else:
        sqlalchemy_logger.setLevel(logging.WARNING)  # Only show warnings and errors


def stop_queue_listener() -> None:
    """Stop the queue listener gracefully.

    Called automatically on exit via atexit.
    Can also be called manually during shutdown.
    """
    global _queue_listener

    if _queue_listener:
        _queue_listener.stop()
        _queue_listener = None
