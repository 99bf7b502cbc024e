# shiftpay/core/logging_config.py
"""
Logging configuration for shiftpay.

Production writes JSON lines to rotating files (all records plus a separate
error file) and only warnings to stdout. Development logs everything to a
colored console and a plain rotating file.

Environment:
    SHIFTPAY_LOG_DIR    directory for log files (default "logs")
    SHIFTPAY_LOG_LEVEL  root level override, e.g. "WARNING"
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

from shiftpay.core.config import IS_PRODUCTION

LOG_DIR = Path(os.getenv("SHIFTPAY_LOG_DIR", "logs"))
LOG_LEVEL_ENV = "SHIFTPAY_LOG_LEVEL"

APP_LOG_FILE = LOG_DIR / "shiftpay.log"
ERROR_LOG_FILE = LOG_DIR / "shiftpay-errors.log"

# Record attributes copied into JSON output when present
CONTEXT_FIELDS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "shift_id",
    "period_start",
    "period_end",
)

# Third-party loggers and the level they are held at
QUIET_LOGGERS = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.INFO,
    "sqlalchemy.engine": logging.WARNING,
}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with request and period context when set."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        payload.update(getattr(record, "extra_fields", {}))
        payload.update({key: getattr(record, key) for key in CONTEXT_FIELDS if hasattr(record, key)})

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)
        # Work on a copy; the file handler formats the same record
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def _rotating_file(path: Path, level: int, formatter: logging.Formatter, max_mb: int, backups: int):
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=max_mb * 1_000_000,
        backupCount=backups,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _stdout(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _root_level(production: bool) -> int:
    override = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    if override:
        level = logging.getLevelName(override)
        if isinstance(level, int):
            return level
    return logging.INFO if production else logging.DEBUG


def setup_logging(production: bool = IS_PRODUCTION) -> None:
    """
    Configure the root logger. Replaces any handlers already installed.

    Args:
        production: JSON files and quiet console when True, colored DEBUG
            console otherwise
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    if production:
        json_formatter = JSONFormatter()
        handlers = [
            _rotating_file(APP_LOG_FILE, logging.INFO, json_formatter, max_mb=10, backups=5),
            _rotating_file(ERROR_LOG_FILE, logging.ERROR, json_formatter, max_mb=10, backups=10),
            _stdout(logging.WARNING, json_formatter),
        ]
    else:
        handlers = [
            _stdout(
                logging.DEBUG,
                ColoredFormatter("%(levelname)-8s %(asctime)s [%(name)s] %(message)s", "%Y-%m-%d %H:%M:%S"),
            ),
            _rotating_file(
                APP_LOG_FILE,
                logging.DEBUG,
                logging.Formatter("%(levelname)s %(asctime)s [%(name)s:%(lineno)d] %(message)s"),
                max_mb=5,
                backups=2,
            ),
        ]

    root_logger = logging.getLogger()
    root_logger.setLevel(_root_level(production))
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured (production=%s)",
        production,
        extra={"extra_fields": {"log_dir": str(LOG_DIR.absolute())}},
    )


def get_logger(name: str) -> logging.Logger:
    """Module logger; same as logging.getLogger(name)."""
    return logging.getLogger(name)


class LogContext:
    """
    Attach fields to every record created inside the block.

    Usage:
        with LogContext(period_start=period.start, period_end=period.end):
            logger.info("Calculating salary")
    """

    def __init__(self, **fields):
        self.fields = fields
        self._previous_factory = None

    def __enter__(self):
        previous = self._previous_factory = logging.getLogRecordFactory()
        fields = self.fields

        def record_factory(*args, **kwargs):
            record = previous(*args, **kwargs)
            for key, value in fields.items():
                setattr(record, key, value)
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        logging.setLogRecordFactory(self._previous_factory)
