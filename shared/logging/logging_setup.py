import logging
import logging.config
import os
import sys
from datetime import datetime

from pytz import timezone

LOGGER_NAME = "document_workspace"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_RESET = "\033[0m"
_COLORS = {
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
    "cyan": "\033[36m",
}
_LEVEL_MARKERS = {
    logging.WARNING: "⚠️ ",
    logging.ERROR: "⛔ ",
    logging.CRITICAL: "⛔ ",
}


def _is_debug() -> bool:
    return os.getenv("LOG_LEVEL", "info").lower() == "debug"


class TimezoneFormatter(logging.Formatter):
    """Renders timestamps in a fixed timezone and marks warnings and errors."""

    def __init__(self, tz_name: str, fmt: str = LOG_FORMAT, datefmt: str = DATE_FORMAT):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.tz = timezone(tz_name)

    def formatTime(self, record, datefmt=None):
        stamp = datetime.fromtimestamp(record.created, self.tz)
        return stamp.strftime(datefmt) if datefmt else stamp.isoformat()

    def format(self, record):
        marker = _LEVEL_MARKERS.get(record.levelno, "")
        if not marker:
            return super().format(record)
        # handlers share the record, so mark a copy
        marked = logging.makeLogRecord(record.__dict__)
        marked.msg = marker + record.getMessage()
        marked.args = ()
        return super().format(marked)


class ConsoleFormatter(TimezoneFormatter):
    """Adds the ANSI color requested through ColorLogger's color= argument."""

    def format(self, record):
        line = super().format(record)
        ansi = _COLORS.get(getattr(record, "color", None) or "")
        return f"{ansi}{line}{_RESET}" if ansi else line


class ColorLogger:
    """Logger wrapper whose log methods accept an optional color= keyword.

    Only the console handler renders the color; the log file stays plain.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def _log(self, level: int, msg, args, color: str | None, kwargs: dict) -> None:
        if color is not None:
            kwargs["extra"] = {**(kwargs.get("extra") or {}), "color": color}
        self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg, *args, color: str | None = None, **kwargs):
        self._log(logging.DEBUG, msg, args, color, kwargs)

    def info(self, msg, *args, color: str | None = None, **kwargs):
        self._log(logging.INFO, msg, args, color, kwargs)

    def warning(self, msg, *args, color: str | None = None, **kwargs):
        self._log(logging.WARNING, msg, args, color, kwargs)

    def error(self, msg, *args, color: str | None = None, **kwargs):
        self._log(logging.ERROR, msg, args, color, kwargs)

    def exception(self, msg, *args, color: str | None = None, **kwargs):
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, args, color, kwargs)

    def __getattr__(self, name):
        return getattr(self._logger, name)


def setup_logging() -> ColorLogger:
    """Configure console logging, plus $ROOT_DIR/logs/app.log when ROOT_DIR is set."""
    tz_name = os.getenv("TIMEZONE", "Europe/Berlin")
    level = logging.DEBUG if _is_debug() else logging.INFO

    handlers: dict = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "level": level,
            "stream": sys.stdout,
        },
    }
    root_dir = os.getenv("ROOT_DIR")
    if root_dir:
        log_dir = os.path.join(root_dir, "logs")
        os.makedirs(log_dir, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "plain",
            "level": level,
            "filename": os.path.join(log_dir, "app.log"),
            "encoding": "utf-8",
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"()": TimezoneFormatter, "tz_name": tz_name},
            "console": {"()": ConsoleFormatter, "tz_name": tz_name},
        },
        "handlers": handlers,
        "root": {"handlers": list(handlers), "level": level},
    })

    # one line per request is too chatty outside debug
    logging.getLogger("httpx").setLevel(level if _is_debug() else logging.WARNING)

    return ColorLogger(logging.getLogger(LOGGER_NAME))
