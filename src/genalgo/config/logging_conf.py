"""Project-wide *logging* setup: plain text or JSON lines."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any, Mapping

from .settings import Settings, get_settings

__all__ = ["LOG_FILE_NAME", "JSONFormatter", "configure_logging"]

LOG_FILE_NAME = "genalgo.log"
PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# attributes every LogRecord carries; anything else came in through ``extra=``
_RESERVED = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """Serialise each ``LogRecord`` as one JSON object per line."""

    def __init__(self, *, default_context: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self._default_context = dict(default_context or {})

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        payload.update(self._default_context)
        for key, value in record.__dict__.items():
            if key not in _RESERVED:
                payload.setdefault(key, value)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(
    *,
    settings: Settings | None = None,
    level: int | str | None = None,
    structured: bool | None = None,
    module_levels: Mapping[str, int | str] | None = None,
    stream: IO[str] | None = None,
    context: Mapping[str, Any] | None = None,
    log_file: Path | None = None,
) -> None:
    """Reset the root logger with a stream handler and a file handler.

    Parameters
    ----------
    settings:
        Source of defaults; :func:`get_settings` when ``None``.
    level:
        Handler level; defaults to ``settings.log_level``.
    structured:
        Use :class:`JSONFormatter`; defaults to ``settings.structured_logging``.
    module_levels:
        ``logger name -> level`` fine tuning (e.g. ``{"genalgo": "DEBUG"}``).
    stream:
        Target of the stream handler, ``sys.stderr`` by default.
    context:
        Static fields added to every JSON record (e.g. ``{"seed": 42}``).
    log_file:
        Copy of the log (append mode); ``settings.logs_dir / 'genalgo.log'``
        by default. Unwritable locations are skipped.
    """

    settings = settings or get_settings()
    structured = settings.structured_logging if structured is None else structured
    level = settings.log_level_value if level is None else level

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    formatter: logging.Formatter
    if structured:
        formatter = JSONFormatter(default_context=context)
    else:
        formatter = logging.Formatter(fmt=PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler(stream)]
    file_target = log_file or (settings.logs_dir / LOG_FILE_NAME)
    try:
        file_target.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(file_target, encoding="utf-8"))
    except OSError:
        logging.getLogger(__name__).debug("log file %s not writable", file_target)

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for logger_name, logger_level in (module_levels or {}).items():
        logging.getLogger(logger_name).setLevel(logger_level)
