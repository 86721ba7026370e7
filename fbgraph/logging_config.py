"""Logging setup for applications embedding fbgraph.

fbgraph itself only creates module loggers under ``fbgraph``. Call
``setup_logging()`` to give them a handler; production output is one JSON
object per line.
"""

import json
import logging
import sys
from datetime import UTC, datetime

from fbgraph.config import VERSION, settings

# Request context attached by FacebookRequest through ``extra=``
CONTEXT_FIELDS = ("method", "path", "graph_version", "http_status")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
            "sdk_version": VERSION,
        }
        for key in CONTEXT_FIELDS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(app_env: str | None = None, log_level: str | None = None) -> logging.Logger:
    """Attach a stdout handler to the ``fbgraph`` logger and return it.

    Defaults come from ``settings``. Calling it again replaces the handler.
    """
    app_env = app_env or settings.app_env
    logger = logging.getLogger("fbgraph")
    logger.setLevel(log_level or settings.log_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if app_env == "production":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return logger
