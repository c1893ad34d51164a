"""
Logging setup.

The metrics only emit records through ``logging.getLogger(__name__)``;
nothing is configured on import.  Host applications (or scripts) call
:func:`setup_logging` once to get structured output on stdout.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from colossus.core.config import settings

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for log shippers reading stdout.

    Keys: ``timestamp`` (UTC, ISO 8601), ``level``, ``logger`` (the
    ``colossus.*`` module name), ``message``, ``module``, ``function`` and
    ``line``.  An ``exception`` object (type and message) is added when
    the record carries one, and any ``extra={"ctx_...": ...}`` fields
    passed to the logging call are grouped under ``context``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
            }
        extra = {k: v for k, v in record.__dict__.items() if k.startswith("ctx_")}
        if extra:
            log_entry["context"] = extra
        return json.dumps(log_entry, default=str)


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Attach a stdout handler to the ``colossus`` logger.

    Idempotent: a second call leaves the existing handler in place.
    Defaults come from ``settings.LOG_LEVEL`` / ``settings.LOG_FORMAT``.
    """
    logger = logging.getLogger("colossus")
    if logger.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    if (fmt or settings.LOG_FORMAT) == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO))
