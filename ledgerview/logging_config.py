"""
Logging for ledger fetches and chart requests.

Every ``ledgerview.*`` logger writes through the handler installed on the
``ledgerview`` logger by :func:`setup_logging`. Records may carry the
structured fields below (set through :func:`log_action`); the JSON formatter
emits them as top level keys, so a line for an upstream call reads::

    {"level": "INFO", "logger": "ledgerview.client", "message": "GET /api/income -> 200",
     "action": "fetch", "resource": "/api/income", "duration_ms": 41.07, ...}
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional


TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Record attributes copied into JSON lines when present
STRUCTURED_FIELDS = ("action", "resource", "duration_ms", "extra")


class JSONFormatter(logging.Formatter):
    """One JSON object per line"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in STRUCTURED_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO", logger_name: str = "ledgerview",
                  log_format: str = "json") -> logging.Logger:
    """
    Install a single stderr handler on `logger_name`.

    Called once by the dashboard entry point with the configured
    ``log_level`` / ``log_format``. Calling it again replaces the handler.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        logger_name: logger that owns the handler
        log_format: "json", or anything else for one plain text line per record
    """
    logger = logging.getLogger(logger_name)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    formatter = JSONFormatter() if log_format == "json" else logging.Formatter(TEXT_FORMAT)
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False

    return logger


def get_logger(name: str = "ledgerview") -> logging.Logger:
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, resource: Optional[str] = None,
               duration_ms: Optional[float] = None, extra: Optional[dict] = None):
    """
    Log `message` with the structured fields attached.

    `action` is what happened ("fetch", "proxy"), `resource` the ledger API
    path it happened to and `duration_ms` the upstream latency, rounded to
    two places. `extra` holds anything else, such as an upstream status.
    """
    record = logger.makeRecord(
        logger.name, getattr(logging, level.upper()),
        __name__, 0, message, (), None
    )

    if action:
        record.action = action
    if resource:
        record.resource = resource
    if duration_ms is not None:
        record.duration_ms = round(duration_ms, 2)
    if extra:
        record.extra = extra

    logger.handle(record)
