"""SocialAI Insights — Structured JSON Logging.

Every line carries the platform, endpoint, status and latency of the
outbound call when the caller passes them via ``extra``.
"""

import logging
import json
import sys
from datetime import datetime, timezone
from socialai.config import settings

CALL_FIELDS = ("platform", "endpoint", "status_code", "duration_ms")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            {key: getattr(record, key) for key in CALL_FIELDS if hasattr(record, key)}
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``socialai`` namespace, writing JSON to stdout."""
    logger = logging.getLogger(f"socialai.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    return logger
