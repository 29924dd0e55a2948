"""Root logger configuration.

Debug runs get a readable single-line format; otherwise records are emitted as
JSON objects so they can be shipped to a log aggregator.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from yumix.config import Settings, get_settings

READABLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": "yumix-api",
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def configure_logging(settings: Settings | None = None) -> None:
    """Install a single stderr handler on the root logger."""

    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(READABLE_FORMAT) if settings.debug else JSONFormatter()
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger(__name__).debug("Logging configured at %s", settings.log_level)


__all__ = ["JSONFormatter", "configure_logging"]
