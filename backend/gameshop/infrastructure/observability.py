"""Structured Logging: JSON log lines carrying account, character and money context.

Invariants:
    - Every line has timestamp (record creation time, UTC), level, logger, message
    - Economy context passed via extra= (account_id, character_id, item_code, money,
      total_cost, revenue) and request context (error_code, path) appear as top-level keys
    - Ids and other non-numeric extras are rendered as strings; money stays numeric
    - setup_logging replaces existing root handlers, so repeated startups do not duplicate lines
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "account_id", "character_id", "item_code",
    "money", "total_cost", "revenue",
    "error_code", "path",
)

_TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is None:
                continue
            entry[key] = value if isinstance(value, (int, float)) else str(value)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # SQL echo only when explicitly debugging
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if root.level <= logging.DEBUG else logging.WARNING,
    )
