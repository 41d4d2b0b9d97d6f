"""Logging setup for the ``hhserver`` logger namespace.

Modules log through ``logging.getLogger(__name__)``; the entry point calls
``setup_logging`` once. When the server runs in ``--json`` mode the log lines
are JSON as well, so integrations reading stderr never see free text.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import TextIO

BASE_LOGGER = "hhserver"

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload = {
            "ts": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }
        return json.dumps(payload, ensure_ascii=False, sort_keys=True)


def setup_logging(
    *,
    debug: bool = False,
    json_logs: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure the base logger, replacing handlers from an earlier call."""
    logger = logging.getLogger(BASE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    if json_logs:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    return logger
