"""
Logging setup for affilai.

``configure_logging(config, debug=...)`` is called once by each CLI
command. Library modules only call ``logging.getLogger(__name__)``.

Console output goes to stderr: stdout carries the command results (ad
copy, tracking URLs) and must stay clean for piping. The optional log
file receives the same records.

With ``json_format = true`` under ``[logging]`` each record is one JSON
object; ``extra=`` keys (e.g. ``product_id``) are lifted to the top level::

    {"ts": "2026-02-24T15:00:00Z", "level": "INFO", "logger": "affilai.pipeline.generate",
     "msg": "Created tiktok link 3 for product 2", "product_id": 2}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from affilai.config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Attributes every LogRecord carries; anything else came from ``extra=``.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    """One JSON object per record: ``ts``, ``level``, ``logger``, ``msg`` plus extras."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict = {
            "ts": ts.strftime(LOG_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(
            (key, val)
            for key, val in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return _JsonFormatter()
    return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def configure_logging(config: "LoggingConfig", debug: bool = False) -> None:
    """Install stderr and optional file handlers on the root logger.

    Args:
        config: ``[logging]`` section of ``AppConfig``.
        debug:  Force DEBUG regardless of ``config.level`` (``AppConfig.debug``).
    """
    level = logging.DEBUG if debug else getattr(logging, config.level, logging.INFO)
    formatter = _formatter(config.json_format)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
