"""
Logging setup for Token Radar.

``configure_logging(config)`` is called once per CLI command, after the config
is loaded and before the snapshot is read.  Library modules only ever call
``logging.getLogger(__name__)``.

Who logs:
  - ``token_radar.ingestion.snapshot_loader``: INFO with the entry count.
  - ``token_radar.scoring.analyzer``: INFO batch summary, WARNING per skipped
    token with ``extra={"token_id": ...}``.
The classifier, scorer, breakout engine and ranker stay silent.

Console records go to stderr so the tables ``analyze`` and ``breakout`` print
on stdout can be piped or redirected on their own.

With ``json_format = true`` under ``[logging]`` every record is one line::

    {"ts": "2026-10-19T09:00:00Z", "level": "WARNING", "logger": "token_radar.scoring.analyzer",
     "msg": "Skipping ghost-protocol: ...", "token_id": "ghost-protocol"}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from token_radar.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Attributes every LogRecord carries; anything else came in via ``extra=``.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class JsonLinesFormatter(logging.Formatter):
    """Render a record as one JSON object: ``ts``, ``level``, ``logger``,
    ``msg``, ``exc`` when an exception is attached, then every ``extra=`` key.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict = {
            "ts":     created.strftime(LOG_DATE_FORMAT),
            "level":  record.levelname,
            "logger": record.name,
            "msg":    record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        payload.update(
            (key, val)
            for key, val in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )
        return json.dumps(payload, default=str, ensure_ascii=False)


def _make_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JsonLinesFormatter()
    return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def configure_logging(
    config: "LoggingConfig",
    stream: Optional[IO[str]] = None,
) -> list[logging.Handler]:
    """Replace the root logger's handlers according to ``config``.

    Args:
        config: ``[logging]`` section of ``AppConfig``.
        stream: Console target; defaults to ``sys.stderr``.

    Returns:
        The installed handlers: console first, then the file handler when
        ``config.log_file`` is set (its directory is created on demand).
    """
    level = logging.getLevelName(config.level.upper())
    formatter = _make_formatter(config.json_format)

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    return handlers
