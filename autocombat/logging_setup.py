"""Process-wide logging setup for hosts embedding the combat compiler."""

from __future__ import annotations

import json
import logging
from enum import StrEnum

from autocombat.config.loader import LoggingConfig


class LogFormat(StrEnum):
    """Log formatter mode."""

    READABLE = "readable"
    JSON = "json"


class _JSONLogFormatter(logging.Formatter):
    """Compact JSON formatter for machine-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=True)


def configure_logging(config: LoggingConfig | None = None) -> logging.Handler:
    """Install a single stream handler on the root logger.

    Calling this again replaces the handler installed by the previous call
    and leaves handlers owned by the host alone.
    """
    config = config or LoggingConfig()
    resolved_level = getattr(logging, config.level.upper(), logging.INFO)
    root = logging.getLogger()
    root.handlers = [h for h in root.handlers if not getattr(h, "_autocombat_handler", False)]

    handler = logging.StreamHandler()
    handler._autocombat_handler = True  # type: ignore[attr-defined]
    if config.format == LogFormat.JSON.value:
        formatter: logging.Formatter = _JSONLogFormatter(datefmt="%Y-%m-%dT%H:%M:%S")
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%H:%M:%S",
        )
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(resolved_level)
    return handler
