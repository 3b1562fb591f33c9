"""Structured JSON logging for linear-mcp.

stdout carries the MCP protocol, so records go to stderr as JSON lines and,
optionally, to a rotating log file (5MB, 3 backups).
"""

from __future__ import annotations

import json
import logging
import os
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOGGER_NAME = "linear_mcp"
_setup_lock = threading.Lock()
_MAX_BYTES = 5 * 1024 * 1024  # 5MB
_BACKUP_COUNT = 3


class _JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "msg": record.getMessage(),
        }
        if hasattr(record, "tool"):
            entry["tool"] = record.tool
        if hasattr(record, "args_data"):
            entry["args"] = record.args_data
        if hasattr(record, "duration_ms"):
            entry["duration_ms"] = record.duration_ms
        if hasattr(record, "error"):
            entry["error"] = record.error
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = str(record.exc_info[1])
        return json.dumps(entry, default=str)


class _StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Marker subclass so setup_logging can recognise its own stderr handler."""


def setup_logging(log_file: Path | None = None, *, level: int = logging.INFO) -> logging.Logger:
    """Attach JSON handlers to the ``linear_mcp`` logger.

    Idempotent: at most one stderr handler and one file handler per target
    path.  A different *log_file* replaces the previous file handler.
    """
    logger = logging.getLogger(LOGGER_NAME)

    with _setup_lock:
        if not any(isinstance(h, _StderrHandler) for h in logger.handlers):
            stream = _StderrHandler(sys.stderr)
            stream.setFormatter(_JsonFormatter())
            logger.addHandler(stream)

        if log_file is not None:
            target_filename = os.path.abspath(str(log_file))
            existing = False
            for h in logger.handlers[:]:
                if not isinstance(h, RotatingFileHandler):
                    continue
                if h.baseFilename == target_filename:
                    existing = True
                    continue
                logger.removeHandler(h)
                h.close()
            if not existing:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                handler = RotatingFileHandler(
                    str(log_file),
                    maxBytes=_MAX_BYTES,
                    backupCount=_BACKUP_COUNT,
                )
                handler.setFormatter(_JsonFormatter())
                logger.addHandler(handler)

        logger.setLevel(level)
    return logger
