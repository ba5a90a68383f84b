"""Logging setup — Rich console output or JSON lines."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional, Sequence, TextIO

from rich.console import Console
from rich.logging import RichHandler

from docscan.config.schema import LoggingConfig

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Attributes every LogRecord has; anything else came in via ``extra=``.
_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line: level, logger, msg, plus any extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _build_handler(cfg: LoggingConfig, stream: Optional[TextIO] = None) -> logging.Handler:
    if cfg.output == "file":
        handler: logging.Handler = logging.FileHandler(cfg.file, encoding="utf-8")
    else:
        if stream is None:
            stream = sys.stdout if cfg.output == "stdout" else sys.stderr
        # Rich layout only on a terminal.
        if cfg.format == "text" and stream.isatty():
            return RichHandler(console=Console(file=stream), show_path=False)
        handler = logging.StreamHandler(stream)

    if cfg.format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    return handler


def configure_logging(
    cfg: LoggingConfig,
    *,
    stream: Optional[TextIO] = None,
    loggers: Sequence[str] = ("docscan",),
) -> logging.Logger:
    """Install one shared handler on each of *loggers*; returns the first.

    ``serve`` passes ``("docscan", "uvicorn")`` so server lifecycle and
    access lines (``uvicorn.error``, ``uvicorn.access``) share the format.
    """
    handler = _build_handler(cfg, stream)
    level = _LEVELS.get(cfg.level, logging.INFO)
    configured = []
    for name in loggers:
        logger = logging.getLogger(name)
        for old in list(logger.handlers):
            logger.removeHandler(old)
            if old is not handler:
                old.close()
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False
        configured.append(logger)
    return configured[0]
