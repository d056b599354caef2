"""
Structured logging for the kernel.

Kernel modules log through context loggers under the ``numkernel``
namespace. Nothing is printed until a host calls setup_logging(), which
attaches handlers to that namespace only and leaves the root logger alone.
"""

import sys
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Settings, get_settings

ROOT_LOGGER_NAME = "numkernel"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class StructuredFormatter(logging.Formatter):
    """One JSON object per record; context fields are merged in at top level"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload.update(getattr(record, "extra_data", {}))
        # Decimal and Fraction payloads are written as text
        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter that appends context as key=value pairs"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = getattr(record, "extra_data", None)
        if context:
            pairs = " ".join(f"{key}={value}" for key, value in context.items())
            text = f"{text} [{pairs}]"
        return text


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """
    Attach console (and optional file) handlers to the ``numkernel`` logger.

    Calling it again replaces the handlers installed by the previous call.

    Returns:
        The configured ``numkernel`` logger
    """
    config = config or get_settings()
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    formatter = StructuredFormatter() if config.LOG_FORMAT == "json" else TextFormatter()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.LOG_FILE:
        log_path = Path(config.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Adapter merging permanent context with per-call ``extra_data``"""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra_data = kwargs.pop("extra_data", {})
        kwargs.setdefault("extra", {})["extra_data"] = {**self.extra, **extra_data}
        return msg, kwargs


def get_context_logger(name: str, **context) -> LoggerAdapter:
    """Logger whose records always carry ``context`` (e.g. component="numeric")"""
    return LoggerAdapter(get_logger(name), context)
