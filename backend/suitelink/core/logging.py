"""Logging utilities.

Provides a LoggerAdapter that carries contextual dimensions (request ids,
action names, ...) on every record, plus a configurator that installs a
JSON formatter in deployed environments and a readable one locally.

Usage:
    from suitelink.core.logging import logger

    log = logger.with_context(action="createCustomer")
    log.info("Calling RESTlet")
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, Optional, Tuple

from suitelink.core.config import settings

_HANDLER_MARKER = "_suitelink_handler"


class _JSONFormatter(logging.Formatter):
    """Render each record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(getattr(record, "dimensions", None) or {})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class _LocalFormatter(logging.Formatter):
    """Human readable format with trailing [key=value] dimensions."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        dimensions = getattr(record, "dimensions", None)
        if dimensions:
            rendered = " ".join(f"{k}={v}" for k, v in dimensions.items())
            line = f"{line} [{rendered}]"
        return line


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that attaches a dict of dimensions to every record."""

    def __init__(self, logger: logging.Logger, dimensions: Optional[Dict[str, Any]] = None):
        """Wrap `logger`, tagging records with `dimensions`."""
        super().__init__(logger, {})
        self.dimensions: Dict[str, Any] = dict(dimensions or {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["dimensions"] = {**self.dimensions, **extra.get("dimensions", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a child logger with additional dimensions merged in."""
        return ContextualLogger(self.logger, {**self.dimensions, **dimensions})


class LoggerConfigurator:
    """Builds configured ContextualLogger instances."""

    @staticmethod
    def _install_handler(base: logging.Logger) -> None:
        if any(getattr(h, _HANDLER_MARKER, False) for h in base.handlers):
            return
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_LocalFormatter() if settings.is_local else _JSONFormatter())
        setattr(handler, _HANDLER_MARKER, True)
        base.addHandler(handler)

    @classmethod
    def configure_logger(
        cls, name: str, dimensions: Optional[Dict[str, Any]] = None
    ) -> ContextualLogger:
        """Configure and return a logger.

        Args:
            name: Dotted logger name, normally under the `suitelink` namespace.
            dimensions: Key/value pairs attached to every record.

        Returns:
            A ContextualLogger bound to `name`.
        """
        base = logging.getLogger("suitelink")
        base.setLevel(settings.LOG_LEVEL.upper())
        cls._install_handler(base)
        return ContextualLogger(logging.getLogger(name), dimensions)


logger = LoggerConfigurator.configure_logger("suitelink")
