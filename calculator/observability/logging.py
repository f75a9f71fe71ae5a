from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog


_CONFIGURED = False

LEVELS = ("debug", "info", "warning", "error", "critical")


def configure_logging(level: int | str = logging.INFO, log_dir: Path | None = None) -> None:
    """Configure structlog + stdlib logging for JSON output.

    Records go to stdout; when ``log_dir`` is given they are also written to
    ``combined.log`` (every level) and ``error.log`` (errors only) inside it.

    Safe to call multiple times (no-op after first call).
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            *pre_chain,
            # Let ProcessorFormatter render JSON for stdlib log records too.
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=pre_chain,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [handler]

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

        error_handler = logging.FileHandler(log_dir / "error.log", encoding="utf-8")
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)

        combined_handler = logging.FileHandler(log_dir / "combined.log", encoding="utf-8")
        combined_handler.setFormatter(formatter)

        handlers.extend([error_handler, combined_handler])

    root = logging.getLogger()
    root.handlers = handlers
    root.setLevel(level)

    # Keep uvicorn's own loggers consistent with our handlers.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.handlers = handlers
        logger.propagate = False
        logger.setLevel(level)

    _CONFIGURED = True


class LogSink:
    """Accepts structured log records: a level, a message and a metadata map.

    Every record carries the ``service`` name as default metadata. ``write``
    returns once the stdlib handlers have emitted the record, so callers can
    rely on the record existing before they continue.
    """

    def __init__(self, service: str, name: str = "calculator") -> None:
        self._logger = structlog.get_logger(name).bind(service=service)

    def write(self, level: str, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level!r}")
        getattr(self._logger, level)(message, **dict(metadata or {}))

    def info(self, message: str, **metadata: Any) -> None:
        self.write("info", message, metadata)

    def error(self, message: str, **metadata: Any) -> None:
        self.write("error", message, metadata)
