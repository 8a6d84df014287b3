"""Structured logging configuration.

Uses standard library logging with a JSON formatter. Records logged inside
`compile_context(...)` carry its fields under a top-level `"context"` key.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

_RESERVED_LOG_RECORD_ATTRS: set[str] = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}


_compile_context: ContextVar[dict[str, object] | None] = ContextVar(
    "workflow_compile_context", default=None
)


@contextmanager
def compile_context(**fields: object) -> Iterator[None]:
    """Stamp `fields` on every record logged inside the block.

    Nested blocks extend the enclosing context; inner values win.
    """

    merged = {**(_compile_context.get() or {}), **fields}
    token = _compile_context.set(merged)
    try:
        yield
    finally:
        _compile_context.reset(token)


def current_compile_context() -> dict[str, object]:
    return dict(_compile_context.get() or {})


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object; `extra` fields are nested."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = current_compile_context()
        if context:
            payload["context"] = context

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str) -> None:
    """Configure root logging with structured JSON output on stderr.

    Stdout is left to the CLI for compiled graph output.
    """

    root = logging.getLogger()

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JsonFormatter())

    root.addHandler(handler)
    root.setLevel(level.upper())

    logging.getLogger("networkx").setLevel(max(root.level, logging.INFO))
