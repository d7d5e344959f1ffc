"""JSON log lines on stderr, tagged with the operator command being handled.

Stdout is the operator console, so nothing here writes to it. Every record
emitted inside :func:`command_scope` carries the scope's ``command_id`` and
``command`` name; outside a scope both are ``null``.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import IO, Any
from uuid import uuid4

from flask import Flask

#: Optional ``extra=`` keys copied into the JSON line when present.
EXTRA_FIELDS = ("elapsed_ms", "student_id", "course_id", "group_id")

_scope: ContextVar[tuple[str, str] | None] = ContextVar("school_command_scope", default=None)


class CommandScopeFilter(logging.Filter):
    """Stamp ``command_id`` and ``command`` from the active scope onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        scope = _scope.get()
        record.command_id, record.command = scope if scope else (None, None)
        return True


class JsonLineFormatter(logging.Formatter):
    """One compact JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        line: dict[str, Any] = {
            "ts": stamp.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "command_id": getattr(record, "command_id", None),
            "command": getattr(record, "command", None),
        }
        line.update(
            (field, getattr(record, field)) for field in EXTRA_FIELDS if hasattr(record, field)
        )
        if record.exc_info:
            line["error"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


def current_command_id() -> str | None:
    scope = _scope.get()
    return scope[0] if scope else None


@contextmanager
def command_scope(name: str) -> Iterator[str]:
    """Open a correlation scope for one operator command and yield its id."""
    command_id = uuid4().hex
    token = _scope.set((command_id, name))
    try:
        yield command_id
    finally:
        _scope.reset(token)


def configure_logging(level: str | int = "WARNING", stream: IO[str] | None = None) -> None:
    """Replace the root handlers with a single JSON handler at ``level``.

    Unknown level names fall back to ``WARNING``.
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.strip().upper(), logging.WARNING)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.addFilter(CommandScopeFilter())
    handler.setFormatter(JsonLineFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


def init_app(app: Flask) -> None:
    app.logger.addFilter(CommandScopeFilter())


__all__ = ["command_scope", "configure_logging", "current_command_id", "init_app"]
