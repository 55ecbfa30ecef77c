"""Lightweight logging helpers for optional structured output."""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Protocol


class Logger(Protocol):
    """Protocol for minimal logger implementations."""

    def debug(self, event: str, **fields: Any) -> None:
        """Emit a ``DEBUG``-level event."""
        ...

    def info(self, event: str, **fields: Any) -> None:
        """Emit an ``INFO``-level event."""
        ...

    def warning(self, event: str, **fields: Any) -> None:
        """Emit a ``WARNING``-level event."""
        ...


class NoopLogger:
    """Logger that discards all events."""

    def debug(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        """Ignore a ``DEBUG`` event."""
        return

    def info(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        """Ignore an ``INFO`` event."""
        return

    def warning(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        """Ignore a ``WARNING`` event."""
        return


class StdLogger:
    """Minimal logger writing ``level event k=v`` lines or JSON lines.

    Args:
        level: Threshold, one of ``"debug"``, ``"info"`` or ``"warning"``.
        json_fmt: Emit one JSON object per event instead of plain text.
        stream: Output stream, ``sys.stderr`` by default.
    """

    _levels: Dict[str, int] = {"debug": 10, "info": 20, "warning": 30}

    def __init__(
        self,
        level: str = "warning",
        json_fmt: bool = False,
        stream: Any | None = None,
    ) -> None:
        self.level = level
        self.json_fmt = json_fmt
        self.stream = stream or sys.stderr

    def enabled(self, level: str) -> bool:
        """Return ``True`` if events at ``level`` pass the threshold."""
        return self._levels[level] >= self._levels.get(self.level, 30)

    def log(self, level: str, event: str, **fields: Any) -> None:
        """Emit a log ``event`` at ``level`` with additional ``fields``."""
        if not self.enabled(level):
            return
        if self.json_fmt:
            obj = {"level": level, "event": event}
            obj.update(fields)
            self.stream.write(json.dumps(obj, default=_jsonable) + "\n")
        else:
            kv = " ".join(f"{k}={v}" for k, v in fields.items())
            msg = f"{level} {event} {kv}".rstrip()
            self.stream.write(msg + "\n")

    def debug(self, event: str, **fields: Any) -> None:
        """Emit a ``DEBUG`` event."""
        self.log("debug", event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        """Emit an ``INFO`` event."""
        self.log("info", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        """Emit a ``WARNING`` event."""
        self.log("warning", event, **fields)


def _jsonable(obj: Any) -> Any:
    # numpy scalars and tuples of them show up in solver events
    if hasattr(obj, "item"):
        return obj.item()
    return str(obj)


__all__ = ["Logger", "NoopLogger", "StdLogger"]
