"""Opt-in JSONL event log for terminal, settings and rendering problems.

Every record is a single JSON line with the event name, the component that
emitted it (the part of the event name before the first dot) and the package
version. ``PRETTY_COMPARE_LOG_LEVEL`` and ``PRETTY_COMPARE_LOG_FILE`` select
the threshold and destination when nothing is passed explicitly.
"""

from __future__ import annotations

import json
import os
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import partialmethod
from pathlib import Path
from typing import Any, Literal

from pretty_compare.paths import runtime_log_path
from pretty_compare.version import __version__

LogLevel = Literal["off", "error", "warning", "info", "debug"]

LEVEL_ENV = "PRETTY_COMPARE_LOG_LEVEL"
FILE_ENV = "PRETTY_COMPARE_LOG_FILE"

_SEVERITY: dict[str, int] = {"debug": 10, "info": 20, "warning": 30, "error": 40}
_ALIASES: dict[str, str] = {
    "warn": "warning",
    "none": "off",
    "disabled": "off",
    "false": "off",
    "0": "off",
}

_runtime_logger: RuntimeLogger | None = None


def parse_level(value: str | None, default: LogLevel = "warning") -> LogLevel:
    if not value:
        return default
    normalized = value.strip().lower()
    normalized = _ALIASES.get(normalized, normalized)
    if normalized != "off" and normalized not in _SEVERITY:
        return default
    return normalized  # type: ignore[return-value]


@dataclass(slots=True)
class RuntimeLogger:
    """Appends events at or above ``level`` to ``sink_path``.

    A logger without a sink path, or at level ``off``, discards everything.
    """

    level: LogLevel
    sink_path: Path | None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def enabled(self, level: str) -> bool:
        if self.sink_path is None or self.level == "off":
            return False
        return _SEVERITY.get(level, _SEVERITY["debug"]) >= _SEVERITY[self.level]

    def log(self, level: str, event: str, **fields: Any) -> None:
        if not self.enabled(level):
            return
        record = {
            "ts": datetime.now(UTC).isoformat(),
            "level": level,
            "event": event,
            "component": event.partition(".")[0],
            "version": __version__,
            "pid": os.getpid(),
            **fields,
        }
        line = json.dumps(record, sort_keys=True, default=str)
        with self._lock:
            self.sink_path.parent.mkdir(parents=True, exist_ok=True)
            with self.sink_path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")

    debug = partialmethod(log, "debug")
    info = partialmethod(log, "info")
    warning = partialmethod(log, "warning")
    error = partialmethod(log, "error")


def configure_runtime_logging(
    *,
    level: str | None = None,
    log_file: str | Path | None = None,
) -> RuntimeLogger:
    """Install the process logger; explicit arguments win over the environment."""
    global _runtime_logger

    effective_level = parse_level(level or os.getenv(LEVEL_ENV))
    if effective_level == "off":
        _runtime_logger = RuntimeLogger(level="off", sink_path=None)
        return _runtime_logger

    target = log_file or os.getenv(FILE_ENV)
    sink_path = Path(target).expanduser().resolve() if target else runtime_log_path()
    _runtime_logger = RuntimeLogger(level=effective_level, sink_path=sink_path)
    _runtime_logger.info("logging.configured", sink_path=str(sink_path))
    return _runtime_logger


def get_runtime_logger() -> RuntimeLogger:
    if _runtime_logger is None:
        return configure_runtime_logging()
    return _runtime_logger
