"""Injectable diagnostics for the pattern algorithms.

Algorithms report what they do as named events with structured fields, e.g.
``trace("orbit.closed", {"orbit": 0, "length": 3})``. By default the events
go to a DEBUG logger; tests and the CLI can pass a TraceRecorder instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


TraceSink = Callable[[str, Dict[str, Any]], None]

# Attributes of LogRecord that ``extra`` must not overwrite.
_RESERVED_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.DEBUG, "", 0, "", (), None))
) | {"message", "asctime"}


def _log_extra(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if key not in _RESERVED_RECORD_FIELDS}


def logging_trace(logger: logging.Logger) -> TraceSink:
    """Build a sink that logs every event at DEBUG level on ``logger``."""

    def sink(name: str, fields: Dict[str, Any]) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(name, extra=_log_extra(fields))

    return sink


@dataclass(frozen=True)
class TraceEvent:
    """A single recorded event."""

    name: str
    fields: Dict[str, Any] = field(default_factory=dict)


class TraceRecorder:
    """Collects trace events in memory, optionally forwarding them to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.events: List[TraceEvent] = []
        self._forward = logging_trace(logger) if logger is not None else None

    def __call__(self, name: str, fields: Dict[str, Any]) -> None:
        self.events.append(TraceEvent(name=name, fields=dict(fields)))
        if self._forward is not None:
            self._forward(name, fields)

    def names(self) -> List[str]:
        return [event.name for event in self.events]

    def count(self, name: str) -> int:
        return sum(1 for event in self.events if event.name == name)

    def get_summary(self) -> str:
        """Event counts in first-seen order, one line per event name."""
        counts: Dict[str, int] = {}
        for event in self.events:
            counts[event.name] = counts.get(event.name, 0) + 1

        lines = ["=" * 40, "TRACE SUMMARY", "=" * 40]
        for name, count in counts.items():
            lines.append(f"  {name:<30} {count:>6}")
        lines.append(f"Total events: {len(self.events)}")
        return "\n".join(lines)
