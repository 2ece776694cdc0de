"""JSON-lines logging for the CLI and the API.

Pattern code attaches structured context with ``extra={"juggler": 1, ...}``;
the formatter below lifts those fields into the emitted JSON object.

Usage::

    from jif.logging_config import configure_logging
    configure_logging("DEBUG")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Optional, Union

# Context fields that may be passed via ``extra={}``, in output order.
STRUCTURED_FIELDS = (
    "pattern",
    "juggler",
    "limb",
    "beat",
    "orbit",
    "instruction",
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
)


class JsonLineFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def _timestamp(self, record: logging.LogRecord) -> str:
        return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "timestamp": self._timestamp(record),
        }
        entry.update(
            (name, getattr(record, name))
            for name in STRUCTURED_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info and record.levelno >= logging.ERROR:
            entry["stack_trace"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    stream: Optional[IO[str]] = None,
) -> None:
    """Route all logging through one JSON handler on the root logger.

    Calling it again replaces the previous handler. Output goes to stderr
    unless ``stream`` is given, keeping stdout free for JSON results.
    """
    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setFormatter(JsonLineFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
