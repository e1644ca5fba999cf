"""JSON log formatting for mediadash.

One JSON object per line::

    {"timestamp": "...+00:00", "level": "INFO", "logger": "mediadash.x",
     "message": "...", "context": {"integration": "tdarr", "app_id": "..."}}

"context" holds the integration context plus any ``extra=`` fields and is
omitted when empty.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else was passed via extra=.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}

_CONTEXT_FIELDS = ("integration", "app_id")
_FILTER_ATTRS = frozenset(_CONTEXT_FIELDS) | {"context_tag"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS
        and key not in _FILTER_ATTRS
        and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def formatTime(
        self, record: logging.LogRecord, datefmt: str | None = None
    ) -> str:
        return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = _extra_fields(record)
        # Filter-injected values win over extra= keys of the same name.
        context.update(
            (name, getattr(record, name))
            for name in _CONTEXT_FIELDS
            if getattr(record, name, None)
        )
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)
