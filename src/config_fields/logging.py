"""JSON logging for configuration-field checks.

Check modules attach their context through ``extra=``; the formatter copies
the known context attributes into the JSON payload so each line says which
XML document, property and declaring constant it is about.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

CHECK_CONTEXT_FIELDS: tuple[str, ...] = (
    "xml_filename",
    "property_name",
    "declared_by",
    "xml_value",
    "class_value",
    "missing_properties",
)


def check_context(**fields: object) -> dict[str, object]:
    """Build an ``extra`` mapping, rejecting names the formatter would not emit."""

    unknown = sorted(set(fields) - set(CHECK_CONTEXT_FIELDS))
    if unknown:
        raise ValueError(f"Unknown check context fields: {', '.join(unknown)}")
    return {name: value for name, value in fields.items() if value is not None}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, including any check context."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CHECK_CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is None:
                continue
            payload[name] = list(value) if isinstance(value, (tuple, set, frozenset)) else value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True, default=str)


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if isinstance(resolved, int):
        return resolved
    raise ValueError(f"Unsupported log level: {level}")


def configure_logging(
    *,
    log_level: str | int = "WARNING",
    log_file: str | Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """Route check logging to JSON console and/or file handlers on the root logger."""

    root = logging.getLogger()
    root.setLevel(_resolve_level(log_level))
    root.handlers.clear()

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler())
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    formatter = JsonFormatter()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return root
