"""
Structured logging setup (CloudWatch-friendly).

Lambda runs keep the JSON lines; the CLI passes ``json_logs=False`` so log
lines stay readable next to the step tree it prints on stdout.
"""

import json
import logging
import os
from typing import Any, Dict, Optional, Union

# Fields reconcilers pass through `extra=`; anything else stays out of the payload.
CONTEXT_KEYS = ("stage", "domain", "bucket", "zone_id", "status", "outcome", "reason")


class JsonFormatter(logging.Formatter):
    """JSON log formatter with stable keys."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        for k in CONTEXT_KEYS:
            if k in record.__dict__:
                payload[k] = record.__dict__[k]
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class KeyValueFormatter(logging.Formatter):
    """``LEVEL logger: message key=value ...`` for interactive use."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        line = f"{record.levelname} {record.name}: {record.getMessage()}"
        ctx = " ".join(f"{k}={record.__dict__[k]}" for k in CONTEXT_KEYS if k in record.__dict__)
        if ctx:
            line = f"{line} {ctx}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: Optional[Union[str, int]] = None, json_logs: bool = True) -> None:
    """Initialize root logger; JSON by default, key=value for terminals."""
    root = logging.getLogger()
    if not level:
        level = os.getenv("LOG_LEVEL", "INFO")
    root.setLevel(level)
    # Clear existing handlers (e.g., when re-importing in AWS Lambda warm starts)
    root.handlers.clear()
    h = logging.StreamHandler()
    h.setFormatter(JsonFormatter() if json_logs else KeyValueFormatter())
    root.addHandler(h)
