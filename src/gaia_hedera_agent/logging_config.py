from __future__ import annotations
import json
import logging
import sys
from typing import Any, Dict

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str | int = "WARNING", fmt: str = "json") -> logging.Logger:
    """
    Install a single stderr handler on the root logger.

    stdout is reserved for the chat transcript, so logs always go to stderr.
    """
    lvl = logging.getLevelName(level) if isinstance(level, str) else level
    if not isinstance(lvl, int):
        lvl = logging.WARNING
    root = logging.getLogger()
    root.setLevel(lvl)
    # Clear handlers so repeated CLI invocations (tests) don't duplicate output
    for h in list(root.handlers):
        root.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)
    return logging.getLogger("gaia_hedera_agent")
