"""
peerauth.logger
~~~~~~~~~~~~~~~
Authentication event log.  JSON lines with daily rotation when a log
file is configured, one human-readable line per event on stderr otherwise.
Passwords never reach this module.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER_NAME = "peerauth"

_ISO = "%Y-%m-%dT%H:%M:%SZ"


def _now() -> str:  # RFC-3339 without microseconds
    return datetime.now(tz=timezone.utc).strftime(_ISO)


class _PlainFormatter(logging.Formatter):
    """ e.g. 2026-10-18T09:12:44Z WARNING rejected user=bob """

    def format(self, record):  # type: ignore[override]
        d: Dict[str, Any] = record.msg if isinstance(record.msg, dict) else {}
        if not d:
            return super().format(record)

        parts = [d.get("ts", _now()), record.levelname, d.get("event", "-")]
        parts.extend(
            f"{k}={v}" for k, v in d.items() if k not in ("ts", "event")
        )
        return " ".join(parts)


class _JSONFormatter(logging.Formatter):
    def format(self, record):  # type: ignore[override]
        if isinstance(record.msg, dict):
            return json.dumps(record.msg, separators=(",", ":"))
        return json.dumps(
            {"ts": _now(), "event": "message", "msg": record.getMessage()},
            separators=(",", ":"),
        )


def _configure(root: logging.Logger, log_path: Optional[str | Path]) -> None:
    if log_path:
        jsonl_file = os.path.abspath(Path(log_path).with_suffix(".jsonl"))
        if any(getattr(h, "baseFilename", None) == jsonl_file for h in root.handlers):
            return
        h: logging.Handler = logging.handlers.TimedRotatingFileHandler(
            jsonl_file, when="midnight", backupCount=7, encoding="utf-8"
        )
        h.setFormatter(_JSONFormatter())
    elif root.handlers:
        return
    else:
        h = logging.StreamHandler()
        h.setFormatter(_PlainFormatter())
    root.addHandler(h)


class AuthLogger:
    def __init__(self, log_path: Optional[str | Path] = None):
        root = logging.getLogger(LOGGER_NAME)
        root.setLevel(logging.INFO)
        root.propagate = False
        _configure(root, log_path)

        self.log = root

    def store_loaded(self, source: str, peers: int):
        self.log.info(
            {"event": "store_loaded", "ts": _now(), "source": source, "peers": peers}
        )

    def authenticated(self, user: str):
        self.log.info({"event": "authenticated", "ts": _now(), "user": user})

    def rejected(self, user: str):
        self.log.warning({"event": "rejected", "ts": _now(), "user": user or "-"})

    def faulted(self, user: str, reason: str):
        self.log.error(
            {"event": "faulted", "ts": _now(), "user": user or "-", "reason": reason}
        )

    def config_warning(self, message: str):
        self.log.warning({"event": "config_warning", "ts": _now(), "msg": message})
