"""Minimal structured logging helper.

Emits one ``key=value`` line (or a compact JSON object) per record with a
timestamp, a level and the logger name. Callers pass fields only, normally with
an ``event`` naming what happened:

    from cavecrawl.logging_utils import get_logger
    log = get_logger("cavecrawl.generator")
    log.info(event="cave_generated", seed=1234567, attempts=1)

Threshold and output mode come from ``CAVECRAWL_LOG_LEVEL`` (debug|info|warn|error)
and ``CAVECRAWL_LOG_JSON``; ``configure()`` overrides either at runtime.
Errors are written to stderr, everything else to stdout. ``None`` fields are dropped.
Reserved keys: level, ts. A caller field with one of those names is emitted as
``field_level`` / ``field_ts``.
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Dict, Optional

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "TRUE", "yes", "on")
RESERVED = ("level", "ts")

_settings = {
    "level": LEVELS.get(os.getenv("CAVECRAWL_LOG_LEVEL", "info"), 20),
    "json": os.getenv("CAVECRAWL_LOG_JSON", "0") in _TRUTHY,
}


def configure(level: Optional[str] = None, json_mode: Optional[bool] = None) -> None:
    """Change threshold and/or output mode; unknown level names fall back to info."""
    if level is not None:
        _settings["level"] = LEVELS.get(level.lower(), 20)
    if json_mode is not None:
        _settings["json"] = bool(json_mode)


def _format(lvl: str, /, **fields) -> str:
    # level and ts belong to the record; same-named caller fields get a field_ prefix
    fields = {(f"field_{k}" if k in RESERVED else k): v for k, v in fields.items()}
    if _settings["json"]:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = lvl
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=repr)
    parts = [f"level={lvl}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (bool, int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '_')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str):
        self.name = name

    def _log(self, lvl: str, /, **fields) -> None:
        if LEVELS[lvl] < _settings["level"]:
            return
        fields.setdefault("logger", self.name)
        stream = sys.stderr if lvl == "error" else sys.stdout
        print(_format(lvl, **fields), file=stream)

    def debug(self, **fields) -> None:
        self._log("debug", **fields)

    def info(self, **fields) -> None:
        self._log("info", **fields)

    def warn(self, **fields) -> None:
        self._log("warn", **fields)

    def error(self, **fields) -> None:
        self._log("error", **fields)


_LOGGER_CACHE: Dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("cavecrawl")
