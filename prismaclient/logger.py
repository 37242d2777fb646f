"""Debug and info logging to standard output."""

from __future__ import annotations

import os
import sys
import time

ENV_VAR = "PHOTON_GO_LOG"


def enabled() -> bool:
    """Return whether debug logging is switched on by the environment."""
    return os.environ.get(ENV_VAR, "") != ""


def _emit(prefix: str, message: str) -> None:
    stamp = time.strftime("%Y/%m/%d %H:%M:%S")
    line = f"{prefix}{stamp} {message}"
    if not line.endswith("\n"):
        line += "\n"
    sys.stdout.write(line)


def debug(message: str) -> None:
    """Write a debug line, only when debug logging is enabled."""
    if enabled():
        _emit("debug: ", message)


def info(message: str) -> None:
    """Write an info line."""
    _emit("info: ", message)