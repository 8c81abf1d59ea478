from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class Settings:
    workers: int = 1
    trace: bool = False
    log_dir: str = ".logs"
    log_max_bytes: int = 1_048_576  # 1MB
    log_backups: int = 5
    log_stdout: bool = True


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _parse_int(name: str, raw: str, minimum: int) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from ``JOHNSON_*`` environment variables."""
    env = os.environ if environ is None else environ
    s = Settings()
    if "JOHNSON_WORKERS" in env:
        s.workers = _parse_int("JOHNSON_WORKERS", env["JOHNSON_WORKERS"], 1)
    if "JOHNSON_TRACE" in env:
        s.trace = _parse_bool("JOHNSON_TRACE", env["JOHNSON_TRACE"])
    s.log_dir = env.get("JOHNSON_LOG_DIR", s.log_dir)
    if "JOHNSON_LOG_MAX_BYTES" in env:
        s.log_max_bytes = _parse_int("JOHNSON_LOG_MAX_BYTES", env["JOHNSON_LOG_MAX_BYTES"], 1)
    if "JOHNSON_LOG_BACKUPS" in env:
        s.log_backups = _parse_int("JOHNSON_LOG_BACKUPS", env["JOHNSON_LOG_BACKUPS"], 0)
    if "JOHNSON_LOG_STDOUT" in env:
        s.log_stdout = _parse_bool("JOHNSON_LOG_STDOUT", env["JOHNSON_LOG_STDOUT"])
    return s
