from __future__ import annotations

import json
import math
import os
import sys
from datetime import datetime, timezone
from typing import Any, Callable

from .config import Settings, load_settings


REDACT_KEYS = {"token", "auth", "authorization", "password", "secret", "api_key"}

# Shared signature of log_event and the engines' trace hooks: observer(event, **fields)
Observer = Callable[..., None]


def null_observer(event: str, **fields: Any) -> None:
    return None


def _redact(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: ("<redacted>" if str(k).lower() in REDACT_KEYS else _redact(v)) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_redact(v) for v in obj]
    if isinstance(obj, float) and not math.isfinite(obj):
        # JSON has no infinity; unreachable distances are logged as null
        return None
    return obj


def _rotate(path: str, backups: int) -> None:
    for i in range(backups, 0, -1):
        older = f"{path}.{i}"
        newer = f"{path}.{i-1}" if i > 1 else path
        if os.path.exists(older):
            os.remove(older)
        if os.path.exists(newer):
            os.rename(newer, older)
    if backups == 0 and os.path.exists(path):
        os.remove(path)


def _write_file_line(line: str, log_dir: str, max_bytes: int, backups: int) -> None:
    try:
        os.makedirs(log_dir, exist_ok=True)
        path = os.path.join(log_dir, "events.log")
        if os.path.exists(path) and os.path.getsize(path) > max_bytes:
            _rotate(path, backups)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError as exc:
        # a broken log directory must not abort a computation
        sys.stderr.write(f"events.log write failed: {exc}\n")


def _current_settings() -> Settings:
    try:
        return load_settings()
    except ValueError:
        # the CLI reports bad settings itself; logging keeps working on defaults
        return Settings()


def log_event(event: str, **fields: Any) -> None:
    settings = _current_settings()
    record = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
        **_redact(fields),
    }
    line = json.dumps(record, ensure_ascii=False, allow_nan=False, default=str)
    if settings.log_stdout:
        sys.stdout.write(line + "\n")
        sys.stdout.flush()
    _write_file_line(line, settings.log_dir, settings.log_max_bytes, settings.log_backups)
