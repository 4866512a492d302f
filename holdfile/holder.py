"""
holdfile.holder
───────────────
Holder stamp: a small YAML record of who holds a lock.

Purely diagnostic. Whether a lock is held is decided by the lockfile itself,
never by this record.
"""
from __future__ import annotations

import os
import socket
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml


def holder_record() -> dict[str, Any]:
    return {
        "pid": os.getpid(),
        "host": socket.gethostname(),
        "acquired_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
    }


def dump_holder(record: dict[str, Any]) -> bytes:
    return yaml.safe_dump(record, allow_unicode=True, sort_keys=False).encode("utf-8")


def read_holder(path: str | os.PathLike[str]) -> dict[str, Any] | None:
    """
    Read the holder stamp from a lock file.

    Returns:
        The record as a dict, or None when the file is gone, empty or does
        not hold a YAML mapping.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (FileNotFoundError, UnicodeDecodeError):
        return None

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return None

    return data if isinstance(data, dict) else None
