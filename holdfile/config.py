"""
holdfile.config
───────────────
Configuration for the few knobs the lockfile helpers expose.

Priority: environment variable > .env file > default.
Every setting is read at call time so tests and long-running callers can
change the environment without reloading the module.
"""

import logging
import os
import tempfile
from pathlib import Path

from dotenv import load_dotenv

# ── .env loading (runs once) ─────────────────────────────────────
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(_PROJECT_ROOT / ".env", override=False)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def project_root() -> Path:
    return _PROJECT_ROOT


# ── Paths ─────────────────────────────────────────────────────────

def lock_dir() -> Path:
    """Directory for named locks. HOLDFILE_LOCK_DIR overrides it."""
    custom = os.getenv("HOLDFILE_LOCK_DIR", "").strip()
    if custom:
        return Path(custom)
    return Path(tempfile.gettempdir()) / "holdfile"


def lock_path(name: str) -> Path:
    """Lock file path for a logical resource name."""
    safe = "".join(ch if ch.isalnum() or ch in {"-", "_", "."} else "_" for ch in name.strip())
    safe = safe.strip("._") or "default"
    return lock_dir() / f"{safe}.lock"


# ── Logging ───────────────────────────────────────────────────────

def log_level() -> int:
    raw = os.getenv("HOLDFILE_LOG_LEVEL", "WARNING").strip().upper()
    if raw == "WARN":
        raw = "WARNING"
    if raw not in _LOG_LEVELS:
        raw = "WARNING"
    return getattr(logging, raw)


def log_file() -> Path | None:
    custom = os.getenv("HOLDFILE_LOG_FILE", "").strip()
    return Path(custom) if custom else None


# ── Waiting ───────────────────────────────────────────────────────

def lock_timeout_sec() -> float:
    return max(0.0, float(os.getenv("HOLDFILE_LOCK_TIMEOUT_SEC", "1.0")))


def lock_poll_interval_sec() -> float:
    value = float(os.getenv("HOLDFILE_LOCK_POLL_SEC", "0.1"))
    return value if value > 0 else 0.1
