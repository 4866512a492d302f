"""
holdfile.errors
───────────────
Error taxonomy for lockfiles.

``LockTaken`` means someone else holds the lock; ``LockIOError`` wraps every
other operating-system failure. Both derive from ``LockfileError`` so callers
can catch the family in one place::

    try:
        lock = Lockfile.create(path)
    except LockTaken:
        ...  # held elsewhere, wait or report
    except LockIOError as exc:
        raise SystemExit(f"cannot lock {exc.path}: {exc.os_error}")
"""
from __future__ import annotations

import errno as _errno
from pathlib import Path


class LockfileError(RuntimeError):
    pass


class LockTaken(LockfileError):
    """The lock at ``path`` is currently held by another lockfile."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"lock already taken: {path}")

    @property
    def os_error(self) -> OSError:
        return FileExistsError(_errno.EEXIST, "lock already taken", str(self.path))


class LockIOError(LockfileError):
    """Any other filesystem failure while creating or releasing a lockfile."""

    def __init__(self, path: Path, os_error: OSError, action: str = "") -> None:
        self.path = path
        self.os_error = os_error
        self.action = action
        where = f"{action} {path}" if action else str(path)
        super().__init__(f"{where}: {os_error}")

    @property
    def errno(self) -> int | None:
        return self.os_error.errno
