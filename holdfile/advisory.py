"""
holdfile.advisory
─────────────────
Lockfile guarded by an exclusive ``flock`` on its open handle.

Unlike ``holdfile.lockfile.Lockfile`` the file may already exist: it is opened
(created if missing) and then locked. This also excludes processes that open
the path instead of creating it, as long as they flock it too. POSIX only.

Do not use both variants on the same path: an existence-based creator and a
flock holder do not see each other.
"""
from __future__ import annotations

import fcntl
import io
import logging
import os
from pathlib import Path

from holdfile.errors import LockIOError, LockTaken
from holdfile.lockfile import _FILE_MODE, _BaseLockfile, check_path, ensure_parent

logger = logging.getLogger(__name__)


def _same_file(handle: io.FileIO, path: Path) -> bool:
    # the previous holder may have unlinked the file while we waited on it
    try:
        on_disk = os.stat(path)
    except FileNotFoundError:
        return False
    held = os.fstat(handle.fileno())
    return (on_disk.st_dev, on_disk.st_ino) == (held.st_dev, held.st_ino)


class AdvisoryLockfile(_BaseLockfile):
    """Lockfile whose lock is an exclusive advisory lock on the open file.

    On release the file is removed while the flock is still held, then
    unlocked and closed. A waiter that wakes up finds its handle no longer
    matches the path and reopens, so it never holds a lock on a dead file.
    """

    _unlink_while_held = True

    @classmethod
    def create(cls, path: str | os.PathLike[str], *, blocking: bool = True) -> AdvisoryLockfile:
        """Open (or create) ``path`` and take an exclusive flock on it.

        A non-blocking attempt is made first. On contention, ``blocking=True``
        logs one warning and waits without a timeout; ``blocking=False``
        raises ``LockTaken`` so the caller can poll.
        """
        lock = check_path(path)
        ensure_parent(lock)

        warned = False
        while True:
            try:
                fd = os.open(lock, os.O_CREAT | os.O_RDWR, _FILE_MODE)
            except OSError as exc:
                raise LockIOError(lock, exc, "open lockfile") from exc
            handle = os.fdopen(fd, "r+b", buffering=0)
            try:
                warned = _acquire(handle, lock, blocking, warned)
                if _same_file(handle, lock):
                    break
            except BaseException:
                handle.close()
                raise
            logger.debug('lockfile at "%s" was replaced while waiting, retrying', lock)
            handle.close()

        logger.debug('lockfile locked at "%s"', lock)
        return cls(lock, handle)

    def _unlock(self, handle: io.FileIO) -> None:
        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
        except OSError as exc:
            logger.error('could not unlock lockfile at "%s": %s', self._path, exc)
            return
        logger.debug('lockfile unlocked at "%s"', self._path)


def _acquire(handle: io.FileIO, path: Path, blocking: bool, warned: bool) -> bool:
    """Take the flock; returns whether the blocking-wait warning has been logged."""
    try:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        return warned
    except BlockingIOError as exc:
        if not blocking:
            raise LockTaken(path) from exc
    except OSError as exc:
        raise LockIOError(path, exc, "lock") from exc

    if not warned:
        logger.warning('lockfile at "%s" is held elsewhere, blocking until it is released', path)
    try:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
    except OSError as exc:
        raise LockIOError(path, exc, "lock") from exc
    return True
