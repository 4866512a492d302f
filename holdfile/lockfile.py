"""
holdfile.lockfile
─────────────────
A lockfile marks a location in the filesystem as locked.

The lock is taken when the file is created and released when it is deleted.
``Lockfile.create`` uses an exclusive create, so if the file is already
present it fails with ``LockTaken``::

    lock = Lockfile.create("/tmp/some_dir/resource.lock")
    try:
        ...
    finally:
        lock.release()  # or ``with Lockfile.create(...) as lock:``

Only processes that also *create* the path are excluded; a process that merely
opens it is not. See ``holdfile.advisory`` for the flock-based variant.
"""
from __future__ import annotations

import io
import logging
import os
from abc import abstractmethod
from pathlib import Path
from typing import Any

from holdfile.config import lock_path
from holdfile.errors import LockIOError, LockTaken
from holdfile.holder import dump_holder, holder_record

logger = logging.getLogger(__name__)

_O_BINARY = getattr(os, "O_BINARY", 0)
_FILE_MODE = 0o666


def check_path(path: str | os.PathLike[str]) -> Path:
    """Return ``path`` as a ``Path``; a path without a parent is a programming error."""
    checked = Path(path)
    if not checked.name:
        raise ValueError(f"lockfile path must have a parent directory: {str(path)!r}")
    return checked


def ensure_parent(path: Path) -> None:
    # missing parents are created, existing ones are fine
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise LockIOError(path, exc, "create parent directory of") from exc
    logger.debug('lockfile parent directories created/found at "%s"', parent)


class _BaseLockfile(os.PathLike):
    """Shared lifecycle of both lockfile variants.

    Subclasses open the handle in ``create`` and may override ``_unlock``.
    The handle is dropped before any cleanup step runs, so release happens
    exactly once no matter which path gets there first.
    """

    def __init__(self, path: Path, handle: io.FileIO) -> None:
        self._path = path
        self._handle: io.FileIO | None = handle

    @classmethod
    def named(cls, name: str, **kwargs: Any):
        """Create a lockfile for a logical resource name under ``lock_dir()``."""
        return cls.create(lock_path(name), **kwargs)

    @classmethod
    @abstractmethod
    def create(cls, path: str | os.PathLike[str], **kwargs: Any):
        raise NotImplementedError

    # ── accessors ─────────────────────────────────────────────────

    @property
    def path(self) -> Path:
        return self._path

    @property
    def released(self) -> bool:
        return self._handle is None

    def __fspath__(self) -> str:
        return os.fspath(self._path)

    def __repr__(self) -> str:
        state = "released" if self.released else "held"
        return f"<{type(self).__name__} path={str(self._path)!r} {state}>"

    # ── pass-through to the open handle ──────────────────────────

    def _require_handle(self) -> io.FileIO:
        if self._handle is None:
            raise ValueError(f"lockfile already released: {self._path}")
        return self._handle

    def fileno(self) -> int:
        return self._require_handle().fileno()

    def read(self, size: int = -1) -> bytes:
        data = self._require_handle().read(size)
        return data if data is not None else b""

    def write(self, data: bytes) -> int:
        return self._require_handle().write(data)

    def flush(self) -> None:
        self._require_handle().flush()

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self._require_handle().seek(offset, whence)

    def tell(self) -> int:
        return self._require_handle().tell()

    def truncate(self, size: int | None = None) -> int:
        return self._require_handle().truncate(size)

    def write_holder(self) -> dict[str, Any]:
        """Overwrite the file with a record of this process as the holder."""
        record = holder_record()
        handle = self._require_handle()
        handle.seek(0)
        handle.truncate()
        handle.write(dump_holder(record))
        handle.flush()
        return record

    # ── release ───────────────────────────────────────────────────

    # remove the file before dropping the handle instead of after
    _unlink_while_held = False

    def _unlock(self, handle: io.FileIO) -> None:
        """Drop any OS-level lock held on ``handle``. Must not raise."""

    def _close(self, handle: io.FileIO) -> None:
        self._unlock(handle)
        try:
            handle.close()
        except OSError as exc:
            logger.warning('could not close lockfile at "%s": %s', self._path, exc)

    def _remove(self) -> OSError | None:
        try:
            os.unlink(self._path)
        except OSError as exc:
            return exc
        logger.debug('Removed lockfile at "%s"', self._path)
        return None

    def _teardown(self) -> tuple[bool, OSError | None]:
        """Run the release steps once; returns (ran, removal error)."""
        handle, self._handle = self._handle, None
        if handle is None:
            return False, None
        if self._unlink_while_held:
            error = self._remove()
            self._close(handle)
        else:
            self._close(handle)
            error = self._remove()
        return True, error

    def release(self) -> None:
        """Close and remove the file, releasing the lock.

        Use this instead of relying on scope exit when you want to see
        whether removing the file failed. The lockfile is released afterwards
        even if ``LockIOError`` is raised; calling it again is an error.
        """
        ran, error = self._teardown()
        if not ran:
            raise ValueError(f"lockfile already released: {self._path}")
        if error is not None:
            raise LockIOError(self._path, error, "remove lockfile") from error

    def _release_quietly(self) -> None:
        ran, error = self._teardown()
        if ran and error is not None:
            logger.warning('could not remove lockfile at "%s": %s', self._path, error)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._release_quietly()

    def __del__(self) -> None:
        # create() may have failed before __init__ ran
        if getattr(self, "_handle", None) is not None:
            self._release_quietly()


class Lockfile(_BaseLockfile):
    """Existence-based lockfile that cleans up after itself."""

    @classmethod
    def create(cls, path: str | os.PathLike[str]) -> Lockfile:
        """Create a lockfile at ``path``.

        Missing parent directories are created first. ``LockTaken`` is raised
        if the file already exists, ``LockIOError`` for any other failure.
        A path with no parent (``"/"``, ``""``) raises ``ValueError``.
        """
        lock = check_path(path)
        ensure_parent(lock)

        try:
            fd = os.open(lock, os.O_CREAT | os.O_EXCL | os.O_RDWR | _O_BINARY, _FILE_MODE)
        except FileExistsError as exc:
            raise LockTaken(lock) from exc
        except OSError as exc:
            raise LockIOError(lock, exc, "create lockfile") from exc
        logger.debug('lockfile created at "%s"', lock)

        return cls(lock, os.fdopen(fd, "r+b", buffering=0))
