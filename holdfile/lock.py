from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Iterator

from holdfile.config import lock_poll_interval_sec, lock_timeout_sec
from holdfile.errors import LockTaken
from holdfile.lockfile import Lockfile

logger = logging.getLogger(__name__)


@contextmanager
def file_lock(
    path: str | os.PathLike[str],
    timeout_sec: float | None = None,
    poll_interval_sec: float | None = None,
) -> Iterator[Lockfile]:
    """Hold a ``Lockfile`` at ``path``, polling while someone else holds it.

    Gives up with the last ``LockTaken`` once ``timeout_sec`` has passed.
    Other errors are raised on the first attempt.
    """
    timeout = lock_timeout_sec() if timeout_sec is None else max(0.0, timeout_sec)
    interval = lock_poll_interval_sec() if poll_interval_sec is None else poll_interval_sec
    if interval <= 0:
        interval = lock_poll_interval_sec()
    deadline = time.monotonic() + timeout

    while True:
        try:
            lockfile = Lockfile.create(path)
            break
        except LockTaken:
            if time.monotonic() >= deadline:
                raise
            logger.debug('lockfile at "%s" busy, retrying in %.2fs', path, interval)
            time.sleep(interval)

    with lockfile:
        yield lockfile
