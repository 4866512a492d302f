from .errors import LockfileError, LockIOError, LockTaken
from .holder import read_holder
from .lock import file_lock
from .lockfile import Lockfile
from .log import configure_logging

__all__ = [
    "AdvisoryLockfile",
    "LockIOError",
    "LockTaken",
    "Lockfile",
    "LockfileError",
    "configure_logging",
    "file_lock",
    "read_holder",
]


def __getattr__(name: str):
    # advisory needs fcntl, so it is only imported when asked for
    if name == "AdvisoryLockfile":
        from .advisory import AdvisoryLockfile

        return AdvisoryLockfile
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
