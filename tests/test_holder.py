"""holdfile.holder unit tests."""

import os
import socket

from holdfile import Lockfile, read_holder
from holdfile.holder import dump_holder, holder_record


def test_write_and_read_holder(lock_path):
    with Lockfile.create(lock_path) as lock:
        lock.write(b"stale scratch data that is longer than the record")
        record = lock.write_holder()
        stamp = read_holder(lock_path)
    assert stamp == record
    assert stamp["pid"] == os.getpid()
    assert stamp["host"] == socket.gethostname()
    assert isinstance(stamp["acquired_at"], str)


def test_read_holder_missing_file(tmp_path):
    assert read_holder(tmp_path / "nope.lock") is None


def test_read_holder_empty_file(tmp_path):
    path = tmp_path / "empty.lock"
    path.write_bytes(b"")
    assert read_holder(path) is None


def test_read_holder_not_a_mapping(tmp_path):
    path = tmp_path / "list.lock"
    path.write_text("- a\n- b\n", encoding="utf-8")
    assert read_holder(path) is None


def test_read_holder_broken_yaml(tmp_path):
    path = tmp_path / "broken.lock"
    path.write_text("pid: [1, 2\n", encoding="utf-8")
    assert read_holder(path) is None


def test_dump_holder_is_yaml_bytes():
    data = dump_holder(holder_record())
    assert data.startswith(b"pid: ")
