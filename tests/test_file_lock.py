# ruff: noqa: F811

import os
import signal
import subprocess
import sys
import textwrap
from pathlib import Path
from unittest import mock

import pytest

from pacman_ipfs_sync.utils.file_lock import LockContentionError, LockCreateError, LockMarker
from tests.fixtures import tmp_lock_file  # noqa: F401

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


def test_acquire_creates_marker(tmp_lock_file):
    lock = LockMarker(tmp_lock_file)
    lock.acquire()
    assert tmp_lock_file.exists()
    assert tmp_lock_file.read_text().strip() == str(os.getpid())
    assert lock.is_acquired()
    lock.release()
    assert not tmp_lock_file.exists()
    assert not lock.is_acquired()


def test_acquire_existing_marker(tmp_lock_file):
    tmp_lock_file.write_text("12345\n")
    lock = LockMarker(tmp_lock_file)
    with pytest.raises(LockContentionError):
        lock.acquire()

    assert not lock.is_acquired()
    # someone else's marker is left alone
    lock.release()
    assert tmp_lock_file.read_text() == "12345\n"


def test_second_lock_contends(tmp_lock_file):
    with LockMarker(tmp_lock_file):
        with pytest.raises(LockContentionError):
            LockMarker(tmp_lock_file).acquire()
        assert tmp_lock_file.exists()
    assert not tmp_lock_file.exists()


def test_contention_is_file_exists_error(tmp_lock_file):
    tmp_lock_file.touch()
    with pytest.raises(FileExistsError):
        LockMarker(tmp_lock_file).acquire()


def test_released_on_exception(tmp_lock_file):
    with pytest.raises(RuntimeError):
        with LockMarker(tmp_lock_file):
            raise RuntimeError("boom")
    assert not tmp_lock_file.exists()


def test_released_on_system_exit(tmp_lock_file):
    with pytest.raises(SystemExit):
        with LockMarker(tmp_lock_file):
            raise SystemExit(3)
    assert not tmp_lock_file.exists()


def test_released_on_sigterm(tmp_lock_file):
    with pytest.raises(SystemExit) as e_info:
        with LockMarker(tmp_lock_file):
            os.kill(os.getpid(), signal.SIGTERM)

    assert e_info.value.code == 128 + signal.SIGTERM
    assert not tmp_lock_file.exists()


def test_signal_handlers_restored(tmp_lock_file):
    original = signal.getsignal(signal.SIGTERM)
    with LockMarker(tmp_lock_file):
        assert signal.getsignal(signal.SIGTERM) is not original
    assert signal.getsignal(signal.SIGTERM) is original


def test_release_missing_marker(tmp_lock_file):
    lock = LockMarker(tmp_lock_file)
    lock.acquire()
    os.remove(tmp_lock_file)
    lock.release()
    assert not lock.is_acquired()


def test_acquire_twice_is_noop(tmp_lock_file):
    lock = LockMarker(tmp_lock_file)
    lock.acquire()
    lock.acquire()
    lock.release()
    assert not tmp_lock_file.exists()


def test_failed_pid_write_removes_marker(tmp_lock_file):
    with mock.patch("os.write", side_effect=OSError("disk full")):
        with pytest.raises(OSError):
            LockMarker(tmp_lock_file).acquire()
    assert not tmp_lock_file.exists()


def test_marker_removed_when_process_terminated(tmp_lock_file):
    script = textwrap.dedent(
        f"""
        import sys
        import time
        from pacman_ipfs_sync.utils.file_lock import LockMarker

        with LockMarker({repr(str(tmp_lock_file))}):
            print("locked", flush=True)
            time.sleep(30)
        """
    )
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))

    with subprocess.Popen(
        [sys.executable, "-c", script], stdout=subprocess.PIPE, env=env
    ) as p:
        assert p.stdout is not None
        assert p.stdout.readline().decode().strip() == "locked"
        assert tmp_lock_file.exists()
        p.send_signal(signal.SIGTERM)
        returncode = p.wait(timeout=10)

    assert returncode == 128 + signal.SIGTERM
    assert not tmp_lock_file.exists()


def test_create_failure_is_lock_create_error(tmp_path):
    lock = LockMarker(tmp_path / "missing-dir" / "sync.lck")
    with pytest.raises(LockCreateError):
        lock.acquire()
    assert not lock.is_acquired()


def test_interrupt_while_writing_pid_removes_marker(tmp_lock_file):
    original = signal.getsignal(signal.SIGTERM)
    with mock.patch("os.write", side_effect=KeyboardInterrupt):
        with pytest.raises(KeyboardInterrupt):
            LockMarker(tmp_lock_file).acquire()
    assert not tmp_lock_file.exists()
    assert signal.getsignal(signal.SIGTERM) is original


def test_signal_handlers_set_before_marker_created(tmp_lock_file):
    seen = []
    real_open = os.open

    def open_(path, flags, mode=0o777):
        seen.append(signal.getsignal(signal.SIGTERM))
        return real_open(path, flags, mode)

    original = signal.getsignal(signal.SIGTERM)
    with mock.patch("os.open", side_effect=open_):
        with LockMarker(tmp_lock_file):
            pass
    assert seen[0] is not original


def test_signal_in_enter_removes_marker(tmp_lock_file):
    real_acquire = LockMarker.acquire

    def acquire_then_terminate(self):
        real_acquire(self)
        os.kill(os.getpid(), signal.SIGTERM)

    with mock.patch.object(LockMarker, "acquire", acquire_then_terminate):
        with pytest.raises(SystemExit):
            with LockMarker(tmp_lock_file):
                pass
    assert not tmp_lock_file.exists()
