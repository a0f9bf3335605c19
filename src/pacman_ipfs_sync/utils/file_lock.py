"""Lock marker utils"""

import os
from types import TracebackType
from typing import Optional, Type, Union

from .logging import get_logger
from .misc import exit_on_signals

logger = get_logger(__name__)


class LockError(Exception):
    def __init__(self, *args) -> None:
        super().__init__(*args)


class LockContentionError(FileExistsError, LockError):
    def __init__(self, lock_path: Union[str, "os.PathLike[str]"]) -> None:
        super().__init__(f"lock file {lock_path} exists, another sync is in progress")
        self.lock_path = lock_path


class LockCreateError(OSError, LockError):
    def __init__(self, lock_path: Union[str, "os.PathLike[str]"], cause: OSError) -> None:
        super().__init__(f"could not create lock file {lock_path}: {cause}")
        self.lock_path = lock_path


class LockMarker:
    """
    Exclusive lock whose existence on disk is the lock.

    The marker is created with O_CREAT | O_EXCL, so only one process can
    create it. There is no waiting: if the marker already exists,
    `acquire()` raises `LockContentionError` right away.

    While the lock is held, SIGTERM, SIGHUP and SIGINT raise `SystemExit`
    so the marker is still removed when the process is told to stop.

    Example:
        with LockMarker("/var/lib/pacman/ipfs-sync.lck"):
            ...
    """

    def __init__(self, file: Union[str, "os.PathLike[str]"]) -> None:
        self.file = file
        self._acquired = False
        self._signal_guard = None

    def __enter__(self) -> "LockMarker":
        try:
            self.acquire()
        except BaseException:
            self.release()
            raise
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.release()

    def acquire(self) -> None:
        """
        Create the lock marker.

        This method has no effect if the lock is already acquired.

        Raises:
            LockContentionError: If the marker already exists.
            LockCreateError: If the marker cannot be created or written.
        """
        if self._acquired:
            return

        # handlers go in before the marker exists so no signal can strand it
        guard = exit_on_signals()
        try:
            guard.__enter__()
        except ValueError:
            # signal handlers can only be set from the main thread
            logger.debug("not in main thread, lock is not released on signals")
            guard = None

        created = False
        try:
            logger.trace("creating lock file %s", self.file)
            try:
                fd = os.open(self.file, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
            except FileExistsError:
                raise LockContentionError(self.file) from None
            except OSError as ex:
                raise LockCreateError(self.file, ex) from ex
            created = True

            try:
                os.write(fd, f"{os.getpid()}\n".encode())
            except OSError as ex:
                raise LockCreateError(self.file, ex) from ex
            finally:
                os.close(fd)

            self._signal_guard = guard
            self._acquired = True
        except BaseException:
            if not self._acquired:
                self._signal_guard = None
                if created:
                    os.unlink(self.file)
                if guard is not None:
                    guard.__exit__(None, None, None)
            raise
        logger.trace("lock acquired")

    def release(self) -> None:
        """
        Remove the lock marker.

        This method has no effect if the lock is not held by this object.
        """
        if not self._acquired:
            return

        try:
            os.unlink(self.file)
            logger.trace("lock released")
        except FileNotFoundError:
            logger.debug("lock file does not exist on lock release")
        finally:
            self._acquired = False
            if self._signal_guard is not None:
                self._signal_guard.__exit__(None, None, None)
                self._signal_guard = None

    def is_acquired(self) -> bool:
        return self._acquired
