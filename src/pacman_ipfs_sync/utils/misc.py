import os
import signal
from contextlib import contextmanager
from types import FrameType
from typing import Dict, Generator, Iterable, NoReturn, Optional, Union

from .logging import get_logger

logger = get_logger(__name__)

EXIT_SIGNALS = (signal.SIGTERM, signal.SIGHUP, signal.SIGINT)


@contextmanager
def exit_on_signals(
    signals: Iterable[signal.Signals] = EXIT_SIGNALS,
) -> Generator[None, None, None]:
    """Turns termination signals into `SystemExit` for the duration of the block.

    This lets `with` statements and `finally` clauses run when the process is
    asked to stop. The original handlers are restored on exit.

    Args:
        signals: The signals to handle.

    Yields:
        None.

    Raises:
        SystemExit: with status 128 + signal number when a signal arrives.
    """

    def exit_handler(signum: int, frame: Optional[FrameType]) -> NoReturn:  # noqa: ARG001
        logger.debug("received signal %s", signum)
        raise SystemExit(128 + signum)

    original_handlers: Dict[int, object] = {}
    try:
        for sig in signals:
            original_handlers[sig] = signal.signal(sig, exit_handler)
        yield
    finally:
        for sig, handler in original_handlers.items():
            signal.signal(sig, handler)  # type: ignore[arg-type]


def fsync_file(path: Union[str, "os.PathLike[str]"]) -> None:
    """Flushes a file's data and metadata to disk.

    Raises:
        OSError
    """
    fd = os.open(path, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def fsync_dirs(*paths: Union[str, "os.PathLike[str]"]) -> None:
    """Flushes the directory entries of each path to disk.

    The parent directory of every path is synced once, even when several
    paths share it.

    Raises:
        OSError
    """
    seen = set()
    for path in paths:
        parent = os.path.dirname(os.path.abspath(path))
        if parent in seen:
            continue
        seen.add(parent)
        logger.trace("syncing directory %s", parent)
        fsync_file(parent)


def parse_toggle(value: str) -> Optional[bool]:
    """Parses a yes/no style value.

    Returns:
        True or False, or None if the value is not recognized.
    """
    value = value.lower().strip()
    if value in {"true", "1", "y", "yes", "on"}:
        return True
    if value in {"false", "0", "n", "no", "off"}:
        return False
    return None
