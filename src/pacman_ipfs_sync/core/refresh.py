"""refresh pacman databases from the IPFS mount"""

import enum
import os
import shutil
import stat
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from pacman_ipfs_sync.config import SyncConfig
from pacman_ipfs_sync.constants import filenames
from pacman_ipfs_sync.errors import SyncError
from pacman_ipfs_sync.utils.logging import get_logger
from pacman_ipfs_sync.utils.misc import fsync_dirs, fsync_file

logger = get_logger(__name__)


class RefreshState(enum.Enum):
    UNCHECKED = enum.auto()
    SIZE_COMPARED = enum.auto()
    STAGED = enum.auto()
    ROTATED = enum.auto()
    ACTIVE = enum.auto()
    DONE = enum.auto()


class RefreshReport:
    def __init__(self) -> None:
        self.updated: List[str] = []
        self.unchanged: List[str] = []
        self.skipped: List[str] = []

    def __repr__(self) -> str:
        return (
            f"RefreshReport(updated={self.updated}, "
            f"unchanged={self.unchanged}, skipped={self.skipped})"
        )


def _enter_state(repo: str, state: RefreshState) -> None:
    logger.trace("%s: %s", repo, state.name.lower())


def get_db_paths(config: SyncConfig, repo: str) -> Tuple[Path, Path]:
    """Returns the local and remote database paths of a repository"""
    name = f"{repo}{filenames.DB_SUFFIX}"
    return config.db_dir / name, config.remote_db_dir / name


def staging_path(db_path: Path) -> Path:
    return db_path.with_name(db_path.name + filenames.STAGING_SUFFIX)


def rotated_path(db_path: Path) -> Path:
    return db_path.with_name(db_path.name + filenames.ROTATED_SUFFIX)


def swap_database(repo: str, old: Path, new: Path) -> Optional[SyncError]:
    """Replaces `old` with a copy of `new`.

    The copy is written next to `old` and flushed before anything is renamed,
    so `old` only stops existing for the time between the two renames. The
    previous database is kept as `<old>.old`.

    Args:
        repo: repository name, for messages
        old: the active database
        new: the database to copy in

    Returns:
        an error of type SWAP_FAILED naming the failed step, or None
    """
    part = staging_path(old)
    rotated = rotated_path(old)

    steps: List[Tuple[str, Callable[[], object], Optional[RefreshState]]] = [
        (f"copy {new} to {part}", lambda: shutil.copyfile(new, part), None),
        (
            f"set permissions of {part}",
            lambda: os.chmod(part, stat.S_IMODE(old.stat().st_mode)),
            None,
        ),
        (f"sync {part}", lambda: fsync_file(part), RefreshState.STAGED),
        (f"rename {old} to {rotated}", lambda: os.replace(old, rotated), None),
        (f"sync directory of {old}", lambda: fsync_dirs(old, rotated), RefreshState.ROTATED),
        (f"rename {part} to {old}", lambda: os.replace(part, old), None),
        (f"sync directory of {old}", lambda: fsync_dirs(part, old), RefreshState.ACTIVE),
    ]

    for description, action, reached in steps:
        logger.trace("%s: %s", repo, description)
        try:
            action()
        except OSError as ex:
            return SyncError.swap_failed(repo, description, ex)
        if reached is not None:
            _enter_state(repo, reached)

    return None


def refresh_repo_db(
    config: SyncConfig, repo: str, report: Optional[RefreshReport] = None
) -> Optional[SyncError]:
    """Brings the local database of a repository up to date with the IPFS mount.

    The databases are treated as equal when their sizes match.

    Args:
        config:
        repo: repository name, as in pacman.conf
        report: collects the outcome. Optional

    Returns:
        errors of type LOCAL_DB_MISSING, STAT_FAILED or SWAP_FAILED, or None.
        A missing remote database is not an error.
    """
    report = report if report is not None else RefreshReport()
    old, new = get_db_paths(config, repo)
    logger.debug("checking %s", repo)
    _enter_state(repo, RefreshState.UNCHECKED)

    try:
        old_size = os.stat(old).st_size
    except FileNotFoundError:
        return SyncError.local_db_missing(repo, old)
    except OSError as ex:
        return SyncError.stat_failed(repo, ex)

    try:
        new_size = os.stat(new).st_size
    except FileNotFoundError:
        logger.warning("%s: no database in ipfs at %s, skipping", repo, new)
        report.skipped.append(repo)
        return None
    except OSError as ex:
        return SyncError.stat_failed(repo, ex)

    _enter_state(repo, RefreshState.SIZE_COMPARED)
    logger.trace("%s: local %d bytes, remote %d bytes", repo, old_size, new_size)
    if old_size == new_size:
        logger.debug("%s is up to date", repo)
        report.unchanged.append(repo)
        _enter_state(repo, RefreshState.DONE)
        return None

    err = swap_database(repo, old, new)
    if err:
        return err

    logger.info("updated %s database (%d -> %d bytes)", repo, old_size, new_size)
    report.updated.append(repo)
    _enter_state(repo, RefreshState.DONE)
    return None


def refresh_databases(config: SyncConfig, repos: List[str]) -> Optional[SyncError]:
    """Refreshes the databases of the given repositories, in order.

    Stops at the first error.

    Args:
        config:
        repos: repository names

    Returns:
        the first error, or None
    """
    report = RefreshReport()
    for repo in repos:
        err = refresh_repo_db(config, repo, report)
        if err:
            return err
    logger.debug(report)
    return None
