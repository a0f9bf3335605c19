"""one sync run: pre-flight, lock, publish, refresh"""

from typing import Optional

from pacman_ipfs_sync.config import SyncConfig
from pacman_ipfs_sync.errors import SyncError
from pacman_ipfs_sync.host import HostEnvironment
from pacman_ipfs_sync.pacman_conf import read_pacman_conf
from pacman_ipfs_sync.utils.file_lock import LockCreateError, LockMarker
from pacman_ipfs_sync.utils.logging import get_logger, log_section

from .preflight import run_checks
from .publish import publish_cache
from .refresh import refresh_databases

logger = get_logger(__name__)


def _sync_databases_in_lock(config: SyncConfig) -> Optional[SyncError]:
    try:
        pacman_conf = read_pacman_conf(config.pacman_conf)
    except OSError as ex:
        return SyncError.pacman_conf_error(config.pacman_conf, ex)

    repos = pacman_conf.repos_to_sync()
    if not repos:
        logger.info("no repositories marked for sync in %s", config.pacman_conf)
        return None

    with log_section(f"refreshing databases: {', '.join(repos)}"):
        return refresh_databases(config, repos)


def _sync_in_lock(config: SyncConfig, host: HostEnvironment) -> Optional[SyncError]:
    with log_section(f"adding packages from {config.cache_dir}"):
        publish_cache(config, host)

    if not config.sync_databases:
        logger.debug("database sync disabled")
        return None

    return _sync_databases_in_lock(config)


def sync_main(config: SyncConfig, host: HostEnvironment) -> Optional[SyncError]:
    """Runs one sync.

    Args:
        config:
        host: access to users, processes, mounts and the ipfs command

    Returns:
        the first fatal error, or None

    Raises:
        LockContentionError: if another sync holds the lock. Nothing was changed.
    """
    err = run_checks(config, host)
    if err:
        return err

    try:
        with LockMarker(config.lock_file):
            return _sync_in_lock(config, host)
    except LockCreateError as ex:
        return SyncError.lock_failed(ex)
