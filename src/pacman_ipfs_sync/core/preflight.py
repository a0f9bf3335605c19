"""checks that run before anything is touched"""

import os
from typing import Optional

from pacman_ipfs_sync.config import SyncConfig
from pacman_ipfs_sync.constants import defaults, exit_codes, keys
from pacman_ipfs_sync.errors import SyncError
from pacman_ipfs_sync.host import HostEnvironment
from pacman_ipfs_sync.utils.logging import get_logger

logger = get_logger(__name__)

_EMPTY_VALUE_EXIT_CODES = [
    (keys.CACHE_DIR, exit_codes.EMPTY_CACHE_DIR),
    (keys.DB_DIR, exit_codes.EMPTY_DB_DIR),
    (keys.PACMAN_CONF, exit_codes.EMPTY_PACMAN_CONF),
    (keys.LOCK_FILE, exit_codes.EMPTY_LOCK_FILE),
    (keys.MOUNT_ROOT, exit_codes.EMPTY_MOUNT_ROOT),
    (keys.SERVICE_USER, exit_codes.EMPTY_SERVICE_USER),
    (keys.STORE_HOST, exit_codes.EMPTY_STORE_HOST),
    (keys.DISTRIBUTION, exit_codes.EMPTY_REMOTE_PATH),
    (keys.ARCHITECTURE, exit_codes.EMPTY_REMOTE_PATH),
    (keys.REPOSITORY_SET, exit_codes.EMPTY_REMOTE_PATH),
]


def check_config_values(config: SyncConfig) -> Optional[SyncError]:
    empty = set(config.empty_values())
    for key, code in _EMPTY_VALUE_EXIT_CODES:
        if key in empty:
            return SyncError.empty_config_value(key, code)
    return None


def check_local_paths(config: SyncConfig) -> Optional[SyncError]:
    if not config.cache_dir.is_dir():
        return SyncError.path_missing(
            "package cache directory", config.cache_dir, exit_codes.CACHE_DIR_MISSING
        )
    if not config.db_dir.is_dir():
        return SyncError.path_missing(
            "database directory", config.db_dir, exit_codes.DB_DIR_MISSING
        )
    if not config.pacman_conf.is_file():
        return SyncError.path_missing(
            "pacman config", config.pacman_conf, exit_codes.PACMAN_CONF_MISSING
        )
    return None


def check_host(config: SyncConfig, host: HostEnvironment) -> Optional[SyncError]:
    if not host.is_root():
        return SyncError.not_root(host.current_user())

    if not host.user_exists(config.service_user):
        return SyncError.service_unavailable(
            f"service user '{config.service_user}' does not exist",
            exit_codes.SERVICE_USER_MISSING,
        )
    if not host.is_process_running(defaults.IPFS_DAEMON):
        return SyncError.service_unavailable(
            "ipfs daemon is not running", exit_codes.DAEMON_NOT_RUNNING
        )
    if not host.is_mounted(config.mount_root):
        return SyncError.service_unavailable(
            f"ipfs is not mounted at {config.mount_root}", exit_codes.NOT_MOUNTED
        )
    return None


def check_remote_dir(config: SyncConfig) -> Optional[SyncError]:
    remote = config.remote_db_dir
    if not remote.is_dir() or not os.access(remote, os.R_OK | os.X_OK):
        return SyncError.remote_dir_inaccessible(remote)
    return None


def run_checks(config: SyncConfig, host: HostEnvironment) -> Optional[SyncError]:
    """Runs all pre-flight checks in order.

    Args:
        config:
        host: access to users, processes and mounts

    Returns:
        the first failed check, or None
    """
    err = (
        check_config_values(config)
        or check_local_paths(config)
        or check_host(config, host)
    )
    if err:
        return err

    if config.sync_databases:
        return check_remote_dir(config)

    logger.debug("database sync disabled, not checking %s", config.remote_db_dir)
    return None
