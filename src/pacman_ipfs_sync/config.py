from pathlib import Path
from typing import Any, List, Optional

from pacman_ipfs_sync.cli.arguments import CLIArgumentNamespace
from pacman_ipfs_sync.constants import defaults, filenames, keys
from pacman_ipfs_sync.utils.conf import get_config_value
from pacman_ipfs_sync.utils.logging import get_logger
from pacman_ipfs_sync.utils.misc import parse_toggle

logger = get_logger(__name__)


class SyncConfig:
    """Settings for one run. Built once and never modified."""

    def __init__(
        self,
        cache_dir: Optional[str] = None,
        db_dir: Optional[str] = None,
        pacman_conf: Optional[str] = None,
        lock_file: Optional[str] = None,
        mount_root: Optional[str] = None,
        service_user: Optional[str] = None,
        store_host: Optional[str] = None,
        distribution: Optional[str] = None,
        architecture: Optional[str] = None,
        repository_set: Optional[str] = None,
        sync_databases: Optional[bool] = None,
        wipe_cache: Optional[bool] = None,
        config_file: Optional[str] = None,
    ) -> None:
        def pick(value: Optional[str], key: str, default: str) -> str:
            return value if value is not None else get_str(key, default, config_file)

        self._cache_dir = pick(cache_dir, keys.CACHE_DIR, defaults.CACHE_DIR)
        self._db_dir = pick(db_dir, keys.DB_DIR, defaults.DB_DIR)
        self._pacman_conf = pick(pacman_conf, keys.PACMAN_CONF, defaults.PACMAN_CONF)
        self._lock_file = pick(lock_file, keys.LOCK_FILE, defaults.LOCK_FILE)
        self._mount_root = pick(mount_root, keys.MOUNT_ROOT, defaults.MOUNT_ROOT)
        self._service_user = pick(service_user, keys.SERVICE_USER, defaults.SERVICE_USER)
        self._store_host = pick(store_host, keys.STORE_HOST, defaults.STORE_HOST)
        self._distribution = pick(distribution, keys.DISTRIBUTION, defaults.DISTRIBUTION)
        self._architecture = pick(architecture, keys.ARCHITECTURE, defaults.ARCHITECTURE)
        self._repository_set = pick(repository_set, keys.REPOSITORY_SET, defaults.REPOSITORY_SET)
        self._sync_databases = (
            sync_databases
            if sync_databases is not None
            else get_bool(keys.SYNC_DATABASES, defaults.SYNC_DATABASES, config_file)
        )
        self._wipe_cache = (
            wipe_cache
            if wipe_cache is not None
            else get_bool(keys.WIPE_CACHE, defaults.WIPE_CACHE, config_file)
        )

    @classmethod
    def from_cli_namespace(cls, args: CLIArgumentNamespace) -> "SyncConfig":
        return cls(
            sync_databases=args.sync_databases,
            wipe_cache=args.wipe_cache,
            config_file=args.config,
        )

    @property
    def cache_dir(self) -> Path:
        return Path(self._cache_dir)

    @property
    def db_dir(self) -> Path:
        return Path(self._db_dir)

    @property
    def pacman_conf(self) -> Path:
        return Path(self._pacman_conf)

    @property
    def lock_file(self) -> Path:
        return Path(self._lock_file)

    @property
    def mount_root(self) -> Path:
        return Path(self._mount_root)

    @property
    def service_user(self) -> str:
        return self._service_user

    @property
    def store_host(self) -> str:
        return self._store_host

    @property
    def distribution(self) -> str:
        return self._distribution

    @property
    def architecture(self) -> str:
        return self._architecture

    @property
    def repository_set(self) -> str:
        return self._repository_set

    @property
    def remote_db_dir(self) -> Path:
        """<mount root>/pkg.<host>/<distribution>/<architecture>/<repository set>/db"""
        return (
            self.mount_root
            / f"{filenames.REMOTE_HOST_PREFIX}{self._store_host}"
            / self._distribution
            / self._architecture
            / self._repository_set
            / filenames.REMOTE_DB_DIR
        )

    @property
    def sync_databases(self) -> bool:
        return self._sync_databases

    @property
    def wipe_cache(self) -> bool:
        return self._wipe_cache

    def empty_values(self) -> List[str]:
        """Returns the keys of all string settings that are empty or whitespace"""
        return [
            name[1:]
            for name, value in vars(self).items()
            if isinstance(value, str) and not value.strip()
        ]

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        if name in vars(self):
            raise AttributeError(f"{type(self).__name__} is read-only")
        super().__setattr__(name, value)

    def __eq__(self, value: Any) -> bool:  # noqa: ANN401
        if not isinstance(value, type(self)):
            return NotImplemented
        return vars(self) == vars(value)

    def __repr__(self) -> str:
        """Lists every stored setting as `name=value`"""
        settings = ", ".join(f"{name[1:]}={value!r}" for name, value in vars(self).items())
        return f"{type(self).__name__}({settings})"


def get_str(key: str, default: str, config_file: Optional[str] = None) -> str:
    val = get_config_value(key, config_file)
    if val is not None:
        return val
    return default


def get_bool(key: str, default: bool, config_file: Optional[str] = None) -> bool:
    val = get_config_value(key, config_file)
    if val is None:
        return default
    parsed = parse_toggle(val)
    if parsed is None:
        logger.warning("%s: '%s' is not a boolean, using %s", key, val, default)
        return default
    return parsed
