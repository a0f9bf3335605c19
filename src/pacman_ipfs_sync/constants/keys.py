CONFIG_FILE_ENV_VAR = "PACMAN_IPFS_SYNC_CONFIG"
"""environment variable that overrides the default config file path"""

CONFIG_SECTION = "sync"

CACHE_DIR = "cache_dir"
DB_DIR = "db_dir"
PACMAN_CONF = "pacman_conf"
LOCK_FILE = "lock_file"
MOUNT_ROOT = "mount_root"
SERVICE_USER = "service_user"
STORE_HOST = "store_host"
DISTRIBUTION = "distribution"
ARCHITECTURE = "architecture"
REPOSITORY_SET = "repository_set"
SYNC_DATABASES = "sync_databases"
WIPE_CACHE = "wipe_cache"

PACMAN_OPTIONS_SECTION = "options"
"""pacman.conf section that is not a repository"""

PACMAN_SYNC_DIRECTIVE = "ipfs-sync"
"""comment directive in pacman.conf listing repositories to sync, e.g. `#IPFS-SYNC: core extra`"""
