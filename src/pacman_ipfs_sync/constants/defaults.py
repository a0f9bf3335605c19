"""Built-in configuration values"""

CONFIG_FILE = "/etc/pacman-ipfs-sync.conf"

CACHE_DIR = "/var/cache/pacman/pkg"
DB_DIR = "/var/lib/pacman/sync"
PACMAN_CONF = "/etc/pacman.conf"
LOCK_FILE = "/var/lib/pacman/ipfs-sync.lck"

MOUNT_ROOT = "/ipfs"
SERVICE_USER = "ipfs"
STORE_HOST = "pacman.store"
DISTRIBUTION = "arch"
ARCHITECTURE = "x86_64"
REPOSITORY_SET = "default"

IPFS_DAEMON = "ipfs"

SYNC_DATABASES = True
WIPE_CACHE = True
