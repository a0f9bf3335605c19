"""Process exit codes"""

SUCCESS = 0
FAILURE = 1

EMPTY_CACHE_DIR = 10
EMPTY_DB_DIR = 11
EMPTY_PACMAN_CONF = 12
EMPTY_LOCK_FILE = 13
EMPTY_MOUNT_ROOT = 14
EMPTY_SERVICE_USER = 15
EMPTY_STORE_HOST = 16
EMPTY_REMOTE_PATH = 17

CACHE_DIR_MISSING = 50
DB_DIR_MISSING = 51
PACMAN_CONF_MISSING = 52

NOT_ROOT = FAILURE

SERVICE_USER_MISSING = 150
DAEMON_NOT_RUNNING = 151
NOT_MOUNTED = 152

REMOTE_DIR_INACCESSIBLE = 200
