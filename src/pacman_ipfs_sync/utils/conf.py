import configparser
import os
from typing import Dict, Optional

from pacman_ipfs_sync.constants import defaults, keys

from .logging import get_logger

logger = get_logger(__name__)

# Module-level cache, keyed by file path
_file_config_cache: Dict[str, Dict[str, str]] = {}


def _get_file_config(path: str) -> Dict[str, str]:
    if path not in _file_config_cache:
        parser = configparser.ConfigParser(interpolation=None)
        try:
            read = parser.read(path)
        except configparser.Error as ex:
            logger.warning("ignoring config file %s: %s", path, ex)
            read = []

        if not read:
            logger.debug("no config file at %s", path)
            _file_config_cache[path] = {}
        elif parser.has_section(keys.CONFIG_SECTION):
            _file_config_cache[path] = {
                k: v.strip() for k, v in parser.items(keys.CONFIG_SECTION)
            }
        else:
            logger.warning("config file %s has no [%s] section", path, keys.CONFIG_SECTION)
            _file_config_cache[path] = {}

    return _file_config_cache[path]


def get_config_file_path() -> str:
    path = os.environ.get(keys.CONFIG_FILE_ENV_VAR)
    if not path:
        return defaults.CONFIG_FILE
    if not os.path.isfile(path):
        logger.warning("%s=%s does not exist, using defaults", keys.CONFIG_FILE_ENV_VAR, path)
    return path


def get_file_config(path: Optional[str] = None) -> Dict[str, str]:
    return _get_file_config(path or get_config_file_path())


def get_config_value(key: str, path: Optional[str] = None) -> Optional[str]:
    """Gets the value of a configuration key from the config file.

    Args:
        key: The configuration key to retrieve.
        path: Config file to read. Defaults to the standard location.

    Returns:
        The value of the configuration key, or None if not found.
    """
    return get_file_config(path).get(key)
