import argparse
from typing import Optional

from pacman_ipfs_sync.constants import defaults, keys

from .utils import toggle


def get_log_level_options_parser() -> argparse.ArgumentParser:
    log_level_parser = argparse.ArgumentParser(add_help=False)
    log_level_parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="be more verbose",
    )
    log_level_parser.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        help="be more quiet",
    )
    return log_level_parser


def get_standard_options_parser() -> argparse.ArgumentParser:
    standard_options_parser = argparse.ArgumentParser(add_help=False)
    standard_options_parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help=f"config file. default is ${keys.CONFIG_FILE_ENV_VAR} or '{defaults.CONFIG_FILE}'",
    )
    standard_options_parser.add_argument(
        "sync_databases",
        metavar="SYNC_DB",
        type=toggle,
        nargs="?",
        default=None,
        help="refresh pacman databases from the IPFS mount (yes/no)",
    )
    standard_options_parser.add_argument(
        "wipe_cache",
        metavar="WIPE_CACHE",
        type=toggle,
        nargs="?",
        default=None,
        help="delete cached packages once they are added to IPFS (yes/no)",
    )
    return standard_options_parser


class CLIArgumentNamespace(argparse.Namespace):
    verbose: int
    quiet: int

    config: Optional[str]

    # positional toggles, None when not given
    sync_databases: Optional[bool]
    wipe_cache: Optional[bool]
