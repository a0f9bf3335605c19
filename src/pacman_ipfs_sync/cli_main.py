"""add the pacman package cache to IPFS and refresh pacman databases from it

usage: pacman-ipfs-sync [SYNC_DB [WIPE_CACHE]]

SYNC_DB      refresh databases listed in '#IPFS-SYNC:' lines of pacman.conf (default yes)
WIPE_CACHE   delete cached packages after adding them to IPFS (default yes)
"""

import argparse
import os
from typing import List, Optional

from pacman_ipfs_sync.cli.arguments import (
    CLIArgumentNamespace,
    get_log_level_options_parser,
    get_standard_options_parser,
)
from pacman_ipfs_sync.config import SyncConfig
from pacman_ipfs_sync.constants import exit_codes
from pacman_ipfs_sync.core import sync_main
from pacman_ipfs_sync.host import HostEnvironment, SystemHost
from pacman_ipfs_sync.utils.file_lock import LockContentionError
from pacman_ipfs_sync.utils.logging import compute_log_level, configure_logger, get_logger

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="pacman-ipfs-sync",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        parents=[get_log_level_options_parser(), get_standard_options_parser()],
    )


def run(args: CLIArgumentNamespace, host: Optional[HostEnvironment] = None) -> int:
    """Runs a sync for parsed command-line arguments.

    Returns:
        Exit code. 0 on success or when another sync holds the lock.
    """
    config = SyncConfig.from_cli_namespace(args)
    logger.debug(config)

    try:
        err = sync_main(config, host if host is not None else SystemHost())
    except LockContentionError as ex:
        logger.info(str(ex))
        return exit_codes.SUCCESS

    if err:
        logger.error(str(err))
        return err.exit_code

    return exit_codes.SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv, namespace=CLIArgumentNamespace())
    if args.config is not None and not os.path.isfile(args.config):
        parser.error(f"config file not found: {args.config}")

    configure_logger(compute_log_level(args.verbose, args.quiet))
    logger.debug("Program args: %s", args)

    return run(args)
