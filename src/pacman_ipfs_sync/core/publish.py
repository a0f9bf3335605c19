"""add cached packages to IPFS"""

import os
from pathlib import Path
from typing import List

from pacman_ipfs_sync.config import SyncConfig
from pacman_ipfs_sync.constants import filenames
from pacman_ipfs_sync.host import HostEnvironment
from pacman_ipfs_sync.utils.logging import get_logger

logger = get_logger(__name__)

IPFS_ADD_CMD = ["ipfs", "add", "--silent", "--raw-leaves", "--pin=false"]


class PublishReport:
    def __init__(self) -> None:
        self.published = 0
        self.removed = 0
        self.failed = 0

    def __repr__(self) -> str:
        return (
            f"PublishReport(published={self.published}, "
            f"removed={self.removed}, failed={self.failed})"
        )


def list_cache_files(cache_dir: Path) -> List[Path]:
    """Regular files directly in the cache dir, without partial downloads or signatures"""
    files = []
    with os.scandir(cache_dir) as it:
        for entry in it:
            if entry.name.endswith(filenames.SKIPPED_CACHE_SUFFIXES):
                continue
            if not entry.is_file(follow_symlinks=False):
                continue
            files.append(Path(entry.path))
    return sorted(files)


def publish_file(host: HostEnvironment, service_user: str, path: Path) -> bool:
    """Adds a file to IPFS without pinning it.

    Returns:
        True if ipfs reported success
    """
    try:
        res = host.run_as(service_user, [*IPFS_ADD_CMD, str(path)])
    except OSError as ex:
        logger.warning("could not run ipfs add for %s: %s", path.name, ex)
        return False

    if res.returncode != 0:
        stderr = res.stderr.decode(errors="replace").strip() if res.stderr else ""
        logger.warning("ipfs add failed for %s: %s", path.name, stderr or res.returncode)
        return False
    return True


def publish_cache(config: SyncConfig, host: HostEnvironment) -> PublishReport:
    """Adds every cached package to IPFS, optionally deleting it afterwards.

    Failures are logged and skipped.

    Args:
        config:
        host: runs ipfs as the service user

    Returns:
        counts of published, removed and failed files
    """
    report = PublishReport()
    try:
        paths = list_cache_files(config.cache_dir)
    except OSError as ex:
        logger.warning("could not list %s: %s", config.cache_dir, ex)
        return report

    for path in paths:
        logger.debug("adding %s", path.name)
        if not publish_file(host, config.service_user, path):
            report.failed += 1
            continue

        report.published += 1
        if not config.wipe_cache:
            continue

        try:
            path.unlink()
            report.removed += 1
        except OSError as ex:
            logger.warning("could not remove %s: %s", path, ex)

    logger.debug(report)
    if report.published or report.failed:
        logger.info(
            "added %d cached packages to ipfs (%d removed, %d failed)",
            report.published,
            report.removed,
            report.failed,
        )
    return report
