"""Access to the machine the sync runs on

Everything that needs root, a system account, the IPFS daemon or the IPFS
mount goes through a `HostEnvironment` so the core can run against a fake one.
"""

import os
import pwd
import subprocess
from typing import TYPE_CHECKING, List, Union

from pacman_ipfs_sync.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from typing import Protocol

    class HostEnvironment(Protocol):
        def current_user(self) -> str: ...
        def is_root(self) -> bool: ...
        def user_exists(self, name: str) -> bool: ...
        def is_process_running(self, name: str) -> bool: ...
        def is_mounted(self, path: Union[str, "os.PathLike[str]"]) -> bool: ...
        def run_as(self, user: str, cmd: List[str]) -> "subprocess.CompletedProcess[bytes]": ...

else:
    HostEnvironment = object


MOUNTS_FILE = "/proc/self/mounts"


class SystemHost:
    def current_user(self) -> str:
        uid = os.geteuid()
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            return str(uid)

    def is_root(self) -> bool:
        return os.geteuid() == 0

    def user_exists(self, name: str) -> bool:
        try:
            pwd.getpwnam(name)
        except KeyError:
            return False
        return True

    def is_process_running(self, name: str) -> bool:
        cmd = ["pgrep", "-x", name]
        logger.trace("running '%s'", " ".join(cmd))
        res = subprocess.run(cmd, check=False, capture_output=True)  # noqa: S603 S607
        return res.returncode == 0

    def is_mounted(self, path: Union[str, "os.PathLike[str]"]) -> bool:
        target = os.path.realpath(path)
        try:
            with open(MOUNTS_FILE) as f:
                for line in f:
                    fields = line.split()
                    if len(fields) > 1 and _unescape_mount_path(fields[1]) == target:
                        return True
            return False
        except OSError as ex:
            logger.debug("could not read %s: %s", MOUNTS_FILE, ex)
            return os.path.ismount(target)

    def run_as(self, user: str, cmd: List[str]) -> "subprocess.CompletedProcess[bytes]":
        full_cmd = ["sudo", "-n", "-u", user, "--", *cmd]
        logger.trace("running '%s'", " ".join(full_cmd))
        return subprocess.run(full_cmd, check=False, capture_output=True)  # noqa: S603 S607


def _unescape_mount_path(field: str) -> str:
    # spaces, tabs and newlines are octal-escaped in the mount table
    return (
        field.replace("\\040", " ")
        .replace("\\011", "\t")
        .replace("\\012", "\n")
        .replace("\\134", "\\")
    )
