"""pacman.conf reading

Only two things are read: the repository sections, in file order, and the
`#IPFS-SYNC:` comment directives that list which repositories to sync.
"""

import re
from pathlib import Path
from typing import List

from pacman_ipfs_sync.constants import keys
from pacman_ipfs_sync.utils.logging import get_logger

logger = get_logger(__name__)

_SECTION_RE = re.compile(r"^\s*\[([^\]]+)\]\s*$")
_DIRECTIVE_RE = re.compile(
    r"^\s*#\s*" + re.escape(keys.PACMAN_SYNC_DIRECTIVE) + r"\s*:\s*(.*)$", re.IGNORECASE
)


class PacmanConf:
    def __init__(self, repositories: List[str], sync_list: List[str]) -> None:
        self.repositories = repositories
        self.sync_list = sync_list

    def repos_to_sync(self) -> List[str]:
        """Repositories marked for sync, in the order they appear in pacman.conf"""
        wanted = set(self.sync_list)
        for name in wanted.difference(self.repositories):
            logger.debug("%s is marked for sync but has no section in pacman.conf", name)
        result: List[str] = []
        for repo in self.repositories:
            if repo in wanted and repo not in result:
                result.append(repo)
        return result

    def __repr__(self) -> str:
        return f"PacmanConf(repositories={self.repositories!r}, sync_list={self.sync_list!r})"


def parse_pacman_conf(text: str) -> PacmanConf:
    repositories: List[str] = []
    sync_list: List[str] = []
    for line in text.splitlines():
        directive = _DIRECTIVE_RE.match(line)
        if directive:
            names = [n for n in re.split(r"[\s,]+", directive.group(1)) if n]
            sync_list.extend(names)
            continue

        section = _SECTION_RE.match(line)
        if section:
            name = section.group(1).strip()
            if name != keys.PACMAN_OPTIONS_SECTION:
                repositories.append(name)

    return PacmanConf(repositories, sync_list)


def read_pacman_conf(path: Path) -> PacmanConf:
    """Reads pacman.conf

    Raises:
        OSError
    """
    logger.trace("reading %s", path)
    conf = parse_pacman_conf(path.read_text(encoding="utf-8", errors="replace"))
    logger.debug(conf)
    return conf
