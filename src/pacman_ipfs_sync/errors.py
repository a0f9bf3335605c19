import enum
from pathlib import Path
from typing import Optional

from pacman_ipfs_sync.constants import exit_codes


class SyncErrorType(enum.Enum):
    EMPTY_CONFIG_VALUE = enum.auto()
    PATH_MISSING = enum.auto()
    NOT_ROOT = enum.auto()
    SERVICE_UNAVAILABLE = enum.auto()
    REMOTE_DIR_INACCESSIBLE = enum.auto()
    LOCK_FAILED = enum.auto()
    PACMAN_CONF_ERROR = enum.auto()
    LOCAL_DB_MISSING = enum.auto()
    STAT_FAILED = enum.auto()
    SWAP_FAILED = enum.auto()


class SyncError:
    def __init__(
        self,
        error_type: Optional[SyncErrorType] = None,
        msg: Optional[str] = None,
        exit_code: int = exit_codes.FAILURE,
    ) -> None:
        self.type = error_type
        self.msg = msg
        self.exit_code = exit_code
        self.ex: Optional[Exception] = None

    @classmethod
    def empty_config_value(cls, key: str, exit_code: int) -> "SyncError":
        return cls(
            SyncErrorType.EMPTY_CONFIG_VALUE, f"config value '{key}' is empty", exit_code
        )

    @classmethod
    def path_missing(cls, what: str, path: Path, exit_code: int) -> "SyncError":
        return cls(SyncErrorType.PATH_MISSING, f"{what} does not exist: {path}", exit_code)

    @classmethod
    def not_root(cls, user: str) -> "SyncError":
        msg = f"must be run as root (running as '{user}')"
        return cls(SyncErrorType.NOT_ROOT, msg, exit_codes.NOT_ROOT)

    @classmethod
    def service_unavailable(cls, reason: str, exit_code: int) -> "SyncError":
        return cls(SyncErrorType.SERVICE_UNAVAILABLE, reason, exit_code)

    @classmethod
    def remote_dir_inaccessible(cls, path: Path) -> "SyncError":
        return cls(
            SyncErrorType.REMOTE_DIR_INACCESSIBLE,
            f"remote database directory is not accessible: {path}",
            exit_codes.REMOTE_DIR_INACCESSIBLE,
        )

    @classmethod
    def lock_failed(cls, cause: Exception) -> "SyncError":
        obj = cls(SyncErrorType.LOCK_FAILED, str(cause))
        obj.ex = cause
        return obj

    @classmethod
    def pacman_conf_error(cls, path: Path, cause: Exception) -> "SyncError":
        obj = cls(SyncErrorType.PACMAN_CONF_ERROR, f"could not read {path}: {cause}")
        obj.ex = cause
        return obj

    @classmethod
    def local_db_missing(cls, repo: str, path: Path) -> "SyncError":
        msg = f"{repo}: local database does not exist: {path}"
        return cls(SyncErrorType.LOCAL_DB_MISSING, msg)

    @classmethod
    def stat_failed(cls, repo: str, cause: OSError) -> "SyncError":
        obj = cls(SyncErrorType.STAT_FAILED, f"{repo}: could not get database size: {cause}")
        obj.ex = cause
        return obj

    @classmethod
    def swap_failed(cls, repo: str, step: str, cause: OSError) -> "SyncError":
        obj = cls(SyncErrorType.SWAP_FAILED, f"{repo}: failed to {step}: {cause}")
        obj.ex = cause
        return obj

    def __bool__(self) -> bool:
        return self.type is not None

    def __str__(self) -> str:
        return self.msg or ""

    def __repr__(self) -> str:
        return f"SyncError(type={self.type}, exit_code={self.exit_code}, msg={self.msg!r})"
