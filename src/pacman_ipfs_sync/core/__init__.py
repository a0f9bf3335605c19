from .preflight import run_checks
from .publish import publish_cache
from .refresh import refresh_databases, refresh_repo_db, swap_database
from .sync import sync_main

__all__ = [
    "run_checks",
    "publish_cache",
    "refresh_databases",
    "refresh_repo_db",
    "swap_database",
    "sync_main",
]
