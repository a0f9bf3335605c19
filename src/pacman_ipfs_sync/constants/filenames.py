DB_SUFFIX = ".db"
"""suffix of a repository database file"""

STAGING_SUFFIX = ".part"
"""new database copy before it is moved into place"""

ROTATED_SUFFIX = ".old"
"""previous database after it is moved out of place"""

REMOTE_HOST_PREFIX = "pkg."

REMOTE_DB_DIR = "db"

SKIPPED_CACHE_SUFFIXES = (".part", ".sig")
"""partial downloads and detached signatures are never published"""
