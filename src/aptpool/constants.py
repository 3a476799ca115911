import logging
from os import getenv
from pathlib import Path

# repository root that holds the pool/ tree; nothing is created here at import time
REPO_ROOT = Path(getenv("APTPOOL_ROOT", "repo")).resolve()


def resolve_log_level(name: str | None) -> int:
    """Map a level name such as "debug" to its number; unknown names give INFO."""
    return logging.getLevelNamesMapping().get((name or "").upper(), logging.INFO)


LOG_LEVEL = resolve_log_level(getenv("APTPOOL_LOG_LEVEL"))

POOL_DIR = "pool"
COMPONENT = "main"
SOURCE_DIR = "source"
BINARY_DIR_PREFIX = "binary-"

DBGSYM_SUFFIX = "-dbgsym"
DEB_SUFFIX = ".deb"
SOURCE_SUFFIXES = (".dsc", ".tar.xz")
TAR_SUFFIXES = (".tar.gz", ".tar.xz")
ZIP_SUFFIX = ".zip"

HASH_ALGORITHM = "md5"
HASH_BUFFER_SIZE = 65536  # 64 KiB
