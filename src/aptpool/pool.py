"""Placement of built artifacts into an APT pool tree.

Pool layout under the repository root::

    pool/<archive>/main/source/<bucket>/<package>/<filename>
    pool/<archive>/main/binary-<arch>/<bucket>/<package>/<filename>

``bucket`` is the first character of the package name. Debug symbol
packages (``*-dbgsym``) share the directory of the package they belong to.
"""

import logging
import os
from pathlib import Path

from aptpool.constants import BINARY_DIR_PREFIX, COMPONENT, POOL_DIR, REPO_ROOT, SOURCE_DIR
from aptpool.models import ParsedName, PlaceAction, PoolDestination
from aptpool.models.pool import PlaceFn
from aptpool.naming import is_text_name, parse_package_filename

logger = logging.getLogger(__name__)


def resolve_pool_destination(
    parsed: ParsedName,
    archive: str,
    root: Path = REPO_ROOT,
) -> PoolDestination:
    """Compute where an artifact belongs in the pool.

    Pure path computation; nothing is created on disk.

    Args:
        parsed: The parsed artifact filename
        archive: Archive name (e.g. "jammy"); used verbatim
        root: Repository root holding the pool/ tree

    Returns:
        The destination directory and leaf filename

    Examples:
        >>> resolve_pool_destination(parse_package_filename("hello_2.10-3_amd64.deb"), "jammy", Path("repo")).path
        PosixPath('repo/pool/jammy/main/binary-amd64/h/hello/hello_2.10-3_amd64.deb')
    """
    tree = SOURCE_DIR if parsed.is_source else f"{BINARY_DIR_PREFIX}{parsed.arch}"
    directory = Path(root) / POOL_DIR / archive / COMPONENT / tree / parsed.bucket / parsed.display_package
    return PoolDestination(directory=directory, filename=parsed.filename)


def place_in_pool(
    source_dir: Path,
    archive: str,
    action: PlaceAction | PlaceFn,
    root: Path = REPO_ROOT,
) -> list[Path]:
    """Move or copy every file in ``source_dir`` into the pool.

    Only the immediate entries of ``source_dir`` are considered; directories
    are skipped without descending. Names that cannot be represented as
    text are logged and skipped.

    Stops at the first error. Files placed before the failure stay placed.

    Args:
        source_dir: Flat directory of built artifacts
        archive: Archive name (e.g. "jammy")
        action: PlaceAction.MOVE, PlaceAction.COPY, or any ``(src, dst)`` callable
        root: Repository root holding the pool/ tree

    Returns:
        Paths of the placed files, in placement order

    Raises:
        MalformedNameError: if a filename lacks the ``_`` separator
        OSError: if a directory cannot be created or the action fails
    """
    placed: list[Path] = []
    with os.scandir(source_dir) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        if entry.is_dir():
            continue

        if not is_text_name(entry.name):
            logger.warning(f"Skipping entry with a non UTF-8 name: {entry.path!r}")
            continue

        parsed = parse_package_filename(entry.name)
        destination = resolve_pool_destination(parsed, archive, root)

        if parsed.is_dbgsym:
            logger.info(f"creating in pool: {destination.directory} (debug symbols for {parsed.display_package})")
        else:
            logger.info(f"creating in pool: {destination.directory}")
        destination.directory.mkdir(parents=True, exist_ok=True)
        action(Path(entry.path), destination.path)
        placed.append(destination.path)

    logger.debug(f"Placed {len(placed)} files from {source_dir} into {archive}")
    return placed


def move_to_pool(source_dir: Path, archive: str, root: Path = REPO_ROOT) -> list[Path]:
    """Move artifacts into the pool; see :func:`place_in_pool`."""
    return place_in_pool(source_dir, archive, PlaceAction.MOVE, root)


def copy_to_pool(source_dir: Path, archive: str, root: Path = REPO_ROOT) -> list[Path]:
    """Copy artifacts into the pool; see :func:`place_in_pool`."""
    return place_in_pool(source_dir, archive, PlaceAction.COPY, root)
