"""Locate .deb files in a directory tree by package name."""

import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from aptpool.constants import DEB_SUFFIX
from aptpool.naming import is_text_name, package_name_of

logger = logging.getLogger(__name__)


def _is_deb_or_dir(entry: os.DirEntry) -> bool:
    if entry.is_dir(follow_symlinks=False):
        return True
    return is_text_name(entry.name) and entry.name.endswith(DEB_SUFFIX)


def _root_entry(root: str) -> os.DirEntry | None:
    parent, name = os.path.split(root)
    with os.scandir(parent or os.curdir) as it:
        for entry in it:
            if entry.name == name:
                return entry
    return None


def walk_debs(root: Path | str) -> Iterator[os.DirEntry]:
    """Recursively yield directories and ``.deb`` files beneath ``root``.

    Directories are always yielded and descended into; other files are
    filtered out. Symlinked directories are not followed. Subdirectories
    that cannot be scanned are logged and skipped. A ``root`` that is itself
    a ``.deb`` file is yielded on its own.

    Each call starts a fresh walk.
    """
    root = os.fspath(root).rstrip(os.sep) or os.sep
    if not os.path.isdir(root):
        try:
            entry = _root_entry(root)
        except OSError as e:
            logger.warning(f"Unable to scan {root}: {e}")
            return
        if entry is None:
            logger.warning(f"Unable to scan {root}: no such file or directory")
        elif _is_deb_or_dir(entry):
            yield entry
        return

    pending = [root]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as it:
                entries = [entry for entry in it if _is_deb_or_dir(entry)]
        except OSError as e:
            logger.warning(f"Unable to scan {directory}: {e}")
            continue

        for entry in entries:
            yield entry
            if entry.is_dir(follow_symlinks=False):
                pending.append(entry.path)


def match_deb(entry: os.DirEntry, packages: Sequence[str]) -> tuple[str, int] | None:
    """Match a walked entry against a list of wanted package names.

    Args:
        entry: An entry produced by :func:`walk_debs`
        packages: Wanted package names

    Returns:
        ``(path, index)`` where ``index`` is the position of the entry's
        package name in ``packages``, or None for directories, non-text
        names and packages that are not wanted

    Raises:
        MalformedNameError: if the file name lacks a ``_`` separator
    """
    if entry.is_dir():
        return None
    if not is_text_name(entry.name):
        return None

    package = package_name_of(entry.name)
    try:
        position = packages.index(package)
    except ValueError:
        return None
    return entry.path, position


def index_debs(root: Path | str, packages: Sequence[str]) -> dict[str, str]:
    """Map each wanted package name to the first ``.deb`` found for it.

    Traversal order is whatever the filesystem returns, so when a package
    has more than one file the winner is not stable across filesystems.
    """
    found: dict[str, str] = {}
    for entry in walk_debs(root):
        match = match_deb(entry, packages)
        if match is None:
            continue
        path, position = match
        found.setdefault(packages[position], path)

    missing = [p for p in packages if p not in found]
    if missing:
        logger.debug(f"No .deb found under {root} for: {', '.join(missing)}")
    return found
