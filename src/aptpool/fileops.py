"""File helpers used around pool placement: hashing, extraction, mirroring."""

import hashlib
import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import BinaryIO

from aptpool.constants import HASH_ALGORITHM, HASH_BUFFER_SIZE, TAR_SUFFIXES, ZIP_SUFFIX
from aptpool.errors import ExternalToolError

logger = logging.getLogger(__name__)


def run_tool(tool: str, *args: str | os.PathLike) -> None:
    """Run an external command and wait for it to exit.

    Output goes straight to the parent's stdout/stderr. There is no timeout.

    Raises:
        ExternalToolError: if the command exits with a non-zero status
        OSError: if the command cannot be started
    """
    argv = [tool, *(os.fspath(arg) for arg in args)]
    logger.debug(f"Running: {' '.join(argv)}")
    result = subprocess.run(argv, check=False)
    if result.returncode != 0:
        raise ExternalToolError(tool, result.returncode)


def stream_digest(stream: BinaryIO, algorithm: str = HASH_ALGORITHM) -> str:
    hasher = hashlib.new(algorithm)
    while chunk := stream.read(HASH_BUFFER_SIZE):
        hasher.update(chunk)
    return hasher.hexdigest()


def file_digest(path: Path | str, algorithm: str = HASH_ALGORITHM) -> str:
    """Hash a file's contents in fixed-size chunks.

    Args:
        path: File to hash
        algorithm: Any name accepted by :func:`hashlib.new`

    Returns:
        Lowercase hexadecimal digest
    """
    with open(path, "rb") as f:
        digest = stream_digest(f, algorithm)
    logger.debug(f"{algorithm}({path}) = {digest}")
    return digest


def md5_digest(path: Path | str) -> str:
    return file_digest(path, "md5")


def unlink(path: Path | str) -> None:
    """Remove a single link (typically a symlink) without following it."""
    os.unlink(path)


def _recreate_dir(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)


def extract(archive: Path, dest: Path) -> None:
    """Extract a .zip, .tar.gz or .tar.xz archive into ``dest``.

    ``dest`` is removed and recreated first, so extracting twice leaves the
    same result as extracting once.

    Raises:
        NotImplementedError: for any other archive type
        ExternalToolError: if unzip/tar fails
    """
    archive, dest = Path(archive), Path(dest)
    name = archive.name
    if name.endswith(ZIP_SUFFIX):
        unzip(archive, dest)
    elif name.endswith(TAR_SUFFIXES):
        untar(archive, dest)
    else:
        raise NotImplementedError(f"Unsupported archive type: {name}")


def unzip(archive: Path, dest: Path) -> None:
    dest = Path(dest)
    _recreate_dir(dest)
    logger.info(f"extracting {archive} to {dest}")
    run_tool("unzip", archive, "-d", dest)


def untar(archive: Path, dest: Path) -> None:
    """Extract a tarball, dropping its single top-level directory."""
    dest = Path(dest)
    _recreate_dir(dest)
    logger.info(f"extracting {archive} to {dest}")
    run_tool("tar", "-xvf", archive, "-C", dest, "--strip-components", "1")


def _is_remote(target: str) -> bool:
    # rsync treats "host:path" as remote when the colon precedes any slash
    head, sep, _ = target.partition(":")
    return bool(sep) and "/" not in head


def mirror(src: Path, dst: Path | str) -> None:
    """Synchronize ``src`` to ``dst`` with rsync.

    rsync creates ``dst`` itself but not its missing parents, so those are
    created here for local targets. ``src`` must already exist.
    """
    src = Path(src)
    logger.info(f"rsyncing {src} to {dst}")
    if not _is_remote(os.fspath(dst)):
        Path(dst).parent.mkdir(parents=True, exist_ok=True)
    run_tool("rsync", "-avz", src, dst)


def read_to_string(path: Path | str) -> str:
    return Path(path).read_text(encoding="utf-8")


def read_bytes(path: Path | str) -> bytes:
    return Path(path).read_bytes()


def write(path: Path | str, contents: str | bytes) -> None:
    """Write ``contents`` to ``path``, replacing any existing file."""
    if isinstance(contents, str):
        contents = contents.encode("utf-8")
    Path(path).write_bytes(contents)
