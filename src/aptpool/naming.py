"""Package artifact filename parsing.

Filenames follow the Debian convention ``<package>_<version>_<arch>.<ext>``
for binaries and ``<package>_<version>.<ext>`` for source artifacts, e.g.::

    hello_2.10-3_amd64.deb
    hello-dbgsym_2.10-3_amd64.deb
    hello_2.10-3.dsc
    hello_2.10.orig.tar.xz
"""

import logging
from pathlib import PurePath

from aptpool.constants import DBGSYM_SUFFIX, SOURCE_SUFFIXES
from aptpool.errors import MalformedNameError
from aptpool.models import ParsedName

logger = logging.getLogger(__name__)

PACKAGE_SEPARATOR = "_"


def package_name_of(filename: str) -> str:
    """Return the package name, i.e. everything before the first ``_``.

    Raises:
        MalformedNameError: if there is no ``_`` or the name before it is empty
    """
    package, sep, _ = filename.partition(PACKAGE_SEPARATOR)
    if not sep:
        raise MalformedNameError(filename)
    if not package:
        raise MalformedNameError(filename, reason="debian package has an empty name")
    return package


def is_text_name(name: str) -> bool:
    """Check that a filesystem name survives a round trip through UTF-8.

    Undecodable bytes in POSIX filenames come back from the OS as lone
    surrogates, which refuse to encode.
    """
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def strip_dbgsym(package: str) -> str:
    if package.endswith(DBGSYM_SUFFIX):
        return package[: -len(DBGSYM_SUFFIX)]
    return package


def file_stem(name: str) -> str:
    """Return ``name`` without its final dot-extension.

    A trailing dot counts as an empty extension; a leading dot does not start
    one, so ``.hidden`` is its own stem.
    """
    before, _, _ = name.rpartition(".")
    return before if before else name


def parse_package_filename(filename: str) -> ParsedName:
    """Parse a package artifact filename.

    Args:
        filename: The artifact filename. Leading directories are ignored.

    Returns:
        The parsed name. ``arch`` is only set for binary artifacts.

    Raises:
        MalformedNameError: if the filename lacks a ``_`` separator
    """
    name = PurePath(filename).name
    package = package_name_of(name)
    stem = file_stem(name)
    is_source = name.endswith(SOURCE_SUFFIXES)

    display_package = strip_dbgsym(package)
    if not display_package:
        raise MalformedNameError(name, reason="debian package has an empty name")

    arch = None
    if not is_source:
        arch = stem.rpartition(PACKAGE_SEPARATOR)[2]

    parsed = ParsedName(
        filename=name,
        package=package,
        display_package=display_package,
        stem=stem,
        is_source=is_source,
        arch=arch,
    )
    logger.debug(f"Parsed {name}: {parsed}")
    return parsed
