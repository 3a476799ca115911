"""aptpool: place Debian package artifacts into an APT pool tree."""

import logging
from pathlib import Path
from typing import NoReturn

import typer

from .constants import HASH_ALGORITHM, REPO_ROOT
from .errors import AptPoolError
from .fileops import extract as extract_archive
from .fileops import file_digest, mirror as mirror_tree
from .fileops import unlink as unlink_path
from .locator import index_debs
from .models import PlaceAction
from .pool import place_in_pool

logger = logging.getLogger(__name__)

cli = typer.Typer(no_args_is_help=True)


def _fail(e: Exception) -> NoReturn:
    logger.error(str(e))
    raise typer.Exit(code=1)


@cli.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Maintain the pool layout of a Debian package archive."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
def place(
    source_dir: Path = typer.Argument(..., exists=True, file_okay=False, help="Directory of built artifacts"),
    archive: str = typer.Argument(..., help="Archive name, e.g. jammy"),
    copy: bool = typer.Option(False, "--copy", help="Copy files instead of moving them"),
    root: Path = typer.Option(REPO_ROOT, help="Repository root holding the pool/ tree"),
):
    """Move (or copy) every artifact in SOURCE_DIR into the pool."""
    action = PlaceAction.COPY if copy else PlaceAction.MOVE
    try:
        placed = place_in_pool(source_dir, archive, action, root)
    except (AptPoolError, OSError) as e:
        _fail(e)
    for path in placed:
        typer.echo(str(path))


@cli.command()
def find(
    root: Path = typer.Argument(..., exists=True, help="Tree or .deb file to search"),
    packages: list[str] = typer.Argument(..., help="Package names to look for"),
):
    """Print the first .deb found for each PACKAGE, in the order given."""
    try:
        found = index_debs(root, packages)
    except (AptPoolError, OSError) as e:
        _fail(e)
    for package in packages:
        if package in found:
            typer.echo(f"{package}\t{found[package]}")
    if len(found) != len(set(packages)):
        raise typer.Exit(code=1)


@cli.command()
def digest(
    file: Path = typer.Argument(..., exists=True, dir_okay=False),
    algorithm: str = typer.Option(HASH_ALGORITHM, "--algorithm", "-a", help="hashlib algorithm name"),
):
    """Print the content digest of FILE."""
    try:
        value = file_digest(file, algorithm)
    except (ValueError, OSError) as e:
        _fail(e)
    typer.echo(f"{value}  {file}")


@cli.command()
def extract(
    archive: Path = typer.Argument(..., exists=True, dir_okay=False),
    dest: Path = typer.Argument(..., help="Destination directory; replaced if it exists"),
):
    """Extract a .zip, .tar.gz or .tar.xz archive into DEST."""
    try:
        extract_archive(archive, dest)
    except (AptPoolError, NotImplementedError, OSError) as e:
        _fail(e)


@cli.command()
def mirror(src: Path, dst: str):
    """Mirror SRC to DST with rsync (DST may be a remote rsync target)."""
    try:
        mirror_tree(src, dst)
    except (AptPoolError, OSError) as e:
        _fail(e)


@cli.command()
def unlink(path: Path):
    """Remove a single link without following it."""
    try:
        unlink_path(path)
    except OSError as e:
        _fail(e)


def main() -> None:
    """Main entry point for the aptpool CLI."""
    cli()


if __name__ == "__main__":
    main()
