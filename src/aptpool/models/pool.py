"""Models for pool destinations and placement policies."""

import os
import shutil
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

PlaceFn = Callable[[Path, Path], None]


class PoolDestination(BaseModel):
    """Where a single artifact lands inside the pool tree."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    filename: str

    @property
    def path(self) -> Path:
        return self.directory / self.filename


def _move(src: Path, dst: Path) -> None:
    os.rename(src, dst)


def _copy(src: Path, dst: Path) -> None:
    shutil.copy2(src, dst)


class PlaceAction(str, Enum):
    """How files are put into the pool.
    MOVE: rename into place; fails across filesystems.
    COPY: duplicate into place, leaving the original.
    """

    MOVE = "move"
    COPY = "copy"

    def __call__(self, src: Path, dst: Path) -> None:
        _ACTIONS[self](src, dst)


_ACTIONS: dict[PlaceAction, PlaceFn] = {
    PlaceAction.MOVE: _move,
    PlaceAction.COPY: _copy,
}
