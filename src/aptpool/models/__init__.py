"""Expose pool models."""

from .package import ParsedName
from .pool import PlaceAction, PoolDestination

__all__ = [
    "ParsedName",
    "PlaceAction",
    "PoolDestination",
]
