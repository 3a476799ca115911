import logging

from rich.logging import RichHandler

from .constants import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            rich_tracebacks=True,
        )
    ],
)
