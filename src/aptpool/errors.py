"""Exceptions raised by aptpool."""


class AptPoolError(Exception):
    """Base class for aptpool errors."""


class MalformedNameError(AptPoolError, ValueError):
    """A package filename does not follow ``<name>_<version>_<arch>.<ext>``."""

    def __init__(self, filename: str, reason: str = "debian package lacks _ character"):
        super().__init__(f"{reason}: {filename!r}")
        self.filename = filename
        self.reason = reason


class ExternalToolError(AptPoolError, RuntimeError):
    """An external command (rsync, tar, unzip) exited with a non-zero status."""

    def __init__(self, tool: str, returncode: int):
        super().__init__(f"{tool} command failed")
        self.tool = tool
        self.returncode = returncode
