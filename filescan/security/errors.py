"""Exception taxonomy for scan failures.

Every failure of a scan attempt is a ScanError. None of them mean "clean":
callers that want a fail-safe default must choose it explicitly.
"""

from pathlib import Path
from typing import Optional, Union


class ScanError(Exception):
    """Base class for all scan failures."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None


class ToolLaunchError(ScanError):
    """The external scanner binary could not be started."""


class ToolExecutionError(ScanError):
    """The scanner ran but wrote non-benign diagnostics to stderr."""

    def __init__(
        self,
        message: str,
        stderr: str = "",
        path: Optional[Union[str, Path]] = None,
    ):
        super().__init__(message, path)
        self.stderr = stderr


class ParseError(ScanError):
    """Scanner stdout did not contain a usable summary line."""

    def __init__(
        self,
        message: str,
        stdout: str = "",
        path: Optional[Union[str, Path]] = None,
    ):
        super().__init__(message, path)
        self.stdout = stdout


class ToolTimeoutError(ScanError):
    """The scanner exceeded its time budget and was killed."""

    def __init__(
        self,
        message: str,
        timeout: Optional[float] = None,
        path: Optional[Union[str, Path]] = None,
    ):
        super().__init__(message, path)
        self.timeout = timeout
