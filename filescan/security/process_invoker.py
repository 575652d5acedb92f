"""Runs an external tool and captures stdout, stderr and exit status."""

import logging
import subprocess
import time
from typing import List, Optional, Sequence

from .errors import ToolLaunchError, ToolTimeoutError
from .models import ProcessOutput

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300.0


class ProcessInvoker:
    """Blocking subprocess runner with a hard time limit.

    The child gets no stdin pipe; it is attached to ``/dev/null`` so a tool
    that unexpectedly reads input sees EOF instead of hanging.
    """

    def __init__(self, timeout: Optional[float] = DEFAULT_TIMEOUT):
        self.timeout = timeout

    def run(self, argv: Sequence[str], timeout: Optional[float] = None) -> ProcessOutput:
        """Execute argv and wait for it to exit.

        Raises:
            ToolLaunchError: the executable is missing or cannot be started.
            ToolTimeoutError: the process outlived the timeout and was killed.
        """
        cmd: List[str] = [str(arg) for arg in argv]
        if not cmd:
            raise ToolLaunchError("Empty command")
        limit = timeout if timeout is not None else self.timeout

        logger.debug(f"Running: {cmd!r}")
        started = time.monotonic()
        try:
            process = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise ToolLaunchError(f"Scanner not found: {cmd[0]}") from e
        except PermissionError as e:
            raise ToolLaunchError(f"Scanner not executable: {cmd[0]}") from e
        except OSError as e:
            raise ToolLaunchError(f"Failed to launch {cmd[0]}: {e}") from e

        try:
            stdout_bytes, stderr_bytes = process.communicate(timeout=limit)
        except subprocess.TimeoutExpired:
            process.kill()
            process.communicate()
            logger.error(f"{cmd[0]} timed out after {limit}s (PID: {process.pid})")
            raise ToolTimeoutError(
                f"{cmd[0]} timed out after {limit}s", timeout=limit
            ) from None

        duration = time.monotonic() - started
        output = ProcessOutput(
            argv=cmd,
            return_code=process.returncode,
            stdout=stdout_bytes.decode("utf-8", errors="replace"),
            stderr=stderr_bytes.decode("utf-8", errors="replace"),
            duration_seconds=duration,
        )
        logger.debug(
            f"{cmd[0]} exited with code {output.return_code} in {duration:.2f}s"
        )
        return output
