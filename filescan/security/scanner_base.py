"""Scanner strategy interface and the base class for process-backed scanners.

ScannerBase implements the template method pattern: subclasses provide
tool_name, build_command() and parse_output(), while scan() handles the
subprocess lifecycle.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional, Union

from .models import ProcessOutput, ScanVerdict, validate_file_path
from .process_invoker import ProcessInvoker

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ScannerStrategy(ABC):
    """Anything that can say whether a file is infected.

    scan() returns a ScanVerdict or raises a ScanError. Implementations hold
    configuration only, never per-path state, so one instance can serve any
    number of paths and threads.
    """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def scan(self, path: Path) -> ScanVerdict:
        """Scan one file."""

    def __call__(self, path: PathLike) -> ScanVerdict:
        return self.scan(validate_file_path(path))

    def __repr__(self) -> str:
        return f"<{self.name}>"


class FunctionStrategy(ScannerStrategy):
    """Adapts a plain ``path -> ScanVerdict`` callable."""

    def __init__(self, func: Callable[[Path], ScanVerdict], name: Optional[str] = None):
        self.func = func
        self._name = name or getattr(func, "__name__", "function")

    @property
    def name(self) -> str:
        return self._name

    def scan(self, path: Path) -> ScanVerdict:
        return self.func(path)


class ScannerBase(ScannerStrategy):
    """Abstract base for scanners that drive an external tool.

    Subclasses must implement:
      - tool_name: str property identifying the tool
      - build_command(path) -> list of CLI arguments
      - parse_output(output, path) -> ScanVerdict
    """

    def __init__(self, invoker: Optional[ProcessInvoker] = None):
        self.invoker = invoker or ProcessInvoker()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def name(self) -> str:
        return self.tool_name

    @property
    @abstractmethod
    def tool_name(self) -> str:
        """The tool name (e.g. 'clamscan')."""

    @abstractmethod
    def build_command(self, path: Path) -> List[str]:
        """Build the CLI command as a list of strings.

        Returns:
            Argument vector suitable for subprocess without a shell.
        """

    @abstractmethod
    def parse_output(self, output: ProcessOutput, path: Path) -> ScanVerdict:
        """Turn captured process output into a verdict.

        Raises:
            ScanError: the output shows the tool failed or is unreadable.
        """

    def scan(self, path: Path) -> ScanVerdict:
        """Execute the scan. This is the template method.

        1. Build command
        2. Execute subprocess with timeout
        3. Parse output into a verdict
        """
        cmd = self.build_command(path)
        self.logger.info(f"Running {self.tool_name} on {path}")

        output = self.invoker.run(cmd)
        verdict = self.parse_output(output, path)

        if verdict.infected:
            self.logger.warning(
                f"{self.tool_name}: {path} infected ({verdict.signature or 'unknown'})"
            )
        else:
            self.logger.info(
                f"{self.tool_name}: {path} clean, exit code {output.return_code}"
            )
        return verdict
