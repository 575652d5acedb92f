"""ClamAV scanner: signature-based antivirus scanning via clamscan.

The verdict comes from output content, not the exit code: clamscan exits
with 1 when it finds malware, which is a successful scan.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from ..command_builder import CommandBuilder
from ..models import ProcessOutput, ScannerSettings, ScanVerdict
from ..process_invoker import DEFAULT_TIMEOUT, ProcessInvoker
from ..result_parser import OutputClassifier
from ..scanner_base import ScannerBase
from ..tool_manager import ToolManager

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "clamscan"
DEFAULT_FLAGS = ("--no-summary",)


class ClamScanStrategy(ScannerBase):
    """ClamAV antivirus scanner using the clamscan CLI."""

    @property
    def tool_name(self) -> str:
        return self._tool_name

    def __init__(
        self,
        executable: str = DEFAULT_EXECUTABLE,
        flags: Iterable[str] = DEFAULT_FLAGS,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        classifier: Optional[OutputClassifier] = None,
        invoker: Optional[ProcessInvoker] = None,
        tool_name: str = "clamscan",
    ):
        super().__init__(invoker or ProcessInvoker(timeout=timeout))
        self._tool_name = tool_name
        self.builder = CommandBuilder(executable, flags)
        self.classifier = classifier or OutputClassifier()

    @classmethod
    def from_config(
        cls,
        settings: ScannerSettings,
        tool_manager: Optional[ToolManager] = None,
    ) -> "ClamScanStrategy":
        """Build a strategy from settings, resolving the binary if a ToolManager is given.

        Raises:
            ToolLaunchError: the tool cannot be located or fails verification.
        """
        executable = settings.executable
        if executable is None and tool_manager is not None:
            executable = tool_manager.executable_for(
                settings.tool_name, verify=settings.verify_integrity
            )

        return cls(
            executable=executable or settings.tool_name,
            flags=settings.flags,
            timeout=settings.timeout,
            classifier=OutputClassifier(
                benign_prefixes=settings.benign_prefixes,
                success_marker=settings.success_marker,
            ),
            tool_name=settings.tool_name,
        )

    def build_command(self, path: Path) -> List[str]:
        return self.builder.build(path)

    def parse_output(self, output: ProcessOutput, path: Path) -> ScanVerdict:
        return self.classifier.classify(output, path, tool_name=self.tool_name)

    def __repr__(self) -> str:
        return f"<ClamScanStrategy {self.builder.executable!r} flags={self.builder.flags!r}>"
