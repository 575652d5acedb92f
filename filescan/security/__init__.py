"""File scanning subsystem for filescan.

Answers "is this file infected?" through a replaceable ScannerStrategy.
The default strategy drives ClamAV's clamscan in a subprocess and
classifies its stdout/stderr into a verdict.
"""

from .models import (
    ToolInfo,
    ScannerSettings,
    ProcessOutput,
    Verdict,
    ScanVerdict,
    ScanStatus,
    validate_file_path,
)
from .errors import (
    ScanError,
    ToolLaunchError,
    ToolExecutionError,
    ParseError,
    ToolTimeoutError,
)
from .command_builder import CommandBuilder
from .process_invoker import ProcessInvoker
from .result_parser import OutputClassifier
from .scanner_base import ScannerStrategy, ScannerBase, FunctionStrategy
from .scanners.clamav import ClamScanStrategy
from .tool_manager import ToolManager
from .registry import (
    DefaultStrategyRegistry,
    LazyStrategy,
    OverrideStrategy,
    KillSwitchStrategy,
    default_registry,
    get_default,
    set_default,
    install_override,
)
from .orchestrator import ScanOrchestrator

__all__ = [
    "ToolInfo",
    "ScannerSettings",
    "ProcessOutput",
    "Verdict",
    "ScanVerdict",
    "ScanStatus",
    "validate_file_path",
    "ScanError",
    "ToolLaunchError",
    "ToolExecutionError",
    "ParseError",
    "ToolTimeoutError",
    "CommandBuilder",
    "ProcessInvoker",
    "OutputClassifier",
    "ScannerStrategy",
    "ScannerBase",
    "FunctionStrategy",
    "ClamScanStrategy",
    "ToolManager",
    "DefaultStrategyRegistry",
    "LazyStrategy",
    "OverrideStrategy",
    "KillSwitchStrategy",
    "default_registry",
    "get_default",
    "set_default",
    "install_override",
    "ScanOrchestrator",
]
