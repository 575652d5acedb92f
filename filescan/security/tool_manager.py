"""Locates scanner binaries and checks them against a pinned hash."""

import hashlib
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from .errors import ToolLaunchError
from .models import ToolInfo

logger = logging.getLogger(__name__)

DISPLAY_NAMES = {
    "clamscan": "ClamAV clamscan",
    "clamdscan": "ClamAV clamdscan",
}


class ToolManager:
    """Finds the executable behind a scanner tool name.

    Lookup order:
    1. Explicit path from config (tools.<name>.path)
    2. <tools_dir>/<name>/, searched recursively
    3. <tools_dir>/ itself (flat layout)
    4. System PATH
    """

    def __init__(
        self,
        tools_dir: str = "./tools",
        tools: Optional[Dict[str, Dict[str, Any]]] = None,
    ):
        self.tools_dir = Path(tools_dir).resolve()
        self.tools = tools or {}

    def describe(self, name: str) -> ToolInfo:
        """Static description of a tool, with config overrides applied."""
        fields: Dict[str, Any] = {
            "name": name,
            "display_name": DISPLAY_NAMES.get(name, name),
            "exe_name": name,
        }
        fields.update(
            {key: value for key, value in self.tools.get(name, {}).items() if value is not None}
        )
        return ToolInfo(**fields)

    def _candidates(self, tool: ToolInfo) -> Iterator[Path]:
        if tool.path:
            yield tool.path
        tool_dir = self.tools_dir / tool.name
        yield tool_dir / tool.exe_name
        if tool_dir.is_dir():
            yield from sorted(tool_dir.rglob(tool.exe_name))
        yield self.tools_dir / tool.exe_name

    def locate(self, name: str) -> ToolInfo:
        """Resolve a tool. ``installed`` tells whether anything was found."""
        tool = self.describe(name)
        found = next((c for c in self._candidates(tool) if c.is_file()), None)
        if found is None:
            on_path = shutil.which(tool.exe_name)
            found = Path(on_path) if on_path else None

        if found is None:
            logger.debug(f"{tool.display_name}: not found under {self.tools_dir} or on PATH")
            tool.path = None
            tool.installed = False
        else:
            tool.path = found.resolve()
            tool.installed = True
            logger.debug(f"{tool.display_name}: found at {tool.path}")
        return tool

    def verify(self, tool: ToolInfo) -> bool:
        """Compare the located binary with its expected sha256, if one is pinned."""
        if not tool.installed or tool.path is None:
            return False
        if not tool.expected_hash:
            logger.debug(f"{tool.display_name}: no expected hash configured")
            return True

        actual = file_sha256(tool.path)
        if actual != tool.expected_hash.lower():
            logger.warning(
                f"{tool.display_name} hash mismatch: "
                f"expected {tool.expected_hash}, got {actual}"
            )
            return False
        return True

    def executable_for(self, name: str, verify: bool = False) -> str:
        """Path of the binary to run for ``name``.

        Raises:
            ToolLaunchError: nothing was found, or ``verify`` is set and the
                binary does not match its pinned hash.
        """
        tool = self.locate(name)
        if not tool.installed:
            raise ToolLaunchError(
                f"{tool.display_name} ({tool.exe_name}) not found. "
                f"Install ClamAV or set tools.{name}.path in config.yaml."
            )
        if verify and not self.verify(tool):
            raise ToolLaunchError(f"{name} at {tool.path} failed integrity verification")
        return str(tool.path)


def file_sha256(path: Path) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(65536):
            digest.update(chunk)
    return digest.hexdigest()
