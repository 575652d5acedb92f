"""Argument vector construction for external scanner invocations."""

from pathlib import Path
from typing import Iterable, List, Union

from .models import validate_file_path

# Marks the end of options so a path starting with "-" is never read as a flag.
END_OF_OPTIONS = "--"


class CommandBuilder:
    """Builds ``[executable, *flags, "--", path]`` for a scanner.

    The result is meant for ``subprocess`` without a shell, so the path is a
    single discrete argument whatever characters it contains.
    """

    def __init__(self, executable: Union[str, Path], flags: Iterable[str] = ()):
        self.executable = str(executable)
        self.flags = tuple(flags)
        if not self.executable:
            raise ValueError("Scanner executable must not be empty")

    def build(self, path: Union[str, Path]) -> List[str]:
        file_path = validate_file_path(path)
        return [self.executable, *self.flags, END_OF_OPTIONS, str(file_path)]

    def __repr__(self) -> str:
        return f"CommandBuilder(executable={self.executable!r}, flags={self.flags!r})"
