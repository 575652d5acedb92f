"""Pydantic v2 models for the file scanning subsystem."""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class Verdict(str, Enum):
    CLEAN = "clean"
    INFECTED = "infected"


class ScanStatus(str, Enum):
    """Lifecycle of a single ScanOrchestrator."""

    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    CLEAN = "clean"
    INFECTED = "infected"
    FAILED = "failed"


def validate_file_path(value: Union[str, Path]) -> Path:
    """Validate a path reference without touching the filesystem.

    Rejects empty values and embedded NUL bytes, which no OS accepts in a
    path and which would truncate the argument handed to the scanner.
    """
    if isinstance(value, Path):
        text = str(value)
    elif isinstance(value, str):
        text = value
    else:
        raise TypeError(f"Expected str or Path, got {type(value).__name__}")

    if not text or not text.strip():
        raise ValueError("File path must not be empty")
    if "\x00" in text:
        raise ValueError("File path must not contain NUL bytes")
    return Path(text)


class ToolInfo(BaseModel):
    """Metadata and resolved location for an external scanning tool."""

    name: str
    display_name: str
    exe_name: str
    path: Optional[Path] = None
    expected_hash: Optional[str] = None
    installed: bool = False



class ScannerSettings(BaseModel):
    """Configuration for the process-backed scanner."""

    tool_name: str = "clamscan"
    executable: Optional[str] = None  # explicit binary; otherwise resolved by name
    flags: List[str] = Field(default_factory=lambda: ["--no-summary"])
    timeout: float = Field(default=300.0, gt=0)
    benign_prefixes: List[str] = Field(default_factory=lambda: ["LibClamAV Warning:"])
    success_marker: str = "OK"
    tools_dir: str = "./tools"
    verify_integrity: bool = False
    enabled: bool = True

    @field_validator("flags", "benign_prefixes", mode="before")
    @classmethod
    def _split_string(cls, value):
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


class ProcessOutput(BaseModel):
    """Everything captured from one external tool invocation."""

    argv: List[str] = Field(default_factory=list)
    return_code: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    duration_seconds: Optional[float] = None


class ScanVerdict(BaseModel):
    """Binary outcome of scanning one file.

    ``output`` and ``signature`` are diagnostic payload only; callers should
    base decisions on ``verdict`` / ``infected``.
    """

    verdict: Verdict
    path: Path
    signature: Optional[str] = None
    tool_name: Optional[str] = None
    output: Optional[ProcessOutput] = None

    @property
    def infected(self) -> bool:
        return self.verdict == Verdict.INFECTED

    @classmethod
    def clean(cls, path: Union[str, Path], **kwargs) -> "ScanVerdict":
        return cls(verdict=Verdict.CLEAN, path=Path(path), **kwargs)

    @classmethod
    def infected_with(
        cls,
        path: Union[str, Path],
        signature: Optional[str] = None,
        **kwargs,
    ) -> "ScanVerdict":
        return cls(
            verdict=Verdict.INFECTED, path=Path(path), signature=signature, **kwargs
        )
