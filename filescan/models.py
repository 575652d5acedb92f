from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .security.models import ScannerSettings


class AppConfig(BaseModel):
    log_level: str = "INFO"
    log_file: Optional[str] = None
    scanner: ScannerSettings = Field(default_factory=ScannerSettings)
    tools: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level
