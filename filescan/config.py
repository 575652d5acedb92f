import logging
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from pydantic import ValidationError

from .models import AppConfig

ENV_PREFIX = "FILESCAN_"
SECTIONS = ("scanner",)


class ConfigError(Exception):
    """Configuration file or environment could not be turned into an AppConfig."""


class ConfigManager:
    def __init__(
        self,
        config_path: str = "config.yaml",
        required: bool = False,
        environ: Optional[Dict[str, str]] = None,
    ):
        self.config_path = Path(config_path)
        self.required = required
        self.environ = os.environ if environ is None else environ
        self.config: Optional[AppConfig] = None
        self.load_config()

    def load_config(self) -> AppConfig:
        """Load configuration from file, then apply environment overrides"""
        if self.config_path.exists():
            with open(self.config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}
            if not isinstance(config_data, dict):
                raise ConfigError(f"Top level of {self.config_path} must be a mapping")
        elif self.required:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        else:
            config_data = {}

        config_data = self._merge_env_vars(config_data)

        try:
            self.config = AppConfig(**config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
        return self.config

    def _merge_env_vars(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Merge environment variables with configuration.

        FILESCAN_SCANNER_TIMEOUT=60 sets scanner.timeout; FILESCAN_LOG_LEVEL
        sets log_level. Values stay strings, which pydantic coerces to the
        field type, except YAML flow lists such as ``[a, b]``.
        """
        for key, raw in self.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            config_key = key[len(ENV_PREFIX):].lower()
            value = self._parse_env_value(raw)

            section, _, nested_key = config_key.partition('_')
            if section in SECTIONS and nested_key:
                if not isinstance(config_data.get(section), dict):
                    config_data[section] = {}
                config_data[section][nested_key] = value
            else:
                config_data[config_key] = value

        return config_data

    @staticmethod
    def _parse_env_value(raw: str) -> Any:
        # "LibClamAV Warning:" or "yes" must not turn into a mapping or a bool
        if not raw.lstrip().startswith('['):
            return raw
        try:
            value = yaml.safe_load(raw)
        except yaml.YAMLError:
            return raw
        return value if isinstance(value, list) else raw

    def get_config(self) -> AppConfig:
        """Get current configuration"""
        if self.config is None:
            self.load_config()
        return self.config


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Setup logging configuration"""
    level = getattr(logging, log_level.upper())
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=log_format, handlers=handlers, force=True)
