from .security import (
    ScanOrchestrator,
    ScannerStrategy,
    ScanVerdict,
    Verdict,
    ScanError,
    DefaultStrategyRegistry,
    KillSwitchStrategy,
    ClamScanStrategy,
    get_default,
    set_default,
    install_override,
)
from .config import ConfigManager
from .models import AppConfig

__version__ = "1.0.0"
__all__ = [
    "ScanOrchestrator",
    "ScannerStrategy",
    "ScanVerdict",
    "Verdict",
    "ScanError",
    "DefaultStrategyRegistry",
    "KillSwitchStrategy",
    "ClamScanStrategy",
    "get_default",
    "set_default",
    "install_override",
    "ConfigManager",
    "AppConfig",
]
