"""Process-wide default scanner strategy with override chaining.

Replacing the default is a total replace. To add behavior on top of the
current default (a kill switch, auditing, ...) subclass OverrideStrategy,
which takes the captured previous default as a required argument, and
install it with install_override() so the capture and the swap happen
under one lock:

    registry.install_override(lambda previous: KillSwitchStrategy(previous, is_enabled))
"""

import logging
import threading
from pathlib import Path
from typing import Callable, Optional

from .models import ScanVerdict
from .scanner_base import ScannerStrategy
from .scanners.clamav import ClamScanStrategy

logger = logging.getLogger(__name__)

StrategyFactory = Callable[[], ScannerStrategy]
OverrideFactory = Callable[[ScannerStrategy], ScannerStrategy]


class DefaultStrategyRegistry:
    """Holds exactly one current default ScannerStrategy.

    All reads and writes go through one lock, so a reader never sees a
    half-installed value and concurrent overrides never drop each other.
    """

    def __init__(self, factory: Optional[StrategyFactory] = None):
        self._factory = factory or ClamScanStrategy
        self._strategy: Optional[ScannerStrategy] = None
        self._lock = threading.RLock()

    def get_default(self) -> ScannerStrategy:
        """Return the current default, building the baseline on first access."""
        with self._lock:
            if self._strategy is None:
                self._strategy = self._factory()
                logger.debug(f"Initialized default scanner strategy: {self._strategy!r}")
            return self._strategy

    def set_default(self, strategy: ScannerStrategy) -> None:
        """Replace the current default. The previous value is discarded."""
        if not isinstance(strategy, ScannerStrategy):
            raise TypeError(
                f"Expected a ScannerStrategy, got {type(strategy).__name__}"
            )
        with self._lock:
            previous = self._strategy
            self._strategy = strategy
        logger.info(f"Default scanner strategy set to {strategy!r} (was {previous!r})")

    def install_override(self, factory: OverrideFactory) -> ScannerStrategy:
        """Wrap the current default: ``factory(previous)`` becomes the new default."""
        with self._lock:
            previous = self.get_default()
            strategy = factory(previous)
            self.set_default(strategy)
            return strategy

    def reset(self) -> None:
        """Forget the current default; the next read rebuilds the baseline."""
        with self._lock:
            self._strategy = None


class LazyStrategy(ScannerStrategy):
    """Builds the real strategy on first scan instead of at install time.

    Lets an override sit on top of a baseline that may never be needed,
    such as a clamscan that is not installed while scanning is switched
    off. A factory that raises caches nothing; the next scan retries.
    """

    def __init__(self, factory: StrategyFactory, name: Optional[str] = None):
        self.factory = factory
        self._name = name
        self._strategy: Optional[ScannerStrategy] = None
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name or super().name

    def resolve(self) -> ScannerStrategy:
        with self._lock:
            if self._strategy is None:
                self._strategy = self.factory()
                logger.debug(f"Built deferred scanner strategy: {self._strategy!r}")
            return self._strategy

    def scan(self, path: Path) -> ScanVerdict:
        return self.resolve().scan(path)


class OverrideStrategy(ScannerStrategy):
    """Base for strategies layered over a previously installed default."""

    def __init__(self, previous: ScannerStrategy):
        if not isinstance(previous, ScannerStrategy):
            raise TypeError(
                f"previous must be a ScannerStrategy, got {type(previous).__name__}"
            )
        self.previous = previous

    def scan(self, path: Path) -> ScanVerdict:
        return self.previous.scan(path)

    def __repr__(self) -> str:
        return f"<{self.name} over {self.previous!r}>"


class KillSwitchStrategy(OverrideStrategy):
    """Reports every file clean while ``enabled()`` is false."""

    def __init__(self, previous: ScannerStrategy, enabled: Callable[[], bool]):
        super().__init__(previous)
        self.enabled = enabled

    def scan(self, path: Path) -> ScanVerdict:
        if not self.enabled():
            logger.debug(f"Scanning disabled, reporting {path} clean")
            return ScanVerdict.clean(path, tool_name=self.name)
        return self.previous.scan(path)


default_registry = DefaultStrategyRegistry()


def get_default() -> ScannerStrategy:
    return default_registry.get_default()


def set_default(strategy: ScannerStrategy) -> None:
    default_registry.set_default(strategy)


def install_override(factory: OverrideFactory) -> ScannerStrategy:
    return default_registry.install_override(factory)
