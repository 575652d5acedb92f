"""Caller-facing entry point: is this file infected?"""

import logging
import threading
from pathlib import Path
from typing import Optional, Union

from .models import ScanStatus, ScanVerdict, validate_file_path
from .registry import DefaultStrategyRegistry, default_registry
from .scanner_base import ScannerStrategy

logger = logging.getLogger(__name__)


class ScanOrchestrator:
    """Binds one path to a strategy and scans it at most once.

    The strategy is the explicit one when given, otherwise whatever the
    registry holds at the moment of the first query. The verdict, or the
    ScanError, is memoized on this instance; other orchestrators for the
    same path scan independently.
    """

    def __init__(
        self,
        path: Union[str, Path],
        strategy: Optional[ScannerStrategy] = None,
        registry: Optional[DefaultStrategyRegistry] = None,
    ):
        self.path = validate_file_path(path)
        self.strategy = strategy
        self.registry = registry or default_registry
        self._status = ScanStatus.UNRESOLVED
        self._verdict: Optional[ScanVerdict] = None
        self._error: Optional[Exception] = None
        self._lock = threading.Lock()

    @property
    def status(self) -> ScanStatus:
        return self._status

    def _resolve_strategy(self) -> ScannerStrategy:
        if self.strategy is not None:
            return self.strategy
        return self.registry.get_default()

    def verdict(self) -> ScanVerdict:
        """Return the memoized verdict, scanning on first call.

        Raises:
            ScanError: the scan failed; the same error is raised on every call.
            Exception: a broken strategy raised or returned something other
                than a ScanVerdict; memoized the same way.
        """
        with self._lock:
            if self._status == ScanStatus.UNRESOLVED:
                self._status = ScanStatus.RESOLVING
                try:
                    strategy = self._resolve_strategy()
                    logger.debug(f"Scanning {self.path} with {strategy!r}")
                    result = strategy.scan(self.path)
                    if not isinstance(result, ScanVerdict):
                        raise TypeError(
                            f"{strategy!r} returned {type(result).__name__}, "
                            f"expected ScanVerdict"
                        )
                    self._verdict = result
                except Exception as e:
                    self._error = e
                    self._status = ScanStatus.FAILED
                    logger.debug(f"Scan of {self.path} failed: {e!r}")
                except BaseException:
                    # interrupted before a result; a later call may retry
                    self._status = ScanStatus.UNRESOLVED
                    raise
                else:
                    self._status = (
                        ScanStatus.INFECTED if self._verdict.infected else ScanStatus.CLEAN
                    )

            if self._error is not None:
                raise self._error
            return self._verdict


    def is_infected(self) -> bool:
        return self.verdict().infected

    def __repr__(self) -> str:
        return f"<ScanOrchestrator {str(self.path)!r} {self._status.value}>"
