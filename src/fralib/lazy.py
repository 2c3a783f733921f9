"""
Lazy recomputation driven by change notifications.

A LazyObject caches the results of perform_calculations() and only throws
them away when one of the observables it registered with changes. The
recomputation itself waits until somebody asks for a result.
"""

from abc import abstractmethod
from enum import Enum
import logging

from .observer import Observable, Observer

logger = logging.getLogger(__name__)


class CacheState(Enum):
    """Validity of a lazy object's cached results."""
    DIRTY = "Dirty"
    CLEAN = "Clean"
    EXPIRED = "Expired"  # instruments only: results set by the expired path


class LazyObject(Observer, Observable):
    """
    Observer whose derived state is recomputed on demand.

    State transitions:
        construction          -> DIRTY
        notification          -> DIRTY (observers told if results existed)
        calculate() on DIRTY  -> perform_calculations() -> CLEAN
        calculate() otherwise -> no-op
    """

    def __init__(self):
        super().__init__()
        self._state = CacheState.DIRTY
        self._updating = False
        self.calculation_count = 0

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def is_calculated(self) -> bool:
        return self._state is not CacheState.DIRTY

    def update(self) -> None:
        # Guards against notification cycles between lazy objects
        if self._updating:
            return
        self._updating = True
        try:
            if self._state is not CacheState.DIRTY:
                logger.debug("%s invalidated (was %s)", type(self).__name__, self._state.value)
                self._state = CacheState.DIRTY
                self.notify_observers()
        finally:
            self._updating = False

    def calculate(self) -> None:
        if self._state is CacheState.DIRTY:
            self._run(self.perform_calculations, CacheState.CLEAN)

    def recalculate(self) -> None:
        """Recompute now, even if the cached results are still valid."""
        self._state = CacheState.DIRTY
        try:
            self.calculate()
        finally:
            self.notify_observers()

    def _run(self, step, target: CacheState) -> None:
        # The state is set first so re-entrant queries made by step see it;
        # a failing step leaves the object dirty.
        self._state = target
        try:
            step()
        except Exception:
            self._state = CacheState.DIRTY
            raise
        self.calculation_count += 1
        logger.debug("%s recomputed -> %s", type(self).__name__, target.value)

    @abstractmethod
    def perform_calculations(self) -> None:
        """Fill the cached results from the current market data."""


__all__ = ["CacheState", "LazyObject"]
