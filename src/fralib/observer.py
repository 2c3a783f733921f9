"""
Change notification between market data and the objects priced off it.

An Observable (curve, index, evaluation date) keeps weak references to its
Observers, so subscribing never keeps an instrument alive. When the
observable changes it calls update() on every live observer; what the
observer does with that is its own business (usually: mark itself dirty
and pass the news on).
"""

from abc import ABC, abstractmethod
from typing import Optional, Set
import logging
import weakref

logger = logging.getLogger(__name__)


class Observable:
    """Subject holding non-owning references to its observers."""

    def __init__(self):
        super().__init__()
        self._observers: "weakref.WeakSet[Observer]" = weakref.WeakSet()

    def register_observer(self, observer: "Observer") -> None:
        self._observers.add(observer)

    def unregister_observer(self, observer: "Observer") -> None:
        self._observers.discard(observer)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def notify_observers(self) -> None:
        """Call update() on every observer alive at the time of the call."""
        # Snapshot: observers may (un)register while being notified
        observers = list(self._observers)
        logger.debug("%r notifying %d observer(s)", self, len(observers))
        for observer in observers:
            observer.update()


class Observer(ABC):
    """Dependent that is told when any registered observable changes."""

    def __init__(self):
        super().__init__()
        self._observables: Set[Observable] = set()

    def register_with(self, observable: Optional[Observable]) -> bool:
        """
        Subscribe to an observable.

        Returns:
            True if a new link was made, False if already linked or None
        """
        if observable is None or observable in self._observables:
            return False
        observable.register_observer(self)
        self._observables.add(observable)
        return True

    def unregister_with(self, observable: Optional[Observable]) -> None:
        if observable is None or observable not in self._observables:
            return
        observable.unregister_observer(self)
        self._observables.discard(observable)

    def unregister_with_all(self) -> None:
        for observable in list(self._observables):
            observable.unregister_observer(self)
        self._observables.clear()

    @property
    def observables(self) -> Set[Observable]:
        return set(self._observables)

    @abstractmethod
    def update(self) -> None:
        """React to a change in one of the registered observables."""


__all__ = ["Observable", "Observer"]
