"""
Handles: shared, relinkable references to term structures.

Instruments hold a Handle rather than the curve itself, so that a desk can
swap the underlying curve (e.g. a bumped scenario) and every instrument
holding the handle is notified. An empty handle is a valid value meaning
"no curve supplied".
"""

from typing import Generic, Optional, TypeVar

from ..observer import Observable, Observer

T = TypeVar("T", bound=Observable)


class Handle(Observer, Observable, Generic[T]):
    """Observable reference to an observable object, possibly empty."""

    def __init__(self, link: Optional[T] = None):
        super().__init__()
        self._link: Optional[T] = None
        self._set_link(link)

    @property
    def empty(self) -> bool:
        return self._link is None

    @property
    def link(self) -> T:
        """The referenced object; raises if the handle is empty."""
        if self._link is None:
            raise RuntimeError("empty Handle cannot be dereferenced")
        return self._link

    def update(self) -> None:
        self.notify_observers()

    def _set_link(self, link: Optional[T]) -> None:
        if link is self._link:
            return
        self.unregister_with(self._link)
        self._link = link
        self.register_with(link)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._link!r})"


class RelinkableHandle(Handle[T]):
    """Handle whose target can be replaced after construction."""

    def link_to(self, link: Optional[T]) -> None:
        """Point the handle at another object and tell the observers."""
        if link is self._link:
            return
        self._set_link(link)
        self.notify_observers()


def as_handle(obj) -> Handle:
    """Wrap a term structure (or None) in a Handle; pass handles through."""
    if isinstance(obj, Handle):
        return obj
    return Handle(obj)


__all__ = ["Handle", "RelinkableHandle", "as_handle"]
