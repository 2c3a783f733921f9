"""
Process-wide valuation settings.

The evaluation date is the "today" every curve and instrument prices
against. It is an observable: moving it invalidates everything that
registered with it.
"""

from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional
import logging

from .observer import Observable

logger = logging.getLogger(__name__)


class EvaluationDate(Observable):
    """Observable holder of the evaluation date (None means today)."""

    def __init__(self):
        super().__init__()
        self._value: Optional[date] = None

    @property
    def value(self) -> date:
        return self._value if self._value is not None else date.today()

    @property
    def anchored(self) -> Optional[date]:
        """The explicitly set date, or None when following today."""
        return self._value

    def set(self, d: Optional[date]) -> None:
        previous = self.value
        self._value = d
        if self.value != previous:
            logger.info("Evaluation date moved %s -> %s", previous, self.value)
            self.notify_observers()

    def __repr__(self) -> str:
        return f"EvaluationDate({self.value})"


class Settings:
    """
    Global settings singleton.

    Attributes:
        include_reference_date_events: If True, events on the evaluation date
            have not yet occurred. Changing it notifies the observers of the
            evaluation date, since it moves what counts as expired.
    """

    _instance: Optional["Settings"] = None

    def __init__(self):
        self._evaluation_date = EvaluationDate()
        self._include_reference_date_events = False

    @classmethod
    def instance(cls) -> "Settings":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def evaluation_date(self) -> date:
        return self._evaluation_date.value

    @evaluation_date.setter
    def evaluation_date(self, d: date) -> None:
        self._evaluation_date.set(d)

    @property
    def include_reference_date_events(self) -> bool:
        return self._include_reference_date_events

    @include_reference_date_events.setter
    def include_reference_date_events(self, flag: bool) -> None:
        if flag == self._include_reference_date_events:
            return
        self._include_reference_date_events = flag
        logger.info("include_reference_date_events set to %s", flag)
        self._evaluation_date.notify_observers()

    @property
    def evaluation_date_subject(self) -> EvaluationDate:
        """The observable to register with to follow evaluation date moves."""
        return self._evaluation_date

    def anchor_evaluation_date(self) -> None:
        """Pin the evaluation date to today so it stops following the clock."""
        if self._evaluation_date.anchored is None:
            self._evaluation_date.set(date.today())

    def reset_evaluation_date(self) -> None:
        """Go back to following today's date."""
        self._evaluation_date.set(None)


@contextmanager
def saved_settings() -> Iterator[Settings]:
    """
    Restore the evaluation date and flags on exit.

    Usage:
        with saved_settings() as settings:
            settings.evaluation_date = date(2024, 1, 2)
            ...
    """
    settings = Settings.instance()
    saved_date = settings.evaluation_date_subject.anchored
    saved_include = settings.include_reference_date_events
    try:
        yield settings
    finally:
        settings.include_reference_date_events = saved_include
        settings.evaluation_date_subject.set(saved_date)


def has_occurred(
    event_date: date,
    ref_date: Optional[date] = None,
    include_ref_date: Optional[bool] = None
) -> bool:
    """
    Whether an event on event_date has already happened.

    Args:
        event_date: Date of the event
        ref_date: Reference date, defaults to the evaluation date
        include_ref_date: Whether an event on the reference date is still
            pending; defaults to Settings.include_reference_date_events

    Returns:
        True if the event is in the past
    """
    settings = Settings.instance()
    if ref_date is None:
        ref_date = settings.evaluation_date
    if include_ref_date is None:
        include_ref_date = settings.include_reference_date_events
    if include_ref_date:
        return event_date < ref_date
    return event_date <= ref_date


__all__ = [
    "EvaluationDate",
    "Settings",
    "saved_settings",
    "has_occurred",
]
