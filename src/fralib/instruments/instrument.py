"""
Instrument base class.

An instrument is a lazy object with a net present value. When its
contract has already run off it is not priced at all: the expired path
zeroes its results instead, and the instrument stays in that state until
something it observes changes.
"""

from abc import abstractmethod
import logging

from ..lazy import CacheState, LazyObject

logger = logging.getLogger(__name__)


class Instrument(LazyObject):
    """Lazy object with an NPV and an expiry test."""

    def __init__(self):
        super().__init__()
        self._npv = 0.0

    def npv(self) -> float:
        """Net present value, recomputed only if market data changed."""
        self.calculate()
        return self._npv

    def calculate(self) -> None:
        if self._state is not CacheState.DIRTY:
            return
        if self.is_expired():
            logger.debug("%s expired, skipping valuation", type(self).__name__)
            self._run(self.setup_expired, CacheState.EXPIRED)
        else:
            self._run(self.perform_calculations, CacheState.CLEAN)

    def setup_expired(self) -> None:
        """Results of an instrument that has run off."""
        self._npv = 0.0

    @abstractmethod
    def is_expired(self) -> bool:
        """True once the instrument has no remaining cash flows."""


__all__ = ["Instrument"]
