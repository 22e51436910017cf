"""Ephemeris time series: start/step/end expanded into an ordered sequence of instants."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from skyprop.errors import ConfigurationError
from skyprop.instant import Instant, Step

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EphemerisSpec:
    """Start, step and end of a sweep.

    Iterating yields ``start + k * step`` for k = 0, 1, ... up to and
    including ``end``. Each iteration starts over, so the sequence can be
    walked any number of times. Calendar steps are taken from ``start``
    rather than accumulated, so a month-end start does not drift after
    passing a short month.
    """

    start: Instant
    step: Step
    end: Instant

    def __post_init__(self) -> None:
        if self.step.sign == 0:
            raise ConfigurationError('Ephemeris step must not be zero')

    @property
    def is_empty(self) -> bool:
        """True when the step points away from ``end``."""
        span = self.end - self.start
        return span != 0 and (span > 0) != (self.step.sign > 0)

    def __iter__(self) -> Iterator[Instant]:
        if self.is_empty:
            logger.warning(
                'Ephemeris step %s points away from end %s (start %s); no rows',
                self.step,
                self.end,
                self.start,
            )
            return
        forward = self.step.sign > 0
        k = 0
        while True:
            instant = self.step.apply(self.start, k)
            if (instant > self.end) if forward else (instant < self.end):
                return
            yield instant
            k += 1
