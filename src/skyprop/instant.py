"""UTC instants on the rms-julian (day, sec) scale, and calendar-aware steps."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone

from skyprop.constants import (
    JD_OF_DAY_ZERO,
    MONTHS_PER_YEAR,
    SECONDS_PER_DAY,
    UNIX_DAY_OF_DAY_ZERO,
)
from skyprop.time_utils import day_from_ymd, days_in_month, hms_from_sec, ymd_from_day


@dataclass(frozen=True, order=True)
class Instant:
    """Absolute UTC time as whole days since 2000-01-01 plus seconds into the day.

    Always normalized so that ``0 <= sec < 86400``; ordering and subtraction
    therefore agree with the underlying continuous scale. Leap seconds are
    ignored (every day has 86400 seconds).
    """

    day: int
    sec: float = 0.0

    @classmethod
    def normalized(cls, day: int, sec: float) -> Instant:
        """Build an Instant, carrying whole days out of ``sec``."""
        carry = math.floor(sec / SECONDS_PER_DAY)
        day = int(day) + carry
        sec = sec - carry * SECONDS_PER_DAY
        if sec >= SECONDS_PER_DAY:
            day += 1
            sec -= SECONDS_PER_DAY
        return cls(day, float(sec))

    @classmethod
    def from_calendar(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: float = 0.0,
    ) -> Instant:
        """Instant from calendar fields; out-of-range fields roll over."""
        return cls.normalized(
            day_from_ymd(year, month, day), hour * 3600.0 + minute * 60.0 + second
        )

    @classmethod
    def from_unix(cls, seconds: float) -> Instant:
        """Instant from seconds since 1970-01-01T00:00:00 UTC."""
        return cls.normalized(-UNIX_DAY_OF_DAY_ZERO, float(seconds))

    @classmethod
    def from_jd(cls, jd: float) -> Instant:
        """Instant from a Julian date."""
        days = jd - JD_OF_DAY_ZERO
        whole = math.floor(days)
        return cls.normalized(whole, round((days - whole) * SECONDS_PER_DAY, 6))

    @classmethod
    def now(cls) -> Instant:
        """Current wall-clock Instant."""
        return cls.from_unix(datetime.now(timezone.utc).timestamp())

    @property
    def jd(self) -> float:
        """Julian date."""
        return JD_OF_DAY_ZERO + self.day + self.sec / SECONDS_PER_DAY

    @property
    def unix(self) -> float:
        """Seconds since the Unix epoch."""
        return (self.day + UNIX_DAY_OF_DAY_ZERO) * SECONDS_PER_DAY + self.sec

    def add_seconds(self, seconds: float) -> Instant:
        """Fixed-duration addition."""
        return Instant.normalized(self.day, self.sec + seconds)

    def add_months(self, months: int) -> Instant:
        """Calendar addition of whole months, keeping time of day.

        When the target month is shorter than the current day of month the
        day clamps to the month's last day (Jan 31 + 1 month = Feb 28/29).
        """
        year, month, day = ymd_from_day(self.day)
        total = year * MONTHS_PER_YEAR + (month - 1) + months
        new_year, new_month = divmod(total, MONTHS_PER_YEAR)
        new_month += 1
        day = min(day, days_in_month(new_year, new_month))
        return Instant(day_from_ymd(new_year, new_month, day), self.sec)

    def calendar(self) -> tuple[int, int, int, int, int, float]:
        """(year, month, day, hour, minute, second)."""
        year, month, day = ymd_from_day(self.day)
        hour, minute, second = hms_from_sec(self.sec)
        return (year, month, day, hour, minute, second)

    def isoformat(self) -> str:
        """``YYYY-MM-DDTHH:MM:SS``, rounded to the nearest second."""
        rounded = Instant.normalized(self.day, float(round(self.sec)))
        year, month, day, hour, minute, second = rounded.calendar()
        return f'{year:04d}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:{int(second):02d}'

    def __sub__(self, other: Instant) -> float:
        """Seconds from ``other`` to ``self``."""
        return (self.day - other.day) * SECONDS_PER_DAY + (self.sec - other.sec)

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True)
class Step:
    """Signed time step: either a fixed duration or a whole number of months."""

    seconds: float = 0.0
    months: int = 0

    @property
    def sign(self) -> int:
        """-1, 0 or 1."""
        value = self.months if self.months else self.seconds
        return (value > 0) - (value < 0)

    def apply(self, instant: Instant, count: int = 1) -> Instant:
        """Return ``instant`` advanced by ``count`` steps."""
        if self.months:
            return instant.add_months(self.months * count)
        return instant.add_seconds(self.seconds * count)

    def __str__(self) -> str:
        if self.months:
            if self.months % MONTHS_PER_YEAR == 0:
                return f'{self.months // MONTHS_PER_YEAR}y'
            return f'{self.months}mon'
        return f'{self.seconds:g}s'
