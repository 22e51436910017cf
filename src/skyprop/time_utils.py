"""Time conversion wrappers around rms-julian (calendar days, leap seconds, TDB)."""

from __future__ import annotations

import logging

import julian

from skyprop.config import get_leapsecs_path
from skyprop.constants import (
    MONTHS_PER_YEAR,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    SECONDS_PER_WEEK,
)

logger = logging.getLogger(__name__)

# Leap seconds loaded once at first use.
_leapsecs_loaded = False

# Fixed-duration step units, in seconds. Calendar units are handled apart.
DURATION_UNITS: dict[str, float] = {
    'w': SECONDS_PER_WEEK,
    'd': SECONDS_PER_DAY,
    'h': SECONDS_PER_HOUR,
    'min': SECONDS_PER_MINUTE,
    's': 1.0,
}

# Calendar step units, in months.
CALENDAR_UNITS: dict[str, int] = {
    'y': MONTHS_PER_YEAR,
    'mon': 1,
}


def _ensure_leapsecs() -> None:
    """Load leap seconds file if not already loaded.

    rms-julian requires a NAIF LSK (e.g. naif0012.tls). If the configured file
    is missing or unreadable, falls back to rms-julian's bundled LSK.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    try:
        julian.load_lsk(path)
        _leapsecs_loaded = True
    except (OSError, KeyError, ValueError) as e:
        logger.info(
            'Leap seconds from %s not used (%s); using rms-julian bundled LSK.',
            path,
            e,
        )
        try:
            julian.load_lsk()
        except Exception as fallback_err:
            logger.error(
                'Fallback to rms-julian bundled LSK failed: %s',
                fallback_err,
                exc_info=True,
            )
            raise
        _leapsecs_loaded = True


def ymd_from_day(day: int) -> tuple[int, int, int]:
    """Convert day since 2000-01-01 to calendar date.

    Parameters:
        day: Days since 2000-01-01.

    Returns:
        (year, month, day).
    """
    y, m, d = julian.ymd_from_day(day)
    return (int(y), int(m), int(d))


def day_from_ymd(year: int, month: int, day: int) -> int:
    """Convert calendar date to days since 2000-01-01, rolling over excess fields.

    Months outside 1..12 carry into the year and days beyond the month's
    length carry into the following months (``2000-04-52`` is May 22nd).

    Parameters:
        year, month, day: Calendar fields, possibly out of range.

    Returns:
        Days since 2000-01-01.
    """
    year += (month - 1) // MONTHS_PER_YEAR
    month = (month - 1) % MONTHS_PER_YEAR + 1
    return int(julian.day_from_ymd(year, month, 1)) + day - 1


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given (valid) calendar month."""
    return day_from_ymd(year, month + 1, 1) - day_from_ymd(year, month, 1)


def hms_from_sec(sec: float) -> tuple[int, int, float]:
    """Convert seconds within day to (hour, minute, second).

    Parameters:
        sec: Seconds within day (0..86400).

    Returns:
        (hour, minute, second).
    """
    h, m, s = julian.hms_from_sec(sec)
    return (int(h), int(m), float(s))


def tai_from_day_sec(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to TAI seconds.

    Parameters:
        day: Days since 2000-01-01.
        sec: Seconds within that day.

    Returns:
        TAI in seconds.
    """
    _ensure_leapsecs()
    return float(julian.tai_from_day_sec(day, sec))


def tdb_from_tai(tai: float) -> float:
    """Convert TAI to TDB seconds, the ephemeris time used by SPICE.

    Parameters:
        tai: TAI in seconds.

    Returns:
        TDB (ephemeris time) in seconds.
    """
    return float(julian.tdb_from_tai(tai))


def utc_to_et(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to ET (TDB) seconds for SPICE.

    Parameters:
        day: Days since 2000-01-01.
        sec: Seconds within day.

    Returns:
        ET (TDB) in seconds.
    """
    tai = tai_from_day_sec(day, sec)
    return tdb_from_tai(tai)
