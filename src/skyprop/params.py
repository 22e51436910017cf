"""Parameter parsing for queries: dates, steps, ephemeris ranges and locations.

Each textual form has its own trial parser returning a value or ``None``;
the public ``parse_*`` functions try them in a fixed order and raise
:class:`~skyprop.errors.ParseError` when none matches.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from skyprop.angle_utils import parse_angle_token, parse_number, wrap_longitude
from skyprop.errors import ParseError
from skyprop.instant import Instant, Step
from skyprop.time_utils import CALENDAR_UNITS, DURATION_UNITS
from skyprop.timeseries import EphemerisSpec

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('term', 'csv', 'json')

_STEP_RE = re.compile(r'([+-]?(?:\d+(?:\.\d*)?|\.\d+))(mon|min|y|w|d|h|s)')
_RELATIVE_RE = re.compile(r'[+-](?:\d+(?:\.\d*)?|\.\d+)(?:mon|min|y|w|d|h|s)')
_UNIX_AT_RE = re.compile(r'@([+-]?\d+)')
_ISO_RE = re.compile(
    r'([+-]?\d{4})-(\d{1,2})-(\d{1,2})'
    r'(?:[t ](\d{1,2}):(\d{1,2})(?::(\d{1,2}(?:\.\d*)?))?)?z?'
)


@dataclass(frozen=True)
class Location:
    """Observer location in degrees (east longitude positive)."""

    latitude_deg: float
    longitude_deg: float

    @property
    def northern(self) -> bool:
        return self.latitude_deg >= 0.0

    def __str__(self) -> str:
        ns = 'N' if self.latitude_deg >= 0 else 'S'
        ew = 'E' if self.longitude_deg >= 0 else 'W'
        return f'{abs(self.latitude_deg):g}°{ns} {abs(self.longitude_deg):g}°{ew}'


@dataclass
class QueryParams:
    """Everything one CLI invocation asks for, already parsed."""

    object_name: str
    property_aliases: list[str]
    date: Instant
    location: Location | None = None
    output_format: str = 'term'
    ephemeris: EphemerisSpec | None = None
    skip_errors: bool = False


def parse_step(token: str) -> Step:
    """Parse a signed step such as ``1d``, ``-6h``, ``+1mon`` or ``2y``.

    ``y`` and ``mon`` are calendar steps and must come to whole months;
    ``w``, ``d``, ``h``, ``min`` and ``s`` are fixed durations.

    Raises:
        ParseError: If the token is not a step.
    """
    text = token.strip().lower()
    match = _STEP_RE.fullmatch(text)
    if match is None:
        raise ParseError(token, 'Bad interval (expected e.g. 1d, 6h, 30min, 1mon, 1y)')
    value = float(match.group(1))
    unit = match.group(2)
    if unit in CALENDAR_UNITS:
        months = value * CALENDAR_UNITS[unit]
        if not months.is_integer():
            raise ParseError(token, 'Calendar steps must be a whole number of months')
        return Step(months=int(months))
    return Step(seconds=value * DURATION_UNITS[unit])


def _parse_now(text: str, base: Instant | None) -> Instant | None:
    del base
    return Instant.now() if text == 'now' else None


def _parse_unix_at(text: str, base: Instant | None) -> Instant | None:
    del base
    match = _UNIX_AT_RE.fullmatch(text)
    return None if match is None else Instant.from_unix(int(match.group(1)))


def _parse_unix_suffix(text: str, base: Instant | None) -> Instant | None:
    del base
    if not text.endswith('u'):
        return None
    value = parse_number(text[:-1])
    return None if value is None else Instant.from_unix(value)


def _parse_julian(text: str, base: Instant | None) -> Instant | None:
    del base
    for suffix in ('jd', 'j'):
        if text.endswith(suffix):
            value = parse_number(text[: -len(suffix)])
            return None if value is None else Instant.from_jd(value)
    return None


def _parse_relative(text: str, base: Instant | None) -> Instant | None:
    if _RELATIVE_RE.fullmatch(text) is None:
        return None
    return parse_step(text).apply(base if base is not None else Instant.now())


def _parse_iso(text: str, base: Instant | None) -> Instant | None:
    del base
    match = _ISO_RE.fullmatch(text)
    if match is None:
        return None
    year, month, day, hour, minute, second = match.groups()
    return Instant.from_calendar(
        int(year),
        int(month),
        int(day),
        int(hour or 0),
        int(minute or 0),
        float(second or 0.0),
    )


_DATE_PARSERS: tuple[Callable[[str, Instant | None], Instant | None], ...] = (
    _parse_now,
    _parse_unix_at,
    _parse_unix_suffix,
    _parse_julian,
    _parse_relative,
    _parse_iso,
)


def parse_date(token: str, base: Instant | None = None) -> Instant:
    """Parse a date token.

    Forms, in priority order: ``now``; ``@<unix seconds>``; ``<n>u`` (Unix
    seconds); ``<n>jd`` or ``<n>j`` (Julian date); ``[+-]<n><unit>`` relative
    to ``base`` (now when None); ``YYYY-MM-DD[THH:MM[:SS]]``. Calendar fields
    out of range roll over into the next field.

    Parameters:
        token: Date string, case-insensitive.
        base: Instant that relative offsets apply to.

    Returns:
        The parsed Instant.

    Raises:
        ParseError: If no form matches.
    """
    text = token.strip().lower()
    for trial in _DATE_PARSERS:
        instant = trial(text, base)
        if instant is not None:
            return instant
    raise ParseError(
        token, 'Invalid date (expected now, @unix, <n>jd, +<n><unit> or YYYY-MM-DD[THH:MM:SS])'
    )


def parse_ephemeris_spec(text: str, base: Instant | None = None) -> EphemerisSpec:
    """Parse ``start,step,end``.

    A relative start is taken from ``base`` (the query date); a relative end
    from the start.

    Raises:
        ParseError: If the text is not three comma-separated fields or any
            field is malformed.
        ConfigurationError: If the step is zero.
    """
    parts = [p.strip() for p in text.split(',')]
    if len(parts) != 3 or not all(parts):
        raise ParseError(text, 'Bad ephemeris range (expected START,STEP,END)')
    start = parse_date(parts[0], base)
    step = parse_step(parts[1])
    end = parse_date(parts[2], start)
    logger.debug('Ephemeris range %s, step %s, end %s', start, step, end)
    return EphemerisSpec(start, step, end)


def parse_angle(token: str) -> float:
    """Parse an angle token to degrees.

    Raises:
        ParseError: If the token is not an angle.
    """
    value = parse_angle_token(token)
    if value is None:
        raise ParseError(token, 'Invalid angle')
    return value


def parse_location(text: str) -> Location | None:
    """Parse ``lat,long`` into a Location; ``none`` means no location.

    Splits once on the first comma. Latitude must lie within ±90°; longitude
    is wrapped to (-180, 180].

    Raises:
        ParseError: If either angle is malformed or the latitude is out of range.
    """
    stripped = text.strip()
    if stripped.lower() == 'none':
        return None
    if ',' not in stripped:
        raise ParseError(text, 'Bad location (expected LAT,LONG)')
    lat_text, lon_text = stripped.split(',', 1)
    lat = parse_angle(lat_text)
    if abs(lat) > 90.0:
        raise ParseError(lat_text, 'Latitude over 90 degrees')
    lon = wrap_longitude(parse_angle(lon_text))
    return Location(latitude_deg=lat, longitude_deg=lon)

