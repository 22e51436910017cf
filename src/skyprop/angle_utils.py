"""Angle parsing and sexagesimal formatting.

Parsers return ``None`` when a token does not have their shape; callers decide
whether a miss is an error.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable

from skyprop.constants import (
    ARCMIN_PER_DEGREE,
    ARCSEC_PER_DEGREE,
    DEGREES_PER_CIRCLE,
    DEGREES_PER_HOUR_RA,
    HALF_CIRCLE_DEGREES,
)

_NUMBER = r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?'
_NUMBER_RE = re.compile(_NUMBER)
_UNSIGNED = r'\d+(?:\.\d*)?'
_SEXAGESIMAL_RE = re.compile(
    rf'([+-]?)({_UNSIGNED})°(?:({_UNSIGNED})[′\'](?:({_UNSIGNED})[″"])?)?'
)
_HEMISPHERE_SIGN = {'n': 1.0, 'e': 1.0, 's': -1.0, 'w': -1.0}


def parse_number(text: str) -> float | None:
    """Parse a plain decimal literal (no ``nan``/``inf``/underscores)."""
    if _NUMBER_RE.fullmatch(text) is None:
        return None
    return float(text)


def _parse_decimal_degrees(text: str) -> float | None:
    return parse_number(text)


def _parse_unit_suffix(text: str) -> float | None:
    """``<v>deg``, ``<v>d``, ``<v>°`` or ``<v>rad``."""
    if text.endswith('rad'):
        value = parse_number(text[:-3])
        return None if value is None else math.degrees(value)
    for suffix in ('deg', '°', 'd'):
        if text.endswith(suffix):
            return parse_number(text[: -len(suffix)])
    return None


def _parse_symbol_sexagesimal(text: str) -> float | None:
    """``D°M′S″`` with minutes and seconds optional; ASCII ``'``/``"`` accepted."""
    match = _SEXAGESIMAL_RE.fullmatch(text)
    if match is None:
        return None
    sign, deg, minutes, seconds = match.groups()
    angle = (
        float(deg)
        + float(minutes or 0.0) / ARCMIN_PER_DEGREE
        + float(seconds or 0.0) / ARCSEC_PER_DEGREE
    )
    return -angle if sign == '-' else angle


def _parse_spaced_sexagesimal(string: str) -> float | None:
    """Parse an angle as degrees, minutes, and seconds separated by whitespace.

    Accepts three numbers (deg, m, s) or two (deg, m). Minutes and seconds
    must be non-negative. Leading minus makes result negative.
    """
    s = string.strip()
    parts = re.split(r'\s+', s)
    if len(parts) not in (2, 3):
        return None
    values = [parse_number(p) for p in parts]
    if any(v is None for v in values):
        return None
    if any(v < 0 for v in values[1:]):
        return None
    angle = abs(values[0]) + values[1] / ARCMIN_PER_DEGREE
    if len(values) == 3:
        angle += values[2] / ARCSEC_PER_DEGREE
    if s.startswith('-'):
        angle = -angle
    return angle


_TRIAL_PARSERS: tuple[Callable[[str], float | None], ...] = (
    _parse_decimal_degrees,
    _parse_unit_suffix,
    _parse_symbol_sexagesimal,
    _parse_spaced_sexagesimal,
)


def _parse_unsigned_form(text: str) -> float | None:
    for trial in _TRIAL_PARSERS:
        value = trial(text)
        if value is not None:
            return value
    return None


def parse_angle_token(token: str) -> float | None:
    """Parse an angle token to degrees.

    A trailing ``n``/``e`` or ``s``/``w`` hemisphere letter forces the sign
    (positive or negative) regardless of any sign in the literal, so ``30s``
    and ``-30s`` both give -30.

    Parameters:
        token: Angle literal, case-insensitive.

    Returns:
        Angle in degrees, or None if the token is not an angle.
    """
    text = token.strip().lower()
    if not text:
        return None
    sign = _HEMISPHERE_SIGN.get(text[-1])
    if sign is not None and len(text) > 1:
        value = _parse_unsigned_form(text[:-1])
        if value is None:
            return None
        return sign * abs(value)
    return _parse_unsigned_form(text)


def wrap_longitude(deg: float) -> float:
    """Wrap to (-180, 180]."""
    wrapped = math.fmod(deg, DEGREES_PER_CIRCLE)
    if wrapped > HALF_CIRCLE_DEGREES:
        wrapped -= DEGREES_PER_CIRCLE
    elif wrapped <= -HALF_CIRCLE_DEGREES:
        wrapped += DEGREES_PER_CIRCLE
    return wrapped


def wrap_circle(deg: float) -> float:
    """Wrap to [0, 360)."""
    wrapped = deg % DEGREES_PER_CIRCLE
    return 0.0 if wrapped >= DEGREES_PER_CIRCLE else wrapped


def _split_tenths(deg: float) -> tuple[int, int, float]:
    """Unsigned (degrees, minutes, seconds) with seconds rounded to 0.1″."""
    tenths = round(abs(deg) * ARCSEC_PER_DEGREE * 10)
    d, rem = divmod(tenths, 36000)
    m, s10 = divmod(rem, 600)
    return (d, m, s10 / 10.0)


def _signed_parts(deg: float) -> tuple[int, int, float]:
    """(degrees, minutes, seconds), each negative when ``deg`` is.

    A zero degree part has no sign of its own, so -0.5 splits as (0, -30, -0.0).
    """
    d, m, s = _split_tenths(deg)
    if deg < 0 and (d or m or s):
        return (-d, -m, -s)
    return (d, m, s)


def format_latitude(deg: float) -> str:
    """Signed sexagesimal, e.g. ``+12°05′7.5″`` or ``-12°-5′-7.5″``.

    Every part carries the sign and counts it in its width, so negative
    minutes lose their zero padding.
    """
    d, m, s = _signed_parts(deg)
    return f'{d:+02d}°{m:02d}′{s:02.1f}″'


def format_angle(deg: float) -> str:
    """Sexagesimal without a forced sign, e.g. ``231°04′12.3″``."""
    d, m, s = _signed_parts(deg)
    return f'{d:02d}°{m:02d}′{s:02.1f}″'


def format_hours(deg: float) -> str:
    """Right ascension in degrees as ``HHhMMmSSs`` (seconds truncated)."""
    total = int(wrap_circle(deg) / DEGREES_PER_HOUR_RA * 3600.0)
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    return f'{h:02d}h{m:02d}m{s:02d}s'
