"""Spherical astronomy: sidereal time, frame conversions, separations, rise/set.

Angles are in degrees. Formulas follow Meeus, Astronomical Algorithms
(ch. 12 sidereal time, ch. 13 transformations, ch. 15 rising and setting).
"""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np

from skyprop.angle_utils import wrap_circle
from skyprop.constants import DEGREES_PER_CIRCLE, JD_J2000, SECONDS_PER_DAY
from skyprop.instant import Instant

# Mean obliquity of the ecliptic at J2000 (IAU 1976)
OBLIQUITY_J2000_DEG = 23.4392911

# Sidereal degrees per solar day
_SIDEREAL_RATE = 360.985647

_RISE_SET_ITERATIONS = 3


def gmst_deg(jd: float) -> float:
    """Greenwich mean sidereal time in degrees [0, 360) for a UT Julian date."""
    t = (jd - JD_J2000) / 36525.0
    theta = (
        280.46061837
        + 360.98564736629 * (jd - JD_J2000)
        + 0.000387933 * t * t
        - t * t * t / 38710000.0
    )
    return wrap_circle(theta)


def equatorial_to_horizontal(
    ra_deg: float, dec_deg: float, jd: float, lat_deg: float, lon_deg: float
) -> tuple[float, float]:
    """Azimuth (from north through east) and altitude of an RA/Dec position.

    Parameters:
        ra_deg, dec_deg: Equatorial coordinates.
        jd: UT Julian date.
        lat_deg: Observer latitude.
        lon_deg: Observer longitude, east positive.

    Returns:
        (azimuth, altitude) in degrees; azimuth in [0, 360).
    """
    hour_angle = math.radians(gmst_deg(jd) + lon_deg - ra_deg)
    dec = math.radians(dec_deg)
    lat = math.radians(lat_deg)
    sin_alt = math.sin(lat) * math.sin(dec) + math.cos(lat) * math.cos(dec) * math.cos(hour_angle)
    alt = math.asin(max(-1.0, min(1.0, sin_alt)))
    az = math.atan2(
        -math.sin(hour_angle) * math.cos(dec),
        math.sin(dec) * math.cos(lat) - math.cos(dec) * math.sin(lat) * math.cos(hour_angle),
    )
    return (wrap_circle(math.degrees(az)), math.degrees(alt))


def equatorial_to_ecliptic(ra_deg: float, dec_deg: float) -> tuple[float, float]:
    """J2000 ecliptic (longitude [0, 360), latitude) of a J2000 RA/Dec position."""
    eps = math.radians(OBLIQUITY_J2000_DEG)
    ra = math.radians(ra_deg)
    dec = math.radians(dec_deg)
    sin_beta = math.sin(dec) * math.cos(eps) - math.cos(dec) * math.sin(eps) * math.sin(ra)
    beta = math.asin(max(-1.0, min(1.0, sin_beta)))
    lam = math.atan2(
        math.sin(ra) * math.cos(eps) * math.cos(dec) + math.sin(dec) * math.sin(eps),
        math.cos(ra) * math.cos(dec),
    )
    return (wrap_circle(math.degrees(lam)), math.degrees(beta))


def unit_vector(ra_deg: float, dec_deg: float) -> np.ndarray:
    """Cartesian unit vector for an RA/Dec direction."""
    ra = math.radians(ra_deg)
    dec = math.radians(dec_deg)
    return np.array(
        [math.cos(dec) * math.cos(ra), math.cos(dec) * math.sin(ra), math.sin(dec)],
        dtype=np.float64,
    )


def angular_separation(
    ra1_deg: float, dec1_deg: float, ra2_deg: float, dec2_deg: float
) -> float:
    """Great-circle separation in degrees (stable for tiny and near-180° angles)."""
    a = unit_vector(ra1_deg, dec1_deg)
    b = unit_vector(ra2_deg, dec2_deg)
    return math.degrees(math.atan2(float(np.linalg.norm(np.cross(a, b))), float(np.dot(a, b))))


def _wrap_half(deg: float) -> float:
    """Wrap to [-180, 180)."""
    return (deg + 180.0) % DEGREES_PER_CIRCLE - 180.0


def rise_set(
    position: Callable[[Instant], tuple[float, float]],
    instant: Instant,
    lat_deg: float,
    lon_deg: float,
    h0_deg: float,
    altitude: Callable[[Instant], float] | None = None,
) -> tuple[Instant, Instant] | None:
    """Rise and set times on the UTC day containing ``instant``.

    Parameters:
        position: Returns (ra, dec) in degrees at a given Instant; called
            again at each refined estimate so moving bodies are followed.
        instant: Any time on the day of interest.
        lat_deg, lon_deg: Observer location (east longitude positive).
        h0_deg: Standard altitude of the body at rise/set.
        altitude: Returns the body's altitude in degrees at a given Instant,
            used to refine each estimate. Defaults to converting
            ``position`` with ``equatorial_to_horizontal``.

    Returns:
        (rise, set) Instants, or None if the body stays above or below the
        horizon all day.
    """
    day_start = Instant(instant.day, 0.0)
    theta0 = gmst_deg(day_start.jd)
    lat = math.radians(lat_deg)
    h0 = math.radians(h0_deg)
    ra, dec_deg = position(day_start)
    dec = math.radians(dec_deg)
    denom = math.cos(lat) * math.cos(dec)
    if abs(denom) < 1e-12:
        return None
    cos_h0 = (math.sin(h0) - math.sin(lat) * math.sin(dec)) / denom
    if cos_h0 < -1.0 or cos_h0 > 1.0:
        return None
    half_arc = math.degrees(math.acos(cos_h0))
    transit = ((ra - lon_deg - theta0) / DEGREES_PER_CIRCLE) % 1.0

    times = []
    for sign in (-1.0, 1.0):
        m = (transit + sign * half_arc / DEGREES_PER_CIRCLE) % 1.0
        for _ in range(_RISE_SET_ITERATIONS):
            t = day_start.add_seconds(m * SECONDS_PER_DAY)
            ra_m, dec_m = position(t)
            hour_angle = _wrap_half(theta0 + _SIDEREAL_RATE * m + lon_deg - ra_m)
            if altitude is None:
                alt = equatorial_to_horizontal(ra_m, dec_m, t.jd, lat_deg, lon_deg)[1]
            else:
                alt = altitude(t)
            correction_denom = (
                DEGREES_PER_CIRCLE
                * math.cos(math.radians(dec_m))
                * math.cos(lat)
                * math.sin(math.radians(hour_angle))
            )
            if abs(correction_denom) < 1e-12:
                break
            m += (alt - h0_deg) / correction_denom
        times.append(day_start.add_seconds((m % 1.0) * SECONDS_PER_DAY))
    return (times[0], times[1])
