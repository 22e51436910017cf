"""Body geometry as seen from Earth: RA/Dec, ecliptic, ranges, phase, radii."""

from __future__ import annotations

import math

import cspyce

from skyprop.constants import EARTH_ID, SUN_ID

TWOPI = 2.0 * math.pi


def _apparent(body_id: int, et: float, frame: str = 'J2000') -> tuple[list[float], float]:
    """Earth-to-body position (km) corrected for light time and aberration, and light time."""
    state, lt = cspyce.spkez(body_id, et, frame, 'LT+S', EARTH_ID)
    return (list(state[:3]), float(lt))


def body_radec(et: float, body_id: int) -> tuple[float, float]:
    """Apparent J2000 RA and Dec of body (radians)."""
    pos, _ = _apparent(body_id, et)
    _, ra, dec = cspyce.recrad(pos)
    return (ra, dec)


def body_range(et: float, body_id: int) -> float:
    """Earth-body distance (km)."""
    pos, _ = _apparent(body_id, et)
    return cspyce.vnorm(pos)


def body_ranges(et: float, body_id: int) -> tuple[float, float]:
    """Sun-body and Earth-body distances (km)."""
    body_pos, lt = _apparent(body_id, et)
    sun_state, _ = cspyce.spkez(SUN_ID, et - lt, 'J2000', 'LT+S', body_id)
    return (cspyce.vnorm(sun_state[:3]), cspyce.vnorm(body_pos))


def body_phase(et: float, body_id: int) -> float:
    """Solar phase angle of body as seen from Earth (radians).

    VMINUS of the Earth-body vector is the direction from body to Earth;
    VSEP with the body-Sun direction is the phase angle.
    """
    body_pos, lt = _apparent(body_id, et)
    sun_state, _ = cspyce.spkez(SUN_ID, et - lt, 'J2000', 'LT+S', body_id)
    return cspyce.vsep(sun_state[:3], cspyce.vminus(body_pos))


def body_elongation_east(et: float, body_id: int) -> float:
    """Ecliptic longitude of body minus that of the Sun, in [0, 2*pi) radians.

    Values below pi put the body east of the Sun (an evening object, waxing).
    """
    body_pos, _ = _apparent(body_id, et, 'ECLIPJ2000')
    sun_pos, _ = _apparent(SUN_ID, et, 'ECLIPJ2000')
    _, body_lon, _ = cspyce.recrad(body_pos)
    _, sun_lon, _ = cspyce.recrad(sun_pos)
    return (body_lon - sun_lon) % TWOPI


def body_vector(et: float, body_id: int) -> list[float]:
    """Apparent J2000 Earth-to-body vector (km)."""
    pos, _ = _apparent(body_id, et)
    return pos


def topocentric_vector(et: float, body_id: int, obs_pv: list[float]) -> list[float]:
    """Apparent J2000 vector (km) from an observer state to body."""
    body_dpv, _ = cspyce.spkapp(body_id, et, 'J2000', list(obs_pv), 'LT+S')
    return list(body_dpv[:3])


def direction(ra: float, dec: float) -> list[float]:
    """J2000 unit vector toward RA and Dec (radians)."""
    return list(cspyce.radrec(1.0, ra, dec))


def ecliptic_lonlat(et: float, vector: list[float]) -> tuple[float, float]:
    """J2000 ecliptic longitude [0, 2*pi) and latitude (radians) of a J2000 vector."""
    rot = cspyce.pxform('J2000', 'ECLIPJ2000', et)
    _, lon, lat = cspyce.recrad(cspyce.mxv(rot, vector))
    return (lon, lat)


def vector_separation(vector1: list[float], vector2: list[float]) -> float:
    """Angle between two directions (radians)."""
    return cspyce.vsep(vector1, vector2)


def body_radius_km(body_id: int) -> float:
    """Equatorial radius from the PCK; planet barycenters use the planet itself."""
    if body_id < 10:
        body_id = body_id * 100 + 99
    return float(cspyce.bodvrd(str(body_id), 'RADII')[0])
