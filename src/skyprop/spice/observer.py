"""Observer on Earth's surface: J2000 state and local horizon axes."""

from __future__ import annotations

import math

import cspyce
import numpy as np

from skyprop.constants import EARTH_ID
from skyprop.params import Location

# GRS 80
EARTH_RAD_KM = 6378.137
EARTH_FLAT = 1.0 / 298.257222

EARTH_FIXED_FRAME = 'IAU_EARTH'

# Sidereal rotation rate (rad/s)
_EARTH_ROT_RATE_RAD_S = 7.2921159e-5


def surface_offset(location: Location) -> list[float]:
    """Earth-fixed position (km) of a sea-level observer at ``location``."""
    return list(
        cspyce.georec(
            math.radians(location.longitude_deg),
            math.radians(location.latitude_deg),
            0.0,
            EARTH_RAD_KM,
            EARTH_FLAT,
        )
    )


def observer_state(et: float, location: Location) -> np.ndarray:
    """Return observer state relative to the solar system barycenter in J2000.

    Position is in km; velocity in km/s and includes Earth rotation.

    Parameters:
        et: Ephemeris time.
        location: Geodetic latitude and east longitude of the observer.

    Returns:
        Length-6 array: position (3) and velocity (3).
    """
    obs_pv = np.array(cspyce.spkssb(EARTH_ID, et, 'J2000'), dtype=np.float64)
    obs_dp = surface_offset(location)
    earth_mat = cspyce.pxform(EARTH_FIXED_FRAME, 'J2000', et)
    obs_pv[:3] += cspyce.mxv(earth_mat, obs_dp)
    # omega x obs_dp in the body frame
    vel_body = [
        -_EARTH_ROT_RATE_RAD_S * obs_dp[1],
        _EARTH_ROT_RATE_RAD_S * obs_dp[0],
        0.0,
    ]
    obs_pv[3:] += cspyce.mxv(earth_mat, vel_body)
    return obs_pv


def horizon_axes(location: Location) -> np.ndarray:
    """Rows are the local north, east and zenith unit vectors, Earth-fixed."""
    lat = math.radians(location.latitude_deg)
    lon = math.radians(location.longitude_deg)
    return np.array(
        [
            [-math.sin(lat) * math.cos(lon), -math.sin(lat) * math.sin(lon), math.cos(lat)],
            [-math.sin(lon), math.cos(lon), 0.0],
            [math.cos(lat) * math.cos(lon), math.cos(lat) * math.sin(lon), math.sin(lat)],
        ],
        dtype=np.float64,
    )


def horizon_azalt(et: float, vector: list[float], location: Location) -> tuple[float, float]:
    """Azimuth (from north through east, [0, 2*pi)) and altitude in radians.

    ``vector`` is a J2000 direction as seen by the observer.
    """
    to_fixed = cspyce.pxform('J2000', EARTH_FIXED_FRAME, et)
    local = horizon_axes(location) @ np.asarray(cspyce.mxv(to_fixed, vector), dtype=np.float64)
    _, az, alt = cspyce.reclat(local.tolist())
    return (az % (2.0 * math.pi), alt)
