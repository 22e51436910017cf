"""Astronomy backend on SPICE kernels via cspyce."""

from __future__ import annotations

import functools
import logging
import math
from collections.abc import Callable
from typing import Any, TypeVar

from skyprop.backend import AstronomyBackend, require_body_id
from skyprop.catalog import CelestialObject
from skyprop.constants import (
    AU_KM,
    MOON_ID,
    MOON_MAGNITUDE_MODEL,
    PLANET_MAGNITUDE_MODELS,
    SUN_ABSOLUTE_MAGNITUDE_1AU,
    SUN_ID,
)
from skyprop.errors import ConfigurationError, EvaluationError
from skyprop.instant import Instant
from skyprop.params import Location
from skyprop.spice.geometry import (
    body_elongation_east,
    body_phase,
    body_radec,
    body_radius_km,
    body_range,
    body_ranges,
    body_vector,
    direction,
    ecliptic_lonlat,
    topocentric_vector,
    vector_separation,
)
from skyprop.spice.load import load_kernels
from skyprop.spice.observer import horizon_azalt, observer_state
from skyprop.time_utils import utc_to_et

logger = logging.getLogger(__name__)

_T = TypeVar('_T')


def _spice_errors(func: Callable[..., _T]) -> Callable[..., _T]:
    """Report SPICE failures (e.g. no ephemeris coverage) as EvaluationError."""

    @functools.wraps(func)
    def wrapper(self: SpiceBackend, target: Any, *args: Any) -> _T:
        try:
            return func(self, target, *args)
        except (RuntimeError, ValueError, KeyError, OSError) as e:
            what = getattr(target, 'name', f'body {target}')
            instant = next(arg for arg in args if isinstance(arg, Instant))
            logger.debug('SPICE error for %s at %s: %s', what, instant, e)
            raise EvaluationError(f'SPICE could not evaluate {what} at {instant}: {e}') from e

    return wrapper


class SpiceBackend(AstronomyBackend):
    """Apparent positions from the kernels named by the configuration.

    Positions are geocentric; horizontal coordinates are seen from the
    observer's place on the surface. Kernels are loaded on construction.

    Raises:
        ConfigurationError: If the kernels cannot be loaded.
    """

    topocentric = True

    def __init__(self) -> None:
        ok, reason = load_kernels()
        if not ok:
            raise ConfigurationError(reason or 'SPICE kernels not loaded')

    @staticmethod
    def _et(instant: Instant) -> float:
        return utc_to_et(instant.day, instant.sec)

    @staticmethod
    def _vector(
        obj: CelestialObject, et: float, location: Location | None = None
    ) -> list[float]:
        """Apparent J2000 vector to ``obj`` from Earth's center or from ``location``."""
        if obj.has_fixed_position:
            return direction(math.radians(obj.ra_deg), math.radians(obj.dec_deg))
        body_id = require_body_id(obj)
        if location is None:
            return body_vector(et, body_id)
        return topocentric_vector(et, body_id, observer_state(et, location).tolist())

    @_spice_errors
    def body_equatorial(self, body_id: int, instant: Instant) -> tuple[float, float]:
        ra, dec = body_radec(self._et(instant), body_id)
        return (math.degrees(ra) % 360.0, math.degrees(dec))

    @_spice_errors
    def body_distance_au(self, body_id: int, instant: Instant) -> float:
        return body_range(self._et(instant), body_id) / AU_KM

    @_spice_errors
    def body_angular_diameter(self, body_id: int, instant: Instant) -> float:
        radius = body_radius_km(body_id)
        return math.degrees(2.0 * math.atan(radius / body_range(self._et(instant), body_id)))

    @_spice_errors
    def body_phase_angle(self, body_id: int, instant: Instant) -> float:
        et = self._et(instant)
        phase = math.degrees(body_phase(et, body_id))
        if body_elongation_east(et, body_id) < math.pi:
            return 180.0 - phase
        return 180.0 + phase

    @_spice_errors
    def body_magnitude(self, body_id: int, instant: Instant) -> float:
        et = self._et(instant)
        if body_id == SUN_ID:
            return SUN_ABSOLUTE_MAGNITUDE_1AU + 5.0 * math.log10(body_range(et, body_id) / AU_KM)
        sun_km, earth_km = body_ranges(et, body_id)
        distance_term = 5.0 * math.log10((sun_km / AU_KM) * (earth_km / AU_KM))
        i = math.degrees(body_phase(et, body_id))
        if body_id == MOON_ID:
            v10, linear, quartic = MOON_MAGNITUDE_MODEL
            return v10 + distance_term + linear * i + quartic * i**4
        coeffs = PLANET_MAGNITUDE_MODELS[body_id]
        return coeffs[0] + distance_term + sum(c * i ** (k + 1) for k, c in enumerate(coeffs[1:]))

    @_spice_errors
    def ecliptic(self, obj: CelestialObject, instant: Instant) -> tuple[float, float]:
        et = self._et(instant)
        lon, lat = ecliptic_lonlat(et, self._vector(obj, et))
        return (math.degrees(lon), math.degrees(lat))

    @_spice_errors
    def horizontal(
        self, obj: CelestialObject, instant: Instant, location: Location
    ) -> tuple[float, float]:
        et = self._et(instant)
        az, alt = horizon_azalt(et, self._vector(obj, et, location), location)
        return (math.degrees(az), math.degrees(alt))

    @_spice_errors
    def separation(
        self, first: CelestialObject, second: CelestialObject, instant: Instant
    ) -> float:
        et = self._et(instant)
        return math.degrees(vector_separation(self._vector(first, et), self._vector(second, et)))
