"""Astronomy backend contract.

Concrete backends supply positions, distances and phase geometry of solar
system bodies. Ecliptic and horizontal coordinates, separations, and rise
and set times default to closed-form conversions of the RA/Dec position
(geocentric, mean sidereal time, no precession); backends with frame
support override them.
"""

from __future__ import annotations

import abc

from skyprop import astro
from skyprop.catalog import CelestialObject, ObjectKind
from skyprop.constants import (
    MOON_RISE_SET_ALTITUDE_DEG,
    MOON_TOPOCENTRIC_RISE_SET_ALTITUDE_DEG,
    RISE_SET_ALTITUDE_DEG,
    SUN_RISE_SET_ALTITUDE_DEG,
)
from skyprop.errors import EvaluationError
from skyprop.instant import Instant
from skyprop.params import Location


def require_body_id(obj: CelestialObject) -> int:
    """NAIF id of a solar system body; other objects raise EvaluationError."""
    if obj.body_id is None:
        raise EvaluationError(f'{obj.name} has no ephemeris (it is a {obj.kind.value})')
    return obj.body_id


def rise_set_altitude(obj: CelestialObject, topocentric: bool = False) -> float:
    """Standard altitude in degrees of ``obj`` at rise and set.

    The geocentric Moon value folds in horizontal parallax; ``topocentric``
    altitudes already include it.
    """
    if obj.kind == ObjectKind.SUN:
        return SUN_RISE_SET_ALTITUDE_DEG
    if obj.kind == ObjectKind.MOON:
        if topocentric:
            return MOON_TOPOCENTRIC_RISE_SET_ALTITUDE_DEG
        return MOON_RISE_SET_ALTITUDE_DEG
    return RISE_SET_ALTITUDE_DEG


class AstronomyBackend(abc.ABC):
    """Source of astronomical quantities for catalog objects.

    Angles are degrees, distances AU. Positions are geocentric J2000.
    ``topocentric`` is True when ``horizontal`` corrects for the observer's
    offset from Earth's center.
    """

    topocentric = False

    def equatorial(self, obj: CelestialObject, instant: Instant) -> tuple[float, float]:
        """(RA, Dec) of ``obj`` at ``instant``."""
        if obj.has_fixed_position:
            return (obj.ra_deg, obj.dec_deg)
        return self.body_equatorial(require_body_id(obj), instant)

    def magnitude(self, obj: CelestialObject, instant: Instant) -> float:
        """Apparent visual magnitude; stars use their catalog value."""
        if obj.kind == ObjectKind.STAR:
            return obj.magnitude
        return self.body_magnitude(require_body_id(obj), instant)

    def distance_au(self, obj: CelestialObject, instant: Instant) -> float:
        """Distance from Earth's center in AU."""
        return self.body_distance_au(require_body_id(obj), instant)

    def angular_diameter(self, obj: CelestialObject, instant: Instant) -> float:
        """Apparent angular diameter in degrees."""
        return self.body_angular_diameter(require_body_id(obj), instant)

    def phase_angle(self, obj: CelestialObject, instant: Instant) -> float:
        """Phase cycle angle in [0, 360): 0 new, 180 full, above 180 waning."""
        return self.body_phase_angle(require_body_id(obj), instant)

    @abc.abstractmethod
    def body_equatorial(self, body_id: int, instant: Instant) -> tuple[float, float]:
        """Apparent (RA, Dec) of a solar system body."""

    @abc.abstractmethod
    def body_distance_au(self, body_id: int, instant: Instant) -> float:
        """Earth-body distance."""

    @abc.abstractmethod
    def body_magnitude(self, body_id: int, instant: Instant) -> float:
        """Apparent visual magnitude of a solar system body."""

    @abc.abstractmethod
    def body_angular_diameter(self, body_id: int, instant: Instant) -> float:
        """Angular diameter of a solar system body."""

    @abc.abstractmethod
    def body_phase_angle(self, body_id: int, instant: Instant) -> float:
        """Phase cycle angle of a solar system body (see ``phase_angle``)."""

    def ecliptic(self, obj: CelestialObject, instant: Instant) -> tuple[float, float]:
        """(longitude, latitude) on the J2000 ecliptic."""
        return astro.equatorial_to_ecliptic(*self.equatorial(obj, instant))

    def horizontal(
        self, obj: CelestialObject, instant: Instant, location: Location
    ) -> tuple[float, float]:
        """(azimuth, altitude) for an observer at ``location``."""
        ra, dec = self.equatorial(obj, instant)
        return astro.equatorial_to_horizontal(
            ra, dec, instant.jd, location.latitude_deg, location.longitude_deg
        )

    def rise_set(
        self, obj: CelestialObject, instant: Instant, location: Location
    ) -> tuple[Instant, Instant]:
        """Rise and set on the UTC day of ``instant``.

        Raises:
            EvaluationError: If the object stays up or down all day.
        """
        result = astro.rise_set(
            lambda t: self.equatorial(obj, t),
            instant,
            location.latitude_deg,
            location.longitude_deg,
            rise_set_altitude(obj, self.topocentric),
            altitude=lambda t: self.horizontal(obj, t, location)[1],
        )
        if result is None:
            raise EvaluationError(
                f'{obj.name} never rises or sets on {instant.isoformat()[:10]} at {location}'
            )
        return result

    def separation(
        self, first: CelestialObject, second: CelestialObject, instant: Instant
    ) -> float:
        """Angle between two objects as seen from Earth."""
        ra1, dec1 = self.equatorial(first, instant)
        ra2, dec2 = self.equatorial(second, instant)
        return astro.angular_separation(ra1, dec1, ra2, dec2)
