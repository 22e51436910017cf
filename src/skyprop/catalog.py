"""Object catalog: sun, moon, planets and named stars, plus fixed-coordinate points."""

from __future__ import annotations

import difflib
import enum
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType

from skyprop.angle_utils import wrap_circle
from skyprop.config import get_star_catalog_path
from skyprop.constants import (
    JUPITER_ID,
    MARS_ID,
    MERCURY_ID,
    MOON_ID,
    NEPTUNE_ID,
    PLUTO_ID,
    SATURN_ID,
    SUN_ID,
    URANUS_ID,
    VENUS_ID,
)
from skyprop.errors import ConfigurationError, ParseError, UnknownObjectError
from skyprop.params import parse_location
from skyprop.stars import read_stars

logger = logging.getLogger(__name__)

FIXED_PREFIX = 'latlong:'


class ObjectKind(enum.Enum):
    SUN = 'sun'
    MOON = 'moon'
    PLANET = 'planet'
    STAR = 'star'
    FIXED = 'fixed coordinate'


@dataclass(frozen=True)
class CelestialObject:
    """A queryable object.

    Solar system bodies carry a NAIF ``body_id``; stars and fixed points carry
    a J2000 position instead (and stars a catalog magnitude).
    """

    name: str
    kind: ObjectKind
    body_id: int | None = None
    ra_deg: float | None = None
    dec_deg: float | None = None
    magnitude: float | None = None

    @property
    def has_fixed_position(self) -> bool:
        return self.kind in (ObjectKind.STAR, ObjectKind.FIXED)


SOLAR_SYSTEM: tuple[CelestialObject, ...] = (
    CelestialObject('Sun', ObjectKind.SUN, body_id=SUN_ID),
    CelestialObject('Moon', ObjectKind.MOON, body_id=MOON_ID),
    CelestialObject('Mercury', ObjectKind.PLANET, body_id=MERCURY_ID),
    CelestialObject('Venus', ObjectKind.PLANET, body_id=VENUS_ID),
    CelestialObject('Mars', ObjectKind.PLANET, body_id=MARS_ID),
    CelestialObject('Jupiter', ObjectKind.PLANET, body_id=JUPITER_ID),
    CelestialObject('Saturn', ObjectKind.PLANET, body_id=SATURN_ID),
    CelestialObject('Uranus', ObjectKind.PLANET, body_id=URANUS_ID),
    CelestialObject('Neptune', ObjectKind.PLANET, body_id=NEPTUNE_ID),
    CelestialObject('Pluto', ObjectKind.PLANET, body_id=PLUTO_ID),
)


def _lookup_keys(name: str) -> list[str]:
    """Lowercase name, plus a space-free variant for multi-word names."""
    key = name.strip().lower()
    keys = [key]
    compact = key.replace(' ', '')
    if compact != key:
        keys.append(compact)
    return keys


def fixed_object(coords: str) -> CelestialObject:
    """Fixed celestial point from ``lat,long`` (declination, right ascension).

    Raises:
        ParseError: If the coordinates do not parse.
    """
    location = parse_location(coords)
    if location is None:
        raise ParseError(coords, 'Fixed coordinates need LAT,LONG')
    return CelestialObject(
        name=f'{FIXED_PREFIX}{coords.strip()}',
        kind=ObjectKind.FIXED,
        ra_deg=wrap_circle(location.longitude_deg),
        dec_deg=location.latitude_deg,
    )


class Catalog:
    """Read-only, case-insensitive mapping of names to objects."""

    def __init__(self, objects: Iterable[CelestialObject]) -> None:
        entries: dict[str, CelestialObject] = {}
        names: list[str] = []
        for obj in objects:
            keys = _lookup_keys(obj.name)
            if any(key in entries for key in keys):
                logger.warning('Duplicate catalog name %r ignored', obj.name)
                continue
            for key in keys:
                entries[key] = obj
            names.append(obj.name)
        self._entries: Mapping[str, CelestialObject] = MappingProxyType(entries)
        self._names = tuple(names)

    @property
    def names(self) -> tuple[str, ...]:
        """Display names in catalog order."""
        return self._names

    def resolve(self, name: str) -> CelestialObject:
        """Return the object for ``name`` (case-insensitive) or a ``latlong:`` point.

        Raises:
            UnknownObjectError: Name not in the catalog; carries close matches
                and the full list of valid names.
            ParseError: Malformed ``latlong:`` coordinates.
        """
        key = name.strip().lower()
        if key.startswith(FIXED_PREFIX):
            return fixed_object(name.strip()[len(FIXED_PREFIX):])
        obj = self._entries.get(key)
        if obj is not None:
            return obj
        suggestions = difflib.get_close_matches(key, list(self._entries), n=3, cutoff=0.6)
        raise UnknownObjectError(
            name,
            suggestions=list(dict.fromkeys(self._entries[s].name for s in suggestions)),
            valid_names=list(self._names),
        )


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """Solar system bodies plus the configured star catalog, built once."""
    path = get_star_catalog_path()
    try:
        stars = read_stars(path)
    except OSError as e:
        raise ConfigurationError(f'Cannot read star catalog {path}: {e}') from e
    objects = list(SOLAR_SYSTEM)
    objects.extend(
        CelestialObject(
            name=star.name,
            kind=ObjectKind.STAR,
            ra_deg=star.ra_deg,
            dec_deg=star.dec_deg,
            magnitude=star.magnitude,
        )
        for star in stars
    )
    return Catalog(objects)
