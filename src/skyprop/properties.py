"""Property registry: aliases, labels, requirements and evaluation."""

from __future__ import annotations

import difflib
import enum
import logging
from dataclasses import dataclass
from types import MappingProxyType

from skyprop import values
from skyprop.backend import AstronomyBackend
from skyprop.catalog import Catalog, CelestialObject, ObjectKind
from skyprop.errors import (
    ParseError,
    RequirementError,
    UnknownPropertyError,
    UnsupportedPropertyError,
)
from skyprop.instant import Instant
from skyprop.params import Location

logger = logging.getLogger(__name__)


class Property(enum.Enum):
    EQUATORIAL = 'equ'
    HORIZONTAL = 'horiz'
    ECLIPTIC = 'ecl'
    DISTANCE = 'dist'
    MAGNITUDE = 'mag'
    PHASE = 'phase'
    PHASE_NAME = 'phasename'
    PHASE_EMOJI = 'phaseemoji'
    ILLUMINATED_FRACTION = 'illumfrac'
    ANGULAR_DIAMETER = 'angdia'
    RISE = 'rise'
    SET = 'set'
    ANGLE_BETWEEN = 'angbetween'


class Requirement(enum.Enum):
    LOCATION = 'location'
    SECONDARY = 'secondary object'


ALIASES = MappingProxyType({
    'equ': Property.EQUATORIAL,
    'equa': Property.EQUATORIAL,
    'equatorial': Property.EQUATORIAL,
    'horiz': Property.HORIZONTAL,
    'horizontal': Property.HORIZONTAL,
    'ecl': Property.ECLIPTIC,
    'ecliptic': Property.ECLIPTIC,
    'dist': Property.DISTANCE,
    'distance': Property.DISTANCE,
    'mag': Property.MAGNITUDE,
    'magnitude': Property.MAGNITUDE,
    'brightness': Property.MAGNITUDE,
    'phase': Property.PHASE,
    'phasename': Property.PHASE_NAME,
    'phaseemoji': Property.PHASE_EMOJI,
    'phasepercent': Property.ILLUMINATED_FRACTION,
    'phaseprecent': Property.ILLUMINATED_FRACTION,
    'illumfrac': Property.ILLUMINATED_FRACTION,
    'angdia': Property.ANGULAR_DIAMETER,
    'rise': Property.RISE,
    'set': Property.SET,
    'angbetween': Property.ANGLE_BETWEEN,
})

LABELS = MappingProxyType({
    Property.EQUATORIAL: 'Coordinates (RA/De)',
    Property.HORIZONTAL: 'Coordinates (Azi/Alt)',
    Property.ECLIPTIC: 'Coordinates (Ecliptic)',
    Property.DISTANCE: 'Distance',
    Property.MAGNITUDE: 'Magnitude',
    Property.PHASE: 'Phase',
    Property.PHASE_NAME: 'Phase Name',
    Property.PHASE_EMOJI: 'Phase Emoji',
    Property.ILLUMINATED_FRACTION: 'Illuminated Frac.',
    Property.ANGULAR_DIAMETER: 'Angular Diameter',
    Property.RISE: 'Rise Time',
    Property.SET: 'Set Time',
    Property.ANGLE_BETWEEN: 'Angle to',
})

JSON_KEYS = MappingProxyType({
    Property.EQUATORIAL: 'equatorial',
    Property.HORIZONTAL: 'horizontal',
    Property.ECLIPTIC: 'ecliptic',
    Property.DISTANCE: 'distance',
    Property.MAGNITUDE: 'magnitude',
    Property.PHASE: 'phase',
    Property.PHASE_NAME: 'phase_name',
    Property.PHASE_EMOJI: 'phase_emoji',
    Property.ILLUMINATED_FRACTION: 'illuminated_fraction',
    Property.ANGULAR_DIAMETER: 'angular_diameter',
    Property.RISE: 'rise',
    Property.SET: 'set',
    Property.ANGLE_BETWEEN: 'angle_to',
})

REQUIREMENTS = MappingProxyType({
    Property.HORIZONTAL: frozenset({Requirement.LOCATION}),
    Property.RISE: frozenset({Requirement.LOCATION}),
    Property.SET: frozenset({Requirement.LOCATION}),
    Property.ANGLE_BETWEEN: frozenset({Requirement.SECONDARY}),
})

_ALL_KINDS = frozenset(ObjectKind)
_BODIES = frozenset({ObjectKind.SUN, ObjectKind.MOON, ObjectKind.PLANET})
_PHASED = frozenset({ObjectKind.MOON, ObjectKind.PLANET})

SUPPORTED_KINDS = MappingProxyType({
    Property.EQUATORIAL: _ALL_KINDS,
    Property.HORIZONTAL: _ALL_KINDS,
    Property.ECLIPTIC: _ALL_KINDS,
    Property.RISE: _ALL_KINDS,
    Property.SET: _ALL_KINDS,
    Property.ANGLE_BETWEEN: _ALL_KINDS,
    Property.DISTANCE: _BODIES,
    Property.ANGULAR_DIAMETER: _BODIES,
    Property.MAGNITUDE: _BODIES | {ObjectKind.STAR},
    Property.PHASE: _PHASED,
    Property.PHASE_NAME: _PHASED,
    Property.PHASE_EMOJI: _PHASED,
    Property.ILLUMINATED_FRACTION: _PHASED,
})

_PHASE_VIEWS = MappingProxyType({
    Property.PHASE: values.PhaseView.FULL,
    Property.PHASE_NAME: values.PhaseView.NAME,
    Property.PHASE_EMOJI: values.PhaseView.EMOJI,
    Property.ILLUMINATED_FRACTION: values.PhaseView.ILLUMINATED,
})


@dataclass(frozen=True)
class PropertySpec:
    """A requested property; ANGLE_BETWEEN carries the object to measure to."""

    prop: Property
    secondary: CelestialObject | None = None

    @property
    def requirements(self) -> frozenset[Requirement]:
        return REQUIREMENTS.get(self.prop, frozenset())

    @property
    def label(self) -> str:
        if self.secondary is not None:
            return f'{LABELS[self.prop]} {self.secondary.name}'
        return LABELS[self.prop]

    @property
    def json_key(self) -> str:
        if self.secondary is not None:
            return f'{JSON_KEYS[self.prop]}_{self.secondary.name.lower().replace(" ", "_")}'
        return JSON_KEYS[self.prop]


def resolve_property(alias: str, catalog: Catalog) -> PropertySpec:
    """Resolve one alias, e.g. ``mag`` or ``angbetween:moon``.

    Raises:
        UnknownPropertyError: Alias not in the table.
        ParseError: ``angbetween`` without an object, or a parameter on any
            other alias.
        UnknownObjectError: The ``angbetween`` object is not in the catalog.
    """
    name, sep, param = alias.strip().partition(':')
    key = name.lower()
    prop = ALIASES.get(key)
    if prop is None:
        raise UnknownPropertyError(
            alias, difflib.get_close_matches(key, list(ALIASES), n=3, cutoff=0.6)
        )
    if prop == Property.ANGLE_BETWEEN:
        if not param.strip():
            raise ParseError(alias, 'angbetween needs an object (angbetween:<object>)')
        return PropertySpec(prop, catalog.resolve(param))
    if sep:
        raise ParseError(alias, f'Property {key} takes no parameter')
    return PropertySpec(prop)


def resolve_properties(aliases: list[str], catalog: Catalog) -> list[PropertySpec]:
    """Resolve aliases in argument order, keeping duplicates."""
    return [resolve_property(alias, catalog) for alias in aliases]


def check_spec(spec: PropertySpec, obj: CelestialObject, location: Location | None) -> None:
    """Verify a property can be evaluated for ``obj`` before any evaluation.

    Raises:
        RequirementError: A location is needed but none was given.
        UnsupportedPropertyError: The property is undefined for the object's
            kind (or for the secondary object's kind).
    """
    if Requirement.LOCATION in spec.requirements and location is None:
        raise RequirementError(f'{spec.label} requires a location (-l)')
    supported = SUPPORTED_KINDS[spec.prop]
    for target in (obj, spec.secondary):
        if target is not None and target.kind not in supported:
            raise UnsupportedPropertyError(spec.label, target.kind.value, target.name)


def evaluate(
    spec: PropertySpec,
    obj: CelestialObject,
    instant: Instant,
    location: Location | None,
    backend: AstronomyBackend,
) -> values.Value:
    """Compute one property of ``obj`` at ``instant``."""
    prop = spec.prop
    if prop == Property.EQUATORIAL:
        return values.Equatorial(*backend.equatorial(obj, instant))
    if prop == Property.HORIZONTAL:
        return values.Horizontal(*backend.horizontal(obj, instant, location))
    if prop == Property.ECLIPTIC:
        return values.Ecliptic(*backend.ecliptic(obj, instant))
    if prop == Property.DISTANCE:
        return values.Distance(backend.distance_au(obj, instant))
    if prop == Property.MAGNITUDE:
        return values.Magnitude(backend.magnitude(obj, instant))
    if prop in _PHASE_VIEWS:
        northern = location is None or location.northern
        return values.Phase(backend.phase_angle(obj, instant), _PHASE_VIEWS[prop], northern)
    if prop == Property.ANGULAR_DIAMETER:
        return values.Angle(backend.angular_diameter(obj, instant))
    if prop in (Property.RISE, Property.SET):
        rise, set_ = backend.rise_set(obj, instant, location)
        return values.Time(rise if prop == Property.RISE else set_)
    if prop == Property.ANGLE_BETWEEN:
        return values.Angle(backend.separation(obj, spec.secondary, instant))
    raise ValueError(f'Unhandled property {prop}')
