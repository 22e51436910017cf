"""Typed property values with their terminal/CSV text and JSON forms."""

from __future__ import annotations

import abc
import enum
import math
from dataclasses import dataclass
from typing import Any

from skyprop.angle_utils import format_angle, format_hours, format_latitude, wrap_circle
from skyprop.instant import Instant

PHASE_NAMES = (
    'New',
    'Waxing Crescent',
    'First Quarter',
    'Waxing Gibbous',
    'Full',
    'Waning Gibbous',
    'Last Quarter',
    'Waning Crescent',
)
NORTHERN_EMOJIS = ('🌑', '🌒', '🌓', '🌔', '🌕', '🌖', '🌗', '🌘')
SOUTHERN_EMOJIS = ('🌑', '🌘', '🌗', '🌖', '🌕', '🌔', '🌓', '🌒')


class Value(abc.ABC):
    """A computed property value."""

    @abc.abstractmethod
    def text(self) -> str:
        """Human-readable form used by the term and csv renderers."""

    @abc.abstractmethod
    def json(self) -> Any:
        """JSON-serializable form."""

    def __str__(self) -> str:
        return self.text()


@dataclass(frozen=True)
class Equatorial(Value):
    ra_deg: float
    dec_deg: float

    def text(self) -> str:
        return f'{format_hours(self.ra_deg)} {format_latitude(self.dec_deg)}'

    def json(self) -> dict[str, float]:
        return {'ra': self.ra_deg, 'dec': self.dec_deg}


@dataclass(frozen=True)
class Horizontal(Value):
    azimuth_deg: float
    altitude_deg: float

    def text(self) -> str:
        return f'{format_angle(self.azimuth_deg)} {format_latitude(self.altitude_deg)}'

    def json(self) -> dict[str, float]:
        return {'azimuth': self.azimuth_deg, 'altitude': self.altitude_deg}


@dataclass(frozen=True)
class Ecliptic(Value):
    longitude_deg: float
    latitude_deg: float

    def text(self) -> str:
        return f'{format_angle(self.longitude_deg)} {format_latitude(self.latitude_deg)}'

    def json(self) -> dict[str, float]:
        return {'longitude': self.longitude_deg, 'latitude': self.latitude_deg}


@dataclass(frozen=True)
class Distance(Value):
    au: float

    def text(self) -> str:
        return f'{self.au:.6f} AU'

    def json(self) -> float:
        return self.au


@dataclass(frozen=True)
class Magnitude(Value):
    value: float

    def text(self) -> str:
        return f'{self.value:.2f}'

    def json(self) -> float:
        return self.value


@dataclass(frozen=True)
class Angle(Value):
    """Plain angle in degrees (angular diameter, separation)."""

    deg: float

    def text(self) -> str:
        return format_angle(self.deg)

    def json(self) -> float:
        return self.deg


@dataclass(frozen=True)
class Time(Value):
    instant: Instant

    def text(self) -> str:
        return self.instant.isoformat()

    def json(self) -> str:
        return self.instant.isoformat()


class PhaseView(enum.Enum):
    FULL = 'full'
    NAME = 'name'
    EMOJI = 'emoji'
    ILLUMINATED = 'illuminated'


def illuminated_fraction(phase_deg: float) -> float:
    """Lit fraction of the disk for a phase cycle angle (0 new, 180 full)."""
    return (1.0 - math.cos(math.radians(phase_deg))) / 2.0


def phase_index(phase_deg: float) -> int:
    """Index into PHASE_NAMES for a phase cycle angle.

    Crescent/gibbous boundaries sit at illuminated fractions 0.04, 0.46,
    0.54 and 0.96; the cycle angle past 180 marks the waning half.
    """
    frac = illuminated_fraction(phase_deg)
    waning = wrap_circle(phase_deg) > 180.0
    if frac < 0.04:
        return 0
    if frac >= 0.96:
        return 4
    if 0.46 <= frac < 0.54:
        return 6 if waning else 2
    if frac >= 0.54:
        return 5 if waning else 3
    return 7 if waning else 1


@dataclass(frozen=True)
class Phase(Value):
    """Phase of the moon or a planet, shown one of several ways.

    Emojis are mirrored for observers in the southern hemisphere.
    """

    phase_deg: float
    view: PhaseView = PhaseView.FULL
    northern: bool = True

    @property
    def fraction(self) -> float:
        return illuminated_fraction(self.phase_deg)

    @property
    def name(self) -> str:
        return PHASE_NAMES[phase_index(self.phase_deg)]

    @property
    def emoji(self) -> str:
        emojis = NORTHERN_EMOJIS if self.northern else SOUTHERN_EMOJIS
        return emojis[phase_index(self.phase_deg)]

    def text(self) -> str:
        if self.view == PhaseView.NAME:
            return self.name
        if self.view == PhaseView.EMOJI:
            return self.emoji
        if self.view == PhaseView.ILLUMINATED:
            return f'{self.fraction * 100.0:.1f}%'
        return f'{self.emoji} {self.name} ({self.fraction * 100.0:.1f}%)'

    def json(self) -> Any:
        if self.view == PhaseView.NAME:
            return self.name
        if self.view == PhaseView.EMOJI:
            return self.emoji
        if self.view == PhaseView.ILLUMINATED:
            return self.fraction
        return {'name': self.name, 'emoji': self.emoji, 'illuminated_fraction': self.fraction}
