"""Command-line queries of astronomical properties of celestial objects.

Resolves a named object (sun, moon, planets, bright stars, or a fixed
``latlong:`` point) and evaluates properties such as equatorial,
horizontal and ecliptic coordinates, distance, magnitude, phase, angular
diameter, rise/set times and separations, at one instant or over a time
sweep, rendered as a terminal table, CSV or JSON.

Positions come from SPICE kernels via cspyce; times use rms-julian.
"""

__version__ = '0.1.0'

__all__: list[str] = ['__version__']
