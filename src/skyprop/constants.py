"""Fixed constants: body IDs, time and angle units, rise/set altitudes, magnitudes."""

# Body IDs (NAIF). Outer planets use system barycenters, which the small
# DE kernels carry.
SUN_ID = 10
MERCURY_ID = 199
VENUS_ID = 299
EARTH_ID = 399
MOON_ID = 301
MARS_ID = 4
JUPITER_ID = 5
SATURN_ID = 6
URANUS_ID = 7
NEPTUNE_ID = 8
PLUTO_ID = 9

# Time: seconds per unit (for step conversion and sexagesimal)
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
SECONDS_PER_WEEK = 7.0 * SECONDS_PER_DAY
MONTHS_PER_YEAR = 12

# Julian date of 2000-01-01T00:00:00 (day 0 of the rms-julian day count)
JD_OF_DAY_ZERO = 2451544.5
# Days from 1970-01-01 to 2000-01-01
UNIX_DAY_OF_DAY_ZERO = 10957
# J2000.0 epoch as a Julian date
JD_J2000 = 2451545.0

# Angle: degrees per circle and sexagesimal (DMS/arcmin/arcsec)
DEGREES_PER_CIRCLE = 360.0
HALF_CIRCLE_DEGREES = 180.0
ARCMIN_PER_DEGREE = 60.0
ARCSEC_PER_DEGREE = 3600.0
DEGREES_PER_HOUR_RA = 15.0  # right ascension: 360° / 24 h

AU_KM = 149597870.7

# Standard altitudes (degrees) of the body's reference point at rise/set
RISE_SET_ALTITUDE_DEG = -0.5667
SUN_RISE_SET_ALTITUDE_DEG = -0.8333
MOON_RISE_SET_ALTITUDE_DEG = 0.125
# Moon seen from the surface: refraction plus mean semidiameter, no parallax term
MOON_TOPOCENTRIC_RISE_SET_ALTITUDE_DEG = -0.8333

# Visual magnitude models (Astronomical Almanac / Mallama). Each entry is
# V(1,0) followed by polynomial coefficients in the phase angle i (degrees):
# V = V(1,0) + c1*i + c2*i**2 + c3*i**3 + 5*log10(r*delta).
SUN_ABSOLUTE_MAGNITUDE_1AU = -26.74
MOON_MAGNITUDE_MODEL = (0.23, 0.026, 4.0e-9)  # V(1,0), linear, quartic
PLANET_MAGNITUDE_MODELS: dict[int, tuple[float, ...]] = {
    MERCURY_ID: (-0.42, 0.0380, -0.000273, 0.000002),
    VENUS_ID: (-4.40, 0.0009, 0.000239, -0.00000065),
    MARS_ID: (-1.52, 0.016),
    JUPITER_ID: (-9.40, 0.005),
    SATURN_ID: (-8.88,),
    URANUS_ID: (-7.19,),
    NEPTUNE_ID: (-6.87,),
    PLUTO_ID: (-1.00,),
}
