"""Tests for sidereal time, frame conversions, separations and rise/set."""

from __future__ import annotations

import math

import pytest

from skyprop.astro import (
    OBLIQUITY_J2000_DEG,
    angular_separation,
    equatorial_to_ecliptic,
    equatorial_to_horizontal,
    gmst_deg,
    rise_set,
)
from skyprop.constants import JD_J2000, RISE_SET_ALTITUDE_DEG
from skyprop.instant import Instant


def test_gmst_at_j2000() -> None:
    assert gmst_deg(JD_J2000) == pytest.approx(280.46061837)


def test_gmst_meeus_example_12a() -> None:
    """1987 April 10, 0h UT: 13h10m46.3668s."""
    assert gmst_deg(2446895.5) == pytest.approx((13 + 10 / 60 + 46.3668 / 3600) * 15.0, abs=1e-4)


def test_object_on_meridian_at_zenith() -> None:
    jd = JD_J2000
    ra = gmst_deg(jd) + 10.0
    _, alt = equatorial_to_horizontal(ra, 40.0, jd, 40.0, 10.0)
    assert alt == pytest.approx(90.0)


def test_celestial_pole_altitude_is_latitude() -> None:
    az, alt = equatorial_to_horizontal(123.0, 90.0, JD_J2000 + 0.3, 51.48, -2.0)
    assert alt == pytest.approx(51.48)
    assert min(az, 360.0 - az) == pytest.approx(0.0, abs=1e-6)


def test_azimuth_measured_from_north_through_east() -> None:
    jd = JD_J2000
    # Six hours east of the meridian on the equator: rising due east
    az, alt = equatorial_to_horizontal(gmst_deg(jd) + 90.0, 0.0, jd, 0.0, 0.0)
    assert az == pytest.approx(90.0)
    assert alt == pytest.approx(0.0, abs=1e-9)


def test_ecliptic_conversion() -> None:
    assert equatorial_to_ecliptic(0.0, 0.0) == pytest.approx((0.0, 0.0))
    lon, lat = equatorial_to_ecliptic(90.0, OBLIQUITY_J2000_DEG)
    assert lon == pytest.approx(90.0)
    assert lat == pytest.approx(0.0, abs=1e-9)
    _, pole_lat = equatorial_to_ecliptic(270.0, 90.0 - OBLIQUITY_J2000_DEG)
    assert pole_lat == pytest.approx(90.0)


def test_angular_separation() -> None:
    assert angular_separation(0.0, 0.0, 90.0, 0.0) == pytest.approx(90.0)
    assert angular_separation(10.0, 20.0, 10.0, 20.0) == pytest.approx(0.0, abs=1e-12)
    assert angular_separation(0.0, 0.0, 180.0, 0.0) == pytest.approx(180.0)
    tiny = 1e-6
    assert angular_separation(0.0, 0.0, 0.0, tiny) == pytest.approx(tiny, rel=1e-6)


def test_rise_set_of_fixed_equatorial_point() -> None:
    """On the equator a fixed point is up for 2*H0 sidereal degrees."""
    day = Instant.from_calendar(2024, 3, 20, 15, 0, 0.0)
    ra = gmst_deg(Instant(day.day, 0.0).jd) + 180.0
    result = rise_set(lambda t: (ra, 0.0), day, 0.0, 0.0, RISE_SET_ALTITUDE_DEG)
    assert result is not None
    rise, set_ = result
    h0 = math.degrees(math.acos(math.sin(math.radians(RISE_SET_ALTITUDE_DEG))))
    rate = 360.985647 / 86400.0
    assert rise.day == day.day and set_.day == day.day
    assert rise.sec == pytest.approx((180.0 - h0) / rate, abs=5.0)
    assert set_.sec == pytest.approx((180.0 + h0) / rate, abs=5.0)



def test_rise_set_refines_with_supplied_altitude() -> None:
    """An object reported one degree lower rises about four minutes later."""
    day = Instant.from_calendar(2024, 3, 20, 15, 0, 0.0)
    ra = gmst_deg(Instant(day.day, 0.0).jd) + 180.0

    def _lowered(t: Instant) -> float:
        return equatorial_to_horizontal(ra, 0.0, t.jd, 0.0, 0.0)[1] - 1.0

    base = rise_set(lambda t: (ra, 0.0), day, 0.0, 0.0, RISE_SET_ALTITUDE_DEG)
    lowered = rise_set(
        lambda t: (ra, 0.0), day, 0.0, 0.0, RISE_SET_ALTITUDE_DEG, altitude=_lowered
    )
    assert base is not None and lowered is not None
    shift = 86400.0 / 360.985647
    assert lowered[0] - base[0] == pytest.approx(shift, abs=5.0)
    assert base[1] - lowered[1] == pytest.approx(shift, abs=5.0)


@pytest.mark.parametrize(('dec', 'lat'), [(80.0, 60.0), (-80.0, 60.0), (30.0, 90.0)])
def test_circumpolar_or_never_rising(dec: float, lat: float) -> None:
    day = Instant.from_calendar(2024, 6, 1)
    assert rise_set(lambda t: (10.0, dec), day, lat, 0.0, RISE_SET_ALTITUDE_DEG) is None
