# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the low-order Sun/Moon ephemeris and time scales.

Reference values from Meeus, "Astronomical Algorithms" (2nd ed.),
examples 12.a, 25.a and 47.a.
"""
from datetime import datetime, timezone

import numpy as np
import pytest

from syzygy.domain.ephemeris import (
    _MOON_LON_TERMS,
    JD_J2000,
    MoonEcliptic,
    SunEcliptic,
    datetime_from_julian_day,
    greenwich_sidereal_deg,
    julian_centuries,
    julian_day,
    mean_obliquity_deg,
    moon_ecliptic_coordinates,
    sun_ecliptic_coordinates,
)


# ── Time scales ───────────────────────────────────────────────────

class TestJulianDay:

    def test_j2000(self):
        assert julian_day(datetime(2000, 1, 1, 12, tzinfo=timezone.utc)) == pytest.approx(JD_J2000)

    def test_naive_is_utc(self):
        naive = datetime(2024, 4, 8, 18, 17)
        aware = datetime(2024, 4, 8, 18, 17, tzinfo=timezone.utc)
        assert julian_day(naive) == julian_day(aware)

    def test_meeus_epoch(self):
        assert julian_day(datetime(1987, 4, 10, tzinfo=timezone.utc)) == pytest.approx(2446895.5)

    def test_round_trip(self):
        epoch = datetime(2026, 8, 12, 17, 46, 30, tzinfo=timezone.utc)
        back = datetime_from_julian_day(julian_day(epoch))
        assert abs((back - epoch).total_seconds()) < 1e-3

    def test_centuries(self):
        assert julian_centuries(JD_J2000) == 0.0
        assert julian_centuries(JD_J2000 + 36525.0) == pytest.approx(1.0)


class TestSiderealAndObliquity:

    def test_gmst_meeus_12a(self):
        """1987 Apr 10 0h UT → GMST 13h10m46.3668s."""
        assert greenwich_sidereal_deg(2446895.5) == pytest.approx(197.693195, abs=1e-4)

    def test_gmst_range(self):
        for jd in np.linspace(2440000.0, 2470000.0, 97):
            assert 0.0 <= greenwich_sidereal_deg(float(jd)) < 360.0

    def test_obliquity_j2000(self):
        assert mean_obliquity_deg(0.0) == pytest.approx(23.439291)

    def test_obliquity_decreasing(self):
        assert mean_obliquity_deg(1.0) < mean_obliquity_deg(0.0)


# ── Sun ───────────────────────────────────────────────────────────

class TestSun:

    def test_frozen(self):
        sun = sun_ecliptic_coordinates(0.0)
        assert isinstance(sun, SunEcliptic)
        with pytest.raises(AttributeError):
            sun.lon_deg = 0.0

    def test_meeus_25a(self):
        """1992 Oct 13 0h TD: geometric longitude 199.90988°, R = 0.99766 AU."""
        sun = sun_ecliptic_coordinates(julian_centuries(2448908.5))
        assert sun.lon_deg == pytest.approx(199.90988, abs=1e-3)
        assert sun.distance_au == pytest.approx(0.99766, abs=1e-4)

    def test_distance_bounds(self):
        for t in np.linspace(-0.5, 0.5, 200):
            sun = sun_ecliptic_coordinates(float(t))
            assert 0.982 < sun.distance_au < 1.018
            assert 0.0 <= sun.lon_deg < 360.0

    def test_march_equinox_near_zero_longitude(self):
        jd = julian_day(datetime(2026, 3, 20, 14, 46, tzinfo=timezone.utc))
        lon = sun_ecliptic_coordinates(julian_centuries(jd)).lon_deg
        assert min(lon, 360.0 - lon) < 0.05


# ── Moon ──────────────────────────────────────────────────────────

class TestMoon:

    def test_frozen(self):
        moon = moon_ecliptic_coordinates(0.0)
        assert isinstance(moon, MoonEcliptic)
        with pytest.raises(AttributeError):
            moon.lat_deg = 0.0

    def test_meeus_47a(self):
        """1992 Apr 12 0h TD: λ = 133.1627°, β = -3.2291°, Δ = 368409.7 km."""
        moon = moon_ecliptic_coordinates(julian_centuries(2448724.5))
        assert moon.lon_deg == pytest.approx(133.162655, abs=0.3)
        assert moon.lat_deg == pytest.approx(-3.229126, abs=0.2)
        assert moon.distance_km == pytest.approx(368409.7, abs=1000.0)

    def test_longitude_term_signs_follow_table_47a(self):
        terms = {tuple(args): coeff for coeff, *args in _MOON_LON_TERMS}
        assert terms[(2, 0, -2, 0)] == 0.059
        assert terms[(2, -1, -1, 0)] == 0.057

    def test_ranges(self):
        for t in np.linspace(-1.0, 1.0, 500):
            moon = moon_ecliptic_coordinates(float(t))
            assert 0.0 <= moon.lon_deg < 360.0
            assert abs(moon.lat_deg) <= 5.5
            assert 355_000.0 < moon.distance_km < 408_000.0
            assert 0.0 <= moon.node_lon_deg < 360.0

    def test_node_regresses(self):
        """Mean ascending node moves backwards ~19.3° per year."""
        a = moon_ecliptic_coordinates(0.0).node_lon_deg
        b = moon_ecliptic_coordinates(0.01).node_lon_deg
        assert (a - b) % 360.0 == pytest.approx(19.34136, abs=1e-3)
