# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the vector/matrix kernel."""
import math

import numpy as np
import pytest

from syzygy.domain.constants import EclipseConstants
from syzygy.domain.vector_math import (
    DEG,
    RAD,
    Vector3,
    add,
    angular_separation_deg,
    apply_matrix3,
    clamp,
    cross,
    destination_point,
    dot,
    great_circle_distance_km,
    initial_bearing_deg,
    line_sphere_intersection,
    magnitude,
    normalize,
    normalize180,
    normalize360,
    rotation_matrix_x,
    rotation_matrix_z,
    scale,
    spherical_to_cartesian,
    subtract,
    vector_to_lat_lon,
)


# ── Vector3 ───────────────────────────────────────────────────────

class TestVector3:

    def test_frozen(self):
        v = Vector3(1.0, 2.0, 3.0)
        with pytest.raises(AttributeError):
            v.x = 5.0

    def test_as_tuple(self):
        assert Vector3(1.0, 2.0, 3.0).as_tuple() == (1.0, 2.0, 3.0)


# ── Angle wrapping ────────────────────────────────────────────────

class TestAngleWrapping:

    def test_degree_radian_constants(self):
        assert DEG * RAD == pytest.approx(1.0)

    @pytest.mark.parametrize("angle,expected", [
        (0.0, 0.0), (360.0, 0.0), (-90.0, 270.0), (725.0, 5.0), (-720.0, 0.0),
    ])
    def test_normalize360(self, angle, expected):
        assert normalize360(angle) == pytest.approx(expected)

    def test_normalize360_tiny_negative_stays_below_360(self):
        assert 0.0 <= normalize360(-1e-15) < 360.0

    @pytest.mark.parametrize("angle,expected", [
        (0.0, 0.0), (190.0, -170.0), (-190.0, 170.0), (180.0, 180.0), (-180.0, 180.0), (540.0, 180.0),
    ])
    def test_normalize180(self, angle, expected):
        assert normalize180(angle) == pytest.approx(expected)

    def test_normalize180_range(self):
        for a in np.linspace(-1000.0, 1000.0, 401):
            value = normalize180(float(a))
            assert -180.0 < value <= 180.0

    def test_clamp(self):
        assert clamp(5.0, 0.0, 1.0) == 1.0
        assert clamp(-5.0, 0.0, 1.0) == 0.0
        assert clamp(0.25, 0.0, 1.0) == 0.25


# ── Arithmetic ────────────────────────────────────────────────────

class TestArithmetic:

    def test_add_subtract_scale(self):
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(4.0, 5.0, 6.0)
        assert add(a, b) == Vector3(5.0, 7.0, 9.0)
        assert subtract(b, a) == Vector3(3.0, 3.0, 3.0)
        assert scale(a, 2.0) == Vector3(2.0, 4.0, 6.0)

    def test_dot_cross(self):
        x = Vector3(1.0, 0.0, 0.0)
        y = Vector3(0.0, 1.0, 0.0)
        assert dot(x, y) == 0.0
        assert cross(x, y) == Vector3(0.0, 0.0, 1.0)

    def test_normalize_unit_length(self):
        assert magnitude(normalize(Vector3(3.0, 4.0, 12.0))) == pytest.approx(1.0)

    def test_normalize_zero_vector_falls_back(self):
        """Near-zero vectors normalize to +X instead of raising."""
        assert normalize(Vector3(0.0, 0.0, 0.0)) == Vector3(1.0, 0.0, 0.0)
        assert normalize(Vector3(1e-14, 0.0, 0.0)) == Vector3(1.0, 0.0, 0.0)


# ── Rotations ─────────────────────────────────────────────────────

class TestRotations:

    def test_rotation_x_moves_y_toward_z(self):
        v = apply_matrix3(rotation_matrix_x(90.0), Vector3(0.0, 1.0, 0.0))
        assert v.x == pytest.approx(0.0, abs=1e-12)
        assert v.y == pytest.approx(0.0, abs=1e-12)
        assert v.z == pytest.approx(1.0)

    def test_rotation_z_moves_x_toward_y(self):
        v = apply_matrix3(rotation_matrix_z(90.0), Vector3(1.0, 0.0, 0.0))
        assert v.x == pytest.approx(0.0, abs=1e-12)
        assert v.y == pytest.approx(1.0)

    def test_rotation_is_orthonormal(self):
        m = rotation_matrix_x(23.44) @ rotation_matrix_z(-117.0)
        assert np.allclose(m @ m.T, np.eye(3))

    def test_rotation_preserves_length(self):
        v = Vector3(1.0e5, -2.0e5, 3.0e4)
        rotated = apply_matrix3(rotation_matrix_z(33.0), apply_matrix3(rotation_matrix_x(23.44), v))
        assert magnitude(rotated) == pytest.approx(magnitude(v))


# ── Spherical coordinates ─────────────────────────────────────────

class TestSpherical:

    def test_round_trip(self):
        v = spherical_to_cartesian(384_400.0, 120.0, -4.5)
        lat, lon = vector_to_lat_lon(v)
        assert lat == pytest.approx(-4.5)
        assert lon == pytest.approx(120.0)
        assert magnitude(v) == pytest.approx(384_400.0)

    def test_lon_wraps_into_signed_range(self):
        lat, lon = vector_to_lat_lon(spherical_to_cartesian(1.0, 270.0, 0.0))
        assert lon == pytest.approx(-90.0)

    def test_zero_vector(self):
        assert vector_to_lat_lon(Vector3(0.0, 0.0, 0.0)) == (0.0, 0.0)

    def test_angular_separation(self):
        a = spherical_to_cartesian(1.0, 10.0, 0.0)
        b = spherical_to_cartesian(1.0, 40.0, 0.0)
        assert angular_separation_deg(a, b) == pytest.approx(30.0)

    def test_angular_separation_parallel_vectors(self):
        a = Vector3(2.0, 2.0, 2.0)
        assert angular_separation_deg(a, scale(a, 5.0)) == pytest.approx(0.0, abs=1e-5)


# ── Line–sphere intersection ──────────────────────────────────────

class TestLineSphereIntersection:

    def test_ray_toward_sphere_hits_near_side(self):
        hit = line_sphere_intersection(Vector3(10.0, 0.0, 0.0), Vector3(-1.0, 0.0, 0.0), 1.0)
        assert hit is not None
        assert hit.x == pytest.approx(1.0)

    def test_ray_missing_sphere(self):
        assert line_sphere_intersection(Vector3(10.0, 5.0, 0.0), Vector3(-1.0, 0.0, 0.0), 1.0) is None

    def test_ray_pointing_away(self):
        """Both roots behind the origin → no forward intersection."""
        assert line_sphere_intersection(Vector3(10.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0), 1.0) is None

    def test_origin_inside_sphere_takes_positive_root(self):
        hit = line_sphere_intersection(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), 2.0)
        assert hit is not None
        assert hit.y == pytest.approx(2.0)


# ── Great circles ─────────────────────────────────────────────────

class TestGreatCircle:

    def test_quarter_meridian(self):
        d = great_circle_distance_km(0.0, 0.0, 90.0, 0.0)
        assert d == pytest.approx(EclipseConstants.R_EARTH_KM * math.pi / 2.0)

    def test_zero_distance(self):
        assert great_circle_distance_km(55.0, 37.0, 55.0, 37.0) == pytest.approx(0.0, abs=1e-9)

    def test_custom_radius(self):
        assert great_circle_distance_km(0.0, 0.0, 0.0, 180.0, radius_km=1.0) == pytest.approx(math.pi)

    def test_destination_north(self):
        lat, lon = destination_point(0.0, 20.0, 30.0, 0.0)
        assert lat == pytest.approx(30.0)
        assert lon == pytest.approx(20.0)

    def test_destination_east_on_equator(self):
        lat, lon = destination_point(0.0, 170.0, 20.0, 90.0)
        assert lat == pytest.approx(0.0, abs=1e-9)
        assert lon == pytest.approx(-170.0)

    def test_destination_distance_consistent(self):
        lat, lon = destination_point(40.0, -3.0, 12.0, 57.0)
        d = great_circle_distance_km(40.0, -3.0, lat, lon, radius_km=1.0)
        assert d * RAD == pytest.approx(12.0)

    def test_initial_bearing(self):
        assert initial_bearing_deg(0.0, 0.0, 10.0, 0.0) == pytest.approx(0.0, abs=1e-9)
        assert initial_bearing_deg(0.0, 0.0, 0.0, 10.0) == pytest.approx(90.0)
        assert initial_bearing_deg(0.0, 0.0, 0.0, -10.0) == pytest.approx(270.0)
