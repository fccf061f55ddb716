# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Vector and matrix kernel.

3D vector arithmetic, rotation matrices about the X and Z axes, line–sphere
intersection and great-circle helpers on a spherical Earth. Every function
is total: inverse trigonometry is clamped to [-1, 1] and normalization of a
near-zero vector returns a fixed unit vector instead of raising.

All angle arguments are in degrees.

External dependency: numpy (allowed in domain layer).
"""
import math
from dataclasses import dataclass

import numpy as np

from syzygy.domain.constants import EclipseConstants

DEG: float = math.pi / 180.0
RAD: float = 180.0 / math.pi

_ZERO_NORM = 1e-12


@dataclass(frozen=True)
class Vector3:
    """Cartesian vector (km, or unitless for directions)."""
    x: float
    y: float
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))


def normalize360(angle_deg: float) -> float:
    """Wrap an angle into [0, 360)."""
    value = math.fmod(angle_deg, 360.0)
    if value < 0.0:
        value += 360.0
    # fmod of a tiny negative number can round back up to 360.0
    if value >= 360.0:
        value -= 360.0
    return value


def normalize180(angle_deg: float) -> float:
    """Wrap an angle into (-180, 180]."""
    value = math.fmod(angle_deg, 360.0)
    if value > 180.0:
        value -= 360.0
    elif value <= -180.0:
        value += 360.0
    return value


# ── Vector arithmetic ─────────────────────────────────────────────

def add(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.x + b.x, a.y + b.y, a.z + b.z)


def subtract(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.x - b.x, a.y - b.y, a.z - b.z)


def scale(v: Vector3, scalar: float) -> Vector3:
    return Vector3(v.x * scalar, v.y * scalar, v.z * scalar)


def dot(a: Vector3, b: Vector3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def magnitude(v: Vector3) -> float:
    return math.sqrt(dot(v, v))


def normalize(v: Vector3) -> Vector3:
    """Unit vector along v, or (1, 0, 0) when |v| < 1e-12."""
    norm = magnitude(v)
    if norm < _ZERO_NORM:
        return Vector3(1.0, 0.0, 0.0)
    return scale(v, 1.0 / norm)


# ── Rotations ─────────────────────────────────────────────────────

def rotation_matrix_x(angle_deg: float) -> np.ndarray:
    """Right-handed rotation about X (ecliptic → equatorial by +obliquity)."""
    c = math.cos(angle_deg * DEG)
    s = math.sin(angle_deg * DEG)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, c, -s],
        [0.0, s, c],
    ])


def rotation_matrix_z(angle_deg: float) -> np.ndarray:
    """Right-handed rotation about Z (equatorial → Earth-fixed by -GMST)."""
    c = math.cos(angle_deg * DEG)
    s = math.sin(angle_deg * DEG)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def apply_matrix3(matrix: np.ndarray, v: Vector3) -> Vector3:
    """Matrix-vector product for a 3x3 matrix."""
    x, y, z = (np.asarray(matrix, dtype=float) @ np.array([v.x, v.y, v.z])).tolist()
    return Vector3(x, y, z)


# ── Spherical coordinates ─────────────────────────────────────────

def spherical_to_cartesian(distance: float, lon_deg: float, lat_deg: float) -> Vector3:
    """Position vector from distance, longitude and latitude."""
    lon = lon_deg * DEG
    lat = lat_deg * DEG
    cos_lat = math.cos(lat)
    return Vector3(
        distance * cos_lat * math.cos(lon),
        distance * cos_lat * math.sin(lon),
        distance * math.sin(lat),
    )


def vector_to_lat_lon(v: Vector3) -> tuple[float, float]:
    """Spherical (lat_deg, lon_deg) of v; longitude in (-180, 180]."""
    norm = magnitude(v)
    if norm < _ZERO_NORM:
        return 0.0, 0.0
    lat_deg = math.asin(clamp(v.z / norm, -1.0, 1.0)) * RAD
    lon_deg = normalize180(math.atan2(v.y, v.x) * RAD)
    return lat_deg, lon_deg


def angular_separation_deg(a: Vector3, b: Vector3) -> float:
    """Angle between two direction vectors (degrees)."""
    cos_sep = clamp(dot(normalize(a), normalize(b)), -1.0, 1.0)
    return math.acos(cos_sep) * RAD


def line_sphere_intersection(
    origin: Vector3,
    direction: Vector3,
    radius: float,
) -> Vector3 | None:
    """Nearest forward intersection of a ray with a sphere at the origin.

    Args:
        origin: Ray origin.
        direction: Unit direction of the ray.
        radius: Sphere radius (same units as origin).

    Returns:
        Intersection point with the smallest positive ray parameter, or
        None if the discriminant is negative or both roots are non-positive.
    """
    b = 2.0 * dot(origin, direction)
    c = dot(origin, origin) - radius * radius
    discriminant = b * b - 4.0 * c
    if discriminant < 0.0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    candidates = [t for t in ((-b - sqrt_disc) / 2.0, (-b + sqrt_disc) / 2.0) if t > 0.0]
    if not candidates:
        return None
    return add(origin, scale(direction, min(candidates)))


# ── Great-circle helpers ──────────────────────────────────────────

def great_circle_distance_km(
    lat_a_deg: float,
    lon_a_deg: float,
    lat_b_deg: float,
    lon_b_deg: float,
    radius_km: float | None = None,
) -> float:
    """Haversine distance between two surface points (km)."""
    r = radius_km if radius_km is not None else EclipseConstants.R_EARTH_KM
    lat1 = lat_a_deg * DEG
    lat2 = lat_b_deg * DEG
    sin_half_lat = math.sin((lat_b_deg - lat_a_deg) * DEG / 2.0)
    sin_half_lon = math.sin((lon_b_deg - lon_a_deg) * DEG / 2.0)
    a = sin_half_lat**2 + math.cos(lat1) * math.cos(lat2) * sin_half_lon**2
    a = clamp(a, 0.0, 1.0)
    return r * 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))


def destination_point(
    lat_deg: float,
    lon_deg: float,
    distance_deg: float,
    bearing_deg: float,
) -> tuple[float, float]:
    """Point reached by travelling an angular distance along a bearing.

    Returns:
        (lat_deg, lon_deg) with longitude in (-180, 180].
    """
    lat1 = lat_deg * DEG
    lon1 = lon_deg * DEG
    dist = distance_deg * DEG
    brg = bearing_deg * DEG

    sin_lat1 = math.sin(lat1)
    cos_lat1 = math.cos(lat1)
    sin_dist = math.sin(dist)
    cos_dist = math.cos(dist)

    lat2 = math.asin(clamp(sin_lat1 * cos_dist + cos_lat1 * sin_dist * math.cos(brg), -1.0, 1.0))
    lon2 = lon1 + math.atan2(
        math.sin(brg) * sin_dist * cos_lat1,
        cos_dist - sin_lat1 * math.sin(lat2),
    )
    return lat2 * RAD, normalize180(lon2 * RAD)


def initial_bearing_deg(
    lat_a_deg: float,
    lon_a_deg: float,
    lat_b_deg: float,
    lon_b_deg: float,
) -> float:
    """Initial great-circle bearing from A to B, in [0, 360)."""
    lat1 = lat_a_deg * DEG
    lat2 = lat_b_deg * DEG
    dlon = (lon_b_deg - lon_a_deg) * DEG
    x = math.sin(dlon) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    return normalize360(math.atan2(x, y) * RAD)
