# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Solar eclipse geometry engine.

For one SimulationState:
1. Obliquity and rotation-corrected sidereal angle for the state's instant.
2. Sun and Moon position vectors in the ecliptic frame.
3. Rotation to the equatorial frame (about X by +ε) and to the Earth-fixed
   frame (about Z by -GMST); lunar node and orbit-normal unit vectors.
4. Sub-solar and sub-lunar points.
5. Angular radii and lunar horizontal parallax.
6. True and parallax-corrected ("best") Sun–Moon separation.
7. Obscuration depth from the two-disk overlap.
8. Shadow axis intersection with a spherical Earth (closest approach when
   the axis misses).
9. Penumbra and umbra/antumbra footprint radii on the ground.
10. Eclipse classification.
11. Flat "view from the Sun" projection of the Moon against the Earth.

Every inverse trigonometric call is clamped and every near-zero
normalization falls back to a fixed vector, so no input raises.

External dependency: numpy (allowed in domain layer, via vector_math).
"""
import math
from dataclasses import dataclass
from enum import Enum

from syzygy.domain.constants import EclipseConstants
from syzygy.domain.ephemeris import (
    greenwich_sidereal_deg,
    julian_centuries,
    mean_obliquity_deg,
    sun_ecliptic_coordinates,
)
from syzygy.domain.parameters import moon_distance_km_from_mode
from syzygy.domain.propagation import SimulationState
from syzygy.domain.vector_math import (
    DEG,
    RAD,
    Vector3,
    add,
    angular_separation_deg,
    apply_matrix3,
    clamp,
    cross,
    dot,
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

_C = EclipseConstants

NO_ECLIPSE_DEPTH: float = 0.0005
MAX_FOOTPRINT_RADIUS_DEG: float = 89.5
_MOON_LAT_LIMIT_DEG = 12.0
_POLAR_REFERENCE_THRESHOLD = 0.93


class EclipseClass(Enum):
    NONE = "none"
    PARTIAL = "partial"
    ANNULAR = "annular"
    TOTAL = "total"

    @property
    def label(self) -> str:
        return _CLASS_LABELS[self]


_CLASS_LABELS = {
    EclipseClass.NONE: "No solar eclipse",
    EclipseClass.PARTIAL: "Partial solar eclipse",
    EclipseClass.ANNULAR: "Annular solar eclipse",
    EclipseClass.TOTAL: "Total solar eclipse",
}


@dataclass(frozen=True)
class EclipticFrame:
    """Geocentric ecliptic-frame vectors (km, or unit vectors)."""
    sun_from_earth_km: Vector3
    moon_from_earth_km: Vector3
    earth_from_sun_km: Vector3
    moon_from_sun_km: Vector3
    node_ascending_unit: Vector3
    node_descending_unit: Vector3
    moon_orbit_normal_unit: Vector3


@dataclass(frozen=True)
class EquatorialFrame:
    sun_from_earth_km: Vector3
    moon_from_earth_km: Vector3


@dataclass(frozen=True)
class EarthFixedFrame:
    sun_from_earth_km: Vector3
    moon_from_earth_km: Vector3


@dataclass(frozen=True)
class GeometryFrames:
    """Sun and Moon vectors in the three reference frames."""
    ecliptic: EclipticFrame
    equatorial: EquatorialFrame
    earth_fixed: EarthFixedFrame


@dataclass(frozen=True)
class ShadowAxis:
    """Surface point under the Moon's shadow axis."""
    hits_earth: bool
    lat_deg: float
    lon_deg: float


@dataclass(frozen=True)
class SunView:
    """Moon against the Earth as seen from the Sun (degrees)."""
    offset_x_deg: float
    offset_y_deg: float
    earth_angular_radius_deg: float
    moon_angular_radius_deg: float


@dataclass(frozen=True)
class Astronomy:
    """Geometry-engine output for one instant."""
    gmst_deg: float
    sun_ecliptic_lon: float
    moon_ecliptic_lon: float
    moon_ecliptic_lat: float
    moon_node_phase: float
    moon_anomaly: float
    ascending_node_lon: float
    descending_node_lon: float
    lunar_inclination_deg: float
    moon_distance_km: float
    sun_distance_km: float
    sun_to_node: float
    moon_to_sun: float
    sun_angular_radius_deg: float
    moon_angular_radius_deg: float
    moon_parallax_deg: float
    separation_deg: float
    best_separation_deg: float
    depth: float
    sub_solar_lat: float
    sub_solar_lon: float
    sub_lunar_lat: float
    sub_lunar_lon: float
    central_lat: float
    central_lon: float
    axis_hits_earth: bool
    umbra_radius_deg: float
    penumbra_radius_deg: float
    eclipse_class: EclipseClass
    sun_view: SunView
    frames: GeometryFrames


# ── Photometry and footprint ──────────────────────────────────────

def overlap_fraction(sun_radius: float, moon_radius: float, separation: float) -> float:
    """Fraction of the Sun's disk covered by the Moon's disk.

    Standard two-circle intersection (lens) area divided by the Sun's disk
    area. Radii and separation share any angular unit.

    Returns:
        0 when the disks are disjoint; 1 when the Moon covers the Sun;
        (r_moon / r_sun)² when a smaller Moon lies wholly inside the Sun.
    """
    r1 = sun_radius
    r2 = moon_radius
    d = separation

    if d >= r1 + r2:
        return 0.0
    if d <= abs(r1 - r2):
        if r2 >= r1:
            return 1.0
        return clamp((r2 * r2) / (r1 * r1), 0.0, 1.0)

    r1_sq = r1 * r1
    r2_sq = r2 * r2
    alpha = 2.0 * math.acos(clamp((d * d + r1_sq - r2_sq) / (2.0 * d * r1), -1.0, 1.0))
    beta = 2.0 * math.acos(clamp((d * d + r2_sq - r1_sq) / (2.0 * d * r2), -1.0, 1.0))
    area = 0.5 * r1_sq * (alpha - math.sin(alpha)) + 0.5 * r2_sq * (beta - math.sin(beta))
    return clamp(area / (math.pi * r1_sq), 0.0, 1.0)


def solve_footprint_radius_deg(parallax_deg: float, target_offset_deg: float) -> float:
    """Geocentric radius of the ground region where the topocentric
    Sun–Moon offset stays within target_offset_deg.

    Inverts sin(offset) = sin(parallax) · sin(radius). Clamps to 89.5° when
    the ratio reaches 1.
    """
    if parallax_deg <= 0.0 or target_offset_deg <= 0.0:
        return 0.0
    denominator = math.sin(parallax_deg * DEG)
    if denominator <= 0.0:
        return 0.0
    ratio = math.sin(target_offset_deg * DEG) / denominator
    if ratio >= 1.0:
        return MAX_FOOTPRINT_RADIUS_DEG
    return math.asin(clamp(ratio, -1.0, 1.0)) * RAD


def classify_eclipse(
    best_separation_deg: float,
    sun_radius_deg: float,
    moon_radius_deg: float,
    depth: float,
    axis_hits_earth: bool,
) -> EclipseClass:
    """Eclipse class from disk geometry and whether the axis meets Earth."""
    if depth <= NO_ECLIPSE_DEPTH:
        return EclipseClass.NONE
    radius_diff = abs(moon_radius_deg - sun_radius_deg)
    if axis_hits_earth and best_separation_deg <= radius_diff:
        if moon_radius_deg >= sun_radius_deg:
            return EclipseClass.TOTAL
        return EclipseClass.ANNULAR
    if best_separation_deg < sun_radius_deg + moon_radius_deg:
        return EclipseClass.PARTIAL
    return EclipseClass.NONE


def angular_radius_deg(body_radius_km: float, distance_km: float) -> float:
    """Apparent angular radius of a sphere at a distance."""
    if distance_km <= 0.0:
        return 90.0
    return math.asin(clamp(body_radius_km / distance_km, -1.0, 1.0)) * RAD


# ── Frames ────────────────────────────────────────────────────────

def moon_orbit_normal(node_lon_deg: float, inclination_deg: float | None = None) -> Vector3:
    """Unit normal of the lunar orbit plane in the ecliptic frame."""
    inc = (inclination_deg if inclination_deg is not None else _C.LUNAR_INCLINATION_DEG) * DEG
    omega = node_lon_deg * DEG
    return normalize(Vector3(
        math.sin(inc) * math.sin(omega),
        -math.sin(inc) * math.cos(omega),
        math.cos(inc),
    ))


def build_geometry_frames(
    sun_lon_deg: float,
    moon_lon_deg: float,
    moon_lat_deg: float,
    node_lon_deg: float,
    moon_distance_km: float,
    sun_distance_km: float,
    obliquity_deg: float,
    gmst_deg: float,
) -> GeometryFrames:
    """Ecliptic vectors rotated into equatorial and Earth-fixed frames."""
    sun_ecl = spherical_to_cartesian(sun_distance_km, sun_lon_deg, 0.0)
    moon_ecl = spherical_to_cartesian(moon_distance_km, moon_lon_deg, moon_lat_deg)
    earth_from_sun = scale(sun_ecl, -1.0)

    to_equatorial = rotation_matrix_x(obliquity_deg)
    to_earth_fixed = rotation_matrix_z(-gmst_deg)

    sun_eq = apply_matrix3(to_equatorial, sun_ecl)
    moon_eq = apply_matrix3(to_equatorial, moon_ecl)

    node_asc = spherical_to_cartesian(1.0, node_lon_deg, 0.0)

    return GeometryFrames(
        ecliptic=EclipticFrame(
            sun_from_earth_km=sun_ecl,
            moon_from_earth_km=moon_ecl,
            earth_from_sun_km=earth_from_sun,
            moon_from_sun_km=add(earth_from_sun, moon_ecl),
            node_ascending_unit=node_asc,
            node_descending_unit=scale(node_asc, -1.0),
            moon_orbit_normal_unit=moon_orbit_normal(node_lon_deg),
        ),
        equatorial=EquatorialFrame(
            sun_from_earth_km=sun_eq,
            moon_from_earth_km=moon_eq,
        ),
        earth_fixed=EarthFixedFrame(
            sun_from_earth_km=apply_matrix3(to_earth_fixed, sun_eq),
            moon_from_earth_km=apply_matrix3(to_earth_fixed, moon_eq),
        ),
    )


# ── Shadow axis ───────────────────────────────────────────────────

def _equatorial_to_geographic(v: Vector3, gmst_deg: float) -> tuple[float, float]:
    """(lat, lon) of an equatorial vector, longitude = RA - GMST."""
    dec_deg, ra_deg = vector_to_lat_lon(v)
    return dec_deg, normalize180(normalize360(ra_deg) - gmst_deg)


def shadow_axis_on_earth(
    sun_equatorial_km: Vector3,
    moon_equatorial_km: Vector3,
    gmst_deg: float,
    earth_radius_km: float | None = None,
) -> ShadowAxis:
    """Ground point under the shadow axis (Moon along the anti-solar line).

    When the axis misses the Earth, the point on the surface nearest the
    axis is returned with hits_earth=False.
    """
    r_earth = earth_radius_km if earth_radius_km is not None else _C.R_EARTH_KM
    axis = normalize(scale(sun_equatorial_km, -1.0))
    hit = line_sphere_intersection(moon_equatorial_km, axis, r_earth)

    if hit is not None:
        lat, lon = _equatorial_to_geographic(hit, gmst_deg)
        return ShadowAxis(hits_earth=True, lat_deg=lat, lon_deg=lon)

    t_closest = -dot(moon_equatorial_km, axis)
    closest = add(moon_equatorial_km, scale(axis, t_closest))
    norm = magnitude(closest)
    if norm < 1e-9:
        surface = scale(normalize(scale(moon_equatorial_km, -1.0)), r_earth)
    else:
        surface = scale(closest, r_earth / norm)
    lat, lon = _equatorial_to_geographic(surface, gmst_deg)
    return ShadowAxis(hits_earth=False, lat_deg=lat, lon_deg=lon)


# ── View from the Sun ─────────────────────────────────────────────

def sun_view_projection(sun_equatorial_km: Vector3, moon_equatorial_km: Vector3) -> SunView:
    """Moon's angular offset from Earth's centre as seen from the Sun.

    Builds an orthonormal basis perpendicular to the Sun→Earth direction;
    the reference axis switches from Z to X near the poles of that basis.
    """
    earth_dir = normalize(scale(sun_equatorial_km, -1.0))
    moon_from_sun = subtract(moon_equatorial_km, sun_equatorial_km)
    moon_dir = normalize(moon_from_sun)

    if abs(earth_dir.z) > _POLAR_REFERENCE_THRESHOLD:
        reference = Vector3(1.0, 0.0, 0.0)
    else:
        reference = Vector3(0.0, 0.0, 1.0)
    axis_x = normalize(cross(reference, earth_dir))
    axis_y = normalize(cross(earth_dir, axis_x))

    along = dot(moon_dir, earth_dir)
    return SunView(
        offset_x_deg=math.atan2(dot(moon_dir, axis_x), along) * RAD,
        offset_y_deg=math.atan2(dot(moon_dir, axis_y), along) * RAD,
        earth_angular_radius_deg=angular_radius_deg(_C.R_EARTH_KM, magnitude(sun_equatorial_km)),
        moon_angular_radius_deg=angular_radius_deg(_C.R_MOON_KM, magnitude(moon_from_sun)),
    )


# ── Engine ────────────────────────────────────────────────────────

def compute_astronomy(state: SimulationState, julian_day: float | None = None) -> Astronomy:
    """Run the full geometry pipeline for one simulation state.

    ``julian_day`` overrides the instant carried by ``state`` when given.
    """
    jd = state.julian_day if julian_day is None else julian_day
    t = julian_centuries(jd)
    obliquity = mean_obliquity_deg(t)
    gmst = normalize360(greenwich_sidereal_deg(jd) + state.rotation_offset_deg)

    sun = sun_ecliptic_coordinates(t)
    sun_lon = normalize360(state.sun_ecliptic_lon)
    node_lon = normalize360(state.ascending_node_lon)
    moon_lon = normalize360(state.moon_ecliptic_lon)
    moon_lat = clamp(
        _C.LUNAR_INCLINATION_DEG * math.sin(normalize180(moon_lon - node_lon) * DEG),
        -_MOON_LAT_LIMIT_DEG,
        _MOON_LAT_LIMIT_DEG,
    )
    moon_distance = moon_distance_km_from_mode(state.moon_distance_mode)
    sun_distance = sun.distance_au * _C.AU_KM

    frames = build_geometry_frames(
        sun_lon_deg=sun_lon,
        moon_lon_deg=moon_lon,
        moon_lat_deg=moon_lat,
        node_lon_deg=node_lon,
        moon_distance_km=moon_distance,
        sun_distance_km=sun_distance,
        obliquity_deg=obliquity,
        gmst_deg=gmst,
    )
    sub_solar_lat, sub_solar_lon = vector_to_lat_lon(frames.earth_fixed.sun_from_earth_km)
    sub_lunar_lat, sub_lunar_lon = vector_to_lat_lon(frames.earth_fixed.moon_from_earth_km)

    sun_radius = angular_radius_deg(_C.R_SUN_KM, sun_distance)
    moon_radius = angular_radius_deg(_C.R_MOON_KM, moon_distance)
    moon_parallax = angular_radius_deg(_C.R_EARTH_KM, moon_distance)

    sun_eq = frames.equatorial.sun_from_earth_km
    moon_eq = frames.equatorial.moon_from_earth_km
    separation = angular_separation_deg(sun_eq, moon_eq)
    best_separation = max(0.0, separation - moon_parallax)
    depth = overlap_fraction(sun_radius, moon_radius, best_separation)

    penumbra = solve_footprint_radius_deg(moon_parallax, sun_radius + moon_radius)
    core = solve_footprint_radius_deg(moon_parallax, abs(sun_radius - moon_radius))
    if depth <= 0.0:
        penumbra = 0.0
        core = 0.0

    axis = shadow_axis_on_earth(sun_eq, moon_eq, gmst)

    return Astronomy(
        gmst_deg=gmst,
        sun_ecliptic_lon=sun_lon,
        moon_ecliptic_lon=moon_lon,
        moon_ecliptic_lat=moon_lat,
        moon_node_phase=normalize180(moon_lon - node_lon),
        moon_anomaly=normalize360(state.moon_anomaly),
        ascending_node_lon=node_lon,
        descending_node_lon=normalize360(node_lon + 180.0),
        lunar_inclination_deg=_C.LUNAR_INCLINATION_DEG,
        moon_distance_km=moon_distance,
        sun_distance_km=sun_distance,
        sun_to_node=normalize180(sun_lon - node_lon),
        moon_to_sun=normalize180(moon_lon - sun_lon),
        sun_angular_radius_deg=sun_radius,
        moon_angular_radius_deg=moon_radius,
        moon_parallax_deg=moon_parallax,
        separation_deg=separation,
        best_separation_deg=best_separation,
        depth=depth,
        sub_solar_lat=sub_solar_lat,
        sub_solar_lon=sub_solar_lon,
        sub_lunar_lat=sub_lunar_lat,
        sub_lunar_lon=sub_lunar_lon,
        central_lat=axis.lat_deg,
        central_lon=axis.lon_deg,
        axis_hits_earth=axis.hits_earth,
        umbra_radius_deg=core if axis.hits_earth else 0.0,
        penumbra_radius_deg=penumbra,
        eclipse_class=classify_eclipse(
            best_separation, sun_radius, moon_radius, depth, axis.hits_earth,
        ),
        sun_view=sun_view_projection(sun_eq, moon_eq),
        frames=frames,
    )
