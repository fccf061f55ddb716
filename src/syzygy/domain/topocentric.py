# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Topocentric observer sky.

Sun and Moon as seen from the observer's point on a spherical Earth:
horizontal coordinates (altitude/azimuth), topocentric separation,
distance-corrected angular radii and the local obscuration of the Sun.
Obscuration is reported only while both bodies are above the horizon
(altitude > -0.8°, a simple refraction allowance) and the observer lies
within the penumbra footprint plus a 25 km margin.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from syzygy.domain.constants import EclipseConstants
from syzygy.domain.eclipse_geometry import overlap_fraction
from syzygy.domain.model import EclipseModel
from syzygy.domain.vector_math import (
    DEG,
    RAD,
    Vector3,
    angular_separation_deg,
    clamp,
    magnitude,
    normalize180,
    normalize360,
    spherical_to_cartesian,
    subtract,
)

_DENOMINATOR_FLOOR = 1e-8

HORIZON_ALTITUDE_DEG: float = -0.8
PENUMBRA_SLACK_KM: float = 25.0


@dataclass(frozen=True)
class HorizontalCoordinates:
    """Altitude above the horizon and azimuth from north (degrees)."""
    altitude_deg: float
    azimuth_deg: float


@dataclass(frozen=True)
class ObserverSky:
    """Sun and Moon in the observer's sky."""
    sun: HorizontalCoordinates
    moon: HorizontalCoordinates
    separation_deg: float
    sun_angular_radius_deg: float
    moon_angular_radius_deg: float
    local_depth: float

    @property
    def sun_above_horizon(self) -> bool:
        return self.sun.altitude_deg > HORIZON_ALTITUDE_DEG

    @property
    def moon_above_horizon(self) -> bool:
        return self.moon.altitude_deg > HORIZON_ALTITUDE_DEG


def horizontal_coordinates(
    observer_lat_deg: float,
    declination_deg: float,
    hour_angle_deg: float,
) -> HorizontalCoordinates:
    """Altitude/azimuth from declination and local hour angle."""
    lat = observer_lat_deg * DEG
    dec = declination_deg * DEG
    ha = hour_angle_deg * DEG

    sin_alt = math.sin(lat) * math.sin(dec) + math.cos(lat) * math.cos(dec) * math.cos(ha)
    altitude = math.asin(clamp(sin_alt, -1.0, 1.0))
    denom = math.cos(altitude) * math.cos(lat)
    if abs(denom) < _DENOMINATOR_FLOOR:
        denom = _DENOMINATOR_FLOOR
    cos_az = clamp((math.sin(dec) - math.sin(altitude) * math.sin(lat)) / denom, -1.0, 1.0)
    azimuth = math.acos(cos_az)
    if math.sin(ha) > 0:
        azimuth = 2.0 * math.pi - azimuth
    return HorizontalCoordinates(altitude_deg=altitude * RAD, azimuth_deg=azimuth * RAD)


def observer_vector(lat_deg: float, lon_deg: float, radius_km: float | None = None) -> Vector3:
    """Earth-fixed position of a surface point."""
    r = radius_km if radius_km is not None else EclipseConstants.R_EARTH_KM
    return spherical_to_cartesian(r, lon_deg, lat_deg)


def topocentric_horizontal(v: Vector3, lat_deg: float, lon_deg: float) -> HorizontalCoordinates:
    """Horizontal coordinates of an Earth-fixed line of sight (east/north/up)."""
    lat = lat_deg * DEG
    lon = lon_deg * DEG
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)
    sin_lon, cos_lon = math.sin(lon), math.cos(lon)

    east = -sin_lon * v.x + cos_lon * v.y
    north = -sin_lat * cos_lon * v.x - sin_lat * sin_lon * v.y + cos_lat * v.z
    up = cos_lat * cos_lon * v.x + cos_lat * sin_lon * v.y + sin_lat * v.z

    horizontal = max(1e-12, math.hypot(east, north))
    return HorizontalCoordinates(
        altitude_deg=math.atan2(up, horizontal) * RAD,
        azimuth_deg=normalize360(math.atan2(east, north) * RAD),
    )


def relative_offset_on_sky(
    sun: HorizontalCoordinates,
    moon: HorizontalCoordinates,
    separation_deg: float,
) -> tuple[float, float]:
    """Moon's (dx, dy) offset from the Sun along the position angle (degrees)."""
    alt_sun = sun.altitude_deg * DEG
    alt_moon = moon.altitude_deg * DEG
    delta_az = normalize180(moon.azimuth_deg - sun.azimuth_deg) * DEG
    position_angle = math.atan2(
        math.sin(delta_az),
        math.cos(alt_sun) * math.tan(alt_moon) - math.sin(alt_sun) * math.cos(delta_az),
    )
    return (
        separation_deg * math.sin(position_angle),
        separation_deg * math.cos(position_angle),
    )


def compute_observer_sky(model: EclipseModel) -> ObserverSky:
    """Observer's view of the Sun and Moon for a derived model."""
    astro = model.astronomy
    lat = model.state.observer_lat
    lon = model.state.observer_lon
    earth_fixed = astro.frames.earth_fixed

    observer = observer_vector(lat, lon)
    sun_topo = subtract(earth_fixed.sun_from_earth_km, observer)
    moon_topo = subtract(earth_fixed.moon_from_earth_km, observer)

    sun_radius = astro.sun_angular_radius_deg * (astro.sun_distance_km / max(1.0, magnitude(sun_topo)))
    moon_radius = astro.moon_angular_radius_deg * (astro.moon_distance_km / max(1.0, magnitude(moon_topo)))
    separation = angular_separation_deg(sun_topo, moon_topo)
    sun = topocentric_horizontal(sun_topo, lat, lon)
    moon = topocentric_horizontal(moon_topo, lat, lon)

    penumbra_km = EclipseConstants.R_EARTH_KM * max(0.0, astro.penumbra_radius_deg) * DEG
    visible = sun.altitude_deg > HORIZON_ALTITUDE_DEG and moon.altitude_deg > HORIZON_ALTITUDE_DEG
    if visible and model.observer_to_shadow_km <= penumbra_km + PENUMBRA_SLACK_KM:
        local_depth = overlap_fraction(sun_radius, moon_radius, separation)
    else:
        local_depth = 0.0

    return ObserverSky(
        sun=sun,
        moon=moon,
        separation_deg=separation,
        sun_angular_radius_deg=sun_radius,
        moon_angular_radius_deg=moon_radius,
        local_depth=local_depth,
    )
