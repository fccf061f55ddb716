# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital parameter snapshots.

OrbitalParameters is the immutable input of the propagator: the absolute
orbital angles of the Sun–Moon system plus the observer's position and the
globe orientation. Snapshots come either from the ephemeris for a real date
(real_parameters) or from manual edits (update_parameters); both always
return a normalized snapshot.

No external dependencies — only stdlib dataclasses/datetime.
"""
from dataclasses import dataclass, fields, replace
from datetime import datetime, timezone

from syzygy.domain.constants import EclipseConstants
from syzygy.domain.ephemeris import (
    greenwich_sidereal_deg,
    julian_centuries,
    julian_day,
    moon_ecliptic_coordinates,
    sun_ecliptic_coordinates,
)
from syzygy.domain.vector_math import clamp, normalize180, normalize360

DEFAULT_OBSERVER_LAT: float = 55.0
DEFAULT_OBSERVER_LON: float = 37.0
DEFAULT_OBSERVER_TILT: float = 18.0
MAX_OBSERVER_TILT: float = 65.0


@dataclass(frozen=True)
class OrbitalParameters:
    """Snapshot of the Sun–Moon configuration and observer (degrees)."""
    ascending_node_lon: float
    sun_ecliptic_lon: float
    moon_node_phase: float        # Moon longitude minus node longitude
    moon_distance_mode: float     # 0 = perigee, 1 = apogee
    moon_anomaly: float
    observer_lat: float = DEFAULT_OBSERVER_LAT
    observer_lon: float = DEFAULT_OBSERVER_LON
    observer_tilt: float = DEFAULT_OBSERVER_TILT
    earth_rotation: float = 0.0


@dataclass(frozen=True)
class ParameterRange:
    """Legal range and display metadata of one parameter."""
    key: str
    label: str
    minimum: float
    maximum: float
    step: float
    unit: str


@dataclass(frozen=True)
class ParameterGroup:
    """A titled group of parameter ranges."""
    title: str
    ranges: tuple[ParameterRange, ...]


PARAMETER_GROUPS: tuple[ParameterGroup, ...] = (
    ParameterGroup(
        title="Absolute orbital parameters",
        ranges=(
            ParameterRange("ascending_node_lon", "Ascending node longitude Ω", 0.0, 360.0, 0.1, "°"),
            ParameterRange("sun_ecliptic_lon", "Sun ecliptic longitude λ☉", 0.0, 360.0, 0.1, "°"),
            ParameterRange("moon_node_phase", "Phase from node (λ☾ − Ω)", -180.0, 180.0, 0.1, "°"),
            ParameterRange("moon_distance_mode", "Moon distance (0..1)", 0.0, 1.0, 0.001, ""),
            ParameterRange("moon_anomaly", "Lunar anomaly M☾", 0.0, 360.0, 0.1, "°"),
        ),
    ),
    ParameterGroup(
        title="Observer position",
        ranges=(
            ParameterRange("observer_lat", "Latitude", -90.0, 90.0, 0.5, "°"),
            ParameterRange("observer_lon", "Longitude", -180.0, 180.0, 0.5, "°"),
            ParameterRange("observer_tilt", "Globe tilt", 0.0, MAX_OBSERVER_TILT, 1.0, "°"),
            ParameterRange("earth_rotation", "Earth rotation", 0.0, 360.0, 0.5, "°"),
        ),
    ),
)

_FIELD_NAMES = frozenset(f.name for f in fields(OrbitalParameters))


def parameter_range(key: str) -> ParameterRange:
    """Look up the range of a parameter by field name.

    Raises:
        ValueError: If key is not an OrbitalParameters field.
    """
    for group in PARAMETER_GROUPS:
        for rng in group.ranges:
            if rng.key == key:
                return rng
    raise ValueError(f"Unknown orbital parameter '{key}'")


def normalize_parameters(params: OrbitalParameters) -> OrbitalParameters:
    """Wrap every angle into its canonical range and clamp bounded fields."""
    return OrbitalParameters(
        ascending_node_lon=normalize360(params.ascending_node_lon),
        sun_ecliptic_lon=normalize360(params.sun_ecliptic_lon),
        moon_node_phase=normalize180(params.moon_node_phase),
        moon_distance_mode=clamp(params.moon_distance_mode, 0.0, 1.0),
        moon_anomaly=normalize360(params.moon_anomaly),
        observer_lat=clamp(params.observer_lat, -90.0, 90.0),
        observer_lon=normalize180(params.observer_lon),
        observer_tilt=clamp(params.observer_tilt, 0.0, MAX_OBSERVER_TILT),
        earth_rotation=normalize360(params.earth_rotation),
    )


def update_parameters(base: OrbitalParameters, **changes: float) -> OrbitalParameters:
    """Copy-with-update of a snapshot, normalized.

    Raises:
        ValueError: If a change names a field OrbitalParameters lacks.
    """
    unknown = set(changes) - _FIELD_NAMES
    if unknown:
        raise ValueError(f"Unknown orbital parameter(s): {', '.join(sorted(unknown))}")
    return normalize_parameters(replace(base, **{k: float(v) for k, v in changes.items()}))


def moon_distance_mode_from_km(distance_km: float) -> float:
    """Map a lunar distance onto the perigee (0) .. apogee (1) scale."""
    c = EclipseConstants
    return clamp(
        (distance_km - c.MOON_PERIGEE_KM) / (c.MOON_APOGEE_KM - c.MOON_PERIGEE_KM),
        0.0,
        1.0,
    )


def moon_distance_km_from_mode(mode: float) -> float:
    """Lunar distance for a perigee..apogee mode, clamped to the limits."""
    c = EclipseConstants
    return clamp(
        c.MOON_PERIGEE_KM + mode * (c.MOON_APOGEE_KM - c.MOON_PERIGEE_KM),
        c.MOON_PERIGEE_KM,
        c.MOON_APOGEE_KM,
    )


def real_parameters(
    epoch: datetime | None = None,
    observer_lat: float = DEFAULT_OBSERVER_LAT,
    observer_lon: float = DEFAULT_OBSERVER_LON,
    observer_tilt: float = DEFAULT_OBSERVER_TILT,
) -> OrbitalParameters:
    """Seed a snapshot from the ephemeris for a wall-clock date.

    Args:
        epoch: UTC datetime (defaults to now).
        observer_lat: Observer latitude (degrees).
        observer_lon: Observer longitude (degrees).
        observer_tilt: Globe tilt used by renderers (degrees).

    Returns:
        Normalized OrbitalParameters; earth_rotation is set to GMST so the
        rotation offset at the seed instant is zero.
    """
    if epoch is None:
        epoch = datetime.now(tz=timezone.utc)

    jd = julian_day(epoch)
    t = julian_centuries(jd)
    sun = sun_ecliptic_coordinates(t)
    moon = moon_ecliptic_coordinates(t)
    node = normalize360(moon.node_lon_deg)

    return normalize_parameters(OrbitalParameters(
        ascending_node_lon=node,
        sun_ecliptic_lon=sun.lon_deg,
        moon_node_phase=moon.lon_deg - node,
        moon_distance_mode=moon_distance_mode_from_km(moon.distance_km),
        moon_anomaly=moon.mean_anomaly_deg,
        observer_lat=observer_lat,
        observer_lon=observer_lon,
        observer_tilt=observer_tilt,
        earth_rotation=greenwich_sidereal_deg(jd),
    ))
