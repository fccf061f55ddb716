# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Physical constants and mean angular rates for the Sun–Earth–Moon system.

All distances in kilometers, all rates in degrees per hour.
No external dependencies — only stdlib dataclasses.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class _EclipseConstants:
    """Body sizes, lunar distance limits and mean angular rates."""
    AU_KM: float = 149_597_870.7
    R_EARTH_KM: float = 6371.0
    R_SUN_KM: float = 695_700.0
    R_MOON_KM: float = 1737.4
    MOON_PERIGEE_KM: float = 363_300.0
    MOON_APOGEE_KM: float = 405_500.0
    LUNAR_INCLINATION_DEG: float = 5.145
    # Mean rates (deg/h)
    EARTH_ROTATION_RATE: float = 15.041067
    SUN_ECLIPTIC_RATE: float = 360.0 / (365.2422 * 24.0)
    MOON_ECLIPTIC_RATE: float = 13.176358 / 24.0
    MOON_ANOMALY_RATE: float = 0.549
    NODE_REGRESSION_RATE: float = -(360.0 / (18.613 * 365.2422 * 24.0))


EclipseConstants: _EclipseConstants = _EclipseConstants()
