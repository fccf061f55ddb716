# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Day/night terminator on a spherical Earth."""
import math

from syzygy.domain.vector_math import DEG, RAD, clamp, normalize180

_HALF_PI = math.pi / 2.0


def terminator_lat_deg(lon_deg: float, sub_solar_lat_deg: float, sub_solar_lon_deg: float) -> float:
    """Latitude where the Sun's altitude is zero along a meridian.

    Eight Newton steps on sin(alt)(lat) from the equator; the derivative is
    floored at 1e-6 and latitude kept just inside the poles.
    """
    dec = sub_solar_lat_deg * DEG
    h = normalize180(lon_deg - sub_solar_lon_deg) * DEG
    if abs(math.cos(dec)) < 1e-6:
        return -sub_solar_lat_deg

    lat = 0.0
    for _ in range(8):
        sin_lat = math.sin(lat)
        cos_lat = math.cos(lat)
        f = sin_lat * math.sin(dec) + cos_lat * math.cos(dec) * math.cos(h)
        df = cos_lat * math.sin(dec) - sin_lat * math.cos(dec) * math.cos(h)
        if abs(df) < 1e-6:
            df = -1e-6 if df < 0 else 1e-6
        lat = clamp(lat - f / df, -_HALF_PI + 1e-4, _HALF_PI - 1e-4)

    if not math.isfinite(lat):
        return 0.0
    return lat * RAD


def terminator_line(
    sub_solar_lat_deg: float,
    sub_solar_lon_deg: float,
    step_deg: float = 2.0,
) -> list[tuple[float, float]]:
    """(lat, lon) samples of the terminator from -180° to 180° longitude.

    Raises:
        ValueError: If step_deg is not positive.
    """
    if step_deg <= 0:
        raise ValueError(f"step_deg must be positive, got {step_deg}")
    count = int(round(360.0 / step_deg))
    points = []
    for i in range(count + 1):
        lon = -180.0 + min(360.0, i * step_deg)
        points.append((terminator_lat_deg(lon, sub_solar_lat_deg, sub_solar_lon_deg), lon))
    return points


def is_daylight(
    lat_deg: float,
    lon_deg: float,
    sub_solar_lat_deg: float,
    sub_solar_lon_deg: float,
) -> bool:
    """True when the Sun's centre is above the horizon at (lat, lon)."""
    lat = lat_deg * DEG
    dec = sub_solar_lat_deg * DEG
    h = (lon_deg - sub_solar_lon_deg) * DEG
    return math.sin(lat) * math.sin(dec) + math.cos(lat) * math.cos(dec) * math.cos(h) > 0.0
