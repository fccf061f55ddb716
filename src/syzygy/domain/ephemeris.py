# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Low-order Sun and Moon ephemeris.

Truncated series after Meeus "Astronomical Algorithms": the Sun from its
mean longitude plus a three-term equation of center (Ch. 25), the Moon from
the leading periodic terms of the ELP-2000/82 series (Ch. 47) driven by the
four fundamental arguments D, M, M', F and the eccentricity factor E(T).
Accuracy is a few arcminutes — adequate for simulation, not for precise
contact timing.

The 2D−2M′ and 2D−M−M′ longitude terms carry the positive signs of Meeus
table 47.A; seeds therefore differ by about 0.1° from series that print
them negative.

Also provides Greenwich mean sidereal time and the mean obliquity of the
ecliptic. All functions are pure functions of the Julian century T (or the
Julian day) and take/return degrees.

No external dependencies — only stdlib math/dataclasses/datetime.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from syzygy.domain.vector_math import DEG, clamp, normalize360

JD_J2000: float = 2451545.0
JD_UNIX_EPOCH: float = 2440587.5
DAYS_PER_CENTURY: float = 36525.0

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class SunEcliptic:
    """Geocentric ecliptic coordinates of the Sun."""
    lon_deg: float
    distance_au: float
    mean_anomaly_deg: float


@dataclass(frozen=True)
class MoonEcliptic:
    """Geocentric ecliptic coordinates of the Moon."""
    lon_deg: float
    lat_deg: float
    distance_km: float
    mean_anomaly_deg: float
    node_lon_deg: float


# ── Time scales ───────────────────────────────────────────────────

def julian_day(epoch: datetime) -> float:
    """Julian day for a datetime; naive datetimes are taken as UTC."""
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)
    return (epoch - _UNIX_EPOCH).total_seconds() / 86400.0 + JD_UNIX_EPOCH


def datetime_from_julian_day(jd: float) -> datetime:
    """UTC datetime for a Julian day (inverse of julian_day)."""
    return _UNIX_EPOCH + timedelta(days=jd - JD_UNIX_EPOCH)


def julian_centuries(jd: float) -> float:
    """Julian centuries since J2000.0."""
    return (jd - JD_J2000) / DAYS_PER_CENTURY


def greenwich_sidereal_deg(jd: float) -> float:
    """Greenwich mean sidereal time (IAU 1982 form), degrees in [0, 360)."""
    t = julian_centuries(jd)
    theta = (
        280.46061837
        + 360.98564736629 * (jd - JD_J2000)
        + 0.000387933 * t * t
        - t**3 / 38710000.0
    )
    return normalize360(theta)


def mean_obliquity_deg(t: float) -> float:
    """Mean obliquity of the ecliptic (degrees)."""
    return 23.439291 - 0.0130042 * t - 0.00000016 * t * t + 0.000000504 * t**3


# ── Sun ───────────────────────────────────────────────────────────

def sun_ecliptic_coordinates(t: float) -> SunEcliptic:
    """Sun's geometric ecliptic longitude and distance.

    Args:
        t: Julian centuries since J2000.0.

    Returns:
        SunEcliptic with longitude (deg), distance (AU), mean anomaly (deg).
    """
    l0 = normalize360(280.46646 + 36000.76983 * t + 0.0003032 * t * t)
    m_deg = normalize360(357.52911 + 35999.05029 * t - 0.0001537 * t * t + t**3 / 24490000.0)
    m = m_deg * DEG

    # Equation of center
    c = (
        (1.914602 - 0.004817 * t - 0.000014 * t * t) * math.sin(m)
        + (0.019993 - 0.000101 * t) * math.sin(2.0 * m)
        + 0.000289 * math.sin(3.0 * m)
    )

    distance_au = 1.00014 - 0.01671 * math.cos(m) - 0.00014 * math.cos(2.0 * m)

    return SunEcliptic(
        lon_deg=normalize360(l0 + c),
        distance_au=distance_au,
        mean_anomaly_deg=m_deg,
    )


# ── Moon ──────────────────────────────────────────────────────────

# (coefficient deg, D, M, M', F) — longitude terms, sine series.
_MOON_LON_TERMS: tuple[tuple[float, int, int, int, int], ...] = (
    (6.289, 0, 0, 1, 0),
    (1.274, 2, 0, -1, 0),
    (0.658, 2, 0, 0, 0),
    (0.214, 0, 0, 2, 0),
    (-0.186, 0, 1, 0, 0),
    (-0.114, 0, 0, 0, 2),
    (0.059, 2, 0, -2, 0),
    (0.057, 2, -1, -1, 0),
    (0.053, 2, 0, 1, 0),
    (0.046, 2, -1, 0, 0),
    (0.041, 0, 1, -1, 0),
    (-0.035, 1, 0, 0, 0),
    (-0.031, 0, 1, 1, 0),
    (-0.015, -2, 0, 0, 2),
    (0.011, 2, 0, -1, -2),
)

# (coefficient deg, D, M, M', F) — latitude terms, sine series.
_MOON_LAT_TERMS: tuple[tuple[float, int, int, int, int], ...] = (
    (5.128, 0, 0, 0, 1),
    (0.280, 0, 0, 1, 1),
    (0.277, 0, 0, 1, -1),
    (0.173, 2, 0, 0, -1),
    (0.055, 2, 0, -1, 1),
    (0.046, 2, 0, -1, -1),
    (0.033, 2, 0, 0, 1),
    (0.017, 0, 0, 2, 1),
    (0.009, 2, 0, 1, -1),
    (0.009, 2, -1, 0, 1),
    (0.008, 2, -1, 0, -1),
)

# (coefficient km, D, M, M', F) — distance terms, cosine series.
_MOON_DIST_TERMS: tuple[tuple[float, int, int, int, int], ...] = (
    (-20905.0, 0, 0, 1, 0),
    (-3699.0, 2, 0, -1, 0),
    (-2956.0, 2, 0, 0, 0),
    (-570.0, 0, 0, 2, 0),
    (246.0, -2, 0, 2, 0),
    (-205.0, -2, 1, 0, 0),
    (-171.0, 2, 0, 1, 0),
    (-152.0, -2, 1, 1, 0),
    (-129.0, -2, 0, 1, 0),
)

_MOON_MEAN_DISTANCE_KM = 385000.56
_MOON_LAT_LIMIT_DEG = 8.5


def _series(terms, d, m, m_prime, f, e, trig) -> float:
    """Sum a periodic series; terms in M are scaled by E^|k|."""
    total = 0.0
    for coeff, kd, km, kmp, kf in terms:
        arg = kd * d + km * m + kmp * m_prime + kf * f
        total += coeff * e ** abs(km) * trig(arg)
    return total


def moon_ecliptic_coordinates(t: float) -> MoonEcliptic:
    """Moon's geocentric ecliptic longitude, latitude and distance.

    Args:
        t: Julian centuries since J2000.0.

    Returns:
        MoonEcliptic; latitude is clamped to ±8.5°.
    """
    t2 = t * t
    t3 = t2 * t
    t4 = t3 * t

    mean_lon = normalize360(
        218.3164477 + 481267.88123421 * t - 0.0015786 * t2 + t3 / 538841.0 - t4 / 65194000.0
    )
    d_deg = normalize360(
        297.8501921 + 445267.1114034 * t - 0.0018819 * t2 + t3 / 545868.0 - t4 / 113065000.0
    )
    m_deg = normalize360(357.5291092 + 35999.0502909 * t - 0.0001536 * t2 + t3 / 24490000.0)
    mp_deg = normalize360(
        134.9633964 + 477198.8675055 * t + 0.0087414 * t2 + t3 / 69699.0 - t4 / 14712000.0
    )
    f_deg = normalize360(
        93.2720950 + 483202.0175233 * t - 0.0036539 * t2 - t3 / 3526000.0 + t4 / 863310000.0
    )
    node_deg = normalize360(125.04452 - 1934.136261 * t + 0.0020708 * t2 + t3 / 450000.0)

    d = d_deg * DEG
    m = m_deg * DEG
    m_prime = mp_deg * DEG
    f = f_deg * DEG
    e = 1.0 - 0.002516 * t - 0.0000074 * t2

    lon = mean_lon + _series(_MOON_LON_TERMS, d, m, m_prime, f, e, math.sin)
    lat = _series(_MOON_LAT_TERMS, d, m, m_prime, f, e, math.sin)
    dist = _MOON_MEAN_DISTANCE_KM + _series(_MOON_DIST_TERMS, d, m, m_prime, f, e, math.cos)

    return MoonEcliptic(
        lon_deg=normalize360(lon),
        lat_deg=clamp(lat, -_MOON_LAT_LIMIT_DEG, _MOON_LAT_LIMIT_DEG),
        distance_km=dist,
        mean_anomaly_deg=mp_deg,
        node_lon_deg=node_deg,
    )
