# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Parameter/state propagation in simulated time.

Advances an OrbitalParameters snapshot by a number of simulated hours using
constant mean angular rates (Earth rotation, solar and lunar ecliptic
motion, nodal regression, lunar anomaly). The result is a pure function of
(base, sim_hours, start): any sim_hours — negative or spanning centuries —
can be replayed without accumulated state. The Julian day is carried
arithmetically; `date` is None once the instant leaves the datetime range
(years 1 to 9999).

Also holds the simulation clock: an explicit integrator from real elapsed
seconds and a speed multiplier to simulated hours. Scheduling (animation
frames, timers) stays with the caller.

No external dependencies — only stdlib math/dataclasses/datetime.
"""
import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from syzygy.domain.constants import EclipseConstants
from syzygy.domain.ephemeris import greenwich_sidereal_deg, julian_day
from syzygy.domain.parameters import OrbitalParameters
from syzygy.domain.vector_math import clamp, normalize180, normalize360

_C = EclipseConstants


@dataclass(frozen=True)
class SimulationState:
    """Time-stamped state: base snapshot plus angles advanced to `date`."""
    base: OrbitalParameters
    sim_hours: float
    start: datetime
    date: datetime | None
    julian_day: float
    gmst: float
    earth_rotation: float
    sun_ecliptic_lon: float
    ascending_node_lon: float
    descending_node_lon: float
    moon_node_phase: float
    moon_ecliptic_lon: float
    moon_anomaly: float

    @property
    def observer_lat(self) -> float:
        return self.base.observer_lat

    @property
    def observer_lon(self) -> float:
        return self.base.observer_lon

    @property
    def moon_distance_mode(self) -> float:
        return self.base.moon_distance_mode

    @property
    def rotation_offset_deg(self) -> float:
        """Difference between the simulated globe rotation and true GMST."""
        return normalize180(self.earth_rotation - self.gmst)

    def to_parameters(self) -> OrbitalParameters:
        """Advanced angles as a new snapshot (observer fields carried over)."""
        return replace(
            self.base,
            ascending_node_lon=self.ascending_node_lon,
            sun_ecliptic_lon=self.sun_ecliptic_lon,
            moon_node_phase=self.moon_node_phase,
            moon_anomaly=self.moon_anomaly,
            earth_rotation=self.earth_rotation,
        )


def _calendar_date(start: datetime, sim_hours: float) -> datetime | None:
    """Calendar instant at start + sim_hours, or None outside the datetime range."""
    try:
        return start + timedelta(hours=sim_hours)
    except OverflowError:
        return None


def _build_state(
    base: OrbitalParameters,
    sim_hours: float,
    start: datetime,
    earth_rotation: float,
    sun_ecliptic_lon: float,
    ascending_node_lon: float,
    moon_node_phase: float,
    moon_anomaly: float,
) -> SimulationState:
    date = _calendar_date(start, sim_hours)
    jd = julian_day(start) + sim_hours / 24.0
    node = normalize360(ascending_node_lon)
    phase = normalize180(moon_node_phase)
    return SimulationState(
        base=base,
        sim_hours=sim_hours,
        start=start,
        date=date,
        julian_day=jd,
        gmst=greenwich_sidereal_deg(jd),
        earth_rotation=normalize360(earth_rotation),
        sun_ecliptic_lon=normalize360(sun_ecliptic_lon),
        ascending_node_lon=node,
        descending_node_lon=normalize360(node + 180.0),
        moon_node_phase=phase,
        moon_ecliptic_lon=normalize360(node + phase),
        moon_anomaly=normalize360(moon_anomaly),
    )


def derive_simulation_state(
    base: OrbitalParameters,
    sim_hours: float,
    start: datetime,
) -> SimulationState:
    """Propagate a snapshot by `sim_hours` of simulated time.

    Each base angle advances linearly at its mean rate and is re-wrapped.
    The Moon–node phase advances at the Moon's rate relative to the
    regressing node.

    Args:
        base: Snapshot at the start instant.
        sim_hours: Elapsed simulated hours (any real value).
        start: Instant corresponding to sim_hours = 0.

    Returns:
        SimulationState at start + sim_hours.
    """
    h = sim_hours
    return _build_state(
        base,
        sim_hours,
        start,
        earth_rotation=base.earth_rotation + h * _C.EARTH_ROTATION_RATE,
        sun_ecliptic_lon=base.sun_ecliptic_lon + h * _C.SUN_ECLIPTIC_RATE,
        ascending_node_lon=base.ascending_node_lon + h * _C.NODE_REGRESSION_RATE,
        moon_node_phase=base.moon_node_phase + h * (_C.MOON_ECLIPTIC_RATE - _C.NODE_REGRESSION_RATE),
        moon_anomaly=base.moon_anomaly + h * _C.MOON_ANOMALY_RATE,
    )


def state_at_rest(params: OrbitalParameters, epoch: datetime) -> SimulationState:
    """State for a snapshot at its own instant, without applying any rates."""
    return _build_state(
        params,
        0.0,
        epoch,
        earth_rotation=params.earth_rotation,
        sun_ecliptic_lon=params.sun_ecliptic_lon,
        ascending_node_lon=params.ascending_node_lon,
        moon_node_phase=params.moon_node_phase,
        moon_anomaly=params.moon_anomaly,
    )


def synodic_rate_deg_per_hour() -> float:
    """Mean rate of the Moon relative to the Sun in ecliptic longitude."""
    return _C.MOON_ECLIPTIC_RATE - _C.SUN_ECLIPTIC_RATE


# ── Simulation clock ──────────────────────────────────────────────

SPEED_MIN: float = 1.0
SPEED_MAX: float = 10_000_000.0
SPEED_PRESETS: tuple[float, ...] = (1.0, 60.0, 3600.0, 86400.0, 604800.0, 10_000_000.0)


def advance_sim_hours(
    previous_sim_hours: float,
    real_elapsed_seconds: float,
    speed: float,
) -> float:
    """Integrate simulated time over one tick of real time.

    Args:
        previous_sim_hours: Simulated hours before the tick.
        real_elapsed_seconds: Wall-clock seconds since the previous tick.
        speed: Simulated seconds per real second, clamped to
            [SPEED_MIN, SPEED_MAX].

    Returns:
        Simulated hours after the tick.
    """
    rate = clamp(speed, SPEED_MIN, SPEED_MAX)
    return previous_sim_hours + real_elapsed_seconds / 3600.0 * rate


def speed_to_slider(speed: float) -> float:
    """Map a speed onto a 0..100 logarithmic slider position."""
    lo = math.log10(SPEED_MIN)
    hi = math.log10(SPEED_MAX)
    value = clamp(speed, SPEED_MIN, SPEED_MAX)
    return (math.log10(value) - lo) / (hi - lo) * 100.0


def slider_to_speed(slider_value: float) -> float:
    """Inverse of speed_to_slider, rounded to a whole multiplier."""
    lo = math.log10(SPEED_MIN)
    hi = math.log10(SPEED_MAX)
    value = lo + clamp(slider_value, 0.0, 100.0) / 100.0 * (hi - lo)
    return float(max(1, round(10.0**value)))
