# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Shadow ground track and footprint outlines.

The ground track is a discrete sample set, not a continuous path: the base
snapshot is re-propagated to a fixed grid of offsets around the current
instant and the shadow-axis point is kept wherever the obscuration depth
exceeds a threshold.

Footprint outlines trace the small circle of a given angular radius around
the shadow centre using great-circle destination points.

No external dependencies — only stdlib math/dataclasses.
"""
from dataclasses import dataclass
from typing import Iterator

from syzygy.domain.eclipse_geometry import compute_astronomy
from syzygy.domain.propagation import SimulationState, derive_simulation_state
from syzygy.domain.vector_math import destination_point


@dataclass(frozen=True)
class GroundTrackConfig:
    """Sampling window around the current instant (simulated hours)."""
    window_hours: float = 6.0
    step_hours: float = 0.5
    min_depth: float = 0.001


@dataclass(frozen=True)
class GroundTrackPoint:
    """Shadow-centre sample."""
    offset_hours: float
    lat_deg: float
    lon_deg: float
    depth: float


DEFAULT_GROUND_TRACK = GroundTrackConfig()


def _validate(config: GroundTrackConfig) -> None:
    if config.step_hours <= 0:
        raise ValueError(f"step_hours must be positive, got {config.step_hours}")
    if config.window_hours < 0:
        raise ValueError(f"window_hours must be non-negative, got {config.window_hours}")


def sample_offsets(config: GroundTrackConfig = DEFAULT_GROUND_TRACK) -> tuple[float, ...]:
    """Offsets -window .. +window inclusive, on an integer step grid."""
    _validate(config)
    count = int(round(2.0 * config.window_hours / config.step_hours))
    return tuple(-config.window_hours + i * config.step_hours for i in range(count + 1))


def iter_ground_track(
    state: SimulationState,
    config: GroundTrackConfig = DEFAULT_GROUND_TRACK,
) -> Iterator[GroundTrackPoint]:
    """Lazily yield shadow-centre samples with depth above config.min_depth.

    Each sample re-propagates state.base to state.sim_hours + offset, so a
    yielded point re-evaluates to the same depth when derived independently.

    Raises:
        ValueError: If the step is not positive or the window is negative.
    """
    for offset in sample_offsets(config):
        sample_state = derive_simulation_state(state.base, state.sim_hours + offset, state.start)
        astro = compute_astronomy(sample_state)
        if astro.depth > config.min_depth:
            yield GroundTrackPoint(
                offset_hours=offset,
                lat_deg=astro.central_lat,
                lon_deg=astro.central_lon,
                depth=astro.depth,
            )


def compute_ground_track(
    state: SimulationState,
    config: GroundTrackConfig = DEFAULT_GROUND_TRACK,
) -> tuple[GroundTrackPoint, ...]:
    """Materialized ground track, ordered by offset."""
    return tuple(iter_ground_track(state, config))


def footprint_outline(
    center_lat_deg: float,
    center_lon_deg: float,
    radius_deg: float,
    num_points: int = 72,
) -> list[tuple[float, float]]:
    """Closed ring of (lat, lon) points on a small circle around a centre.

    Returns:
        num_points + 1 points (first repeated last), or an empty list when
        radius_deg <= 0.

    Raises:
        ValueError: If num_points < 3.
    """
    if num_points < 3:
        raise ValueError(f"num_points must be >= 3, got {num_points}")
    if radius_deg <= 0:
        return []
    ring = [
        destination_point(center_lat_deg, center_lon_deg, radius_deg, 360.0 * i / num_points)
        for i in range(num_points)
    ]
    ring.append(ring[0])
    return ring
