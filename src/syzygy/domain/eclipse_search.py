# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Search for the next solar eclipse visible from the observer.

Two nested loops over simulated time:

- Outer (bounded): step one day past the current instant, estimate the
  hours to the next new moon from the Moon–Sun phase and their mean
  relative rate, then refine with three Newton corrections on the phase.
- Inner: if the refined new moon has a global eclipse (depth > 0), scan
  ±6 h in 0.1 h steps and keep the instant where the observer is closest
  to the shadow centre while inside the penumbra (plus a 25 km slack).

The Newton correction runs a fixed number of steps with no residual check;
for unusual parameter sets it may settle slightly off the true new moon.
Exhausting the iteration budget returns None, which is a normal outcome.

No external dependencies — only stdlib math/dataclasses/datetime/logging.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from syzygy.domain.constants import EclipseConstants
from syzygy.domain.eclipse_geometry import Astronomy, compute_astronomy
from syzygy.domain.parameters import OrbitalParameters
from syzygy.domain.propagation import derive_simulation_state, synodic_rate_deg_per_hour
from syzygy.domain.vector_math import DEG, great_circle_distance_km

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchConfig:
    """Tunables of the next-local-eclipse search (hours unless noted)."""
    max_iterations: int = 10_000   # ~800 years of lunations
    skip_hours: float = 24.0
    newton_steps: int = 3
    scan_half_window_hours: float = 6.0
    scan_step_hours: float = 0.1
    slack_km: float = 25.0


DEFAULT_SEARCH = SearchConfig()


def _validate(config: SearchConfig) -> None:
    if config.max_iterations <= 0:
        raise ValueError(f"max_iterations must be positive, got {config.max_iterations}")
    if config.scan_step_hours <= 0:
        raise ValueError(f"scan_step_hours must be positive, got {config.scan_step_hours}")
    if config.newton_steps < 0:
        raise ValueError(f"newton_steps must be non-negative, got {config.newton_steps}")


def _astronomy_at(base: OrbitalParameters, sim_hours: float, start: datetime) -> Astronomy:
    return compute_astronomy(derive_simulation_state(base, sim_hours, start))


def refine_new_moon(
    base: OrbitalParameters,
    sim_hours: float,
    start: datetime,
    steps: int = 3,
) -> float:
    """Newton-style corrections of an estimated new-moon instant."""
    rate = synodic_rate_deg_per_hour()
    t = sim_hours
    for _ in range(steps):
        t -= _astronomy_at(base, t, start).moon_to_sun / rate
    return t


def next_new_moon(
    base: OrbitalParameters,
    sim_hours: float,
    start: datetime,
    steps: int = 3,
) -> float:
    """Simulated hours of the first new moon after sim_hours."""
    phase = _astronomy_at(base, sim_hours, start).moon_to_sun
    if phase < 0:
        phase += 360.0
    estimate = sim_hours + (360.0 - phase) / synodic_rate_deg_per_hour()
    return refine_new_moon(base, estimate, start, steps)


def observer_distance_to_shadow_km(base: OrbitalParameters, astro: Astronomy) -> float:
    """Great-circle distance from the observer to the shadow centre."""
    return great_circle_distance_km(
        base.observer_lat, base.observer_lon, astro.central_lat, astro.central_lon,
    )


def scan_local_visibility(
    base: OrbitalParameters,
    new_moon_hours: float,
    start: datetime,
    config: SearchConfig = DEFAULT_SEARCH,
) -> float | None:
    """Best instant near a new moon where the observer is in the penumbra.

    Returns:
        Simulated hours of minimum observer-to-shadow distance among the
        samples inside the penumbra, or None if no sample qualifies.
    """
    count = int(round(2.0 * config.scan_half_window_hours / config.scan_step_hours))
    r_earth = EclipseConstants.R_EARTH_KM
    best_t: float | None = None
    min_distance = float("inf")

    for i in range(count + 1):
        scan_t = new_moon_hours - config.scan_half_window_hours + i * config.scan_step_hours
        astro = _astronomy_at(base, scan_t, start)
        distance = observer_distance_to_shadow_km(base, astro)
        penumbra_km = r_earth * max(0.0, astro.penumbra_radius_deg) * DEG
        if distance <= penumbra_km + config.slack_km and distance < min_distance:
            min_distance = distance
            best_t = scan_t

    return best_t


def find_next_local_eclipse(
    base: OrbitalParameters,
    current_sim_hours: float,
    start: datetime,
    config: SearchConfig = DEFAULT_SEARCH,
    should_stop: Callable[[], bool] | None = None,
) -> float | None:
    """Next simulated-time offset at which an eclipse covers the observer.

    Args:
        base: Snapshot at sim_hours = 0 (includes the observer position).
        current_sim_hours: Simulated hours to search from.
        start: Instant corresponding to sim_hours = 0.
        config: Search tunables; max_iterations bounds the horizon.
        should_stop: Optional callable polled between outer iterations;
            returning True abandons the search.

    Returns:
        Simulated hours of the locally visible eclipse, or None when the
        horizon is exhausted or the search was stopped.

    Raises:
        ValueError: If config has a non-positive iteration count or step.
    """
    _validate(config)
    t = current_sim_hours + config.skip_hours

    for iteration in range(config.max_iterations):
        if should_stop is not None and should_stop():
            logger.info("Eclipse search stopped after %d lunations", iteration)
            return None

        t = next_new_moon(base, t, start, config.newton_steps)
        astro = _astronomy_at(base, t, start)
        logger.debug(
            "New moon at %+.2f h: depth=%.4f class=%s",
            t, astro.depth, astro.eclipse_class.value,
        )

        if astro.depth > 0:
            hit = scan_local_visibility(base, t, start, config)
            if hit is not None:
                logger.info(
                    "Local eclipse found at %+.2f h after %d lunations", hit, iteration + 1,
                )
                return hit

        t += config.skip_hours

    logger.info("No local eclipse within %d lunations", config.max_iterations)
    return None
