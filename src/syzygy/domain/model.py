# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Derived eclipse model.

EclipseModel bundles one simulation state with its geometry, the sampled
ground track and the observer's distance to the shadow centre. It is
recomputed on every evaluation and never persisted.

No external dependencies — only stdlib dataclasses/datetime.
"""
from dataclasses import dataclass
from datetime import datetime

from syzygy.domain.eclipse_geometry import Astronomy, EclipseClass, compute_astronomy
from syzygy.domain.ground_track import (
    DEFAULT_GROUND_TRACK,
    GroundTrackConfig,
    GroundTrackPoint,
    compute_ground_track,
)
from syzygy.domain.parameters import OrbitalParameters
from syzygy.domain.propagation import SimulationState, state_at_rest
from syzygy.domain.vector_math import great_circle_distance_km


@dataclass(frozen=True)
class EclipseModel:
    """Full geometry output for one evaluation."""
    state: SimulationState
    astronomy: Astronomy
    track: tuple[GroundTrackPoint, ...]
    observer_to_shadow_km: float

    @property
    def depth(self) -> float:
        return self.astronomy.depth

    @property
    def eclipse_class(self) -> EclipseClass:
        return self.astronomy.eclipse_class

    @property
    def umbra_radius_deg(self) -> float:
        return self.astronomy.umbra_radius_deg

    @property
    def penumbra_radius_deg(self) -> float:
        return self.astronomy.penumbra_radius_deg

    @property
    def shadow_radius_deg(self) -> float:
        """Radius drawn around the shadow centre (the penumbra)."""
        return self.astronomy.penumbra_radius_deg


def derive_model(
    state: SimulationState,
    track_config: GroundTrackConfig = DEFAULT_GROUND_TRACK,
) -> EclipseModel:
    """Evaluate geometry, ground track and observer distance for a state."""
    astro = compute_astronomy(state)
    return EclipseModel(
        state=state,
        astronomy=astro,
        track=compute_ground_track(state, track_config),
        observer_to_shadow_km=great_circle_distance_km(
            state.observer_lat, state.observer_lon,
            astro.central_lat, astro.central_lon,
        ),
    )


def derive_model_at(
    params: OrbitalParameters,
    epoch: datetime,
    track_config: GroundTrackConfig = DEFAULT_GROUND_TRACK,
) -> EclipseModel:
    """Model for a snapshot at its own instant, with no propagation."""
    return derive_model(state_at_rest(params, epoch), track_config)
