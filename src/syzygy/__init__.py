# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
syzygy

Solar eclipse geometry engine. Low-order Sun/Moon ephemeris, propagation of
orbital parameters in simulated time, ecliptic → equatorial → Earth-fixed
frames, shadow-axis intersection with a spherical Earth, two-disk
obscuration, umbra/penumbra footprints, eclipse classification, shadow
ground tracks, the observer's topocentric sky, and a search for the next
eclipse visible from a given point.
"""

from syzygy.domain.constants import EclipseConstants
from syzygy.domain.vector_math import (
    DEG,
    RAD,
    Vector3,
    clamp,
    normalize180,
    normalize360,
    great_circle_distance_km,
    destination_point,
)
from syzygy.domain.ephemeris import (
    SunEcliptic,
    MoonEcliptic,
    julian_day,
    julian_centuries,
    greenwich_sidereal_deg,
    mean_obliquity_deg,
    sun_ecliptic_coordinates,
    moon_ecliptic_coordinates,
)
from syzygy.domain.parameters import (
    OrbitalParameters,
    ParameterRange,
    PARAMETER_GROUPS,
    normalize_parameters,
    update_parameters,
    real_parameters,
)
from syzygy.domain.propagation import (
    SimulationState,
    derive_simulation_state,
    state_at_rest,
    advance_sim_hours,
)
from syzygy.domain.eclipse_geometry import (
    EclipseClass,
    Astronomy,
    GeometryFrames,
    SunView,
    overlap_fraction,
    classify_eclipse,
    compute_astronomy,
)
from syzygy.domain.ground_track import (
    GroundTrackConfig,
    GroundTrackPoint,
    iter_ground_track,
    compute_ground_track,
    footprint_outline,
)
from syzygy.domain.model import (
    EclipseModel,
    derive_model,
    derive_model_at,
)
from syzygy.domain.eclipse_search import (
    SearchConfig,
    find_next_local_eclipse,
)
from syzygy.domain.topocentric import (
    HorizontalCoordinates,
    ObserverSky,
    compute_observer_sky,
)
from syzygy.domain.illumination import (
    terminator_lat_deg,
    terminator_line,
)

__all__ = [
    "EclipseConstants",
    "DEG",
    "RAD",
    "Vector3",
    "clamp",
    "normalize180",
    "normalize360",
    "great_circle_distance_km",
    "destination_point",
    "SunEcliptic",
    "MoonEcliptic",
    "julian_day",
    "julian_centuries",
    "greenwich_sidereal_deg",
    "mean_obliquity_deg",
    "sun_ecliptic_coordinates",
    "moon_ecliptic_coordinates",
    "OrbitalParameters",
    "ParameterRange",
    "PARAMETER_GROUPS",
    "normalize_parameters",
    "update_parameters",
    "real_parameters",
    "SimulationState",
    "derive_simulation_state",
    "state_at_rest",
    "advance_sim_hours",
    "EclipseClass",
    "Astronomy",
    "GeometryFrames",
    "SunView",
    "overlap_fraction",
    "classify_eclipse",
    "compute_astronomy",
    "GroundTrackConfig",
    "GroundTrackPoint",
    "iter_ground_track",
    "compute_ground_track",
    "footprint_outline",
    "EclipseModel",
    "derive_model",
    "derive_model_at",
    "SearchConfig",
    "find_next_local_eclipse",
    "HorizontalCoordinates",
    "ObserverSky",
    "compute_observer_sky",
    "terminator_lat_deg",
    "terminator_line",
]
