# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for shadow ground-track sampling and footprint outlines."""
from datetime import datetime, timezone

import pytest

from syzygy.domain.eclipse_geometry import compute_astronomy
from syzygy.domain.ground_track import (
    DEFAULT_GROUND_TRACK,
    GroundTrackConfig,
    GroundTrackPoint,
    compute_ground_track,
    footprint_outline,
    iter_ground_track,
    sample_offsets,
)
from syzygy.domain.parameters import OrbitalParameters
from syzygy.domain.propagation import derive_simulation_state
from syzygy.domain.vector_math import great_circle_distance_km, RAD


START = datetime(2026, 3, 20, 12, tzinfo=timezone.utc)

ECLIPSE_PARAMS = OrbitalParameters(
    ascending_node_lon=100.0,
    sun_ecliptic_lon=100.0,
    moon_node_phase=0.0,
    moon_distance_mode=0.2,
    moon_anomaly=0.0,
)

QUADRATURE_PARAMS = OrbitalParameters(
    ascending_node_lon=100.0,
    sun_ecliptic_lon=100.0,
    moon_node_phase=90.0,
    moon_distance_mode=0.2,
    moon_anomaly=0.0,
)


# ── Config ────────────────────────────────────────────────────────

class TestGroundTrackConfig:

    def test_defaults(self):
        assert DEFAULT_GROUND_TRACK.window_hours == 6.0
        assert DEFAULT_GROUND_TRACK.step_hours == 0.5
        assert DEFAULT_GROUND_TRACK.min_depth == 0.001

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_GROUND_TRACK.step_hours = 1.0

    def test_default_offsets(self):
        offsets = sample_offsets()
        assert len(offsets) == 25
        assert offsets[0] == -6.0
        assert offsets[-1] == 6.0
        assert 0.0 in offsets

    def test_offsets_have_no_drift(self):
        offsets = sample_offsets(GroundTrackConfig(window_hours=1.0, step_hours=0.1))
        assert len(offsets) == 21
        assert offsets[-1] == pytest.approx(1.0, abs=1e-12)

    def test_non_positive_step_raises(self):
        with pytest.raises(ValueError, match="step_hours"):
            sample_offsets(GroundTrackConfig(step_hours=0.0))

    def test_negative_window_raises(self):
        with pytest.raises(ValueError, match="window_hours"):
            sample_offsets(GroundTrackConfig(window_hours=-1.0))


# ── Sampling ──────────────────────────────────────────────────────

class TestGroundTrack:

    def test_non_empty_near_eclipse(self):
        state = derive_simulation_state(ECLIPSE_PARAMS, 0.0, START)
        assert compute_astronomy(state).depth > 0.001
        track = compute_ground_track(state)
        assert len(track) > 0
        assert all(isinstance(p, GroundTrackPoint) for p in track)

    def test_points_re_evaluate_above_threshold(self):
        """Every point keeps depth > 0.001 when its instant is derived on its own."""
        state = derive_simulation_state(ECLIPSE_PARAMS, 2.0, START)
        track = compute_ground_track(state)
        assert track
        for point in track:
            again = compute_astronomy(
                derive_simulation_state(ECLIPSE_PARAMS, state.sim_hours + point.offset_hours, START)
            )
            assert again.depth > 0.001
            assert again.depth == pytest.approx(point.depth)
            assert again.central_lat == pytest.approx(point.lat_deg)
            assert again.central_lon == pytest.approx(point.lon_deg)

    def test_ordered_by_offset(self):
        track = compute_ground_track(derive_simulation_state(ECLIPSE_PARAMS, 0.0, START))
        offsets = [p.offset_hours for p in track]
        assert offsets == sorted(offsets)

    def test_contains_current_instant(self):
        track = compute_ground_track(derive_simulation_state(ECLIPSE_PARAMS, 0.0, START))
        assert 0.0 in [p.offset_hours for p in track]

    def test_shadow_moves_between_samples(self):
        track = compute_ground_track(derive_simulation_state(ECLIPSE_PARAMS, 0.0, START))
        near = [p for p in track if abs(p.offset_hours) <= 1.0]
        assert len(near) >= 3
        assert great_circle_distance_km(near[0].lat_deg, near[0].lon_deg,
                                        near[-1].lat_deg, near[-1].lon_deg) > 0.0

    def test_empty_far_from_eclipse(self):
        state = derive_simulation_state(QUADRATURE_PARAMS, 0.0, START)
        assert compute_ground_track(state) == ()

    def test_iter_is_lazy(self):
        state = derive_simulation_state(ECLIPSE_PARAMS, 0.0, START)
        first = next(iter_ground_track(state))
        assert isinstance(first, GroundTrackPoint)

    def test_higher_threshold_shrinks_track(self):
        state = derive_simulation_state(ECLIPSE_PARAMS, 0.0, START)
        loose = compute_ground_track(state)
        strict = compute_ground_track(state, GroundTrackConfig(min_depth=0.5))
        assert 0 < len(strict) <= len(loose)


# ── Footprint outlines ────────────────────────────────────────────

class TestFootprintOutline:

    def test_closed_ring(self):
        ring = footprint_outline(20.0, 30.0, 10.0, num_points=36)
        assert len(ring) == 37
        assert ring[0] == ring[-1]

    def test_points_at_radius(self):
        for lat, lon in footprint_outline(-35.0, 170.0, 12.5):
            d = great_circle_distance_km(-35.0, 170.0, lat, lon, radius_km=1.0)
            assert d * RAD == pytest.approx(12.5)

    def test_zero_radius_is_empty(self):
        assert footprint_outline(0.0, 0.0, 0.0) == []

    def test_too_few_points_raises(self):
        with pytest.raises(ValueError, match="num_points"):
            footprint_outline(0.0, 0.0, 5.0, num_points=2)
