# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON eclipse model exporter.

Writes the derived model (parameters, simulation state, geometry summary,
ground track) as one JSON document for external renderers.
External dependencies (json, file I/O) are confined to this adapter.
"""
import json
import logging

from syzygy.ports.export import ModelExporter
from syzygy.domain.model import EclipseModel
from syzygy.domain.vector_math import Vector3

logger = logging.getLogger(__name__)


def _vec(v: Vector3) -> list[float]:
    return [round(c, 3) for c in v.as_tuple()]


def model_to_dict(model: EclipseModel) -> dict:
    """Plain-dict view of an EclipseModel suitable for json.dump."""
    state = model.state
    astro = model.astronomy
    base = state.base
    frames = astro.frames

    return {
        'parameters': {
            'ascending_node_lon': base.ascending_node_lon,
            'sun_ecliptic_lon': base.sun_ecliptic_lon,
            'moon_node_phase': base.moon_node_phase,
            'moon_distance_mode': base.moon_distance_mode,
            'moon_anomaly': base.moon_anomaly,
            'observer_lat': base.observer_lat,
            'observer_lon': base.observer_lon,
            'observer_tilt': base.observer_tilt,
            'earth_rotation': base.earth_rotation,
        },
        'state': {
            'start': state.start.isoformat(),
            'date': state.date.isoformat() if state.date is not None else None,
            'sim_hours': state.sim_hours,
            'julian_day': state.julian_day,
            'gmst_deg': state.gmst,
            'earth_rotation': state.earth_rotation,
            'sun_ecliptic_lon': state.sun_ecliptic_lon,
            'moon_ecliptic_lon': state.moon_ecliptic_lon,
            'moon_node_phase': state.moon_node_phase,
            'moon_anomaly': state.moon_anomaly,
            'ascending_node_lon': state.ascending_node_lon,
            'descending_node_lon': state.descending_node_lon,
        },
        'eclipse': {
            'class': astro.eclipse_class.value,
            'label': astro.eclipse_class.label,
            'depth': astro.depth,
            'separation_deg': astro.separation_deg,
            'best_separation_deg': astro.best_separation_deg,
            'sun_angular_radius_deg': astro.sun_angular_radius_deg,
            'moon_angular_radius_deg': astro.moon_angular_radius_deg,
            'moon_parallax_deg': astro.moon_parallax_deg,
            'moon_distance_km': astro.moon_distance_km,
            'sun_distance_km': astro.sun_distance_km,
            'axis_hits_earth': astro.axis_hits_earth,
            'central_lat': astro.central_lat,
            'central_lon': astro.central_lon,
            'umbra_radius_deg': astro.umbra_radius_deg,
            'penumbra_radius_deg': astro.penumbra_radius_deg,
            'sub_solar': [astro.sub_solar_lat, astro.sub_solar_lon],
            'sub_lunar': [astro.sub_lunar_lat, astro.sub_lunar_lon],
            'observer_to_shadow_km': model.observer_to_shadow_km,
        },
        'sun_view': {
            'offset_x_deg': astro.sun_view.offset_x_deg,
            'offset_y_deg': astro.sun_view.offset_y_deg,
            'earth_angular_radius_deg': astro.sun_view.earth_angular_radius_deg,
            'moon_angular_radius_deg': astro.sun_view.moon_angular_radius_deg,
        },
        'frames_km': {
            'ecliptic': {
                'sun': _vec(frames.ecliptic.sun_from_earth_km),
                'moon': _vec(frames.ecliptic.moon_from_earth_km),
            },
            'equatorial': {
                'sun': _vec(frames.equatorial.sun_from_earth_km),
                'moon': _vec(frames.equatorial.moon_from_earth_km),
            },
            'earth_fixed': {
                'sun': _vec(frames.earth_fixed.sun_from_earth_km),
                'moon': _vec(frames.earth_fixed.moon_from_earth_km),
            },
        },
        'ground_track': [
            {
                'offset_hours': p.offset_hours,
                'lat_deg': round(p.lat_deg, 6),
                'lon_deg': round(p.lon_deg, 6),
                'depth': round(p.depth, 6),
            }
            for p in model.track
        ],
    }


class JsonModelExporter(ModelExporter):
    """Exports an eclipse model as a single JSON document."""

    def export(self, model: EclipseModel, path: str) -> int:
        document = model_to_dict(model)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=2, ensure_ascii=False)

        logger.info("Wrote eclipse model JSON to %s", path)
        return len(document)
