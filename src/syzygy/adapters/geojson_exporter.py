# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
GeoJSON eclipse exporter.

Exports the shadow centre, ground track, umbra/penumbra footprints,
observer and sub-solar point as a GeoJSON FeatureCollection.
Coordinates follow RFC 7946: [lon, lat].
External dependencies (json, file I/O) are confined to this adapter.
"""
import json
import logging

from syzygy.ports.export import ModelExporter
from syzygy.domain.ground_track import footprint_outline
from syzygy.domain.model import EclipseModel

logger = logging.getLogger(__name__)


def _lon_lat(lat_deg: float, lon_deg: float) -> list[float]:
    return [round(lon_deg, 6), round(lat_deg, 6)]


def _point(lat_deg: float, lon_deg: float, properties: dict) -> dict:
    return {
        'type': 'Feature',
        'geometry': {'type': 'Point', 'coordinates': _lon_lat(lat_deg, lon_deg)},
        'properties': properties,
    }


def _footprint(lat_deg: float, lon_deg: float, radius_deg: float, kind: str) -> dict | None:
    ring = footprint_outline(lat_deg, lon_deg, radius_deg)
    if not ring:
        return None
    return {
        'type': 'Feature',
        'geometry': {
            'type': 'Polygon',
            'coordinates': [[_lon_lat(lat, lon) for lat, lon in ring]],
        },
        'properties': {'kind': kind, 'radius_deg': radius_deg},
    }


class GeoJsonModelExporter(ModelExporter):
    """Exports eclipse geometry as a GeoJSON FeatureCollection."""

    def export(self, model: EclipseModel, path: str) -> int:
        astro = model.astronomy
        state = model.state
        features = []

        if astro.axis_hits_earth or astro.depth > 0:
            features.append(_point(astro.central_lat, astro.central_lon, {
                'kind': 'shadow_centre',
                'eclipse_class': astro.eclipse_class.value,
                'depth': astro.depth,
                'date': state.date.isoformat() if state.date is not None else None,
            }))

        if len(model.track) >= 2:
            features.append({
                'type': 'Feature',
                'geometry': {
                    'type': 'LineString',
                    'coordinates': [_lon_lat(p.lat_deg, p.lon_deg) for p in model.track],
                },
                'properties': {
                    'kind': 'ground_track',
                    'offsets_hours': [p.offset_hours for p in model.track],
                    'depths': [round(p.depth, 6) for p in model.track],
                },
            })

        for radius, kind in (
            (astro.penumbra_radius_deg, 'penumbra'),
            (astro.umbra_radius_deg, 'umbra'),
        ):
            feature = _footprint(astro.central_lat, astro.central_lon, radius, kind)
            if feature is not None:
                features.append(feature)

        features.append(_point(state.observer_lat, state.observer_lon, {
            'kind': 'observer',
            'distance_to_shadow_km': model.observer_to_shadow_km,
        }))
        features.append(_point(astro.sub_solar_lat, astro.sub_solar_lon, {
            'kind': 'sub_solar',
        }))

        collection = {
            'type': 'FeatureCollection',
            'features': features,
        }

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(collection, f, indent=2, ensure_ascii=False)

        logger.info("Wrote %d GeoJSON features to %s", len(features), path)
        return len(features)
