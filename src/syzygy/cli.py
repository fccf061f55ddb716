# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for solar eclipse geometry.

Usage:
    # Geometry for now, from the default observer
    syzygy

    # A given instant and observer, 3 simulated hours later
    syzygy --date 2026-08-12T17:45:00Z --lat 43.3 --lon -5.8 --hours 3

    # Search for the next eclipse visible from the observer
    syzygy --date 2026-01-01T00:00:00Z --lat 40.4 --lon -3.7 --next-eclipse

    # Export to JSON or GeoJSON
    syzygy --export-json model.json --export-geojson eclipse.geojson
"""
import argparse
import logging
import sys
from datetime import datetime, timezone

from syzygy.domain.eclipse_search import SearchConfig, find_next_local_eclipse
from syzygy.domain.model import EclipseModel, derive_model
from syzygy.domain.parameters import (
    DEFAULT_OBSERVER_LAT,
    DEFAULT_OBSERVER_LON,
    real_parameters,
)
from syzygy.domain.propagation import derive_simulation_state
from syzygy.domain.topocentric import compute_observer_sky
from syzygy.adapters import JsonModelExporter, GeoJsonModelExporter


def parse_date(text: str | None) -> datetime:
    """
    Parse an ISO-8601 instant; naive values are taken as UTC.

    Raises:
        ValueError: If the text is not a valid ISO-8601 date.
    """
    if text is None:
        return datetime.now(tz=timezone.utc)
    cleaned = text.strip()
    if cleaned.endswith(('Z', 'z')):
        cleaned = cleaned[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError:
        raise ValueError(f"Invalid date '{text}' (expected ISO-8601)") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def run(
    start: datetime,
    hours: float = 0.0,
    lat: float = DEFAULT_OBSERVER_LAT,
    lon: float = DEFAULT_OBSERVER_LON,
    next_eclipse: bool = False,
    max_iterations: int = 10000,
) -> tuple[EclipseModel, float | None]:
    """
    Seed parameters from the ephemeris at `start` and derive the model.

    With next_eclipse the model is evaluated at the next locally visible
    eclipse instead of at `hours`.

    Returns:
        (model, found_hours) — the derived model and the simulated hours of
        the eclipse found (None when no search ran or nothing was found).
    """
    base = real_parameters(start, observer_lat=lat, observer_lon=lon)
    found: float | None = None

    if next_eclipse:
        config = SearchConfig(max_iterations=max_iterations)
        found = find_next_local_eclipse(base, hours, start, config)
        if found is not None:
            hours = found

    state = derive_simulation_state(base, hours, start)
    return derive_model(state), found


def format_summary(model: EclipseModel) -> str:
    """Plain-text summary of a derived model."""
    astro = model.astronomy
    state = model.state
    sky = compute_observer_sky(model)

    if state.date is not None:
        date_text = state.date.astimezone(timezone.utc).isoformat()
    else:
        date_text = f"JD {state.julian_day:.5f} (outside calendar range)"

    lines = [
        f"Date (UTC):          {date_text}",
        f"Simulated hours:     {state.sim_hours:+.2f}",
        f"Eclipse:             {astro.eclipse_class.label}",
        f"Depth:               {astro.depth * 100.0:.1f}%",
        f"Sun/Moon separation: {astro.separation_deg:.3f}° "
        f"(best {astro.best_separation_deg:.3f}°)",
        f"Sun radius:          {astro.sun_angular_radius_deg:.4f}°",
        f"Moon radius:         {astro.moon_angular_radius_deg:.4f}°",
        f"Moon distance:       {astro.moon_distance_km:,.0f} km",
        f"Sub-solar point:     {astro.sub_solar_lat:+.2f}, {astro.sub_solar_lon:+.2f}",
    ]
    if astro.depth > 0:
        lines += [
            f"Shadow centre:       {astro.central_lat:+.2f}, {astro.central_lon:+.2f}"
            + ("" if astro.axis_hits_earth else " (axis misses Earth)"),
            f"Penumbra radius:     {astro.penumbra_radius_deg:.2f}°",
            f"Umbra radius:        {astro.umbra_radius_deg:.2f}°",
            f"Ground track points: {len(model.track)}",
            f"Observer to shadow:  {model.observer_to_shadow_km:,.0f} km",
        ]
    lines += [
        f"Observer:            {state.observer_lat:+.2f}, {state.observer_lon:+.2f}",
        f"  Sun  alt/az:       {sky.sun.altitude_deg:+.1f}° / {sky.sun.azimuth_deg:.1f}°",
        f"  Moon alt/az:       {sky.moon.altitude_deg:+.1f}° / {sky.moon.azimuth_deg:.1f}°",
        f"  Local obscuration: {sky.local_depth * 100.0:.1f}%",
    ]
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(
        description="Solar eclipse geometry for a date and observer"
    )
    parser.add_argument(
        '--date',
        help="Start instant, ISO-8601 (default: now, UTC)"
    )
    parser.add_argument(
        '--hours', type=float, default=0.0,
        help="Simulated hours after the start instant (default: 0)"
    )
    parser.add_argument(
        '--lat', type=float, default=DEFAULT_OBSERVER_LAT,
        help=f"Observer latitude in degrees (default: {DEFAULT_OBSERVER_LAT:g})"
    )
    parser.add_argument(
        '--lon', type=float, default=DEFAULT_OBSERVER_LON,
        help=f"Observer longitude in degrees (default: {DEFAULT_OBSERVER_LON:g})"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Enable debug logging"
    )

    search_group = parser.add_argument_group('eclipse search')
    search_group.add_argument(
        '--next-eclipse', action='store_true', default=False,
        help="Jump to the next eclipse visible from the observer"
    )
    search_group.add_argument(
        '--max-iterations', type=int, default=10000,
        help="Maximum lunations to examine (default: 10000)"
    )

    export_group = parser.add_argument_group('export')
    export_group.add_argument(
        '--export-json',
        help="Export the full model to JSON"
    )
    export_group.add_argument(
        '--export-geojson',
        help="Export shadow, track and footprints to GeoJSON (FeatureCollection)"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        start = parse_date(args.date)
        model, found = run(
            start=start,
            hours=args.hours,
            lat=args.lat,
            lon=args.lon,
            next_eclipse=args.next_eclipse,
            max_iterations=args.max_iterations,
        )

        if args.next_eclipse:
            if found is None:
                print(f"No eclipse visible from the observer within {args.max_iterations} lunations.")
            else:
                when = model.state.date
                label = when.isoformat() if when is not None else f"JD {model.state.julian_day:.5f}"
                print(f"Next local eclipse: {label} ({found:+.2f} h)")

        print(format_summary(model))

        if args.export_json:
            count = JsonModelExporter().export(model, args.export_json)
            print(f"Exported {count} sections to {args.export_json}")

        if args.export_geojson:
            count = GeoJsonModelExporter().export(model, args.export_geojson)
            print(f"Exported {count} features to {args.export_geojson}")

    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
