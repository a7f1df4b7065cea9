# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for the tracking engine.

Usage:
    # Show configured groups and their cache status
    satwatch --list-groups

    # Current positions of the ISS and the GPS constellation
    satwatch --group ISS --group GPS

    # Positions at a given time, plus sky track and passes over a station
    satwatch --group ISS --time 2026-03-01T12:00:00Z \\
        --station 52.37,4.90,0.01 --passes 24
"""
import argparse
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

from satwatch.adapters.celestrak import DEFAULT_TIMEOUT_S, CelesTrakAdapter
from satwatch.adapters.element_cache import ElementCache
from satwatch.adapters.sgp4_propagator import SGP4Propagator
from satwatch.config import (
    DEFAULT_CACHE_LIFETIME,
    DEFAULT_GROUPS,
    TrackerConfig,
    default_cache_dir,
)
from satwatch.domain.access_windows import compute_pass_times
from satwatch.domain.elements import parse_epoch
from satwatch.domain.observation import GroundStation
from satwatch.domain.sim_time import SimulationClock
from satwatch.domain.sky_track import compute_sky_track
from satwatch.roster import GroupRoster

FETCH_TIMEOUT_S = 60.0


def parse_station(text: str) -> GroundStation:
    """Parse 'LAT,LON[,ALT_KM]' into a GroundStation."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) not in (2, 3):
        raise ValueError(f"Station must be LAT,LON[,ALT_KM], got {text!r}")
    lat, lon = float(parts[0]), float(parts[1])
    alt = float(parts[2]) if len(parts) == 3 else 0.0
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"Station latitude must be in [-90, 90], got {lat}")
    if not -180.0 <= lon <= 180.0:
        raise ValueError(f"Station longitude must be in [-180, 180], got {lon}")
    return GroundStation(name="Station", lat_deg=lat, lon_deg=lon, alt_km=alt)


def build_roster(config: TrackerConfig) -> GroupRoster:
    cache = ElementCache(config.cache_dir, config.cache_lifetime)
    source = CelesTrakAdapter(timeout=config.request_timeout_s)
    return GroupRoster(
        config.groups, source, cache, SGP4Propagator(),
        stale_fallback=config.stale_fallback,
    )


def list_groups(config: TrackerConfig) -> None:
    cache = ElementCache(config.cache_dir, config.cache_lifetime)
    for spec in config.groups:
        kind, value = spec.query
        if cache.is_fresh(spec.label):
            status = "cached"
        elif cache.exists(spec.label):
            status = "expired"
        else:
            status = "-"
        print(f"  {spec.label:<24s} {kind:<11s} {value:<12s} {status}")


def run(
    config: TrackerConfig,
    labels: list[str],
    time: datetime,
    passes_hours: float,
) -> int:
    """
    Load the requested groups and print positions, sky track and passes.

    Returns:
        Number of objects in the roster.
    """
    roster = build_roster(config)
    try:
        for label in labels:
            roster.select(roster.index_of(_match_label(config, label)))

        for outcome in roster.wait(timeout=FETCH_TIMEOUT_S):
            if not outcome.ok:
                print(f"Failed to load {outcome.label}: {outcome.error}", file=sys.stderr)
        if roster.is_loading:
            print("Timed out waiting for CelesTrak", file=sys.stderr)

        objects = roster.objects
        print(f"{len(objects)} objects at {time.isoformat()}")
        for obj in objects:
            state = obj.try_predict(time)
            if state is None:
                print(f"  {obj.name:<24s} (no state)")
                continue
            print(
                f"  {obj.name:<24s} lat {state.lat_deg:8.3f}  lon {state.lon_deg:9.3f}  "
                f"alt {state.alt_km:9.1f} km  v {state.speed_km_s:6.3f} km/s"
            )

        if config.station is not None and objects:
            roster.selected_index = 0
            _print_station_view(roster.selected_object, config.station, time, passes_hours)

        return len(objects)
    finally:
        roster.shutdown()


def _match_label(config: TrackerConfig, label: str) -> str:
    for spec in config.groups:
        if spec.label.lower() == label.lower():
            return spec.label
    raise ValueError(f"Unknown group {label!r}; see --list-groups")


def _print_station_view(obj, station: GroundStation, time: datetime, passes_hours: float) -> None:
    print(f"\nSky track of {obj.name} from {station.lat_deg:.3f}, {station.lon_deg:.3f}:")
    track = compute_sky_track(obj, station, time)
    if not track:
        print("  below the horizon for the whole window")
    for point in track:
        print(
            f"  {point.time:%H:%M}  az {point.azimuth_deg:6.1f}  el {point.elevation_deg:5.1f}"
        )

    end = time + timedelta(hours=passes_hours)
    windows = compute_pass_times(obj, station, time, end)
    print(f"\nPasses in the next {passes_hours:g} h: {len(windows)}")
    for window in windows:
        minutes = window.duration.total_seconds() / 60.0
        print(
            f"  {window.rise_time:%Y-%m-%d %H:%M} → {window.set_time:%H:%M}"
            f"  ({minutes:.0f} min)"
        )


def main():
    parser = argparse.ArgumentParser(
        description="Track satellites from CelesTrak: positions, sky tracks and passes"
    )
    parser.add_argument(
        '--list-groups', action='store_true', default=False,
        help="List configured groups and their cache status"
    )
    parser.add_argument(
        '--group', '-g', action='append', default=[], metavar='LABEL',
        help="Group to load (repeatable, e.g. ISS, GPS, Weather)"
    )
    parser.add_argument(
        '--time', '-t',
        help="UTC time as ISO 8601 (default: now)"
    )
    parser.add_argument(
        '--station', '-s',
        help="Ground station as LAT,LON[,ALT_KM] in degrees and km"
    )
    parser.add_argument(
        '--passes', type=float, default=24.0, metavar='HOURS',
        help="Pass prediction window in hours (default: 24, used with --station)"
    )
    parser.add_argument(
        '--cache-dir', type=Path, default=None,
        help=f"Element cache directory (default: {default_cache_dir()})"
    )
    parser.add_argument(
        '--cache-lifetime-min', type=float,
        default=DEFAULT_CACHE_LIFETIME.total_seconds() / 60.0,
        help="Cache lifetime in minutes (default: 120)"
    )
    parser.add_argument(
        '--timeout', type=float, default=DEFAULT_TIMEOUT_S,
        help=f"HTTP request timeout in seconds (default: {DEFAULT_TIMEOUT_S})"
    )
    parser.add_argument(
        '--stale-fallback', action='store_true', default=False,
        help="Use expired cache records when CelesTrak is unreachable"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Enable debug logging"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = TrackerConfig(
            groups=DEFAULT_GROUPS,
            cache_lifetime=timedelta(minutes=args.cache_lifetime_min),
            cache_dir=args.cache_dir or default_cache_dir(),
            station=parse_station(args.station) if args.station else None,
            request_timeout_s=args.timeout,
            stale_fallback=args.stale_fallback,
        )

        if args.list_groups:
            list_groups(config)
            return

        if not args.group:
            parser.error("the following arguments are required: --group/-g (or --list-groups)")

        if args.time:
            time = parse_epoch(args.time)
        else:
            time = SimulationClock().now()

        run(config, args.group, time.astimezone(timezone.utc), args.passes)

    except (ValueError, KeyError, ConnectionError, ImportError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
