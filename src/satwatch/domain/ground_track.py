# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Ground track computation.

Propagates a tracked object forward over one orbital period at one-minute
steps and collects its sub-satellite points. Includes splitting of the
resulting polyline where it crosses the antimeridian, so map renderers
never draw a line across the whole map.

No external dependencies — only stdlib dataclasses/datetime.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Sequence

from satwatch.domain.propagation import PropagationError

GROUND_TRACK_STEP = timedelta(minutes=1)


@dataclass(frozen=True)
class GroundTrackPoint:
    """A single point on an object's ground track."""
    time: datetime
    lat_deg: float
    lon_deg: float
    alt_km: float


def compute_ground_track(
    tracked_object,
    time: datetime,
) -> list[GroundTrackPoint]:
    """
    Compute the ground track ahead of ``time`` for one orbital period.

    Samples time + k minutes for k = 1 .. (whole period minutes - 1).
    Instants at which the object cannot be propagated are skipped.

    Args:
        tracked_object: TrackedObject to propagate.
        time: UTC start time.

    Returns:
        List of GroundTrackPoint in chronological order.
    """
    period_minutes = int(tracked_object.orbital_period.total_seconds() // 60)

    points: list[GroundTrackPoint] = []
    for minutes in range(1, period_minutes):
        current_time = time + minutes * GROUND_TRACK_STEP
        try:
            state = tracked_object.predict(current_time)
        except PropagationError:
            continue
        points.append(GroundTrackPoint(
            time=current_time,
            lat_deg=state.lat_deg,
            lon_deg=state.lon_deg,
            alt_km=state.alt_km,
        ))

    return points


def split_at_antimeridian(
    points: Sequence[tuple[float, float]],
) -> list[list[tuple[float, float]]]:
    """Split a (lon, lat) polyline where it wraps across ±180°.

    Consecutive points whose longitudes differ by 180° or more are taken
    to cross the antimeridian. A drop in longitude closes the segment at
    +180°, a rise closes it at -180°, and the next segment starts on the
    opposite edge, both at the midpoint latitude.

    Args:
        points: Sequence of (longitude_deg, latitude_deg).

    Returns:
        List of polylines, each free of antimeridian jumps.
    """
    if not points:
        return []

    segments: list[list[tuple[float, float]]] = [[points[0]]]
    for (lon1, lat1), (lon2, lat2) in zip(points, points[1:]):
        if abs(lon1 - lon2) >= 180.0:
            edge = 180.0 if lon1 > lon2 else -180.0
            lat_mid = (lat1 + lat2) / 2.0
            segments[-1].append((edge, lat_mid))
            segments.append([(-edge, lat_mid)])
        segments[-1].append((lon2, lat2))

    return segments
