# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Sky track: an object's path across a ground station's sky.

Samples a window around the query time and projects every sample above
the horizon onto a unit-disk polar plot (zenith at the centre, horizon on
the rim, north up, east to the right).
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from satwatch.domain.observation import GroundStation, azimuth_elevation
from satwatch.domain.propagation import PropagationError

SKY_TRACK_HALF_WINDOW = timedelta(minutes=30)
SKY_TRACK_STEP = timedelta(minutes=1)


@dataclass(frozen=True)
class SkyTrackPoint:
    """One above-horizon sample of a sky track."""
    time: datetime
    azimuth_deg: float
    elevation_deg: float
    x: float
    y: float


def polar_projection(azimuth_deg: float, elevation_deg: float) -> tuple[float, float]:
    """Map azimuth/elevation to unit-disk canvas coordinates.

    r = 1 - el/90, angle = 90° - az.
    """
    r = 1.0 - elevation_deg / 90.0
    angle = math.radians(90.0 - azimuth_deg)
    return r * math.cos(angle), r * math.sin(angle)


def compute_sky_track(
    tracked_object,
    station: GroundStation,
    time: datetime,
) -> list[SkyTrackPoint]:
    """
    Compute the sky track within ±30 minutes of ``time``.

    Args:
        tracked_object: TrackedObject to observe.
        station: Observing ground station.
        time: UTC centre of the window.

    Returns:
        Chronological list of SkyTrackPoint with elevation >= 0°.
    """
    steps = int(SKY_TRACK_HALF_WINDOW / SKY_TRACK_STEP)
    observer = station.position

    points: list[SkyTrackPoint] = []
    for k in range(-steps, steps + 1):
        sample_time = time + k * SKY_TRACK_STEP
        try:
            state = tracked_object.predict(sample_time)
        except PropagationError:
            continue

        az, el = azimuth_elevation(observer, state.position)
        if math.isnan(az) or math.isnan(el) or el < 0.0:
            continue

        x, y = polar_projection(az, el)
        points.append(SkyTrackPoint(
            time=sample_time, azimuth_deg=az, elevation_deg=el, x=x, y=y,
        ))

    return points
