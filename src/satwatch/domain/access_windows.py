# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Pass-time (rise/set) segmentation.

Sweeps a time window at a fixed step, tracking whether the object is
above the horizon, and emits one window per visible stretch.

No external dependencies — only stdlib dataclasses/datetime.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from satwatch.domain.observation import GroundStation, azimuth_elevation
from satwatch.domain.propagation import PropagationError

PASS_STEP = timedelta(minutes=1)


@dataclass(frozen=True)
class PassWindow:
    """A visibility window [rise_time, set_time) from a ground station."""
    rise_time: datetime
    set_time: datetime

    @property
    def duration(self) -> timedelta:
        return self.set_time - self.rise_time


def segment_visibility(
    elevation_at: Callable[[datetime], float],
    start: datetime,
    end: datetime,
    step: timedelta = PASS_STEP,
) -> list[PassWindow]:
    """
    Split [start, end] into windows where elevation is at or above 0°.

    Samples start, start + step, ... up to and including end. A window
    opens at the first visible sample and closes at the first sample that
    is not visible. A window still open when the sweep ends is closed at
    ``end`` itself, not at the last sample. NaN elevations count as not
    visible.

    Args:
        elevation_at: Elevation in degrees as a function of time.
        start: Window start (UTC).
        end: Window end (UTC).
        step: Sampling step.

    Returns:
        Chronologically ordered list of PassWindow.

    Raises:
        ValueError: If start is after end or step is not positive.
    """
    if start > end:
        raise ValueError(f"start {start} is after end {end}")
    if step <= timedelta(0):
        raise ValueError(f"Step must be positive, got {step}")

    windows: list[PassWindow] = []
    visible = False
    rise_time = start

    current_time = start
    while current_time <= end:
        el = elevation_at(current_time)
        is_visible = not math.isnan(el) and el >= 0.0

        if is_visible and not visible:
            rise_time = current_time
            visible = True
        elif visible and not is_visible:
            windows.append(PassWindow(rise_time=rise_time, set_time=current_time))
            visible = False

        current_time += step

    if visible:
        windows.append(PassWindow(rise_time=rise_time, set_time=end))

    return windows


def compute_pass_times(
    tracked_object,
    station: GroundStation,
    start: datetime,
    end: datetime,
    step: timedelta = PASS_STEP,
) -> list[PassWindow]:
    """
    Compute the passes of an object over a ground station.

    Instants at which the object cannot be propagated count as not
    visible.

    Args:
        tracked_object: TrackedObject to observe.
        station: Observing ground station.
        start: Window start (UTC).
        end: Window end (UTC).
        step: Sampling step.

    Returns:
        Chronologically ordered list of PassWindow.

    Raises:
        ValueError: If start is after end or step is not positive.
    """
    observer = station.position

    def elevation_at(time: datetime) -> float:
        try:
            state = tracked_object.predict(time)
        except PropagationError:
            return math.nan
        return azimuth_elevation(observer, state.position)[1]

    return segment_visibility(elevation_at, start, end, step)
