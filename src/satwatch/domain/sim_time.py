# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Simulated time.

The tracker can show the sky at any moment. SimulationClock keeps the
simulated time as a fixed offset from the wall clock, so simulated time
keeps running at real speed after a jump.
"""
from datetime import datetime, timedelta, timezone
from typing import Callable


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SimulationClock:
    """
    Wall clock plus an adjustable offset.

    Args:
        wall_clock: Callable returning the current UTC datetime.
    """

    def __init__(self, wall_clock: Callable[[], datetime] = _utc_now) -> None:
        self._wall_clock = wall_clock
        self._offset = timedelta(0)

    @property
    def offset(self) -> timedelta:
        return self._offset

    @property
    def is_live(self) -> bool:
        return self._offset == timedelta(0)

    def now(self) -> datetime:
        return self._wall_clock() + self._offset

    def set_time(self, time: datetime) -> None:
        """Jump to ``time``; naive datetimes are treated as UTC."""
        if time.tzinfo is None:
            time = time.replace(tzinfo=timezone.utc)
        self._offset = time - self._wall_clock()

    def advance(self, delta: timedelta) -> None:
        self._offset += delta

    def rewind(self, delta: timedelta) -> None:
        self._offset -= delta

    def reset(self) -> None:
        """Return to real time."""
        self._offset = timedelta(0)
