# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Tracked objects: element sets bound to a propagation model.

A TrackedObject owns one OrbitalElementSet and the propagation constants
derived from it, and turns a query time into a geodetic ObjectState via
the TEME → ECEF → Geodetic pipeline.

The propagator itself is an injected port (see satwatch.ports.propagation).
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable

from satwatch.domain.coordinate_frames import (
    GeodeticPosition,
    ecef_to_geodetic,
    gmst_rad,
    teme_to_ecef,
)
from satwatch.domain.elements import OrbitalElementSet
from satwatch.ports.propagation import Propagator


_log = logging.getLogger(__name__)


class InvalidElementsError(ValueError):
    """The element set cannot support propagation (decayed or degenerate)."""


class PropagationError(RuntimeError):
    """The propagator diverged at the requested instant."""


@dataclass(frozen=True)
class ObjectState:
    """Instantaneous geodetic state of a tracked object."""
    time: datetime
    lat_deg: float
    lon_deg: float
    alt_km: float
    velocity_km_s: tuple[float, float, float]

    @property
    def position(self) -> GeodeticPosition:
        return GeodeticPosition(self.lat_deg, self.lon_deg, self.alt_km)

    @property
    def speed_km_s(self) -> float:
        vx, vy, vz = self.velocity_km_s
        return math.sqrt(vx**2 + vy**2 + vz**2)


class TrackedObject:
    """
    One catalog object ready for prediction.

    Args:
        elements: Element set to propagate.
        propagator: Propagator port used to derive propagation constants.

    Raises:
        InvalidElementsError: If the propagator rejects the element set.
    """

    def __init__(self, elements: OrbitalElementSet, propagator: Propagator) -> None:
        self._elements = elements
        self._orbital_period = elements.orbital_period
        self._model = propagator.initialize(elements)

    @property
    def elements(self) -> OrbitalElementSet:
        return self._elements

    @property
    def name(self) -> str:
        return self._elements.object_name

    @property
    def designator(self) -> str:
        return self._elements.object_id

    @property
    def norad_id(self) -> int:
        return self._elements.norad_cat_id

    @property
    def epoch(self) -> datetime:
        return self._elements.epoch

    @property
    def orbital_period(self) -> timedelta:
        return self._orbital_period

    def predict(self, time: datetime) -> ObjectState:
        """
        Propagate to a UTC time and convert to geodetic coordinates.

        Args:
            time: Query time; naive datetimes are treated as UTC.

        Returns:
            ObjectState with latitude/longitude in degrees, altitude in km,
            and TEME velocity in km/s.

        Raises:
            PropagationError: If the orbit cannot be propagated to ``time``.
        """
        if time.tzinfo is None:
            time = time.replace(tzinfo=timezone.utc)

        minutes = (time - self._elements.epoch).total_seconds() / 60.0
        pos_teme, vel_teme = self._model.propagate(minutes)

        pos_ecef, _ = teme_to_ecef(pos_teme, gmst_rad(time))
        lat_deg, lon_deg, alt_km = ecef_to_geodetic(pos_ecef)

        return ObjectState(
            time=time,
            lat_deg=lat_deg,
            lon_deg=lon_deg,
            alt_km=alt_km,
            velocity_km_s=(vel_teme[0], vel_teme[1], vel_teme[2]),
        )

    def try_predict(self, time: datetime) -> ObjectState | None:
        """predict(), returning None when no state exists at ``time``."""
        try:
            return self.predict(time)
        except PropagationError as e:
            _log.debug("No state for %s at %s: %s", self.name, time.isoformat(), e)
            return None

    def __repr__(self) -> str:
        return f"TrackedObject({self.name!r}, norad_id={self.norad_id})"


def materialize_objects(
    elements: Iterable[OrbitalElementSet],
    propagator: Propagator,
) -> list[TrackedObject]:
    """
    Build TrackedObjects, skipping element sets the propagator rejects.

    Args:
        elements: Element sets to materialize.
        propagator: Propagator port.

    Returns:
        List of TrackedObject in input order, minus rejected sets.
    """
    objects: list[TrackedObject] = []
    for element_set in elements:
        try:
            objects.append(TrackedObject(element_set, propagator))
        except InvalidElementsError as e:
            _log.warning("Skipping %s: %s", element_set.object_name, e)
    return objects
