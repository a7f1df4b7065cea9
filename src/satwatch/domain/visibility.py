# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Ground coverage ring and map-point lookup on a spherical Earth.

The visibility circle is the set of ground points from which an object
at a given altitude sits on the horizon. Its angular radius is the Earth
central angle c with cos(c) = R / (R + h). Points on the ring follow from
the spherical law of cosines (latitude) and the four-part formula
(longitude), see https://en.wikipedia.org/wiki/Great-circle_distance.
"""
import math
from datetime import datetime
from typing import Sequence

import numpy as np

from satwatch.domain.constants import EarthConstants
from satwatch.domain.coordinate_frames import GeodeticPosition

AZIMUTH_STEP_DEG: int = 10
MIN_ALTITUDE_KM: float = 0.1


def horizon_central_angle_rad(alt_km: float) -> float:
    """Earth central angle between the sub-point and the horizon ring."""
    r = EarthConstants.R_MEAN_KM
    return math.acos(r / (r + max(alt_km, MIN_ALTITUDE_KM)))


def visibility_circle(position: GeodeticPosition) -> list[tuple[float, float]]:
    """
    Ground ring from which ``position`` is above the horizon.

    Altitude is floored at 0.1 km so the ring never collapses to a point.

    Args:
        position: Geodetic position of the object.

    Returns:
        Closed ring of (longitude_deg, latitude_deg) pairs, one per 10° of
        azimuth from -180° to 180° inclusive. Longitudes are wrapped into
        [-180, 180).
    """
    c = horizon_central_angle_rad(position.alt_km)
    lat0 = math.radians(position.lat_deg)
    lon0 = math.radians(position.lon_deg)

    azimuths = np.radians(np.arange(-180, 181, AZIMUTH_STEP_DEG, dtype=float))

    lats = np.arcsin(
        np.sin(lat0) * np.cos(c) + np.cos(lat0) * np.sin(c) * np.cos(azimuths)
    )
    y = np.sin(azimuths) * np.sin(c) * np.cos(lat0)
    x = np.cos(c) - np.sin(lat0) * np.sin(lats)
    lons_deg = np.degrees(lon0 + np.arctan2(y, x))
    lons_deg = (lons_deg + 180.0) % 360.0 - 180.0

    return [
        (float(lon), float(lat))
        for lon, lat in zip(lons_deg, np.degrees(lats))
    ]


def central_angle_rad(
    lat1_deg: float, lon1_deg: float, lat2_deg: float, lon2_deg: float,
) -> float:
    """Great-circle angle between two points (haversine form)."""
    lat1 = math.radians(lat1_deg)
    lat2 = math.radians(lat2_deg)
    dlat = lat2 - lat1
    dlon = math.radians(lon2_deg - lon1_deg)
    h = math.sin(dlat / 2.0)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0)**2
    return 2.0 * math.asin(min(1.0, math.sqrt(h)))


def nearest_object_index(
    objects: Sequence,
    time: datetime,
    lon_deg: float,
    lat_deg: float,
) -> int | None:
    """
    Index of the object whose sub-point is closest to a map point.

    Objects that cannot be propagated at ``time`` are ignored.

    Args:
        objects: Sequence of TrackedObject.
        time: UTC time of the query.
        lon_deg: Map longitude in degrees.
        lat_deg: Map latitude in degrees.

    Returns:
        Roster index, or None if no object has a state at ``time``.
    """
    best_index = None
    best_angle = math.inf
    for index, obj in enumerate(objects):
        state = obj.try_predict(time)
        if state is None:
            continue
        angle = central_angle_rad(lat_deg, lon_deg, state.lat_deg, state.lon_deg)
        if angle < best_angle:
            best_index = index
            best_angle = angle
    return best_index
