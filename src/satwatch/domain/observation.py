# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Topocentric observation geometry.

Computes azimuth, elevation, and slant range from an observer on the
WGS84 ellipsoid to a target given in geodetic or ECEF coordinates.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from satwatch.domain.coordinate_frames import GeodeticPosition, Vector3, geodetic_to_ecef


@dataclass(frozen=True)
class GroundStation:
    """A ground observation station."""
    name: str
    lat_deg: float
    lon_deg: float
    alt_km: float = 0.0

    @property
    def position(self) -> GeodeticPosition:
        return GeodeticPosition(self.lat_deg, self.lon_deg, self.alt_km)


@dataclass(frozen=True)
class Observation:
    """Topocentric observation: azimuth, elevation, slant range."""
    azimuth_deg: float
    elevation_deg: float
    slant_range_km: float


def _ecef_to_enu(
    range_ecef: Vector3,
    lat_rad: float,
    lon_rad: float,
) -> Vector3:
    """
    Rotate ECEF range vector to East-North-Up (ENU) frame.

    Args:
        range_ecef: (dx, dy, dz) range vector in ECEF.
        lat_rad: Observer geodetic latitude in radians.
        lon_rad: Observer geodetic longitude in radians.

    Returns:
        (E, N, U) components in km.
    """
    dx, dy, dz = range_ecef
    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)
    sin_lon = math.sin(lon_rad)
    cos_lon = math.cos(lon_rad)

    e = -sin_lon * dx + cos_lon * dy
    n = -sin_lat * cos_lon * dx - sin_lat * sin_lon * dy + cos_lat * dz
    u = cos_lat * cos_lon * dx + cos_lat * sin_lon * dy + sin_lat * dz

    return e, n, u


def _enu_from(observer: GeodeticPosition, target_ecef: Vector3) -> Vector3:
    observer_ecef = geodetic_to_ecef(observer.lat_deg, observer.lon_deg, observer.alt_km)
    range_ecef = (
        target_ecef[0] - observer_ecef[0],
        target_ecef[1] - observer_ecef[1],
        target_ecef[2] - observer_ecef[2],
    )
    return _ecef_to_enu(
        range_ecef, math.radians(observer.lat_deg), math.radians(observer.lon_deg),
    )


def _look_angles(e: float, n: float, u: float) -> tuple[float, float]:
    horizontal = math.hypot(e, n)
    if horizontal == 0.0:
        if u == 0.0:
            return math.nan, math.nan
        return math.nan, math.copysign(90.0, u)

    azimuth_deg = math.degrees(math.atan2(e, n)) % 360.0
    elevation_deg = math.degrees(math.atan2(u, horizontal))
    return azimuth_deg, elevation_deg


def azimuth_elevation(
    observer: GeodeticPosition,
    target: GeodeticPosition,
) -> tuple[float, float]:
    """
    Azimuth and elevation of a target as seen from an observer.

    Args:
        observer: Observer geodetic position.
        target: Target geodetic position.

    Returns:
        (azimuth_deg, elevation_deg). Azimuth in [0, 360) measured from
        north towards east; elevation in [-90, 90]. Azimuth is NaN when
        the target is straight above or below the observer, and both
        are NaN when the two points coincide. Callers must check with
        math.isnan before using the result.
    """
    target_ecef = geodetic_to_ecef(target.lat_deg, target.lon_deg, target.alt_km)
    return _look_angles(*_enu_from(observer, target_ecef))


def compute_observation(
    station: GroundStation,
    target_ecef: Vector3,
) -> Observation:
    """
    Compute topocentric azimuth, elevation, and slant range.

    Args:
        station: Ground station with geodetic coordinates.
        target_ecef: Target ECEF position (x, y, z) in km.

    Returns:
        Observation with azimuth [0, 360), elevation [-90, 90],
        and slant range in km. Degenerate directions follow the same
        NaN convention as azimuth_elevation.
    """
    e, n, u = _enu_from(station.position, target_ecef)
    azimuth_deg, elevation_deg = _look_angles(e, n, u)

    return Observation(
        azimuth_deg=azimuth_deg,
        elevation_deg=elevation_deg,
        slant_range_km=math.sqrt(e**2 + n**2 + u**2),
    )
