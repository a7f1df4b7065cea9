# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Coordinate frame conversions.

Pure mathematical transformations between TEME, ECEF, and Geodetic frames.
No external dependencies — only stdlib math/datetime.

Reference frames:
    TEME — True Equator Mean Equinox (inertial frame of SGP4 output)
    ECEF — Earth-Centered Earth-Fixed (rotating with Earth)
    Geodetic — Latitude, Longitude, Altitude (WGS84 ellipsoid)

The TEME→ECEF rotation is a simple Z-axis rotation by the Greenwich
Mean Sidereal Time (GMST) angle. ECEF→Geodetic uses Bowring's closed-form
latitude on the WGS84 ellipsoid, so no iteration is needed.

All lengths are kilometres.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timezone

from satwatch.domain.constants import (
    DAYS_PER_JULIAN_CENTURY,
    EarthConstants,
    J2000_EPOCH,
    J2000_JD,
    SECONDS_PER_DAY,
    TAI_MINUS_UTC_S,
    TT_MINUS_TAI_S,
)

Vector3 = tuple[float, float, float]


@dataclass(frozen=True)
class GeodeticPosition:
    """A point on or above the WGS84 ellipsoid."""
    lat_deg: float
    lon_deg: float
    alt_km: float = 0.0


def _as_utc(epoch: datetime) -> datetime:
    return epoch if epoch.tzinfo else epoch.replace(tzinfo=timezone.utc)


def julian_date(epoch: datetime) -> float:
    """Julian date of a UTC epoch (naive datetimes are treated as UTC)."""
    delta = _as_utc(epoch) - J2000_EPOCH
    return J2000_JD + delta.total_seconds() / SECONDS_PER_DAY


def utc_to_tt(jd_utc: float) -> float:
    """Shift a UTC Julian date onto the TT time scale."""
    return jd_utc + (TAI_MINUS_UTC_S + TT_MINUS_TAI_S) / SECONDS_PER_DAY


def gmst_rad_from_jd(jd_tt: float) -> float:
    """
    Greenwich Mean Sidereal Time from a TT Julian date.

    Uses the IAU formula based on Julian centuries from J2000.0:
        GMST(°) = 280.46061837 + 360.98564736629 * (JD - 2451545.0)
                  + 0.000387933 * T² - T³/38710000

    Returns:
        GMST in radians, normalized to [0, 2π).
    """
    days = jd_tt - J2000_JD
    t_centuries = days / DAYS_PER_JULIAN_CENTURY

    gmst_deg = (
        280.46061837
        + 360.98564736629 * days
        + 0.000387933 * t_centuries**2
        - t_centuries**3 / 38710000.0
    )

    return math.radians(gmst_deg % 360.0)


def gmst_rad(epoch: datetime) -> float:
    """GMST in radians [0, 2π) for a UTC epoch."""
    return gmst_rad_from_jd(utc_to_tt(julian_date(epoch)))


def teme_to_ecef(
    pos_teme: Vector3,
    gmst_angle_rad: float,
    vel_teme: Vector3 | None = None,
) -> tuple[Vector3, Vector3 | None]:
    """
    Convert TEME state vectors to ECEF via Z-axis rotation by GMST.

    The rotation matrix R_z(-θ) rotates from inertial to Earth-fixed:
        [x_ecef]   [ cos(θ)  sin(θ)  0] [x_teme]
        [y_ecef] = [-sin(θ)  cos(θ)  0] [y_teme]
        [z_ecef]   [   0       0     1] [z_teme]

    Velocity, when given, is rotated the same way; the Earth-rate
    cross term is not applied.

    Args:
        pos_teme: Position in TEME frame (x, y, z) in km.
        gmst_angle_rad: GMST angle in radians (from gmst_rad()).
        vel_teme: Optional velocity in TEME frame in km/s.

    Returns:
        (pos_ecef, vel_ecef); vel_ecef is None when no velocity was given.
    """
    cos_t = math.cos(gmst_angle_rad)
    sin_t = math.sin(gmst_angle_rad)

    pos_ecef = (
        cos_t * pos_teme[0] + sin_t * pos_teme[1],
        -sin_t * pos_teme[0] + cos_t * pos_teme[1],
        pos_teme[2],
    )

    if vel_teme is None:
        return pos_ecef, None

    vel_ecef = (
        cos_t * vel_teme[0] + sin_t * vel_teme[1],
        -sin_t * vel_teme[0] + cos_t * vel_teme[1],
        vel_teme[2],
    )
    return pos_ecef, vel_ecef


def ecef_to_geodetic(pos_ecef: Vector3) -> tuple[float, float, float]:
    """
    Convert ECEF position to geodetic coordinates (WGS84 ellipsoid).

    Latitude uses Bowring's parametric-latitude approximation, which is
    sub-millimetre near the surface and well under a metre up to
    geostationary altitude. Altitude uses the form that stays finite
    at the poles.

    Args:
        pos_ecef: Position in ECEF frame (x, y, z) in km.

    Returns:
        (latitude_deg, longitude_deg, altitude_km)
        Latitude in [-90, 90], longitude in [-180, 180].
    """
    c = EarthConstants
    a = c.R_EQUATORIAL_KM
    b = c.R_POLAR_KM
    e2 = c.E_SQUARED
    ep2 = c.EP_SQUARED

    x, y, z = pos_ecef
    p = math.hypot(x, y)

    lon_rad = math.atan2(y, x)

    if p == 0.0:
        # On the polar axis
        return math.copysign(90.0, z), math.degrees(lon_rad), abs(z) - b

    theta = math.atan2(z * a, p * b)
    sin_theta = math.sin(theta)
    cos_theta = math.cos(theta)
    lat_rad = math.atan2(
        z + ep2 * b * sin_theta**3,
        p - e2 * a * cos_theta**3,
    )

    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)
    alt = p * cos_lat + z * sin_lat - a * math.sqrt(1.0 - e2 * sin_lat**2)

    return math.degrees(lat_rad), math.degrees(lon_rad), alt


def geodetic_to_ecef(
    lat_deg: float,
    lon_deg: float,
    alt_km: float,
) -> Vector3:
    """
    Convert geodetic coordinates to ECEF position (WGS84 ellipsoid).

    Inverse of ecef_to_geodetic.

    Args:
        lat_deg: Geodetic latitude in degrees [-90, 90].
        lon_deg: Geodetic longitude in degrees.
        alt_km: Altitude above WGS84 ellipsoid in km.

    Returns:
        (x, y, z) in km, ECEF frame.
    """
    c = EarthConstants
    a = c.R_EQUATORIAL_KM
    e2 = c.E_SQUARED

    lat_rad = math.radians(lat_deg)
    lon_rad = math.radians(lon_deg)

    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)

    n = a / math.sqrt(1.0 - e2 * sin_lat**2)

    x = (n + alt_km) * cos_lat * math.cos(lon_rad)
    y = (n + alt_km) * cos_lat * math.sin(lon_rad)
    z = (n * (1.0 - e2) + alt_km) * sin_lat

    return x, y, z


def wrap_longitude_deg(lon_deg: float) -> float:
    """Wrap a longitude into (-180, 180]."""
    wrapped = (lon_deg + 180.0) % 360.0 - 180.0
    return 180.0 if wrapped == -180.0 else wrapped


def wrap_longitude_rad(lon_rad: float) -> float:
    """Wrap a longitude into (-π, π]."""
    wrapped = (lon_rad + math.pi) % (2.0 * math.pi) - math.pi
    return math.pi if wrapped == -math.pi else wrapped
