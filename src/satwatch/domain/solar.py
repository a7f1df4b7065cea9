# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Subsolar point and day/night terminator.

Low-precision analytical Sun position (Astronomical Almanac mean-longitude
form, ~0.01° in declination), sufficient for drawing the terminator on a
world map.
"""
import math
from datetime import datetime

import numpy as np

from satwatch.domain.constants import J2000_JD
from satwatch.domain.coordinate_frames import (
    gmst_rad_from_jd,
    julian_date,
    utc_to_tt,
    wrap_longitude_rad,
)

OBLIQUITY_DEG: float = 23.439
TERMINATOR_STEP_DEG: int = 5


def subsolar_point(time: datetime) -> tuple[float, float]:
    """
    Point on the Earth where the Sun is at the zenith.

    Args:
        time: UTC time.

    Returns:
        (longitude_rad, latitude_rad); longitude in (-π, π], latitude is
        the solar declination.
    """
    jd_tt = utc_to_tt(julian_date(time))
    n = jd_tt - J2000_JD

    mean_long_rad = math.radians((280.46 + 0.9856474 * n) % 360.0)
    mean_anom_rad = math.radians(357.528 + 0.9856003 * n)

    ecliptic_long_rad = (
        mean_long_rad
        + math.radians(1.915) * math.sin(mean_anom_rad)
        + math.radians(0.02) * math.sin(2.0 * mean_anom_rad)
    )
    declination_rad = math.asin(
        math.sin(math.radians(OBLIQUITY_DEG)) * math.sin(ecliptic_long_rad)
    )

    lon_rad = wrap_longitude_rad(mean_long_rad - gmst_rad_from_jd(jd_tt))
    return lon_rad, declination_rad


def compute_terminator(time: datetime) -> list[tuple[float, float]]:
    """
    Sample the day/night terminator line.

    For each longitude from -180° to 180° in 5° steps solves
        lat = atan(-cos(lon - sub_lon) / tan(decl))
    Samples without a finite solution (declination exactly zero, at the
    equinoxes) are skipped.

    Args:
        time: UTC time.

    Returns:
        List of (longitude_deg, latitude_deg) pairs, west to east.
    """
    sub_lon, decl = subsolar_point(time)

    lons_deg = np.arange(-180, 181, TERMINATOR_STEP_DEG, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = -np.cos(np.radians(lons_deg) - sub_lon) / np.tan(decl)
    finite = np.isfinite(ratio)
    lats_deg = np.degrees(np.arctan(ratio[finite]))

    return [
        (float(lon), float(lat))
        for lon, lat in zip(lons_deg[finite], lats_deg)
    ]
