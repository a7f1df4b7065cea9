# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Earth and time-scale constants.

All lengths are kilometres to match SGP4 output.
No external dependencies — only stdlib dataclasses.
"""
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class _EarthConstants:
    """WGS84 ellipsoid and mean-sphere values (km)."""
    R_EQUATORIAL_KM: float = 6378.137           # WGS84 semi-major axis
    FLATTENING: float = 1.0 / 298.257223563     # WGS84 flattening
    R_MEAN_KM: float = 6371.0088                # IUGG mean radius

    @property
    def R_POLAR_KM(self) -> float:
        return self.R_EQUATORIAL_KM * (1.0 - self.FLATTENING)

    @property
    def E_SQUARED(self) -> float:
        """First eccentricity squared."""
        return self.FLATTENING * (2.0 - self.FLATTENING)

    @property
    def EP_SQUARED(self) -> float:
        """Second eccentricity squared."""
        return self.E_SQUARED / (1.0 - self.E_SQUARED)


EarthConstants: _EarthConstants = _EarthConstants()

SECONDS_PER_DAY: float = 86400.0
MINUTES_PER_DAY: float = 1440.0

J2000_JD: float = 2451545.0
J2000_EPOCH = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
DAYS_PER_JULIAN_CENTURY: float = 36525.0

TAI_MINUS_UTC_S: float = 37.0    # IERS Bulletin C, valid since 2017
TT_MINUS_TAI_S: float = 32.184
