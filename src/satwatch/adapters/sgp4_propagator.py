# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
SGP4 adapter: builds propagation models from OMM element sets.

External dependency (sgp4) is confined to this layer.

TLE/OMM mean elements are SGP4-specific, NOT pure Keplerian.
Direct Kepler→Cartesian would give wrong answers for real satellites.
The sgp4 library provides proper TEME state vectors.
"""
import math
from datetime import datetime, timezone

from satwatch.domain.constants import MINUTES_PER_DAY
from satwatch.domain.elements import OrbitalElementSet
from satwatch.domain.propagation import InvalidElementsError, PropagationError

# SGP4 epoch reference: fractional days since 1949-12-31 00:00 UT
_SGP4_EPOCH_REF = datetime(1949, 12, 31, tzinfo=timezone.utc)

# rev/day -> rad/min
_XPDOTP = MINUTES_PER_DAY / (2.0 * math.pi)


def _require_sgp4():
    """Import sgp4 lazily; raise clear error if not installed."""
    try:
        from sgp4.api import SGP4_ERRORS, WGS72, Satrec
    except ImportError:
        raise ImportError(
            "sgp4 is required for orbit propagation. "
            "Install with: pip install sgp4"
        ) from None
    return Satrec, WGS72, SGP4_ERRORS


def _epoch_days_since_1949(epoch: datetime) -> float:
    delta = epoch.astimezone(timezone.utc) - _SGP4_EPOCH_REF
    return delta.days + delta.seconds / 86400.0 + delta.microseconds / 86400e6


class SGP4Model:
    """Propagation constants for one element set (wraps sgp4.Satrec)."""

    def __init__(self, satrec, errors: dict[int, str]) -> None:
        self._satrec = satrec
        self._errors = errors

    def propagate(
        self, minutes_since_epoch: float,
    ) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
        sat = self._satrec
        error_code, position_km, velocity_km_s = sat.sgp4(
            sat.jdsatepoch, sat.jdsatepochF + minutes_since_epoch / MINUTES_PER_DAY,
        )
        if error_code != 0:
            reason = self._errors.get(error_code, f"error code {error_code}")
            raise PropagationError(
                f"SGP4 propagation failed at {minutes_since_epoch:.1f} min: {reason}"
            )
        return tuple(position_km), tuple(velocity_km_s)


class SGP4Propagator:
    """Propagator port implementation backed by the sgp4 library."""

    def initialize(self, elements: OrbitalElementSet) -> SGP4Model:
        """
        Derive SGP4 constants from an element set.

        Raises:
            InvalidElementsError: If the elements are out of range or the
                orbit cannot be propagated even at its own epoch.
        """
        Satrec, WGS72, errors = _require_sgp4()

        if not 0.0 <= elements.eccentricity < 1.0:
            raise InvalidElementsError(
                f"Eccentricity must be in [0, 1), got {elements.eccentricity}"
            )
        if elements.mean_motion_rev_per_day <= 0:
            raise InvalidElementsError(
                f"Mean motion must be positive, got {elements.mean_motion_rev_per_day}"
            )

        sat = Satrec()
        sat.sgp4init(
            WGS72,
            'i',
            elements.norad_cat_id,
            _epoch_days_since_1949(elements.epoch),
            elements.bstar,
            elements.mean_motion_dot / (_XPDOTP * MINUTES_PER_DAY),
            elements.mean_motion_ddot / (_XPDOTP * MINUTES_PER_DAY**2),
            elements.eccentricity,
            math.radians(elements.arg_perigee_deg),
            math.radians(elements.inclination_deg),
            math.radians(elements.mean_anomaly_deg),
            elements.mean_motion_rev_per_day / _XPDOTP,
            math.radians(elements.raan_deg),
        )

        model = SGP4Model(sat, errors)
        try:
            model.propagate(0.0)
        except PropagationError as e:
            raise InvalidElementsError(
                f"{elements.object_name} cannot be propagated: {e}"
            ) from e
        return model
