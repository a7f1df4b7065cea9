# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the visibility circle and nearest-object lookup."""
import math
from datetime import datetime, timezone

import pytest

from satwatch.domain.coordinate_frames import GeodeticPosition
from satwatch.domain.propagation import ObjectState
from satwatch.domain.visibility import (
    MIN_ALTITUDE_KM,
    central_angle_rad,
    horizon_central_angle_rad,
    nearest_object_index,
    visibility_circle,
)


_T0 = datetime(2026, 3, 20, 12, 0, 0, tzinfo=timezone.utc)


class _FixedObject:
    """Stub with a fixed sub-point; None means no state."""

    def __init__(self, lat_deg, lon_deg):
        self._lat = lat_deg
        self._lon = lon_deg

    def try_predict(self, time):
        if self._lat is None:
            return None
        return ObjectState(
            time=time, lat_deg=self._lat, lon_deg=self._lon, alt_km=500.0,
            velocity_km_s=(0.0, 0.0, 0.0),
        )


# ── Horizon angle ────────────────────────────────────────────────────

class TestHorizonCentralAngle:

    def test_iss_altitude(self):
        """~420 km → ~20.26° coverage radius."""
        assert math.degrees(horizon_central_angle_rad(420.0)) == pytest.approx(20.26, abs=0.05)

    def test_geostationary(self):
        assert math.degrees(horizon_central_angle_rad(35786.0)) == pytest.approx(81.3, abs=0.1)

    def test_floor_altitude(self):
        floored = horizon_central_angle_rad(MIN_ALTITUDE_KM)
        assert horizon_central_angle_rad(0.0) == floored
        assert horizon_central_angle_rad(-5.0) == floored
        assert floored > 0.0

    def test_grows_with_altitude(self):
        assert horizon_central_angle_rad(400.0) < horizon_central_angle_rad(800.0)


# ── Visibility circle ────────────────────────────────────────────────

class TestVisibilityCircle:

    def test_point_count(self):
        assert len(visibility_circle(GeodeticPosition(10.0, 20.0, 420.0))) == 37

    def test_closed_ring(self):
        ring = visibility_circle(GeodeticPosition(10.0, 20.0, 420.0))
        assert ring[0][0] == pytest.approx(ring[-1][0], abs=1e-9)
        assert ring[0][1] == pytest.approx(ring[-1][1], abs=1e-9)

    @pytest.mark.parametrize("position", [
        GeodeticPosition(0.0, 0.0, 420.0),
        GeodeticPosition(51.6, -120.0, 420.0),
        GeodeticPosition(-30.0, 179.0, 1200.0),
        GeodeticPosition(85.0, 40.0, 2000.0),
    ])
    def test_equidistant_from_sub_point(self, position):
        c = horizon_central_angle_rad(position.alt_km)
        for lon, lat in visibility_circle(position):
            angle = central_angle_rad(position.lat_deg, position.lon_deg, lat, lon)
            assert angle == pytest.approx(c, abs=1e-9)

    def test_longitudes_wrapped(self):
        ring = visibility_circle(GeodeticPosition(0.0, 175.0, 800.0))
        assert all(-180.0 <= lon < 180.0 for lon, _ in ring)
        assert any(lon < 0.0 for lon, _ in ring)

    def test_polar_cap_ring(self):
        ring = visibility_circle(GeodeticPosition(85.0, 40.0, 2000.0))
        assert all(-90.0 <= lat <= 90.0 for _, lat in ring)

    def test_zero_altitude_not_degenerate(self):
        ring = visibility_circle(GeodeticPosition(10.0, 10.0, 0.0))
        lats = [lat for _, lat in ring]
        assert max(lats) > min(lats)

    def test_azimuth_zero_is_due_north(self):
        """Azimuth 0 (index 18) lies due north of the sub-point."""
        position = GeodeticPosition(10.0, 20.0, 420.0)
        lon, lat = visibility_circle(position)[18]
        assert lon == pytest.approx(20.0, abs=1e-9)
        assert lat == pytest.approx(
            10.0 + math.degrees(horizon_central_angle_rad(420.0)), abs=1e-9,
        )


# ── Nearest object ───────────────────────────────────────────────────

class TestNearestObjectIndex:

    def test_empty(self):
        assert nearest_object_index([], _T0, 0.0, 0.0) is None

    def test_picks_closest(self):
        objects = [_FixedObject(50.0, 0.0), _FixedObject(1.0, 1.0), _FixedObject(-40.0, 90.0)]
        assert nearest_object_index(objects, _T0, 0.0, 0.0) == 1

    def test_across_antimeridian(self):
        objects = [_FixedObject(0.0, 170.0), _FixedObject(0.0, -179.0)]
        assert nearest_object_index(objects, _T0, 179.5, 0.0) == 1

    def test_ignores_objects_without_state(self):
        objects = [_FixedObject(None, None), _FixedObject(30.0, 30.0)]
        assert nearest_object_index(objects, _T0, 0.0, 0.0) == 1

    def test_all_without_state(self):
        assert nearest_object_index([_FixedObject(None, None)], _T0, 0.0, 0.0) is None


class TestCentralAngle:

    def test_zero(self):
        assert central_angle_rad(12.0, 34.0, 12.0, 34.0) == 0.0

    def test_quarter(self):
        assert central_angle_rad(0.0, 0.0, 0.0, 90.0) == pytest.approx(math.pi / 2)

    def test_antipodal(self):
        assert central_angle_rad(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi)
