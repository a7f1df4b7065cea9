# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for topocentric observation geometry (az/el/range)."""
import ast
import math

import pytest

from satwatch.domain.coordinate_frames import GeodeticPosition, geodetic_to_ecef


# ── Dataclass immutability ───────────────────────────────────────────

class TestGroundStation:

    def test_frozen(self):
        from satwatch.domain.observation import GroundStation

        station = GroundStation(name='Test', lat_deg=0.0, lon_deg=0.0)
        with pytest.raises(AttributeError):
            station.lat_deg = 10.0

    def test_alt_default_zero(self):
        from satwatch.domain.observation import GroundStation

        station = GroundStation(name='Test', lat_deg=52.0, lon_deg=4.4)
        assert station.alt_km == 0.0

    def test_position(self):
        from satwatch.domain.observation import GroundStation

        station = GroundStation(name='Delft', lat_deg=52.0, lon_deg=4.4, alt_km=0.01)
        assert station.position == GeodeticPosition(52.0, 4.4, 0.01)


class TestObservation:

    def test_frozen(self):
        from satwatch.domain.observation import Observation

        obs = Observation(azimuth_deg=0.0, elevation_deg=45.0, slant_range_km=1000.0)
        with pytest.raises(AttributeError):
            obs.azimuth_deg = 90.0


# ── Azimuth / elevation ──────────────────────────────────────────────

class TestAzimuthElevation:

    def test_directly_overhead_on_axis(self):
        """Exactly overhead at (0°, 0°): elevation 90°, azimuth undefined."""
        from satwatch.domain.observation import azimuth_elevation

        az, el = azimuth_elevation(
            GeodeticPosition(0.0, 0.0, 0.0), GeodeticPosition(0.0, 0.0, 400.0),
        )
        assert math.isnan(az)
        assert el == 90.0

    @pytest.mark.parametrize("lat,lon", [(52.0, 4.4), (-33.9, 151.2), (70.0, -150.0)])
    def test_overhead_elevation_90(self, lat, lon):
        from satwatch.domain.observation import azimuth_elevation

        _, el = azimuth_elevation(
            GeodeticPosition(lat, lon, 0.0), GeodeticPosition(lat, lon, 500.0),
        )
        assert el == pytest.approx(90.0, abs=1e-6)

    def test_zero_separation_is_nan(self):
        from satwatch.domain.observation import azimuth_elevation

        p = GeodeticPosition(45.0, 10.0, 0.2)
        az, el = azimuth_elevation(p, p)
        assert math.isnan(az)
        assert math.isnan(el)

    def test_directly_below(self):
        from satwatch.domain.observation import azimuth_elevation

        az, el = azimuth_elevation(
            GeodeticPosition(0.0, 0.0, 400.0), GeodeticPosition(0.0, 0.0, 0.0),
        )
        assert math.isnan(az)
        assert el == -90.0

    def test_north(self):
        from satwatch.domain.observation import azimuth_elevation

        az, el = azimuth_elevation(
            GeodeticPosition(0.0, 0.0, 0.0), GeodeticPosition(10.0, 0.0, 500.0),
        )
        assert min(az, 360.0 - az) < 1e-6
        assert el > 0.0

    def test_east(self):
        from satwatch.domain.observation import azimuth_elevation

        az, _ = azimuth_elevation(
            GeodeticPosition(0.0, 0.0, 0.0), GeodeticPosition(0.0, 10.0, 500.0),
        )
        assert az == pytest.approx(90.0, abs=1e-6)

    def test_south(self):
        from satwatch.domain.observation import azimuth_elevation

        az, _ = azimuth_elevation(
            GeodeticPosition(0.0, 0.0, 0.0), GeodeticPosition(-10.0, 0.0, 500.0),
        )
        assert az == pytest.approx(180.0, abs=1e-6)

    def test_west(self):
        from satwatch.domain.observation import azimuth_elevation

        az, _ = azimuth_elevation(
            GeodeticPosition(0.0, 0.0, 0.0), GeodeticPosition(0.0, -10.0, 500.0),
        )
        assert az == pytest.approx(270.0, abs=1e-6)

    def test_far_side_below_horizon(self):
        from satwatch.domain.observation import azimuth_elevation

        _, el = azimuth_elevation(
            GeodeticPosition(0.0, 0.0, 0.0), GeodeticPosition(0.0, 90.0, 400.0),
        )
        assert el < 0.0

    def test_across_antimeridian(self):
        """Observer at 179.5°E sees a target at 179.5°W to the east."""
        from satwatch.domain.observation import azimuth_elevation

        az, el = azimuth_elevation(
            GeodeticPosition(0.0, 179.5, 0.0), GeodeticPosition(0.0, -179.5, 400.0),
        )
        assert az == pytest.approx(90.0, abs=1e-6)
        assert el > 60.0


class TestComputeObservation:

    def test_satellite_directly_overhead(self):
        """Satellite directly above station → el≈90°, range≈altitude."""
        from satwatch.domain.observation import GroundStation, compute_observation

        station = GroundStation(name='Eq', lat_deg=0.0, lon_deg=0.0, alt_km=0.0)
        obs = compute_observation(station, geodetic_to_ecef(0.0, 0.0, 500.0))
        assert obs.elevation_deg == 90.0
        assert obs.slant_range_km == pytest.approx(500.0, abs=1e-6)

    def test_range_at_least_altitude_difference(self):
        from satwatch.domain.observation import GroundStation, compute_observation

        station = GroundStation(name='Delft', lat_deg=52.0, lon_deg=4.4)
        obs = compute_observation(station, geodetic_to_ecef(45.0, 10.0, 550.0))
        assert obs.slant_range_km > 550.0
        assert 0.0 <= obs.azimuth_deg < 360.0
        assert -90.0 <= obs.elevation_deg <= 90.0

    def test_matches_azimuth_elevation(self):
        from satwatch.domain.observation import (
            GroundStation,
            azimuth_elevation,
            compute_observation,
        )

        station = GroundStation(name='Delft', lat_deg=52.0, lon_deg=4.4, alt_km=0.01)
        target = GeodeticPosition(48.0, 12.0, 420.0)
        obs = compute_observation(
            station, geodetic_to_ecef(target.lat_deg, target.lon_deg, target.alt_km),
        )
        az, el = azimuth_elevation(station.position, target)
        assert obs.azimuth_deg == pytest.approx(az)
        assert obs.elevation_deg == pytest.approx(el)


# ── Domain purity ────────────────────────────────────────────────────

_DOMAIN_MODULES = [
    "constants",
    "coordinate_frames",
    "observation",
    "elements",
    "propagation",
    "solar",
    "visibility",
    "ground_track",
    "sky_track",
    "access_windows",
    "groups",
    "sim_time",
]


class TestDomainPurity:

    @pytest.mark.parametrize("name", _DOMAIN_MODULES)
    def test_domain_imports_only_stdlib_numpy_and_domain(self, name):
        import importlib

        mod = importlib.import_module(f"satwatch.domain.{name}")
        allowed = {
            'math', 'dataclasses', 'typing', 'abc', 'enum', '__future__',
            'datetime', 'logging', 'numpy',
        }
        with open(mod.__file__) as f:
            tree = ast.parse(f.read())

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    root = alias.name.split('.')[0]
                    if root not in allowed:
                        assert False, f"Disallowed import '{alias.name}' in {name}"
            if isinstance(node, ast.ImportFrom):
                if node.module and node.level == 0:
                    if node.module.split('.')[0] in allowed:
                        continue
                    # Ports hold Protocols only
                    assert node.module.startswith(('satwatch.domain', 'satwatch.ports')), (
                        f"Disallowed import from '{node.module}' in {name}"
                    )
