# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for TrackedObject prediction with an injected propagator."""
import logging
import math
from datetime import datetime, timedelta, timezone

import pytest

from satwatch.domain.constants import EarthConstants
from satwatch.domain.elements import parse_omm_record
from satwatch.domain.propagation import (
    InvalidElementsError,
    ObjectState,
    PropagationError,
    TrackedObject,
    materialize_objects,
)
from satwatch.ports.propagation import PropagationModel, Propagator


SAMPLE_OMM = {
    "OBJECT_NAME": "ISS (ZARYA)",
    "OBJECT_ID": "1998-067A",
    "EPOCH": "2026-02-11T04:21:12.145248",
    "MEAN_MOTION": 15.4854011,
    "ECCENTRICITY": 0.00110736,
    "INCLINATION": 51.6314,
    "RA_OF_ASC_NODE": 203.3958,
    "ARG_OF_PERICENTER": 86.686,
    "MEAN_ANOMALY": 273.5395,
    "NORAD_CAT_ID": 25544,
    "BSTAR": 0.00022024123,
    "REV_AT_EPOCH": 55222,
}

EPOCH = datetime(2026, 2, 11, 4, 21, 12, 145248, tzinfo=timezone.utc)
RADIUS_KM = 6778.0


# ── Helpers ──────────────────────────────────────────────────────────

class _EquatorialModel:
    """Circular equatorial orbit in TEME; fails outside [min, max] minutes."""

    def __init__(self, period_min, valid_minutes=(-math.inf, math.inf)):
        self._rate = 2.0 * math.pi / period_min
        self._valid = valid_minutes
        self.calls = []

    def propagate(self, minutes_since_epoch):
        self.calls.append(minutes_since_epoch)
        lo, hi = self._valid
        if not lo <= minutes_since_epoch <= hi:
            raise PropagationError(f"decayed at {minutes_since_epoch} min")
        angle = self._rate * minutes_since_epoch
        speed = RADIUS_KM * self._rate / 60.0
        return (
            (RADIUS_KM * math.cos(angle), RADIUS_KM * math.sin(angle), 0.0),
            (-speed * math.sin(angle), speed * math.cos(angle), 0.0),
        )


class _FakePropagator:

    def __init__(self, valid_minutes=(-math.inf, math.inf), reject=()):
        self._valid = valid_minutes
        self._reject = set(reject)
        self.models = []

    def initialize(self, elements):
        if elements.object_name in self._reject:
            raise InvalidElementsError(f"{elements.object_name} has decayed")
        model = _EquatorialModel(
            elements.orbital_period.total_seconds() / 60.0, self._valid,
        )
        self.models.append(model)
        return model


# ── Ports ────────────────────────────────────────────────────────────

class TestPorts:

    def test_fake_satisfies_ports(self):
        propagator = _FakePropagator()
        assert isinstance(propagator, Propagator)
        model = propagator.initialize(parse_omm_record(SAMPLE_OMM))
        assert isinstance(model, PropagationModel)

    def test_consumers_typed_against_port(self):
        import typing

        from satwatch.roster import GroupRoster

        for fn in (TrackedObject.__init__, materialize_objects, GroupRoster.__init__):
            hints = typing.get_type_hints(fn)
            assert hints["propagator"] is Propagator, fn.__qualname__


# ── TrackedObject ────────────────────────────────────────────────────

class TestTrackedObject:

    def test_identity_properties(self):
        obj = TrackedObject(parse_omm_record(SAMPLE_OMM), _FakePropagator())
        assert obj.name == "ISS (ZARYA)"
        assert obj.designator == "1998-067A"
        assert obj.norad_id == 25544
        assert obj.epoch == EPOCH
        assert "ISS (ZARYA)" in repr(obj)

    def test_orbital_period(self):
        obj = TrackedObject(parse_omm_record(SAMPLE_OMM), _FakePropagator())
        assert obj.orbital_period == timedelta(seconds=86400 / 15.4854011)

    def test_construction_rejected(self):
        with pytest.raises(InvalidElementsError):
            TrackedObject(
                parse_omm_record(SAMPLE_OMM),
                _FakePropagator(reject={"ISS (ZARYA)"}),
            )

    def test_invalid_elements_is_value_error(self):
        assert issubclass(InvalidElementsError, ValueError)
        assert issubclass(PropagationError, RuntimeError)

    def test_minutes_since_epoch(self):
        propagator = _FakePropagator()
        obj = TrackedObject(parse_omm_record(SAMPLE_OMM), propagator)
        obj.predict(EPOCH + timedelta(minutes=90, seconds=30))
        assert propagator.models[0].calls[-1] == pytest.approx(90.5)

    def test_before_epoch_negative_minutes(self):
        propagator = _FakePropagator()
        obj = TrackedObject(parse_omm_record(SAMPLE_OMM), propagator)
        obj.predict(EPOCH - timedelta(hours=1))
        assert propagator.models[0].calls[-1] == pytest.approx(-60.0)

    def test_predict_geodetic(self):
        obj = TrackedObject(parse_omm_record(SAMPLE_OMM), _FakePropagator())
        state = obj.predict(EPOCH + timedelta(minutes=17))
        assert isinstance(state, ObjectState)
        assert state.lat_deg == pytest.approx(0.0, abs=1e-9)
        assert -180.0 <= state.lon_deg <= 180.0
        assert state.alt_km == pytest.approx(RADIUS_KM - EarthConstants.R_EQUATORIAL_KM, abs=1e-6)

    def test_speed(self):
        obj = TrackedObject(parse_omm_record(SAMPLE_OMM), _FakePropagator())
        state = obj.predict(EPOCH)
        expected = RADIUS_KM * 2.0 * math.pi / obj.orbital_period.total_seconds()
        assert state.speed_km_s == pytest.approx(expected)
        assert 7.0 < state.speed_km_s < 8.0

    def test_naive_time_is_utc(self):
        obj = TrackedObject(parse_omm_record(SAMPLE_OMM), _FakePropagator())
        aware = obj.predict(EPOCH + timedelta(minutes=5))
        naive = obj.predict((EPOCH + timedelta(minutes=5)).replace(tzinfo=None))
        assert naive == aware

    def test_state_position(self):
        obj = TrackedObject(parse_omm_record(SAMPLE_OMM), _FakePropagator())
        state = obj.predict(EPOCH)
        assert state.position.lat_deg == state.lat_deg
        assert state.position.alt_km == state.alt_km

    def test_propagation_error_raised(self):
        obj = TrackedObject(
            parse_omm_record(SAMPLE_OMM), _FakePropagator(valid_minutes=(0, 60)),
        )
        with pytest.raises(PropagationError):
            obj.predict(EPOCH + timedelta(hours=2))

    def test_try_predict_returns_none(self):
        obj = TrackedObject(
            parse_omm_record(SAMPLE_OMM), _FakePropagator(valid_minutes=(0, 60)),
        )
        assert obj.try_predict(EPOCH + timedelta(hours=2)) is None
        assert obj.try_predict(EPOCH + timedelta(minutes=30)) is not None


# ── Materialisation ──────────────────────────────────────────────────

class TestMaterializeObjects:

    def test_skips_rejected(self, caplog):
        good = parse_omm_record(SAMPLE_OMM)
        bad = parse_omm_record(dict(SAMPLE_OMM, OBJECT_NAME="DEBRIS"))
        with caplog.at_level(logging.WARNING, logger="satwatch.domain.propagation"):
            objects = materialize_objects(
                [good, bad, good], _FakePropagator(reject={"DEBRIS"}),
            )
        assert [o.name for o in objects] == ["ISS (ZARYA)", "ISS (ZARYA)"]
        assert "DEBRIS" in caplog.text

    def test_empty(self):
        assert materialize_objects([], _FakePropagator()) == []
