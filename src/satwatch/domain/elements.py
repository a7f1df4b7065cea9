# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
OMM (Orbit Mean-Elements Message) element sets.

Converts CelesTrak JSON OMM records into immutable domain objects and
back, so fetched catalogs can be cached on disk in the same format.
No external dependencies — only stdlib dataclasses/datetime.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from satwatch.domain.constants import SECONDS_PER_DAY

_EPOCH_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"


@dataclass(frozen=True)
class OrbitalElementSet:
    """One catalog record: mean elements at a UTC epoch."""
    object_name: str
    object_id: str
    norad_cat_id: int
    epoch: datetime
    mean_motion_rev_per_day: float
    eccentricity: float
    inclination_deg: float
    raan_deg: float
    arg_perigee_deg: float
    mean_anomaly_deg: float
    bstar: float
    rev_at_epoch: int
    mean_motion_dot: float = 0.0
    mean_motion_ddot: float = 0.0
    classification_type: str = "U"
    element_set_no: int = 0
    ephemeris_type: int = 0

    @property
    def orbital_period(self) -> timedelta:
        return timedelta(seconds=SECONDS_PER_DAY / self.mean_motion_rev_per_day)


def parse_epoch(epoch_str: str) -> datetime:
    """
    Parse an OMM EPOCH string into a timezone-aware UTC datetime.

    A trailing 'Z' is accepted; strings without an offset are UTC.

    Raises:
        ValueError: If the string is not an ISO-8601 timestamp.
    """
    if epoch_str.endswith("Z"):
        epoch_str = epoch_str[:-1] + "+00:00"
    epoch = datetime.fromisoformat(epoch_str)
    if epoch.tzinfo is None:
        return epoch.replace(tzinfo=timezone.utc)
    return epoch.astimezone(timezone.utc)


def parse_omm_record(record: dict[str, Any]) -> OrbitalElementSet:
    """
    Parse a CelesTrak OMM JSON record into an OrbitalElementSet.

    Args:
        record: Dict from CelesTrak JSON API with OMM fields.

    Returns:
        OrbitalElementSet domain object.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If the epoch is malformed or mean motion is non-positive.
    """
    mean_motion_rpd = float(record["MEAN_MOTION"])
    if mean_motion_rpd <= 0:
        raise ValueError(f"Mean motion must be positive, got {mean_motion_rpd}")

    return OrbitalElementSet(
        object_name=record["OBJECT_NAME"],
        object_id=record["OBJECT_ID"],
        norad_cat_id=int(record["NORAD_CAT_ID"]),
        epoch=parse_epoch(record["EPOCH"]),
        mean_motion_rev_per_day=mean_motion_rpd,
        eccentricity=float(record["ECCENTRICITY"]),
        inclination_deg=float(record["INCLINATION"]),
        raan_deg=float(record["RA_OF_ASC_NODE"]),
        arg_perigee_deg=float(record["ARG_OF_PERICENTER"]),
        mean_anomaly_deg=float(record["MEAN_ANOMALY"]),
        bstar=float(record["BSTAR"]),
        rev_at_epoch=int(record.get("REV_AT_EPOCH", 0)),
        mean_motion_dot=float(record.get("MEAN_MOTION_DOT", 0.0)),
        mean_motion_ddot=float(record.get("MEAN_MOTION_DDOT", 0.0)),
        classification_type=record.get("CLASSIFICATION_TYPE", "U"),
        element_set_no=int(record.get("ELEMENT_SET_NO", 0)),
        ephemeris_type=int(record.get("EPHEMERIS_TYPE", 0)),
    )


def to_omm_record(elements: OrbitalElementSet) -> dict[str, Any]:
    """Serialize an OrbitalElementSet to a CelesTrak-style OMM dict."""
    epoch = elements.epoch.astimezone(timezone.utc).replace(tzinfo=None)
    return {
        "OBJECT_NAME": elements.object_name,
        "OBJECT_ID": elements.object_id,
        "EPOCH": epoch.strftime(_EPOCH_FORMAT),
        "MEAN_MOTION": elements.mean_motion_rev_per_day,
        "ECCENTRICITY": elements.eccentricity,
        "INCLINATION": elements.inclination_deg,
        "RA_OF_ASC_NODE": elements.raan_deg,
        "ARG_OF_PERICENTER": elements.arg_perigee_deg,
        "MEAN_ANOMALY": elements.mean_anomaly_deg,
        "EPHEMERIS_TYPE": elements.ephemeris_type,
        "CLASSIFICATION_TYPE": elements.classification_type,
        "NORAD_CAT_ID": elements.norad_cat_id,
        "ELEMENT_SET_NO": elements.element_set_no,
        "REV_AT_EPOCH": elements.rev_at_epoch,
        "BSTAR": elements.bstar,
        "MEAN_MOTION_DOT": elements.mean_motion_dot,
        "MEAN_MOTION_DDOT": elements.mean_motion_ddot,
    }
