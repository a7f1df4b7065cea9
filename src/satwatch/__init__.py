# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
satwatch

Orbital geometry and tracking-data engine for a satellite tracker.
Fetches OMM element sets from CelesTrak with an on-disk cache, propagates
them with SGP4, and derives map and sky geometry: sub-satellite points,
ground tracks, visibility circles, the day/night terminator, sky tracks
and pass times over a ground station.
"""

from satwatch.domain.coordinate_frames import (
    GeodeticPosition,
    gmst_rad,
    teme_to_ecef,
    ecef_to_geodetic,
    geodetic_to_ecef,
)
from satwatch.domain.observation import (
    GroundStation,
    Observation,
    azimuth_elevation,
    compute_observation,
)
from satwatch.domain.elements import (
    OrbitalElementSet,
    parse_omm_record,
    to_omm_record,
)
from satwatch.domain.propagation import (
    InvalidElementsError,
    ObjectState,
    PropagationError,
    TrackedObject,
    materialize_objects,
)
from satwatch.domain.solar import (
    subsolar_point,
    compute_terminator,
)
from satwatch.domain.visibility import (
    visibility_circle,
    nearest_object_index,
)
from satwatch.domain.ground_track import (
    GroundTrackPoint,
    compute_ground_track,
    split_at_antimeridian,
)
from satwatch.domain.sky_track import (
    SkyTrackPoint,
    compute_sky_track,
)
from satwatch.domain.access_windows import (
    PassWindow,
    segment_visibility,
    compute_pass_times,
)
from satwatch.domain.groups import (
    GroupEntry,
    GroupSpec,
    GroupState,
)
from satwatch.domain.sim_time import SimulationClock
from satwatch.config import (
    DEFAULT_CACHE_LIFETIME,
    DEFAULT_GROUPS,
    TrackerConfig,
)
from satwatch.roster import (
    FetchOutcome,
    FetchTask,
    GroupRoster,
    fetch_elements,
)

__version__ = "0.1.0"
