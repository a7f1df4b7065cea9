# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Tracker configuration.

Plain frozen dataclasses built by the caller; no file parsing.
"""
import tempfile
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

from satwatch.adapters.celestrak import DEFAULT_TIMEOUT_S
from satwatch.domain.groups import GroupSpec
from satwatch.domain.observation import GroundStation

DEFAULT_CACHE_LIFETIME = timedelta(hours=2)

DEFAULT_GROUPS: tuple[GroupSpec, ...] = (
    # Space stations
    GroupSpec("ISS", designator="1998-067A"),
    GroupSpec("CSS", designator="2021-035A"),
    # Weather & Earth resources
    GroupSpec("Weather", collection="weather"),
    GroupSpec("NOAA", collection="noaa"),
    GroupSpec("GOES", collection="goes"),
    GroupSpec("Earth Resources", collection="resource"),
    GroupSpec("Search & Rescue", collection="sarsat"),
    GroupSpec("Disaster Monitoring", collection="dmc"),
    # Navigation
    GroupSpec("GPS", collection="gps-ops"),
    GroupSpec("GLONASS", collection="glo-ops"),
    GroupSpec("Galileo", collection="galileo"),
    GroupSpec("Beidou", collection="beidou"),
    # Scientific & miscellaneous
    GroupSpec("Space & Earth Science", collection="science"),
    GroupSpec("Geodetic", collection="geodetic"),
    GroupSpec("Engineering", collection="engineering"),
    GroupSpec("Education", collection="education"),
    GroupSpec("Military", collection="military"),
    GroupSpec("Radar Calibration", collection="radar"),
    GroupSpec("CubeSats", collection="cubesat"),
)


def default_cache_dir() -> Path:
    """Per-user temporary directory for cached element sets."""
    return Path(tempfile.gettempdir()) / "satwatch"


@dataclass(frozen=True)
class TrackerConfig:
    """Everything the engine needs to run."""
    groups: tuple[GroupSpec, ...] = DEFAULT_GROUPS
    cache_lifetime: timedelta = DEFAULT_CACHE_LIFETIME
    cache_dir: Path = field(default_factory=default_cache_dir)
    station: GroundStation | None = None
    request_timeout_s: float = DEFAULT_TIMEOUT_S
    stale_fallback: bool = False

    def __post_init__(self) -> None:
        if self.cache_lifetime <= timedelta(0):
            raise ValueError(f"Cache lifetime must be positive, got {self.cache_lifetime}")
        if self.request_timeout_s <= 0:
            raise ValueError(f"Request timeout must be positive, got {self.request_timeout_s}")
        labels = [spec.label.lower() for spec in self.groups]
        if len(labels) != len(set(labels)):
            raise ValueError("Group labels must be unique (case-insensitive)")
