# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for the external orbit propagation capability.

Adapters wrap an actual propagator library (SGP4).
"""
from typing import Protocol, runtime_checkable

from satwatch.domain.elements import OrbitalElementSet

Vector3 = tuple[float, float, float]


@runtime_checkable
class PropagationModel(Protocol):
    """Propagation constants for one element set."""

    def propagate(self, minutes_since_epoch: float) -> tuple[Vector3, Vector3]:
        """TEME position (km) and velocity (km/s); raises PropagationError."""
        ...


@runtime_checkable
class Propagator(Protocol):
    """Port for building propagation models from element sets."""

    def initialize(self, elements: OrbitalElementSet) -> PropagationModel:
        """Derive propagation constants; raises InvalidElementsError."""
        ...
