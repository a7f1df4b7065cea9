# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Tracking groups: what to fetch and where each group stands.

A group names a set of catalog objects, either a single launch by its
COSPAR international designator (e.g. "1998-067A") or a CelesTrak
collection (e.g. "weather"). Each configured group gets a GroupEntry
whose state moves UNSELECTED → LOADING → SELECTED and back.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from satwatch.domain.propagation import TrackedObject


@dataclass(frozen=True)
class GroupSpec:
    """A configured group: a label plus exactly one fetch key."""
    label: str
    designator: str | None = None
    collection: str | None = None

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError("Group label must not be empty")
        if (self.designator is None) == (self.collection is None):
            raise ValueError(
                f"Group {self.label!r} needs exactly one of designator or collection"
            )

    @property
    def query(self) -> tuple[str, str]:
        """(kind, value) where kind is 'designator' or 'collection'."""
        if self.designator is not None:
            return "designator", self.designator
        return "collection", self.collection


class GroupState(Enum):
    UNSELECTED = "unselected"
    LOADING = "loading"
    SELECTED = "selected"


@dataclass
class GroupEntry:
    """Runtime state of one configured group. Owned by the roster."""
    spec: GroupSpec
    state: GroupState = GroupState.UNSELECTED
    task: Any = None
    objects: list[TrackedObject] = field(default_factory=list)
    last_error: str | None = None

    @property
    def label(self) -> str:
        return self.spec.label

    @property
    def selected(self) -> bool:
        return self.state is GroupState.SELECTED

    @property
    def loading(self) -> bool:
        return self.state is GroupState.LOADING
