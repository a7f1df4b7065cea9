# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for the remote element catalog.

Adapters handle the actual HTTP/API calls.
"""
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CatalogSource(Protocol):
    """Port for fetching OMM records from an external catalog."""

    def fetch_by_designator(self, designator: str) -> list[dict[str, Any]]:
        """Fetch OMM records for an international (COSPAR) designator."""
        ...

    def fetch_collection(self, collection: str) -> list[dict[str, Any]]:
        """Fetch OMM records for a named satellite collection."""
        ...
