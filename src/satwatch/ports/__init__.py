# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for external capabilities.

Adapters implement these for the element catalog and the propagator.
"""
from satwatch.ports.catalog import CatalogSource
from satwatch.ports.propagation import PropagationModel, Propagator
