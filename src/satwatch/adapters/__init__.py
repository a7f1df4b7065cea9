# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for the element catalog, the element cache and SGP4.

External dependencies (urllib, json, file I/O, sgp4) are confined to this layer.
"""
from satwatch.adapters.celestrak import CelesTrakAdapter
from satwatch.adapters.element_cache import ElementCache
from satwatch.adapters.sgp4_propagator import SGP4Model, SGP4Propagator
