# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Domain layer: frames, propagation, geometry and group state.

Pure computation; nothing here performs I/O.
"""
