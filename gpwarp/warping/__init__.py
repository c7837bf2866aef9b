# gpwarp/warping/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Pushforward maps used to warp the observation space of a GP.

Modules
-------
pushforward
    DifferentiableMap, PushforwardMap and its lift to partitioned
    vectors, VectorPushforward.
maps
    Standard monotone warps.
"""

from .pushforward import DifferentiableMap, PushforwardMap, VectorPushforward
from .maps import identity_map, exp_map, affine_map, sinh_arcsinh_map, box_cox_map

__all__ = [
    "DifferentiableMap",
    "PushforwardMap",
    "VectorPushforward",
    "identity_map",
    "exp_map",
    "affine_map",
    "sinh_arcsinh_map",
    "box_cox_map",
]
