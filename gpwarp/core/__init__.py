# gpwarp/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------

"""
Core components of the gpwarp package.

This subpackage contains the GP regression model, its kriging and
likelihood routines, the block-partitioned containers used for
predictive distributions, and the warped process built on top of any
process.

Public API
----------
Model : class
    Gaussian Process regression model over training data.
WarpedProcess, warp
    Process observed through a pushforward map.
PartitionedVector, PartitionedMatrix
    Block-partitioned containers.
BlockGaussian, PushforwardDistribution
    Predictive distributions.
HyperparameterState
    Shared named hyperparameters.
Encoder, ArrayPairsEncoder
    Training data <-> sequence of (x, y) pairs.
GloballyOptimizable, Process, ErrorBar
    Contracts.
"""

from .partitioned import PartitionedVector, PartitionedMatrix
from .state import HyperparameterState
from .encoders import Encoder, ArrayPairsEncoder
from .process import GloballyOptimizable, Process, ErrorBar
from .distributions import BlockGaussian, PushforwardDistribution
from .model import Model
from .warped import WarpedProcess, warp

__all__ = [
    "Model",
    "WarpedProcess",
    "warp",
    "PartitionedVector",
    "PartitionedMatrix",
    "BlockGaussian",
    "PushforwardDistribution",
    "HyperparameterState",
    "Encoder",
    "ArrayPairsEncoder",
    "GloballyOptimizable",
    "Process",
    "ErrorBar",
]
