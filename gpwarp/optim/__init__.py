# gpwarp/optim/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Hyperparameter search over energy landscapes.

Public API
----------
SearchSettings
    Immutable search parameters.
GlobalOptimizer
    Abstract base: grid, prior sampling and landscape evaluation.
GridSearch, MetropolisSearch
    Concrete optimizers.
"""

from .global_optimizer import SearchSettings, GlobalOptimizer
from .search import GridSearch, MetropolisSearch, landscape_minimum

__all__ = [
    "SearchSettings",
    "GlobalOptimizer",
    "GridSearch",
    "MetropolisSearch",
    "landscape_minimum",
]
