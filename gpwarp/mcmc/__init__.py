# gpwarp/mcmc/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Markov chain Monte Carlo for gpwarp.

Public API
----------
GeneralMetropolisHastings
    Single-chain random-walk Metropolis-Hastings, as a pull-based
    iterator.
AdditiveGroup, RealGroup, ConfigurationGroup
    Addition on chain states used by the random-walk proposal.
"""
from __future__ import annotations

import importlib

__all__ = [
    "GeneralMetropolisHastings",
    "AdditiveGroup",
    "RealGroup",
    "ConfigurationGroup",
]

_EXPORT_TO_MODULE = {
    "GeneralMetropolisHastings": "mh",
    "AdditiveGroup": "groups",
    "RealGroup": "groups",
    "ConfigurationGroup": "groups",
}


def __getattr__(name: str):
    module_name = _EXPORT_TO_MODULE.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = importlib.import_module(f"{__name__}.{module_name}")
    obj = getattr(module, name)
    globals()[name] = obj
    return obj


def __dir__():
    return sorted(set(globals().keys()) | set(__all__))
