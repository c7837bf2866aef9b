# gpwarp/mcmc/groups.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Additive structures over chain states.

A random-walk proposal moves the state ``x`` to ``plus(x, step)``. The
group is passed explicitly to the sampler so that any state type with
an addition can be sampled.
"""
from abc import ABC, abstractmethod


class AdditiveGroup(ABC):
    @abstractmethod
    def zero(self, like=None):
        pass

    @abstractmethod
    def plus(self, a, b):
        pass

    @abstractmethod
    def negate(self, a):
        pass

    def minus(self, a, b):
        return self.plus(a, self.negate(b))


class RealGroup(AdditiveGroup):
    """Floats, arrays and partitioned vectors, through ``+`` and unary ``-``."""

    def zero(self, like=None):
        return 0.0 if like is None else 0.0 * like

    def plus(self, a, b):
        return a + b

    def negate(self, a):
        return -a


class ConfigurationGroup(AdditiveGroup):
    """Hyperparameter configurations ``{name: value}`` added key by key.

    Parameters
    ----------
    keys : sequence of str
        The keys of every configuration, in order.
    """

    def __init__(self, keys):
        self.keys = list(keys)

    def __repr__(self):
        return f"ConfigurationGroup({self.keys!r})"

    def zero(self, like=None):
        return {k: 0.0 for k in self.keys}

    def plus(self, a, b):
        return {k: float(a[k]) + float(b[k]) for k in self.keys}

    def negate(self, a):
        return {k: -float(a[k]) for k in self.keys}

    def to_vector(self, config):
        return [float(config[k]) for k in self.keys]

    def from_vector(self, values):
        values = list(values)
        if len(values) != len(self.keys):
            raise ValueError(f"Expected {len(self.keys)} values, got {len(values)}")
        return {k: float(v) for k, v in zip(self.keys, values)}
