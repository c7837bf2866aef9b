# gpwarp/core/process.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Abstract contracts shared by the base GP model and warped processes.

GloballyOptimizable
    Anything with named hyperparameters and an ``energy`` to minimize.
Process
    A GP regression process: mean, covariance, predictive distribution,
    point and error-bar predictions, and a data encoder.
ErrorBar
    ``(x, lower, mean, upper)`` record returned by
    ``prediction_with_error_bars``.
"""
from abc import ABC, abstractmethod
from collections import namedtuple

ErrorBar = namedtuple("ErrorBar", ["x", "lower", "mean", "upper"])


class GloballyOptimizable(ABC):
    """A system whose configuration is searched by a global optimizer.

    ``hyperparameters`` is the mutable mapping name -> value describing
    the current configuration. ``energy(h, options)`` applies ``h`` and
    returns the scalar to be minimized.
    """

    @property
    @abstractmethod
    def hyperparameters(self):
        pass

    @abstractmethod
    def energy(self, h, options=None) -> float:
        pass


class Process(GloballyOptimizable):
    """GP regression process over an index set of input points."""

    @property
    @abstractmethod
    def data(self):
        """Training data container."""

    @property
    @abstractmethod
    def npoints(self) -> int:
        pass

    @property
    @abstractmethod
    def block_size(self) -> int:
        pass

    @property
    @abstractmethod
    def encoder(self):
        pass

    @abstractmethod
    def mean(self, x):
        pass

    @property
    @abstractmethod
    def covariance(self):
        pass

    @abstractmethod
    def predictive_distribution(self, xt):
        pass

    @abstractmethod
    def prediction_with_error_bars(self, xt, sigma):
        pass

    @abstractmethod
    def predict(self, point):
        pass

    @abstractmethod
    def refit(self, data) -> "Process":
        """Same process (shared hyperparameter state) over new training data."""

    def data_as_seq(self, data=None):
        """Training data (or ``data``) as a list of ``(x, y)`` pairs."""
        return self.encoder.encode(self.data if data is None else data)
