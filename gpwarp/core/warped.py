# gpwarp/core/warped.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Warped Gaussian processes.

A :class:`WarpedProcess` models observations ``y = f(z)`` where ``z`` is
a GP (the wrapped process) and ``f`` is a strictly increasing
pushforward map. The wrapped process is refitted once on the latent
labels ``f^{-1}(y)``; every prediction is made in latent space and
mapped back with ``f``.

Two quantities are deliberately not exact pushforward moments:

- ``mean(x)`` is ``f(m(x))``, the image of the prior mean, not
  ``E[f(Z(x))]``;
- ``prediction_with_error_bars`` maps each of the three latent values
  ``m - s*sd, m, m + s*sd`` through ``f`` independently.
"""
import gpwarp.num as gnp
from gpwarp.config import get_logger
from gpwarp.errors import DegeneracyError
from gpwarp.warping.pushforward import PushforwardMap

from .distributions import PushforwardDistribution
from .partitioned import PartitionedVector
from .process import Process, ErrorBar

_logger = get_logger()


class WarpedProcess(Process):
    """A process observed through a pushforward map.

    Parameters
    ----------
    process : Process
        Base process holding the training data in observation space.
        It is not copied: its hyperparameter state is the state of the
        warped process.
    pushforward : PushforwardMap
        Latent -> observation map.
    encoder : Encoder, optional
        Data encoder, defaults to ``process.encoder``.

    Raises
    ------
    DomainError
        If the inverse map is undefined, not finite, or does not
        round-trip at a training label.
    DegeneracyError
        If the inverse Jacobian is not strictly positive and finite at a
        training label.
    """

    def __init__(self, process, pushforward: PushforwardMap, encoder=None):
        self._process = process
        self._pushforward = pushforward
        self._vector_map = pushforward.lift()
        self._encoder = process.encoder if encoder is None else encoder

        labels = gnp.array([y for _, y in self._encoder.encode(process.data)])
        pushforward.check_bijection(labels)
        jac = gnp.asdouble(pushforward.jacobian(labels)).reshape(-1)
        if not gnp.all(gnp.isfinite(jac)) or not gnp.all(jac > 0.0):
            raise DegeneracyError(
                f"{pushforward.name}: inverse Jacobian is not positive and finite "
                "at the training labels (map not strictly increasing there)"
            )

        self._labels = PartitionedVector.from_array(labels, process.block_size)
        latent_data = self._encoder.map_labels(process.data, pushforward.inverse)
        self._underlying = process.refit(latent_data)
        _logger.debug(
            "Warped %d training labels with %s", labels.shape[0], pushforward.name
        )

    def __repr__(self):
        return f"<gpwarp.core.WarpedProcess {self._pushforward.name}> " + hex(id(self))

    @property
    def process(self):
        """The wrapped process, in observation space."""
        return self._process

    @property
    def underlying(self):
        """The wrapped process refitted on latent labels."""
        return self._underlying

    @property
    def pushforward(self):
        return self._pushforward

    @property
    def data(self):
        return self._process.data

    @property
    def npoints(self):
        return self._process.npoints

    @property
    def block_size(self):
        return self._process.block_size

    @property
    def encoder(self):
        return self._encoder

    @property
    def hyperparameters(self):
        return self._underlying.hyperparameters

    @property
    def covariance(self):
        return self._underlying.covariance

    def mean(self, x):
        """Image of the base prior mean, ``f(m(x))``."""
        return self._pushforward.forward(self._process.mean(x))

    def predictive_distribution(self, xt):
        """Latent predictive distribution paired with the vector map."""
        return PushforwardDistribution(
            self._vector_map, self._underlying.predictive_distribution(xt)
        )

    def prediction_with_error_bars(self, xt, sigma):
        f = self._pushforward.forward
        return [
            ErrorBar(
                bar.x,
                float(f(bar.lower)),
                float(f(bar.mean)),
                float(f(bar.upper)),
            )
            for bar in self._underlying.prediction_with_error_bars(xt, sigma)
        ]

    def log_jacobian_determinant(self):
        """Log of the inverse Jacobian determinant at the training labels.

        Summed over the diagonal blocks of the block-diagonal Jacobian.

        Raises
        ------
        DegeneracyError
            If a block determinant is not strictly positive or its log is
            not finite.
        """
        jac = self._vector_map.jacobian(self._labels)
        logdet = 0.0
        for sign, logabsdet in jac.block_log_determinants():
            if sign <= 0.0 or not gnp.isfinite(logabsdet):
                raise DegeneracyError(
                    f"{self._pushforward.name}: Jacobian block at the training labels "
                    f"has sign {sign!r} and log-determinant {logabsdet!r}; it does "
                    "not define a density"
                )
            logdet += logabsdet
        return logdet

    def jacobian_determinant(self):
        """Determinant of the inverse Jacobian at the training labels.

        May underflow to 0.0 or overflow to inf for many training labels;
        :meth:`log_jacobian_determinant` does not.
        """
        return float(gnp.exp(self.log_jacobian_determinant()))

    def energy(self, h, options=None):
        """Latent energy times the inverse Jacobian determinant.

        Raises
        ------
        DegeneracyError
            If a block of the Jacobian is not strictly positive.
        """
        latent_energy = self._underlying.energy(h, options)
        return latent_energy * gnp.exp(self.log_jacobian_determinant())

    def predict(self, point):
        x = gnp.asarray(point).reshape(1, -1)
        bar = self._underlying.prediction_with_error_bars(x, 1)[0]
        return float(self._pushforward.forward(bar.mean))

    def refit(self, data):
        return WarpedProcess(self._process.refit(data), self._pushforward, self._encoder)


def warp(process, pushforward, encoder=None):
    """Wrap ``process`` with ``pushforward``; see :class:`WarpedProcess`."""
    return WarpedProcess(process, pushforward, encoder=encoder)
