# gpwarp/core/encoders.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Encoders between a model's training-data container and a sequence of
``(x, y)`` pairs.

Warping only touches the labels ``y``; the encoder lets a process
rebuild its own data container after the labels have been mapped.
"""
from abc import ABC, abstractmethod
import gpwarp.num as gnp


class Encoder(ABC):
    """Invertible conversion ``data <-> [(x, y), ...]``."""

    @abstractmethod
    def encode(self, data):
        pass

    @abstractmethod
    def decode(self, pairs):
        pass

    def map_labels(self, data, func):
        """Apply ``func`` to every label of ``data`` and rebuild the container."""
        return self.decode([(x, func(y)) for x, y in self.encode(data)])


class ArrayPairsEncoder(Encoder):
    """Encoder for ``(xi, zi)`` tuples of arrays.

    ``xi`` has shape (n, d) and ``zi`` shape (n,) or (n, 1). Each pair
    holds one row of ``xi`` and the matching label as a float.
    """

    def encode(self, data):
        xi, zi = data
        xi = gnp.asarray(xi)
        zi = gnp.asarray(zi).reshape(-1)
        if xi.shape[0] != zi.shape[0]:
            raise ValueError("xi and zi must have the same number of rows")
        return [(xi[k], float(zi[k])) for k in range(xi.shape[0])]

    def decode(self, pairs):
        pairs = list(pairs)
        if not pairs:
            raise ValueError("Cannot decode an empty sequence of pairs")
        xi = gnp.vstack([gnp.asarray(x).reshape(1, -1) for x, _ in pairs])
        zi = gnp.array([y for _, y in pairs])
        return xi, zi

    def map_labels(self, data, func):
        # vectorized shortcut, equivalent to the generic encode/decode path
        xi, zi = data
        return gnp.asarray(xi), gnp.asarray(func(gnp.asarray(zi).reshape(-1)))
