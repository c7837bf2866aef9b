# gpwarp/core/distributions.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Predictive distributions over partitioned vectors.

BlockGaussian
    Multivariate normal whose mean is a PartitionedVector and whose
    covariance is a PartitionedMatrix, as returned by
    ``Model.predictive_distribution``.
PushforwardDistribution
    A latent distribution paired with a vector pushforward map, as
    returned by ``WarpedProcess.predictive_distribution``. Nothing is
    transformed until a quantity is requested.
"""
import gpwarp.num as gnp
from .partitioned import PartitionedVector, PartitionedMatrix


def _as_array(v):
    return v.to_array() if isinstance(v, PartitionedVector) else gnp.asarray(v)


class BlockGaussian:
    def __init__(self, mean: PartitionedVector, covariance: PartitionedMatrix):
        if mean.rows != covariance.rows or covariance.rows != covariance.cols:
            raise ValueError(
                f"mean has {mean.rows} rows, covariance has shape {covariance.shape}"
            )
        self.mean = mean
        self.covariance = covariance

    def __repr__(self):
        return f"<BlockGaussian dim={self.mean.rows} blocks={self.mean.row_blocks}>"

    @property
    def dim(self) -> int:
        return self.mean.rows

    def variance(self) -> PartitionedVector:
        """Marginal variances, read from the diagonal blocks only."""
        return PartitionedVector(
            [gnp.diagonal(b) for b in self.covariance.diagonal_blocks()],
            num_rows=self.dim,
        )

    def _sampling_factor(self):
        # eigen-decomposition with clipped eigenvalues: posterior covariances
        # are often only positive semi-definite up to round-off
        C = self.covariance.to_array()
        C = 0.5 * (C + C.T)
        w, V = gnp.eigh(C)
        return V * gnp.sqrt(gnp.maximum(w, 0.0))

    def sample(self, n=None, rng=None):
        """Draw one PartitionedVector, or a list of ``n`` of them."""
        rng = gnp.get_rng() if rng is None else rng
        m = self.mean.to_array()
        L = self._sampling_factor()
        count = 1 if n is None else int(n)
        u = rng.standard_normal((count, self.dim))
        draws = m + gnp.matmul(u, L.T)
        sizes = self.mean.block_sizes
        out = [
            PartitionedVector.from_array(d, sizes[0] if sizes else None)
            for d in draws
        ]
        return out[0] if n is None else out

    def logpdf(self, v) -> float:
        v = _as_array(v)
        return float(
            gnp.multivariate_normal.logpdf(
                v, mean=self.mean.to_array(), cov=self.covariance.to_array()
            )
        )


class PushforwardDistribution:
    """Latent distribution paired with a (vector) pushforward map.

    Parameters
    ----------
    pushforward : VectorPushforward
        Maps latent vectors to observation space.
    underlying : BlockGaussian
        Latent predictive distribution.
    """

    def __init__(self, pushforward, underlying):
        self.pushforward = pushforward
        self.underlying = underlying

    def __repr__(self):
        return (
            f"<PushforwardDistribution map={self.pushforward!r} "
            f"underlying={self.underlying!r}>"
        )

    def __iter__(self):
        # unpacks as (pushforward, underlying)
        return iter((self.pushforward, self.underlying))

    def sample(self, n=None, rng=None):
        draws = self.underlying.sample(n, rng=rng)
        if n is None:
            return self.pushforward.forward(draws)
        return [self.pushforward.forward(d) for d in draws]

    def median(self) -> PartitionedVector:
        """Forward image of the latent mean (the median for a monotone map)."""
        return self.pushforward.forward(self.underlying.mean)

    def logpdf(self, y) -> float:
        """Change of variables: ``log p_X(f^-1(y)) + log|det J_{f^-1}(y)|``."""
        if not isinstance(y, PartitionedVector):
            sizes = self.underlying.mean.block_sizes
            y = PartitionedVector.from_array(y, sizes[0] if sizes else None)
        x = self.pushforward.inverse(y)
        return self.underlying.logpdf(x) + self.pushforward.log_abs_det_jacobian(y)
