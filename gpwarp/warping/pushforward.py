# gpwarp/warping/pushforward.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Invertible differentiable maps between a latent space and the
observation space.

A :class:`PushforwardMap` carries three elementwise functions

    forward  : latent -> observation
    inverse  : observation -> latent
    jacobian : derivative of ``inverse``, evaluated at an observation

and optionally the open interval of the observation space on which
``inverse`` is defined. :class:`VectorPushforward` lifts a scalar map to
partitioned vectors; its Jacobian is block diagonal.
"""
import gpwarp.num as gnp
from gpwarp.core.partitioned import PartitionedVector, PartitionedMatrix
from gpwarp.errors import DomainError


def _values(y):
    # scalar-preserving conversion (gnp.asarray turns a float into shape (1,))
    return gnp.asdouble(y)


class DifferentiableMap:
    """A callable elementwise function with its derivative."""

    def __init__(self, func, jacobian, name=None):
        self.func = func
        self._jacobian = jacobian
        self.name = name or getattr(func, "__name__", "map")

    def __repr__(self):
        return f"<DifferentiableMap {self.name}>"

    def __call__(self, x):
        return self.func(x)

    def jacobian(self, x):
        return self._jacobian(x)


class PushforwardMap:
    """Elementwise bijection between latent values and observations.

    Parameters
    ----------
    forward : callable
        Latent -> observation, strictly increasing.
    inverse : callable
        Observation -> latent.
    jacobian : callable
        Derivative of ``inverse`` at an observation.
    domain : tuple or callable, optional
        Open interval ``(low, high)`` of observations on which
        ``inverse`` is defined, or a predicate returning a boolean
        array. ``None`` means the whole real line.
    name : str, optional
    """

    def __init__(self, forward, inverse, jacobian, domain=None, name=None):
        self.forward = forward
        self.inverse = inverse
        self.jacobian = jacobian
        self.domain = domain
        self.name = name or "pushforward"

    def __repr__(self):
        return f"<PushforwardMap {self.name}>"

    def __call__(self, x):
        return self.forward(x)

    @property
    def i(self):
        """The inverse map, with the inverse Jacobian as derivative."""
        return DifferentiableMap(self.inverse, self.jacobian, name=f"{self.name}^-1")

    def _domain_mask(self, y):
        # boolean array with the shape of y
        if self.domain is None:
            return gnp.isfinite(y)
        if callable(self.domain):
            return self.domain(y) & gnp.isfinite(y)
        low, high = self.domain
        return (y > low) & (y < high)

    def in_domain(self, y):
        """Elementwise test that ``inverse`` is defined at ``y``."""
        mask = self._domain_mask(_values(y))
        if mask.ndim == 0:
            return bool(mask)
        return mask

    def check_bijection(self, points, tol=1e-9):
        """Check that ``inverse`` is defined and round-trips at ``points``.

        Parameters
        ----------
        points : array_like
            Observations, typically the training labels.
        tol : float
            Relative tolerance on ``forward(inverse(y)) == y``.

        Returns
        -------
        array_like
            ``inverse(points)``.

        Raises
        ------
        DomainError
            If a point is outside the domain, if its inverse is not
            finite, or if the round trip fails.
        """
        y = _values(points).reshape(-1)
        inside = self._domain_mask(y)
        if not gnp.all(inside):
            bad = y[~inside]
            raise DomainError(
                f"{self.name}: inverse undefined at {bad.size} value(s), e.g. {bad[0]!r}"
            )
        x = _values(self.inverse(y))
        finite = gnp.isfinite(x)
        if not gnp.all(finite):
            bad = y[~finite]
            raise DomainError(
                f"{self.name}: inverse is not finite at {bad.size} value(s), e.g. {bad[0]!r}"
            )
        back = _values(self.forward(x))
        err = gnp.abs(back - y)
        if not gnp.all(err <= tol * (1.0 + gnp.abs(y))):
            k = int(gnp.argmax(err))
            raise DomainError(
                f"{self.name}: forward(inverse(y)) != y at y={y[k]!r} "
                f"(got {back[k]!r})"
            )
        return x

    def then(self, other):
        """Composition: ``self`` first, then ``other``.

        The composite forward is ``other.forward(self.forward(x))``; its
        inverse Jacobian follows from the chain rule.
        """
        first, second = self, other

        def forward(x):
            return second.forward(first.forward(x))

        def inverse(y):
            return first.inverse(second.inverse(y))

        def jacobian(y):
            return first.jacobian(second.inverse(y)) * second.jacobian(y)

        def domain(y):
            inside = second._domain_mask(y)
            u = _values(second.inverse(gnp.where(inside, y, _safe_point(second))))
            return inside & first._domain_mask(u)

        return PushforwardMap(
            forward, inverse, jacobian, domain=domain,
            name=f"{second.name}.{first.name}",
        )

    def lift(self):
        return VectorPushforward(self)


def _safe_point(m):
    # a value where m.inverse is defined, substituted before masking
    if m.domain is None or callable(m.domain):
        return 1.0
    low, high = m.domain
    if gnp.isfinite(low) and gnp.isfinite(high):
        return 0.5 * (low + high)
    if gnp.isfinite(low):
        return low + 1.0
    if gnp.isfinite(high):
        return high - 1.0
    return 0.0


class VectorPushforward:
    """A scalar :class:`PushforwardMap` applied entrywise to partitioned vectors.

    Observations are independent under the warp, so the Jacobian is
    block diagonal: diagonal block ``k`` is ``diag(jacobian(v_k))`` and
    off-diagonal blocks are never stored.
    """

    def __init__(self, scalar_map: PushforwardMap):
        self.scalar_map = scalar_map

    def __repr__(self):
        return f"<VectorPushforward {self.scalar_map.name}>"

    def forward(self, v: PartitionedVector) -> PartitionedVector:
        return v.map_values(self.scalar_map.forward)

    def inverse(self, v: PartitionedVector) -> PartitionedVector:
        return v.map_values(self.scalar_map.inverse)

    def jacobian(self, v: PartitionedVector) -> PartitionedMatrix:
        """Block-diagonal Jacobian of the inverse map at ``v``."""
        return PartitionedMatrix.block_diagonal(
            [gnp.diag(gnp.asarray(self.scalar_map.jacobian(b)).reshape(-1)) for b in v.blocks]
        )

    def log_abs_det_jacobian(self, v: PartitionedVector) -> float:
        J = self.jacobian(v)
        total = 0.0
        for block in J.diagonal_blocks():
            total += float(gnp.sum(gnp.log(gnp.abs(gnp.diagonal(block)))))
        return total
