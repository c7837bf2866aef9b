# gpwarp/num/numpy_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy/SciPy implementation of the ``gpwarp.num`` namespace.

Everything defined or imported at module level (except dunder names)
is re-exported by ``gpwarp.num``, so modules write ``gnp.exp``,
``gnp.cholesky_solve``... without knowing which library is behind.
Floating arrays are created in the configured dtype.
"""
from typing import Any, Optional

import numpy
from numpy import (
    abs,
    all,
    any,
    arange,
    arcsinh,
    argmax,
    concatenate,
    cosh,
    cumsum,
    diag,
    diagonal,
    einsum,
    exp,
    expm1,
    hstack,
    inf,
    isfinite,
    log,
    matmul,
    max,
    maximum,
    min,
    pi,
    power,
    prod,
    sinh,
    sqrt,
    sum,
    var,
    vstack,
    where,
)
from numpy.linalg import LinAlgError, cholesky, det, eigh, slogdet
from scipy.linalg import solve_triangular
from scipy.spatial.distance import cdist
from scipy.special import gammaln
from scipy.stats import multivariate_normal as _scipy_mvn
from scipy.stats import norm as _scipy_norm

from gpwarp.config import _normalize_dtype_spec, get_config, get_logger, init_backend

ArrayLike = Any

_config = get_config()
get_logger().info("Using backend: %s", init_backend())

_float = (
    numpy.float32
    if _normalize_dtype_spec(_config.dtype) == "float32"
    else numpy.float64
)
_config.dtype_resolved = _float

eps = numpy.finfo(_float).eps
fmax = numpy.finfo(_float).max


def safe_inf():
    """+inf as a plain float, the value of a failed energy."""
    return inf


# ---------------------------------------------------------------------------
# array creation
# ---------------------------------------------------------------------------
def _floating(a):
    if numpy.issubdtype(a.dtype, numpy.floating):
        return a.astype(_float, copy=False)
    return a


def array(x, dtype=None):
    return numpy.array(x, dtype=dtype) if dtype is not None else _floating(numpy.array(x))


def asarray(x, dtype=None):
    """Convert to an array; a Python scalar becomes a 1-element vector."""
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    if isinstance(x, (int, float)) and not isinstance(x, bool):
        return numpy.array([x], dtype=_float if isinstance(x, float) else None)
    return _floating(numpy.asarray(x))


def asdouble(x):
    """float64 view of ``x`` that keeps the shape of scalars (0-d)."""
    return numpy.asarray(x).astype(numpy.float64, copy=False)


def zeros(shape, dtype=None):
    return numpy.zeros(shape, dtype=dtype or _float)


def ones(shape, dtype=None):
    return numpy.ones(shape, dtype=dtype or _float)


def full(shape, fill_value, dtype=None):
    return numpy.full(shape, fill_value, dtype=dtype or _float)


def eye(n, dtype=None):
    return numpy.eye(n, dtype=dtype or _float)


def to_scalar(x):
    return numpy.asarray(x).item()


def inftobigf(a, bigf=fmax / 1000.0):
    """Replace infinities by a large finite value (kernels at h = inf)."""
    return where(numpy.isinf(a), bigf, a)


# ---------------------------------------------------------------------------
# distances and linear algebra
# ---------------------------------------------------------------------------
def scaled_distance(loginvrho, x, y):
    """Euclidean distances between rows of ``x`` and ``y`` scaled by 1/rho."""
    invrho = exp(loginvrho)
    return cdist(invrho * x, invrho * y)


def scaled_distance_elementwise(loginvrho, x, y: Optional[ArrayLike]):
    """Scaled distances between matching rows; zero when ``y`` is ``x``."""
    if y is None or y is x:
        return zeros((x.shape[0],))
    return sqrt(sum((exp(loginvrho) * (x - y)) ** 2, axis=1))


def cholesky_solve(A, b):
    """Solve ``A x = b`` for symmetric positive definite ``A``.

    Returns ``(x, L)`` with ``L`` the lower Cholesky factor. Raises
    ``LinAlgError`` when ``A`` is not numerically positive definite.
    """
    L = cholesky(A)
    x = solve_triangular(L.T, solve_triangular(L, b, lower=True), lower=False)
    return x, L


# ---------------------------------------------------------------------------
# random numbers
# ---------------------------------------------------------------------------
_rng = numpy.random.default_rng(_config.seed)


def set_seed(seed: int) -> None:
    """Reseed the global generator."""
    global _rng
    _config.seed = seed
    _rng = numpy.random.default_rng(seed)


def get_rng() -> numpy.random.Generator:
    return _rng


class multivariate_normal:
    """Gaussian log-density with a scalar or a matrix covariance."""

    @staticmethod
    def logpdf(x, mean=0.0, cov=1.0):
        cov = numpy.asarray(cov)
        if cov.size == 1:
            return _scipy_norm.logpdf(x, mean, numpy.sqrt(cov.item()))
        if cov.ndim != 2 or cov.shape[0] != cov.shape[1]:
            raise ValueError("cov must be a scalar or a square matrix")
        d = cov.shape[0]
        x = numpy.asarray(x)
        if x.shape[-1] != d:
            raise ValueError(f"x has last dimension {x.shape[-1]}, expected {d}")
        m = numpy.broadcast_to(numpy.asarray(mean, dtype=numpy.float64), (d,))
        return _scipy_mvn.logpdf(x, mean=m, cov=cov, allow_singular=True)
