# gpwarp/kernel/matern.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Matérn covariance functions with half-integer regularity and an
optional white-noise term, parameterized by a flat vector

    covparam = [log(sigma2), log(1/rho_1), ..., log(1/rho_d), (log(noise))]

whose entries are named by :func:`matern_hyperparameter_names`.
"""
from math import sqrt
import gpwarp.num as gnp


def maternp_kernel(p: int, h):
    """Matérn correlation with half-integer regularity :math:`\\nu = p + 1/2`.

    .. math::
        K(h) = e^{-c h}\\,\\frac{p!}{(2p)!}
               \\sum_{i=0}^{p} \\frac{(p+i)!}{i!\\,(p-i)!}\\,(2 c h)^{p-i},
        \\qquad c = 2\\sqrt{\\nu}

    Parameters
    ----------
    p : int
        Nonnegative integer.
    h : gnp.array
        Scaled distances; infinite distances give 0.
    """
    gln = gnp.compute_gammaln(p)
    h = gnp.inftobigf(h)
    c = 2.0 * sqrt(p + 0.5)
    u = 2.0 * c * h
    # log of the factorial ratio; gln[k] = log((k - 1)!)
    log_front = gln[p + 1] - gln[2 * p + 1]
    total = gnp.zeros(h.shape)
    for i in range(p + 1):
        log_coef = log_front + gln[p + i + 1] - gln[i + 1] - gln[p - i + 1]
        total = total + gnp.exp(log_coef) * u ** (p - i)
    return gnp.exp(-c * h) * total


def maternp_covariance(x, y, p, param, pairwise=False, noise=False):
    """Matérn covariance (:math:`\\nu = p+1/2`), optionally with white noise.

    Parameters
    ----------
    x : gnp.array, shape (nx, d)
    y : gnp.array, shape (ny, d), or None
        ``None`` (or ``y is x``) selects the covariance of ``x`` with
        itself, the only case where the noise term is added.
    p : int
    param : gnp.array, shape (1 + d,) or (2 + d,) when ``noise``
    pairwise : bool
        If True, return the vector ``k(x_i, y_i)``; else the (nx, ny) matrix.
    noise : bool
        Whether the last entry of ``param`` is ``log(noise variance)``.

    Returns
    -------
    gnp.array
    """
    param = gnp.asarray(param).reshape(-1)
    sigma2 = gnp.exp(param[0])
    loginvrho = param[1:-1] if noise else param[1:]
    noise_var = gnp.exp(param[-1]) if noise else 0.0
    if y is x or y is None:
        if pairwise:
            return (sigma2 + noise_var) * gnp.ones((x.shape[0],))
        nugget = 10.0 * sigma2 * gnp.eps
        K = sigma2 * maternp_kernel(p, gnp.scaled_distance(loginvrho, x, x))
        return K + (nugget + noise_var) * gnp.eye(x.shape[0])
    if pairwise:
        D = gnp.scaled_distance_elementwise(loginvrho, x, y)
    else:
        D = gnp.scaled_distance(loginvrho, x, y)
    return sigma2 * maternp_kernel(p, D)


def make_matern_covariance(p: int = 2, noise: bool = True):
    """Return ``covariance(x, y, covparam, pairwise=False)`` for a fixed ``p``."""

    def covariance(x, y, covparam, pairwise=False):
        return maternp_covariance(x, y, p, covparam, pairwise=pairwise, noise=noise)

    covariance.__name__ = f"matern{2 * p + 1}_2{'_noisy' if noise else ''}"
    return covariance


def matern_hyperparameter_names(dim: int, noise: bool = True):
    """Names of the entries of ``covparam``, in order."""
    names = ["log_sigma2"] + [f"loginvrho_{j}" for j in range(dim)]
    if noise:
        names.append("log_noise")
    return names


def matern_initial_hyperparameters(xi, zi, noise: bool = True, noise_fraction=1e-2):
    """Crude initial guess: empirical variance and inverse ranges of the data.

    Returns a dict name -> value matching :func:`matern_hyperparameter_names`.
    """
    xi = gnp.asarray(xi)
    zi = gnp.asarray(zi).reshape(-1)
    dim = xi.shape[1]
    variance = float(gnp.var(zi)) if zi.shape[0] > 1 else 1.0
    variance = variance if variance > 0.0 else 1.0
    ranges = gnp.max(xi, axis=0) - gnp.min(xi, axis=0)
    ranges = gnp.where(ranges > 0.0, ranges, 1.0)
    values = [gnp.log(variance)] + [-gnp.log(r / 2.0) for r in ranges]
    if noise:
        values.append(gnp.log(noise_fraction * variance))
    names = matern_hyperparameter_names(dim, noise)
    return {n: float(v) for n, v in zip(names, values)}
