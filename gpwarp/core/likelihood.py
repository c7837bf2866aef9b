# gpwarp/core/likelihood.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Negative log-likelihoods, the energies of :class:`gpwarp.core.Model`.
"""
import gpwarp.num as gnp
from . import utils


def negative_log_likelihood_zero_mean(model, covparam, xi, zi, jitter=0.0):
    """Negative log-likelihood of a zero-mean GP.

    .. math::
        \\frac{1}{2}\\left(n \\log 2\\pi + \\log\\det K + z^T K^{-1} z\\right)

    Parameters
    ----------
    model : gpwarp.core.Model
        Provides ``covariance``.
    covparam : gnp.array
    xi : ndarray(n, d)
    zi : ndarray(n, )
    jitter : float, optional
        Added to the diagonal of ``K``.

    Returns
    -------
    nll : 0-d array
        ``+inf`` when ``K`` is not numerically positive definite.
    """
    K = model.covariance(xi, None, covparam)
    n = K.shape[0]
    if jitter:
        K = K + jitter * gnp.eye(n)
    try:
        Kinv_zi, C = gnp.cholesky_solve(K, zi)
    except gnp.LinAlgError:
        return utils.return_inf()
    log_det = 2.0 * gnp.sum(gnp.log(gnp.diag(C)))
    quad = gnp.einsum("i..., i...", zi, Kinv_zi)
    return (0.5 * (n * gnp.log(2.0 * gnp.pi) + log_det + quad)).reshape(())


def negative_log_likelihood(model, meanparam, covparam, xi, zi, jitter=0.0):
    """Same criterion after subtracting ``model.mean_function(xi, meanparam)``."""
    centered = zi - gnp.asarray(model.mean_function(xi, meanparam)).reshape(-1)
    return negative_log_likelihood_zero_mean(model, covparam, xi, centered, jitter=jitter)
