# gpwarp/core/kriging.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kriging (GP posterior) computations for :class:`gpwarp.core.Model`.

The model supplies ``covariance(x, y, covparam, pairwise)``, its
``covparam`` vector and, for a parameterized mean, ``mean(x)``.

``return_type`` selects the second moment everywhere in this module:
-1 for none, 0 for marginal variances, 1 for the full covariance.
"""
import warnings
import gpwarp.num as gnp


def kriging_predictor_with_zero_mean(model, xi, xt, return_type=0):
    """Kriging weights of a zero-mean GP and the posterior second moment.

    Parameters
    ----------
    model : gpwarp.core.Model
    xi : array_like, shape (n, d)
        Training points.
    xt : array_like, shape (m, d)
        Prediction points.
    return_type : int, optional

    Returns
    -------
    lambda_t : array_like, shape (n, m)
        Weights, solution of ``K(xi, xi) lambda_t = K(xi, xt)``.
    zt_posterior_variance : array_like or None
    """
    covparam = model.covparam
    Kit = model.covariance(xi, xt, covparam)
    lambda_t, _ = gnp.cholesky_solve(model.covariance(xi, None, covparam), Kit)
    return lambda_t, _posterior_second_moment(model, xt, lambda_t, Kit, return_type)


def select_predictor(model, xi, zi, xt, return_type=0):
    """Prior-mean correction and kriging weights for ``model.meantype``.

    Returns
    -------
    zi_centered : array_like, shape (n,)
        Labels minus the prior mean at ``xi``.
    zt_prior_mean : array_like or float
        Prior mean at ``xt`` (0.0 for a zero-mean model).
    lambda_t : array_like, shape (n, m)
    zt_posterior_variance : array_like or None
    """
    if model.meantype == "zero":
        zi_centered, zt_prior_mean = zi, 0.0
    elif model.meantype == "parameterized":
        if model.meanparam is None:
            raise ValueError("A parameterized mean needs meanparam.")
        zi_centered = zi - model.mean(xi)
        zt_prior_mean = model.mean(xt)
    else:
        raise ValueError(f"Unknown meantype {model.meantype!r}")

    lambda_t, zt_posterior_variance = kriging_predictor_with_zero_mean(
        model, xi, xt, return_type=return_type
    )
    return zi_centered, zt_prior_mean, lambda_t, zt_posterior_variance


def posterior_moments(model, xi, zi, xt, return_type=0, zero_neg_variances=True):
    """Posterior mean and second moment at ``xt`` given ``(xi, zi)``.

    Negative marginal variances (round-off) trigger a RuntimeWarning and
    are set to zero unless ``zero_neg_variances`` is False.
    """
    zi_centered, zt_prior_mean, lambda_t, zt_var = select_predictor(
        model, xi, zi, xt, return_type=return_type
    )
    zt_mean = gnp.einsum("i..., i...", lambda_t, zi_centered) + zt_prior_mean

    if return_type == 0:
        if gnp.any(zt_var < 0.0):
            warnings.warn(
                "Negative posterior variances; consider a jitter option.",
                RuntimeWarning,
            )
        if zero_neg_variances:
            zt_var = gnp.maximum(zt_var, 0.0)
    return zt_mean, zt_var


def _posterior_second_moment(model, xt, lambda_t, Kit, return_type):
    if return_type == -1:
        return None
    if return_type == 0:
        prior_var = model.covariance(xt, None, model.covparam, pairwise=True)
        return prior_var - gnp.einsum("i..., i...", lambda_t, Kit)
    if return_type == 1:
        prior_cov = model.covariance(xt, None, model.covparam, pairwise=False)
        return prior_cov - gnp.matmul(lambda_t.T, Kit)
    raise ValueError("return_type must be in {-1, 0, 1}")
