# gpwarp/kernel/priors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Scalar priors on hyperparameters.

A prior is anything with ``sample()`` returning a float and
``logpdf(value)`` returning a float. Priors that also have
``rvs(random_state=rng)``, like frozen ``scipy.stats`` distributions, are
sampled with the generator of the search. :class:`ScalarPrior` adapts a
frozen distribution to both forms.

Functions
---------
gaussian_prior(loc, scale)
    Normal prior, e.g. on ``log(sigma^2)``.
lognormal_prior(mu, sigma)
    Log-normal prior on a positive hyperparameter.
uniform_prior(low, high)
    Uniform prior on ``[low, high]``.
gamma_prior(shape, rate)
    Gamma prior on a positive hyperparameter.
prior_energy(prior, configuration)
    ``-sum_k log p_k(configuration[k])`` over the keys covered by the prior.
"""

from scipy import stats

import gpwarp.num as gnp


class ScalarPrior:
    """Prior backed by a frozen ``scipy.stats`` distribution.

    Parameters
    ----------
    dist : scipy.stats frozen distribution
    name : str, optional
    """

    def __init__(self, dist, name=None):
        self.dist = dist
        self.name = name or dist.dist.name

    def __repr__(self):
        args = ", ".join(f"{a:g}" for a in self.dist.args)
        kwds = ", ".join(f"{k}={v:g}" for k, v in self.dist.kwds.items())
        return f"ScalarPrior({self.name}({', '.join(s for s in (args, kwds) if s)}))"

    def sample(self, rng=None):
        rng = gnp.get_rng() if rng is None else rng
        return float(self.dist.rvs(random_state=rng))

    def rvs(self, random_state=None):
        return self.sample(random_state)

    def logpdf(self, value):
        return float(self.dist.logpdf(value))


def gaussian_prior(loc=0.0, scale=1.0):
    if not scale > 0.0:
        raise ValueError(f"scale must be positive, got {scale}")
    return ScalarPrior(stats.norm(loc=loc, scale=scale), name="gaussian")


def lognormal_prior(mu=0.0, sigma=1.0):
    if not sigma > 0.0:
        raise ValueError(f"sigma must be positive, got {sigma}")
    return ScalarPrior(stats.lognorm(s=sigma, scale=gnp.exp(mu)), name="lognormal")


def uniform_prior(low=0.0, high=1.0):
    if not high > low:
        raise ValueError(f"Need low < high, got [{low}, {high}]")
    return ScalarPrior(stats.uniform(loc=low, scale=high - low), name="uniform")


def gamma_prior(shape=1.0, rate=1.0):
    if not (shape > 0.0 and rate > 0.0):
        raise ValueError("shape and rate must be positive")
    return ScalarPrior(stats.gamma(a=shape, scale=1.0 / rate), name="gamma")


def prior_energy(prior, configuration):
    """Negative log prior density of ``configuration``.

    Keys of ``configuration`` that ``prior`` does not cover contribute
    nothing.
    """
    return -sum(
        prior[k].logpdf(v) for k, v in configuration.items() if k in prior
    )
