# gpwarp/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian Process kernels and hyperparameter priors.

Modules
-------
matern
    Matérn family of kernels with half-integer regularity and an
    optional white-noise term.
priors
    Scalar priors (sample / logpdf) for prior-guided hyperparameter
    search.

Public API
-----------
- Matérn kernels:
    maternp_kernel, maternp_covariance, make_matern_covariance,
    matern_hyperparameter_names, matern_initial_hyperparameters
- Priors:
    ScalarPrior, gaussian_prior, lognormal_prior, uniform_prior,
    gamma_prior, prior_energy
"""

from .matern import (
    maternp_kernel,
    maternp_covariance,
    make_matern_covariance,
    matern_hyperparameter_names,
    matern_initial_hyperparameters,
)
from .priors import (
    ScalarPrior,
    gaussian_prior,
    lognormal_prior,
    uniform_prior,
    gamma_prior,
    prior_energy,
)

__all__ = [
    # Kernels
    "maternp_kernel",
    "maternp_covariance",
    "make_matern_covariance",
    "matern_hyperparameter_names",
    "matern_initial_hyperparameters",
    # Priors
    "ScalarPrior",
    "gaussian_prior",
    "lognormal_prior",
    "uniform_prior",
    "gamma_prior",
    "prior_energy",
]
