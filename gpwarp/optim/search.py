# gpwarp/optim/search.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Concrete global optimizers.

GridSearch
    Minimum of the energy landscape.
MetropolisSearch
    Random-walk Metropolis-Hastings over configurations, started at the
    landscape minimum.

Both raise :class:`gpwarp.errors.SearchFailedError` when every point of
the landscape has a non-finite net energy.
"""
import math

import gpwarp.num as gnp
from gpwarp.config import get_logger
from gpwarp.errors import GPWarpError, SearchFailedError
from gpwarp.mcmc.groups import ConfigurationGroup
from gpwarp.mcmc.mh import GeneralMetropolisHastings
from gpwarp.kernel.priors import prior_energy
from .global_optimizer import GlobalOptimizer

_logger = get_logger()


def landscape_minimum(landscape):
    """``(net_energy, configuration)`` with the smallest energy; first wins ties."""
    if not landscape:
        raise ValueError("Empty energy landscape")
    return min(landscape, key=lambda point: point[0])


def _finite_minimum(landscape):
    energy, best = landscape_minimum(landscape)
    if not math.isfinite(energy):
        raise SearchFailedError(
            f"None of the {len(landscape)} evaluated configurations has a finite "
            f"net energy (best: {energy})",
            landscape,
        )
    return energy, best


class GridSearch(GlobalOptimizer):
    """Pick the configuration with the lowest net energy in the landscape."""

    def optimize(self, initial_config, options=None):
        landscape = self.compute_landscape(initial_config, options)
        energy, best = _finite_minimum(landscape)
        _logger.info(
            "Optimum value of energy is: %s\nConfiguration:\n%s",
            energy,
            self.pretty_print(best),
        )
        self.system.energy(best, options)
        return self.system, best


class MetropolisSearch(GlobalOptimizer):
    """Metropolis-Hastings random walk from the landscape minimum.

    The chain targets ``exp(-(energy + prior energy))`` over the
    configuration vector, with Gaussian steps of standard deviation
    ``proposal_scale`` on every hyperparameter. The lowest-energy
    configuration evaluated during the walk is applied to the system.

    Parameters
    ----------
    system : GloballyOptimizable
    settings : SearchSettings, optional
    burn_in : int
    drop_count : int
    n_steps : int
        Number of samples drawn from the chain.
    proposal_scale : float
    """

    def __init__(
        self,
        system,
        settings=None,
        burn_in=0,
        drop_count=0,
        n_steps=100,
        proposal_scale=0.1,
    ):
        super().__init__(system, settings)
        if not proposal_scale > 0.0:
            raise ValueError(f"proposal_scale must be positive, got {proposal_scale}")
        self.burn_in = int(burn_in)
        self.drop_count = int(drop_count)
        self.n_steps = int(n_steps)
        self.proposal_scale = float(proposal_scale)

    def optimize(self, initial_config, options=None):
        landscape = self.compute_landscape(initial_config, options)
        best_energy, start = _finite_minimum(landscape)
        keys = list(initial_config)
        if not keys or self.n_steps <= 0:
            self.system.energy(start, options)
            return self.system, start

        prior = self.settings.prior if self.uses_prior(initial_config) else None
        group = ConfigurationGroup(keys)
        best = {"energy": best_energy, "config": dict(start)}

        def log_likelihood(config):
            try:
                energy = float(self.system.energy(config, options))
            except (GPWarpError, gnp.LinAlgError):
                if self.settings.on_failure == "raise":
                    raise
                return -math.inf
            if prior is not None:
                energy += prior_energy(prior, config)
            if energy < best["energy"]:
                best["energy"] = energy
                best["config"] = dict(config)
            return -energy

        scale = self.proposal_scale

        def proposal(rng):
            return group.from_vector(rng.normal(0.0, scale, size=len(keys)))

        chain = GeneralMetropolisHastings(
            log_likelihood,
            proposal,
            dict(start),
            burn_in=self.burn_in,
            drop_count=self.drop_count,
            group=group,
        )
        chain.sample(self.n_steps)
        _logger.info(
            "Metropolis search: %d steps, acceptance rate %.3f, best energy %s\n"
            "Configuration:\n%s",
            chain.n_steps,
            chain.acceptance_rate,
            best["energy"],
            self.pretty_print(best["config"]),
        )
        self.system.energy(best["config"], options)
        return self.system, best["config"]
