'''Random-walk Metropolis-Hastings

First a one-dimensional chain on a standard normal target, then a
Metropolis search over the hyperparameters of a sinh-arcsinh warped GP,
started at the minimum of a small grid.

----
Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
----
'''
import numpy as np
from scipy import stats
import gpwarp as gw
import gpwarp.num as gnp
from gpwarp.mcmc import GeneralMetropolisHastings


def main(show=False):
    gnp.set_seed(3)

    ## -- a chain on N(0, 1)
    chain = GeneralMetropolisHastings(
        lambda x: -0.5 * x**2,
        stats.norm(scale=1.0),
        init=3.0,
        burn_in=200,
        drop_count=1,
    )
    samples = chain.sample(2000)
    print(
        "mean = {:.3f}, std = {:.3f}, acceptance rate = {:.2f}".format(
            np.mean(samples), np.std(samples), chain.acceptance_rate
        )
    )

    ## -- Metropolis search on a warped GP
    rng = np.random.default_rng(3)
    xi = np.linspace(0.0, 1.0, 10).reshape(-1, 1)
    zi = np.sin(4.0 * xi.ravel()) + 0.3 * rng.standard_t(3, 10)

    covariance = gw.kernel.make_matern_covariance(p=2, noise=True)
    h = gw.kernel.matern_initial_hyperparameters(xi, zi)
    model = gw.Model(None, covariance, (xi, zi), h, meantype="zero")
    warped = gw.warp(model, gw.warping.sinh_arcsinh_map(0.0, 1.2))

    initial = {"log_sigma2": h["log_sigma2"] + 0.3, "log_noise": h["log_noise"] + 0.3}
    search = gw.MetropolisSearch(
        warped, burn_in=20, drop_count=0, n_steps=50, proposal_scale=0.2
    ).set_grid_size(2)
    system, best = search.optimize(initial)
    print("Best configuration:")
    print(gw.optim.GlobalOptimizer.pretty_print(best))

    if show:
        from gpwarp.misc import plotutils

        plotutils.plot_chain(samples[:500]).show()
    return samples, best


if __name__ == "__main__":
    main(show=True)
