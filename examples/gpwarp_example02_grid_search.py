'''Grid and prior-guided hyperparameter search on a warped GP

The energy landscape of a Box-Cox warped GP is computed first on a
Cartesian grid anchored at an initial configuration, then on draws from
Gaussian priors. GridSearch applies the minimum to the model.

----
Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
----
'''
import numpy as np
import gpwarp as gw
import gpwarp.num as gnp


def generate_data(n=12, seed=1):
    rng = np.random.default_rng(seed)
    xi = np.sort(rng.uniform(0.0, 1.0, n)).reshape(-1, 1)
    zi = (1.0 + 0.5 * np.sin(6.0 * xi.ravel()) + 0.05 * rng.standard_normal(n)) ** 2
    return xi, zi


def main(show=False):
    gnp.set_seed(1)
    xi, zi = generate_data()

    covariance = gw.kernel.make_matern_covariance(p=1, noise=True)
    h = gw.kernel.matern_initial_hyperparameters(xi, np.sqrt(zi))
    model = gw.Model(None, covariance, (xi, zi), h, meantype="zero")
    warped = gw.warp(model, gw.warping.box_cox_map(0.5))

    initial = {"log_sigma2": h["log_sigma2"] + 0.6, "loginvrho_0": h["loginvrho_0"] + 0.6}
    optimizer = gw.GridSearch(warped).set_grid_size(4).set_step_size(0.3)

    landscape = optimizer.compute_landscape(initial)
    print("Grid landscape: {} points".format(len(landscape)))

    prior = {
        "log_sigma2": gw.kernel.gaussian_prior(h["log_sigma2"], 1.0),
        "loginvrho_0": gw.kernel.gaussian_prior(h["loginvrho_0"], 1.0),
    }
    sampled = optimizer.set_prior(prior).set_num_samples(15).compute_landscape(initial)
    print("Prior landscape: {} points".format(len(sampled)))

    system, best = optimizer.optimize(initial)
    print("Best configuration:")
    print(gw.optim.GlobalOptimizer.pretty_print(best))
    assert system.hyperparameters["log_sigma2"] == best["log_sigma2"]

    if show:
        from gpwarp.misc import plotutils

        plotutils.plot_energy_landscape(landscape).show()
    return landscape, best


if __name__ == "__main__":
    main(show=True)
