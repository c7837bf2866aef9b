'''Warped GP regression in 1D on positive observations

A Matérn GP is fitted to log-observations through an exponential
pushforward map. Predictions and error bars are made in latent space
and mapped back, so the error bars are asymmetric and stay positive.

----
Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
----
'''
import numpy as np
import gpwarp as gw
import gpwarp.num as gnp

## -- dataset


def twobumps(x):
    x = np.asarray(x).reshape(-1)
    return -(0.7 * x + np.sin(5 * x + 1) + 0.1 * np.sin(10 * x))


def generate_data(noise_std=0.05, seed=0):
    '''
    Data generation
    (xt, zt): target, positive
    (xi, zi): noisy positive observations
    '''
    rng = np.random.default_rng(seed)
    xt = np.linspace(-1.0, 1.0, 200).reshape(-1, 1)
    zt = np.exp(twobumps(xt))
    ind = [10, 30, 45, 70, 100, 130, 150, 160, 185]
    xi = xt[ind]
    zi = np.exp(twobumps(xi) + noise_std * rng.standard_normal(len(ind)))
    return xt, zt, xi, zi


def build_model(xi, zi):
    covariance = gw.kernel.make_matern_covariance(p=2, noise=True)
    h = gw.kernel.matern_initial_hyperparameters(xi, np.log(zi), noise=True)
    model = gw.Model(None, covariance, (xi, zi), h, meantype="zero")
    return gw.warp(model, gw.warping.exp_map())


def main(show=False):
    gnp.set_seed(0)
    xt, zt, xi, zi = generate_data()
    warped = build_model(xi, zi)

    initial = warped.hyperparameters.as_dict()
    print("Initial hyperparameters:")
    print(gw.optim.GlobalOptimizer.pretty_print(initial))
    print("Energy: {:.4f}".format(warped.energy(initial)))

    bars = warped.prediction_with_error_bars(xt, 2)
    lower = np.array([b.lower for b in bars])
    upper = np.array([b.upper for b in bars])
    assert np.all(lower > 0.0)
    coverage = np.mean((zt >= lower) & (zt <= upper))
    print("Fraction of the target inside the error bars: {:.2f}".format(coverage))

    # latent predictive distribution, mapped only when needed
    dist = warped.predictive_distribution(xt[::20])
    print("Median at the first test points:", dist.median().to_array()[:3])

    if show:
        from gpwarp.misc import plotutils

        fig = plotutils.plot_error_bars(bars, xi, zi)
        fig.plot(xt, zt, "C0", linewidth=1, label="truth")
        fig.show(grid=True, legend=True)
    return warped


if __name__ == "__main__":
    main(show=True)
