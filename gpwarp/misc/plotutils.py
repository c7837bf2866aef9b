# gpwarp/misc/plotutils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import sys
import numpy as np
import matplotlib.pyplot as plt
from matplotlib import interactive


class Figure:
    """Figures manager class.

    Wraps a matplotlib figure with ``nrows * ncols`` subplots; ``ax`` is
    the current subplot.
    """

    def __init__(self, nrows=1, ncols=1, isinteractive=True, boxoff=True, **kargs):
        # interpreter mode: sys.ps1 only exists in an interactive session
        self.interpreter = False
        try:
            if sys.ps1:
                self.interpreter = True
        except AttributeError:
            self.interpreter = bool(sys.flags.interactive)

        if isinteractive and self.interpreter:
            interactive(True)

        self.boxoff = boxoff
        self.fig = plt.figure(**kargs)

        self.nrows = nrows
        self.ncols = ncols
        self.axes = [
            self.fig.add_subplot(nrows, ncols, i + 1) for i in range(nrows * ncols)
        ]
        self.ax = self.axes[0]
        if self.boxoff:
            self.set_boxoff()

    def set_boxoff(self):
        self.ax.spines["right"].set_visible(False)
        self.ax.spines["top"].set_visible(False)
        self.ax.tick_params(direction="in")

    def subplot(self, i):
        self.ax = self.axes[i - 1]
        if self.boxoff:
            self.set_boxoff()

    def show(self, grid=None, legend=None):
        if grid:
            self.grid()
        if legend:
            self.legend()
        plt.show()

    def close(self):
        plt.close(self.fig)

    def plot(self, x, z, *args, **kargs):
        self.ax.plot(x, z, *args, **kargs)

    def plotdata(self, x, z, label="data"):
        self.ax.plot(x, z, "rs", markerfacecolor="none", markersize=6, label=label)

    def xylabels(self, sx="", sy=""):
        self.ax.set_xlabel(sx)
        self.ax.set_ylabel(sy)

    def title(self, s):
        self.ax.set_title(s)

    def legend(self, **kwargs):
        self.ax.legend(**kwargs)

    def grid(self, visible=True, which="major", linestyle=(0, (1, 5)), linewidth=0.5, **kwargs):
        self.ax.grid(visible, which, linestyle=linestyle, linewidth=linewidth, **kwargs)


def plot_error_bars(errorbars, xi=None, zi=None, fig=None, label="prediction"):
    """Plot ``ErrorBar`` records of a one-dimensional process.

    The band between ``lower`` and ``upper`` is filled; for a warped
    process it is not symmetric around ``mean``.
    """
    fig = Figure() if fig is None else fig
    x = np.array([float(np.ravel(b.x)[0]) for b in errorbars])
    order = np.argsort(x)
    x = x[order]
    lower = np.array([b.lower for b in errorbars])[order]
    mean = np.array([b.mean for b in errorbars])[order]
    upper = np.array([b.upper for b in errorbars])[order]

    fig.ax.fill(
        np.hstack((x, x[::-1])),
        np.hstack((upper, lower[::-1])),
        color="#D8D8D8",
        alpha=0.8,
        linewidth=0.5,
        label="error bars",
    )
    fig.ax.plot(x, mean, "#F2404C", linewidth=2.0, label=label)
    if xi is not None and zi is not None:
        fig.plotdata(np.ravel(xi), np.ravel(zi))
    fig.xylabels("x", "z")
    return fig


def plot_energy_landscape(landscape, keys=None, fig=None):
    """Plot net energies of a landscape.

    With one key, energy against the hyperparameter value; with two,
    a scatter colored by energy; otherwise energy against exploration
    index. Infinite energies are not drawn.
    """
    fig = Figure() if fig is None else fig
    if not landscape:
        return fig
    keys = list(landscape[0][1]) if keys is None else list(keys)
    energy = np.array([e for e, _ in landscape], dtype=float)
    finite = np.isfinite(energy)

    if len(keys) == 1:
        v = np.array([c[keys[0]] for _, c in landscape])
        fig.ax.plot(v[finite], energy[finite], "ko")
        fig.xylabels(keys[0], "energy")
    elif len(keys) == 2:
        v0 = np.array([c[keys[0]] for _, c in landscape])
        v1 = np.array([c[keys[1]] for _, c in landscape])
        sc = fig.ax.scatter(v0[finite], v1[finite], c=energy[finite], cmap="viridis")
        fig.fig.colorbar(sc, ax=fig.ax, label="energy")
        fig.xylabels(keys[0], keys[1])
    else:
        idx = np.arange(len(landscape))
        fig.ax.plot(idx[finite], energy[finite], "k.-")
        fig.xylabels("configuration", "energy")
    fig.title("Energy landscape")
    return fig


def plot_chain(samples, keys=None):
    """Trace plots of MCMC samples (floats, arrays or configuration dicts)."""
    if samples and isinstance(samples[0], dict):
        keys = list(samples[0]) if keys is None else list(keys)
        values = np.array([[s[k] for k in keys] for s in samples], dtype=float)
    else:
        values = np.array(samples, dtype=float).reshape(len(samples), -1)
        keys = [f"x{j}" for j in range(values.shape[1])] if keys is None else keys
    dim = values.shape[1] if values.size else 1
    fig = Figure(dim, 1)
    for j in range(dim):
        fig.subplot(j + 1)
        if values.size:
            fig.ax.plot(values[:, j], linewidth=0.8)
        fig.ax.set_ylabel(keys[j])
    fig.ax.set_xlabel("sample")
    return fig
