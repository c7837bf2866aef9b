import unittest
import numpy as np
import matplotlib

matplotlib.use("Agg")

from gpwarp.core import ErrorBar
from gpwarp.misc import plotutils


class TestPlots(unittest.TestCase):
    def test_error_bars(self):
        bars = [ErrorBar(np.array([x]), x - 1.0, x, x + 2.0) for x in (0.3, 0.1, 0.2)]
        fig = plotutils.plot_error_bars(bars, xi=[0.1], zi=[0.5])
        self.assertEqual(len(fig.ax.lines), 2)
        fig.close()

    def test_energy_landscape(self):
        one = [(float(v) ** 2, {"a": float(v)}) for v in range(3)] + [(np.inf, {"a": 9.0})]
        fig = plotutils.plot_energy_landscape(one)
        self.assertEqual(len(fig.ax.lines[0].get_xdata()), 3)
        fig.close()
        two = [(1.0, {"a": 0.0, "b": 1.0}), (2.0, {"a": 1.0, "b": 0.0})]
        plotutils.plot_energy_landscape(two).close()
        three = [(1.0, {"a": 0.0, "b": 1.0, "c": 2.0})]
        plotutils.plot_energy_landscape(three).close()

    def test_chain(self):
        fig = plotutils.plot_chain([{"a": 0.0, "b": 1.0}, {"a": 0.5, "b": 0.7}])
        self.assertEqual(len(fig.axes), 2)
        fig.close()
        plotutils.plot_chain([0.0, 0.1, -0.2]).close()


if __name__ == "__main__":
    unittest.main()
