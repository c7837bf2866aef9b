import unittest
from examples import (
    gpwarp_example01_warped_regression,
    gpwarp_example02_grid_search,
    gpwarp_example03_metropolis_search,
)


class TestExamples(unittest.TestCase):
    def test_01(self):
        gpwarp_example01_warped_regression.main()

    def test_02(self):
        landscape, best = gpwarp_example02_grid_search.main()
        self.assertEqual(len(landscape), 4**2)
        self.assertEqual(sorted(best), ["log_sigma2", "loginvrho_0"])

    def test_03(self):
        samples, best = gpwarp_example03_metropolis_search.main()
        self.assertEqual(len(samples), 2000)


if __name__ == "__main__":
    unittest.main()
