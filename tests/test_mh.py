import math
import unittest
import numpy as np
from scipy import stats

from gpwarp.core import PartitionedVector
from gpwarp.mcmc import GeneralMetropolisHastings, ConfigurationGroup, RealGroup


def gaussian_chain(**kwargs):
    return GeneralMetropolisHastings(
        lambda x: -0.5 * x**2,
        stats.norm(scale=1.0),
        init=kwargs.pop("init", 0.0),
        rng=np.random.default_rng(kwargs.pop("seed", 0)),
        **kwargs
    )


class TestChainSchedule(unittest.TestCase):
    def test_no_work_before_first_pull(self):
        chain = gaussian_chain(burn_in=100)
        self.assertEqual(chain.n_steps, 0)

    def test_burn_in_and_thinning(self):
        chain = gaussian_chain(burn_in=100, drop_count=2)
        next(chain)
        self.assertEqual(chain.n_steps, 103)
        self.assertGreaterEqual(chain.n_steps, 100)
        next(chain)
        self.assertEqual(chain.n_steps, 106)
        chain.sample(4)
        self.assertEqual(chain.n_steps, 118)

    def test_without_burn_in(self):
        chain = gaussian_chain()
        self.assertEqual(len(chain.sample(5)), 5)
        self.assertEqual(chain.n_steps, 5)

    def test_observe_restarts_without_burn_in(self):
        chain = gaussian_chain(burn_in=50, drop_count=1)
        chain.sample(2)
        restarted = chain.observe(5.0)
        self.assertIsNot(restarted, chain)
        self.assertEqual(restarted.current, 5.0)
        self.assertEqual(restarted.burn_in, 0)
        self.assertEqual(restarted.drop_count, 1)
        restarted.draw()
        self.assertEqual(restarted.n_steps, 2)

    def test_invalid_counts(self):
        with self.assertRaises(ValueError):
            gaussian_chain(burn_in=-1)


class TestAcceptance(unittest.TestCase):
    def test_gaussian_target_moments(self):
        chain = gaussian_chain(init=3.0, burn_in=500, drop_count=1, seed=1)
        samples = np.array(chain.sample(5000))
        self.assertLess(abs(np.mean(samples)), 0.15)
        self.assertLess(abs(np.std(samples) - 1.0), 0.15)
        self.assertTrue(0.2 < chain.acceptance_rate < 0.9)

    def test_improving_moves_always_accepted(self):
        chain = GeneralMetropolisHastings(
            lambda x: x, lambda rng: 1.0, init=0.0, rng=np.random.default_rng(0)
        )
        self.assertEqual(chain.sample(5), [1.0, 2.0, 3.0, 4.0, 5.0])
        self.assertEqual(chain.acceptance_rate, 1.0)

    def test_zero_density_rejected(self):
        def log_uniform(x):
            return 0.0 if 0.0 <= x <= 1.0 else -math.inf

        chain = GeneralMetropolisHastings(
            log_uniform,
            stats.norm(scale=0.5),
            init=0.5,
            rng=np.random.default_rng(4),
        )
        samples = np.array(chain.sample(500))
        self.assertTrue(np.all((samples >= 0.0) & (samples <= 1.0)))
        self.assertLess(chain.n_accepted, chain.n_steps)


class TestGroups(unittest.TestCase):
    def test_configuration_group(self):
        g = ConfigurationGroup(["a", "b"])
        x = {"a": 1.0, "b": 2.0}
        self.assertEqual(g.plus(x, {"a": 0.5, "b": -1.0}), {"a": 1.5, "b": 1.0})
        self.assertEqual(g.minus(x, x), g.zero())
        self.assertEqual(g.from_vector(g.to_vector(x)), x)

    def test_chain_over_configurations(self):
        g = ConfigurationGroup(["a", "b"])
        chain = GeneralMetropolisHastings(
            lambda c: -(c["a"] ** 2 + c["b"] ** 2),
            lambda rng: g.from_vector(rng.normal(0.0, 0.3, size=2)),
            init={"a": 1.0, "b": -1.0},
            group=g,
            rng=np.random.default_rng(0),
        )
        for s in chain.sample(10):
            self.assertEqual(list(s), ["a", "b"])

    def test_chain_over_partitioned_vectors(self):
        init = PartitionedVector.from_array(np.zeros(4), 2)
        chain = GeneralMetropolisHastings(
            lambda v: -0.5 * float(np.sum(v.to_array() ** 2)),
            lambda rng: PartitionedVector.from_array(rng.normal(size=4), 2),
            init=init,
            group=RealGroup(),
            rng=np.random.default_rng(0),
        )
        s = chain.draw()
        self.assertEqual(s.block_sizes, [2, 2])


if __name__ == "__main__":
    unittest.main()
