import math
import unittest
import numpy as np

import gpwarp as gw
from gpwarp.core import HyperparameterState, PushforwardDistribution, WarpedProcess
from gpwarp.errors import DegeneracyError, DomainError
from gpwarp.warping import PushforwardMap, identity_map, exp_map, affine_map


def make_model(xi, zi, latent_zi=None):
    covariance = gw.kernel.make_matern_covariance(p=2, noise=True)
    h = gw.kernel.matern_initial_hyperparameters(xi, zi if latent_zi is None else latent_zi)
    return gw.Model(None, covariance, (xi, zi), h, meantype="zero")


class TestIdentityWarp(unittest.TestCase):
    """An identity warp reproduces the base process."""

    def setUp(self):
        self.xi = np.linspace(0.0, 1.0, 7).reshape(-1, 1)
        self.zi = np.cos(4.0 * self.xi.ravel())
        self.model = make_model(self.xi, self.zi)
        self.warped = gw.warp(self.model, identity_map())
        self.xt = np.array([[0.1], [0.45], [0.8]])

    def test_energy(self):
        for h in ({}, {"log_sigma2": 0.3}, {"loginvrho_0": 1.0, "log_noise": -4.0}):
            self.assertAlmostEqual(self.warped.energy(h), self.model.energy(h), places=10)

    def test_mean_and_predict(self):
        np.testing.assert_allclose(self.warped.mean(self.xt), self.model.mean(self.xt))
        for x in self.xt:
            self.assertAlmostEqual(self.warped.predict(x), self.model.predict(x), places=10)

    def test_error_bars(self):
        for a, b in zip(
            self.warped.prediction_with_error_bars(self.xt, 1),
            self.model.prediction_with_error_bars(self.xt, 1),
        ):
            self.assertAlmostEqual(a.lower, b.lower, places=10)
            self.assertAlmostEqual(a.mean, b.mean, places=10)
            self.assertAlmostEqual(a.upper, b.upper, places=10)

    def test_jacobian_determinant_is_one(self):
        self.assertEqual(self.warped.jacobian_determinant(), 1.0)


class TestExpWarp(unittest.TestCase):
    def setUp(self):
        self.xi = np.linspace(0.0, 1.0, 6).reshape(-1, 1)
        self.zi = np.exp(np.sin(3.0 * self.xi.ravel()))
        self.model = make_model(self.xi, self.zi, latent_zi=np.log(self.zi))
        self.warped = gw.warp(self.model, exp_map())

    def test_shared_hyperparameters(self):
        self.assertIs(self.warped.hyperparameters, self.model.hyperparameters)
        self.warped.energy({"log_sigma2": -0.2})
        self.assertEqual(self.model.hyperparameters["log_sigma2"], -0.2)
        self.model.hyperparameters["log_noise"] = -5.0
        self.assertEqual(self.warped.underlying.hyperparameters["log_noise"], -5.0)

    def test_underlying_trained_on_latent_labels(self):
        _, latent = self.warped.underlying.data
        np.testing.assert_allclose(latent, np.log(self.zi))
        _, observed = self.warped.data
        np.testing.assert_allclose(observed, self.zi)

    def test_data_as_seq_in_observation_space(self):
        pairs = self.warped.data_as_seq()
        self.assertEqual(len(pairs), self.xi.shape[0])
        for k, (x, y) in enumerate(pairs):
            np.testing.assert_array_equal(x, self.xi[k])
            self.assertAlmostEqual(y, self.zi[k])
        latent_pairs = self.warped.underlying.data_as_seq()
        self.assertAlmostEqual(latent_pairs[0][1], math.log(self.zi[0]))

    def test_energy_density_correction(self):
        h = self.model.hyperparameters.as_dict()
        latent = gw.Model(
            None,
            self.model.covariance,
            (self.xi, np.log(self.zi)),
            HyperparameterState(h),
        )
        expected = latent.energy(h) * np.prod(1.0 / self.zi)
        self.assertAlmostEqual(self.warped.energy(h), expected, places=10)
        self.assertGreater(self.warped.jacobian_determinant(), 0.0)

    def test_mean_is_image_of_base_mean(self):
        xt = np.array([[0.3], [0.7]])
        np.testing.assert_allclose(self.warped.mean(xt), np.exp(self.model.mean(xt)))

    def test_error_bars_and_predict(self):
        xt = np.array([[0.25], [0.75]])
        latent_bars = self.warped.underlying.prediction_with_error_bars(xt, 2)
        bars = self.warped.prediction_with_error_bars(xt, 2)
        for lb, b in zip(latent_bars, bars):
            self.assertAlmostEqual(b.lower, math.exp(lb.lower))
            self.assertAlmostEqual(b.mean, math.exp(lb.mean))
            self.assertAlmostEqual(b.upper, math.exp(lb.upper))
            self.assertGreater(b.lower, 0.0)
        self.assertAlmostEqual(self.warped.predict(xt[0]), bars[0].mean)

    def test_predictive_distribution(self):
        xt = np.linspace(0.0, 1.0, 5).reshape(-1, 1)
        dist = self.warped.predictive_distribution(xt)
        self.assertIsInstance(dist, PushforwardDistribution)
        vmap, latent = dist
        np.testing.assert_allclose(
            latent.mean.to_array(),
            self.warped.underlying.predictive_distribution(xt).mean.to_array(),
        )
        np.testing.assert_allclose(
            dist.median().to_array(), np.exp(latent.mean.to_array())
        )
        y = np.exp(latent.mean.to_array()) * 1.1
        expected = latent.logpdf(np.log(y)) - np.sum(np.log(y))
        self.assertAlmostEqual(dist.logpdf(y), expected, places=8)
        draws = dist.sample(4, rng=np.random.default_rng(0))
        self.assertTrue(all(np.all(d.to_array() > 0.0) for d in draws))

    def test_refit(self):
        xi2 = self.xi[:4]
        zi2 = self.zi[:4]
        w2 = self.warped.refit((xi2, zi2))
        self.assertIsInstance(w2, WarpedProcess)
        self.assertIs(w2.hyperparameters, self.model.hyperparameters)
        self.assertEqual(w2.npoints, 4)


class TestConstructionFailures(unittest.TestCase):
    def setUp(self):
        self.xi = np.linspace(0.0, 1.0, 4).reshape(-1, 1)

    def test_label_outside_domain(self):
        zi = np.array([1.0, 2.0, -0.5, 3.0])
        with self.assertRaises(DomainError):
            gw.warp(make_model(self.xi, zi), exp_map())

    def test_decreasing_map(self):
        zi = np.array([1.0, 2.0, 0.5, 3.0])
        flip = PushforwardMap(
            lambda x: -x, lambda y: -y, lambda y: -np.ones(np.shape(y)), name="flip"
        )
        with self.assertRaises(DegeneracyError):
            gw.warp(make_model(self.xi, zi), flip)

    def test_many_labels_energy_is_finite(self):
        xi = np.linspace(0.0, 1.0, 400).reshape(-1, 1)
        zi = np.exp(2.0 + 0.5 * np.sin(6.0 * xi.ravel()))
        model = make_model(xi, zi, latent_zi=np.log(zi))
        warped = gw.warp(model, exp_map())
        self.assertAlmostEqual(
            warped.log_jacobian_determinant(), -np.sum(np.log(zi)), places=6
        )
        self.assertEqual(warped.jacobian_determinant(), 0.0)
        self.assertTrue(math.isfinite(warped.energy({})))


class TestComposedWarps(unittest.TestCase):
    def test_nested_warp_equals_composed_map(self):
        xi = np.linspace(0.0, 1.0, 5).reshape(-1, 1)
        zi = 1.0 + 2.0 * np.exp(np.sin(2.0 * xi.ravel()))
        model = make_model(xi, zi, latent_zi=np.log((zi - 1.0) / 2.0))
        nested = gw.warp(gw.warp(model, exp_map()), affine_map(2.0, 1.0))
        composed = gw.warp(model, exp_map().then(affine_map(2.0, 1.0)))
        h = {"log_sigma2": 0.1}
        self.assertAlmostEqual(nested.energy(h), composed.energy(h), places=8)
        xt = np.array([[0.4]])
        self.assertAlmostEqual(nested.predict(xt[0]), composed.predict(xt[0]), places=8)
        self.assertIs(nested.hyperparameters, model.hyperparameters)


if __name__ == "__main__":
    unittest.main()
