import unittest
import numpy as np

import gpwarp.num as gnp
from gpwarp.core.partitioned import PartitionedVector
from gpwarp.errors import DomainError
from gpwarp.warping import (
    PushforwardMap,
    identity_map,
    exp_map,
    affine_map,
    sinh_arcsinh_map,
    box_cox_map,
)


def standard_maps():
    return [
        identity_map(),
        exp_map(),
        affine_map(2.0, 1.0),
        sinh_arcsinh_map(0.3, 1.5),
        box_cox_map(0.5),
        box_cox_map(-0.5),
        box_cox_map(0.0),
    ]


# observations in every map's domain, latent values in every forward's range
OBSERVATIONS = np.array([0.2, 0.7, 1.0, 2.5, 4.0])
LATENT = np.array([-1.0, -0.3, 0.0, 0.4, 1.1])


class TestStandardMaps(unittest.TestCase):
    def test_roundtrip_observation_space(self):
        for m in standard_maps():
            with self.subTest(m=m.name):
                np.testing.assert_allclose(
                    m.forward(m.inverse(OBSERVATIONS)), OBSERVATIONS, rtol=1e-9
                )

    def test_roundtrip_latent_space(self):
        for m in standard_maps():
            with self.subTest(m=m.name):
                np.testing.assert_allclose(
                    m.inverse(m.forward(LATENT)), LATENT, rtol=1e-9, atol=1e-12
                )

    def test_forward_strictly_increasing(self):
        for m in standard_maps():
            with self.subTest(m=m.name):
                self.assertTrue(np.all(np.diff(m.forward(LATENT)) > 0.0))

    def test_jacobian_is_derivative_of_inverse(self):
        for m in standard_maps():
            for y in OBSERVATIONS:
                with self.subTest(m=m.name, y=y):
                    fd = gnp.derivative_finite_diff(m.inverse, y, 1e-5)
                    self.assertAlmostEqual(
                        float(m.jacobian(y)), float(fd), delta=1e-6 * (1 + abs(fd))
                    )
                    self.assertGreater(float(m.jacobian(y)), 0.0)

    def test_inverse_as_differentiable_map(self):
        m = exp_map()
        self.assertAlmostEqual(float(m.i(2.0)), np.log(2.0))
        self.assertAlmostEqual(float(m.i.jacobian(2.0)), 0.5)
        self.assertAlmostEqual(float(m(0.0)), 1.0)

    def test_invalid_parameters(self):
        with self.assertRaises(ValueError):
            affine_map(0.0, 1.0)
        with self.assertRaises(ValueError):
            sinh_arcsinh_map(0.0, -1.0)


class TestDomain(unittest.TestCase):
    def test_in_domain(self):
        m = exp_map()
        self.assertIs(m.in_domain(1.0), True)
        self.assertIs(m.in_domain(-1.0), False)
        np.testing.assert_array_equal(
            m.in_domain(np.array([-1.0, 0.0, 2.0])), [False, False, True]
        )
        self.assertTrue(identity_map().in_domain(-1e6))
        self.assertFalse(identity_map().in_domain(np.nan))

    def test_check_bijection_returns_latent_values(self):
        x = exp_map().check_bijection([1.0, np.e])
        np.testing.assert_allclose(x, [0.0, 1.0])

    def test_check_bijection_outside_domain(self):
        with self.assertRaises(DomainError):
            exp_map().check_bijection([1.0, -2.0])

    def test_check_bijection_not_finite(self):
        m = PushforwardMap(np.exp, lambda y: np.log(np.abs(y)) * np.inf, lambda y: 1.0 / y)
        with self.assertRaises(DomainError):
            m.check_bijection([2.0])

    def test_check_bijection_roundtrip_failure(self):
        # inverse is not the inverse of forward
        m = PushforwardMap(lambda x: 2.0 * x, lambda y: y, lambda y: np.ones_like(y))
        with self.assertRaises(DomainError):
            m.check_bijection([1.0, 2.0])


class TestComposition(unittest.TestCase):
    def setUp(self):
        # y = 2 exp(x) + 1, defined for y > 1
        self.m = exp_map().then(affine_map(2.0, 1.0))
        self.y = np.array([1.5, 3.0, 10.0])

    def test_forward_inverse(self):
        np.testing.assert_allclose(self.m.forward(0.0), 3.0)
        np.testing.assert_allclose(self.m.forward(self.m.inverse(self.y)), self.y)
        np.testing.assert_allclose(self.m.inverse(self.y), np.log((self.y - 1.0) / 2.0))

    def test_chain_rule_jacobian(self):
        for y in self.y:
            fd = gnp.derivative_finite_diff(self.m.inverse, y, 1e-5)
            self.assertAlmostEqual(float(self.m.jacobian(y)), float(fd), delta=1e-6)

    def test_domain(self):
        self.assertFalse(self.m.in_domain(0.5))
        self.assertTrue(self.m.in_domain(2.0))
        with self.assertRaises(DomainError):
            self.m.check_bijection([0.5, 2.0])


class TestVectorPushforward(unittest.TestCase):
    def setUp(self):
        self.m = exp_map()
        self.vm = self.m.lift()
        self.y = PartitionedVector.from_array(OBSERVATIONS, 2)

    def test_forward_inverse_blockwise(self):
        x = self.vm.inverse(self.y)
        self.assertEqual(x.block_sizes, [2, 2, 1])
        np.testing.assert_allclose(x.to_array(), np.log(OBSERVATIONS))
        np.testing.assert_allclose(self.vm.forward(x).to_array(), OBSERVATIONS)

    def test_jacobian_block_diagonal(self):
        J = self.vm.jacobian(self.y)
        self.assertEqual(J.shape, (5, 5))
        for i in range(3):
            for j in range(3):
                if i != j:
                    self.assertFalse(J.is_stored(i, j))
        np.testing.assert_allclose(J.to_array(), np.diag(1.0 / OBSERVATIONS))
        self.assertAlmostEqual(J.determinant(), np.prod(1.0 / OBSERVATIONS))

    def test_log_abs_det_jacobian(self):
        self.assertAlmostEqual(
            self.vm.log_abs_det_jacobian(self.y), -np.sum(np.log(OBSERVATIONS))
        )


if __name__ == "__main__":
    unittest.main()
