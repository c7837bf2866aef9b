import unittest
import numpy as np

from gpwarp.core.partitioned import PartitionedVector, PartitionedMatrix
from gpwarp.errors import DimensionMismatchError


class TestPartitionedVector(unittest.TestCase):
    def test_from_array_last_block_shorter(self):
        v = PartitionedVector.from_array(np.arange(7.0), 3)
        self.assertEqual(v.block_sizes, [3, 3, 1])
        self.assertEqual(v.rows, 7)
        self.assertEqual(v.row_blocks, 3)
        np.testing.assert_array_equal(v.to_array(), np.arange(7.0))

    def test_single_block_by_default(self):
        v = PartitionedVector.from_array([1.0, 2.0, 3.0])
        self.assertEqual(v.block_sizes, [3])

    def test_declared_rows_mismatch(self):
        with self.assertRaises(DimensionMismatchError):
            PartitionedVector([np.ones(2), np.ones(3)], num_rows=4)
        # also a ValueError for callers that only catch built-ins
        with self.assertRaises(ValueError):
            PartitionedVector([np.ones(2)], num_rows=3)

    def test_map_with_block_index(self):
        v = PartitionedVector.from_array(np.ones(5), 2)
        w = v.map(lambda k, b: k * b)
        np.testing.assert_array_equal(w.to_array(), [0.0, 0.0, 1.0, 1.0, 2.0])

    def test_map_values_and_filter(self):
        v = PartitionedVector.from_array(np.arange(6.0), 2)
        w = v.map_values(np.exp)
        np.testing.assert_allclose(w.to_array(), np.exp(np.arange(6.0)))
        kept = v.filter_blocks(lambda k, b: k != 1)
        self.assertEqual([k for k, _ in kept], [0, 2])

    def test_group_operations(self):
        a = PartitionedVector.from_array(np.arange(5.0), 2)
        b = PartitionedVector.from_array(np.ones(5), 2)
        np.testing.assert_array_equal((a + b).to_array(), np.arange(5.0) + 1.0)
        np.testing.assert_array_equal((a - b).to_array(), np.arange(5.0) - 1.0)
        np.testing.assert_array_equal((-a).to_array(), -np.arange(5.0))
        np.testing.assert_array_equal((2.0 * a).to_array(), 2.0 * np.arange(5.0))
        self.assertEqual((a + b).block_sizes, [2, 2, 1])

    def test_incompatible_partition(self):
        a = PartitionedVector.from_array(np.arange(6.0), 2)
        b = PartitionedVector.from_array(np.arange(6.0), 3)
        with self.assertRaises(DimensionMismatchError):
            a + b


class TestPartitionedMatrix(unittest.TestCase):
    def setUp(self):
        rng = np.random.default_rng(0)
        self.A = rng.standard_normal((2, 2)) + 3 * np.eye(2)
        self.B = rng.standard_normal((2, 3))
        self.C = rng.standard_normal((3, 3)) + 3 * np.eye(3)

    def test_block_diagonal_determinant(self):
        M = PartitionedMatrix.block_diagonal([self.A, self.C])
        self.assertEqual(M.shape, (5, 5))
        self.assertFalse(M.is_stored(0, 1))
        np.testing.assert_array_equal(M.get_block(1, 0), np.zeros((3, 2)))
        self.assertAlmostEqual(
            M.determinant(), np.linalg.det(M.to_array()), places=10
        )
        np.testing.assert_allclose(
            M.block_determinants(), [np.linalg.det(self.A), np.linalg.det(self.C)]
        )

    def test_determinant_uses_diagonal_blocks_only(self):
        # block upper-triangular: the off-diagonal block does not change det
        M = PartitionedMatrix(
            {(0, 0): self.A, (0, 1): self.B, (1, 1): self.C}, [2, 3]
        )
        self.assertAlmostEqual(
            M.determinant(), np.linalg.det(M.to_array()), places=10
        )

    def test_empty_determinant(self):
        self.assertEqual(PartitionedMatrix({}, []).determinant(), 1.0)

    def test_log_determinant(self):
        M = PartitionedMatrix.block_diagonal([self.A, -np.eye(1), self.C])
        sign, logdet = M.log_determinant()
        ref_sign, ref_logdet = np.linalg.slogdet(M.to_array())
        self.assertEqual(sign, ref_sign)
        self.assertEqual(sign, -1.0)
        self.assertAlmostEqual(logdet, ref_logdet, places=10)
        self.assertEqual(M.block_log_determinants()[1], (-1.0, 0.0))
        self.assertEqual(PartitionedMatrix({}, []).log_determinant(), (1.0, 0.0))

    def test_log_determinant_without_underflow(self):
        M = PartitionedMatrix.block_diagonal([np.diag(np.full(400, 1e-3))])
        self.assertEqual(M.determinant(), 0.0)
        sign, logdet = M.log_determinant()
        self.assertEqual(sign, 1.0)
        self.assertAlmostEqual(logdet, 400 * np.log(1e-3), places=8)

    def test_block_shape_mismatch(self):
        with self.assertRaises(DimensionMismatchError):
            PartitionedMatrix({(0, 0): np.eye(2)}, [3])
        with self.assertRaises(DimensionMismatchError):
            PartitionedMatrix({(1, 0): np.eye(2)}, [2])

    def test_from_array_roundtrip_and_matvec(self):
        rng = np.random.default_rng(1)
        full = rng.standard_normal((5, 5))
        M = PartitionedMatrix.from_array(full, 2)
        self.assertEqual(M.row_block_sizes, [2, 2, 1])
        np.testing.assert_array_equal(M.to_array(), full)
        x = rng.standard_normal(5)
        v = PartitionedVector.from_array(x, 2)
        np.testing.assert_allclose(M.matvec(v).to_array(), full @ x)

    def test_matvec_partition_mismatch(self):
        M = PartitionedMatrix.block_diagonal([self.A, self.C])
        with self.assertRaises(DimensionMismatchError):
            M.matvec(PartitionedVector.from_array(np.ones(5), 1))

    def test_map_and_filter(self):
        M = PartitionedMatrix({(0, 0): self.A, (0, 1): self.B, (1, 1): self.C}, [2, 3])
        D = M.filter_blocks(lambda ij, b: ij[0] == ij[1])
        self.assertFalse(D.is_stored(0, 1))
        doubled = M.map(lambda ij, b: 2.0 * b)
        np.testing.assert_allclose(doubled.to_array(), 2.0 * M.to_array())


if __name__ == "__main__":
    unittest.main()
