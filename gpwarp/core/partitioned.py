# gpwarp/core/partitioned.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Block-partitioned vectors and matrices.

A :class:`PartitionedVector` is a list of one-dimensional blocks and a
:class:`PartitionedMatrix` a sparse dictionary of two-dimensional
blocks indexed by ``(row_block, col_block)``. Blocks that are not
stored in a matrix are zero and are never materialized, which is what
makes block-diagonal Jacobians cheap.

Only the operations needed by the warping machinery are provided:
block-wise map and filter, block products with a vector, and
determinants composed from diagonal blocks.
"""
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple
import gpwarp.num as gnp
from gpwarp.errors import DimensionMismatchError


def _partition_sizes(n: int, block_size: int) -> List[int]:
    if block_size is None or block_size <= 0:
        raise DimensionMismatchError(
            f"block_size must be a positive integer, got {block_size!r}"
        )
    sizes = [block_size] * (n // block_size)
    if n % block_size:
        sizes.append(n % block_size)
    return sizes


class PartitionedVector:
    """Vector stored as a sequence of 1-D blocks.

    Parameters
    ----------
    blocks : iterable of array_like
        The blocks, in order.
    num_rows : int, optional
        Declared length. Checked against the sum of the block lengths.
    """

    def __init__(self, blocks: Iterable, num_rows: Optional[int] = None):
        self._blocks = [gnp.asarray(b).reshape(-1) for b in blocks]
        n = int(sum(b.shape[0] for b in self._blocks))
        if num_rows is not None and int(num_rows) != n:
            raise DimensionMismatchError(
                f"Declared {num_rows} rows but the blocks hold {n} entries."
            )
        self._rows = n

    @classmethod
    def from_array(cls, data, block_size: Optional[int] = None):
        """Split ``data`` into consecutive blocks of ``block_size`` entries.

        The last block is shorter when ``block_size`` does not divide the
        length. ``block_size=None`` gives a single block.
        """
        data = gnp.asarray(data).reshape(-1)
        n = data.shape[0]
        if n == 0:
            return cls([], num_rows=0)
        sizes = _partition_sizes(n, n if block_size is None else block_size)
        offsets = gnp.cumsum([0] + sizes)
        return cls(
            [data[offsets[k] : offsets[k + 1]] for k in range(len(sizes))],
            num_rows=n,
        )

    def __repr__(self):
        return (
            f"<PartitionedVector rows={self.rows} "
            f"row_blocks={self.row_blocks}>"
        )

    def __len__(self):
        return self._rows

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def row_blocks(self) -> int:
        return len(self._blocks)

    @property
    def block_sizes(self) -> List[int]:
        return [b.shape[0] for b in self._blocks]

    @property
    def blocks(self) -> List:
        return list(self._blocks)

    def items(self):
        """Iterate over ``(index, block)`` pairs."""
        return enumerate(self._blocks)

    def to_array(self):
        if not self._blocks:
            return gnp.zeros((0,))
        return gnp.concatenate(self._blocks)

    def map(self, func: Callable[[int, object], object]) -> "PartitionedVector":
        """Apply ``func(index, block) -> block`` to each block."""
        return PartitionedVector(
            [func(k, b) for k, b in self.items()], num_rows=None
        )

    def map_values(self, func: Callable) -> "PartitionedVector":
        """Apply an elementwise function to every block."""
        return PartitionedVector([func(b) for b in self._blocks], num_rows=self._rows)

    def filter_blocks(self, predicate: Callable[[int, object], bool]):
        """Return the ``(index, block)`` pairs accepted by ``predicate``."""
        return [(k, b) for k, b in self.items() if predicate(k, b)]

    def _check_same_partition(self, other):
        if not isinstance(other, PartitionedVector):
            raise TypeError(
                f"Expected a PartitionedVector, got {type(other).__name__}"
            )
        if self.block_sizes != other.block_sizes:
            raise DimensionMismatchError(
                f"Incompatible partitions {self.block_sizes} and {other.block_sizes}"
            )

    def __add__(self, other):
        self._check_same_partition(other)
        return PartitionedVector(
            [a + b for a, b in zip(self._blocks, other._blocks)], self._rows
        )

    def __sub__(self, other):
        self._check_same_partition(other)
        return PartitionedVector(
            [a - b for a, b in zip(self._blocks, other._blocks)], self._rows
        )

    def __neg__(self):
        return self.map_values(lambda b: -b)

    def __mul__(self, scalar):
        return self.map_values(lambda b: scalar * b)

    __rmul__ = __mul__


class PartitionedMatrix:
    """Matrix stored as a dictionary of 2-D blocks.

    Parameters
    ----------
    blocks : dict
        Maps ``(i, j)`` to the block in row-block ``i`` and column-block
        ``j``. Missing blocks are zero.
    row_block_sizes, col_block_sizes : sequence of int
        Partition of the rows and of the columns.
    """

    def __init__(
        self,
        blocks: Dict[Tuple[int, int], object],
        row_block_sizes: Sequence[int],
        col_block_sizes: Optional[Sequence[int]] = None,
    ):
        self.row_block_sizes = [int(s) for s in row_block_sizes]
        self.col_block_sizes = (
            list(self.row_block_sizes)
            if col_block_sizes is None
            else [int(s) for s in col_block_sizes]
        )
        self._blocks = {}
        for (i, j), block in blocks.items():
            block = gnp.asarray(block)
            if not (0 <= i < len(self.row_block_sizes)) or not (
                0 <= j < len(self.col_block_sizes)
            ):
                raise DimensionMismatchError(f"Block index {(i, j)} out of range")
            expected = (self.row_block_sizes[i], self.col_block_sizes[j])
            if block.shape != expected:
                raise DimensionMismatchError(
                    f"Block {(i, j)} has shape {block.shape}, expected {expected}"
                )
            self._blocks[(i, j)] = block

    @classmethod
    def from_array(cls, A, block_size: Optional[int] = None):
        A = gnp.asarray(A)
        if A.ndim != 2:
            raise DimensionMismatchError("A should be a 2D array")
        rs = _partition_sizes(A.shape[0], block_size or A.shape[0])
        cs = _partition_sizes(A.shape[1], block_size or A.shape[1])
        ro = gnp.cumsum([0] + rs)
        co = gnp.cumsum([0] + cs)
        blocks = {
            (i, j): A[ro[i] : ro[i + 1], co[j] : co[j + 1]]
            for i in range(len(rs))
            for j in range(len(cs))
        }
        return cls(blocks, rs, cs)

    @classmethod
    def block_diagonal(cls, diagonal_blocks: Sequence):
        """Square block-diagonal matrix; off-diagonal blocks are implicit zeros."""
        diagonal_blocks = [gnp.asarray(b) for b in diagonal_blocks]
        sizes = [b.shape[0] for b in diagonal_blocks]
        return cls({(k, k): b for k, b in enumerate(diagonal_blocks)}, sizes, sizes)

    def __repr__(self):
        return (
            f"<PartitionedMatrix shape={self.shape} "
            f"blocks={self.row_blocks}x{self.col_blocks} stored={len(self._blocks)}>"
        )

    @property
    def rows(self) -> int:
        return int(sum(self.row_block_sizes))

    @property
    def cols(self) -> int:
        return int(sum(self.col_block_sizes))

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def row_blocks(self) -> int:
        return len(self.row_block_sizes)

    @property
    def col_blocks(self) -> int:
        return len(self.col_block_sizes)

    def items(self):
        """Iterate over stored ``((i, j), block)`` pairs."""
        return sorted(self._blocks.items(), key=lambda kv: kv[0])

    def get_block(self, i: int, j: int):
        """Return block ``(i, j)``, materializing zeros when not stored."""
        if (i, j) in self._blocks:
            return self._blocks[(i, j)]
        return gnp.zeros((self.row_block_sizes[i], self.col_block_sizes[j]))

    def is_stored(self, i: int, j: int) -> bool:
        return (i, j) in self._blocks

    def map(self, func: Callable) -> "PartitionedMatrix":
        """Apply ``func((i, j), block) -> block`` to every stored block."""
        return PartitionedMatrix(
            {ij: func(ij, b) for ij, b in self._blocks.items()},
            self.row_block_sizes,
            self.col_block_sizes,
        )

    def filter_blocks(self, predicate: Callable) -> "PartitionedMatrix":
        """Keep stored blocks for which ``predicate((i, j), block)`` holds."""
        return PartitionedMatrix(
            {ij: b for ij, b in self._blocks.items() if predicate(ij, b)},
            self.row_block_sizes,
            self.col_block_sizes,
        )

    def diagonal_blocks(self) -> List:
        """Diagonal blocks in order (zeros where not stored)."""
        if self.row_block_sizes != self.col_block_sizes:
            raise DimensionMismatchError("Diagonal blocks need a square partition")
        return [self.get_block(k, k) for k in range(self.row_blocks)]

    def block_determinants(self) -> List[float]:
        """Determinant of each diagonal block.

        Only diagonal blocks are touched; off-diagonal blocks are neither
        read nor built.
        """
        diag_only = self.filter_blocks(lambda ij, b: ij[0] == ij[1])
        return [float(gnp.det(b)) for b in diag_only.diagonal_blocks()]

    def determinant(self) -> float:
        """Product of the diagonal block determinants.

        Equal to the determinant for block-diagonal (or block-triangular)
        matrices.
        """
        if self.row_blocks == 0:
            return 1.0
        return float(gnp.prod(gnp.asarray(self.block_determinants())))

    def block_log_determinants(self) -> List[Tuple[float, float]]:
        """``(sign, log|det|)`` of each diagonal block, as ``slogdet`` returns them."""
        diag_only = self.filter_blocks(lambda ij, b: ij[0] == ij[1])
        out = []
        for b in diag_only.diagonal_blocks():
            sign, logabsdet = gnp.slogdet(b)
            out.append((float(sign), float(logabsdet)))
        return out

    def log_determinant(self) -> Tuple[float, float]:
        """Sign and log-magnitude of the product of diagonal block determinants.

        Does not underflow or overflow where :meth:`determinant` would.
        """
        sign, total = 1.0, 0.0
        for s, logabsdet in self.block_log_determinants():
            sign *= s
            total += logabsdet
        return sign, total

    def matvec(self, v: PartitionedVector) -> PartitionedVector:
        """Block product ``A v``."""
        if v.block_sizes != self.col_block_sizes:
            raise DimensionMismatchError(
                f"Vector partition {v.block_sizes} does not match "
                f"column partition {self.col_block_sizes}"
            )
        vb = v.blocks
        out = [gnp.zeros((s,)) for s in self.row_block_sizes]
        for (i, j), block in self._blocks.items():
            out[i] = out[i] + gnp.matmul(block, vb[j])
        return PartitionedVector(out, num_rows=self.rows)

    def to_array(self):
        return gnp.vstack(
            [
                gnp.hstack([self.get_block(i, j) for j in range(self.col_blocks)])
                for i in range(self.row_blocks)
            ]
        ) if self.row_blocks else gnp.zeros((0, 0))
