"""
Orientation Catalog

A scanner may be facing any direction along its axes, so its frame differs from
the global frame by a signed permutation of the axes. Each orientation is an
axis reordering followed by a per-axis sign flip:

- 6 axis orders x 8 flips = 48 transforms
- 24 of them are proper rotations (determinant +1), the rest are mirrors

Catalog order is axes-major then flip, following the declaration order of
AxisOrder and Flip. The pairwise aligner accepts the first orientation that
satisfies every correspondence, so this order determines which orientation is
reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Tuple, TYPE_CHECKING

import numpy as np

from ..utils.geometry import Point

if TYPE_CHECKING:
    from numpy.typing import NDArray


class AxisOrder(Enum):
    """Source axis index for each output axis."""

    XYZ = (0, 1, 2)
    XZY = (0, 2, 1)
    YXZ = (1, 0, 2)
    YZX = (1, 2, 0)
    ZXY = (2, 0, 1)
    ZYX = (2, 1, 0)


class Flip(Enum):
    """Sign applied to each output axis after reordering."""

    NONE = (1, 1, 1)
    X = (-1, 1, 1)
    Y = (1, -1, 1)
    Z = (1, 1, -1)
    XY = (-1, -1, 1)
    XZ = (-1, 1, -1)
    YZ = (1, -1, -1)
    XYZ = (-1, -1, -1)


@dataclass(frozen=True)
class Orientation:
    axes: AxisOrder = AxisOrder.XYZ
    flip: Flip = Flip.NONE

    @classmethod
    def identity(cls) -> "Orientation":
        return cls(AxisOrder.XYZ, Flip.NONE)

    @classmethod
    def from_matrix(cls, matrix: "NDArray[np.integer]") -> "Orientation":
        """Recover an orientation from its 3x3 signed permutation matrix.

        Raises:
            ValueError: If the matrix is not a signed permutation matrix
        """
        m = np.asarray(matrix)
        if m.shape != (3, 3):
            raise ValueError(f"Orientation matrix must be 3x3, got {m.shape}")
        perm = []
        signs = []
        for row in m:
            nz = np.flatnonzero(row)
            if len(nz) != 1 or abs(int(row[nz[0]])) != 1:
                raise ValueError(f"Not a signed permutation matrix:\n{m}")
            perm.append(int(nz[0]))
            signs.append(int(row[nz[0]]))
        try:
            return cls(AxisOrder(tuple(perm)), Flip(tuple(signs)))
        except ValueError as e:
            raise ValueError(f"Not a signed permutation matrix:\n{m}") from e

    @property
    def permutation(self) -> Tuple[int, int, int]:
        return self.axes.value

    @property
    def signs(self) -> Tuple[int, int, int]:
        return self.flip.value

    @property
    def matrix(self) -> "NDArray[np.int64]":
        m = np.zeros((3, 3), dtype=np.int64)
        for row, (col, sign) in enumerate(zip(self.permutation, self.signs)):
            m[row, col] = sign
        return m

    @property
    def determinant(self) -> int:
        return int(round(np.linalg.det(self.matrix)))

    @property
    def is_proper(self) -> bool:
        """True for rotations, False for mirror transforms."""
        return self.determinant == 1

    def apply(self, point: Point) -> Point:
        coords = tuple(point)
        (i, j, k), (sx, sy, sz) = self.permutation, self.signs
        return Point(sx * coords[i], sy * coords[j], sz * coords[k])

    def apply_array(self, points: "NDArray") -> "NDArray":
        """Apply to an (N, 3) array of points. Object arrays of Python ints stay object arrays."""
        pts = np.asarray(points)
        if pts.dtype != object:
            pts = pts.astype(np.int64, copy=False)
        if pts.size == 0:
            return pts.reshape(0, 3)
        return pts[:, list(self.permutation)] * np.asarray(self.signs, dtype=pts.dtype)

    def inverse(self) -> "Orientation":
        return Orientation.from_matrix(self.matrix.T)

    def then(self, other: "Orientation") -> "Orientation":
        """Orientation equivalent to applying self first, then other."""
        return Orientation.from_matrix(other.matrix @ self.matrix)

    def __str__(self) -> str:
        flip = "+" if self.flip is Flip.NONE else "-" + self.flip.name
        return f"{self.axes.name}/{flip}"


def apply(orientation: Orientation, point: Point) -> Point:
    return orientation.apply(point)


ORIENTATIONS: Tuple[Orientation, ...] = tuple(
    Orientation(axes, flip) for axes in AxisOrder for flip in Flip
)

PROPER_ORIENTATIONS: Tuple[Orientation, ...] = tuple(o for o in ORIENTATIONS if o.is_proper)


def orientation_catalog(kind: Literal["all", "proper"] = "all") -> Tuple[Orientation, ...]:
    """Return the full 48-element catalog or its 24 proper rotations."""
    if kind == "all":
        return ORIENTATIONS
    if kind == "proper":
        return PROPER_ORIENTATIONS
    raise ValueError(f"Unknown orientation catalog '{kind}'. Choose 'all' or 'proper'.")
