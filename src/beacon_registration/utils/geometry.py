"""
Integer Geometry Primitives

Exact 3D point arithmetic used throughout the registration engine. Coordinates
are plain Python ints, so sums and squared distances never overflow or round.
Array helpers convert to and from (N, 3) numpy arrays for the vectorized
code paths, falling back to object arrays when int64 could overflow.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


@dataclass(frozen=True, order=True)
class Point:
    """A beacon position or a translation vector.

    Equality and ordering are component-wise (x first, then y, then z).

    Example:
        >>> Point(1, 2, 3) - Point(0, 2, 5)
        Point(x=1, y=0, z=-2)
    """

    x: int
    y: int
    z: int

    @classmethod
    def origin(cls) -> "Point":
        return cls(0, 0, 0)

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y, -self.z)

    def squared_distance(self, other: "Point") -> int:
        return (other.x - self.x) ** 2 + (other.y - self.y) ** 2 + (other.z - self.z) ** 2

    def manhattan_distance(self, other: "Point") -> int:
        return abs(other.x - self.x) + abs(other.y - self.y) + abs(other.z - self.z)

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.z}"


def subtract(a: Point, b: Point) -> Point:
    """Vector from b to a."""
    return a - b


def add(point: Point, vector: Point) -> Point:
    return point + vector


def squared_distance(a: Point, b: Point) -> int:
    return a.squared_distance(b)


def manhattan_distance(a: Point, b: Point) -> int:
    return a.manhattan_distance(b)


# Coordinates below this magnitude keep every difference, and the sum of three
# squared differences, inside int64
INT64_SAFE_COORD = 2 ** 29


def points_to_array(points: Iterable[Point]) -> "NDArray":
    """Stack points into an (N, 3) array. Empty input gives shape (0, 3).

    The array is int64 while every coordinate is below INT64_SAFE_COORD in
    magnitude, so vectorized sums and squared distances cannot overflow.
    Larger coordinates give an object array of Python ints, which numpy
    arithmetic keeps exact.
    """
    rows = [tuple(p) for p in points]
    if not rows:
        return np.empty((0, 3), dtype=np.int64)
    if max(abs(v) for row in rows for v in row) >= INT64_SAFE_COORD:
        return np.asarray(rows, dtype=object)
    return np.asarray(rows, dtype=np.int64)


def array_to_points(arr: "NDArray") -> List[Point]:
    """Convert an (N, 3) integer or object-of-int array back to Points.

    Raises:
        ValueError: If the array is not (N, 3) or holds non-integer values
    """
    arr = np.asarray(arr)
    if arr.size == 0:
        return []
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected Nx3 array, got shape {arr.shape}")
    if arr.dtype == object:
        if not all(isinstance(v, (int, np.integer)) and not isinstance(v, bool) for v in arr.ravel()):
            raise ValueError("Expected an integer array, got non-integer objects")
    elif not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"Expected an integer array, got dtype {arr.dtype}")
    return [Point(int(x), int(y), int(z)) for x, y, z in arr.tolist()]
