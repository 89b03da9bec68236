"""
Binary occupancy rasters.

A ``RasterMask`` is the canvas the growth simulation fills and also the
per-band mask each band carries. Pixels are stored as 0/255 bytes so a
mask can be handed to the image writer unchanged.
"""

from enum import Enum
from typing import Iterator, Tuple

import numpy as np
from scipy import ndimage

EMPTY = 0
FILLED = 255


class Norm(str, Enum):
    """Distance norms for the dilation footprint."""

    L1 = "l1"  # diamond
    L2 = "l2"  # disc
    LINF = "linf"  # square


def dilation_footprint(radius: int, norm: Norm = Norm.LINF) -> np.ndarray:
    """
    Build the boolean structuring element for a dilation.

    Args:
        radius: Kernel extent in pixels from the centre
        norm: Distance norm deciding which offsets are included

    Returns:
        (2*radius+1, 2*radius+1) boolean array
    """
    if radius < 0:
        raise ValueError(f"Dilation radius must be non-negative, got {radius}")

    offsets = np.arange(-radius, radius + 1)
    dy, dx = np.meshgrid(offsets, offsets, indexing="ij")

    norm = Norm(norm)
    if norm is Norm.L1:
        distance = np.abs(dx) + np.abs(dy)
    elif norm is Norm.L2:
        distance = np.sqrt(dx * dx + dy * dy)
    else:
        distance = np.maximum(np.abs(dx), np.abs(dy))

    return distance <= radius


class RasterMask:
    """
    Fixed-size grid of binary occupancy.

    Coordinates are (x, y) = (column, row); the backing array is indexed
    [row, column]. Filling is one-way: nothing in the growth path clears
    a pixel once it is set.
    """

    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray):
        if data.ndim != 2:
            raise ValueError(f"RasterMask needs a 2-D array, got shape {data.shape}")
        self._data = np.where(data != 0, FILLED, EMPTY).astype(np.uint8)

    @classmethod
    def empty(cls, width: int, height: int) -> "RasterMask":
        """Create an all-zero mask."""
        if width < 0 or height < 0:
            raise ValueError(f"Invalid mask size {width}x{height}")
        mask = cls.__new__(cls)
        mask._data = np.zeros((height, width), dtype=np.uint8)
        return mask

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height)"""
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the 0/255 pixel array, shape (height, width)."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} mask"
            )

    def get(self, x: int, y: int) -> int:
        self._check(x, y)
        return int(self._data[y, x])

    def is_filled(self, x: int, y: int) -> bool:
        self._check(x, y)
        return self._data[y, x] != EMPTY

    def fill(self, x: int, y: int) -> None:
        self._check(x, y)
        self._data[y, x] = FILLED

    def fill_all(self) -> None:
        self._data.fill(FILLED)

    def clear(self) -> None:
        """Reset every pixel. Only meant for scratch masks, never the growth canvas."""
        self._data.fill(EMPTY)

    def count(self) -> int:
        """Number of filled pixels."""
        return int(np.count_nonzero(self._data))

    def nonzero(self) -> np.ndarray:
        """Boolean array of filled pixels, shape (height, width)."""
        return self._data != EMPTY

    def coordinates(self) -> Iterator[Tuple[int, int]]:
        """Yield (x, y) of every filled pixel in row-major order."""
        rows, cols = np.nonzero(self._data)
        for y, x in zip(rows.tolist(), cols.tolist()):
            yield x, y

    def copy(self) -> "RasterMask":
        mask = RasterMask.__new__(RasterMask)
        mask._data = self._data.copy()
        return mask

    def union(self, other: "RasterMask") -> "RasterMask":
        self._check_same_size(other)
        return RasterMask(self.nonzero() | other.nonzero())

    def overlaps(self, other: "RasterMask") -> bool:
        self._check_same_size(other)
        return bool(np.any(self.nonzero() & other.nonzero()))

    def dilate(self, radius: int, norm: Norm = Norm.LINF) -> "RasterMask":
        """
        Morphological dilation.

        Args:
            radius: Kernel extent; 0 leaves the mask unchanged
            norm: Footprint shape (LINF gives a square kernel)

        Returns:
            New mask of the same size; this mask is not modified
        """
        footprint = dilation_footprint(radius, norm)
        if radius == 0 or not self._data.any():
            return self.copy()
        grown = ndimage.binary_dilation(self.nonzero(), structure=footprint)
        return RasterMask(grown)

    def _check_same_size(self, other: "RasterMask") -> None:
        if self.size != other.size:
            raise ValueError(f"Mask size mismatch: {self.size} vs {other.size}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RasterMask):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._data, other._data)

    def __repr__(self) -> str:
        return f"RasterMask({self.width}x{self.height}, filled={self.count()})"
