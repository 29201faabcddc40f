"""Immutable value types shared by the loader, cost builder, solver and reports."""
from dataclasses import dataclass
from typing import Any, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from exceptions import InvalidInputError

DEPOT = 0

Edge = Tuple[int, int]


class Pixel(NamedTuple):
    r: int
    g: int
    b: int


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class Image:
    """
    A height x width grid of RGB pixels.

    `pixels` is a read-only int array of shape (height, width, 3).
    """
    pixels: np.ndarray

    def __post_init__(self):
        raw = np.asarray(self.pixels)
        if not np.issubdtype(raw.dtype, np.integer):
            raise InvalidInputError(f"Pixel channels must be integers, got dtype {raw.dtype}")
        arr = np.array(raw, dtype=np.int64, copy=True)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise InvalidInputError(f"Image must have shape (height, width, 3), got {arr.shape}")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise InvalidInputError("Image is empty")
        if arr.min() < 0 or arr.max() > 255:
            raise InvalidInputError("Pixel channel outside [0, 255]")
        object.__setattr__(self, "pixels", _frozen(arr))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Sequence[int]]]) -> "Image":
        """Build an image from nested rows of (r, g, b) triples."""
        if not rows or not rows[0]:
            raise InvalidInputError("Image is empty")
        width = len(rows[0])
        for r, row in enumerate(rows):
            if len(row) != width:
                raise InvalidInputError(f"Row {r} has {len(row)} pixels, expected {width}")
            for px in row:
                if len(px) != 3:
                    raise InvalidInputError(f"Pixel in row {r} has {len(px)} channels, expected 3")
        return cls(np.asarray(rows))

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def pixel(self, row: int, col: int) -> Pixel:
        return Pixel(*(int(c) for c in self.pixels[row, col]))

    @property
    def left_edge(self) -> np.ndarray:
        """First pixel of every row, shape (height, 3)."""
        return self.pixels[:, 0, :]

    @property
    def right_edge(self) -> np.ndarray:
        """Last pixel of every row, shape (height, 3)."""
        return self.pixels[:, -1, :]


@dataclass(frozen=True, eq=False)
class CostMatrix:
    """
    Directed transition costs over n real nodes plus the depot at index 0.
    values[i, j] is the cost of placing node j directly after node i.
    """
    values: np.ndarray

    def __post_init__(self):
        arr = np.array(self.values, dtype=np.int64, copy=True)
        object.__setattr__(self, "values", _frozen(arr))

    @property
    def size(self) -> int:
        """Number of nodes including the depot."""
        return int(self.values.shape[0])

    def __getitem__(self, edge: Edge) -> int:
        return int(self.values[edge])


class SubtourCut(NamedTuple):
    """sum(x[e] for e in edges) <= rhs"""
    edges: Tuple[Edge, ...]
    rhs: int


@dataclass(frozen=True)
class OrderingResult:
    order: List[int]
    objective: float
    status: str
    optimal: bool
    runtime: Optional[float] = None

    def as_dict(self) -> dict:
        return {
            "order": list(self.order),
            "objective": self.objective,
            "status": self.status,
            "optimal": self.optimal,
            "runtime": self.runtime,
        }


def as_value_matrix(cost: Any) -> np.ndarray:
    """Unwrap a CostMatrix, or accept any array-like, as a numpy array."""
    if isinstance(cost, CostMatrix):
        return cost.values
    return np.asarray(cost)
