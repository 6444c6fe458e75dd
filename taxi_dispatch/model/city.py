"""Procedural city map generation for the taxi dispatch simulation."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, NamedTuple, Tuple

import numpy as np
from scipy.ndimage import convolve

from .prng import LCG


class Position(NamedTuple):
    """Integer grid coordinate. Arrays are indexed [y, x]."""
    x: int
    y: int


class CellKind(IntEnum):
    EMPTY = 0
    ROAD = 1
    BUILDING = 2


class DegenerateCityError(ValueError):
    """Raised when a city cannot support passenger spawning."""


# Von Neumann neighbourhood, fixed order: north, south, west, east
NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))

_CROSS_KERNEL = np.array([
    [0, 1, 0],
    [1, 0, 1],
    [0, 1, 0],
], dtype=np.int8)

_CELL_CHARS = {
    '.': CellKind.ROAD,
    '#': CellKind.BUILDING,
    '_': CellKind.EMPTY,
}

# Building probabilities for the block-filling pass
ROAD_FRONTAGE_THRESHOLD = 0.15
INTERIOR_THRESHOLD = 0.7
# Probability gate for reverting inaccessible interior cells
CLEANUP_THRESHOLD = 0.85


def count_neighbours(mask: np.ndarray) -> np.ndarray:
    """Count 4-connected True neighbours of every cell (zero outside the grid)."""
    return convolve(mask.astype(np.int8), _CROSS_KERNEL, mode='constant', cval=0)


def find_pickup_spots(grid: np.ndarray) -> Tuple[Position, ...]:
    """Road cells with at least one building neighbour, in row-major order."""
    near_building = count_neighbours(grid == CellKind.BUILDING) > 0
    ys, xs = np.nonzero((grid == CellKind.ROAD) & near_building)
    return tuple(Position(int(x), int(y)) for x, y in zip(xs, ys))


@dataclass(frozen=True, eq=False)
class City:
    """
    Immutable grid of cell kinds plus the derived pickup spots.

    The grid array is write-protected so one City can be shared by any
    number of simulation instances.
    """
    width: int
    height: int
    grid: np.ndarray
    pickup_spots: Tuple[Position, ...]

    def __post_init__(self):
        if self.grid.shape != (self.height, self.width):
            raise ValueError(
                f"Grid shape {self.grid.shape} does not match "
                f"{self.width}x{self.height}"
            )
        self.grid.setflags(write=False)

    @classmethod
    def from_grid(cls, grid: np.ndarray) -> "City":
        grid = np.array(grid, dtype=np.int8)
        height, width = grid.shape
        return cls(width=width, height=height, grid=grid,
                   pickup_spots=find_pickup_spots(grid))

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "City":
        """
        Build a city from text rows ('.' road, '#' building, '_' empty).
        The first row is y = 0.
        """
        try:
            cells = [[_CELL_CHARS[c] for c in row] for row in rows]
        except KeyError as e:
            raise ValueError(f"Unknown cell character: {e.args[0]!r}") from None
        if len({len(r) for r in cells}) > 1:
            raise ValueError("All rows must have the same width")
        return cls.from_grid(np.array(cells, dtype=np.int8))

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos[0] < self.width and 0 <= pos[1] < self.height

    def cell(self, pos: Position) -> CellKind:
        return CellKind(int(self.grid[pos[1], pos[0]]))

    def is_road(self, pos: Position) -> bool:
        """Check if cell is within bounds and a road."""
        return self.in_bounds(pos) and bool(self.grid[pos[1], pos[0]] == CellKind.ROAD)

    def neighbours(self, pos: Position) -> List[Position]:
        """Road cells reachable in one step (N, S, W, E order)."""
        x, y = pos
        result = []
        for dx, dy in NEIGHBOUR_OFFSETS:
            n = Position(x + dx, y + dy)
            if self.is_road(n):
                result.append(n)
        return result

    def road_cells(self) -> List[Position]:
        """All road cells in row-major order."""
        ys, xs = np.nonzero(self.grid == CellKind.ROAD)
        return [Position(int(x), int(y)) for x, y in zip(xs, ys)]


def generate_city(width: int, height: int, seed: int = 42) -> City:
    """
    Generate a grid city deterministically from (width, height, seed).

    1. Arterial roads every 4-5 cells on each axis
    2. Fill blocks: road frontage mostly buildings, interior sparser
    3. Thin out some interior cells with no road access
    4. Collect pickup spots (roads next to buildings)

    Raises DegenerateCityError for empty grids or fewer than two pickup spots.
    """
    if width <= 0 or height <= 0:
        raise DegenerateCityError(f"City must have positive size, got {width}x{height}")

    rng = LCG(seed)
    spacing_x = 4 + rng.randint(2)
    spacing_y = 4 + rng.randint(2)

    xs = np.arange(width)
    ys = np.arange(height)
    arterial = (xs[np.newaxis, :] % spacing_x == 0) | (ys[:, np.newaxis] % spacing_y == 0)

    grid = np.full((height, width), CellKind.EMPTY, dtype=np.int8)
    grid[arterial] = CellKind.ROAD

    # Roads are final after the arterial pass, so adjacency is computed once
    near_road = count_neighbours(arterial) > 0

    for y in range(height):
        for x in range(width):
            if arterial[y, x]:
                continue
            if near_road[y, x] and rng.next() > ROAD_FRONTAGE_THRESHOLD:
                grid[y, x] = CellKind.BUILDING
            elif rng.next() > INTERIOR_THRESHOLD:
                grid[y, x] = CellKind.BUILDING

    for y in range(1, height - 1):
        for x in range(1, width - 1):
            if arterial[y, x]:
                continue
            if rng.next() > CLEANUP_THRESHOLD and not near_road[y, x]:
                grid[y, x] = CellKind.EMPTY

    pickup_spots = find_pickup_spots(grid)
    if len(pickup_spots) < 2:
        raise DegenerateCityError(
            f"City {width}x{height} (seed={seed}) has {len(pickup_spots)} "
            f"pickup spot(s); at least 2 are required"
        )

    return City(width=width, height=height, grid=grid, pickup_spots=pickup_spots)


def random_pickup_spot(city: City, rng: LCG) -> Position:
    return rng.choice(city.pickup_spots)


def random_different_pickup_spot(city: City, exclude: Position, rng: LCG) -> Position:
    """Pick a pickup spot other than `exclude`."""
    candidates = [p for p in city.pickup_spots if p != exclude]
    return rng.choice(candidates)
