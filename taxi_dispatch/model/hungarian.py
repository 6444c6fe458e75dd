"""Minimum-cost bipartite assignment solvers."""

from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np
from scipy.optimize import linear_sum_assignment

# Stand-in for unreachable (inf) costs; larger than any real grid distance
UNREACHABLE_COST = 1e9

Solver = Callable[[np.ndarray], List[Tuple[int, int]]]


def _prepare(cost) -> np.ndarray:
    cost = np.asarray(cost, dtype=np.float64)
    if cost.ndim != 2:
        raise ValueError(f"Cost matrix must be 2-D, got shape {cost.shape}")
    return np.where(np.isfinite(cost), cost, UNREACHABLE_COST)


def solve_assignment(cost) -> List[Tuple[int, int]]:
    """
    Hungarian method (shortest augmenting paths with dual potentials), O(n^3).

    A rectangular matrix is zero-padded to square; only pairs inside the
    original shape are returned, sorted by row. Non-finite costs are
    treated as UNREACHABLE_COST.
    """
    cost = _prepare(cost)
    rows, cols = cost.shape
    if rows == 0 or cols == 0:
        return []

    n = max(rows, cols)
    a = np.zeros((n, n), dtype=np.float64)
    a[:rows, :cols] = cost

    # 1-based: index 0 is the virtual root column/row
    u = np.zeros(n + 1)
    v = np.zeros(n + 1)
    p = np.zeros(n + 1, dtype=np.int64)    # p[j]: row matched to column j
    way = np.zeros(n + 1, dtype=np.int64)  # way[j]: previous column on the path

    for i in range(1, n + 1):
        p[0] = i
        j0 = 0
        minv = np.full(n + 1, np.inf)
        used = np.zeros(n + 1, dtype=bool)

        while True:
            used[j0] = True
            i0 = p[j0]

            free = ~used[1:]
            reduced = a[i0 - 1] - u[i0] - v[1:]
            better = free & (reduced < minv[1:])
            minv[1:][better] = reduced[better]
            way[1:][better] = j0

            candidates = np.where(free, minv[1:], np.inf)
            j1 = int(np.argmin(candidates)) + 1
            delta = candidates[j1 - 1]

            u[p[used]] += delta
            v[used] -= delta
            minv[~used] -= delta

            j0 = j1
            if p[j0] == 0:
                break

        # Augment along the alternating path
        while j0:
            j1 = way[j0]
            p[j0] = p[j1]
            j0 = j1

    pairs = [
        (int(p[j]) - 1, j - 1)
        for j in range(1, n + 1)
        if 0 < p[j] <= rows and j <= cols
    ]
    return sorted(pairs)


def solve_assignment_scipy(cost) -> List[Tuple[int, int]]:
    """Same contract as solve_assignment, via scipy's linear_sum_assignment."""
    cost = _prepare(cost)
    if cost.size == 0:
        return []
    row_ind, col_ind = linear_sum_assignment(cost)
    return sorted((int(r), int(c)) for r, c in zip(row_ind, col_ind))


def assignment_cost(cost, pairs: Sequence[Tuple[int, int]]) -> float:
    """Total cost of the selected (row, col) pairs."""
    cost = np.asarray(cost, dtype=np.float64)
    return float(sum(cost[r, c] for r, c in pairs))


SOLVERS: Dict[str, Solver] = {
    'hungarian': solve_assignment,
    'scipy': solve_assignment_scipy,
}
