import itertools
import math

import numpy as np
import pytest

from taxi_dispatch.model.hungarian import (
    SOLVERS,
    assignment_cost,
    solve_assignment,
    solve_assignment_scipy,
)


def brute_force_cost(cost):
    rows, cols = cost.shape
    if rows <= cols:
        return min(
            sum(cost[i, perm[i]] for i in range(rows))
            for perm in itertools.permutations(range(cols), rows)
        )
    return brute_force_cost(cost.T)


def assert_valid_matching(pairs, rows, cols):
    assert len(pairs) == min(rows, cols)
    assert len({r for r, _ in pairs}) == len(pairs)
    assert len({c for _, c in pairs}) == len(pairs)
    assert all(0 <= r < rows and 0 <= c < cols for r, c in pairs)


def test_known_example():
    cost = np.array([[4, 1, 3], [2, 0, 5], [3, 2, 2]])
    pairs = solve_assignment(cost)
    assert pairs == [(0, 1), (1, 0), (2, 2)]
    assert assignment_cost(cost, pairs) == 5


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6])
def test_square_matches_brute_force(n):
    rng = np.random.default_rng(n)
    for _ in range(10):
        cost = rng.integers(0, 20, size=(n, n)).astype(float)
        pairs = solve_assignment(cost)
        assert_valid_matching(pairs, n, n)
        assert assignment_cost(cost, pairs) == pytest.approx(brute_force_cost(cost))


@pytest.mark.parametrize("shape", [(2, 4), (4, 2), (1, 5), (5, 1), (3, 6)])
def test_rectangular_matches_brute_force(shape):
    rng = np.random.default_rng(sum(shape))
    for _ in range(5):
        cost = rng.integers(1, 30, size=shape).astype(float)
        pairs = solve_assignment(cost)
        assert_valid_matching(pairs, *shape)
        assert assignment_cost(cost, pairs) == pytest.approx(brute_force_cost(cost))


def test_agrees_with_scipy():
    rng = np.random.default_rng(2024)
    for size in range(1, 12):
        cost = rng.random((size, size + 2)) * 50
        ours = assignment_cost(cost, solve_assignment(cost))
        ref = assignment_cost(cost, solve_assignment_scipy(cost))
        assert ours == pytest.approx(ref)


def test_infinite_costs_are_avoided():
    cost = np.array([[math.inf, 1.0], [1.0, math.inf]])
    assert solve_assignment(cost) == [(0, 1), (1, 0)]

    cost = np.array([[math.inf, 5.0], [2.0, math.inf]])
    assert solve_assignment(cost) == [(0, 1), (1, 0)]


@pytest.mark.parametrize("solver", list(SOLVERS.values()))
def test_empty_matrix(solver):
    assert solver(np.zeros((0, 0))) == []
    assert solver(np.zeros((0, 3))) == []
    assert solver(np.zeros((3, 0))) == []


def test_rejects_non_matrix():
    with pytest.raises(ValueError):
        solve_assignment([1, 2, 3])


def test_ties_are_deterministic():
    cost = np.ones((4, 4))
    assert solve_assignment(cost) == solve_assignment(cost)
    assert_valid_matching(solve_assignment(cost), 4, 4)
