import math
from collections import deque

import pytest

from taxi_dispatch.model.city import City, Position, generate_city
from taxi_dispatch.model.pathfinding import find_path, manhattan_distance, path_distance
from taxi_dispatch.model.prng import LCG


def bfs_distance(city, start, end):
    """Reference shortest-path length by breadth-first search."""
    seen = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current == end:
            return seen[current]
        for n in city.neighbours(current):
            if n not in seen:
                seen[n] = seen[current] + 1
                queue.append(n)
    return math.inf


def assert_valid_path(city, start, end, path):
    assert path[-1] == end
    assert start not in path[:1]
    prev = start
    for step in path:
        assert city.is_road(step)
        assert manhattan_distance(prev, step) == 1
        prev = step


@pytest.fixture
def maze():
    return City.from_rows([
        ".....",
        ".###.",
        ".#...",
        ".#.#.",
        ".....",
    ])


def test_path_around_obstacles(maze):
    path = find_path(maze, Position(0, 0), Position(4, 4))
    assert len(path) == 8
    assert_valid_path(maze, Position(0, 0), Position(4, 4), path)


def test_detour_longer_than_manhattan(maze):
    start, end = Position(2, 2), Position(0, 2)
    path = find_path(maze, start, end)
    assert_valid_path(maze, start, end, path)
    assert len(path) == bfs_distance(maze, start, end)
    assert len(path) > manhattan_distance(start, end)


def test_start_equals_end(maze):
    assert find_path(maze, Position(2, 2), Position(2, 2)) == [Position(2, 2)]
    assert path_distance(maze, Position(2, 2), Position(2, 2)) == 1


def test_unreachable_returns_empty():
    city = City.from_rows([
        "..#..",
        "..#..",
        "..#..",
    ])
    assert find_path(city, Position(0, 0), Position(4, 0)) == []
    assert path_distance(city, Position(0, 0), Position(4, 0)) == math.inf


def test_non_road_or_out_of_bounds_target(maze):
    assert find_path(maze, Position(0, 0), Position(1, 1)) == []
    assert find_path(maze, Position(0, 0), Position(9, 9)) == []


def test_paths_are_deterministic():
    city = generate_city(30, 30, 4)
    roads = city.road_cells()
    a = find_path(city, roads[0], roads[-1])
    b = find_path(city, roads[0], roads[-1])
    assert a == b


def test_path_lengths_are_optimal_on_generated_city():
    city = generate_city(25, 25, 19)
    roads = city.road_cells()
    rng = LCG(77)
    for _ in range(40):
        start = rng.choice(roads)
        end = rng.choice(roads)
        path = find_path(city, start, end)
        expected = bfs_distance(city, start, end)
        if start == end:
            assert path == [end]
            continue
        assert len(path) == expected
        assert_valid_path(city, start, end, path)


def test_straight_road_matches_manhattan():
    city = City.from_rows(["........"])
    assert path_distance(city, Position(1, 0), Position(6, 0)) == 5
    assert find_path(city, Position(1, 0), Position(3, 0)) == [Position(2, 0), Position(3, 0)]


def test_accepts_plain_tuples(maze):
    assert find_path(maze, (0, 0), (0, 2)) == [Position(0, 1), Position(0, 2)]
