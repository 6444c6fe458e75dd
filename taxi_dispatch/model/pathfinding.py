"""A* pathfinding over the road network."""

import heapq
import math
from itertools import count
from typing import Dict, List, Optional

from .city import City, Position


def manhattan_distance(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def find_path(city: City, start: Position, end: Position) -> List[Position]:
    """
    Shortest 4-connected road path from start to end.

    The returned path excludes `start` and includes `end`; [end] when
    start == end, and [] when end cannot be reached. Frontier ties on f are
    broken by insertion order, so identical inputs always give identical
    paths.
    """
    start = Position(*start)
    end = Position(*end)
    if start == end:
        return [end]
    if not city.is_road(end):
        return []

    seq = count()
    g_score: Dict[Position, int] = {start: 0}
    parent: Dict[Position, Optional[Position]] = {start: None}
    closed = set()

    # Entries: (f, insertion order, g, position)
    frontier = [(manhattan_distance(start, end), next(seq), 0, start)]

    while frontier:
        _, _, g, current = heapq.heappop(frontier)
        if current in closed or g > g_score[current]:
            continue  # Stale entry superseded by a cheaper one

        if current == end:
            return _reconstruct(parent, end)

        closed.add(current)

        for neighbour in city.neighbours(current):
            if neighbour in closed:
                continue
            tentative = g + 1
            if tentative < g_score.get(neighbour, math.inf):
                g_score[neighbour] = tentative
                parent[neighbour] = current
                f = tentative + manhattan_distance(neighbour, end)
                heapq.heappush(frontier, (f, next(seq), tentative, neighbour))

    return []


def _reconstruct(parent: Dict[Position, Optional[Position]], end: Position) -> List[Position]:
    path = []
    node = end
    while parent[node] is not None:
        path.append(node)
        node = parent[node]
    path.reverse()
    return path


def path_distance(city: City, start: Position, end: Position) -> float:
    """Length of the shortest road path, or math.inf when unreachable."""
    path = find_path(city, start, end)
    return len(path) if path else math.inf
