"""Taxi-to-passenger assignment strategies: greedy and globally optimal."""

import logging
import math
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Sequence

import numpy as np

from .city import City
from .hungarian import SOLVERS, Solver, solve_assignment
from .passenger import Passenger
from .pathfinding import find_path, path_distance
from .state import SimulationState
from .taxi import Taxi, TaxiState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pairing:
    taxi_id: str
    passenger_id: str


Strategy = Callable[[SimulationState, int], List[Pairing]]


def build_cost_matrix(city: City, taxis: Sequence[Taxi],
                      passengers: Sequence[Passenger]) -> np.ndarray:
    """Path distance from taxi i to passenger j's pickup (inf if unreachable)."""
    cost = np.empty((len(taxis), len(passengers)), dtype=np.float64)
    for i, taxi in enumerate(taxis):
        for j, passenger in enumerate(passengers):
            cost[i, j] = path_distance(city, taxi.position, passenger.pickup)
    return cost


def pairing_distance(state: SimulationState, pairings: Sequence[Pairing]) -> float:
    """Sum of pickup distances over a set of pairings."""
    total = 0.0
    for pairing in pairings:
        taxi = state.find_taxi(pairing.taxi_id)
        passenger = state.find_passenger(pairing.passenger_id)
        total += path_distance(state.city, taxi.position, passenger.pickup)
    return total


def _log_summary(label: str, count: int, distance: float) -> None:
    if count > 0:
        logger.info("[%s] Assigned %d taxis, total distance: %g, avg: %.2f",
                    label, count, distance, distance / count)


def greedy_pairings(state: SimulationState) -> List[Pairing]:
    """
    Match passengers in queue order to the nearest still-unclaimed idle taxi.

    Ties go to the first taxi in roster order. Passengers no idle taxi can
    reach are skipped.
    """
    remaining: Dict[str, Taxi] = {t.id: t for t in state.idle_taxis()}
    pairings = []
    total = 0.0

    for passenger in state.unassigned_passengers():
        if not remaining:
            break

        best = None
        best_distance = math.inf
        for taxi in remaining.values():
            distance = path_distance(state.city, taxi.position, passenger.pickup)
            if distance < best_distance:
                best, best_distance = taxi, distance

        if best is None:
            logger.debug("No idle taxi can reach passenger %s at %s",
                         passenger.id, tuple(passenger.pickup))
            continue

        del remaining[best.id]
        pairings.append(Pairing(best.id, passenger.id))
        total += best_distance

    _log_summary("GREEDY", len(pairings), total)
    return pairings


def optimal_pairings(state: SimulationState, min_queue_size: int,
                     solver: Solver = solve_assignment) -> List[Pairing]:
    """
    Minimum total-distance matching of idle taxis to unassigned passengers.

    Skipped entirely (no pairings, no fallback) while fewer than
    `min_queue_size` passengers are waiting unassigned.
    """
    taxis = state.idle_taxis()
    passengers = state.unassigned_passengers()
    if not taxis or not passengers or len(passengers) < min_queue_size:
        return []

    cost = build_cost_matrix(state.city, taxis, passengers)
    pairings = []
    total = 0.0
    for i, j in solver(cost):
        if i >= len(taxis) or j >= len(passengers):
            continue
        if not math.isfinite(cost[i, j]):
            continue
        pairings.append(Pairing(taxis[i].id, passengers[j].id))
        total += cost[i, j]

    _log_summary("OPTIMIZER", len(pairings), total)
    logger.debug("Cost matrix:\n%s", cost)
    return pairings


def commit_pairings(state: SimulationState, pairings: Sequence[Pairing]) -> int:
    """
    Apply pairings to the state, re-validating each one first.

    A pairing whose taxi is no longer idle or whose passenger is no longer
    waiting unassigned is dropped; the rest still apply. Returns the number
    applied.
    """
    applied = 0
    for pairing in pairings:
        taxi = state.find_taxi(pairing.taxi_id)
        passenger = state.waiting.get(pairing.passenger_id)
        if taxi is None or passenger is None or not taxi.is_idle or passenger.is_assigned:
            logger.debug("Dropping stale pairing %s -> %s",
                         pairing.taxi_id, pairing.passenger_id)
            continue

        passenger.assigned_taxi_id = taxi.id
        taxi.state = TaxiState.PICKING_UP
        taxi.passenger_id = passenger.id
        taxi.set_route(passenger.pickup,
                       find_path(state.city, taxi.position, passenger.pickup))
        applied += 1
    return applied


def run_greedy_assignment(state: SimulationState) -> int:
    return commit_pairings(state, greedy_pairings(state))


def run_optimal_assignment(state: SimulationState, min_queue_size: int,
                           strategy: Strategy = optimal_pairings) -> int:
    return commit_pairings(state, strategy(state, min_queue_size))


OPTIMIZERS: Dict[str, Strategy] = {
    name: partial(optimal_pairings, solver=solver)
    for name, solver in SOLVERS.items()
}
