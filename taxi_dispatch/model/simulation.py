"""Simulation setup and the per-tick taxi state machine."""

import logging
from typing import TYPE_CHECKING

from .city import generate_city
from .pathfinding import find_path
from .prng import LCG
from .state import SimulationState
from .taxi import Taxi, TaxiState

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)

# Fleet placement draws from its own stream, offset from the city seed
FLEET_SEED_OFFSET = 1000


def create_simulation(config: "SimulationConfig", seed: int) -> SimulationState:
    """Generate the city and place an idle fleet on random road cells."""
    city = generate_city(config.city.width, config.city.height, seed)
    rng = LCG(seed + FLEET_SEED_OFFSET)
    road_cells = city.road_cells()

    taxis = [
        Taxi(id=f"taxi-{i}", position=rng.choice(road_cells))
        for i in range(config.fleet.size)
    ]
    logger.debug("Created simulation: city %dx%d, %d taxis, %d pickup spots",
                 city.width, city.height, len(taxis), len(city.pickup_spots))
    return SimulationState(city=city, taxis=taxis)


def clone_simulation(state: SimulationState) -> SimulationState:
    """Deep copy sharing nothing mutable with the source (the city is shared)."""
    return state.copy()


def advance_tick(state: SimulationState) -> None:
    """
    Advance every taxi one step, in roster order, then bump the tick.

    A taxi that exhausts its path while picking up collects its passenger
    and heads for the destination; one that exhausts it while delivering
    drops the passenger off and goes idle.
    """
    for taxi in state.taxis:
        if not taxi.step():
            continue
        if taxi.path:
            continue

        if taxi.state == TaxiState.PICKING_UP:
            _pick_up(state, taxi)
        elif taxi.state == TaxiState.DELIVERING:
            _drop_off(state, taxi)

    state.tick += 1


def _pick_up(state: SimulationState, taxi: Taxi) -> None:
    passenger = state.waiting.pop(taxi.passenger_id, None)
    if passenger is None:
        logger.warning("Taxi %s reached pickup but passenger %s is not waiting",
                       taxi.id, taxi.passenger_id)
        taxi.release()
        return

    passenger.pickup_tick = state.tick
    state.active[passenger.id] = passenger

    taxi.state = TaxiState.DELIVERING
    taxi.set_route(passenger.destination,
                   find_path(state.city, taxi.position, passenger.destination))
    if not taxi.path:
        logger.warning("Taxi %s is stuck at %s: destination %s unreachable",
                       taxi.id, tuple(taxi.position), tuple(passenger.destination))


def _drop_off(state: SimulationState, taxi: Taxi) -> None:
    passenger = state.active.pop(taxi.passenger_id, None)
    if passenger is None:
        logger.warning("Taxi %s finished delivery but passenger %s is not active",
                       taxi.id, taxi.passenger_id)
    else:
        passenger.delivery_tick = state.tick
        state.completed[passenger.id] = passenger
        taxi.total_deliveries += 1
    taxi.release()
