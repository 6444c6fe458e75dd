import pytest

from taxi_dispatch.config import (
    CityConfig,
    DemandConfig,
    DispatchConfig,
    FleetConfig,
    SimulationConfig,
)
from taxi_dispatch.model.city import City, Position
from taxi_dispatch.model.state import SimulationState
from taxi_dispatch.model.taxi import Taxi


@pytest.fixture
def small_config():
    return SimulationConfig(
        city=CityConfig(width=20, height=20),
        fleet=FleetConfig(size=4),
        dispatch=DispatchConfig(queue_size=3),
        demand=DemandConfig(
            spawn_probability=0.8,
            ticks_per_spawn_check=2,
            burst_probability=0.2,
            burst_min_size=3,
            burst_max_size=6,
        ),
        max_ticks=60,
        seed=7,
    )


@pytest.fixture
def open_city():
    # 7x7, all road
    return City.from_rows(["......."] * 7)


def make_state(city, taxi_positions):
    taxis = [Taxi(id=f"taxi-{i}", position=Position(*pos))
             for i, pos in enumerate(taxi_positions)]
    return SimulationState(city=city, taxis=taxis)


@pytest.fixture
def state_factory():
    return make_state
