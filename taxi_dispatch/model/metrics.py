"""Service metrics derived from a simulation state."""

from dataclasses import asdict, dataclass
from typing import Dict

from .state import SimulationState


@dataclass(frozen=True)
class Metrics:
    avg_wait_time: float
    avg_trip_time: float
    total_passengers_served: int
    total_passengers_waiting: int
    avg_taxi_utilization: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def compute_metrics(state: SimulationState) -> Metrics:
    """
    Aggregate running service metrics. Read-only.

    Wait time pools finished waits of served passengers with the ongoing
    waits of queued ones. Every average is 0 when its denominator is 0.
    """
    total_wait = 0
    total_trip = 0
    for p in state.completed.values():
        if p.pickup_tick is not None:
            total_wait += p.pickup_tick - p.spawn_tick
            if p.delivery_tick is not None:
                total_trip += p.delivery_tick - p.pickup_tick

    for p in state.waiting.values():
        total_wait += state.tick - p.spawn_tick

    served = len(state.completed)
    waiting = len(state.waiting)
    wait_pool = served + waiting
    busy = sum(1 for t in state.taxis if not t.is_idle)

    return Metrics(
        avg_wait_time=total_wait / wait_pool if wait_pool > 0 else 0.0,
        avg_trip_time=total_trip / served if served > 0 else 0.0,
        total_passengers_served=served,
        total_passengers_waiting=waiting,
        avg_taxi_utilization=busy / len(state.taxis) if state.taxis else 0.0,
    )
