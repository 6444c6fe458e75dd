"""Passenger records and spawning."""

from dataclasses import dataclass
from typing import Optional

from .city import City, Position, random_pickup_spot, random_different_pickup_spot
from .prng import LCG


@dataclass
class Passenger:
    """
    A ride request moving through spawn -> assigned -> picked up -> delivered.

    The taxi serving the passenger is referenced by id only.
    """
    id: str
    pickup: Position
    destination: Position
    spawn_tick: int
    pickup_tick: Optional[int] = None
    delivery_tick: Optional[int] = None
    assigned_taxi_id: Optional[str] = None

    @property
    def is_assigned(self) -> bool:
        return self.assigned_taxi_id is not None

    @property
    def wait_time(self) -> Optional[int]:
        if self.pickup_tick is None:
            return None
        return self.pickup_tick - self.spawn_tick

    @property
    def trip_time(self) -> Optional[int]:
        if self.pickup_tick is None or self.delivery_tick is None:
            return None
        return self.delivery_tick - self.pickup_tick


def spawn_passenger(city: City, tick: int, rng: LCG, passenger_id: str) -> Passenger:
    """Create an unassigned passenger between two distinct pickup spots."""
    pickup = random_pickup_spot(city, rng)
    destination = random_different_pickup_spot(city, pickup, rng)
    return Passenger(
        id=passenger_id,
        pickup=pickup,
        destination=destination,
        spawn_tick=tick,
    )
