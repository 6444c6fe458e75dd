"""Taxi entity and its dispatch states."""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Iterable, Optional

from .city import Position


class TaxiState(Enum):
    """Possible states for a taxi."""
    IDLE = "idle"
    PICKING_UP = "picking_up"
    DELIVERING = "delivering"


@dataclass
class Taxi:
    """
    A single vehicle in the fleet.

    `path` holds the remaining planned steps, front first. While serving a
    passenger the taxi stores that passenger's id; the record itself lives
    in the simulation state.
    """
    id: str
    position: Position
    target: Optional[Position] = None
    path: Deque[Position] = field(default_factory=deque)
    passenger_id: Optional[str] = None
    state: TaxiState = TaxiState.IDLE
    total_deliveries: int = 0
    total_distance: int = 0

    @property
    def is_idle(self) -> bool:
        return self.state == TaxiState.IDLE

    def set_route(self, target: Position, path: Iterable[Position]) -> None:
        self.target = target
        self.path = deque(path)

    def step(self) -> bool:
        """Move one cell along the path. Returns False when there is nothing to do."""
        if not self.path:
            return False
        self.position = self.path.popleft()
        self.total_distance += 1
        return True

    def release(self) -> None:
        """Drop the passenger and target and return to idle."""
        self.passenger_id = None
        self.target = None
        self.path = deque()
        self.state = TaxiState.IDLE

    def copy(self) -> "Taxi":
        # Positions are immutable tuples; only the path container needs copying
        return Taxi(
            id=self.id,
            position=self.position,
            target=self.target,
            path=deque(self.path),
            passenger_id=self.passenger_id,
            state=self.state,
            total_deliveries=self.total_deliveries,
            total_distance=self.total_distance,
        )

    def __repr__(self) -> str:
        return (f"Taxi(id={self.id}, pos={tuple(self.position)}, "
                f"state={self.state.value})")
