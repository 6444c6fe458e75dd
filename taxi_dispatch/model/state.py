"""Simulation state and snapshot dataclasses for the taxi dispatch simulation."""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, TYPE_CHECKING

from .city import City
from .passenger import Passenger
from .taxi import Taxi

if TYPE_CHECKING:
    from .metrics import Metrics


@dataclass
class SimulationState:
    """
    Authoritative state of one simulation instance.

    Passengers live in exactly one of the three collections, keyed by id in
    arrival order. The city is shared read-only; everything else belongs to
    this instance alone.
    """
    city: City
    taxis: List[Taxi]
    waiting: Dict[str, Passenger] = field(default_factory=dict)
    active: Dict[str, Passenger] = field(default_factory=dict)
    completed: Dict[str, Passenger] = field(default_factory=dict)
    tick: int = 0

    def copy(self) -> "SimulationState":
        return SimulationState(
            city=self.city,
            taxis=[t.copy() for t in self.taxis],
            waiting={pid: replace(p) for pid, p in self.waiting.items()},
            active={pid: replace(p) for pid, p in self.active.items()},
            completed={pid: replace(p) for pid, p in self.completed.items()},
            tick=self.tick,
        )

    def add_passenger(self, passenger: Passenger) -> None:
        """Enqueue a newly spawned passenger (value-copied)."""
        if self.find_passenger(passenger.id) is not None:
            raise ValueError(f"Duplicate passenger id: {passenger.id}")
        self.waiting[passenger.id] = replace(passenger)

    def find_taxi(self, taxi_id: str) -> Optional[Taxi]:
        for taxi in self.taxis:
            if taxi.id == taxi_id:
                return taxi
        return None

    def find_passenger(self, passenger_id: str) -> Optional[Passenger]:
        for collection in (self.waiting, self.active, self.completed):
            if passenger_id in collection:
                return collection[passenger_id]
        return None

    def passenger_of(self, taxi: Taxi) -> Optional[Passenger]:
        """Resolve the passenger a taxi is currently serving."""
        if taxi.passenger_id is None:
            return None
        return self.find_passenger(taxi.passenger_id)

    def idle_taxis(self) -> List[Taxi]:
        return [t for t in self.taxis if t.is_idle]

    def unassigned_passengers(self) -> List[Passenger]:
        return [p for p in self.waiting.values() if not p.is_assigned]

    @property
    def passenger_count(self) -> int:
        return len(self.waiting) + len(self.active) + len(self.completed)


@dataclass(frozen=True)
class TaxiSnapshot:
    """Immutable snapshot of a taxi at a given tick."""
    taxi_id: str
    x: int
    y: int
    state: str  # "idle", "picking_up", "delivering"
    passenger_id: Optional[str]


@dataclass
class StrategySnapshot:
    """Snapshot of one dispatch strategy's simulation after a tick."""
    strategy: str
    tick: int
    taxis: List[TaxiSnapshot]
    metrics: "Metrics"

    @classmethod
    def capture(cls, strategy: str, state: SimulationState,
                metrics: "Metrics") -> "StrategySnapshot":
        return cls(
            strategy=strategy,
            tick=state.tick,
            taxis=[
                TaxiSnapshot(
                    taxi_id=t.id,
                    x=t.position.x,
                    y=t.position.y,
                    state=t.state.value,
                    passenger_id=t.passenger_id,
                )
                for t in state.taxis
            ],
            metrics=metrics,
        )

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format."""
        return [
            {
                "tick": self.tick,
                "strategy": self.strategy,
                "taxi_id": t.taxi_id,
                "x": t.x,
                "y": t.y,
                "state": t.state,
                "passenger_id": t.passenger_id or "",
            }
            for t in self.taxis
        ]

    def metrics_row(self) -> Dict:
        return {"tick": self.tick, "strategy": self.strategy, **self.metrics.as_dict()}


@dataclass
class ComparisonSnapshot:
    """Side-by-side snapshots of every strategy at the same tick."""
    tick: int
    strategies: Dict[str, StrategySnapshot]

    def __getitem__(self, strategy: str) -> StrategySnapshot:
        return self.strategies[strategy]

    def to_csv_rows(self) -> List[Dict]:
        rows = []
        for snapshot in self.strategies.values():
            rows.extend(snapshot.to_csv_rows())
        return rows

    def metrics_rows(self) -> List[Dict]:
        return [s.metrics_row() for s in self.strategies.values()]
