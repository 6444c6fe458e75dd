"""Side-by-side comparison engine: greedy vs optimal dispatch on shared demand."""

import logging
from typing import Dict, List, TYPE_CHECKING

from .assignment import OPTIMIZERS, run_greedy_assignment, run_optimal_assignment
from .demand import DemandGenerator
from .metrics import compute_metrics
from .simulation import advance_tick, clone_simulation, create_simulation
from .state import ComparisonSnapshot, SimulationState, StrategySnapshot

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)

GREEDY = "greedy"
OPTIMAL = "optimal"

# Demand draws from its own stream, offset from the city seed
DEMAND_SEED_OFFSET = 5000
# Unassigned passengers waiting longer than this are reported
STUCK_WAIT_TICKS = 100


class ComparisonEngine:
    """
    Orchestrates the discrete-time comparison loop.

    Both strategies start from identical copies of one simulation and see
    the same passengers every tick:
    1. Spawn demand and inject a copy into each branch
    2. Assign (greedy on one branch, optimal on the other)
    3. Advance both branches one tick
    4. Return per-strategy snapshots with metrics
    """

    def __init__(self, config: "SimulationConfig"):
        if config.dispatch.solver not in OPTIMIZERS:
            raise ValueError(f"Unknown solver: {config.dispatch.solver}")
        self.config = config
        self.optimizer = OPTIMIZERS[config.dispatch.solver]
        self.demand = DemandGenerator(config.demand, config.seed + DEMAND_SEED_OFFSET)
        self.states: Dict[str, SimulationState] = {}
        self._build_states()

    def _build_states(self) -> None:
        greedy = create_simulation(self.config, self.config.seed)
        self.states = {
            GREEDY: greedy,
            OPTIMAL: clone_simulation(greedy),
        }

    @property
    def city(self):
        return self.states[GREEDY].city

    @property
    def tick(self) -> int:
        return self.states[GREEDY].tick

    def step(self) -> ComparisonSnapshot:
        """Execute one tick on every strategy and return the snapshots."""
        arrivals = self.demand.spawn(self.city, self.tick)
        for state in self.states.values():
            for passenger in arrivals:
                state.add_passenger(passenger)

        run_greedy_assignment(self.states[GREEDY])
        run_optimal_assignment(self.states[OPTIMAL],
                               self.config.dispatch.queue_size,
                               self.optimizer)

        for state in self.states.values():
            advance_tick(state)

        snapshots = {}
        for name, state in self.states.items():
            self._report_stuck(name, state)
            snapshots[name] = StrategySnapshot.capture(name, state, compute_metrics(state))
        return ComparisonSnapshot(tick=self.tick, strategies=snapshots)

    def _report_stuck(self, name: str, state: SimulationState) -> None:
        for p in state.unassigned_passengers():
            waited = state.tick - p.spawn_tick
            if waited > STUCK_WAIT_TICKS:
                logger.warning("[%s] Passenger %s stuck waiting for %d ticks at %s",
                               name.upper(), p.id, waited, tuple(p.pickup))

    def is_finished(self) -> bool:
        """Check if simulation should terminate."""
        return self.tick >= self.config.max_ticks

    def reset(self) -> None:
        """Restart from tick 0 with the same seeds."""
        self.demand.reset()
        self._build_states()

    def get_summary(self) -> Dict[str, Dict]:
        """Get summary statistics for every strategy."""
        summary = {}
        for name, state in self.states.items():
            metrics = compute_metrics(state)
            summary[name] = {
                'total_ticks': state.tick,
                'passengers_total': state.passenger_count,
                'passengers_served': metrics.total_passengers_served,
                'passengers_waiting': metrics.total_passengers_waiting,
                'passengers_in_transit': len(state.active),
                'avg_wait_time': metrics.avg_wait_time,
                'avg_trip_time': metrics.avg_trip_time,
                'total_distance': sum(t.total_distance for t in state.taxis),
            }
        return summary

    def run(self) -> List[ComparisonSnapshot]:
        """Run until max_ticks and return every snapshot."""
        snapshots = []
        while not self.is_finished():
            snapshots.append(self.step())
        return snapshots
