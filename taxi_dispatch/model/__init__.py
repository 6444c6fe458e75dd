"""Model package for the taxi dispatch simulation."""

from .prng import LCG
from .city import (
    City,
    CellKind,
    DegenerateCityError,
    Position,
    generate_city,
    random_different_pickup_spot,
    random_pickup_spot,
)
from .pathfinding import find_path, manhattan_distance, path_distance
from .passenger import Passenger, spawn_passenger
from .taxi import Taxi, TaxiState
from .state import ComparisonSnapshot, SimulationState, StrategySnapshot, TaxiSnapshot
from .metrics import Metrics, compute_metrics
from .hungarian import SOLVERS, assignment_cost, solve_assignment, solve_assignment_scipy
from .assignment import (
    OPTIMIZERS,
    Pairing,
    commit_pairings,
    greedy_pairings,
    optimal_pairings,
    run_greedy_assignment,
    run_optimal_assignment,
)
from .simulation import advance_tick, clone_simulation, create_simulation
from .demand import DemandGenerator
from .engine import ComparisonEngine, GREEDY, OPTIMAL

__all__ = [
    'LCG',
    'City',
    'CellKind',
    'DegenerateCityError',
    'Position',
    'generate_city',
    'random_pickup_spot',
    'random_different_pickup_spot',
    'find_path',
    'path_distance',
    'manhattan_distance',
    'Passenger',
    'spawn_passenger',
    'Taxi',
    'TaxiState',
    'SimulationState',
    'TaxiSnapshot',
    'StrategySnapshot',
    'ComparisonSnapshot',
    'Metrics',
    'compute_metrics',
    'SOLVERS',
    'solve_assignment',
    'solve_assignment_scipy',
    'assignment_cost',
    'OPTIMIZERS',
    'Pairing',
    'greedy_pairings',
    'optimal_pairings',
    'commit_pairings',
    'run_greedy_assignment',
    'run_optimal_assignment',
    'create_simulation',
    'clone_simulation',
    'advance_tick',
    'DemandGenerator',
    'ComparisonEngine',
    'GREEDY',
    'OPTIMAL',
]
