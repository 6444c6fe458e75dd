"""Configuration dataclasses and YAML loader for the taxi dispatch simulation."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .model.hungarian import SOLVERS


@dataclass
class CityConfig:
    width: int = 40
    height: int = 36


@dataclass
class FleetConfig:
    size: int = 12


@dataclass
class DispatchConfig:
    queue_size: int = 12     # batching threshold for the optimal strategy
    solver: str = "hungarian"  # "hungarian" or "scipy"


@dataclass
class DemandConfig:
    spawn_probability: float = 0.7
    ticks_per_spawn_check: int = 5
    burst_probability: float = 0.1
    burst_min_size: int = 4
    burst_max_size: int = 11
    single_burst: bool = True  # at most one burst per run


@dataclass
class SimulationConfig:
    city: CityConfig = field(default_factory=CityConfig)
    fleet: FleetConfig = field(default_factory=FleetConfig)
    dispatch: DispatchConfig = field(default_factory=DispatchConfig)
    demand: DemandConfig = field(default_factory=DemandConfig)
    max_ticks: int = 500
    seed: int = 12344

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    quiet: bool = False
    out_dir: Path = field(default_factory=lambda: Path("./output"))

    @classmethod
    def default(cls) -> "SimulationConfig":
        return cls()

    def validate(self) -> None:
        """Raise ValueError describing the first invalid setting."""
        if self.city.width <= 0 or self.city.height <= 0:
            raise ValueError(
                f"City dimensions must be positive, got {self.city.width}x{self.city.height}")
        if self.fleet.size < 0:
            raise ValueError(f"Fleet size must be non-negative, got {self.fleet.size}")
        if self.dispatch.queue_size < 0:
            raise ValueError(f"Queue size must be non-negative, got {self.dispatch.queue_size}")
        if self.dispatch.solver not in SOLVERS:
            raise ValueError(
                f"Unknown solver: {self.dispatch.solver} (expected one of {sorted(SOLVERS)})")

        demand = self.demand
        for name in ('spawn_probability', 'burst_probability'):
            value = getattr(demand, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if demand.ticks_per_spawn_check < 1:
            raise ValueError(
                f"ticks_per_spawn_check must be at least 1, got {demand.ticks_per_spawn_check}")
        if demand.burst_min_size < 0 or demand.burst_min_size > demand.burst_max_size:
            raise ValueError(
                f"Invalid burst size range: {demand.burst_min_size}..{demand.burst_max_size}")
        if self.max_ticks < 0:
            raise ValueError(f"max_ticks must be non-negative, got {self.max_ticks}")


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Section '{name}' must be a mapping")
    return value


def parse_config(raw: Optional[Dict[str, Any]]) -> SimulationConfig:
    """Build a validated config from parsed YAML, filling gaps with defaults."""
    raw = raw or {}
    defaults = SimulationConfig.default()

    city_raw = _section(raw, 'city')
    city = CityConfig(
        width=int(city_raw.get('width', defaults.city.width)),
        height=int(city_raw.get('height', defaults.city.height))
    )

    fleet_raw = _section(raw, 'fleet')
    fleet = FleetConfig(size=int(fleet_raw.get('size', defaults.fleet.size)))

    dispatch_raw = _section(raw, 'dispatch')
    dispatch = DispatchConfig(
        queue_size=int(dispatch_raw.get('queue_size', defaults.dispatch.queue_size)),
        solver=str(dispatch_raw.get('solver', defaults.dispatch.solver))
    )

    demand_raw = _section(raw, 'demand')
    d = defaults.demand
    demand = DemandConfig(
        spawn_probability=float(demand_raw.get('spawn_probability', d.spawn_probability)),
        ticks_per_spawn_check=int(demand_raw.get('ticks_per_spawn_check', d.ticks_per_spawn_check)),
        burst_probability=float(demand_raw.get('burst_probability', d.burst_probability)),
        burst_min_size=int(demand_raw.get('burst_min_size', d.burst_min_size)),
        burst_max_size=int(demand_raw.get('burst_max_size', d.burst_max_size)),
        single_burst=bool(demand_raw.get('single_burst', d.single_burst))
    )

    sim_raw = _section(raw, 'simulation')

    # Parse export config (optional)
    export_raw = _section(raw, 'export')

    config = SimulationConfig(
        city=city,
        fleet=fleet,
        dispatch=dispatch,
        demand=demand,
        max_ticks=int(sim_raw.get('max_ticks', defaults.max_ticks)),
        seed=int(sim_raw.get('seed', defaults.seed)),
        csv_enabled=bool(export_raw.get('csv', defaults.csv_enabled))
    )
    config.validate()
    return config


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f)
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Configuration root must be a mapping: {config_path}")
    return parse_config(raw)
