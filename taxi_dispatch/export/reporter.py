"""Summary report generation for the taxi dispatch comparison."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import ComparisonSnapshot


@dataclass
class StrategyStats:
    """Running per-strategy aggregates not kept by the simulation itself."""
    peak_waiting: int = 0
    peak_waiting_tick: int = 0
    utilization_sum: float = 0.0
    ticks: int = 0

    @property
    def mean_utilization(self) -> float:
        return self.utilization_sum / self.ticks if self.ticks > 0 else 0.0


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: Optional[str], seed: int):
        self.config_path = config_path
        self.seed = seed
        self.stats: Dict[str, StrategyStats] = {}

    def update(self, snapshot: "ComparisonSnapshot") -> None:
        """Accumulate metrics per tick."""
        for name, strategy in snapshot.strategies.items():
            stats = self.stats.setdefault(name, StrategyStats())
            metrics = strategy.metrics
            if metrics.total_passengers_waiting > stats.peak_waiting:
                stats.peak_waiting = metrics.total_passengers_waiting
                stats.peak_waiting_tick = strategy.tick
            stats.utilization_sum += metrics.avg_taxi_utilization
            stats.ticks += 1

    @staticmethod
    def _change(baseline: float, value: float) -> str:
        if baseline == 0:
            return "n/a"
        return f"{(value - baseline) / baseline * 100:+.1f}%"

    def generate_summary(self, final: "ComparisonSnapshot",
                         output_dir: Path,
                         csv_enabled: bool) -> str:
        """Returns formatted text report."""
        names = list(final.strategies)
        col = 14

        def row(label: str, values: List[str]) -> str:
            return f"{label:<26}" + "".join(f"{v:>{col}}" for v in values)

        lines = [
            "",
            "=" * 80,
            "                    TAXI DISPATCH COMPARISON REPORT",
            "=" * 80,
            f"Configuration: {self.config_path or '(defaults)'}",
            f"Random Seed: {self.seed}",
            f"Ticks Simulated: {final.tick}",
            "",
            "SERVICE METRICS",
            "-" * 40,
            row("", [n.upper() for n in names]),
        ]

        metrics = {n: final[n].metrics for n in names}
        stats = {n: self.stats.get(n, StrategyStats()) for n in names}
        lines += [
            row("Passengers Served", [str(metrics[n].total_passengers_served) for n in names]),
            row("Passengers Waiting", [str(metrics[n].total_passengers_waiting) for n in names]),
            row("Avg Wait Time (ticks)", [f"{metrics[n].avg_wait_time:.2f}" for n in names]),
            row("Avg Trip Time (ticks)", [f"{metrics[n].avg_trip_time:.2f}" for n in names]),
            row("Final Utilization", [f"{metrics[n].avg_taxi_utilization:.1%}" for n in names]),
            row("Mean Utilization", [f"{stats[n].mean_utilization:.1%}" for n in names]),
            row("Peak Queue", [f"{stats[n].peak_waiting} @{stats[n].peak_waiting_tick}"
                               for n in names]),
        ]

        if len(names) == 2:
            base, other = names
            lines += [
                "",
                f"{other.upper()} VS {base.upper()}",
                "-" * 40,
                f"Avg Wait Time:         "
                f"{self._change(metrics[base].avg_wait_time, metrics[other].avg_wait_time)}",
                f"Passengers Served:     "
                f"{self._change(metrics[base].total_passengers_served, metrics[other].total_passengers_served)}",
            ]

        lines += [
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]
        if csv_enabled:
            lines.append(f"Taxi Log:     {output_dir / 'taxis.csv'}")
            lines.append(f"Metrics Log:  {output_dir / 'metrics.csv'}")
        else:
            lines.append("CSV Logs:     (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
