from pathlib import Path

from taxi_dispatch.export.reporter import Reporter
from taxi_dispatch.model.engine import ComparisonEngine


def test_report_lists_both_strategies(small_config):
    engine = ComparisonEngine(small_config)
    reporter = Reporter("configs/test.yaml", small_config.seed)
    final = None
    while not engine.is_finished():
        final = engine.step()
        reporter.update(final)

    text = reporter.generate_summary(final, Path("out"), csv_enabled=True)
    assert "TAXI DISPATCH COMPARISON REPORT" in text
    assert "GREEDY" in text and "OPTIMAL" in text
    assert "OPTIMAL VS GREEDY" in text
    assert str(Path("out") / "taxis.csv") in text
    assert f"Ticks Simulated: {small_config.max_ticks}" in text


def test_peak_queue_tracking(small_config):
    engine = ComparisonEngine(small_config)
    reporter = Reporter(None, small_config.seed)
    peaks = {}
    for _ in range(20):
        snapshot = engine.step()
        reporter.update(snapshot)
        for name, s in snapshot.strategies.items():
            peaks[name] = max(peaks.get(name, 0), s.metrics.total_passengers_waiting)

    for name, peak in peaks.items():
        assert reporter.stats[name].peak_waiting == peak
        assert reporter.stats[name].ticks == 20
        assert 0.0 <= reporter.stats[name].mean_utilization <= 1.0


def test_disabled_csv_and_zero_baseline(small_config):
    small_config.max_ticks = 1
    small_config.demand.spawn_probability = 0.0
    small_config.demand.burst_probability = 0.0
    engine = ComparisonEngine(small_config)
    final = engine.step()
    reporter = Reporter(None, 1)
    reporter.update(final)
    text = reporter.generate_summary(final, Path("out"), csv_enabled=False)
    assert "(disabled)" in text
    assert "n/a" in text
    assert "(defaults)" in text
