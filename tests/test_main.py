import csv

from taxi_dispatch.main import main


def test_runs_headless_and_writes_csv(tmp_path, capsys):
    code = main(["--ticks", "15", "--fleet", "5", "--queue-size", "3",
                 "--out-dir", str(tmp_path), "--quiet"])
    assert code == 0
    assert capsys.readouterr().out == ""

    with open(tmp_path / "taxis.csv", newline='') as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 15 * 2 * 5
    assert (tmp_path / "metrics.csv").exists()


def test_prints_report(tmp_path, capsys):
    code = main(["--ticks", "5", "--seed", "3", "--out-dir", str(tmp_path), "--no-csv"])
    assert code == 0
    out = capsys.readouterr().out
    assert "TAXI DISPATCH COMPARISON REPORT" in out
    assert not (tmp_path / "taxis.csv").exists()


def test_config_file_and_solver_override(tmp_path):
    cfg = tmp_path / "small.yaml"
    cfg.write_text("city: {width: 15, height: 15}\nfleet: {size: 3}\nsimulation: {max_ticks: 8}\n")
    code = main(["--config", str(cfg), "--solver", "scipy",
                 "--out-dir", str(tmp_path / "out"), "--quiet"])
    assert code == 0
    assert (tmp_path / "out" / "metrics.csv").exists()


def test_missing_config_fails(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.yaml"), "--quiet"]) == 1
    assert "not found" in capsys.readouterr().err


def test_invalid_override_fails(tmp_path, capsys):
    assert main(["--fleet", "-4", "--out-dir", str(tmp_path), "--quiet"]) == 1
    assert "Error loading config" in capsys.readouterr().err


def test_degenerate_city_fails(tmp_path, capsys):
    cfg = tmp_path / "flat.yaml"
    cfg.write_text("city: {width: 10, height: 1}\n")
    assert main(["--config", str(cfg), "--out-dir", str(tmp_path), "--quiet"]) == 1
    assert "Error generating city" in capsys.readouterr().err
