from __future__ import annotations

import json

import matplotlib
import pytest

matplotlib.use("Agg", force=True)
from shiftroster.config import Config
from shiftroster.generate.roster import RosterGenConfig, build_demo_input
from shiftroster.main import default_input_builder, main, parse_args, run_solver
from shiftroster.result_types import SolveResult


def test_run_solver_without_reporting_writes_nothing(tmp_path):
    cfg = Config(OUTPUT_DIR=tmp_path / "out")
    data = build_demo_input("2025-04", RosterGenConfig(seed=5))
    res = run_solver(cfg, data=data, enable_reporting=False)
    assert isinstance(res, SolveResult)
    assert res.month == "2025-04"
    assert res.filled_slots + res.unfilled_count == res.required_slots
    assert not (tmp_path / "out").exists()


def test_run_solver_uses_input_builder(tmp_path):
    calls = []

    def builder(cfg):
        calls.append(cfg)
        return build_demo_input("2025-02", RosterGenConfig(n_role_a=3, n_role_b=3))

    cfg = Config(OUTPUT_DIR=tmp_path)
    res = run_solver(cfg, input_builder=builder, enable_reporting=False)
    assert calls == [cfg]
    assert res.month == "2025-02"


def test_run_solver_validates_config():
    with pytest.raises(ValueError, match="TIE_BREAK"):
        run_solver(Config(TIE_BREAK="random"), enable_reporting=False)


def test_run_solver_with_reporting_writes_outputs(tmp_path):
    cfg = Config(OUTPUT_DIR=tmp_path, ENABLE_PLOTS=False)
    data = build_demo_input("2025-04", RosterGenConfig(seed=5))
    run_solver(cfg, data=data)
    for name in ("report.pdf", "assignments.csv", "roster_grid.csv", "staff_totals.csv"):
        assert (tmp_path / name).exists(), name


def test_default_input_builder_uses_seed():
    first = default_input_builder(Config(SEED=3))
    second = default_input_builder(Config(SEED=3))
    assert [s.name for s in first.staff] == [s.name for s in second.staff]


def test_parse_args_rejects_input_with_demo():
    with pytest.raises(SystemExit):
        parse_args(["--demo", "--input", "x.json"])


def test_main_demo_month_without_report(tmp_path, capsys):
    res = main(["--demo", "--month", "2025-04", "--no-report", "--output-dir", str(tmp_path)])
    assert res.month == "2025-04"
    assert res.assignments
    assert not any(tmp_path.iterdir())
    out = capsys.readouterr().out
    assert "Synthetic roster: 12 staff (6 role A, 6 role B, 50% role A)" in out
    assert "Scheduling department D1 for 2025-04" in out


def test_main_from_snapshot_file(tmp_path, capsys):
    snapshot = {
        "department_id": "ward-1",
        "month": "2025-03",
        "max_diff_allowed": 3,
        "shifts": [{"id": "M", "name": "Morning", "required_a": 1, "required_b": 1}],
        "staff": [
            {"id": "n1", "name": "Ann", "position": "nurse"},
            {"id": "n2", "name": "Ben", "position": "nurse"},
            {"id": "a1", "name": "Cy", "position": "assistant"},
            {"id": "a2", "name": "Di", "position": "assistant"},
        ],
    }
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot), encoding="utf-8")
    out_dir = tmp_path / "out"

    res = main(["--input", str(path), "--output-dir", str(out_dir), "--no-plots"])
    assert res.department_id == "ward-1"
    assert res.filled_slots == 62
    assert (out_dir / "assignments.csv").exists()
    out = capsys.readouterr().out
    assert "Scheduling department ward-1 for 2025-03" in out
    assert "allowed spread per role: 3" in out
