import tracemalloc
from pathlib import Path

import pytest

import harness.run_experiments as run_experiments
from harness.datasets import ensure_dataset, instance_name
from harness.run_experiments import collect_files, infer_problem_type, run_one
from solvers.errors import AllocationError
from solvers.uniform import SolverConfig


def test_dataset_is_generated_once(tmp_path):
    first = ensure_dataset("random_sat", sizes=(10,), count=2, seed=1, root=tmp_path)
    assert [path.name for path in first] == [instance_name(10, 40, 0), instance_name(10, 40, 1)]
    again = ensure_dataset("random_sat", sizes=(20,), count=5, seed=9, root=tmp_path)
    assert again == first


def test_collect_files_walks_directories(tmp_path):
    ensure_dataset("random_sat", sizes=(10,), count=2, root=tmp_path)
    (tmp_path / "notes.txt").write_text("ignored")
    single = tmp_path / "uf20-01.cnf"
    single.write_text("p cnf 1 1\n1 0\n")
    files = collect_files([str(tmp_path / "random_sat"), str(single), str(tmp_path / "notes.txt")])
    assert len(files) == 3
    assert files[-1] == single


def test_problem_type_from_name():
    assert infer_problem_type(Path("b/random_3sat_10v_40c_00.cnf")) == "random_3sat"
    assert infer_problem_type(Path("uf20-01.cnf")) == "satlib_uf"
    assert infer_problem_type(Path("other.cnf")) == "unknown"


def test_run_one_record(tmp_path):
    paths = ensure_dataset("random_sat", sizes=(10,), count=1, root=tmp_path)
    record = run_one(paths[0], SolverConfig(seed=3, max_steps=1000000), timeout=0)
    assert record["status"] == "SAT"
    assert record["verified"] is True
    assert record["num_clauses"] == 40
    assert record["seed"] == 3
    assert record["steps"] >= 1
    assert record["peak_memory"] > 0


def test_run_one_stops_memory_tracing_on_failure(tmp_path, monkeypatch):
    def exhausted(formula, config):
        raise AllocationError("no room")

    monkeypatch.setattr(run_experiments, "solve_formula", exhausted)
    paths = ensure_dataset("random_sat", sizes=(10,), count=1, root=tmp_path)
    with pytest.raises(AllocationError):
        run_one(paths[0], SolverConfig(), timeout=0)
    assert not tracemalloc.is_tracing()
