from __future__ import annotations
import argparse
import csv
import logging
import signal
import sys
import time
import tracemalloc
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
from solvers.errors import LoadError
from solvers.uniform import SolverConfig, add_solver_arguments, build_config, solve_formula
from utils.cnf_parser import parse_dimacs
from harness.datasets import ensure_dataset

logger = logging.getLogger(__name__)

FIELDNAMES = [
    "solver",
    "benchmark_file",
    "problem_type",
    "num_vars",
    "num_clauses",
    "seed",
    "status",
    "cpu_time",
    "elapsed_time",
    "peak_memory",
    "steps",
    "assignments",
    "reverts",
    "activations",
    "deactivations",
    "probe_hits",
    "index_scans",
    "unassigned",
    "verified",
]

def collect_files(paths: Iterable[str]) -> List[Path]:
    files: List[Path] = []
    for raw in paths:
        target = Path(raw)
        if target.is_file() and target.suffix == ".cnf":
            files.append(target)
        elif target.is_dir():
            for path in sorted(target.rglob("*.cnf")):
                files.append(path)
    return files

def infer_problem_type(path: Path) -> str:
    name = path.name.lower()
    if name.startswith("random_3sat"):
        return "random_3sat"
    if name.startswith("uf"):
        return "satlib_uf"
    return "unknown"

@contextmanager
def solver_timeout(seconds: float):
    if seconds is None or seconds <= 0:
        yield
        return

    def handler(signum, frame):
        raise TimeoutError()

    previous = signal.signal(signal.SIGALRM, handler)
    signal.setitimer(signal.ITIMER_REAL, seconds)
    try:
        yield
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0)
        signal.signal(signal.SIGALRM, previous)

def run_one(cnf_path: Path, config: SolverConfig, timeout: float) -> Dict[str, object]:
    formula = parse_dimacs(cnf_path)
    tracemalloc.start()
    start_wall = time.perf_counter()
    start_cpu = time.process_time()
    timed_out = False
    try:
        with solver_timeout(timeout):
            result = solve_formula(formula, config)
    except TimeoutError:
        timed_out = True
        result = {}
    finally:
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
    elapsed = time.perf_counter() - start_wall
    cpu_used = time.process_time() - start_cpu
    status = result.get("status", "UNKNOWN") if not timed_out else "TIMEOUT"
    if status == "ERROR":
        logger.error("verification mismatch on %s", cnf_path)
    assignment = result.get("assignment") or {}
    record = {
        "solver": "uniform",
        "benchmark_file": str(cnf_path),
        "problem_type": infer_problem_type(cnf_path),
        "num_vars": formula.num_vars,
        "num_clauses": formula.num_clauses,
        "seed": config.seed,
        "status": status,
        "cpu_time": cpu_used,
        "elapsed_time": elapsed,
        "peak_memory": peak,
        "unassigned": sum(1 for value in assignment.values() if value is None) if assignment else None,
        "verified": result.get("verified"),
    }
    for key in ("steps", "assignments", "reverts", "activations", "deactivations", "probe_hits", "index_scans"):
        record[key] = result.get(key)
    return record

def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--benchmarks", nargs="+", required=True)
    parser.add_argument("--output", default="results/results.csv")
    add_solver_arguments(parser)
    parser.add_argument("--repeats", type=int, default=1, help="runs per file, seeds seed..seed+repeats-1")
    parser.add_argument("--solver-timeout", type=float, default=60.0)
    parser.add_argument("--generate-if-missing", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    if args.generate_if_missing:
        for raw in args.benchmarks:
            target = Path(raw)
            if not target.exists() and not target.suffix:
                ensure_dataset(target.name, root=target.parent)
    files = collect_files(args.benchmarks)
    results_dir = Path(args.output).parent
    results_dir.mkdir(parents=True, exist_ok=True)
    with Path(args.output).open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=FIELDNAMES)
        writer.writeheader()
    base = build_config(args)
    for cnf_path in files:
        for offset in range(args.repeats):
            config = replace(base, seed=base.seed + offset)
            try:
                record = run_one(cnf_path, config, args.solver_timeout)
            except LoadError as exc:
                logger.warning("skipping %s: %s", cnf_path, exc)
                break
            with Path(args.output).open("a", newline="", encoding="utf-8") as handle:
                writer = csv.DictWriter(handle, fieldnames=FIELDNAMES)
                writer.writerow(record)

if __name__ == "__main__":
    main()
