import argparse
import csv
import sys
import time
from pathlib import Path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
from solvers.uniform import SolverConfig, solve_formula
from utils.cnf_parser import parse_dimacs

SAMPLE_VALUES = [1, 5, 10, 20]
MILESTONE_VALUES = [10, 100, 1000]
FIELDNAMES = ["solver", "benchmark_file", "sample_param", "milestone_param", "status", "steps", "probe_hits", "index_scans", "elapsed_time"]

def run_experiment(benchmarks_dir: Path, output_file: Path, max_steps: int = 1000000, seed: int = 42):
    benchmark_files = sorted(list(benchmarks_dir.glob("random_3sat_*.cnf")))
    if not benchmark_files:
        return
    formulas = {path: parse_dimacs(path) for path in benchmark_files}
    results = []
    for sample_param in SAMPLE_VALUES:
        for milestone_param in MILESTONE_VALUES:
            config = SolverConfig(
                seed=seed,
                sample_param=sample_param,
                milestone_param=milestone_param,
                min_block_size=1,
                max_steps=max_steps,
            )
            for cnf_path, formula in formulas.items():
                start_time = time.perf_counter()
                result = solve_formula(formula, config)
                elapsed = time.perf_counter() - start_time

                record = {
                    "solver": "uniform",
                    "benchmark_file": cnf_path.name,
                    "sample_param": sample_param,
                    "milestone_param": milestone_param,
                    "status": result["status"],
                    "steps": result["steps"],
                    "probe_hits": result["probe_hits"],
                    "index_scans": result["index_scans"],
                    "elapsed_time": elapsed
                }
                results.append(record)

    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        writer.writerows(results)

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--benchmarks", default="benchmarks/random_sat")
    parser.add_argument("--output", default="results/parameter_sensitivity.csv")
    parser.add_argument("--max-steps", type=int, default=1000000)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()
    run_experiment(Path(args.benchmarks), Path(args.output), args.max_steps, args.seed)

if __name__ == "__main__":
    main()
