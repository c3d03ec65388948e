from __future__ import annotations
import random
import sys
from pathlib import Path
from typing import Iterable, List
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
from utils.random_cnf import generate_planted, write_dimacs
BENCH_DIR = ROOT / "benchmarks"
DEFAULT_SIZES = (20, 50, 100, 200)
DEFAULT_RATIO = 4.0

def instance_name(num_vars: int, num_clauses: int, index: int) -> str:
    return f"random_3sat_{num_vars}v_{num_clauses}c_{index:02d}.cnf"

def ensure_dataset(
    dataset: str,
    sizes: Iterable[int] = DEFAULT_SIZES,
    ratio: float = DEFAULT_RATIO,
    count: int = 5,
    seed: int = 0,
    root: Path = BENCH_DIR,
) -> List[Path]:
    target = root / dataset
    existing = sorted(target.rglob("*.cnf")) if target.exists() else []
    if existing:
        return existing
    rng = random.Random(seed)
    written: List[Path] = []
    for num_vars in sizes:
        num_clauses = int(num_vars * ratio)
        for index in range(count):
            clauses, _ = generate_planted(num_vars, num_clauses, 3, rng)
            path = target / instance_name(num_vars, num_clauses, index)
            write_dimacs(path, clauses, num_vars, comment=f"planted 3-SAT seed={seed}")
            written.append(path)
    return written
