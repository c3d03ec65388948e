from __future__ import annotations

import argparse
import random
from pathlib import Path
from typing import Dict, List, Optional, Tuple

Clause = List[int]


def random_clause(num_vars: int, k: int, rng: random.Random) -> Clause:
    variables = rng.sample(range(1, num_vars + 1), k)
    return [var if rng.random() < 0.5 else -var for var in variables]


def generate_uniform(num_vars: int, num_clauses: int, k: int = 3, rng: Optional[random.Random] = None) -> List[Clause]:
    """Random k-CNF without any satisfiability guarantee."""
    rng = rng or random.Random()
    if k > num_vars:
        raise ValueError("clause width exceeds number of variables")
    return [random_clause(num_vars, k, rng) for _ in range(num_clauses)]


def generate_planted(
    num_vars: int, num_clauses: int, k: int = 3, rng: Optional[random.Random] = None
) -> Tuple[List[Clause], Dict[int, bool]]:
    """Random k-CNF that is satisfied by a hidden assignment, which is returned alongside.

    Clauses violated by the hidden assignment are redrawn."""
    rng = rng or random.Random()
    if k > num_vars:
        raise ValueError("clause width exceeds number of variables")
    planted = {var: rng.random() < 0.5 for var in range(1, num_vars + 1)}
    clauses: List[Clause] = []
    while len(clauses) < num_clauses:
        clause = random_clause(num_vars, k, rng)
        if any(planted[abs(lit)] == (lit > 0) for lit in clause):
            clauses.append(clause)
    return clauses, planted


def write_dimacs(path: Path, clauses: List[Clause], num_vars: int, comment: Optional[str] = None) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        if comment:
            handle.write(f"c {comment}\n")
        handle.write(f"p cnf {num_vars} {len(clauses)}\n")
        for clause in clauses:
            handle.write(" ".join(str(lit) for lit in clause) + " 0\n")


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--vars", type=int, required=True)
    parser.add_argument("--clauses", type=int, required=True)
    parser.add_argument("--k", type=int, default=3)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--uniform", action="store_true", help="skip the planted solution")
    parser.add_argument("--output", required=True)
    args = parser.parse_args()
    rng = random.Random(args.seed)
    if args.uniform:
        clauses = generate_uniform(args.vars, args.clauses, args.k, rng)
        comment = f"uniform random {args.k}-SAT"
    else:
        clauses, _ = generate_planted(args.vars, args.clauses, args.k, rng)
        comment = f"planted random {args.k}-SAT"
    write_dimacs(Path(args.output), clauses, args.vars, comment)


if __name__ == "__main__":
    main()
