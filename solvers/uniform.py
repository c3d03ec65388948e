from __future__ import annotations

import argparse
import json
import logging
import random
import sys
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from solvers.active_set import (
    DEFAULT_MILESTONE_PARAM,
    DEFAULT_MIN_BLOCK_SIZE,
    DEFAULT_SAMPLE_PARAM,
    ActiveSet,
)
from solvers.assignment import AssignmentState, unsatisfied_clauses
from solvers.errors import AllocationError, LoadError, VerificationMismatch
from solvers.occurrence import OccurrenceIndex
from utils.cnf_parser import CNFFormula, load_cnf, parse_dimacs
from utils.solution_writer import format_dimacs_solution, format_symbols, solution_record

logger = logging.getLogger(__name__)

Event = Tuple[str, int]


@dataclass
class SolverConfig:
    seed: int = 42
    sample_param: int = DEFAULT_SAMPLE_PARAM
    milestone_param: int = DEFAULT_MILESTONE_PARAM
    min_block_size: int = DEFAULT_MIN_BLOCK_SIZE
    max_steps: Optional[int] = None
    log_interval: int = 100000
    record_events: bool = False


@dataclass
class SolverStats:
    steps: int = 0
    assignments: int = 0
    reverts: int = 0
    activations: int = 0
    deactivations: int = 0
    probe_hits: int = 0
    index_scans: int = 0


class UniformSession:
    """One solve of one formula: owns the assignment, occurrence index,
    active set and random source. Nothing is shared between sessions.

    Typical use::

        with UniformSession(formula) as session:
            if session.solve():
                session.check()
    """

    def __init__(self, formula: CNFFormula, config: Optional[SolverConfig] = None) -> None:
        self.formula = formula
        self.config = config or SolverConfig()
        self.rng = random.Random(self.config.seed)
        self.stats = SolverStats()
        self.events: List[Event] = []
        self.occurrences: Optional[OccurrenceIndex] = None
        self.active: Optional[ActiveSet] = None
        self.assignment: Optional[AssignmentState] = None

    def initiate(self) -> "UniformSession":
        formula = self.formula
        try:
            self.assignment = AssignmentState(formula.num_vars)
            self.active = ActiveSet(
                formula.num_clauses,
                sample_param=self.config.sample_param,
                milestone_param=self.config.milestone_param,
                min_block_size=self.config.min_block_size,
            )
            self.occurrences = OccurrenceIndex(formula.clauses, formula.num_vars)
        except MemoryError as exc:
            self.terminate()
            raise AllocationError(
                f"cannot allocate solver state for {formula.num_vars} variables, {formula.num_clauses} clauses"
            ) from exc
        logger.debug(
            "initiated: %d vars, %d clauses, block size %d",
            formula.num_vars,
            formula.num_clauses,
            self.active.block_size,
        )
        return self

    def terminate(self) -> None:
        self.occurrences = None
        self.active = None

    def __enter__(self) -> "UniformSession":
        return self.initiate()

    def __exit__(self, *exc_info) -> None:
        self.terminate()

    def _activate(self, idx: int) -> None:
        if self.active.activate(idx):
            self.stats.activations += 1
            if self.config.record_events:
                self.events.append(("activate", idx))

    def _deactivate(self, idx: int) -> None:
        if self.active.deactivate(idx):
            self.stats.deactivations += 1
            if self.config.record_events:
                self.events.append(("deactivate", idx))

    def _recheck(self, literal: int) -> None:
        clauses = self.formula.clauses
        for idx in self.occurrences.occurrences_of(literal):
            if not self.active.is_active(idx) and not self.assignment.clause_satisfied(clauses[idx]):
                self._activate(idx)

    def elect(self, clause_idx: int) -> int:
        clause = self.formula.clauses[clause_idx]
        free = [lit for lit in clause if not self.assignment.is_assigned(abs(lit))]
        if free:
            return self.rng.choice(free)
        return self.rng.choice(clause)

    def apply(self, literal: int) -> None:
        var = abs(literal)
        if not self.assignment.is_assigned(var):
            self.assignment.assign(literal)
            self.stats.assignments += 1
            for idx in self.occurrences.occurrences_of(literal):
                self._deactivate(idx)
            self._recheck(-literal)
        else:
            # assigned variables are released rather than flipped
            self.assignment.unassign(var)
            self.stats.reverts += 1
            self._recheck(literal)
            self._recheck(-literal)

    def step(self) -> int:
        rank = self.rng.randrange(self.active.count)
        clause_idx = self.active.pick(rank, self.rng)
        self.apply(self.elect(clause_idx))
        self.stats.steps += 1
        self._sync_stats()
        return clause_idx

    def solve(self, max_steps: Optional[int] = None) -> bool:
        if self.active is None:
            self.initiate()
        if max_steps is None:
            max_steps = self.config.max_steps
        interval = self.config.log_interval
        taken = 0
        while self.active.count > 0:
            if max_steps is not None and taken >= max_steps:
                logger.info("step budget of %d exhausted with %d active clauses", max_steps, self.active.count)
                return False
            self.step()
            taken += 1
            if interval and self.stats.steps % interval == 0:
                logger.debug("step %d: %d active clauses", self.stats.steps, self.active.count)
        logger.info("no active clauses after %d steps", self.stats.steps)
        return True

    def _sync_stats(self) -> None:
        self.stats.probe_hits = self.active.probe_hits
        self.stats.index_scans = self.active.index_scans

    def violated(self) -> List[int]:
        return unsatisfied_clauses(self.formula.clauses, self.assignment)

    def verify(self) -> bool:
        return not self.violated()

    def check(self) -> None:
        violated = self.violated()
        if violated:
            logger.error("verification failed for %d clauses", len(violated))
            raise VerificationMismatch(violated)


def solve_formula(formula: CNFFormula, config: Optional[SolverConfig] = None) -> Dict[str, object]:
    session = UniformSession(formula, config)
    with session:
        finished = session.solve()
        verified = session.verify() if finished else None
        if verified is False:
            logger.error("search finished but %d clauses are unsatisfied", len(session.violated()))
        return solution_record(
            solver="uniform",
            finished=finished,
            verified=verified,
            assignment=session.assignment.to_dict(),
            stats=asdict(session.stats),
            num_vars=formula.num_vars,
            num_clauses=formula.num_clauses,
        )


def run_solver(path: Path, config: Optional[SolverConfig] = None) -> Dict[str, object]:
    formula = parse_dimacs(path)
    return solve_formula(formula, config)


def build_config(args: argparse.Namespace) -> SolverConfig:
    return SolverConfig(
        seed=args.seed,
        sample_param=args.sample_param,
        milestone_param=args.milestone_param,
        min_block_size=args.min_block_size,
        max_steps=args.max_steps,
    )


def add_solver_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--max-steps", type=int, default=None)
    parser.add_argument("--sample-param", type=int, default=DEFAULT_SAMPLE_PARAM)
    parser.add_argument("--milestone-param", type=int, default=DEFAULT_MILESTONE_PARAM)
    parser.add_argument("--min-block-size", type=int, default=DEFAULT_MIN_BLOCK_SIZE)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Uniform random-walk local search for CNF formulas")
    parser.add_argument("--cnf", default=None, help="DIMACS file; stdin when omitted")
    add_solver_arguments(parser)
    parser.add_argument("--format", choices=["json", "dimacs", "symbols"], default="json")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    try:
        if args.cnf:
            formula = parse_dimacs(args.cnf)
        else:
            formula = load_cnf(sys.stdin.buffer, "<stdin>")
    except LoadError as exc:
        logger.error("%s", exc)
        print("Invalid")
        return 1
    start = time.perf_counter()
    result = solve_formula(formula, build_config(args))
    result["wall_time"] = time.perf_counter() - start
    if args.format == "json":
        print(json.dumps(result))
    elif result["status"] == "ERROR":
        print("Solution error")
    elif args.format == "dimacs":
        print(format_dimacs_solution(result["assignment"], result["status"]))
    elif result["status"] == "SAT":
        print(format_symbols(result["assignment"]))
    else:
        print("s UNKNOWN")
    return 1 if result["status"] == "ERROR" else 0


if __name__ == "__main__":
    sys.exit(main())
