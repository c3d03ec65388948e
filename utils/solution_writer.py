from __future__ import annotations

from typing import Dict, List, Mapping, Optional

Assignment = Mapping[int, Optional[bool]]

SYMBOLS = {True: "}", False: "{", None: "|"}


def solution_status(finished: bool, verified: Optional[bool]) -> str:
    if not finished:
        return "UNKNOWN"
    return "SAT" if verified else "ERROR"


def solution_record(
    solver: str,
    finished: bool,
    verified: Optional[bool],
    assignment: Assignment,
    stats: Dict[str, int],
    num_vars: int,
    num_clauses: int,
) -> Dict[str, object]:
    record: Dict[str, object] = {
        "solver": solver,
        "status": solution_status(finished, verified),
        "verified": verified,
    }
    record.update(stats)
    record["num_vars"] = num_vars
    record["num_clauses"] = num_clauses
    record["assignment"] = dict(assignment)
    return record


def format_dimacs_solution(assignment: Assignment, status: str = "SAT", width: int = 10) -> str:
    """``s``/``v`` solution lines. Unassigned variables are left out."""
    if status != "SAT":
        return "s UNKNOWN"
    literals: List[int] = []
    for var in sorted(assignment):
        value = assignment[var]
        if value is None:
            continue
        literals.append(var if value else -var)
    lines = ["s SATISFIABLE"]
    for start in range(0, len(literals), width):
        lines.append("v " + " ".join(str(lit) for lit in literals[start:start + width]))
    lines.append("v 0")
    return "\n".join(lines)


def format_symbols(assignment: Assignment) -> str:
    return "s" + "".join(SYMBOLS[assignment[var]] for var in sorted(assignment))
