from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Tuple

Clause = List[int]


class VarState(IntEnum):
    """Ternary variable state.

    Values are ordered FALSE < UNASSIGNED < TRUE. Nothing in the solver relies
    on that order for truth evaluation; see ``AssignmentState.literal_is_true``.
    """

    FALSE = -1
    UNASSIGNED = 0
    TRUE = 1


class AssignmentState:
    def __init__(self, num_vars: int) -> None:
        self.num_vars = num_vars
        # slot 0 is unused so variable ids index directly
        self._values: List[VarState] = [VarState.UNASSIGNED] * (num_vars + 1)

    def value(self, var: int) -> VarState:
        return self._values[var]

    def is_assigned(self, var: int) -> bool:
        return self._values[var] is not VarState.UNASSIGNED

    def assign(self, literal: int) -> None:
        var = abs(literal)
        if self._values[var] is not VarState.UNASSIGNED:
            raise ValueError(f"variable {var} is already assigned")
        self._values[var] = VarState.TRUE if literal > 0 else VarState.FALSE

    def unassign(self, var: int) -> None:
        self._values[var] = VarState.UNASSIGNED

    def literal_is_true(self, literal: int) -> bool:
        state = self._values[abs(literal)]
        if state is VarState.UNASSIGNED:
            return False
        if literal > 0:
            return state is VarState.TRUE
        return state is VarState.FALSE

    def clause_satisfied(self, clause: Clause) -> bool:
        for lit in clause:
            if self.literal_is_true(lit):
                return True
        return False

    def records(self) -> List[Tuple[int, VarState]]:
        return [(var, self._values[var]) for var in range(1, self.num_vars + 1)]

    def to_dict(self) -> Dict[int, Optional[bool]]:
        mapping = {VarState.TRUE: True, VarState.FALSE: False, VarState.UNASSIGNED: None}
        return {var: mapping[state] for var, state in self.records()}

    def __len__(self) -> int:
        return self.num_vars


def unsatisfied_clauses(clauses: Sequence[Clause], assignment: AssignmentState) -> List[int]:
    return [idx for idx, clause in enumerate(clauses) if not assignment.clause_satisfied(clause)]


def verify(clauses: Sequence[Clause], assignment: AssignmentState) -> bool:
    return all(assignment.clause_satisfied(clause) for clause in clauses)
