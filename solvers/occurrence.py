from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

Clause = List[int]


class OccurrenceIndex:
    """Signed literal -> clause indices containing that exact literal.

    A clause that repeats a literal is listed once per repetition."""

    def __init__(self, clauses: Sequence[Clause], num_vars: int) -> None:
        lists: Dict[int, List[int]] = {}
        for var in range(1, num_vars + 1):
            lists[var] = []
            lists[-var] = []
        for idx, clause in enumerate(clauses):
            for lit in clause:
                lists[lit].append(idx)
        self.num_vars = num_vars
        self._table: Dict[int, Tuple[int, ...]] = {lit: tuple(idxs) for lit, idxs in lists.items()}

    def occurrences_of(self, literal: int) -> Tuple[int, ...]:
        return self._table[literal]

    def __getitem__(self, literal: int) -> Tuple[int, ...]:
        return self._table[literal]

    def __len__(self) -> int:
        return len(self._table)
