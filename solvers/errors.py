from __future__ import annotations

from typing import Optional, Sequence


class SolverError(Exception):
    pass


class LoadError(SolverError, ValueError):
    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class AllocationError(SolverError, MemoryError):
    pass


class VerificationMismatch(SolverError, AssertionError):
    """The search reported no active clauses but some clause is unsatisfied.

    This points at broken active-set bookkeeping, never at the input."""

    def __init__(self, violated: Sequence[int]) -> None:
        self.violated = list(violated)
        preview = ", ".join(str(idx) for idx in self.violated[:10])
        if len(self.violated) > 10:
            preview += ", ..."
        super().__init__(f"{len(self.violated)} clause(s) unsatisfied after search: {preview}")
