from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, TextIO, Union

from solvers.errors import LoadError

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ("c", "%")


@dataclass
class CNFFormula:
    num_vars: int
    num_clauses: int
    clauses: List[List[int]]
    declared_vars: int = 0
    declared_clauses: int = 0
    source: Optional[str] = field(default=None, compare=False)


def _parse_header(line: str, lineno: int) -> tuple[int, int]:
    parts = line.split()
    if len(parts) != 4 or parts[0] != "p" or parts[1] != "cnf":
        raise LoadError(f"malformed header {line!r}", lineno)
    try:
        declared_vars = int(parts[2])
        declared_clauses = int(parts[3])
    except ValueError:
        raise LoadError(f"non-numeric header field in {line!r}", lineno) from None
    if declared_vars < 0 or declared_clauses < 0:
        raise LoadError(f"negative count in header {line!r}", lineno)
    return declared_vars, declared_clauses


def parse_lines(lines: Iterable[str], source: Optional[str] = None) -> CNFFormula:
    clauses: List[List[int]] = []
    current: List[int] = []
    header: Optional[tuple[int, int]] = None
    num_vars = 0
    lineno = 0
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        if header is None:
            if not line.startswith("p"):
                raise LoadError("expected 'p cnf <vars> <clauses>' before clauses", lineno)
            header = _parse_header(line, lineno)
            continue
        if len(clauses) == header[1]:
            break
        if line.startswith("p"):
            raise LoadError("duplicate header", lineno)
        for token in line.split():
            try:
                value = int(token)
            except ValueError:
                raise LoadError(f"expected integer literal, got {token!r}", lineno) from None
            if value != 0:
                current.append(value)
                num_vars = max(num_vars, abs(value))
                continue
            if current:
                clauses.append(current)
            current = []
            if len(clauses) == header[1]:
                break
    if header is None:
        raise LoadError("missing 'p cnf' header")
    if current:
        raise LoadError("last clause is not terminated by 0", lineno)
    declared_vars, declared_clauses = header
    if len(clauses) < declared_clauses:
        logger.warning("header declares %d clauses, found %d", declared_clauses, len(clauses))
    if num_vars > declared_vars:
        logger.warning("literal magnitude %d exceeds declared variable count %d", num_vars, declared_vars)
    return CNFFormula(
        num_vars=num_vars,
        num_clauses=len(clauses),
        clauses=clauses,
        declared_vars=declared_vars,
        declared_clauses=declared_clauses,
        source=source,
    )


def load_cnf(stream: Union[BinaryIO, TextIO], source: Optional[str] = None) -> CNFFormula:
    data = stream.read()
    if isinstance(data, bytes):
        return parse_bytes(data, source)
    return parse_from_string(data, source)


def parse_bytes(data: bytes, source: Optional[str] = None) -> CNFFormula:
    try:
        text = data.decode("ascii")
    except UnicodeDecodeError as exc:
        raise LoadError(f"input is not ASCII text ({exc.reason} at byte {exc.start})") from None
    return parse_from_string(text, source)


def parse_dimacs(path: str | Path) -> CNFFormula:
    target = Path(path)
    try:
        handle = target.open("rb")
    except OSError as exc:
        raise LoadError(f"cannot read {target}: {exc.strerror}") from exc
    with handle:
        return load_cnf(handle, str(target))


def parse_from_string(data: str, source: Optional[str] = None) -> CNFFormula:
    return parse_lines(io.StringIO(data), source)
