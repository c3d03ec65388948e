from utils.solution_writer import format_dimacs_solution, format_symbols, solution_record, solution_status


def test_symbol_string():
    assert format_symbols({1: True, 2: False, 3: None}) == "s}{|"
    assert format_symbols({}) == "s"


def test_dimacs_lines_omit_unassigned():
    text = format_dimacs_solution({1: True, 2: None, 3: False})
    assert text.splitlines() == ["s SATISFIABLE", "v 1 -3", "v 0"]


def test_dimacs_lines_wrap():
    assignment = {var: True for var in range(1, 13)}
    lines = format_dimacs_solution(assignment, width=5).splitlines()
    assert lines[1] == "v 1 2 3 4 5"
    assert lines[3] == "v 11 12"
    assert lines[-1] == "v 0"


def test_dimacs_lines_for_unsolved_run():
    assert format_dimacs_solution({1: None}, status="UNKNOWN") == "s UNKNOWN"


def test_status_values():
    assert solution_status(True, True) == "SAT"
    assert solution_status(True, False) == "ERROR"
    assert solution_status(False, None) == "UNKNOWN"


def test_record_layout():
    record = solution_record(
        solver="uniform",
        finished=True,
        verified=True,
        assignment={1: True, 2: None},
        stats={"steps": 3, "reverts": 1},
        num_vars=2,
        num_clauses=1,
    )
    assert record["status"] == "SAT"
    assert record["steps"] == 3
    assert record["reverts"] == 1
    assert record["assignment"] == {1: True, 2: None}
