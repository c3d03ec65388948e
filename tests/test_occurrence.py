import pytest

from solvers.occurrence import OccurrenceIndex


def test_lists_clauses_per_signed_literal():
    index = OccurrenceIndex([[1, -2], [2, 3], [-1, -2, 3]], 3)
    assert index.occurrences_of(1) == (0,)
    assert index.occurrences_of(-1) == (2,)
    assert index.occurrences_of(2) == (1,)
    assert index.occurrences_of(-2) == (0, 2)
    assert index.occurrences_of(3) == (1, 2)
    assert index.occurrences_of(-3) == ()


def test_repeated_literal_listed_twice():
    index = OccurrenceIndex([[1, 1, -1]], 1)
    assert index[1] == (0, 0)
    assert index[-1] == (0,)


def test_covers_both_polarities_of_every_variable():
    index = OccurrenceIndex([[2]], 2)
    assert len(index) == 4
    assert index.occurrences_of(-1) == ()


def test_zero_is_not_a_literal():
    index = OccurrenceIndex([[1]], 1)
    with pytest.raises(KeyError):
        index.occurrences_of(0)
