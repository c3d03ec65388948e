import random

import pytest

from solvers.active_set import ActiveSet


def naive_select(flags, rank):
    seen = 0
    for idx, flag in enumerate(flags):
        if flag:
            if seen == rank:
                return idx
            seen += 1
    raise AssertionError("rank out of range")


def expected_offsets(active):
    offsets = []
    for j in range(active.num_blocks):
        offsets.append(sum(active.flags[: j * active.block_size]))
    offsets.append(active.count)
    return offsets


def test_block_size_has_a_floor():
    assert ActiveSet(50).block_size == 100
    assert ActiveSet(50).num_blocks == 1
    assert ActiveSet(25000).block_size == 250
    assert ActiveSet(25000).num_blocks == 100
    assert ActiveSet(0).num_blocks == 0


def test_starts_with_every_clause_active():
    active = ActiveSet(250)
    assert active.count == 250
    assert len(active) == 250
    assert all(active.is_active(idx) for idx in range(250))
    assert active.offsets == [0, 100, 200, 250]


def test_activate_and_deactivate_are_idempotent():
    active = ActiveSet(10)
    assert active.deactivate(3) is True
    offsets = list(active.offsets)
    assert active.deactivate(3) is False
    assert active.count == 9
    assert active.offsets == offsets
    assert active.activate(3) is True
    assert active.activate(3) is False
    assert active.count == 10
    assert 3 in active


def test_offsets_follow_membership():
    rng = random.Random(7)
    active = ActiveSet(1000, min_block_size=1, milestone_param=100)
    assert active.block_size == 10
    for _ in range(3000):
        idx = rng.randrange(1000)
        if rng.random() < 0.6:
            active.deactivate(idx)
        else:
            active.activate(idx)
    assert active.offsets == expected_offsets(active)
    assert active.count == sum(active.flags)


@pytest.mark.parametrize("num_clauses,min_block", [(7, 100), (350, 100), (1234, 1), (5000, 100)])
def test_select_matches_linear_scan(num_clauses, min_block):
    rng = random.Random(num_clauses)
    active = ActiveSet(num_clauses, min_block_size=min_block)
    for idx in range(num_clauses):
        if rng.random() < 0.8:
            active.deactivate(idx)
    if active.count == 0:
        active.activate(num_clauses - 1)
    for rank in range(active.count):
        assert active.select(rank) == naive_select(active.flags, rank)


def test_select_skips_empty_blocks():
    active = ActiveSet(1000, min_block_size=10, milestone_param=1000)
    for idx in range(1000):
        active.deactivate(idx)
    active.activate(5)
    active.activate(999)
    assert active.select(0) == 5
    assert active.select(1) == 999


def test_select_rejects_bad_rank():
    active = ActiveSet(5)
    with pytest.raises(IndexError):
        active.select(5)
    with pytest.raises(IndexError):
        active.select(-1)


def test_pick_on_empty_set_raises():
    active = ActiveSet(3)
    for idx in range(3):
        active.deactivate(idx)
    with pytest.raises(IndexError):
        active.pick(0, random.Random(0))


def test_dense_set_uses_random_probes():
    active = ActiveSet(100)
    rng = random.Random(1)
    picked = active.pick(0, rng)
    assert active.is_active(picked)
    assert active.probe_hits == 1
    assert active.index_scans == 0


def test_sparse_set_uses_block_index():
    active = ActiveSet(1000)
    for idx in range(1000):
        if idx % 200:
            active.deactivate(idx)
    assert active.count == 5
    rng = random.Random(3)
    for rank in range(5):
        assert active.pick(rank, rng) == rank * 200
    assert active.probe_hits == 0
    assert active.index_scans == 5


def test_pick_always_returns_an_active_clause():
    rng = random.Random(11)
    active = ActiveSet(300, sample_param=10)
    for idx in range(300):
        if rng.random() < 0.75:
            active.deactivate(idx)
    for _ in range(200):
        idx = active.pick(rng.randrange(active.count), rng)
        assert active.is_active(idx)


def test_contains_handles_foreign_values():
    active = ActiveSet(2)
    assert 1 in active
    assert 2 not in active
    assert "1" not in active
