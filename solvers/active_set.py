from __future__ import annotations

import random
from bisect import bisect_right
from typing import Iterator, List

DEFAULT_SAMPLE_PARAM = 10
DEFAULT_MILESTONE_PARAM = 100
DEFAULT_MIN_BLOCK_SIZE = 100


class ActiveSet:
    """Violated-clause membership with a block-level rank index.

    ``[0, num_clauses)`` is cut into blocks of ``block_size`` entries.
    ``offsets[j]`` counts the active clauses with index below ``j * block_size``;
    the final entry is a sentinel holding the total. Every clause starts active.
    """

    def __init__(
        self,
        num_clauses: int,
        sample_param: int = DEFAULT_SAMPLE_PARAM,
        milestone_param: int = DEFAULT_MILESTONE_PARAM,
        min_block_size: int = DEFAULT_MIN_BLOCK_SIZE,
    ) -> None:
        if milestone_param < 1 or min_block_size < 1:
            raise ValueError("milestone_param and min_block_size must be positive")
        self.num_clauses = num_clauses
        self.sample_param = sample_param
        self.block_size = max(num_clauses // milestone_param, min_block_size)
        self.num_blocks = -(-num_clauses // self.block_size)
        self.flags: List[bool] = [True] * num_clauses
        self.count = num_clauses
        self.offsets: List[int] = [j * self.block_size for j in range(self.num_blocks)]
        self.offsets.append(num_clauses)
        self.probe_hits = 0
        self.index_scans = 0

    def _shift(self, idx: int, delta: int) -> None:
        offsets = self.offsets
        for j in range(idx // self.block_size + 1, self.num_blocks + 1):
            offsets[j] += delta

    def activate(self, idx: int) -> bool:
        if self.flags[idx]:
            return False
        self.flags[idx] = True
        self.count += 1
        self._shift(idx, 1)
        return True

    def deactivate(self, idx: int) -> bool:
        if not self.flags[idx]:
            return False
        self.flags[idx] = False
        self.count -= 1
        self._shift(idx, -1)
        return True

    def is_active(self, idx: int) -> bool:
        return self.flags[idx]

    def select(self, rank: int) -> int:
        """Index of the ``rank``-th active clause, counting from 0 in index order."""
        if not 0 <= rank < self.count:
            raise IndexError(f"rank {rank} out of range for {self.count} active clauses")
        block = bisect_right(self.offsets, rank, 0, self.num_blocks) - 1
        seen = self.offsets[block]
        flags = self.flags
        idx = block * self.block_size
        while True:
            if flags[idx]:
                if seen == rank:
                    return idx
                seen += 1
            idx += 1

    def pick(self, rank: int, rng: random.Random) -> int:
        if self.count == 0:
            raise IndexError("no active clauses")
        if self.num_clauses // self.count < self.sample_param:
            for _ in range(self.sample_param):
                idx = rng.randrange(self.num_clauses)
                if self.flags[idx]:
                    self.probe_hits += 1
                    return idx
        self.index_scans += 1
        return self.select(rank)

    def active_indices(self) -> Iterator[int]:
        return (idx for idx, flag in enumerate(self.flags) if flag)

    def __len__(self) -> int:
        return self.count

    def __contains__(self, idx: object) -> bool:
        return isinstance(idx, int) and 0 <= idx < self.num_clauses and self.flags[idx]
