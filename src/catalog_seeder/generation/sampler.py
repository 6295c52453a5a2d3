from __future__ import annotations

from collections.abc import Sequence

from catalog_seeder.generation.content import RandomContentProvider


class ReferenceSampler:
    def __init__(self, content: RandomContentProvider) -> None:
        self.content = content

    def sample(self, pool: Sequence[int], min_count: int, max_count: int) -> list[int]:
        """Pick a random number of distinct ids from ``pool``.

        The count is drawn from ``[min_count, min(max_count, len(pool))]``; both
        bounds collapse to the pool size when the pool is smaller.
        """
        candidates = list(dict.fromkeys(pool))
        if not candidates:
            raise ValueError("Cannot sample references from an empty pool")
        if min_count < 0 or max_count < min_count:
            raise ValueError(f"Invalid cardinality bounds [{min_count}, {max_count}]")
        upper = min(max_count, len(candidates))
        lower = min(min_count, upper)
        count = self.content.number_between(lower, upper)
        if count == 0:
            return []
        return self.content.random_elements(candidates, count)

    def sample_one(self, pool: Sequence[int]) -> int:
        if not pool:
            raise ValueError("Cannot sample a reference from an empty pool")
        return self.content.random_element(pool)
