#!/usr/bin/env python3
"""
Frequency Tables
================
Weighted multiset of observed symbols with proportional random draws.

Usage:
    from markovnames.frequency import FrequencyTable

    table = FrequencyTable()
    table.observe('A')
    table.observe('A')
    table.observe('B')
    table.sample(rng)   # 'A' two times out of three
"""

import random
from collections import Counter
from typing import Hashable, Iterator, Optional


class EmptyTableError(RuntimeError):
    """Raised when sampling from a table that has no observations."""


class FrequencyTable:
    """Observation counts for a set of symbols"""

    __slots__ = ('counts', 'total')

    def __init__(self):
        self.counts = Counter()
        self.total = 0

    def observe(self, key: Hashable):
        """Record one more occurrence of key."""
        self.counts[key] += 1
        self.total += 1

    def merge(self, other: 'FrequencyTable'):
        """Add every observation of other into this table."""
        for key, count in other.counts.items():
            self.counts[key] += count
        self.total += other.total

    def discard(self, key: Hashable):
        """Take back one occurrence of key; keys reaching zero are removed."""
        count = self.counts.get(key, 0)
        if count <= 0:
            raise KeyError(key)
        if count == 1:
            del self.counts[key]
        else:
            self.counts[key] = count - 1
        self.total -= 1

    def sample(self, rng: Optional[random.Random] = None) -> Hashable:
        """
        Draw a key with probability proportional to its count.

        Args:
            rng: Random source (defaults to the module-level generator)

        Raises:
            EmptyTableError: If nothing has been observed yet
        """
        if self.total <= 0:
            raise EmptyTableError("cannot sample from an empty frequency table")

        rng = rng or random
        index = rng.randrange(self.total)
        for key, count in self.counts.items():
            if index < count:
                return key
            index -= count

        # Unreachable while total == sum(counts.values())
        raise EmptyTableError(
            f"frequency table is inconsistent: total={self.total}, "
            f"counted={sum(self.counts.values())}"
        )

    def most_common(self, n: Optional[int] = None) -> list:
        return self.counts.most_common(n)

    def __getitem__(self, key: Hashable) -> int:
        return self.counts.get(key, 0)

    def __contains__(self, key: Hashable) -> bool:
        return key in self.counts

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.counts)

    def __len__(self) -> int:
        return len(self.counts)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FrequencyTable):
            return NotImplemented
        return self.total == other.total and self.counts == other.counts

    def __repr__(self) -> str:
        return f"FrequencyTable({dict(self.counts)!r}, total={self.total})"
