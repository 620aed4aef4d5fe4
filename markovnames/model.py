#!/usr/bin/env python3
"""
Markov Chain Name Model
=======================
Character-level Markov chain trained on a list of known names.

Each context (the last ``context_length`` characters) maps to a frequency
table of the characters that followed it in training, plus an end marker
recording where names stopped. Generation walks the chain from the start
context until the end marker is drawn, and rejects names that already
appear in the training data.

Theory:
-------
The model estimates P(next_char | previous_k_chars). Larger k stays closer
to the training names, smaller k produces wilder combinations:
- k = 1: bigram, many unpronounceable results
- k = 2: good balance for first names (default)
- k = 3+: mostly reproduces corpus names, more rejections

Usage:
    from markovnames.model import NameModel

    model = NameModel(context_length=2)
    model.train(["Ann", "Amy", "Dan"])
    model.generate_unique(random.Random(7))
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Set, Tuple

from .frequency import FrequencyTable

logger = logging.getLogger(__name__)

Context = Tuple[str, ...]


class NoSuchContextError(KeyError):
    """Raised when generation reaches a context that was never trained."""

    def __str__(self) -> str:
        return self.args[0] if self.args else super().__str__()


class RetryLimitExceededError(RuntimeError):
    """Raised when a bounded generation run only produced known names."""


@dataclass(frozen=True)
class ModelStats:
    """Summary of a trained model."""
    context_length: int
    names: int
    contexts: int
    transitions: int
    outcomes: int

    @property
    def mean_branching(self) -> float:
        """Average number of distinct next characters per context."""
        return self.outcomes / self.contexts if self.contexts else 0.0


class NameModel:
    """Trains on names and samples new ones"""

    # Special tokens
    START = '^'
    END = '$'

    def __init__(self, context_length: int = 2):
        if context_length < 1:
            raise ValueError(f"context_length must be at least 1, got {context_length}")
        self.context_length = context_length
        self.tables: Dict[Context, FrequencyTable] = {}
        self.seen: Set[str] = set()

    def initial_context(self) -> Context:
        return (self.START,) * self.context_length

    @staticmethod
    def _advance(context: Context, symbol: str) -> Context:
        # Oldest character leaves, newest enters at the end
        return context[1:] + (symbol,)

    def _table_for(self, context: Context) -> FrequencyTable:
        table = self.tables.get(context)
        if table is None:
            table = self.tables[context] = FrequencyTable()
        return table

    def _transitions(self, normalized: str) -> Iterator[Tuple[Context, str]]:
        """Yield (context, next symbol) for each step of a name, end marker last."""
        context = self.initial_context()
        for character in normalized:
            yield context, character
            context = self._advance(context, character)
        yield context, self.END

    # =========================================================================
    # Training
    # =========================================================================

    def observe(self, name: str) -> bool:
        """
        Learn the transitions of a single name.

        Names are normalized to uppercase. A name that was already observed
        is skipped so duplicate corpus entries never inflate the counts.

        Args:
            name: Name to learn (any case)

        Returns:
            True if the name was learned, False if it was a duplicate

        Raises:
            ValueError: If name is empty or contains a sentinel character
        """
        if not name:
            raise ValueError("cannot observe an empty name")
        if self.START in name or self.END in name:
            raise ValueError(
                f"name {name!r} contains a reserved character "
                f"({self.START!r} or {self.END!r})"
            )

        normalized = name.upper()
        if normalized in self.seen:
            logger.debug("Skipping duplicate name %s", normalized)
            return False

        # The final step records that names may legitimately stop there
        for context, symbol in self._transitions(normalized):
            self._table_for(context).observe(symbol)
        self.seen.add(normalized)
        return True

    def train(self, names: Iterable[str]) -> int:
        """Observe every name, returning how many were new."""
        return sum(1 for name in names if self.observe(name))

    def merge(self, other: 'NameModel'):
        """
        Fold an independently trained model into this one.

        Counts are summed per context, then names known to both models are
        taken back out once, so merging two halves of a corpus gives the same
        tables as training on the whole corpus.
        """
        if other.context_length != self.context_length:
            raise ValueError(
                f"cannot merge models with context lengths "
                f"{self.context_length} and {other.context_length}"
            )
        shared = self.seen & other.seen

        for context, table in other.tables.items():
            self._table_for(context).merge(table)
        for name in shared:
            for context, symbol in self._transitions(name):
                self.tables[context].discard(symbol)

        if shared:
            logger.debug("Merged %d names already known to both models", len(shared))
        self.seen |= other.seen

    # =========================================================================
    # Generation
    # =========================================================================

    def sample_one(self, rng: Optional[random.Random] = None) -> str:
        """
        Walk the chain once and return the name it spells, title-cased.

        The result may be a name from the training data.

        Raises:
            NoSuchContextError: If the walk reaches an untrained context
        """
        context = self.initial_context()
        result = []
        is_first = True

        while True:
            table = self.tables.get(context)
            if table is None:
                raise NoSuchContextError(
                    f"no transitions recorded for context {''.join(context)!r}"
                    + ("" if self.tables else " (model is empty)")
                )

            next_char = table.sample(rng)
            if next_char == self.END:
                return ''.join(result)

            if is_first:
                result.append(next_char.upper())
                is_first = False
            else:
                result.append(next_char.lower())

            context = self._advance(context, next_char)

    def generate_unique(self,
                        rng: Optional[random.Random] = None,
                        max_attempts: Optional[int] = None) -> str:
        """
        Sample until a name not present in the training data comes up.

        Args:
            rng: Random source (defaults to the module-level generator)
            max_attempts: Give up after this many samples. None retries
                forever, which never returns if every reachable name is
                already known.

        Raises:
            RetryLimitExceededError: If max_attempts samples were all known
        """
        return self._sample_new(rng, max_attempts, self.seen)

    def generate_many(self,
                      count: int,
                      rng: Optional[random.Random] = None,
                      max_attempts: Optional[int] = None) -> list[str]:
        """
        Generate count new names that are also distinct from each other.

        max_attempts bounds the samples spent on each name.
        """
        results = []
        produced = set()

        while len(results) < count:
            name = self._sample_new(rng, max_attempts, self.seen, produced)
            produced.add(name.upper())
            results.append(name)

        return results

    def _sample_new(self, rng, max_attempts, *known) -> str:
        attempts = 0
        while max_attempts is None or attempts < max_attempts:
            attempts += 1
            name = self.sample_one(rng)
            key = name.upper()
            if not any(key in names for names in known):
                return name
            logger.debug("Rejected known name %s (attempt %d)", name, attempts)

        raise RetryLimitExceededError(f"no new name after {max_attempts} attempts")

    # =========================================================================
    # Introspection
    # =========================================================================

    def stats(self) -> ModelStats:
        return ModelStats(
            context_length=self.context_length,
            names=len(self.seen),
            contexts=len(self.tables),
            transitions=sum(table.total for table in self.tables.values()),
            outcomes=sum(len(table) for table in self.tables.values()),
        )

    def __contains__(self, name: str) -> bool:
        return name.upper() in self.seen

    def __len__(self) -> int:
        return len(self.seen)

    def __repr__(self) -> str:
        return (f"NameModel(context_length={self.context_length}, "
                f"names={len(self.seen)}, contexts={len(self.tables)})")
