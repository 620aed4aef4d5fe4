"""
Tests for the Name Model
========================
Tests for NameModel training, generation and merging
in markovnames/model.py.
"""

import pytest
import random
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from markovnames.frequency import FrequencyTable
from markovnames.model import (
    NameModel,
    NoSuchContextError,
    RetryLimitExceededError,
)

END = NameModel.END

# Enough overlap between names that many unseen completions exist
SMALL_CORPUS = [
    "Ann", "Amy", "Dan", "Dana", "Andy", "Mandy",
    "Sandy", "Randy", "Danny", "Sara", "Mara", "Rosa",
]


def table_counts(model, *context):
    return dict(model.tables[tuple(context)].counts)


@pytest.fixture
def trained():
    model = NameModel(context_length=2)
    model.train(SMALL_CORPUS)
    return model


class TestConstruction:
    """Tests for NameModel construction."""

    def test_default_context_length(self):
        assert NameModel().context_length == 2

    @pytest.mark.parametrize("k", [1, 2, 5])
    def test_initial_context(self, k):
        """Test the start context is k sentinels."""
        model = NameModel(context_length=k)
        assert model.initial_context() == ('^',) * k

    @pytest.mark.parametrize("k", [0, -1])
    def test_invalid_context_length(self, k):
        with pytest.raises(ValueError):
            NameModel(context_length=k)

    def test_starts_empty(self):
        model = NameModel()
        assert model.tables == {}
        assert model.seen == set()
        assert len(model) == 0


class TestObserve:
    """Tests for NameModel.observe()."""

    def test_single_name_tables(self):
        """Test the exact transitions learned from one name."""
        model = NameModel(context_length=2)
        model.observe("Dan")

        assert table_counts(model, '^', '^') == {'D': 1}
        assert table_counts(model, '^', 'D') == {'A': 1}
        assert table_counts(model, 'D', 'A') == {'N': 1}
        assert table_counts(model, 'A', 'N') == {END: 1}
        assert len(model.tables) == 4
        assert model.seen == {"DAN"}

    def test_shared_prefix_accumulates(self):
        """Test names sharing contexts add to the same tables."""
        model = NameModel(context_length=2)
        model.observe("Ann")
        model.observe("Amy")

        assert table_counts(model, '^', '^') == {'A': 2}
        assert table_counts(model, '^', 'A') == {'N': 1, 'M': 1}

    def test_duplicate_is_noop(self):
        """Test observing the same name twice changes nothing."""
        once = NameModel(context_length=2)
        once.observe("Dan")

        twice = NameModel(context_length=2)
        assert twice.observe("Dan") is True
        assert twice.observe("Dan") is False

        assert twice.tables == once.tables
        assert twice.seen == {"DAN"}

    def test_duplicate_ignores_case(self):
        """Test case variants count as the same name."""
        model = NameModel()
        model.observe("dan")
        assert model.observe("DAN") is False
        assert model.observe("Dan") is False
        assert model.seen == {"DAN"}

    def test_seen_is_uppercase(self):
        model = NameModel()
        model.train(["alice", "Bob", "cHaRlIe"])
        assert model.seen == {"ALICE", "BOB", "CHARLIE"}
        assert all(name == name.upper() for name in model.seen)

    def test_context_width(self, trained):
        """Test every table is keyed by exactly k characters."""
        assert all(len(context) == 2 for context in trained.tables)

        deep = NameModel(context_length=4)
        deep.train(SMALL_CORPUS)
        assert all(len(context) == 4 for context in deep.tables)

    def test_end_marker_after_every_name(self, trained):
        """Test the context after each name's last char can terminate."""
        for name in trained.seen:
            context = trained.initial_context()
            for character in name:
                context = context[1:] + (character,)
            assert trained.tables[context][END] >= 1

    def test_context_length_one(self):
        model = NameModel(context_length=1)
        model.observe("Anna")
        assert table_counts(model, '^') == {'A': 1}
        assert table_counts(model, 'A') == {'N': 1, END: 1}
        assert table_counts(model, 'N') == {'N': 1, 'A': 1}

    def test_long_context_pads_with_start(self):
        """Test a context longer than the name keeps start sentinels."""
        model = NameModel(context_length=4)
        model.observe("Al")
        assert table_counts(model, '^', '^', '^', '^') == {'A': 1}
        assert table_counts(model, '^', '^', '^', 'A') == {'L': 1}
        assert table_counts(model, '^', '^', 'A', 'L') == {END: 1}

    def test_transition_count(self):
        """Test one observation per character plus one for the end."""
        model = NameModel()
        learned = model.train(["Ann", "Amy", "Ann", "Dan"])
        assert learned == 3
        assert model.stats().transitions == sum(len(n) + 1 for n in ("ANN", "AMY", "DAN"))

    @pytest.mark.parametrize("name", ["", "A^B", "Dan$"])
    def test_invalid_names(self, name):
        with pytest.raises(ValueError):
            NameModel().observe(name)


class TestSampleOne:
    """Tests for NameModel.sample_one()."""

    def test_single_name_reproduces_it(self):
        """Test a one-name model can only spell that name."""
        model = NameModel()
        model.observe("DAN")
        rng = random.Random(0)
        assert {model.sample_one(rng) for _ in range(20)} == {"Dan"}

    def test_title_case(self, trained):
        """Test output is first-upper, rest-lower."""
        rng = random.Random(42)
        for _ in range(100):
            name = trained.sample_one(rng)
            assert name
            assert name[0].isupper()
            assert name[1:] == name[1:].lower()

    def test_output_chars_come_from_corpus(self, trained):
        letters = set(''.join(trained.seen))
        rng = random.Random(5)
        for _ in range(50):
            assert set(trained.sample_one(rng).upper()) <= letters

    def test_empty_model_raises(self):
        with pytest.raises(NoSuchContextError):
            NameModel().sample_one(random.Random(0))

    def test_untrained_context_raises(self):
        """Test a walk into an unknown context is a hard failure."""
        model = NameModel(context_length=2)
        start = FrequencyTable()
        start.observe('X')
        model.tables[model.initial_context()] = start

        with pytest.raises(NoSuchContextError) as exc_info:
            model.sample_one(random.Random(0))
        assert "^X" in str(exc_info.value)

    def test_seeded_rng_is_reproducible(self, trained):
        first = [trained.sample_one(random.Random(99)) for _ in range(5)]
        second = [trained.sample_one(random.Random(99)) for _ in range(5)]
        assert first == second


class TestGenerateUnique:
    """Tests for NameModel.generate_unique()."""

    def test_result_not_in_corpus(self, trained):
        rng = random.Random(2024)
        for _ in range(20):
            name = trained.generate_unique(rng, max_attempts=1000)
            assert name.upper() not in trained.seen
            assert name not in trained

    def test_unbounded_by_default(self, trained):
        name = trained.generate_unique(random.Random(8))
        assert name.upper() not in trained.seen

    def test_limit_on_single_name_corpus(self):
        """Test a corpus with no new completions exhausts the limit."""
        model = NameModel()
        model.observe("Dan")
        with pytest.raises(RetryLimitExceededError):
            model.generate_unique(random.Random(0), max_attempts=5)

    def test_model_unchanged_by_generation(self, trained):
        before_seen = set(trained.seen)
        before_stats = trained.stats()
        trained.generate_unique(random.Random(3), max_attempts=1000)
        assert trained.seen == before_seen
        assert trained.stats() == before_stats


class TestGenerateMany:
    """Tests for NameModel.generate_many()."""

    def test_distinct_new_names(self, trained):
        names = trained.generate_many(5, random.Random(11), max_attempts=1000)
        assert len(names) == 5
        assert len({n.upper() for n in names}) == 5
        assert not any(n.upper() in trained.seen for n in names)

    def test_only_unseen_completions(self):
        """Test new names come from the loop the corpus allows."""
        model = NameModel(context_length=1)
        model.train(["Ab", "Abb"])
        # B can follow B, so Abbb, Abbbb, ... are new; Ab and Abb are known
        names = model.generate_many(2, random.Random(4), max_attempts=1000)
        assert all(n.startswith("Abbb") for n in names)

    def test_limit_when_support_exhausted(self):
        """Test asking for a new name when none exists fails."""

        single = NameModel()
        single.observe("Dan")
        with pytest.raises(RetryLimitExceededError):
            single.generate_many(1, random.Random(0), max_attempts=3)


class TestMerge:
    """Tests for NameModel.merge()."""

    def test_merge_matches_joint_training(self):
        """Test merged halves equal one model trained on everything."""
        left = NameModel()
        left.train(SMALL_CORPUS[:6])
        right = NameModel()
        right.train(SMALL_CORPUS[6:])
        joint = NameModel()
        joint.train(SMALL_CORPUS)

        left.merge(right)
        assert left.tables == joint.tables
        assert left.seen == joint.seen

    def test_merge_counts_shared_names_once(self):
        """Test a name trained in both halves is not counted twice."""
        left = NameModel()
        left.train(["Dan", "Ann"])
        right = NameModel()
        right.train(["Dan", "Amy"])
        joint = NameModel()
        joint.train(["Dan", "Ann", "Dan", "Amy"])

        left.merge(right)
        assert table_counts(left, '^', '^') == {'D': 1, 'A': 2}
        assert table_counts(left, 'A', 'N') == {END: 1, 'N': 1}
        assert left.tables == joint.tables
        assert left.seen == {"DAN", "ANN", "AMY"}
        assert left.stats() == joint.stats()

    def test_merge_identical_models(self):
        """Test merging a model trained on the same names changes nothing."""
        model = NameModel()
        model.train(SMALL_CORPUS)
        copy = NameModel()
        copy.train(SMALL_CORPUS)
        reference = NameModel()
        reference.train(SMALL_CORPUS)

        model.merge(copy)
        assert model.tables == reference.tables
        assert copy.tables == reference.tables

    def test_merge_rejects_other_context_length(self):
        with pytest.raises(ValueError):
            NameModel(context_length=2).merge(NameModel(context_length=3))


class TestStats:
    """Tests for NameModel.stats()."""

    def test_single_name_stats(self):
        model = NameModel()
        model.observe("Dan")
        stats = model.stats()
        assert stats.context_length == 2
        assert stats.names == 1
        assert stats.contexts == 4
        assert stats.transitions == 4
        assert stats.mean_branching == 1.0

    def test_empty_stats(self):
        stats = NameModel(context_length=3).stats()
        assert stats.names == 0
        assert stats.mean_branching == 0.0
